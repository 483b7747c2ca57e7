"""
Ranking algorithm: order doctors by rating/experience and triage symptoms to specializations.

The symptom mapping is a keyword heuristic. It is best-effort routing, not clinical advice.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .models import Doctor, Specialization

# Checked in order; the first keyword hit decides the specialization for a symptom.
SYMPTOM_KEYWORDS: List[Tuple[Specialization, Tuple[str, ...]]] = [
    (Specialization.CARDIOLOGIST, ("chest", "heart", "palpitation", "shortness of breath", "sweat")),
    (Specialization.DERMATOLOGIST, ("skin", "rash", "acne", "itch", "psoriasis", "eczema")),
    (Specialization.NEUROLOGIST, ("headache", "migraine", "dizzy", "seizure", "numb", "tingle")),
    (Specialization.ORTHOPEDIC, ("bone", "fracture", "joint", "knee", "back", "shoulder", "sprain")),
    (Specialization.PEDIATRICIAN, ("child", "baby", "infant", "pediatric", "pediatrics", "kids")),
    (Specialization.ENT, ("ear", "nose", "throat", "hearing", "sinus", "tonsil")),
    (Specialization.OPHTHALMOLOGIST, ("eye", "vision", "blur", "red eye", "ocular")),
    (Specialization.PSYCHIATRIST, ("depress", "anxiety", "mood", "stress", "psychiat")),
    (Specialization.SURGEON, ("abdominal", "appendix", "surgery", "hernia", "bleed")),
    (Specialization.GENERAL_PRACTITIONER, ("fever", "cough", "cold", "flu", "infection", "pain")),
]


def map_symptom(symptom: Optional[str]) -> Optional[Specialization]:
    if not symptom:
        return None
    text = symptom.lower()
    for specialization, keywords in SYMPTOM_KEYWORDS:
        for keyword in keywords:
            if keyword in text:
                return specialization
    return None


def infer_specializations(symptoms: Iterable[str]) -> Set[Specialization]:
    inferred = {spec for spec in (map_symptom(s) for s in symptoms) if spec is not None}
    return inferred or {Specialization.GENERAL_PRACTITIONER}


def rank_by_rating(doctors: Sequence[Doctor]) -> List[Doctor]:
    # sorted(reverse=True) keeps equal ratings in their original order
    return sorted(doctors, key=lambda d: d.rating, reverse=True)


def rank_by_experience(doctors: Sequence[Doctor]) -> List[Doctor]:
    return sorted(doctors, key=lambda d: d.years_of_experience, reverse=True)


def recommend(doctors: Sequence[Doctor], symptoms: Sequence[str], max_results: int) -> List[Doctor]:
    if isinstance(symptoms, str):
        symptoms = [symptoms]
    limit = max(0, max_results)
    if not symptoms:
        return rank_by_rating(doctors)[:limit]

    wanted = infer_specializations(symptoms)
    candidates = [d for d in doctors if d.specialization in wanted]
    candidates.sort(key=lambda d: (d.rating, d.years_of_experience), reverse=True)
    return candidates[:limit]
