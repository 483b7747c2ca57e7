"""
Doctor and patient directories: CRUD over the entity store plus per-role queries.
"""

from __future__ import annotations

import copy
import logging
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from .errors import InvalidInputError, NotFoundError
from .ids import IdIssuer
from .models import BloodType, Doctor, Patient, PersonInfo, Specialization
from .ranking import rank_by_experience, rank_by_rating, recommend
from .store import EntityStore

logger = logging.getLogger(__name__)

E = TypeVar("E", Doctor, Patient)


class _Directory(Generic[E]):
    kind = "entity"

    def __init__(self, ids: IdIssuer):
        self.ids = ids
        self.store: EntityStore[E] = EntityStore()

    def _key(self, entity: E) -> str:
        raise NotImplementedError

    def insert(self, entity: E) -> E:
        self.store.add(self._key(entity), entity)
        return entity

    def find(self, entity_id: str) -> Optional[E]:
        return self.store.get(entity_id)

    def get(self, entity_id: str) -> E:
        entity = self.store.get(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.kind.capitalize()} not found", entity_id)
        return entity

    def exists(self, entity_id: str) -> bool:
        return self.store.exists(entity_id)

    def list_all(self) -> List[E]:
        return self.store.get_all()

    def search(self, predicate: Callable[[E], bool]) -> List[E]:
        return self.store.search(predicate)

    def search_by_name(self, name: str) -> Optional[E]:
        wanted = name.lower()
        matches = self.store.search(lambda e: e.person.name.lower() == wanted)
        return matches[0] if matches else None

    def update(self, entity_id: str, entity: E) -> None:
        if self._key(entity) != entity_id:
            raise InvalidInputError("id", self._key(entity))
        if not self.store.update(entity_id, entity):
            raise NotFoundError(f"{self.kind.capitalize()} not found", entity_id)
        logger.info("%s updated: %s", self.kind, entity_id)

    def remove(self, entity_id: str) -> bool:
        removed = self.store.delete(entity_id)
        if removed:
            logger.info("%s removed: %s", self.kind, entity_id)
        return removed

    def count(self) -> int:
        return self.store.size()


class DoctorDirectory(_Directory[Doctor]):
    kind = "doctor"

    def _key(self, entity: Doctor) -> str:
        return entity.doctor_id

    def add(
        self,
        person: PersonInfo,
        specialization: Specialization,
        consultation_fee: Optional[float] = None,
        years_of_experience: int = 0,
        license_number: str = "",
        rating: float = 0.0,
    ) -> Doctor:
        doctor = Doctor(
            doctor_id=self.ids.doctor_id(),
            person=person,
            specialization=specialization,
            consultation_fee=consultation_fee,
            years_of_experience=years_of_experience,
            license_number=license_number,
            rating=rating,
        )
        self.insert(doctor)
        logger.info("Doctor added: %s [%s]", doctor.name, doctor.doctor_id)
        return doctor

    def search_by_specialization(self, specialization: Specialization) -> List[Doctor]:
        return self.store.search(lambda d: d.specialization is specialization)

    def search_by_min_rating(self, min_rating: float) -> List[Doctor]:
        return self.store.search(lambda d: d.rating >= min_rating)

    def average_fee(self, specialization: Specialization) -> float:
        fees = [d.consultation_fee for d in self.search_by_specialization(specialization)]
        return sum(fees) / len(fees) if fees else 0.0

    def rank_by_rating(self) -> List[Doctor]:
        return rank_by_rating(self.store.get_all())

    def rank_by_experience(self) -> List[Doctor]:
        return rank_by_experience(self.store.get_all())

    def recommend_by_symptoms(self, symptoms: Sequence[str], max_results: int) -> List[Doctor]:
        """
        Best-effort keyword triage from free-text symptoms to doctors.

        Symptoms map to specializations through ``ranking.SYMPTOM_KEYWORDS``;
        with no usable symptom the search falls back to general practice, and
        with no symptoms at all it returns the best-rated doctors overall.
        """
        ranked = recommend(self.store.get_all(), symptoms, max_results)
        logger.debug("Recommended %d doctor(s) for symptoms %s", len(ranked), symptoms)
        return ranked


class PatientDirectory(_Directory[Patient]):
    kind = "patient"

    def _key(self, entity: Patient) -> str:
        return entity.patient_id

    def add(
        self,
        person: PersonInfo,
        medical_history: str = "",
        allergies: Optional[List[str]] = None,
        height: float = 0.0,
        weight: float = 0.0,
        blood_type: BloodType = BloodType.UNKNOWN,
        emergency_contact: str = "",
    ) -> Patient:
        patient = Patient(
            patient_id=self.ids.patient_id(),
            person=person,
            medical_history=medical_history,
            allergies=list(allergies or []),
            height=height,
            weight=weight,
            blood_type=blood_type,
            emergency_contact=emergency_contact,
        )
        self.insert(patient)
        logger.info("Patient added: %s [%s]", patient.name, patient.patient_id)
        return patient

    def search_by_age(self, age: int) -> List[Patient]:
        return self.store.search(lambda p: p.person.age == age)

    def search_by_blood_type(self, blood_type: BloodType) -> List[Patient]:
        return self.store.search(lambda p: p.blood_type is blood_type)

    def with_bmi_above(self, threshold: float) -> List[Patient]:
        return self.store.search(lambda p: p.bmi > threshold)

    def clone_patient(self, patient_id: str) -> Patient:
        original = self.get(patient_id)
        cloned = copy.deepcopy(original)
        cloned.patient_id = self.ids.patient_id()
        self.insert(cloned)
        logger.info("Patient cloned: %s -> %s", patient_id, cloned.patient_id)
        return cloned

    def add_allergy(self, patient_id: str, allergy: str) -> None:
        self.get(patient_id).add_allergy(allergy)

    def medical_history(self, patient_id: str) -> str:
        return self.get(patient_id).medical_history

    def update_medical_history(self, patient_id: str, history: str) -> None:
        self.get(patient_id).medical_history = history
