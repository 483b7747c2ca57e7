"""Tests for doctor ranking and symptom-based recommendation."""
import pytest

from meditrack.models import Specialization
from meditrack.ranking import infer_specializations, map_symptom


@pytest.mark.parametrize(
    "symptom, expected",
    [
        ("Chest pain", Specialization.CARDIOLOGIST),
        ("heart racing", Specialization.CARDIOLOGIST),
        ("itchy skin", Specialization.DERMATOLOGIST),
        ("lower back pain", Specialization.ORTHOPEDIC),
        ("sore THROAT", Specialization.ENT),
        ("blurred vision", Specialization.OPHTHALMOLOGIST),
        ("persistent cough", Specialization.GENERAL_PRACTITIONER),
        ("feeling odd", None),
    ],
)
def test_map_symptom(symptom, expected):
    assert map_symptom(symptom) is expected


def test_unmatched_symptoms_default_to_general_practice():
    assert infer_specializations(["xyz"]) == {Specialization.GENERAL_PRACTITIONER}
    assert infer_specializations(["chest pain", "palpitations"]) == {Specialization.CARDIOLOGIST}


def test_rank_by_rating_is_stable(clinic, add_doctor):
    a = add_doctor("A", rating=4.0)
    b = add_doctor("B", rating=4.5)
    c = add_doctor("C", rating=4.0)

    assert clinic.doctors.rank_by_rating() == [b, a, c]


def test_rank_by_experience(clinic, add_doctor):
    a = add_doctor("A", years=3)
    b = add_doctor("B", years=20)
    c = add_doctor("C", years=3)

    assert clinic.doctors.rank_by_experience() == [b, a, c]


def test_chest_pain_returns_only_cardiologists_ranked(clinic, add_doctor):
    add_doctor("GP", Specialization.GENERAL_PRACTITIONER, rating=5.0)
    low = add_doctor("Low", Specialization.CARDIOLOGIST, rating=3.9, years=30)
    junior = add_doctor("Junior", Specialization.CARDIOLOGIST, rating=4.6, years=4)
    senior = add_doctor("Senior", Specialization.CARDIOLOGIST, rating=4.6, years=15)

    result = clinic.doctors.recommend_by_symptoms(["chest pain"], 5)

    assert result == [senior, junior, low]


def test_empty_symptoms_returns_top_by_rating(clinic, add_doctor):
    doctors = [add_doctor(f"D{i}", list(Specialization)[i], rating=i * 0.5) for i in range(7)]

    result = clinic.doctors.recommend_by_symptoms([], 5)

    assert result == list(reversed(doctors))[:5]


def test_recommendation_truncates_and_falls_back(clinic, add_doctor):
    gps = [add_doctor(f"GP{i}", rating=4.0 - i * 0.1) for i in range(4)]
    add_doctor("Derm", Specialization.DERMATOLOGIST, rating=5.0)

    assert clinic.doctors.recommend_by_symptoms(["strange feeling"], 2) == gps[:2]
    assert clinic.doctors.recommend_by_symptoms(["chest pain"], 5) == []


def test_bare_string_symptom_is_treated_as_one_symptom(clinic, add_doctor):
    add_doctor("GP", rating=5.0)
    cardio = add_doctor("Heart", Specialization.CARDIOLOGIST, rating=4.0)

    assert clinic.doctors.recommend_by_symptoms("chest pain", 5) == [cardio]
