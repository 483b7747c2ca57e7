"""Shared test fixtures."""
from datetime import datetime

import pytest

from meditrack.clinic import Clinic
from meditrack.models import PersonInfo, Specialization

NOW = datetime(2026, 3, 2, 10, 7, 30)  # a Monday, mid-morning


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clinic() -> Clinic:
    """Empty clinic whose clock is frozen at NOW."""
    return Clinic(clock=lambda: NOW)


@pytest.fixture
def add_doctor(clinic):
    """Create a doctor with sensible defaults."""
    def _add(name="Dr Test", specialization=Specialization.GENERAL_PRACTITIONER, rating=4.0, years=5, fee=None):
        return clinic.doctors.add(
            PersonInfo(name=name),
            specialization,
            consultation_fee=fee,
            years_of_experience=years,
            rating=rating,
        )
    return _add


@pytest.fixture
def patient(clinic):
    return clinic.patients.add(PersonInfo(name="Pat Jones", age=34), height=175, weight=75)
