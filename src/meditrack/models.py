"""
Typed containers used throughout the clinic engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, ClassVar, List, Optional

import numpy as np

from .config import TAX_RATE
from .errors import InvalidInputError


TaxPolicy = Callable[[float], float]


def flat_tax(rate: float) -> TaxPolicy:
    def _tax(subtotal: float) -> float:
        return subtotal * rate

    return _tax


class Role(str, Enum):
    DOCTOR = "Doctor"
    PATIENT = "Patient"


class Specialization(Enum):
    GENERAL_PRACTITIONER = ("General Practice", 300.0)
    CARDIOLOGIST = ("Cardiology", 500.0)
    DERMATOLOGIST = ("Dermatology", 400.0)
    PEDIATRICIAN = ("Pediatrics", 350.0)
    ORTHOPEDIC = ("Orthopedic", 450.0)
    NEUROLOGIST = ("Neurology", 550.0)
    PSYCHIATRIST = ("Psychiatry", 400.0)
    OPHTHALMOLOGIST = ("Ophthalmology", 420.0)
    ENT = ("ENT", 380.0)
    SURGEON = ("General Surgery", 600.0)

    def __init__(self, label: str, default_fee: float):
        self.label = label
        self.default_fee = default_fee

    def __str__(self) -> str:
        return self.label


class BloodType(str, Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"
    UNKNOWN = ""


class AppointmentStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    NO_SHOW = "NoShow"


@dataclass
class PersonInfo:
    name: str
    email: str = ""
    phone: str = ""
    age: int = 0
    gender: str = ""
    address: str = ""


@dataclass(eq=False)
class Doctor:
    doctor_id: str
    person: PersonInfo
    specialization: Specialization = Specialization.GENERAL_PRACTITIONER
    consultation_fee: Optional[float] = None  # None -> specialization default
    years_of_experience: int = 0
    license_number: str = ""
    rating: float = 0.0
    total_patients: int = 0

    role: ClassVar[Role] = Role.DOCTOR

    def __post_init__(self) -> None:
        if self.consultation_fee is None:
            self.consultation_fee = self.specialization.default_fee

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "rating":
            value = float(np.clip(value, 0.0, 5.0))
        super().__setattr__(name, value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Doctor) and self.doctor_id == other.doctor_id

    def __hash__(self) -> int:
        return hash(self.doctor_id)

    @property
    def name(self) -> str:
        return self.person.name


@dataclass(eq=False)
class Patient:
    patient_id: str
    person: PersonInfo
    medical_history: str = ""
    allergies: List[str] = field(default_factory=list)
    height: float = 0.0  # cm
    weight: float = 0.0  # kg
    blood_type: BloodType = BloodType.UNKNOWN
    emergency_contact: str = ""

    role: ClassVar[Role] = Role.PATIENT

    def __post_init__(self) -> None:
        unique: List[str] = []
        for allergy in self.allergies:
            if allergy not in unique:
                unique.append(allergy)
        self.allergies = unique

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Patient) and self.patient_id == other.patient_id

    def __hash__(self) -> int:
        return hash(self.patient_id)

    @property
    def name(self) -> str:
        return self.person.name

    @property
    def bmi(self) -> float:
        if self.height == 0:
            return 0.0
        height_m = self.height / 100
        return self.weight / (height_m * height_m)

    def add_allergy(self, allergy: str) -> None:
        if allergy not in self.allergies:
            self.allergies.append(allergy)


@dataclass(eq=False)
class Appointment:
    appointment_id: str
    patient_id: str
    doctor_id: str
    date_time: datetime
    reason: str = ""
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: str = ""
    consultation_fee: float = 0.0  # snapshot taken at creation

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Appointment) and self.appointment_id == other.appointment_id

    def __hash__(self) -> int:
        return hash(self.appointment_id)

    @property
    def is_confirmed(self) -> bool:
        return self.status is AppointmentStatus.CONFIRMED

    @property
    def is_cancelled(self) -> bool:
        return self.status is AppointmentStatus.CANCELLED


@dataclass(eq=False)
class Bill:
    """
    Charges for one appointment. Tax and total are derived from the current
    charge components on every read, so they cannot drift from them.
    """

    CHARGE_FIELDS: ClassVar[tuple] = ("consultation_fee", "medicines", "tests", "other")

    bill_id: str
    appointment_id: str
    patient_id: str
    doctor_id: str
    consultation_fee: float
    medicines: float = 0.0
    tests: float = 0.0
    other: float = 0.0
    bill_date: datetime = field(default_factory=datetime.now)
    is_paid: bool = False
    tax_policy: TaxPolicy = field(default=flat_tax(TAX_RATE), repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.CHARGE_FIELDS and value < 0:
            raise InvalidInputError(name, value)
        super().__setattr__(name, value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Bill) and self.bill_id == other.bill_id

    def __hash__(self) -> int:
        return hash(self.bill_id)

    @property
    def subtotal(self) -> float:
        return self.consultation_fee + self.medicines + self.tests + self.other

    @property
    def tax_amount(self) -> float:
        return self.tax_policy(self.subtotal)

    @property
    def total_amount(self) -> float:
        return self.subtotal + self.tax_amount

    def mark_paid(self) -> None:
        self.is_paid = True


@dataclass(frozen=True)
class BillSummary:
    bill_id: str
    patient_name: str
    doctor_name: str
    total_amount: float
    tax_amount: float
    bill_date: datetime
    is_paid: bool
