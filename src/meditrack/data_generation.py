"""
Synthetic clinic generation for demos and reports.

Everything is drawn from a seeded RNG so the same GenerationConfig always
yields the same roster, bookings and bills. Generated clinics can be exported
to CSV for inspection in other tools.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta
from pathlib import Path
from random import Random
from typing import Callable, List, Optional

import numpy as np
import pandas as pd

from .clinic import Clinic
from .config import FIRST_NAMES, GENDERS, LAST_NAMES, VISIT_REASONS, ClinicConfig, GenerationConfig
from .models import BloodType, Patient, PersonInfo, Specialization

DOCTORS_CSV = "doctors.csv"
PATIENTS_CSV = "patients.csv"
APPOINTMENTS_CSV = "appointments.csv"
BILLS_CSV = "bills.csv"

ALLERGENS: List[str] = ["penicillin", "peanuts", "latex", "pollen", "sulfa", "shellfish"]


def _draw_person(rng: Random, min_age: int, max_age: int) -> PersonInfo:
    first = rng.choice(FIRST_NAMES)
    last = rng.choice(LAST_NAMES)
    return PersonInfo(
        name=f"{first} {last}",
        email=f"{first.lower()}.{last.lower()}{rng.randint(1, 999)}@example.org",
        phone=f"9{rng.randint(100_000_000, 999_999_999)}",
        age=int(np.clip(rng.normalvariate((min_age + max_age) / 2, 12), min_age, max_age)),
        gender=rng.choice(GENDERS),
        address=f"{rng.randint(1, 250)} Main Street",
    )


def _populate_doctors(clinic: Clinic, gen: GenerationConfig, rng: Random) -> None:
    specializations = list(Specialization)
    for i in range(gen.doctors):
        spec = specializations[i % len(specializations)]
        person = _draw_person(rng, 28, 70)
        clinic.doctors.add(
            person,
            spec,
            consultation_fee=round(spec.default_fee * rng.uniform(0.9, 1.25), -1),
            years_of_experience=max(0, person.age - 27 - rng.randint(0, 4)),
            license_number=f"LIC-{rng.randint(10_000, 99_999)}",
            rating=round(float(np.clip(rng.normalvariate(4.0, 0.6), 0.0, 5.0)), 1),
        )


def _populate_patients(clinic: Clinic, gen: GenerationConfig, rng: Random) -> None:
    blood_types = [b for b in BloodType if b is not BloodType.UNKNOWN]
    for _ in range(gen.patients):
        clinic.patients.add(
            _draw_person(rng, 1, 90),
            allergies=rng.sample(ALLERGENS, k=rng.randint(0, 2)),
            height=round(float(np.clip(rng.normalvariate(168, 10), 60, 210)), 1),
            weight=round(float(np.clip(rng.normalvariate(70, 13), 8, 160)), 1),
            blood_type=rng.choice(blood_types),
            emergency_contact=f"9{rng.randint(100_000_000, 999_999_999)}",
        )


def _populate_appointments(clinic: Clinic, gen: GenerationConfig, rng: Random) -> None:
    doctors = clinic.doctors.list_all()
    patients = clinic.patients.list_all()
    if not doctors or not patients:
        return
    cfg = clinic.cfg
    slots_per_day = (cfg.closing_hour - cfg.opening_hour) * 60 // cfg.slot_minutes
    now = clinic.appointments.clock()

    for _ in range(gen.appointments):
        day = gen.start_date + timedelta(days=rng.randint(-gen.horizon_days, gen.horizon_days))
        start = datetime.combine(day, time(cfg.opening_hour))
        when = start + timedelta(minutes=cfg.slot_minutes * rng.randrange(slots_per_day))
        doctor = rng.choice(doctors)
        appt = clinic.appointments.create(
            rng.choice(patients).patient_id, doctor.doctor_id, when, rng.choice(VISIT_REASONS)
        )

        roll = rng.random()
        if when < now:
            if roll < 0.12:
                clinic.appointments.cancel(appt.appointment_id)
                continue
            clinic.appointments.complete(appt.appointment_id, notes="Seen and advised follow-up.")
            doctor.total_patients += 1
            bill = clinic.billing.generate_bill(appt.appointment_id)
            clinic.billing.add_charges(
                bill.bill_id,
                medicines=round(rng.uniform(0, 400), 2),
                tests=round(rng.choice([0.0, rng.uniform(50, 900)]), 2),
            )
            if rng.random() < 0.7:
                clinic.billing.mark_paid(bill.bill_id)
        elif roll < 0.5:
            clinic.appointments.confirm(appt.appointment_id)
        elif roll < 0.6:
            clinic.appointments.cancel(appt.appointment_id)


def generate_clinic(
    gen: Optional[GenerationConfig] = None,
    cfg: Optional[ClinicConfig] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> Clinic:
    gen = gen or GenerationConfig()
    clinic = Clinic(cfg, clock=clock)
    rng = Random(gen.seed)
    _populate_doctors(clinic, gen, rng)
    _populate_patients(clinic, gen, rng)
    _populate_appointments(clinic, gen, rng)
    return clinic


# ---------------- Export helpers ----------------


def patients_to_df(patients: List[Patient]) -> pd.DataFrame:
    records = []
    for p in patients:
        records.append(
            {
                "patient_id": p.patient_id,
                "name": p.name,
                "email": p.person.email,
                "phone": p.person.phone,
                "age": p.person.age,
                "gender": p.person.gender,
                "blood_type": p.blood_type.value,
                "height": p.height,
                "weight": p.weight,
                "bmi": round(p.bmi, 2),
                "allergies": ";".join(p.allergies),
                "emergency_contact": p.emergency_contact,
            }
        )
    return pd.DataFrame.from_records(records)


def save_data(clinic: Clinic, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    clinic.doctors_frame().to_csv(out_dir / DOCTORS_CSV, index=False)
    patients_to_df(clinic.patients.list_all()).to_csv(out_dir / PATIENTS_CSV, index=False)
    clinic.appointments_frame().to_csv(out_dir / APPOINTMENTS_CSV, index=False)
    clinic.bills_frame().to_csv(out_dir / BILLS_CSV, index=False)
