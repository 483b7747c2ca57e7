"""
End-to-end clinic wiring: ids -> directories -> appointments -> billing, plus tabular reports.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Optional

import pandas as pd

from .billing import BillingCalculator
from .config import ClinicConfig
from .directory import DoctorDirectory, PatientDirectory
from .ids import IdIssuer
from .models import AppointmentStatus, flat_tax
from .scheduling import AppointmentEngine


class Clinic:
    def __init__(self, cfg: Optional[ClinicConfig] = None, clock: Callable[[], datetime] = datetime.now):
        self.cfg = cfg or ClinicConfig()
        self.ids = IdIssuer(self.cfg.id_offsets)
        self.doctors = DoctorDirectory(self.ids)
        self.patients = PatientDirectory(self.ids)
        self.appointments = AppointmentEngine(self.cfg, self.ids, self.doctors, self.patients, clock=clock)
        self.billing = BillingCalculator(self.ids, self.appointments, flat_tax(self.cfg.tax_rate), clock=clock)

    def doctors_frame(self) -> pd.DataFrame:
        records = []
        for d in self.doctors.list_all():
            records.append(
                {
                    "doctor_id": d.doctor_id,
                    "name": d.name,
                    "specialization": d.specialization.label,
                    "consultation_fee": d.consultation_fee,
                    "years_of_experience": d.years_of_experience,
                    "rating": d.rating,
                    "appointments": self.appointments.count_for_doctor(d.doctor_id),
                }
            )
        return pd.DataFrame.from_records(
            records,
            columns=[
                "doctor_id", "name", "specialization", "consultation_fee",
                "years_of_experience", "rating", "appointments",
            ],
        )

    def appointments_frame(self) -> pd.DataFrame:
        records = []
        for a in self.appointments.list_all():
            doctor = self.doctors.find(a.doctor_id)
            patient = self.patients.find(a.patient_id)
            records.append(
                {
                    "appointment_id": a.appointment_id,
                    "patient_id": a.patient_id,
                    "patient_name": patient.name if patient else None,
                    "doctor_id": a.doctor_id,
                    "doctor_name": doctor.name if doctor else None,
                    "specialization": doctor.specialization.label if doctor else None,
                    "date_time": a.date_time,
                    "reason": a.reason,
                    "status": a.status.value,
                    "consultation_fee": a.consultation_fee,
                }
            )
        return pd.DataFrame.from_records(
            records,
            columns=[
                "appointment_id", "patient_id", "patient_name", "doctor_id", "doctor_name",
                "specialization", "date_time", "reason", "status", "consultation_fee",
            ],
        )

    def bills_frame(self) -> pd.DataFrame:
        records = []
        for b in self.billing.list_all():
            records.append(
                {
                    "bill_id": b.bill_id,
                    "appointment_id": b.appointment_id,
                    "patient_id": b.patient_id,
                    "doctor_id": b.doctor_id,
                    "consultation_fee": b.consultation_fee,
                    "medicines": b.medicines,
                    "tests": b.tests,
                    "other": b.other,
                    "tax_amount": b.tax_amount,
                    "total_amount": b.total_amount,
                    "bill_date": b.bill_date,
                    "is_paid": b.is_paid,
                }
            )
        return pd.DataFrame.from_records(
            records,
            columns=[
                "bill_id", "appointment_id", "patient_id", "doctor_id", "consultation_fee",
                "medicines", "tests", "other", "tax_amount", "total_amount", "bill_date", "is_paid",
            ],
        )

    def compute_metrics(self) -> Dict[str, float]:
        appts = self.appointments_frame()
        metrics: Dict[str, float] = {}
        metrics["doctors"] = self.doctors.count()
        metrics["patients"] = self.patients.count()
        metrics["appointments"] = len(appts)
        if len(appts):
            metrics["completion_rate"] = float((appts["status"] == AppointmentStatus.COMPLETED.value).mean())
            metrics["cancellation_rate"] = float((appts["status"] == AppointmentStatus.CANCELLED.value).mean())
        else:
            metrics["completion_rate"] = 0.0
            metrics["cancellation_rate"] = 0.0
        metrics["total_revenue"] = self.billing.total_revenue()
        metrics["outstanding_amount"] = self.billing.outstanding_amount()
        metrics["average_bill"] = self.billing.average_bill_amount()
        return metrics
