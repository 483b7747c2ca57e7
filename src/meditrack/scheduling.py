"""
Appointment engine: lifecycle state machine and open-slot search on the clinic grid.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from .config import ClinicConfig
from .directory import DoctorDirectory, PatientDirectory
from .errors import InvalidTransitionError, NotFoundError
from .ids import IdIssuer
from .models import Appointment, AppointmentStatus, Doctor
from .store import EntityStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class AppointmentEngine:
    """
    Owns every appointment. Status only changes through the methods here.

    Transitions: ``create`` -> PENDING; ``confirm`` -> CONFIRMED from any state;
    ``cancel`` -> CANCELLED from any state except COMPLETED; ``complete`` ->
    COMPLETED from any state. NO_SHOW is a valid status value but nothing in
    the engine sets it.
    """

    def __init__(
        self,
        cfg: ClinicConfig,
        ids: IdIssuer,
        doctors: DoctorDirectory,
        patients: PatientDirectory,
        clock: Clock = datetime.now,
    ):
        self.cfg = cfg
        self.ids = ids
        self.doctors = doctors
        self.patients = patients
        self.clock = clock
        self.store: EntityStore[Appointment] = EntityStore()

    # ---------------- lifecycle ----------------

    def create(self, patient_id: str, doctor_id: str, date_time: datetime, reason: str = "") -> Appointment:
        doctor = self.doctors.find(doctor_id)
        patient = self.patients.find(patient_id)
        if doctor is None or patient is None:
            missing = doctor_id if doctor is None else patient_id
            raise NotFoundError("Invalid doctor or patient ID", missing)

        appt = Appointment(
            appointment_id=self.ids.appointment_id(),
            patient_id=patient_id,
            doctor_id=doctor_id,
            date_time=date_time,
            reason=reason,
            consultation_fee=doctor.consultation_fee,
        )
        self.store.add(appt.appointment_id, appt)
        logger.info("Appointment created: %s - %s with Dr. %s", appt.appointment_id, patient.name, doctor.name)
        return appt

    def get(self, appointment_id: str) -> Appointment:
        appt = self.store.get(appointment_id)
        if appt is None:
            raise NotFoundError("Appointment not found", appointment_id)
        return appt

    def confirm(self, appointment_id: str) -> Appointment:
        # No guard: a cancelled or completed appointment can be confirmed again.
        appt = self.get(appointment_id)
        appt.status = AppointmentStatus.CONFIRMED
        logger.info("Appointment confirmed: %s", appointment_id)
        return appt

    def cancel(self, appointment_id: str) -> Appointment:
        appt = self.get(appointment_id)
        if appt.status is AppointmentStatus.COMPLETED:
            raise InvalidTransitionError(appointment_id, "Appointment is completed, cannot be cancelled")
        appt.status = AppointmentStatus.CANCELLED
        logger.info("Appointment cancelled: %s", appointment_id)
        return appt

    def complete(self, appointment_id: str, notes: Optional[str] = None) -> Appointment:
        appt = self.get(appointment_id)
        appt.status = AppointmentStatus.COMPLETED
        if notes:
            appt.notes = notes
        logger.info("Appointment completed: %s", appointment_id)
        return appt

    def reschedule(self, appointment_id: str, new_date_time: datetime) -> Appointment:
        # Does not re-check the doctor's other bookings.
        appt = self.get(appointment_id)
        appt.date_time = new_date_time
        logger.info("Appointment rescheduled: %s -> %s", appointment_id, new_date_time.isoformat())
        return appt

    def clone_as_new_pending(self, appointment_id: str) -> Appointment:
        original = self.get(appointment_id)
        cloned = dataclasses.replace(
            original, appointment_id=self.ids.appointment_id(), status=AppointmentStatus.PENDING
        )
        self.store.add(cloned.appointment_id, cloned)
        logger.info("Appointment cloned: %s -> %s", appointment_id, cloned.appointment_id)
        return cloned

    # ---------------- queries ----------------

    def list_all(self) -> List[Appointment]:
        return self.store.get_all()

    def list_by_patient(self, patient_id: str) -> List[Appointment]:
        return self.store.search(lambda a: a.patient_id == patient_id)

    def list_by_doctor(self, doctor_id: str) -> List[Appointment]:
        return self.store.search(lambda a: a.doctor_id == doctor_id)

    def list_by_status(self, status: AppointmentStatus) -> List[Appointment]:
        return self.store.search(lambda a: a.status is status)

    def list_upcoming(self) -> List[Appointment]:
        now = self.clock()
        return self.store.search(lambda a: a.date_time > now and a.status is not AppointmentStatus.CANCELLED)

    def count(self) -> int:
        return self.store.size()

    def count_for_doctor(self, doctor_id: str) -> int:
        return len(self.list_by_doctor(doctor_id))

    # ---------------- availability ----------------

    def _day_grid(self, day: date) -> Iterator[datetime]:
        slot = datetime.combine(day, time(self.cfg.opening_hour))
        closing = time(self.cfg.closing_hour)
        step = timedelta(minutes=self.cfg.slot_minutes)
        while slot.date() == day and slot.time() < closing:
            yield slot
            slot += step

    def suggest_available_slots(self, doctor_id: str, days_ahead: int, max_slots: int) -> List[datetime]:
        """
        Open slot starts for a doctor, earliest first.

        Candidates lie on the clinic grid (opening to closing hour, one every
        ``slot_minutes``) over ``max(1, days_ahead)`` days starting today.
        A booking only blocks the candidate that starts at exactly the same
        instant; overlap with neighbouring grid points is not checked.
        """
        now = self.clock().replace(second=0, microsecond=0)
        booked = {
            a.date_time for a in self.list_by_doctor(doctor_id) if a.status is not AppointmentStatus.CANCELLED
        }

        suggestions: List[datetime] = []
        for offset in range(max(1, days_ahead)):
            for slot in self._day_grid(now.date() + timedelta(days=offset)):
                if len(suggestions) >= max_slots:
                    return suggestions
                if slot < now or slot in booked:
                    continue
                suggestions.append(slot)
        return suggestions

    def suggest_slots_for_symptoms(
        self, symptoms: Sequence[str], max_doctors: int, days_ahead: int, slots_per_doctor: int
    ) -> Dict[Doctor, List[datetime]]:
        recommended = self.doctors.recommend_by_symptoms(symptoms, max_doctors)
        return {
            doctor: self.suggest_available_slots(doctor.doctor_id, days_ahead, slots_per_doctor)
            for doctor in recommended
        }
