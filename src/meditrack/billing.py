"""
Billing: turn an appointment's fee snapshot plus itemized charges into a taxed bill.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from .errors import InvalidInputError, NotFoundError
from .ids import IdIssuer
from .models import Bill, BillSummary, TaxPolicy
from .scheduling import AppointmentEngine
from .store import EntityStore

logger = logging.getLogger(__name__)


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class BillingCalculator:
    def __init__(
        self,
        ids: IdIssuer,
        appointments: AppointmentEngine,
        tax_policy: TaxPolicy,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.ids = ids
        self.appointments = appointments
        self.tax_policy = tax_policy
        self.clock = clock
        self.store: EntityStore[Bill] = EntityStore()

    def generate_bill(self, appointment_id: str) -> Bill:
        appt = self.appointments.get(appointment_id)
        bill = Bill(
            bill_id=self.ids.bill_id(),
            appointment_id=appointment_id,
            patient_id=appt.patient_id,
            doctor_id=appt.doctor_id,
            consultation_fee=appt.consultation_fee,
            bill_date=self.clock(),
            tax_policy=self.tax_policy,
        )
        self.store.add(bill.bill_id, bill)
        logger.info("Bill generated: %s for appointment: %s", bill.bill_id, appointment_id)
        return bill

    def add_charges(
        self,
        bill_id: str,
        medicines: Optional[float] = None,
        tests: Optional[float] = None,
        other: Optional[float] = None,
    ) -> Bill:
        bill = self.get(bill_id)
        # validate everything first so a bad value leaves the bill untouched
        staged = {
            name: value
            for name, value in (("medicines", medicines), ("tests", tests), ("other", other))
            if value is not None
        }
        for name, value in staged.items():
            if value < 0:
                raise InvalidInputError(name, value)
        for name, value in staged.items():
            setattr(bill, name, value)
        return bill

    def get(self, bill_id: str) -> Bill:
        bill = self.store.get(bill_id)
        if bill is None:
            raise NotFoundError("Bill not found", bill_id)
        return bill

    def list_all(self) -> List[Bill]:
        return self.store.get_all()

    def list_by_patient(self, patient_id: str) -> List[Bill]:
        return self.store.search(lambda b: b.patient_id == patient_id)

    def mark_paid(self, bill_id: str) -> Bill:
        bill = self.get(bill_id)
        bill.mark_paid()
        logger.info("Bill marked as paid: %s", bill_id)
        return bill

    def list_pending(self) -> List[Bill]:
        return self.store.search(lambda b: not b.is_paid)

    def list_paid(self) -> List[Bill]:
        return self.store.search(lambda b: b.is_paid)

    def total_revenue(self) -> float:
        return sum(b.total_amount for b in self.list_paid())

    def outstanding_amount(self) -> float:
        return sum(b.total_amount for b in self.list_pending())

    def average_bill_amount(self) -> float:
        return _mean([b.total_amount for b in self.store.get_all()])

    @staticmethod
    def build_summary(bill: Bill, patient_name: str, doctor_name: str) -> BillSummary:
        return BillSummary(
            bill_id=bill.bill_id,
            patient_name=patient_name,
            doctor_name=doctor_name,
            total_amount=bill.total_amount,
            tax_amount=bill.tax_amount,
            bill_date=bill.bill_date,
            is_paid=bill.is_paid,
        )
