"""Tests for bill generation and revenue aggregates."""
from datetime import timedelta

import pytest

from meditrack.clinic import Clinic
from meditrack.config import ClinicConfig
from meditrack.errors import InvalidInputError, NotFoundError
from meditrack.models import PersonInfo, Specialization


@pytest.fixture
def completed(clinic, add_doctor, patient, now):
    doctor = add_doctor("Dr Heart", Specialization.CARDIOLOGIST)
    appt = clinic.appointments.create(patient.patient_id, doctor.doctor_id, now - timedelta(hours=1))
    clinic.appointments.complete(appt.appointment_id, "ok")
    return appt


def test_generate_bill_snapshots_appointment(clinic, completed, now):
    bill = clinic.billing.generate_bill(completed.appointment_id)

    assert bill.bill_id == "BILL00005001"
    assert (bill.patient_id, bill.doctor_id) == (completed.patient_id, completed.doctor_id)
    assert bill.consultation_fee == 500.0
    assert (bill.medicines, bill.tests, bill.other) == (0.0, 0.0, 0.0)
    assert bill.bill_date == now
    assert not bill.is_paid


def test_generate_bill_for_unknown_appointment(clinic):
    with pytest.raises(NotFoundError):
        clinic.billing.generate_bill("APT404")
    assert clinic.billing.list_all() == []


def test_worked_example(clinic, completed):
    bill = clinic.billing.generate_bill(completed.appointment_id)
    clinic.billing.add_charges(bill.bill_id, medicines=100, tests=50, other=0)

    assert bill.subtotal == pytest.approx(650.0)
    assert round(bill.tax_amount, 2) == 117.00
    assert round(bill.total_amount, 2) == 767.00

    clinic.billing.add_charges(bill.bill_id, medicines=150)
    assert bill.tax_amount == pytest.approx(700 * 0.18)
    assert bill.total_amount == pytest.approx(700 * 1.18)


def test_bad_charge_leaves_bill_untouched(clinic, completed):
    bill = clinic.billing.generate_bill(completed.appointment_id)

    with pytest.raises(InvalidInputError):
        clinic.billing.add_charges(bill.bill_id, medicines=10, tests=-1)

    assert bill.medicines == 0.0
    assert bill.tests == 0.0


def test_tax_rate_comes_from_config(now):
    clinic = Clinic(ClinicConfig(tax_rate=0.05))
    doctor = clinic.doctors.add(PersonInfo("Dr Ear"), Specialization.ENT, consultation_fee=100)
    patient = clinic.patients.add(PersonInfo("Someone"))
    appt = clinic.appointments.create(patient.patient_id, doctor.doctor_id, now)

    bill = clinic.billing.generate_bill(appt.appointment_id)

    assert bill.total_amount == pytest.approx(105.0)


def test_payment_and_aggregates(clinic, completed):
    first = clinic.billing.generate_bill(completed.appointment_id)
    second = clinic.billing.generate_bill(completed.appointment_id)
    clinic.billing.add_charges(second.bill_id, other=100)
    clinic.billing.mark_paid(first.bill_id)

    assert clinic.billing.list_paid() == [first]
    assert clinic.billing.list_pending() == [second]
    assert clinic.billing.total_revenue() == pytest.approx(590.0)
    assert clinic.billing.outstanding_amount() == pytest.approx(708.0)
    assert clinic.billing.average_bill_amount() == pytest.approx((590.0 + 708.0) / 2)
    assert clinic.billing.list_by_patient(completed.patient_id) == [first, second]


def test_mark_paid_unknown_bill(clinic):
    with pytest.raises(NotFoundError):
        clinic.billing.mark_paid("BILL404")


def test_aggregates_are_zero_without_bills(clinic):
    assert clinic.billing.total_revenue() == 0
    assert clinic.billing.outstanding_amount() == 0
    assert clinic.billing.average_bill_amount() == 0.0


def test_summary(clinic, completed):
    bill = clinic.billing.generate_bill(completed.appointment_id)
    clinic.billing.mark_paid(bill.bill_id)

    summary = clinic.billing.build_summary(bill, "Pat Jones", "Dr Heart")

    assert summary.bill_id == bill.bill_id
    assert summary.patient_name == "Pat Jones"
    assert summary.total_amount == pytest.approx(590.0)
    assert summary.tax_amount == pytest.approx(90.0)
    assert summary.is_paid
