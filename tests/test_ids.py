"""Tests for identifier issuing."""
from concurrent.futures import ThreadPoolExecutor

from meditrack.ids import IdIssuer


def test_prefixes_and_offsets():
    ids = IdIssuer()

    assert ids.patient_id() == "PAT01001"
    assert ids.doctor_id() == "DOC00501"
    assert ids.appointment_id() == "APT00010001"
    assert ids.bill_id() == "BILL00005001"


def test_counters_are_independent_and_monotonic():
    ids = IdIssuer()
    first = ids.doctor_id()
    ids.patient_id()
    second = ids.doctor_id()

    assert (first, second) == ("DOC00501", "DOC00502")
    assert ids.peek("doctor") == 502


def test_custom_offsets():
    ids = IdIssuer({"bill": 0})
    assert ids.bill_id() == "BILL00000001"
    assert ids.patient_id() == "PAT01001"


def test_concurrent_callers_never_share_an_id():
    ids = IdIssuer()
    with ThreadPoolExecutor(max_workers=8) as pool:
        issued = list(pool.map(lambda _: ids.appointment_id(), range(500)))

    assert len(set(issued)) == 500
    assert ids.peek("appointment") == 10_500


def test_reset_restores_seeds():
    ids = IdIssuer()
    ids.patient_id()
    ids._reset()
    assert ids.patient_id() == "PAT01001"
