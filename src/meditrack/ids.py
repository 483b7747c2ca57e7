"""
Prefixed identifier issuing, one counter per entity kind.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

_FORMATS: Dict[str, str] = {
    "patient": "PAT{:05d}",
    "doctor": "DOC{:05d}",
    "appointment": "APT{:08d}",
    "bill": "BILL{:08d}",
}

DEFAULT_OFFSETS: Dict[str, int] = {"patient": 1000, "doctor": 500, "appointment": 10_000, "bill": 5000}


class IdIssuer:
    """
    Issues ``<PREFIX><zero-padded counter>`` identifiers.

    Each kind starts at its own offset so ids are easy to tell apart while
    debugging; the first id issued is ``offset + 1``. Increment-and-read runs
    under a lock, so concurrent callers never receive the same value.
    """

    def __init__(self, offsets: Optional[Dict[str, int]] = None):
        self._seeds = dict(DEFAULT_OFFSETS)
        if offsets:
            self._seeds.update(offsets)
        self._counters = dict(self._seeds)
        self._lock = threading.Lock()

    def _next(self, kind: str) -> str:
        with self._lock:
            self._counters[kind] += 1
            value = self._counters[kind]
        return _FORMATS[kind].format(value)

    def patient_id(self) -> str:
        return self._next("patient")

    def doctor_id(self) -> str:
        return self._next("doctor")

    def appointment_id(self) -> str:
        return self._next("appointment")

    def bill_id(self) -> str:
        return self._next("bill")

    def peek(self, kind: str) -> int:
        with self._lock:
            return self._counters[kind]

    def _reset(self) -> None:
        # test isolation only
        with self._lock:
            self._counters = dict(self._seeds)
