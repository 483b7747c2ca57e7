"""
Centralized clinic defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List


GENDERS: List[str] = ["F", "M", "Other"]
FIRST_NAMES: List[str] = [
    "Asha", "Ben", "Chen", "Divya", "Elena", "Farid", "Grace", "Hiro",
    "Imani", "Jonas", "Kavya", "Luis", "Mira", "Noah", "Omar", "Priya",
]
LAST_NAMES: List[str] = [
    "Patel", "Garcia", "Nguyen", "Okafor", "Smith", "Kim", "Rossi", "Haddad",
    "Iyer", "Meyer", "Lopez", "Sato",
]
VISIT_REASONS: List[str] = [
    "chest pain", "skin rash", "migraine", "knee pain", "child fever",
    "sore throat", "blurred vision", "anxiety", "abdominal pain", "cough",
]

TAX_RATE = 0.18


@dataclass
class ClinicConfig:
    tax_rate: float = TAX_RATE
    opening_hour: int = 9
    closing_hour: int = 17  # last slot starts before this hour
    slot_minutes: int = 30
    default_days_ahead: int = 7
    default_max_slots: int = 10
    id_offsets: Dict[str, int] = field(
        default_factory=lambda: {"patient": 1000, "doctor": 500, "appointment": 10_000, "bill": 5000}
    )
    log_level: str = "INFO"


@dataclass
class GenerationConfig:
    seed: int = 42
    doctors: int = 20
    patients: int = 60
    appointments: int = 120
    horizon_days: int = 14  # appointments spread over +/- this many days
    start_date: date = field(default_factory=date.today)
