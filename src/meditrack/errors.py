"""
Error kinds raised by the clinic engine.
"""

from __future__ import annotations

from typing import Any, Optional


class MeditrackError(Exception):
    """Base class for every error the engine raises."""


class NotFoundError(MeditrackError):
    def __init__(self, message: str, entity_id: Optional[str] = None):
        super().__init__(message if entity_id is None else f"{message}: {entity_id}")
        self.entity_id = entity_id


class InvalidTransitionError(MeditrackError):
    def __init__(self, appointment_id: str, reason: str):
        super().__init__(f"{reason} [{appointment_id}]")
        self.appointment_id = appointment_id
        self.reason = reason


class InvalidInputError(MeditrackError, ValueError):
    def __init__(self, field_name: str, value: Any):
        super().__init__(f"Invalid value for field: {field_name} = {value!r}")
        self.field_name = field_name
        self.value = value


class DuplicateKeyError(MeditrackError):
    def __init__(self, key: str):
        super().__init__(f"Key already present: {key}")
        self.key = key
