# backend/eventcal/errors.py
"""Error kinds raised by the repository and validator layers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .validation import FieldError


class EventCalendarError(Exception):
    """Base class for expected, client-facing failures."""


class EventNotFoundError(EventCalendarError):
    def __init__(self, event_id: int):
        self.event_id = event_id
        super().__init__(f"Event with ID {event_id} not found")


class IdMismatchError(EventCalendarError):
    def __init__(self, path_id: int, body_id: Optional[int]):
        self.path_id = path_id
        self.body_id = body_id
        super().__init__("Event ID mismatch")


class ValidationFailedError(EventCalendarError):
    """Carries every field error found for one candidate event."""

    def __init__(self, errors: list["FieldError"]):
        self.errors = list(errors)
        super().__init__("Validation failed")

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]
