# backend/eventcal/validation.py
"""
Business rules for a candidate event.

Rules are independent (field, applies, check, message) entries evaluated in
order; every rule whose precondition holds is checked, so a caller always
gets the complete list of problems in a stable order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Callable, NamedTuple

from .config import (
    CATEGORIES,
    DESCRIPTION_MAX_LENGTH,
    LOCATION_MAX_LENGTH,
    MAX_TIMED_DURATION,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)
from .schemas import EventIn


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


Predicate = Callable[[EventIn], bool]


class Rule(NamedTuple):
    field: str
    applies: Predicate
    passes: Predicate
    message: str


def _blank(s: str | None) -> bool:
    return s is None or not s.strip()


def _always(_: EventIn) -> bool:
    return True


def _both_dates(e: EventIn) -> bool:
    return e.start_date is not None and e.end_date is not None


RULES: tuple[Rule, ...] = (
    Rule("title", _always,
         lambda e: not _blank(e.title),
         "Title is required"),
    Rule("title", lambda e: not _blank(e.title),
         lambda e: len(e.title) <= TITLE_MAX_LENGTH,
         f"Title cannot exceed {TITLE_MAX_LENGTH} characters"),
    Rule("title", lambda e: not _blank(e.title),
         lambda e: len(e.title) >= TITLE_MIN_LENGTH,
         f"Title must be at least {TITLE_MIN_LENGTH} characters"),
    Rule("description", lambda e: e.description is not None,
         lambda e: len(e.description) <= DESCRIPTION_MAX_LENGTH,
         f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"),
    Rule("startDate", _always,
         lambda e: e.start_date is not None,
         "Start date is required"),
    Rule("startDate", _both_dates,
         lambda e: e.start_date < e.end_date,
         "Start date must be before end date"),
    Rule("endDate", _always,
         lambda e: e.end_date is not None,
         "End date is required"),
    Rule("endDate", _both_dates,
         lambda e: e.end_date > e.start_date,
         "End date must be after start date"),
    Rule("location", lambda e: e.location is not None,
         lambda e: len(e.location) <= LOCATION_MAX_LENGTH,
         f"Location cannot exceed {LOCATION_MAX_LENGTH} characters"),
    Rule("category", _always,
         lambda e: not _blank(e.category),
         "Category is required"),
    Rule("category", lambda e: not _blank(e.category),
         lambda e: e.category in CATEGORIES,
         f"Category must be one of: {', '.join(CATEGORIES)}"),
    Rule("endDate", lambda e: not e.is_all_day and _both_dates(e),
         lambda e: e.end_date - e.start_date <= MAX_TIMED_DURATION,
         "Non-all-day events cannot exceed 24 hours duration"),
    # only the start is pinned to midnight; the end date is left free
    Rule("startDate", lambda e: e.is_all_day and e.start_date is not None,
         lambda e: e.start_date.time() == time(0, 0),
         "All-day events should start at midnight"),
)


def validate_event(candidate: EventIn) -> list[FieldError]:
    """Return every rule violation for ``candidate``; empty means valid."""
    return [
        FieldError(rule.field, rule.message)
        for rule in RULES
        if rule.applies(candidate) and not rule.passes(candidate)
    ]


def is_valid(candidate: EventIn) -> bool:
    return not validate_event(candidate)


def errors_by_field(errors: list[FieldError]) -> dict[str, list[str]]:
    """Group messages per field, keeping rule order inside each group."""
    grouped: dict[str, list[str]] = {}
    for err in errors:
        grouped.setdefault(err.field, []).append(err.message)
    return grouped
