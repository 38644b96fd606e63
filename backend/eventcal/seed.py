# backend/eventcal/seed.py
"""Demo rows for an empty database. Not a contract; handy for local runs."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from .repository import EventRepository
from .schemas import EventIn

logger = logging.getLogger(__name__)


def demo_events(today: date) -> list[EventIn]:
    def at(days: int, hour: int = 0, minute: int = 0) -> datetime:
        return datetime.combine(today + timedelta(days=days), time(hour, minute))

    christmas = datetime(today.year, 12, 25)
    return [
        EventIn(
            title="Project Kickoff Meeting",
            description="Initial meeting to discuss project scope and timeline",
            start_date=at(1, 10), end_date=at(1, 11),
            location="Conference Room A", category="Meeting",
        ),
        EventIn(
            title="Code Review Session",
            description="Review pull requests and discuss code quality improvements",
            start_date=at(2, 14), end_date=at(2, 15, 30),
            location="Virtual - Teams", category="Work",
        ),
        EventIn(
            title="Team Building Event",
            description="Annual team building activities and lunch",
            start_date=at(5), end_date=at(6),
            location="City Park", category="Personal", is_all_day=True,
        ),
        EventIn(
            title="Christmas Holiday",
            description="Office closed for Christmas celebration",
            start_date=christmas, end_date=christmas + timedelta(days=1),
            location="N/A", category="Holiday", is_all_day=True,
        ),
    ]


def seed_events(db: Session, today: Optional[date] = None) -> int:
    """Insert the demo events when the table is empty; returns rows added."""
    repo = EventRepository(db)
    if repo.count():
        return 0
    rows = demo_events(today or date.today())
    for data in rows:
        repo.create(data)
    logger.info("Seeded %d demo events", len(rows))
    return len(rows)
