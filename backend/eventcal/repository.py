# backend/eventcal/repository.py
"""Durable CRUD for events on top of a request-scoped SQLAlchemy session."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import EventNotFoundError, IdMismatchError
from .models import Event
from .schemas import EventIn

logger = logging.getLogger(__name__)

# Integer primary key range; ids outside it cannot name a stored row
MAX_EVENT_ID = 2**31 - 1


class EventRepository:
    """
    Store access for Event rows.

    Callers validate before ``create``/``update``; nothing is re-checked here.
    """

    def __init__(self, db: Session):
        self.db = db

    def list(self, start: Optional[datetime] = None, end: Optional[datetime] = None) -> list[Event]:
        """Events overlapping ``[start, end]`` (either bound optional), earliest first."""
        q = select(Event)
        if start is not None:
            q = q.where(Event.end_date >= start)
        if end is not None:
            q = q.where(Event.start_date <= end)
        q = q.order_by(Event.start_date.asc(), Event.id.asc())
        return list(self.db.execute(q).scalars().all())

    def get(self, event_id: int) -> Event:
        if not 0 < event_id <= MAX_EVENT_ID:
            raise EventNotFoundError(event_id)
        ev = self.db.get(Event, event_id)
        if ev is None:
            raise EventNotFoundError(event_id)
        return ev

    def exists(self, event_id: int) -> bool:
        try:
            self.get(event_id)
        except EventNotFoundError:
            return False
        return True

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(Event)).scalar_one()

    def create(self, data: EventIn) -> Event:
        ev = Event(**data.mutable_fields())
        self.db.add(ev)
        self._commit()
        self.db.refresh(ev)
        logger.info("Created event %s (%s)", ev.id, ev.title)
        return ev

    def update(self, event_id: int, data: EventIn) -> Event:
        if data.id is not None and data.id != event_id:
            raise IdMismatchError(event_id, data.id)
        ev = self.get(event_id)
        for name, value in data.mutable_fields().items():
            setattr(ev, name, value)
        self._commit()
        self.db.refresh(ev)
        logger.info("Updated event %s", event_id)
        return ev

    def delete(self, event_id: int) -> None:
        ev = self.get(event_id)
        self.db.delete(ev)
        self._commit()
        logger.info("Deleted event %s", event_id)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
