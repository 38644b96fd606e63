"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eventcal.db import Base, get_db
from eventcal.main import app
from eventcal.schemas import EventIn


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with the events table."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def db_session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def client(session_factory):
    """TestClient whose requests each get their own session on the test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def standup():
    """Valid 30 minute work event."""
    return EventIn(
        title="Standup",
        start_date=datetime(2025, 1, 1, 9, 0),
        end_date=datetime(2025, 1, 1, 9, 30),
        category="Work",
        is_all_day=False,
    )


@pytest.fixture
def standup_json():
    return {
        "title": "Standup",
        "startDate": "2025-01-01T09:00:00",
        "endDate": "2025-01-01T09:30:00",
        "category": "Work",
        "isAllDay": False,
    }
