"""Tests for application startup helpers."""
import logging

from sqlalchemy import create_engine, inspect

from eventcal.config import configure_logging
from eventcal.main import run_migrations


def test_run_migrations_keeps_app_logging(tmp_path, monkeypatch):
    db_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setenv("DATABASE_URL", db_url)
    configure_logging("INFO")
    handlers_before = list(logging.getLogger().handlers)

    run_migrations()

    root = logging.getLogger()
    assert root.level == logging.INFO
    assert root.handlers == handlers_before


def test_run_migrations_creates_events_table(tmp_path, monkeypatch):
    db_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setenv("DATABASE_URL", db_url)

    run_migrations()

    engine = create_engine(db_url)
    try:
        insp = inspect(engine)
        columns = {c["name"] for c in insp.get_columns("events")}
        indexes = {i["name"] for i in insp.get_indexes("events")}
    finally:
        engine.dispose()
    assert {"title", "start_date", "end_date", "category", "is_all_day"} <= columns
    assert {"ix_events_start_date", "ix_events_category"} <= indexes
