# backend/eventcal/db.py
"""
Store wiring for the events table.

The URL comes from DATABASE_URL (Postgres URLs are pinned to psycopg2) and
falls back to backend/eventcal.db. Every request borrows one session from
SessionLocal through get_db; schema creation is either create_schema here or
Alembic (see main.run_migrations).
"""

from __future__ import annotations

from typing import Generator
from os import getenv
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


def _normalize_db_url(url: str) -> str:
    """Normalize common Postgres URLs to the psycopg2 driver form."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://", 1)
    return url


RAW_URL = getenv("DATABASE_URL")
if RAW_URL:
    DB_URL = _normalize_db_url(RAW_URL)
else:
    DB_URL = f"sqlite:///{(Path(__file__).resolve().parents[1] / 'eventcal.db')}"

is_sqlite = DB_URL.startswith("sqlite")

engine = create_engine(
    DB_URL,
    echo=False,
    future=True,
    pool_pre_ping=True,
    connect_args=({} if not is_sqlite else {"check_same_thread": False}),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    pass


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a session per request
    and guarantees it is closed afterwards.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_schema(bind=None) -> None:
    """Create any missing tables; used when Alembic is not driving the schema."""
    from . import models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
