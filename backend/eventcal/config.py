# backend/eventcal/config.py
"""Settings read from the environment plus the fixed event vocabulary."""

from __future__ import annotations

import logging
import os
from datetime import timedelta


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _clean(s: str | None) -> str | None:
    return s.strip().rstrip("/") if s and s.strip() else None


# ───────────────────────── Event vocabulary ─────────────────────────
CATEGORIES: tuple[str, ...] = ("Work", "Personal", "Meeting", "Holiday", "General")
DEFAULT_CATEGORY = "General"

CATEGORY_COLORS: dict[str, str] = {
    "Work": "#3b82f6",
    "Personal": "#10b981",
    "Meeting": "#f59e0b",
    "Holiday": "#ef4444",
}
DEFAULT_COLOR = "#6366f1"

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
LOCATION_MAX_LENGTH = 300
CATEGORY_MAX_LENGTH = 50

MAX_TIMED_DURATION = timedelta(hours=24)

# ───────────────────────── Runtime settings ─────────────────────────
FRONTEND_ORIGIN = _clean(os.getenv("FRONTEND_ORIGIN")) or "http://localhost:5173"
EXTRA_CORS_ORIGINS = [x for x in (_clean(p) for p in os.getenv("EXTRA_CORS_ORIGINS", "").split(",")) if x]

AUTO_MIGRATE = _flag("AUTO_MIGRATE")
SEED_DEMO_DATA = _flag("SEED_DEMO_DATA")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))


def cors_origins() -> list[str]:
    if "*" in EXTRA_CORS_ORIGINS:
        return ["*"]
    return sorted({FRONTEND_ORIGIN, *EXTRA_CORS_ORIGINS})


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install the root handler once; later calls only adjust the level."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(getattr(logging, level, logging.INFO))
    # engine echo stays off; SQL statements only at DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level == "DEBUG" else logging.WARNING
    )
