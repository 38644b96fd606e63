from __future__ import annotations
from typing import Optional
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from .config import (
    CATEGORY_COLORS,
    CATEGORY_MAX_LENGTH,
    DEFAULT_CATEGORY,
    DEFAULT_COLOR,
    DESCRIPTION_MAX_LENGTH,
    LOCATION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from .db import Base


def category_color(category: Optional[str]) -> str:
    """Display colour for a category; unknown categories share the default."""
    return CATEGORY_COLORS.get(category or "", DEFAULT_COLOR)


class Event(Base):
    __tablename__ = "events"

    id:          Mapped[int]           = mapped_column(Integer, primary_key=True, index=True)
    title:       Mapped[str]           = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    start_date:  Mapped[datetime]      = mapped_column(DateTime(timezone=False), nullable=False, index=True)
    end_date:    Mapped[datetime]      = mapped_column(DateTime(timezone=False), nullable=False)
    location:    Mapped[Optional[str]] = mapped_column(String(LOCATION_MAX_LENGTH), nullable=True)
    category:    Mapped[str]           = mapped_column(
        String(CATEGORY_MAX_LENGTH), nullable=False, default=DEFAULT_CATEGORY, index=True
    )
    is_all_day:  Mapped[bool]          = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    @property
    def color(self) -> str:
        return category_color(self.category)

    def __repr__(self) -> str:
        return f"<Event id={self.id} title={self.title!r} start={self.start_date}>"
