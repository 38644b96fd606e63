# backend/eventcal/schemas.py
from __future__ import annotations
from typing import Generic, Optional, TypeVar
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from .config import DEFAULT_CATEGORY

T = TypeVar("T")

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _wall_clock(v: Optional[datetime]) -> Optional[datetime]:
    # offsets are dropped, not converted: timestamps are stored as given
    if v is not None and v.tzinfo is not None:
        return v.replace(tzinfo=None)
    return v


class EventIn(BaseModel):
    """
    Canonical candidate event, shared by the JSON API and the HTML forms.

    Every field is optional on the wire so that missing values are reported
    by the validator alongside every other rule, not by the parser.
    """
    model_config = _camel

    id:          Optional[int]      = None
    title:       Optional[str]      = None
    description: Optional[str]      = None
    start_date:  Optional[datetime] = None
    end_date:    Optional[datetime] = None
    location:    Optional[str]      = None
    category:    Optional[str]      = DEFAULT_CATEGORY
    is_all_day:  bool               = False

    strip_offset = field_validator("start_date", "end_date")(_wall_clock)

    def mutable_fields(self) -> dict:
        """Column values an update replaces; everything but the id."""
        return self.model_dump(exclude={"id"})


class EventOut(BaseModel):
    """Response schema for an event row (includes ID and derived colour)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id:          int
    title:       str
    description: Optional[str] = None
    start_date:  datetime
    end_date:    datetime
    location:    Optional[str] = None
    category:    str
    is_all_day:  bool
    color:       str


class DeletedOut(BaseModel):
    id: int


class ApiResponse(BaseModel, Generic[T]):
    """Uniform envelope around every /api response."""
    success: bool
    message: str = ""
    data: Optional[T] = None
    errors: Optional[list[str]] = None

    @classmethod
    def ok(cls, data: T, message: str = "") -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, errors: Optional[list[str]] = None) -> "ApiResponse[T]":
        return cls(success=False, message=message, errors=errors)
