# backend/eventcal/api.py
"""JSON API: /api/events CRUD wrapped in the ApiResponse envelope."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from dateutil.parser import isoparse as iso_parse
from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import get_db
from .errors import EventNotFoundError, IdMismatchError, ValidationFailedError
from .repository import EventRepository
from .schemas import ApiResponse, DeletedOut, EventIn, EventOut
from .validation import validate_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


def _respond(status_code: int, envelope: ApiResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json", by_alias=True),
    )


def _parse_bound(raw: Optional[str]) -> Optional[datetime]:
    if raw is None or not raw.strip():
        return None
    dt = iso_parse(raw.strip())
    return dt.replace(tzinfo=None) if dt.tzinfo else dt


def _ensure_valid(payload: EventIn) -> None:
    errors = validate_event(payload)
    if errors:
        raise ValidationFailedError(errors)


# ───────────────────────── Event CRUD ───────────────────────────────
@router.get("", response_model=ApiResponse[list[EventOut]])
def list_events(
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        start_dt = _parse_bound(start)
        end_dt = _parse_bound(end)
    except (ValueError, OverflowError):
        return _respond(
            status.HTTP_400_BAD_REQUEST,
            ApiResponse.fail("Invalid date range", ["start and end must be ISO 8601 timestamps"]),
        )

    rows = EventRepository(db).list(start=start_dt, end=end_dt)
    items = [EventOut.model_validate(r) for r in rows]
    return _respond(
        status.HTTP_200_OK,
        ApiResponse[list[EventOut]].ok(items, f"Retrieved {len(items)} event(s)"),
    )


@router.get("/{event_id}", response_model=ApiResponse[EventOut])
def get_event(event_id: int, db: Session = Depends(get_db)):
    ev = EventRepository(db).get(event_id)
    return _respond(status.HTTP_200_OK, ApiResponse[EventOut].ok(EventOut.model_validate(ev)))


@router.post("", response_model=ApiResponse[EventOut], status_code=status.HTTP_201_CREATED)
def create_event(payload: EventIn, db: Session = Depends(get_db)):
    _ensure_valid(payload)
    ev = EventRepository(db).create(payload)
    resp = _respond(
        status.HTTP_201_CREATED,
        ApiResponse[EventOut].ok(EventOut.model_validate(ev), "Event created successfully"),
    )
    resp.headers["Location"] = f"{router.prefix}/{ev.id}"
    return resp


@router.put("/{event_id}", response_model=ApiResponse[EventOut])
def update_event(event_id: int, payload: EventIn, db: Session = Depends(get_db)):
    if payload.id is not None and payload.id != event_id:
        raise IdMismatchError(event_id, payload.id)

    repo = EventRepository(db)
    repo.get(event_id)
    _ensure_valid(payload)
    ev = repo.update(event_id, payload)
    return _respond(
        status.HTTP_200_OK,
        ApiResponse[EventOut].ok(EventOut.model_validate(ev), "Event updated successfully"),
    )


@router.delete("/{event_id}", response_model=ApiResponse[DeletedOut])
def delete_event(event_id: int, db: Session = Depends(get_db)):
    EventRepository(db).delete(event_id)
    return _respond(
        status.HTTP_200_OK,
        ApiResponse[DeletedOut].ok(DeletedOut(id=event_id), "Event deleted successfully"),
    )


# ───────────────────────── Error mapping ────────────────────────────
_ACTIONS = {"GET": "retrieving", "POST": "creating", "PUT": "updating", "DELETE": "deleting"}


def _failure_message(request: Request) -> str:
    action = _ACTIONS.get(request.method, "processing")
    if "event_id" in request.path_params or request.method == "POST":
        return f"An error occurred while {action} the event"
    return f"An error occurred while {action} events"


def install_error_handlers(app: FastAPI) -> None:
    """Map domain and store failures onto envelope responses."""

    @app.exception_handler(EventNotFoundError)
    async def not_found_handler(request: Request, exc: EventNotFoundError):
        return _respond(status.HTTP_404_NOT_FOUND, ApiResponse.fail(str(exc)))

    @app.exception_handler(IdMismatchError)
    async def id_mismatch_handler(request: Request, exc: IdMismatchError):
        logger.info("Rejected update: path id %s, body id %s", exc.path_id, exc.body_id)
        return _respond(status.HTTP_400_BAD_REQUEST, ApiResponse.fail(str(exc)))

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError):
        return _respond(status.HTTP_400_BAD_REQUEST, ApiResponse.fail(str(exc), exc.messages))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
            details.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        return _respond(status.HTTP_400_BAD_REQUEST, ApiResponse.fail("Invalid request body", details))

    @app.exception_handler(SQLAlchemyError)
    async def store_failure_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return _respond(status.HTTP_500_INTERNAL_SERVER_ERROR, ApiResponse.fail(_failure_message(request)))

    @app.exception_handler(Exception)
    async def unexpected_failure_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _respond(status.HTTP_500_INTERNAL_SERVER_ERROR, ApiResponse.fail("An unexpected error occurred"))
