# backend/eventcal/ui.py
"""
Server-rendered pages for browsing and editing events.

Form posts are mapped into the same EventIn shape the JSON API uses and go
through the same validator, so both surfaces enforce one set of rules.
Successful posts redirect (303) to the list; failed ones re-render the form.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from html import escape
from typing import Optional
from urllib.parse import urlencode

from dateutil.parser import isoparse as iso_parse
from fastapi import APIRouter, Depends, Form, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import CATEGORIES, DEFAULT_CATEGORY
from .db import get_db
from .errors import EventNotFoundError
from .repository import EventRepository
from .schemas import EventIn
from .validation import errors_by_field, validate_event

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)

_INPUT_FMT = "%Y-%m-%dT%H:%M"
_TRUTHY = {"on", "true", "1", "yes"}


# ───────────────────────── Form adapter ─────────────────────────────
def _blank_to_none(v: Optional[str]) -> Optional[str]:
    return v if v is not None and v.strip() else None


def _parse_local(v: Optional[str]) -> Optional[datetime]:
    v = _blank_to_none(v)
    if v is None:
        return None
    try:
        dt = iso_parse(v.strip())
    except (ValueError, OverflowError):
        return None
    return dt.replace(tzinfo=None)


def form_to_event(
    *,
    id: Optional[str] = None,
    title: Optional[str] = None,
    description: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    location: Optional[str] = None,
    category: Optional[str] = None,
    is_all_day: Optional[str] = None,
) -> EventIn:
    """Map raw form strings onto the canonical candidate shape."""
    raw_id = _blank_to_none(id)
    return EventIn(
        id=int(raw_id) if raw_id and raw_id.strip().isdigit() else None,
        title=_blank_to_none(title),
        description=_blank_to_none(description),
        start_date=_parse_local(start_date),
        end_date=_parse_local(end_date),
        location=_blank_to_none(location),
        # an omitted field falls back like the JSON body does
        category=DEFAULT_CATEGORY if category is None else _blank_to_none(category),
        is_all_day=(is_all_day or "").strip().lower() in _TRUTHY,
    )


# ───────────────────────── Rendering ────────────────────────────────
def _page(title: str, body: str) -> str:
    return (
        "<!doctype html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>{escape(title)} - Event Calendar</title></head>\n"
        f"<body>\n<nav><a href=\"/\">Home</a> | <a href=\"/events\">Events</a></nav>\n"
        f"<main>\n{body}\n</main>\n</body></html>\n"
    )


def _fmt_input(dt: Optional[datetime]) -> str:
    return dt.strftime(_INPUT_FMT) if dt else ""


def _errors_html(messages: list[str]) -> str:
    if not messages:
        return ""
    items = "".join(f"<li>{escape(m)}</li>" for m in messages)
    return f'<ul class="field-errors">{items}</ul>'


def render_home() -> str:
    body = (
        "<h1>Event Calendar</h1>\n"
        '<p><a href="/events">Browse events</a> or use the JSON API at '
        "<code>/api/events</code>.</p>"
    )
    return _page("Home", body)


def render_list(events, message: Optional[str] = None) -> str:
    rows = []
    for ev in events:
        if ev.is_all_day:
            when = f"{ev.start_date:%Y-%m-%d} (all day)"
        else:
            when = f"{ev.start_date:%Y-%m-%d %H:%M} - {ev.end_date:%Y-%m-%d %H:%M}"
        rows.append(
            "<tr>"
            f'<td><span style="color:{ev.color}">&#9632;</span> {escape(ev.title)}</td>'
            f"<td>{escape(when)}</td>"
            f"<td>{escape(ev.location or '')}</td>"
            f"<td>{escape(ev.category)}</td>"
            f'<td><a href="/events/{ev.id}/edit">Edit</a> '
            f'<form method="post" action="/events/{ev.id}/delete" style="display:inline">'
            '<button type="submit">Delete</button></form></td>'
            "</tr>"
        )
    flash = f'<p class="flash">{escape(message)}</p>\n' if message else ""
    table = (
        "<table>\n<thead><tr><th>Title</th><th>When</th><th>Location</th>"
        "<th>Category</th><th></th></tr></thead>\n<tbody>\n"
        + ("\n".join(rows) if rows else '<tr><td colspan="5">No events yet.</td></tr>')
        + "\n</tbody>\n</table>"
    )
    body = f'{flash}<h1>Events</h1>\n<p><a href="/events/create">New event</a></p>\n{table}'
    return _page("Events", body)


def render_form(
    heading: str,
    action: str,
    data: EventIn,
    field_errors: Optional[dict[str, list[str]]] = None,
    general_error: Optional[str] = None,
) -> str:
    errs = field_errors or {}

    def text_input(name: str, label: str, value: Optional[str], kind: str = "text") -> str:
        return (
            f'<p><label for="{name}">{label}</label> '
            f'<input type="{kind}" id="{name}" name="{name}" value="{escape(value or "")}">'
            f"{_errors_html(errs.get(name, []))}</p>"
        )

    options = "".join(
        f'<option value="{c}"{" selected" if c == (data.category or DEFAULT_CATEGORY) else ""}>{c}</option>'
        for c in CATEGORIES
    )
    checked = " checked" if data.is_all_day else ""
    banner = f'<p class="error">{escape(general_error)}</p>\n' if general_error else ""
    hidden_id = f'<input type="hidden" name="id" value="{data.id}">' if data.id is not None else ""

    body = (
        f"<h1>{escape(heading)}</h1>\n{banner}"
        f'<form method="post" action="{action}">\n{hidden_id}\n'
        + text_input("title", "Event Title", data.title)
        + '<p><label for="description">Description</label> '
        f'<textarea id="description" name="description">{escape(data.description or "")}</textarea>'
        f"{_errors_html(errs.get('description', []))}</p>"
        + text_input("startDate", "Start Date &amp; Time", _fmt_input(data.start_date), "datetime-local")
        + text_input("endDate", "End Date &amp; Time", _fmt_input(data.end_date), "datetime-local")
        + text_input("location", "Location", data.location)
        + f'<p><label for="category">Category</label> <select id="category" name="category">{options}</select>'
        f"{_errors_html(errs.get('category', []))}</p>"
        + f'<p><label><input type="checkbox" name="isAllDay" value="true"{checked}> All Day Event</label></p>'
        + '\n<p><button type="submit">Save</button> <a href="/events">Cancel</a></p>\n</form>'
    )
    return _page(heading, body)


def _redirect(message: str) -> RedirectResponse:
    return RedirectResponse(f"/events?{urlencode({'msg': message})}", status_code=status.HTTP_303_SEE_OTHER)


def _not_found() -> HTMLResponse:
    return HTMLResponse(_page("Not found", "<h1>Event not found</h1>"), status_code=status.HTTP_404_NOT_FOUND)


def _form_fields(
    id: Optional[str] = Form(default=None),
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    start_date: Optional[str] = Form(default=None, alias="startDate"),
    end_date: Optional[str] = Form(default=None, alias="endDate"),
    location: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    is_all_day: Optional[str] = Form(default=None, alias="isAllDay"),
) -> EventIn:
    return form_to_event(
        id=id, title=title, description=description,
        start_date=start_date, end_date=end_date,
        location=location, category=category, is_all_day=is_all_day,
    )


# ───────────────────────── Pages ────────────────────────────────────
@router.get("/", response_class=HTMLResponse)
def home():
    return render_home()


@router.get("/events", response_class=HTMLResponse)
def events_index(msg: Optional[str] = Query(default=None), db: Session = Depends(get_db)):
    return render_list(EventRepository(db).list(), msg)


@router.get("/events/create", response_class=HTMLResponse)
def create_form():
    now = datetime.now().replace(second=0, microsecond=0)
    blank = EventIn(start_date=now, end_date=now + timedelta(hours=1))
    return render_form("Create Event", "/events/create", blank)


@router.post("/events/create", response_class=HTMLResponse)
def create_submit(data: EventIn = Depends(_form_fields), db: Session = Depends(get_db)):
    errors = validate_event(data)
    if errors:
        html = render_form("Create Event", "/events/create", data, errors_by_field(errors))
        return HTMLResponse(html, status_code=status.HTTP_400_BAD_REQUEST)
    try:
        EventRepository(db).create(data)
    except SQLAlchemyError:
        logger.exception("Error creating event")
        html = render_form(
            "Create Event", "/events/create", data,
            general_error="An error occurred while creating the event.",
        )
        return HTMLResponse(html, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _redirect("Event created successfully!")


@router.get("/events/{event_id}/edit", response_class=HTMLResponse)
def edit_form(event_id: int, db: Session = Depends(get_db)):
    try:
        ev = EventRepository(db).get(event_id)
    except EventNotFoundError:
        return _not_found()
    data = EventIn(
        id=ev.id, title=ev.title, description=ev.description,
        start_date=ev.start_date, end_date=ev.end_date,
        location=ev.location, category=ev.category, is_all_day=ev.is_all_day,
    )
    return render_form("Edit Event", f"/events/{event_id}/edit", data)


@router.post("/events/{event_id}/edit", response_class=HTMLResponse)
def edit_submit(event_id: int, data: EventIn = Depends(_form_fields), db: Session = Depends(get_db)):
    if data.id is not None and data.id != event_id:
        return _not_found()
    data = data.model_copy(update={"id": event_id})

    errors = validate_event(data)
    if errors:
        html = render_form("Edit Event", f"/events/{event_id}/edit", data, errors_by_field(errors))
        return HTMLResponse(html, status_code=status.HTTP_400_BAD_REQUEST)
    try:
        EventRepository(db).update(event_id, data)
    except EventNotFoundError:
        return _not_found()
    except SQLAlchemyError:
        logger.exception("Error updating event %s", event_id)
        html = render_form(
            "Edit Event", f"/events/{event_id}/edit", data,
            general_error="An error occurred while updating the event.",
        )
        return HTMLResponse(html, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return _redirect("Event updated successfully!")


@router.post("/events/{event_id}/delete")
def delete_submit(event_id: int, db: Session = Depends(get_db)):
    try:
        EventRepository(db).delete(event_id)
    except EventNotFoundError:
        return _not_found()
    except SQLAlchemyError:
        logger.exception("Error deleting event %s", event_id)
        return _redirect("An error occurred while deleting the event.")
    return _redirect("Event deleted successfully!")
