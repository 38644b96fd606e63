"""Tests for the server-rendered event pages."""
from datetime import datetime
from urllib.parse import parse_qs, urlparse

import pytest

from eventcal.ui import form_to_event


@pytest.fixture
def form():
    return {
        "title": "Dentist",
        "description": "Check-up",
        "startDate": "2025-02-03T08:30",
        "endDate": "2025-02-03T09:15",
        "location": "Main St",
        "category": "Personal",
    }


def flash(resp):
    return parse_qs(urlparse(resp.headers["location"]).query)["msg"][0]


def test_form_adapter_maps_fields():
    event = form_to_event(
        id="4",
        title="Dentist",
        description="  ",
        start_date="2025-02-03T08:30",
        end_date="",
        location=None,
        category="Personal",
        is_all_day="on",
    )

    assert event.id == 4
    assert event.title == "Dentist"
    assert event.description is None
    assert event.start_date == datetime(2025, 2, 3, 8, 30)
    assert event.end_date is None
    assert event.category == "Personal"
    assert event.is_all_day is True


def test_form_adapter_unparseable_date_becomes_missing():
    event = form_to_event(title="Dentist", start_date="soon", category="Work")
    assert event.start_date is None
    assert event.is_all_day is False


def test_home_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "/events" in resp.text


def test_create_form_renders_categories(client):
    resp = client.get("/events/create")
    assert resp.status_code == 200
    for category in ("Work", "Personal", "Meeting", "Holiday", "General"):
        assert f'<option value="{category}"' in resp.text


def test_create_redirects_and_lists(client, form):
    resp = client.post("/events/create", data=form, follow_redirects=False)

    assert resp.status_code == 303
    assert flash(resp) == "Event created successfully!"

    listing = client.get(resp.headers["location"])
    assert "Dentist" in listing.text
    assert "Event created successfully!" in listing.text
    assert "#10b981" in listing.text


def test_create_with_errors_rerenders_form(client, form):
    resp = client.post("/events/create", data={**form, "title": "ab", "endDate": "2025-02-03T08:00"})

    assert resp.status_code == 400
    assert "Title must be at least 3 characters" in resp.text
    assert "Start date must be before end date" in resp.text
    assert 'value="ab"' in resp.text
    assert client.get("/api/events").json()["data"] == []


def test_all_day_checkbox_is_validated(client, form):
    resp = client.post("/events/create", data={**form, "isAllDay": "true"})

    assert resp.status_code == 400
    assert "All-day events should start at midnight" in resp.text


def test_edit_flow(client, form):
    client.post("/events/create", data=form, follow_redirects=False)
    event_id = client.get("/api/events").json()["data"][0]["id"]

    page = client.get(f"/events/{event_id}/edit")
    assert page.status_code == 200
    assert 'value="2025-02-03T08:30"' in page.text

    resp = client.post(
        f"/events/{event_id}/edit",
        data={**form, "id": str(event_id), "title": "Dentist (moved)"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert flash(resp) == "Event updated successfully!"
    assert client.get(f"/api/events/{event_id}").json()["data"]["title"] == "Dentist (moved)"


def test_edit_missing_is_404(client, form):
    assert client.get("/events/999/edit").status_code == 404
    assert client.post("/events/999/edit", data=form).status_code == 404


def test_edit_with_mismatched_id_is_404(client, form):
    client.post("/events/create", data=form, follow_redirects=False)
    event_id = client.get("/api/events").json()["data"][0]["id"]

    resp = client.post(f"/events/{event_id}/edit", data={**form, "id": str(event_id + 1)})

    assert resp.status_code == 404


def test_delete_flow(client, form):
    client.post("/events/create", data=form, follow_redirects=False)
    event_id = client.get("/api/events").json()["data"][0]["id"]

    resp = client.post(f"/events/{event_id}/delete", follow_redirects=False)

    assert resp.status_code == 303
    assert flash(resp) == "Event deleted successfully!"
    assert client.get("/api/events").json()["data"] == []
    assert client.post(f"/events/{event_id}/delete").status_code == 404


def test_titles_are_escaped(client, form):
    client.post("/events/create", data={**form, "title": "<b>Party</b>"}, follow_redirects=False)
    listing = client.get("/events")
    assert "&lt;b&gt;Party&lt;/b&gt;" in listing.text
    assert "<b>Party</b>" not in listing.text


def test_omitted_category_defaults_to_general(client, form):
    data = {k: v for k, v in form.items() if k != "category"}

    resp = client.post("/events/create", data=data, follow_redirects=False)

    assert resp.status_code == 303
    assert client.get("/api/events").json()["data"][0]["category"] == "General"


def test_form_adapter_blank_category_is_required():
    event = form_to_event(title="Dentist", category="  ")
    assert event.category is None


def test_edit_out_of_range_id_is_404(client, form):
    assert client.get("/events/99999999999999999999/edit").status_code == 404
    assert client.post("/events/99999999999999999999/delete").status_code == 404
