from __future__ import annotations

from eventhub.errors import ConnectivityError, EventReferenceError
from eventhub.models.booking import BookingRepository
from eventhub.models.event import EventRepository


def test_index_lists_events(app_client, db, make_event_attrs):
    EventRepository(db).create(make_event_attrs())
    r = app_client.get("/")
    assert r.status_code == 200
    assert b"/events/hack-the-planet-48h-hackathon" in r.data


def test_event_page_renders_details(app_client, db, make_event_attrs):
    repo = EventRepository(db)
    repo.create(make_event_attrs())
    repo.create(make_event_attrs(title="Climate Jam", tags=["climate"]))

    r = app_client.get("/events/hack-the-planet-48h-hackathon")
    assert r.status_code == 200
    html = r.get_data(as_text=True)
    assert "Hack the Planet 48h Hackathon!!" in html
    assert "<li>Kickoff</li>" in html
    assert "Be the first to book your spot!" in html
    assert "Climate Jam" in html


def test_event_page_404(app_client):
    assert app_client.get("/events/nope").status_code == 404


def test_booking_form(app_client, db, make_event_attrs):
    EventRepository(db).create(make_event_attrs())

    r = app_client.post("/events/hack-the-planet-48h-hackathon/book", data={"email": "bad"})
    assert r.status_code == 400
    assert "Email must be a valid email address." in r.get_data(as_text=True)

    r = app_client.post("/events/hack-the-planet-48h-hackathon/book", data={"email": "me@example.com"})
    assert r.status_code == 302
    r = app_client.get(r.headers["Location"])
    html = r.get_data(as_text=True)
    assert "Thank you for signing up!" in html
    assert "Join 1 people" in html


def test_booking_form_event_gone(app_client, db, make_event_attrs, monkeypatch):
    ev = EventRepository(db).create(make_event_attrs())

    def _gone(self, attrs):
        raise EventReferenceError(str(ev["_id"]))

    monkeypatch.setattr(BookingRepository, "create", _gone)
    r = app_client.post("/events/hack-the-planet-48h-hackathon/book", data={"email": "me@example.com"})
    assert r.status_code == 404
    assert "referenced event does not exist" in r.get_data(as_text=True)


def test_booking_form_store_down(app_client, db, make_event_attrs, monkeypatch):
    EventRepository(db).create(make_event_attrs())

    def _down(self, attrs):
        raise ConnectivityError("Could not connect to MongoDB: no servers")

    def _unreachable(self, event_id):
        raise AssertionError("store should not be queried again")

    monkeypatch.setattr(BookingRepository, "create", _down)
    monkeypatch.setattr(BookingRepository, "count_for_event", _unreachable)
    r = app_client.post("/events/hack-the-planet-48h-hackathon/book", data={"email": "me@example.com"})
    assert r.status_code == 503
    assert "Could not connect to MongoDB" in r.get_data(as_text=True)
