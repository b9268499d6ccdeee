from __future__ import annotations

from flask import Blueprint, abort, redirect, render_template, request, url_for

from eventhub import config
from eventhub.db.mongo import get_db
from eventhub.errors import EventHubError
from eventhub.models.booking import BookingRepository
from eventhub.models.event import EventRepository

bp = Blueprint("web", __name__, template_folder="templates")


@bp.get("/")
def index():
    events = EventRepository(get_db()).list_events(limit=config.EVENT_LIST_LIMIT)
    return render_template("index.html", events=events)


@bp.get("/events/<slug>")
def event_page(slug: str):
    db = get_db()
    events = EventRepository(db)
    event = events.find_by_slug(slug)
    if event is None:
        abort(404)

    return render_template(
        "pages/event.html",
        event=event,
        bookings=BookingRepository(db, events).count_for_event(event["_id"]),
        similar=events.find_similar_by_slug(event["slug"], limit=config.SIMILAR_EVENTS_LIMIT),
        booked=request.args.get("booked") == "1",
        error=None,
    )


@bp.post("/events/<slug>/book")
def book_event(slug: str):
    db = get_db()
    events = EventRepository(db)
    event = events.find_by_slug(slug)
    if event is None:
        abort(404)

    try:
        BookingRepository(db, events).create({"event_id": event["_id"], "email": request.form.get("email")})
    except EventHubError as e:
        # the store may be the thing that failed; skip the extras then
        store_ok = e.status < 500
        return render_template(
            "pages/event.html",
            event=event,
            bookings=BookingRepository(db, events).count_for_event(event["_id"]) if store_ok else 0,
            similar=events.find_similar_by_slug(event["slug"], limit=config.SIMILAR_EVENTS_LIMIT) if store_ok else [],
            booked=False,
            error=e.message,
        ), e.status
    return redirect(url_for("web.event_page", slug=event["slug"], booked=1))


def register_web(app):
    app.register_blueprint(bp)
