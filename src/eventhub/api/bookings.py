from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from eventhub.db.mongo import get_db, serialize_document
from eventhub.errors import EventHubError
from eventhub.models.booking import BookingRepository
from eventhub.models.event import EventRepository

bp = Blueprint("api_bookings", __name__)

logger = logging.getLogger(__name__)


@bp.post("/bookings")
def create_booking():
    """
    POST /api/bookings  {"event_id": "...", "email": "..."}
    or                  {"slug": "...", "email": "..."}
    """
    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return jsonify({"message": "Request body must be a JSON object."}), 400

    attrs = {"email": body.get("email"), "event_id": body.get("event_id")}
    slug = body.get("slug")

    try:
        db = get_db()
        events = EventRepository(db)
        if not attrs["event_id"] and isinstance(slug, str) and slug.strip():
            event = events.find_by_slug(slug)
            if event is None:
                return jsonify({"message": f'Event with slug "{slug.strip().lower()}" was not found.'}), 404
            attrs["event_id"] = event["_id"]

        booking = BookingRepository(db, events).create(attrs)
    except EventHubError:
        raise
    except Exception as e:
        logger.exception("POST /api/bookings failed")
        return jsonify({"message": "Failed to create booking.", "error": str(e)}), 500

    return jsonify({"message": "Booking created successfully.", "booking": serialize_document(booking)}), 201
