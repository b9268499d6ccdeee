from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping

from pymongo.database import Database

from eventhub.db.mongo import BOOKINGS
from eventhub.errors import EventReferenceError, ValidationError
from eventhub.models.event import EventRepository, to_object_id, utcnow

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_and_normalize_booking(attrs: Mapping[str, Any]) -> Dict[str, Any]:
    email = attrs.get("email")
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("Email is required and cannot be empty.")
    email = email.strip().lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("Email must be a valid email address.")

    if attrs.get("event_id") in (None, ""):
        raise ValidationError('Field "event_id" is required.')
    return {"event_id": to_object_id(attrs["event_id"], "event_id"), "email": email}


class BookingRepository:
    """
    Booking writes check that the referenced event exists first.

    The check and the insert are two separate store calls: an event
    deleted in between still ends up with the booking. Nothing cleans up
    bookings when an event goes away either.
    """

    def __init__(self, db: Database, events: EventRepository | None = None):
        self.collection = db[BOOKINGS]
        self.events = events or EventRepository(db)

    def create(self, attrs: Mapping[str, Any]) -> Dict[str, Any]:
        doc = validate_and_normalize_booking(attrs)
        if not self.events.exists(doc["event_id"]):
            raise EventReferenceError(str(doc["event_id"]))

        now = utcnow()
        doc["created_at"] = now
        doc["updated_at"] = now
        doc["_id"] = self.collection.insert_one(doc).inserted_id
        logger.info("Booked %s for event %s", doc["email"], doc["event_id"])
        return doc

    def count_for_event(self, event_id: Any) -> int:
        return self.collection.count_documents({"event_id": to_object_id(event_id, "event_id")})
