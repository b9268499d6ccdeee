from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd
from bson import ObjectId
from pymongo import ASCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from eventhub.db.mongo import EVENTS
from eventhub.errors import DuplicateSlugError, EventNotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Fields stored as trimmed, non-empty strings
REQUIRED_STRING_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)
LIST_FIELDS = ("agenda", "tags")
EVENT_FIELDS = REQUIRED_STRING_FIELDS + LIST_FIELDS

_TIME_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})(?::[0-9]{2})?$")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
# pandas resolves these against the clock
_RELATIVE_DATES = frozenset({"now", "today", "tomorrow", "yesterday"})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(value: Any, field: str = "id") -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value.strip()):
        return ObjectId(value.strip())
    raise ValidationError(f'Field "{field}" must be a valid identifier.')


def generate_slug(title: str) -> str:
    """
    "  Hack the Planet 48h Hackathon!! " -> "hack-the-planet-48h-hackathon"
    """
    slug = _NON_ALNUM_RE.sub("-", title.lower().strip())
    return slug.strip("-")


def normalize_date(value: str) -> str:
    """
    Parse any date pandas understands and return it as YYYY-MM-DD (UTC).
    Already-normalized dates come back unchanged.
    """
    text = value.strip() if isinstance(value, str) else ""
    if not text or text.lower() in _RELATIVE_DATES:
        raise ValidationError("Invalid date value; unable to parse date.")
    try:
        parsed = pd.to_datetime(text, utc=True)
    except (ValueError, OverflowError) as e:
        raise ValidationError("Invalid date value; unable to parse date.") from e
    if pd.isna(parsed):
        raise ValidationError("Invalid date value; unable to parse date.")
    return parsed.strftime("%Y-%m-%d")


def normalize_time(value: str) -> str:
    """Accept H:MM, HH:MM or HH:MM:SS and return zero-padded 24h HH:MM."""
    m = _TIME_RE.match(value.strip() if isinstance(value, str) else "")
    if not m:
        raise ValidationError("Time must be in HH:MM or HH:MM:SS format.")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError("Time must represent a valid 24-hour clock value.")
    return f"{hours:02d}:{minutes:02d}"


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def validate_and_normalize_event(
    attrs: Mapping[str, Any],
    existing: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Pure validation/normalization step run before every event write.

    `attrs` is merged over `existing` (for updates) and unknown keys are
    dropped. Returns the document to store, including the slug: a new
    slug is derived from the title on create, or on update only when the
    title actually changed, so the public URL survives unrelated edits.

    Raises ValidationError on the first problem found.
    """
    source: Dict[str, Any] = {k: v for k, v in (existing or {}).items() if k in EVENT_FIELDS}
    source.update({k: v for k, v in attrs.items() if k in EVENT_FIELDS})

    doc: Dict[str, Any] = {}
    for field in REQUIRED_STRING_FIELDS:
        value = source.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f'Field "{field}" is required and cannot be empty.')
        doc[field] = value.strip()

    agenda = _string_list(source.get("agenda"))
    if not agenda:
        raise ValidationError("Agenda must contain at least one item.")
    doc["agenda"] = agenda

    # tags behave like a set but keep the caller's order
    tags = list(dict.fromkeys(_string_list(source.get("tags"))))
    if not tags:
        raise ValidationError("Tags must contain at least one tag.")
    doc["tags"] = tags

    doc["date"] = normalize_date(doc["date"])
    doc["time"] = normalize_time(doc["time"])

    old_slug = (existing or {}).get("slug")
    title_changed = existing is None or doc["title"] != (existing.get("title") or "").strip()
    if title_changed or not old_slug:
        slug = generate_slug(doc["title"])
        if not slug:
            raise ValidationError('Field "title" must contain at least one letter or digit.')
        doc["slug"] = slug
    else:
        doc["slug"] = old_slug
    return doc


class EventRepository:
    """Reads and writes Event documents; every write goes through validation."""

    def __init__(self, db: Database):
        self.collection = db[EVENTS]

    def create(self, attrs: Mapping[str, Any]) -> Dict[str, Any]:
        doc = validate_and_normalize_event(attrs)
        now = utcnow()
        doc["created_at"] = now
        doc["updated_at"] = now
        try:
            doc["_id"] = self.collection.insert_one(doc).inserted_id
        except DuplicateKeyError as e:
            raise DuplicateSlugError(doc["slug"]) from e
        logger.info("Created event %s (%s)", doc["slug"], doc["_id"])
        return doc

    def update(self, event_id: Any, attrs: Mapping[str, Any]) -> Dict[str, Any]:
        oid = to_object_id(event_id)
        existing = self.collection.find_one({"_id": oid})
        if existing is None:
            raise EventNotFoundError(str(oid))

        doc = validate_and_normalize_event(attrs, existing=existing)
        doc["updated_at"] = utcnow()
        try:
            self.collection.update_one({"_id": oid}, {"$set": doc})
        except DuplicateKeyError as e:
            raise DuplicateSlugError(doc["slug"]) from e
        if doc["slug"] != existing.get("slug"):
            logger.info("Event %s slug changed %s -> %s", oid, existing.get("slug"), doc["slug"])
        existing.update(doc)
        return existing

    def get(self, event_id: Any) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"_id": to_object_id(event_id)})

    def exists(self, event_id: Any) -> bool:
        return self.collection.find_one({"_id": to_object_id(event_id, "event_id")}, {"_id": 1}) is not None

    def find_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"slug": slug.strip().lower()})

    def list_events(self, limit: int = 50) -> List[Dict[str, Any]]:
        cur = self.collection.find({}).sort([("date", ASCENDING), ("time", ASCENDING)]).limit(limit)
        return list(cur)

    def find_similar_by_slug(self, slug: str, limit: int = 3) -> List[Dict[str, Any]]:
        """Other events sharing at least one tag with the event at `slug`."""
        event = self.find_by_slug(slug)
        if event is None:
            return []
        q = {"_id": {"$ne": event["_id"]}, "tags": {"$in": event.get("tags", [])}}
        return list(self.collection.find(q).sort("date", ASCENDING).limit(limit))
