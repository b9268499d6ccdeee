from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from flask import Blueprint, jsonify, request

from eventhub import config
from eventhub.db.mongo import get_db, serialize_document
from eventhub.models.event import EventRepository

bp = Blueprint("api_events", __name__)

logger = logging.getLogger(__name__)


def _events() -> EventRepository:
    return EventRepository(get_db())


def _parse_limit(default: int) -> int:
    try:
        n = int(request.args.get("limit", default))
        return max(1, min(n, 100))
    except (TypeError, ValueError):
        return default


def lookup_event(
    slug: Optional[str],
    repo_factory: Callable[[], EventRepository] = _events,
) -> Tuple[Dict[str, Any], int]:
    """
    Fetch one event by slug and build the (payload, status) pair for it.
    Blank slugs are rejected before the store is touched.
    """
    if not isinstance(slug, str) or not slug.strip():
        return {"message": "A valid event slug must be provided in the URL."}, 400

    normalized = slug.strip().lower()
    try:
        doc = repo_factory().find_by_slug(normalized)
        if doc is None:
            return {"message": f'Event with slug "{normalized}" was not found.'}, 404
        return {"message": "Event fetched successfully.", "event": serialize_document(doc)}, 200
    except Exception as e:
        logger.exception("GET /api/events/%s failed", normalized)
        return {"message": "Failed to fetch event.", "error": str(e)}, 500


@bp.get("/events")
def list_events():
    """
    GET /api/events?limit=50
    Events ordered by date.
    """
    limit = _parse_limit(config.EVENT_LIST_LIMIT)
    rows = [serialize_document(d) for d in _events().list_events(limit=limit)]
    return jsonify({"events": rows, "count": len(rows)})


@bp.get("/events/<slug>")
def get_event(slug: str):
    """
    GET /api/events/hack-the-planet-48h-hackathon
    """
    payload, status = lookup_event(slug)
    return jsonify(payload), status


@bp.get("/events/<slug>/similar")
def similar_events(slug: str):
    """
    GET /api/events/<slug>/similar?limit=3
    Events sharing at least one tag with <slug>.
    """
    limit = _parse_limit(config.SIMILAR_EVENTS_LIMIT)
    rows = [serialize_document(d) for d in _events().find_similar_by_slug(slug, limit=limit)]
    return jsonify({"events": rows, "count": len(rows)})
