from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, jsonify

from eventhub import config
from eventhub.db.mongo import BOOKINGS, EVENTS, get_manager

bp = Blueprint("api_health", __name__)


@bp.get("/health")
def health():
    manager = get_manager()
    db_ok = manager.ping()

    counts = {}
    if db_ok:
        db = manager.get_db()
        counts = {name: db[name].estimated_document_count() for name in (EVENTS, BOOKINGS)}

    return jsonify({
        "status": "ok" if db_ok else "degraded",
        "time_utc": datetime.now(timezone.utc).isoformat(),
        "env": config.FLASK_ENV,
        "config": {
            "mongo_db": config.MONGO_DB,
            "cors_origins": config.CORS_ORIGINS,
        },
        "db": {
            "ping": db_ok,
            "counts": counts,
        },
    }), 200 if db_ok else 503
