from __future__ import annotations

import importlib

from flask import Blueprint, jsonify

from eventhub.errors import EventHubError

API_MODULES = [
    "health",
    "events",
    "bookings",
]


def register_api(app):
    api_bp = Blueprint("api", __name__, url_prefix="/api")

    @api_bp.errorhandler(EventHubError)
    def _eventhub_error(e: EventHubError):
        return jsonify({"message": e.message}), e.status

    for name in API_MODULES:
        mod_qualname = f"{__name__}.{name}"
        mod = importlib.import_module(mod_qualname)

        bp = getattr(mod, "bp", None)
        if bp is None:
            app.logger.warning("Module %s has no `bp`; skipping", mod_qualname)
            continue
        api_bp.register_blueprint(bp)

    app.register_blueprint(api_bp)
