from __future__ import annotations

from typing import Callable, Optional

from flask import Flask
from flask_cors import CORS
from pymongo import MongoClient

from eventhub import config


def create_app(testing: bool = False, client_factory: Optional[Callable[..., MongoClient]] = None) -> Flask:
    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["TESTING"] = testing
    app.logger.setLevel(config.LOG_LEVEL)
    CORS(app, origins=config.CORS_ORIGINS)

    # One connection manager per process, built here and shared through
    # app.extensions. Raises right away when MONGODB_URI is missing.
    from eventhub.db.mongo import EXTENSION_KEY, ConnectionManager, ensure_indexes

    app.extensions[EXTENSION_KEY] = ConnectionManager(
        config.MONGODB_URI,
        config.MONGO_DB,
        client_factory=client_factory or MongoClient,
        on_connect=ensure_indexes,
        timeout_ms=config.MONGO_TIMEOUT_MS,
    )

    from eventhub.api import register_api
    register_api(app)

    from eventhub.web import register_web
    register_web(app)

    return app
