from __future__ import annotations

import logging
import threading
from datetime import datetime
from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional

from bson import ObjectId
from flask import current_app
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from eventhub.errors import ConnectivityError

logger = logging.getLogger(__name__)

EXTENSION_KEY = "eventhub.mongo"

EVENTS = "events"
BOOKINGS = "bookings"


class ConnectionManager:
    """
    Owns the process-wide MongoClient.

    The client is opened lazily on the first `connect()` and cached for the
    rest of the process. Callers arriving while an attempt is in flight
    wait on that attempt instead of opening a second client. A failed
    attempt is forgotten so the next call starts over.
    """

    def __init__(
        self,
        uri: Optional[str],
        db_name: str,
        client_factory: Callable[..., MongoClient] = MongoClient,
        on_connect: Optional[Callable[[Database], None]] = None,
        timeout_ms: int = 5000,
    ):
        if not uri:
            raise RuntimeError(
                "MONGODB_URI is not set. Define it in the environment or in .env"
            )
        self.uri = uri
        self.db_name = db_name
        self.timeout_ms = timeout_ms
        self._client_factory = client_factory
        self._on_connect = on_connect
        self._client: Optional[MongoClient] = None
        self._pending: Optional[Future] = None
        # guards the two fields above only, never held while connecting
        self._state = threading.Lock()

    def _open(self) -> MongoClient:
        kwargs: Dict[str, Any] = {
            "serverSelectionTimeoutMS": self.timeout_ms,
            "server_api": ServerApi("1"),
        }
        try:
            client = self._client_factory(self.uri, **kwargs)
        except PyMongoError as e:
            raise ConnectivityError(f"Could not create MongoDB client: {e}") from e
        try:
            client.admin.command("ping")
            if self._on_connect is not None:
                self._on_connect(client[self.db_name])
        except PyMongoError as e:
            client.close()
            raise ConnectivityError(f"Could not connect to MongoDB: {e}") from e
        return client

    def connect(self) -> MongoClient:
        client = self._client
        if client is not None:
            return client

        with self._state:
            if self._client is not None:
                return self._client
            pending = self._pending
            owner = pending is None
            if owner:
                pending = self._pending = Future()

        if not owner:
            return pending.result()

        try:
            client = self._open()
        except Exception as e:
            with self._state:
                self._pending = None
            logger.error("Mongo connect failed: %s", e)
            pending.set_exception(e)
            raise

        with self._state:
            self._client = client
            self._pending = None
        pending.set_result(client)
        logger.info("Connected to MongoDB database %s", self.db_name)
        return client

    def get_db(self) -> Database:
        return self.connect()[self.db_name]

    def get_collection(self, name: str):
        return self.get_db()[name]

    def ping(self) -> bool:
        try:
            self.connect().admin.command("ping")
            return True
        except (ConnectivityError, PyMongoError) as e:
            logger.error("Mongo ping failed: %s", e)
            return False

    def close(self) -> None:
        with self._state:
            client, self._client = self._client, None
        if client is not None:
            client.close()


def ensure_indexes(db: Database) -> None:
    """
    Safe to call repeatedly; runs after every fresh connection.
    The unique slug index is what rejects colliding event slugs.
    """
    idx = {
        EVENTS: [([("slug", ASCENDING)], {"unique": True, "name": "slug_unique"})],
        BOOKINGS: [([("event_id", ASCENDING)], {"name": "event_id"})],
    }
    for coll, specs in idx.items():
        for keys, opts in specs:
            try:
                db[coll].create_index(keys, **opts)
            except PyMongoError as e:
                logger.warning("index create failed for %s: %s", coll, e)


def get_manager() -> ConnectionManager:
    return current_app.extensions[EXTENSION_KEY]


def get_db() -> Database:
    return get_manager().get_db()


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """
    JSON-ready copy of a stored document: `_id` becomes a string `id`,
    ObjectId references become strings, datetimes become ISO strings.
    """
    out: Dict[str, Any] = {}
    for key, value in doc.items():
        if key == "_id":
            out["id"] = str(value)
        elif isinstance(value, ObjectId):
            out[key] = str(value)
        elif isinstance(value, datetime):
            out[key] = value.isoformat()
        else:
            out[key] = value
    return out
