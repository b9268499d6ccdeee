import os
import pytest
import mongomock

# Never talk to a real MongoDB from the test suite
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB", "eventhub_test")
os.environ.setdefault("FLASK_ENV", "testing")

from eventhub import create_app  # noqa: E402
from eventhub.db.mongo import EXTENSION_KEY  # noqa: E402


@pytest.fixture()
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture()
def app(mongo_client):
    return create_app(testing=True, client_factory=lambda uri, **kwargs: mongo_client)


@pytest.fixture()
def app_client(app):
    return app.test_client()


@pytest.fixture()
def db(app):
    # goes through ConnectionManager.connect, so indexes exist
    return app.extensions[EXTENSION_KEY].get_db()


@pytest.fixture()
def make_event_attrs():
    def _make(**overrides):
        attrs = {
            "title": "  Hack the Planet 48h Hackathon!! ",
            "description": "A weekend of building.",
            "overview": "Teams ship climate tools in 48 hours.",
            "image": "/images/event3.png",
            "venue": "Online",
            "location": "Remote / Global",
            "date": "2026-03-06",
            "time": "18:00",
            "mode": "online",
            "audience": "Developers",
            "agenda": ["Kickoff", "Hacking", "Demos"],
            "organizer": "Hack the Planet collective",
            "tags": ["hackathon", "climate"],
        }
        attrs.update(overrides)
        return attrs

    return _make
