from __future__ import annotations

import threading

import mongomock
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from eventhub import config, create_app
from eventhub.db.mongo import ConnectionManager, ensure_indexes
from eventhub.errors import ConnectivityError


class _GatedFactory:
    """Client factory that blocks until released, counting calls."""

    def __init__(self, fail_first: bool = False):
        self.calls = 0
        self.entered = threading.Event()
        self.release = threading.Event()
        self.fail_first = fail_first

    def __call__(self, uri, **kwargs):
        self.calls += 1
        self.entered.set()
        self.release.wait(timeout=5)
        if self.fail_first and self.calls == 1:
            raise ServerSelectionTimeoutError("no servers")
        return mongomock.MongoClient()


def test_missing_uri_fails_fast():
    with pytest.raises(RuntimeError, match="MONGODB_URI"):
        ConnectionManager(None, "eventhub_test")


def test_create_app_without_uri_fails(monkeypatch):
    monkeypatch.setattr(config, "MONGODB_URI", "", raising=True)
    with pytest.raises(RuntimeError, match="MONGODB_URI"):
        create_app(testing=True)


def test_connect_is_memoized():
    factory = _GatedFactory()
    factory.release.set()
    mgr = ConnectionManager("mongodb://db", "eventhub_test", client_factory=factory)
    assert mgr.connect() is mgr.connect()
    assert factory.calls == 1


def test_concurrent_connects_share_one_attempt():
    factory = _GatedFactory()
    mgr = ConnectionManager("mongodb://db", "eventhub_test", client_factory=factory)
    results = []

    def worker():
        results.append(mgr.connect())

    first = threading.Thread(target=worker)
    first.start()
    assert factory.entered.wait(timeout=5)
    second = threading.Thread(target=worker)
    second.start()

    factory.release.set()
    first.join(timeout=5)
    second.join(timeout=5)

    assert factory.calls == 1
    assert len(results) == 2
    assert results[0] is results[1]


def test_failed_attempt_is_cleared_and_retried():
    factory = _GatedFactory(fail_first=True)
    factory.release.set()
    mgr = ConnectionManager("mongodb://db", "eventhub_test", client_factory=factory)

    with pytest.raises(ConnectivityError):
        mgr.connect()
    client = mgr.connect()
    assert factory.calls == 2
    assert mgr.connect() is client


def test_failed_ping_raises_connectivity_error():
    class _Down:
        def __init__(self):
            self.closed = False
            self.admin = self

        def command(self, name):
            raise ServerSelectionTimeoutError("no servers")

        def close(self):
            self.closed = True

    down = _Down()
    mgr = ConnectionManager("mongodb://db", "eventhub_test", client_factory=lambda uri, **kw: down)
    with pytest.raises(ConnectivityError):
        mgr.connect()
    assert down.closed
    assert mgr.ping() is False


def test_indexes_created_on_connect():
    client = mongomock.MongoClient()
    mgr = ConnectionManager(
        "mongodb://db", "eventhub_test",
        client_factory=lambda uri, **kw: client,
        on_connect=ensure_indexes,
    )
    info = mgr.get_collection("events").index_information()
    assert info["slug_unique"]["unique"] is True
