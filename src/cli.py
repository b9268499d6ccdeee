# src/cli.py
from __future__ import annotations

import os
import sys
import json
import logging
import argparse
import traceback

# Ensure our package is importable regardless of CWD
sys.path.insert(0, os.path.dirname(__file__))

# ---------------------------
# Commands
# ---------------------------

def _manager():
    from eventhub import config
    from eventhub.db.mongo import ConnectionManager, ensure_indexes
    return ConnectionManager(
        config.MONGODB_URI,
        config.MONGO_DB,
        on_connect=ensure_indexes,
        timeout_ms=config.MONGO_TIMEOUT_MS,
    )


def cmd_serve(port: int, host: str, debug: bool):
    from eventhub import create_app
    app = create_app()
    app.run(host=host, port=port, debug=debug)


def cmd_db_ping() -> None:
    ok = _manager().ping()
    print("mongo ping:", "ok" if ok else "failed")
    if not ok:
        raise SystemExit(2)


def cmd_db_ensure_indexes() -> None:
    from eventhub.db.mongo import EVENTS, BOOKINGS
    db = _manager().get_db()  # indexes are created on connect
    for name in (EVENTS, BOOKINGS):
        print(name, sorted(db[name].index_information()))


def cmd_events_list(limit: int):
    from eventhub.db.mongo import serialize_document
    from eventhub.models.event import EventRepository
    rows = EventRepository(_manager().get_db()).list_events(limit=limit)
    print(json.dumps({"events": [serialize_document(r) for r in rows]}, indent=2))


def seed_events(db) -> int:
    """Insert the featured events whose slug is not taken yet. Returns inserted count."""
    from eventhub.data.featured_events import FEATURED
    from eventhub.models.event import EventRepository, generate_slug
    repo = EventRepository(db)
    n = 0
    for attrs in FEATURED:
        if repo.find_by_slug(generate_slug(attrs["title"])) is not None:
            continue
        repo.create(attrs)
        n += 1
    return n


def cmd_events_seed():
    n = seed_events(_manager().get_db())
    print(f"Inserted {n} events")


def cmd_book(slug: str, email: str):
    from eventhub.db.mongo import serialize_document
    from eventhub.models.booking import BookingRepository
    from eventhub.models.event import EventRepository

    db = _manager().get_db()
    events = EventRepository(db)
    event = events.find_by_slug(slug)
    if event is None:
        raise SystemExit(f'no event with slug "{slug}"')
    booking = BookingRepository(db, events).create({"event_id": event["_id"], "email": email})
    print(json.dumps(serialize_document(booking), indent=2))


# ---------------------------
# Parser / main
# ---------------------------

def main(argv=None):
    p = argparse.ArgumentParser(description="Dev Events CLI")
    p.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    sub = p.add_subparsers(dest="cmd", required=True)

    # serve
    sp = sub.add_parser("serve", help="Run Flask server")
    sp.add_argument("--port", type=int, default=int(os.getenv("PORT", "8080")))
    sp.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    sp.add_argument("--debug", action="store_true")
    sp.set_defaults(func=lambda a: cmd_serve(a.port, a.host, a.debug))

    # db
    sc = sub.add_parser("db", help="Database utilities")
    sc_sub = sc.add_subparsers(dest="dbcmd", required=True)
    scp = sc_sub.add_parser("ping", help="Ping MongoDB")
    scp.set_defaults(func=lambda a: cmd_db_ping())
    sci = sc_sub.add_parser("ensure-indexes", help="Create indexes and list them")
    sci.set_defaults(func=lambda a: cmd_db_ensure_indexes())

    # events
    ev = sub.add_parser("events", help="Event catalogue")
    ev_sub = ev.add_subparsers(dest="evcmd", required=True)
    evl = ev_sub.add_parser("list", help="Print stored events")
    evl.add_argument("--limit", type=int, default=50)
    evl.set_defaults(func=lambda a: cmd_events_list(a.limit))
    evs = ev_sub.add_parser("seed", help="Insert the featured events")
    evs.set_defaults(func=lambda a: cmd_events_seed())

    # book
    bk = sub.add_parser("book", help="Book a spot on an event")
    bk.add_argument("slug")
    bk.add_argument("email")
    bk.set_defaults(func=lambda a: cmd_book(a.slug, a.email))

    args = p.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except SystemExit:
        raise
    except Exception as e:
        # Surface trace on CLI errors
        print("ERROR:", e)
        traceback.print_exc()
        raise SystemExit(1)


if __name__ == "__main__":
    main()
