from __future__ import annotations

import cli
from eventhub.data.featured_events import FEATURED
from eventhub.models.event import EventRepository


def test_seed_events_is_repeatable(db):
    assert cli.seed_events(db) == len(FEATURED)
    assert cli.seed_events(db) == 0

    ev = EventRepository(db).find_by_slug("jsconf-eu-2026")
    assert ev["date"] == "2026-05-23"
    assert EventRepository(db).find_by_slug("full-stack-fest-2026")["time"] == "09:00"
