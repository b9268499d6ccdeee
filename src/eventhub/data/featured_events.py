"""
Featured developer events used to seed an empty database.
Dates and times are given loosely on purpose; they go through the same
normalization as any other event write.

Edit freely. `python src/cli.py events seed` skips titles already present.
"""
from __future__ import annotations

from typing import Any

FEATURED: list[dict[str, Any]] = [
    {
        "title": "JSConf EU 2026",
        "image": "/images/event1.png",
        "description": "Two days of JavaScript talks from the people building the language and its tools.",
        "overview": "The community JavaScript conference returns to Berlin with talks, workshops and a hallway track.",
        "venue": "Arena Berlin",
        "location": "Berlin, Germany",
        "date": "May 23, 2026",
        "time": "09:00",
        "mode": "offline",
        "audience": "JavaScript developers",
        "agenda": ["09:00 Registration", "10:00 Keynote", "13:00 Workshops", "17:00 Closing"],
        "organizer": "JSConf EU team",
        "tags": ["javascript", "web", "conference"],
    },
    {
        "title": "Next.js Worldwide Summit 2026",
        "image": "/images/event2.png",
        "description": "Everything new in Next.js, from routing and caching to deployment.",
        "overview": "Talks and live demos on the App Router, server components and edge rendering.",
        "venue": "Moscone West",
        "location": "San Francisco, CA, USA",
        "date": "2026-04-16",
        "time": "9:30",
        "mode": "hybrid",
        "audience": "React and Next.js developers",
        "agenda": ["Keynote", "Routing deep dive", "Caching in practice", "Q&A"],
        "organizer": "Vercel",
        "tags": ["nextjs", "react", "web"],
    },
    {
        "title": "Hack the Planet 48h Hackathon",
        "image": "/images/event3.png",
        "description": "A 48 hour remote hackathon for building tools that help the planet.",
        "overview": "Form a team, pick a climate challenge and ship a working prototype in one weekend.",
        "venue": "Online",
        "location": "Remote / Global",
        "date": "2026-03-06",
        "time": "18:00",
        "mode": "online",
        "audience": "Developers, designers and students",
        "agenda": ["Kickoff", "Team formation", "Hacking", "Demos", "Awards"],
        "organizer": "Hack the Planet collective",
        "tags": ["hackathon", "climate", "open-source"],
    },
    {
        "title": "React Summit Amsterdam 2026",
        "image": "/images/event4.png",
        "description": "The biggest React conference in the world, back in Amsterdam.",
        "overview": "Talks on React internals, design systems and performance, plus evening meetups.",
        "venue": "De Kromhouthal",
        "location": "Amsterdam, Netherlands",
        "date": "June 11, 2026",
        "time": "09:00",
        "mode": "hybrid",
        "audience": "Frontend engineers",
        "agenda": ["Opening", "Main track", "Lightning talks", "Afterparty"],
        "organizer": "GitNation",
        "tags": ["react", "javascript", "conference"],
    },
    {
        "title": "Google Cloud Next '26 Developer Day",
        "image": "/images/event5.png",
        "description": "Hands-on sessions with Google Cloud products and AI tooling.",
        "overview": "A developer-focused day of labs covering Cloud Run, Gemini APIs and data tooling.",
        "venue": "Mandalay Bay",
        "location": "Las Vegas, NV, USA",
        "date": "2026-05-05",
        "time": "10:00",
        "mode": "offline",
        "audience": "Cloud developers",
        "agenda": ["Keynote", "Hands-on labs", "Office hours"],
        "organizer": "Google Cloud",
        "tags": ["cloud", "ai", "devops"],
    },
    {
        "title": "Open Source Summit Europe 2026",
        "image": "/images/event6.png",
        "description": "Where open source developers and maintainers meet in Europe.",
        "overview": "Sessions on Linux, cloud native, security and open source community health.",
        "venue": "Austria Center Vienna",
        "location": "Vienna, Austria",
        "date": "September 14, 2026",
        "time": "08:30",
        "mode": "offline",
        "audience": "Open source contributors",
        "agenda": ["Keynotes", "Breakouts", "Maintainer summit", "Sponsor showcase"],
        "organizer": "The Linux Foundation",
        "tags": ["open-source", "linux", "cloud"],
    },
    {
        "title": "Full-Stack Fest 2026",
        "image": "/images/event-full.png",
        "description": "Three days covering the whole web stack, from databases to design.",
        "overview": "Backend, frontend and infrastructure talks in one single-track conference.",
        "venue": "Palau de Congressos",
        "location": "Barcelona, Spain",
        "date": "2026-10-07",
        "time": "09:00:00",
        "mode": "offline",
        "audience": "Full-stack developers",
        "agenda": ["Backend day", "Frontend day", "Infrastructure day"],
        "organizer": "Full-Stack Fest",
        "tags": ["web", "javascript", "devops"],
    },
]
