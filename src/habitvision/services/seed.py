"""Demo data for a fresh account."""

from __future__ import annotations

import random
from datetime import timedelta

from ..logging_config import get_logger
from .tracker import HabitTracker

logger = get_logger(__name__)

DEMO_HABITS: list[dict] = [
    {
        "name": "Morning Exercise",
        "description": "30 minutes of jogging or yoga every morning",
        "category": "health",
        "color": "success",
        "frequency": ["monday", "tuesday", "wednesday", "thursday", "friday"],
    },
    {
        "name": "Read 30 Minutes",
        "description": "Read a book for at least 30 minutes daily",
        "category": "learning",
        "color": "primary",
        "frequency": ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"],
    },
    {
        "name": "Meditate",
        "description": "10 minutes of mindfulness meditation",
        "category": "wellness",
        "color": "secondary",
        "frequency": ["monday", "wednesday", "thursday", "friday", "sunday"],
    },
    {
        "name": "Drink Water",
        "description": "Drink 8 glasses of water throughout the day",
        "category": "health",
        "color": "warning",
        "frequency": ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday"],
    },
]

DEMO_HISTORY_DAYS = 7
DEMO_COMPLETION_ODDS = 0.8


def seed_demo_habits(
    tracker: HabitTracker,
    *,
    user_id: int,
    rng: random.Random | None = None,
) -> list[dict]:
    """Create the demo habits for ``user_id`` with a week of random history.

    Does nothing when the user already has habits. Returns the created habit
    views.
    """

    if tracker.repository.list_all(user_id=user_id):
        logger.info("Seed skipped; user already has habits", extra={"user_id": user_id})
        return []

    rng = rng or random.Random()
    today = tracker.today()
    created: list[dict] = []
    for demo in DEMO_HABITS:
        fields = dict(demo)
        frequency = fields.pop("frequency")
        view = tracker.create_habit(user_id=user_id, frequency=frequency, **fields)
        for offset in range(DEMO_HISTORY_DAYS):
            day = today - timedelta(days=offset)
            tracker.toggle(view["id"], day, rng.random() < DEMO_COMPLETION_ODDS, user_id=user_id)
        created.append(tracker.get_habit(view["id"], user_id=user_id))

    logger.info("Demo habits seeded", extra={"user_id": user_id, "count": len(created)})
    return created


__all__ = ["DEMO_HABITS", "seed_demo_habits"]
