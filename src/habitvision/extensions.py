"""Database and service wiring for the Flask application."""

from __future__ import annotations

from flask import Flask, current_app

from .clock import make_clock
from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelHabitRepository
from .services.tracker import HabitTracker

EXTENSION_KEY = "habitvision"


def init_db(app: Flask) -> None:
    """Create the engine, schema and habit tracker for ``app``."""

    config: BaseConfig = app.config["HABITVISION_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    tracker = HabitTracker(
        repository=SQLModelHabitRepository(session_factory),
        clock=make_clock(config.TIMEZONE),
        max_lookback_days=config.MAX_STREAK_LOOKBACK_DAYS,
    )
    app.extensions[EXTENSION_KEY] = {
        "engine": engine,
        "session_factory": session_factory,
        "tracker": tracker,
    }


def _state(app: Flask | None = None) -> dict:
    app = app or current_app
    try:
        return app.extensions[EXTENSION_KEY]
    except KeyError:  # pragma: no cover - exercised in integration tests
        raise RuntimeError("Database engine not initialized") from None


def get_engine(app: Flask | None = None):
    """Return the initialized SQLModel engine."""
    return _state(app)["engine"]


def get_session_factory(app: Flask | None = None):
    return _state(app)["session_factory"]


def get_tracker(app: Flask | None = None) -> HabitTracker:
    return _state(app)["tracker"]
