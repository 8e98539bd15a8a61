"""Pytest configuration and shared fixtures for HabitVision tests.

This module provides database fixtures, test data factories, and a Flask
client for exercising the analytics engine, repositories and routes without
touching the real application database.
"""

from __future__ import annotations

import tempfile
from datetime import date, timedelta
from pathlib import Path
from typing import Iterable

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitvision import create_app
from habitvision.clock import fixed_clock
from habitvision.extensions import get_tracker
from habitvision.infra.database import create_session_factory
from habitvision.infra.repositories import SQLModelHabitRepository
from habitvision.models import Habit, HabitFrequency, HabitLog, User
from habitvision.services.tracker import HabitTracker

# Wednesday
TODAY = date(2024, 6, 12)
EVERY_DAY = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def days_ago(n: int, *, today: date = TODAY) -> date:
    return today - timedelta(days=n)


def make_habit(frequency: Iterable[str], *, habit_id: int = 1, active: bool = True) -> Habit:
    """Build an unsaved habit with the given weekly pattern."""

    habit = Habit(id=habit_id, name=f"Habit {habit_id}", active=active, created_at=TODAY)
    habit.frequencies = [HabitFrequency(habit_id=habit_id, weekday=day) for day in frequency]
    return habit


def make_log(day: date, completed: bool = True, *, habit_id: int = 1) -> HabitLog:
    return HabitLog(habit_id=habit_id, occurred_on=day, completed=completed)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Database session for arranging data directly in a test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the application wires up."""
    return create_session_factory(db_engine)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user(db_session) -> User:
    """Create a default user for scoping data."""

    u = User(username="tester", password_hash="dummy-hash")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def other_user(db_session) -> User:
    u = User(username="someone-else", password_hash="dummy-hash")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def tracker(habit_repo) -> HabitTracker:
    """Habit tracker whose "today" is pinned to TODAY."""
    return HabitTracker(repository=habit_repo, clock=fixed_clock(TODAY))


@pytest.fixture
def habit_factory(habit_repo, user):
    """Factory for creating persisted habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Exercise",
        frequency: Iterable[str] = EVERY_DAY,
        *,
        active: bool = True,
        owner: User | None = None,
    ) -> Habit:
        owner = owner or user
        habit = Habit(name=name, active=active, created_at=TODAY)
        return habit_repo.create(habit, frequency, user_id=owner.id)

    return _create_habit


@pytest.fixture
def log_factory(db_session):
    """Factory inserting log rows directly, bypassing the toggle upsert."""

    def _create_log(habit: Habit, day: date, completed: bool = True) -> HabitLog:
        log = HabitLog(habit_id=habit.id, occurred_on=day, completed=completed)
        db_session.add(log)
        db_session.commit()
        db_session.refresh(log)
        return log

    return _create_log


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "habitvision.db"
    monkeypatch.setenv("HABITVISION_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HABITVISION_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.delenv("HABITVISION_TIMEZONE", raising=False)
    app = create_app("testing")
    get_tracker(app).clock = fixed_clock(TODAY)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_client(client):
    """Client with a registered, logged-in session user."""

    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "password": "s3cret-pass", "full_name": "Alice"},
    )
    assert response.status_code == 201
    return client
