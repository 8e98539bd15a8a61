"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, Optional

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ...errors import HabitNotFoundError
from ...logging_config import get_logger
from ...models.habit import Habit, HabitFrequency, HabitLog
from ...services.recurrence import normalize_frequency

logger = get_logger(__name__)

_UPSERT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}

_HABIT_FIELDS = {"name", "description", "category", "color", "active"}


def _detach(session: Session, habit: Habit) -> Habit:
    # Load the weekly pattern before the instance leaves the session.
    list(habit.frequencies)
    session.expunge(habit)
    return habit


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _owned(self, session: Session, habit_id: int, user_id: int) -> Habit:
        habit = session.exec(
            select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
        ).first()
        if habit is None:
            raise HabitNotFoundError(habit_id)
        return habit

    def require(self, habit_id: int, *, user_id: int) -> Habit:
        """Retrieve a habit by ID or raise HabitNotFoundError."""
        with self.session_factory() as session:
            return _detach(session, self._owned(session, habit_id, user_id))

    def list_all(self, *, user_id: int, include_inactive: bool = True) -> list[Habit]:
        """List habits ordered by creation, optionally excluding inactive ones."""
        with self.session_factory() as session:
            statement = (
                select(Habit).where(Habit.user_id == user_id).order_by(Habit.id)  # type: ignore
            )

            if not include_inactive:
                statement = statement.where(Habit.active == True)  # noqa: E712

            rows = list(session.exec(statement).all())
            for row in rows:
                list(row.frequencies)
            session.expunge_all()
            return rows

    def create(self, habit: Habit, frequency: Iterable[str], *, user_id: int) -> Habit:
        """Create a habit together with its weekly pattern."""
        days = normalize_frequency(frequency)
        with self.session_factory() as session:
            habit.user_id = user_id
            habit.frequencies = [HabitFrequency(weekday=day) for day in days]
            session.add(habit)
            session.commit()
            session.refresh(habit)
            logger.info(
                "Habit created",
                extra={"habit_id": habit.id, "user_id": user_id, "frequency": days},
            )
            return _detach(session, habit)

    def update(
        self,
        habit_id: int,
        changes: dict,
        frequency: Optional[Iterable[str]] = None,
        *,
        user_id: int,
    ) -> Habit:
        """Apply field changes and optionally replace the weekly pattern."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            for field, value in changes.items():
                if field not in _HABIT_FIELDS:
                    raise ValueError(f"Field cannot be updated: {field}")
                setattr(habit, field, value)

            if frequency is not None:
                wanted = set(normalize_frequency(frequency))
                kept = [row for row in habit.frequencies if row.weekday in wanted]
                present = {row.weekday for row in kept}
                habit.frequencies = kept + [
                    HabitFrequency(weekday=day)
                    for day in normalize_frequency(wanted - present)
                ]

            session.add(habit)
            session.commit()
            session.refresh(habit)
            logger.info(
                "Habit updated",
                extra={"habit_id": habit_id, "user_id": user_id, "fields": sorted(changes)},
            )
            return _detach(session, habit)

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit; logs and weekly pattern go with it."""
        with self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            session.delete(habit)
            session.commit()
            logger.info("Habit deleted", extra={"habit_id": habit_id, "user_id": user_id})

    # Completion log operations
    def toggle(self, habit_id: int, occurred_on: date, completed: bool, *, user_id: int) -> HabitLog:
        """Set completion for (habit, day) with a single atomic upsert."""
        with self.session_factory() as session:
            self._owned(session, habit_id, user_id)
            insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
            if insert is not None:
                statement = insert(HabitLog).values(
                    habit_id=habit_id, occurred_on=occurred_on, completed=completed
                )
                statement = statement.on_conflict_do_update(
                    index_elements=["habit_id", "occurred_on"],
                    set_={"completed": statement.excluded.completed},
                )
                session.execute(statement)
            else:
                self._insert_or_update(session, habit_id, occurred_on, completed)
            session.commit()

            log = session.exec(
                select(HabitLog)
                .where(HabitLog.habit_id == habit_id)
                .where(HabitLog.occurred_on == occurred_on)
                .execution_options(populate_existing=True)
            ).one()
            session.expunge(log)

        logger.info(
            "Habit completion toggled",
            extra={
                "habit_id": habit_id,
                "user_id": user_id,
                "date": occurred_on.isoformat(),
                "completed": completed,
            },
        )
        return log

    def _insert_or_update(
        self, session: Session, habit_id: int, occurred_on: date, completed: bool
    ) -> None:
        # Generic dialects: rely on the unique constraint and retry as an update.
        try:
            with session.begin_nested():
                session.add(HabitLog(habit_id=habit_id, occurred_on=occurred_on, completed=completed))
        except IntegrityError:
            existing = session.exec(
                select(HabitLog)
                .where(HabitLog.habit_id == habit_id)
                .where(HabitLog.occurred_on == occurred_on)
            ).one()
            existing.completed = completed
            session.add(existing)

    def _user_logs(self, user_id: int):
        return (
            select(HabitLog)
            .join(Habit, Habit.id == HabitLog.habit_id)  # type: ignore[arg-type]
            .where(Habit.user_id == user_id)
        )

    def logs_for_habit(self, habit_id: int, *, user_id: int) -> list[HabitLog]:
        """All logs of a habit, newest first."""
        with self.session_factory() as session:
            self._owned(session, habit_id, user_id)
            statement = (
                select(HabitLog)
                .where(HabitLog.habit_id == habit_id)
                .order_by(HabitLog.occurred_on.desc())  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def logs_on(self, day: date, *, user_id: int, habit_id: Optional[int] = None) -> list[HabitLog]:
        """Logs recorded for a single day."""
        return self.logs_between(day, day, user_id=user_id, habit_id=habit_id)

    def logs_between(
        self,
        start_date: date,
        end_date: date,
        *,
        user_id: int,
        habit_id: Optional[int] = None,
    ) -> list[HabitLog]:
        """Logs within an inclusive date range, newest first."""
        with self.session_factory() as session:
            statement = (
                self._user_logs(user_id)
                .where(HabitLog.occurred_on >= start_date)
                .where(HabitLog.occurred_on <= end_date)
            )
            if habit_id is not None:
                self._owned(session, habit_id, user_id)
                statement = statement.where(HabitLog.habit_id == habit_id)
            statement = statement.order_by(
                HabitLog.occurred_on.desc(), HabitLog.habit_id  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def all_logs(self, *, user_id: int) -> list[HabitLog]:
        """Every log belonging to the user's habits."""
        with self.session_factory() as session:
            rows = list(session.exec(self._user_logs(user_id)).all())
            session.expunge_all()
            return rows
