"""Habit tracking use cases wired to a repository and a clock."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ..clock import Clock
from ..domain.repositories.habit import HabitRepository
from ..models.habit import Habit, HabitLog
from . import habits as analytics


@dataclass
class HabitTracker:
    """Entry point the HTTP layer and CLI use for every habit operation.

    Each call takes the acting user's id explicitly; there is no ambient
    "current user".
    """

    repository: HabitRepository
    clock: Clock = field(default=date.today)
    max_lookback_days: int = analytics.DEFAULT_MAX_LOOKBACK_DAYS

    def today(self) -> date:
        return self.clock()

    def _view(self, habit: Habit, logs: Iterable[HabitLog]) -> dict:
        return analytics.habit_view(
            habit, logs, today=self.today(), max_lookback_days=self.max_lookback_days
        )

    # Habits
    def create_habit(self, *, user_id: int, frequency: Iterable[str], **fields) -> dict:
        habit = Habit(created_at=self.today(), **fields)
        habit = self.repository.create(habit, frequency, user_id=user_id)
        return self._view(habit, [])

    def list_habits(self, *, user_id: int, include_inactive: bool = True) -> list[dict]:
        habits = self.repository.list_all(user_id=user_id, include_inactive=include_inactive)
        logs = self.repository.all_logs(user_id=user_id)
        return [self._view(habit, logs) for habit in habits]

    def get_habit(self, habit_id: int, *, user_id: int) -> dict:
        habit = self.repository.require(habit_id, user_id=user_id)
        return self._view(habit, self.repository.logs_for_habit(habit_id, user_id=user_id))

    def update_habit(
        self,
        habit_id: int,
        *,
        user_id: int,
        changes: dict,
        frequency: Optional[Iterable[str]] = None,
    ) -> dict:
        self.repository.update(habit_id, changes, frequency, user_id=user_id)
        return self.get_habit(habit_id, user_id=user_id)

    def delete_habit(self, habit_id: int, *, user_id: int) -> None:
        self.repository.delete(habit_id, user_id=user_id)

    # Completion log
    def toggle(self, habit_id: int, day: date, completed: bool, *, user_id: int) -> HabitLog:
        return self.repository.toggle(habit_id, day, completed, user_id=user_id)

    def logs_for_habit(self, habit_id: int, *, user_id: int) -> list[HabitLog]:
        return self.repository.logs_for_habit(habit_id, user_id=user_id)

    def logs_on(self, day: date, *, user_id: int, habit_id: Optional[int] = None) -> list[HabitLog]:
        return self.repository.logs_on(day, user_id=user_id, habit_id=habit_id)

    def logs_between(
        self,
        start_date: date,
        end_date: date,
        *,
        user_id: int,
        habit_id: Optional[int] = None,
    ) -> list[HabitLog]:
        if start_date > end_date:
            raise ValueError("start_date must not be after end_date")
        return self.repository.logs_between(start_date, end_date, user_id=user_id, habit_id=habit_id)

    # Analytics
    def current_streak(self, habit_id: int, *, user_id: int) -> int:
        habit = self.repository.require(habit_id, user_id=user_id)
        return analytics.current_streak(
            habit,
            self.repository.logs_for_habit(habit_id, user_id=user_id),
            today=self.today(),
            max_lookback_days=self.max_lookback_days,
        )

    def longest_streak(self, habit_id: int, *, user_id: int) -> int:
        habit = self.repository.require(habit_id, user_id=user_id)
        return analytics.longest_streak(
            habit, self.repository.logs_for_habit(habit_id, user_id=user_id)
        )

    def completion_rate(self, habit_id: int, *, user_id: int) -> int:
        logs = self.repository.logs_for_habit(habit_id, user_id=user_id)
        return analytics.completion_rate(habit_id, logs)

    def stats(self, *, user_id: int) -> analytics.Stats:
        return analytics.compute_stats(
            self.repository.list_all(user_id=user_id),
            self.repository.all_logs(user_id=user_id),
            today=self.today(),
            max_lookback_days=self.max_lookback_days,
        )


__all__ = ["HabitTracker"]
