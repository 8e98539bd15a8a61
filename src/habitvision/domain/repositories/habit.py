"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol

from ...models.habit import Habit, HabitLog


class HabitRepository(Protocol):
    """Repository for habits and their completion log, scoped per user."""

    def require(self, habit_id: int, *, user_id: int) -> Habit:
        """Retrieve a habit by ID or raise HabitNotFoundError."""
        ...

    def list_all(self, *, user_id: int, include_inactive: bool = True) -> list[Habit]:
        """List habits, optionally excluding inactive ones."""
        ...

    def create(self, habit: Habit, frequency: Iterable[str], *, user_id: int) -> Habit:
        """Create a habit together with its weekly pattern."""
        ...

    def update(
        self,
        habit_id: int,
        changes: dict,
        frequency: Optional[Iterable[str]] = None,
        *,
        user_id: int,
    ) -> Habit:
        """Apply field changes and optionally replace the weekly pattern."""
        ...

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit with its logs and weekly pattern."""
        ...

    # Completion log operations
    def toggle(self, habit_id: int, occurred_on: date, completed: bool, *, user_id: int) -> HabitLog:
        """Set completion for (habit, day), inserting or updating the single log row."""
        ...

    def logs_for_habit(self, habit_id: int, *, user_id: int) -> list[HabitLog]:
        """All logs of a habit, newest first."""
        ...

    def logs_on(self, day: date, *, user_id: int, habit_id: Optional[int] = None) -> list[HabitLog]:
        """Logs recorded for a single day."""
        ...

    def logs_between(
        self,
        start_date: date,
        end_date: date,
        *,
        user_id: int,
        habit_id: Optional[int] = None,
    ) -> list[HabitLog]:
        """Logs within an inclusive date range, newest first."""
        ...

    def all_logs(self, *, user_id: int) -> list[HabitLog]:
        """Every log belonging to the user's habits."""
        ...
