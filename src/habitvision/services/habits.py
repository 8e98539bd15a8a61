"""Habit analytics: streaks, completion rates and dashboard stats.

Every number here is re-derived from the completion log on each call; nothing
is cached or maintained incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Protocol, Sequence

from .recurrence import format_frequency, is_due, normalize_frequency

DEFAULT_MAX_LOOKBACK_DAYS = 3660
ONE_DAY = timedelta(days=1)


class HabitLike(Protocol):
    id: int | None

    @property
    def frequency(self) -> set[str]:  # pragma: no cover - interface
        ...


class LogLike(Protocol):
    habit_id: int
    occurred_on: date
    completed: bool


def _completion_by_day(habit_id: int | None, logs: Iterable[LogLike]) -> dict[date, bool]:
    return {log.occurred_on: bool(log.completed) for log in logs if log.habit_id == habit_id}


def current_streak(
    habit: HabitLike,
    logs: Iterable[LogLike],
    *,
    today: date | None = None,
    max_lookback_days: int = DEFAULT_MAX_LOOKBACK_DAYS,
) -> int:
    """Count consecutive completed due days walking backward from yesterday.

    Today is excluded because it may still be in progress. Days the habit is
    not due on are skipped; the first due day without a completed log ends
    the streak.
    """

    frequency = habit.frequency
    if not frequency:
        return 0
    by_day = _completion_by_day(habit.id, logs)
    if not by_day:
        return 0

    today = today or date.today()
    # No log exists before the earliest one, so the walk can stop there.
    floor = max(min(by_day), today - timedelta(days=max_lookback_days))

    streak = 0
    cursor = today - ONE_DAY
    while cursor >= floor:
        if not is_due(frequency, cursor):
            cursor -= ONE_DAY
            continue
        if not by_day.get(cursor, False):
            break
        streak += 1
        cursor -= ONE_DAY
    return streak


def longest_streak(habit: HabitLike, logs: Iterable[LogLike]) -> int:
    """Return the longest run of completed due days across the log history."""

    frequency = habit.frequency
    by_day = _completion_by_day(habit.id, logs)
    if not frequency or not by_day:
        return 0

    longest = 0
    run = 0
    cursor, end = min(by_day), max(by_day)
    while cursor <= end:
        if is_due(frequency, cursor):
            if by_day.get(cursor, False):
                run += 1
                longest = max(longest, run)
            else:
                run = 0
        cursor += ONE_DAY
    return longest


def compute_streaks(
    habit: HabitLike,
    logs: Iterable[LogLike],
    *,
    today: date | None = None,
    max_lookback_days: int = DEFAULT_MAX_LOOKBACK_DAYS,
) -> tuple[int, int]:
    """Return (current_streak, longest_streak) for a habit."""

    logs = list(logs)
    current = current_streak(habit, logs, today=today, max_lookback_days=max_lookback_days)
    return current, longest_streak(habit, logs)


def _percent(completed: int, total: int) -> int:
    if total == 0:
        return 0
    # Integer round-half-up of 100 * completed / total
    return (200 * completed + total) // (2 * total)


def completion_rate(habit_id: int | None, logs: Iterable[LogLike]) -> int:
    """Percentage (0-100) of a habit's logged days marked completed.

    The denominator is the number of log rows, not the number of due days.
    """

    habit_logs = [log for log in logs if log.habit_id == habit_id]
    completed = sum(1 for log in habit_logs if log.completed)
    return _percent(completed, len(habit_logs))


def overall_completion_rate(logs: Iterable[LogLike]) -> int:
    """Completion rate across every log row regardless of habit."""

    logs = list(logs)
    return _percent(sum(1 for log in logs if log.completed), len(logs))


@dataclass(slots=True)
class Stats:
    """Dashboard aggregates derived from habits and their logs."""

    current_streak: int = 0
    completion_rate: int = 0
    active_habits: int = 0
    longest_streak: int = 0
    total_completed: int = 0
    total_skipped: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "currentStreak": self.current_streak,
            "completionRate": self.completion_rate,
            "activeHabits": self.active_habits,
            "longestStreak": self.longest_streak,
            "totalCompleted": self.total_completed,
            "totalSkipped": self.total_skipped,
        }


def compute_stats(
    habits: Sequence,
    logs: Sequence[LogLike],
    *,
    today: date | None = None,
    max_lookback_days: int = DEFAULT_MAX_LOOKBACK_DAYS,
) -> Stats:
    """Aggregate stats for a set of habits.

    ``current_streak`` is the best current streak among active habits and
    ``longest_streak`` the best historical run among all habits.
    """

    logs_by_habit: dict[int | None, list[LogLike]] = {}
    for log in logs:
        logs_by_habit.setdefault(log.habit_id, []).append(log)

    best_current = 0
    best_longest = 0
    for habit in habits:
        habit_logs = logs_by_habit.get(habit.id, [])
        current, longest = compute_streaks(
            habit, habit_logs, today=today, max_lookback_days=max_lookback_days
        )
        if habit.active:
            best_current = max(best_current, current)
        best_longest = max(best_longest, longest)

    total_completed = sum(1 for log in logs if log.completed)
    return Stats(
        current_streak=best_current,
        completion_rate=overall_completion_rate(logs),
        active_habits=sum(1 for habit in habits if habit.active),
        longest_streak=best_longest,
        total_completed=total_completed,
        total_skipped=len(logs) - total_completed,
    )


def habit_view(
    habit,
    logs: Iterable[LogLike],
    *,
    today: date | None = None,
    max_lookback_days: int = DEFAULT_MAX_LOOKBACK_DAYS,
) -> dict:
    """Serialize a habit with its derived streak, rate and completion history."""

    habit_logs = sorted(
        (log for log in logs if log.habit_id == habit.id),
        key=lambda log: log.occurred_on,
        reverse=True,
    )
    frequency = normalize_frequency(habit.frequency)
    return {
        "id": habit.id,
        "user_id": habit.user_id,
        "name": habit.name,
        "description": habit.description,
        "category": habit.category,
        "color": habit.color,
        "active": habit.active,
        "created_at": habit.created_at.isoformat(),
        "frequency": frequency,
        "frequency_label": format_frequency(frequency),
        "streak": current_streak(
            habit, habit_logs, today=today, max_lookback_days=max_lookback_days
        ),
        "completion_rate": completion_rate(habit.id, habit_logs),
        "completions": [
            {"date": log.occurred_on.isoformat(), "completed": log.completed}
            for log in habit_logs
        ],
    }


__all__ = [
    "Stats",
    "completion_rate",
    "compute_stats",
    "compute_streaks",
    "current_streak",
    "habit_view",
    "longest_streak",
    "overall_completion_rate",
]
