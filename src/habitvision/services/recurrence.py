"""Weekly recurrence evaluation for habits."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from ..constants import WEEKDAY_NAMES

WEEKDAY_SET = frozenset(WEEKDAY_NAMES)


def weekday_name(day: date) -> str:
    """Return the lowercase weekday name of ``day`` (Monday-start week)."""

    return WEEKDAY_NAMES[day.weekday()]


def is_due(frequency: Iterable[str], day: date) -> bool:
    """Return True when a habit with ``frequency`` is due on ``day``.

    Habit age is not considered; any date is accepted.
    """

    return weekday_name(day) in set(frequency)


def normalize_frequency(frequency: Iterable[str]) -> list[str]:
    """Deduplicate weekday names and return them in calendar order."""

    wanted = {str(day).strip().lower() for day in frequency}
    unknown = wanted - WEEKDAY_SET
    if unknown:
        raise ValueError(f"Unknown weekday(s): {', '.join(sorted(unknown))}")
    return [name for name in WEEKDAY_NAMES if name in wanted]


def format_frequency(frequency: Iterable[str]) -> str:
    """Human readable label for a weekly pattern."""

    days = normalize_frequency(frequency)
    if len(days) == 7:
        return "Every day"
    if not days:
        return "Never"
    if days == list(WEEKDAY_NAMES[:5]):
        return "Weekdays"
    if days == list(WEEKDAY_NAMES[5:]):
        return "Weekends"
    return ", ".join(day[:3].capitalize() for day in days)


__all__ = ["format_frequency", "is_due", "normalize_frequency", "weekday_name"]
