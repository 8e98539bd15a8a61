"""Single source of "today" for the analytics engine."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

Clock = Callable[[], date]


def make_clock(timezone_name: str | None = None) -> Clock:
    """Return a callable yielding the current calendar date.

    With no timezone the process-local date is used; otherwise the date is
    taken in the named IANA zone.
    """

    if not timezone_name:
        return date.today

    try:
        zone = ZoneInfo(timezone_name)
    except ZoneInfoNotFoundError as exc:
        raise ValueError(f"Unknown timezone: {timezone_name}") from exc

    def _today() -> date:
        return datetime.now(zone).date()

    return _today


def fixed_clock(day: date) -> Clock:
    """Clock pinned to ``day``; used by tests and the seed command."""

    return lambda: day


__all__ = ["Clock", "fixed_clock", "make_clock"]
