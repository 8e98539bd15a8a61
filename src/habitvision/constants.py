"""Enumerations shared by models, forms and the analytics engine."""

from __future__ import annotations

from enum import Enum


class HabitCategory(str, Enum):
    """Categories a habit can be filed under."""

    HEALTH = "health"
    PRODUCTIVITY = "productivity"
    WELLNESS = "wellness"
    LEARNING = "learning"
    FINANCIAL = "financial"
    SOCIAL = "social"
    OTHER = "other"


class HabitColor(str, Enum):
    """Color tags used by the dashboard."""

    SUCCESS = "success"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    WARNING = "warning"
    DANGER = "danger"
    ACCENT = "accent"


class Weekday(str, Enum):
    """Days of a Monday-start week, in calendar order."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


# Index matches date.weekday(): Monday == 0
WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)
WEEKDAY_NAMES: tuple[str, ...] = tuple(day.value for day in WEEKDAYS)

__all__ = ["HabitCategory", "HabitColor", "WEEKDAYS", "WEEKDAY_NAMES", "Weekday"]
