"""Habit request payload definitions."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator

from ...constants import HabitCategory, HabitColor, Weekday
from ..common import strict_iso_date


def _unique_days(value: list[Weekday]) -> list[Weekday]:
    seen: list[Weekday] = []
    for day in value:
        if day in seen:
            raise ValueError(f"Duplicate weekday: {day.value}")
        seen.append(day)
    return seen


_NON_NULLABLE = ("name", "category", "color", "active")


class HabitForm(BaseModel):
    """Payload for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(min_length=1, max_length=80, description="Short label for the habit")
    description: Optional[str] = Field(default=None, max_length=255)
    category: HabitCategory = Field(default=HabitCategory.OTHER)
    color: HabitColor = Field(default=HabitColor.PRIMARY)
    active: StrictBool = Field(default=True)
    frequency: list[Weekday] = Field(description="Weekdays on which the habit is due")

    @field_validator("frequency")
    @classmethod
    def validate_frequency(cls, value: list[Weekday]) -> list[Weekday]:
        return _unique_days(value)

    def habit_fields(self) -> dict:
        return {
            "name": self.name,
            "description": self.description or None,
            "category": self.category.value,
            "color": self.color.value,
            "active": self.active,
        }

    def weekday_names(self) -> list[str]:
        return [day.value for day in self.frequency]


class HabitUpdateForm(BaseModel):
    """Partial payload for editing a habit; omitted fields stay untouched."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    description: Optional[str] = Field(default=None, max_length=255)
    category: Optional[HabitCategory] = None
    color: Optional[HabitColor] = None
    active: Optional[StrictBool] = None
    frequency: Optional[list[Weekday]] = None

    @field_validator("frequency")
    @classmethod
    def validate_frequency(cls, value: Optional[list[Weekday]]) -> Optional[list[Weekday]]:
        if value is None:
            return value
        return _unique_days(value)

    @model_validator(mode="after")
    def reject_nulls(self) -> "HabitUpdateForm":
        for field in _NON_NULLABLE:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        changes = self.model_dump(exclude_unset=True, exclude={"frequency"}, mode="json")
        if "description" in changes:
            changes["description"] = changes["description"] or None
        return changes

    def weekday_names(self) -> Optional[list[str]]:
        if self.frequency is None:
            return None
        return [day.value for day in self.frequency]


class ToggleForm(BaseModel):
    """Payload for setting completion of a habit on a day."""

    day: date = Field(alias="date")
    completed: StrictBool

    @field_validator("day", mode="before")
    @classmethod
    def parse_calendar_date(cls, value):
        if isinstance(value, str):
            try:
                return strict_iso_date(value)
            except ValueError:
                raise ValueError("Invalid date format. Use YYYY-MM-DD") from None
        if isinstance(value, date):
            return value
        raise ValueError("Invalid date format. Use YYYY-MM-DD")


__all__ = ["HabitForm", "HabitUpdateForm", "ToggleForm"]
