"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..constants import HabitCategory, HabitColor

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class Habit(SQLModel, table=True):
    """A user-defined recurring activity with a weekly due-day pattern."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    category: str = Field(default=HabitCategory.OTHER.value, nullable=False, max_length=16)
    color: str = Field(default=HabitColor.PRIMARY.value, nullable=False, max_length=16)
    active: bool = Field(default=True, nullable=False)
    created_at: date = Field(default_factory=date.today, nullable=False)

    frequencies: list["HabitFrequency"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitFrequency",
            back_populates="habit",
            cascade="all, delete-orphan",
            lazy="selectin",
        ),
    )
    logs: list["HabitLog"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitLog",
            back_populates="habit",
            cascade="all, delete-orphan",
        ),
    )

    user: Optional["User"] = Relationship(
        sa_relationship=relationship("User", back_populates="habits")
    )

    @property
    def frequency(self) -> set[str]:
        """Weekday names on which the habit is due."""

        return {row.weekday for row in self.frequencies}


class HabitFrequency(SQLModel, table=True):
    """One weekday on which a habit is due."""

    __tablename__: ClassVar[str] = "habit_frequency"

    habit_id: int = Field(foreign_key="habit.id", primary_key=True)
    weekday: str = Field(primary_key=True, max_length=9)

    habit: "Habit" = Relationship(
        back_populates="frequencies",
        sa_relationship=relationship("Habit", back_populates="frequencies"),
    )


class HabitLog(SQLModel, table=True):
    """Completion fact for a habit on a calendar day."""

    __tablename__: ClassVar[str] = "habit_log"
    __table_args__ = (UniqueConstraint("habit_id", "occurred_on", name="uq_habit_log_habit_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    occurred_on: date = Field(nullable=False, index=True)
    completed: bool = Field(default=True, nullable=False)

    habit: "Habit" = Relationship(
        back_populates="logs",
        sa_relationship=relationship("Habit", back_populates="logs"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "habit_id": self.habit_id,
            "date": self.occurred_on.isoformat(),
            "completed": self.completed,
        }
