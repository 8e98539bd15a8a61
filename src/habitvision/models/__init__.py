"""SQLModel table exports."""

from .habit import Habit, HabitFrequency, HabitLog
from .user import User

__all__ = [
    "Habit",
    "HabitFrequency",
    "HabitLog",
    "User",
]
