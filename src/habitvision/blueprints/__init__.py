"""Blueprint exports."""

from . import auth, habits, logs, stats, users

__all__ = [
    "auth",
    "habits",
    "logs",
    "stats",
    "users",
]
