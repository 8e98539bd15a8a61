"""Service module exports."""

from . import auth, habits, recurrence, seed, tracker

__all__ = [
    "auth",
    "habits",
    "recurrence",
    "seed",
    "tracker",
]
