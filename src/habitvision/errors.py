"""Exceptions raised by HabitVision services and repositories."""

from __future__ import annotations


class HabitVisionError(Exception):
    """Base class for application errors."""


class NotFoundError(HabitVisionError, LookupError):
    """Requested entity does not exist for the calling user."""

    entity = "Resource"

    def __init__(self, identifier: object | None = None) -> None:
        self.identifier = identifier
        message = f"{self.entity} not found"
        if identifier is not None:
            message = f"{self.entity} {identifier} not found"
        super().__init__(message)


class HabitNotFoundError(NotFoundError):
    entity = "Habit"


class UserNotFoundError(NotFoundError):
    entity = "User"


class DuplicateUsernameError(HabitVisionError, ValueError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("Username already exists")


class InvalidCredentialsError(HabitVisionError, ValueError):
    """Raised when a username/password pair does not match."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


__all__ = [
    "DuplicateUsernameError",
    "HabitNotFoundError",
    "HabitVisionError",
    "InvalidCredentialsError",
    "NotFoundError",
    "UserNotFoundError",
]
