"""Authentication and user management services."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import Session, select

from ..errors import DuplicateUsernameError, InvalidCredentialsError, UserNotFoundError
from ..logging_config import get_logger
from ..models.user import User

SessionFactory = Callable[[], Session]

logger = get_logger(__name__)

_hasher = PasswordHasher()
_PROFILE_FIELDS = {"full_name", "email", "bio"}


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("Password cannot be empty")
    return _hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerifyMismatchError, InvalidHash, VerificationError):
        return False


def get_user(user_id: int, session_factory: SessionFactory) -> User:
    """Fetch a user by id or raise UserNotFoundError."""
    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        session.expunge(user)
        return user


def get_user_by_username(username: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by username."""
    username = username.strip()
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user:
            session.expunge(user)
        return user


def create_user(
    *,
    username: str,
    password: str,
    full_name: str | None = None,
    email: str | None = None,
    bio: str | None = None,
    session_factory: SessionFactory,
) -> User:
    """Create a new user with hashed password."""

    username = username.strip()
    if not username:
        raise ValueError("Username cannot be empty")
    password_hash = hash_password(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            raise DuplicateUsernameError(username)
        user = User(
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            email=email,
            bio=bio,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
    logger.info("User registered", extra={"user_id": user.id, "username": username})
    return user


def authenticate(
    *,
    username: str,
    password: str,
    session_factory: SessionFactory,
) -> User:
    """Validate credentials and return the user; raise InvalidCredentialsError otherwise."""

    username = username.strip()
    if not username:
        raise InvalidCredentialsError()
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None or not verify_password(user.password_hash, password):
            logger.warning("Failed login attempt", extra={"username": username})
            raise InvalidCredentialsError()

        user.last_login = datetime.now(timezone.utc)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
    logger.info("User logged in", extra={"user_id": user.id})
    return user


def update_user(*, user_id: int, changes: dict, session_factory: SessionFactory) -> User:
    """Update profile fields and, when given, the password."""

    with session_factory() as session:
        user = session.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        for field, value in changes.items():
            if field == "password":
                user.password_hash = hash_password(value)
            elif field in _PROFILE_FIELDS:
                setattr(user, field, value)
            else:
                raise ValueError(f"Field cannot be updated: {field}")
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user


__all__ = [
    "authenticate",
    "create_user",
    "get_user",
    "get_user_by_username",
    "hash_password",
    "update_user",
    "verify_password",
]
