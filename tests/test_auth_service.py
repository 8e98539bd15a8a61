"""Tests for password hashing and user management services."""

from __future__ import annotations

import pytest

from habitvision.errors import DuplicateUsernameError, InvalidCredentialsError, UserNotFoundError
from habitvision.services import auth


def test_hash_and_verify_password():
    hashed = auth.hash_password("correct horse")

    assert hashed != "correct horse"
    assert auth.verify_password(hashed, "correct horse")
    assert not auth.verify_password(hashed, "battery staple")
    assert not auth.verify_password("not-a-hash", "correct horse")


def test_empty_password_rejected():
    with pytest.raises(ValueError):
        auth.hash_password("")


def test_create_and_authenticate(session_factory):
    user = auth.create_user(
        username="  erin ", password="pw", full_name="Erin", session_factory=session_factory
    )
    assert user.username == "erin"
    assert user.last_login is None

    logged_in = auth.authenticate(username="erin", password="pw", session_factory=session_factory)
    assert logged_in.id == user.id
    assert logged_in.last_login is not None


def test_duplicate_username(session_factory):
    auth.create_user(username="erin", password="pw", session_factory=session_factory)
    with pytest.raises(DuplicateUsernameError):
        auth.create_user(username="erin", password="other", session_factory=session_factory)


@pytest.mark.parametrize(("username", "password"), [("erin", "bad"), ("ghost", "pw"), ("", "pw")])
def test_authenticate_failures(session_factory, username, password):
    auth.create_user(username="erin", password="pw", session_factory=session_factory)
    with pytest.raises(InvalidCredentialsError):
        auth.authenticate(username=username, password=password, session_factory=session_factory)


def test_get_user_missing(session_factory):
    with pytest.raises(UserNotFoundError):
        auth.get_user(404, session_factory)
    assert auth.get_user_by_username("ghost", session_factory) is None


def test_update_user(session_factory):
    user = auth.create_user(username="erin", password="pw", session_factory=session_factory)

    updated = auth.update_user(
        user_id=user.id,
        changes={"bio": "hello", "password": "new"},
        session_factory=session_factory,
    )

    assert updated.bio == "hello"
    assert auth.verify_password(updated.password_hash, "new")
    with pytest.raises(ValueError):
        auth.update_user(
            user_id=user.id, changes={"username": "x"}, session_factory=session_factory
        )
    with pytest.raises(UserNotFoundError):
        auth.update_user(user_id=999, changes={}, session_factory=session_factory)
