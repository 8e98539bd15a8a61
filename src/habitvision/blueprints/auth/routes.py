"""Session authentication routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_session_factory
from ...services import auth
from ..common import (
    current_user_id,
    error_response,
    login_user,
    logout_user,
    parse_body,
)
from . import bp
from .forms import LoginForm, RegisterForm


@bp.post("/register")
def register():
    """Create an account and log it in."""

    form = parse_body(RegisterForm)
    user = auth.create_user(
        username=form.username,
        password=form.password,
        full_name=form.full_name,
        email=form.email,
        bio=form.bio,
        session_factory=get_session_factory(),
    )
    login_user(user.id)
    return jsonify(user.public_dict()), 201


@bp.post("/login")
def login():
    form = parse_body(LoginForm)
    user = auth.authenticate(
        username=form.username,
        password=form.password,
        session_factory=get_session_factory(),
    )
    login_user(user.id)
    return jsonify(user.public_dict())


@bp.post("/logout")
def logout():
    if current_user_id() is None:
        return error_response("Not authenticated", 401)
    logout_user()
    return jsonify({"message": "Logged out successfully"})


@bp.get("/user")
def session_user():
    """Return the logged-in user, or 401."""

    user_id = current_user_id()
    if user_id is None:
        return error_response("Not authenticated", 401)
    user = auth.get_user(user_id, get_session_factory())
    return jsonify(user.public_dict())
