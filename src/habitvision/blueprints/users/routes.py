"""User profile routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_session_factory
from ...services import auth
from ..auth.forms import ProfileForm
from ..common import login_required, parse_body
from . import bp


@bp.get("/current")
@login_required
def current_user(user_id: int):
    user = auth.get_user(user_id, get_session_factory())
    return jsonify(user.public_dict())


@bp.put("/current")
@login_required
def update_current_user(user_id: int):
    """Update profile fields (and optionally the password) of the session user."""

    form = parse_body(ProfileForm)
    user = auth.update_user(
        user_id=user_id, changes=form.changes(), session_factory=get_session_factory()
    )
    return jsonify(user.public_dict())
