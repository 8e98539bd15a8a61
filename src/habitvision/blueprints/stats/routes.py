"""Dashboard statistics routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_tracker
from ..common import login_required
from . import bp


@bp.get("")
@login_required
def stats(user_id: int):
    """Aggregate streaks, completion rate and totals for the session user."""

    return jsonify(get_tracker().stats(user_id=user_id).to_dict())
