"""Habit routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_tracker
from ..common import login_required, parse_body
from . import bp
from .forms import HabitForm, HabitUpdateForm, ToggleForm


@bp.get("")
@login_required
def list_habits(user_id: int):
    """List habits with their current streak and completion rate."""

    return jsonify(get_tracker().list_habits(user_id=user_id))


@bp.get("/<int:habit_id>")
@login_required
def get_habit(habit_id: int, user_id: int):
    return jsonify(get_tracker().get_habit(habit_id, user_id=user_id))


@bp.post("")
@login_required
def create_habit(user_id: int):
    """Create a habit with its weekly pattern."""

    form = parse_body(HabitForm)
    habit = get_tracker().create_habit(
        user_id=user_id, frequency=form.weekday_names(), **form.habit_fields()
    )
    return jsonify(habit), 201


@bp.put("/<int:habit_id>")
@login_required
def update_habit(habit_id: int, user_id: int):
    form = parse_body(HabitUpdateForm)
    habit = get_tracker().update_habit(
        habit_id,
        user_id=user_id,
        changes=form.changes(),
        frequency=form.weekday_names(),
    )
    return jsonify(habit)


@bp.delete("/<int:habit_id>")
@login_required
def delete_habit(habit_id: int, user_id: int):
    get_tracker().delete_habit(habit_id, user_id=user_id)
    return "", 204


@bp.get("/<int:habit_id>/logs")
@login_required
def habit_logs(habit_id: int, user_id: int):
    """Return the habit's completion log, newest first."""

    logs = get_tracker().logs_for_habit(habit_id, user_id=user_id)
    return jsonify([log.to_dict() for log in logs])


@bp.post("/<int:habit_id>/toggle")
@login_required
def toggle_habit(habit_id: int, user_id: int):
    """Set completion for a day and return the refreshed habit view."""

    form = parse_body(ToggleForm)
    tracker = get_tracker()
    tracker.toggle(habit_id, form.day, form.completed, user_id=user_id)
    return jsonify(tracker.get_habit(habit_id, user_id=user_id))
