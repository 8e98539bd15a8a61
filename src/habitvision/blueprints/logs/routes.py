"""Completion log routes."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import get_tracker
from ..common import BadRequest, login_required, parse_iso_date
from . import bp


def _optional_habit_id() -> int | None:
    raw = request.args.get("habit_id", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise BadRequest("Invalid habit ID") from None


@bp.get("/date/<day>")
@login_required
def logs_for_date(day: str, user_id: int):
    """Logs recorded on a single calendar day."""

    logs = get_tracker().logs_on(
        parse_iso_date(day), user_id=user_id, habit_id=_optional_habit_id()
    )
    return jsonify([log.to_dict() for log in logs])


@bp.get("/range")
@login_required
def logs_for_range(user_id: int):
    """Logs between start_date and end_date, both inclusive."""

    start_raw = request.args.get("start_date") or request.args.get("startDate")
    end_raw = request.args.get("end_date") or request.args.get("endDate")
    if not start_raw or not end_raw:
        raise BadRequest("Both start_date and end_date are required")

    start = parse_iso_date(start_raw, field="start_date")
    end = parse_iso_date(end_raw, field="end_date")
    if start > end:
        raise BadRequest("start_date must not be after end_date")

    logs = get_tracker().logs_between(start, end, user_id=user_id, habit_id=_optional_habit_id())
    return jsonify([log.to_dict() for log in logs])
