"""Helpers shared by the JSON blueprints."""

from __future__ import annotations

from datetime import date, datetime
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import Flask, jsonify, request, session
from pydantic import BaseModel, ValidationError

from ..errors import DuplicateUsernameError, InvalidCredentialsError, NotFoundError
from ..logging_config import get_logger

logger = get_logger(__name__)

SESSION_USER_KEY = "user_id"
DATE_FORMAT = "%Y-%m-%d"

F = TypeVar("F", bound=Callable[..., Any])
M = TypeVar("M", bound=BaseModel)


class BadRequest(ValueError):
    """Malformed input detected outside of a pydantic model."""


def error_response(message: str, status: int, **extra):
    payload = {"error": message}
    payload.update(extra)
    return jsonify(payload), status


def validation_details(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by top-level field name."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else "__root__"
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured


def parse_body(model: type[M]) -> M:
    """Validate the JSON request body against ``model``."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise BadRequest("Request body must be a JSON object")
    return model.model_validate(payload)


def strict_iso_date(value: str) -> date:
    """Parse a zero-padded YYYY-MM-DD string; anything else raises ValueError."""

    parsed = datetime.strptime(value, DATE_FORMAT).date()
    if parsed.isoformat() != value:
        raise ValueError(f"Not a YYYY-MM-DD date: {value!r}")
    return parsed


def parse_iso_date(value: str | None, *, field: str = "date") -> date:
    if not value:
        raise BadRequest(f"{field} is required")
    try:
        return strict_iso_date(value)
    except ValueError:
        raise BadRequest("Invalid date format. Use YYYY-MM-DD") from None


def current_user_id() -> int | None:
    return session.get(SESSION_USER_KEY)


def login_user(user_id: int) -> None:
    session.clear()
    session[SESSION_USER_KEY] = user_id
    session.permanent = True


def logout_user() -> None:
    session.clear()


def login_required(view: F) -> F:
    """Reject requests without a session user; pass ``user_id`` to the view."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user_id = current_user_id()
        if user_id is None:
            return error_response("Not authenticated", 401)
        return view(*args, user_id=user_id, **kwargs)

    return wrapper  # type: ignore[return-value]


def register_error_handlers(app: Flask) -> None:
    """Translate service exceptions into JSON responses."""

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return error_response("Invalid request data", 400, details=validation_details(exc))

    @app.errorhandler(BadRequest)
    def _bad_request(exc: BadRequest):
        return error_response(str(exc), 400)

    @app.errorhandler(NotFoundError)
    def _not_found(exc: NotFoundError):
        return error_response(f"{exc.entity} not found", 404)

    @app.errorhandler(DuplicateUsernameError)
    def _duplicate_username(exc: DuplicateUsernameError):
        return error_response(str(exc), 400)

    @app.errorhandler(InvalidCredentialsError)
    def _invalid_credentials(exc: InvalidCredentialsError):
        return error_response(str(exc), 401)

    @app.errorhandler(404)
    def _unknown_route(exc):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def _method_not_allowed(exc):
        return error_response("Method not allowed", 405)

    @app.errorhandler(500)
    def _server_error(exc):
        logger.error("Unhandled error", exc_info=getattr(exc, "original_exception", None))
        return error_response("Internal server error", 500)
