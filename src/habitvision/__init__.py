"""HabitVision habit tracking application package."""

from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify

from .config import BaseConfig, DevConfig, TestConfig, load_config

SESSION_LIFETIME = timedelta(days=30)


def create_app(config: str | BaseConfig | None = None) -> Flask:
    """Application factory.

    ``config`` is either a configuration name ("development", "testing",
    "production") or an already-built configuration object.
    """

    from . import blueprints, cli
    from .blueprints.common import register_error_handlers
    from .extensions import init_db
    from .logging_config import setup_logging

    if not isinstance(config, BaseConfig):
        config = load_config(config)

    app = Flask(__name__)
    app.config.update(config.flask_settings())
    app.config["HABITVISION_CONFIG"] = config
    app.config["PERMANENT_SESSION_LIFETIME"] = SESSION_LIFETIME
    app.json.sort_keys = False

    setup_logging(config)
    init_db(app)
    register_error_handlers(app)

    for module in (
        blueprints.auth,
        blueprints.users,
        blueprints.habits,
        blueprints.logs,
        blueprints.stats,
    ):
        app.register_blueprint(module.bp)

    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok"})

    cli.init_app(app)
    return app


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
