"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitVision"
    DB_FILENAME = "habitvision.db"
    DEFAULT_STREAK_LOOKBACK_DAYS = 3660
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITVISION_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITVISION_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("HABITVISION_DATABASE_URL", self._build_sqlite_url())
        # Empty means "use the local time of the running process".
        self.TIMEZONE = os.getenv("HABITVISION_TIMEZONE", "").strip() or None
        self.MAX_STREAK_LOOKBACK_DAYS = _env_int(
            "HABITVISION_MAX_STREAK_LOOKBACK_DAYS", self.DEFAULT_STREAK_LOOKBACK_DAYS
        )
        if self.MAX_STREAK_LOOKBACK_DAYS < 1:
            raise ValueError("HABITVISION_MAX_STREAK_LOOKBACK_DAYS must be positive.")
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITVISION_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITVISION_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}

    def flask_settings(self) -> dict[str, Any]:
        """Return the subset of settings Flask reads from ``app.config``."""

        return {
            "SECRET_KEY": self.SECRET_KEY,
            "DEBUG": self.DEBUG,
            "TESTING": self.TESTING,
            "SESSION_COOKIE_HTTPONLY": True,
            "SESSION_COOKIE_SAMESITE": "Lax",
            "SESSION_COOKIE_SECURE": not self.DEV_MODE,
        }


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite and the Flask test client."""

    TESTING = True


class ProductionConfig(BaseConfig):
    """Production configuration; requires an explicit secret key."""

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = False
        if self.SECRET_KEY == "replace-me":
            raise ValueError("HABITVISION_SECRET_KEY must be set in production.")


CONFIGS: dict[str, type[BaseConfig]] = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": ProductionConfig,
}


def load_config(name: str | None = None) -> BaseConfig:
    """Instantiate the configuration registered under ``name``."""

    key = (name or os.getenv("HABITVISION_ENV", "development")).lower()
    try:
        config_cls = CONFIGS[key]
    except KeyError as exc:
        raise ValueError(f"Unknown configuration: {key}") from exc
    return config_cls()
