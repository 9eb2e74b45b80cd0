# src/auto_reload/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is validated at import time; invalid intervals fail when the manager is built.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "AUTO_RELOAD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv() -> None:
    """Load .env from the working directory; existing env vars win."""
    load_dotenv(find_dotenv(usecwd=True), override=False)


_load_dotenv()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Reload backoff ----
    min_interval_seconds: int
    max_interval_seconds: int
    usability_policy: str

    # ---- Connectivity ----
    poll_interval_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "auto-reload").strip() or "auto-reload"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/auto_reload"))

        min_interval_seconds = _env_int(_k("MIN_INTERVAL_SECONDS"), 1)
        max_interval_seconds = _env_int(_k("MAX_INTERVAL_SECONDS"), 1800)
        usability_policy = _env(_k("USABILITY_POLICY"), "first_match").strip().lower() or "first_match"

        poll_interval_seconds = _env_float(_k("POLL_INTERVAL_SECONDS"), 2.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            min_interval_seconds=min_interval_seconds,
            max_interval_seconds=max_interval_seconds,
            usability_policy=usability_policy,
            poll_interval_seconds=poll_interval_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
