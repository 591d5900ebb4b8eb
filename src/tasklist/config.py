# src/tasklist/config.py

"""Settings loaded from environment variables (+ optional .env).

All variables use the ``TASKLIST_`` prefix, e.g. ``TASKLIST_DB_PATH``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def default_data_dir() -> Path:
    return Path(os.getenv("APPDATA") or Path.home()) / "TaskList"


@dataclass(frozen=True)
class Settings:
    app_name: str
    log_level: str

    data_dir: Path
    db_path: Path
    storage_key: str

    dark_mode: bool
    default_filter: str

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DATA_DIR"), default_data_dir())
        return Settings(
            app_name=_env(_k("APP_NAME"), "Task List"),
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=data_dir,
            db_path=_env_path(_k("DB_PATH"), data_dir / "tasks.sqlite3"),
            storage_key=_env(_k("STORAGE_KEY"), "tasks") or "tasks",
            dark_mode=_env_bool(_k("DARK_MODE"), False),
            default_filter=_env(_k("DEFAULT_FILTER"), "all"),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
