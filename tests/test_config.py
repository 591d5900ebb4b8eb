# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("DATA_DIR", "DB_PATH", "STORAGE_KEY", "DARK_MODE", "DEFAULT_FILTER", "APP_NAME"):
        monkeypatch.delenv(f"TASKLIST_{name}", raising=False)
    monkeypatch.setenv("APPDATA", str(tmp_path))

    s = Settings.from_env()
    assert s.data_dir == tmp_path / "TaskList"
    assert s.db_path == tmp_path / "TaskList" / "tasks.sqlite3"
    assert s.storage_key == "tasks"
    assert s.dark_mode is False
    assert s.default_filter == "all"


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKLIST_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("TASKLIST_DB_PATH", str(tmp_path / "other.db"))
    monkeypatch.setenv("TASKLIST_DARK_MODE", "yes")
    monkeypatch.setenv("TASKLIST_DEFAULT_FILTER", "active")

    s = Settings.from_env()
    assert s.data_dir == tmp_path / "data"
    assert s.db_path == tmp_path / "other.db"
    assert s.dark_mode is True
    assert s.default_filter == "active"
