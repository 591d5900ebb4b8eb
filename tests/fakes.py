# tests/fakes.py

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field


@dataclass
class InMemoryStorage:
    """
    KeyValueStorage fake.

    - Keeps values in a dict
    - Records every write for assertions
    """

    items: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.items[key] = value


class FailingStorage(InMemoryStorage):
    """Storage whose writes always fail like a locked SQLite file."""

    def set_item(self, key: str, value: str) -> None:
        raise sqlite3.OperationalError("database is locked")
