# tests/conftest.py

from __future__ import annotations

import os

import pytest

from tasklist.services.task_store import TaskStore

from .fakes import InMemoryStorage

# UI tests need a Qt platform that works without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture()
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def store(storage: InMemoryStorage) -> TaskStore:
    """Empty, loaded store backed by the in-memory fake."""
    s = TaskStore(storage)
    s.load()
    return s


@pytest.fixture()
def abc_store(store: TaskStore) -> TaskStore:
    for text in ("a", "b", "c"):
        store.add(text)
    return store


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
