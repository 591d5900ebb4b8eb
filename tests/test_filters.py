# tests/test_filters.py

from __future__ import annotations

from tasklist.models.task import Task
from tasklist.services.filters import FilterMode, filter_tasks


def make_tasks() -> list[Task]:
    return [
        Task(id="1", text="a"),
        Task(id="2", text="b", completed=True),
        Task(id="3", text="c"),
    ]


def test_active_keeps_incomplete_in_order() -> None:
    tasks = make_tasks()
    assert [t.id for t in filter_tasks(tasks, FilterMode.ACTIVE)] == ["1", "3"]


def test_completed_only() -> None:
    assert [t.id for t in filter_tasks(make_tasks(), FilterMode.COMPLETED)] == ["2"]


def test_all_is_identity_without_sharing_the_list() -> None:
    tasks = make_tasks()
    out = filter_tasks(tasks, FilterMode.ALL)
    assert out == tasks
    assert out is not tasks


def test_filter_does_not_mutate_input() -> None:
    tasks = make_tasks()
    filter_tasks(tasks, FilterMode.COMPLETED)
    assert [t.id for t in tasks] == ["1", "2", "3"]


def test_parse_filter_mode() -> None:
    assert FilterMode.parse("Active") is FilterMode.ACTIVE
    assert FilterMode.parse(" completed ") is FilterMode.COMPLETED
    assert FilterMode.parse("bogus") is FilterMode.ALL
    assert FilterMode.parse(None) is FilterMode.ALL
