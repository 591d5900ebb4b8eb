# tests/test_models.py

from __future__ import annotations

from tasklist.models.task import Subtask, Task, new_id


def test_new_id_strictly_increases() -> None:
    ids = [int(new_id()) for _ in range(200)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 200


def test_to_dict_uses_persisted_layout() -> None:
    task = Task(
        id="1",
        text="Buy milk",
        due_date="2025-01-31",
        labels=["Shopping"],
        subtasks=[Subtask(id="2", text="oat", completed=True)],
        comments=["soon"],
    )

    assert task.to_dict() == {
        "id": "1",
        "text": "Buy milk",
        "completed": False,
        "dueDate": "2025-01-31",
        "details": "",
        "priority": "Medium",
        "labels": ["Shopping"],
        "subtasks": [{"id": "2", "text": "oat", "completed": True}],
        "comments": ["soon"],
    }


def test_from_dict_restores_subtasks() -> None:
    task = Task.from_dict(
        {
            "id": "1",
            "text": "t",
            "dueDate": None,
            "priority": "Low",
            "subtasks": [{"id": "s", "text": "x"}],
        }
    )
    assert task.priority == "Low"
    assert task.subtasks == [Subtask(id="s", text="x", completed=False)]


def test_from_dict_null_text_becomes_empty() -> None:
    task = Task.from_dict({"id": "1", "text": None, "subtasks": [{"id": "s", "text": None}]})
    assert task.text == ""
    assert task.subtasks[0].text == ""
