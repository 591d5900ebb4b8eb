# tests/test_details_editor.py

from __future__ import annotations

import pytest

from tasklist.services.details_editor import DetailsEditor, EditorClosedError
from tasklist.services.task_store import TaskStore

from .fakes import InMemoryStorage


@pytest.fixture()
def editor(abc_store: TaskStore) -> DetailsEditor:
    return DetailsEditor(abc_store)


def test_cancel_leaves_store_untouched(abc_store: TaskStore, storage: InMemoryStorage, editor: DetailsEditor) -> None:
    task = abc_store.tasks[0]
    writes = len(storage.writes)

    editor.open(task)
    editor.edit("priority", "High")
    editor.cancel()

    assert abc_store.get(task.id).priority == "Medium"
    assert len(storage.writes) == writes
    assert not editor.is_open


def test_save_commits_buffer_by_id(abc_store: TaskStore, editor: DetailsEditor) -> None:
    task = abc_store.tasks[1]

    editor.open(task)
    editor.edit("priority", "High")
    assert editor.save() is True

    saved = abc_store.tasks[1]
    assert saved.id == task.id
    assert saved.priority == "High"
    assert not editor.is_open


def test_buffer_is_detached_from_store(abc_store: TaskStore, editor: DetailsEditor) -> None:
    task = abc_store.tasks[0]

    editor.open(task)
    editor.add_subtask()
    editor.buffer.labels.append("Work")
    editor.add_comment("hello")

    stored = abc_store.get(task.id)
    assert stored.subtasks == []
    assert stored.labels == []
    assert stored.comments == []


def test_edit_does_not_validate_values(abc_store: TaskStore, editor: DetailsEditor) -> None:
    editor.open(abc_store.tasks[0])
    editor.edit("text", "")
    editor.edit("due_date", "not a date")
    editor.save()

    task = abc_store.tasks[0]
    assert task.text == ""
    assert task.due_date == "not a date"


def test_edit_rejects_id_and_unknown_fields(abc_store: TaskStore, editor: DetailsEditor) -> None:
    editor.open(abc_store.tasks[0])
    with pytest.raises(ValueError):
        editor.edit("id", "other")
    with pytest.raises(ValueError):
        editor.edit("colour", "blue")


def test_subtask_editing(abc_store: TaskStore, editor: DetailsEditor) -> None:
    editor.open(abc_store.tasks[0])
    first = editor.add_subtask()
    second = editor.add_subtask()
    assert first.id != second.id
    assert first.text == "" and first.completed is False

    editor.update_subtask(0, "text", "step one")
    editor.update_subtask(1, "completed", True)
    editor.delete_subtask(0)
    editor.save()

    subtasks = abc_store.tasks[0].subtasks
    assert len(subtasks) == 1
    assert subtasks[0].id == second.id
    assert subtasks[0].completed is True


def test_subtask_index_out_of_range(abc_store: TaskStore, editor: DetailsEditor) -> None:
    editor.open(abc_store.tasks[0])
    with pytest.raises(IndexError):
        editor.update_subtask(0, "text", "x")
    with pytest.raises(IndexError):
        editor.delete_subtask(3)


def test_comments_are_trimmed_and_blank_ignored(abc_store: TaskStore, editor: DetailsEditor) -> None:
    editor.open(abc_store.tasks[0])
    assert editor.add_comment("   ") is False
    assert editor.add_comment("  looks good  ") is True
    editor.save()

    assert abc_store.tasks[0].comments == ["looks good"]


def test_closed_editor_refuses_operations(editor: DetailsEditor) -> None:
    with pytest.raises(EditorClosedError):
        editor.edit("text", "x")
    with pytest.raises(EditorClosedError):
        editor.save()
    with pytest.raises(EditorClosedError):
        editor.cancel()


def test_save_after_task_deleted_is_noop(abc_store: TaskStore, editor: DetailsEditor) -> None:
    task = abc_store.tasks[0]
    editor.open(task)
    abc_store.remove(task.id)

    assert editor.save() is False
    assert [t.text for t in abc_store.tasks] == ["b", "c"]
