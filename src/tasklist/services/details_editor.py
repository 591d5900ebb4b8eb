# src/tasklist/services/details_editor.py
import copy
import logging
from typing import Optional

from tasklist.models.task import Subtask, Task
from tasklist.services.task_store import TaskStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("text", "completed", "due_date", "details", "priority", "labels", "subtasks", "comments")
SUBTASK_FIELDS = ("text", "completed")


class EditorClosedError(RuntimeError):
    """Raised when an edit is attempted while no task is open."""


class DetailsEditor:
    """Edit buffer for one task at a time.

    ``open`` takes a deep copy, so nothing done to the buffer reaches the
    store until ``save``. ``cancel`` throws the buffer away.
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self.buffer: Optional[Task] = None

    @property
    def is_open(self) -> bool:
        return self.buffer is not None

    def _require_open(self) -> Task:
        if self.buffer is None:
            raise EditorClosedError("no task is open in the details editor")
        return self.buffer

    def open(self, task: Task) -> Task:
        self.buffer = copy.deepcopy(task)
        logger.debug("Opened task %s for editing", task.id)
        return self.buffer

    def edit(self, field_name: str, value) -> None:
        buf = self._require_open()
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"field {field_name!r} is not editable")
        setattr(buf, field_name, value)

    def add_subtask(self) -> Subtask:
        buf = self._require_open()
        taken = {s.id for s in buf.subtasks}
        subtask = Subtask()
        while subtask.id in taken:
            subtask = Subtask()
        buf.subtasks.append(subtask)
        return subtask

    def update_subtask(self, index: int, field_name: str, value) -> None:
        buf = self._require_open()
        if field_name not in SUBTASK_FIELDS:
            raise ValueError(f"subtask field {field_name!r} is not editable")
        setattr(buf.subtasks[index], field_name, value)

    def delete_subtask(self, index: int) -> None:
        buf = self._require_open()
        del buf.subtasks[index]

    def add_comment(self, text: str) -> bool:
        buf = self._require_open()
        if not text or not text.strip():
            return False
        buf.comments.append(text.strip())
        return True

    def save(self) -> bool:
        buf = self._require_open()
        self.buffer = None
        return self.store.replace(buf)

    def cancel(self) -> None:
        self._require_open()
        logger.debug("Discarded edits")
        self.buffer = None
