# src/tasklist/services/task_store.py
import json
import logging
from typing import Callable, Iterator, List, Optional

from tasklist.db.storage import KeyValueStorage
from tasklist.models.task import Task, new_id

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


class TaskStore:
    """Ordered in-memory task list mirrored to a key-value storage port.

    Every mutation that changes the list writes the whole list back as one
    JSON array under ``storage_key`` and then notifies change listeners.
    Mutations that do not apply (blank text, unknown id, drop without a
    destination) return False and write nothing.
    """

    def __init__(self, storage: KeyValueStorage, storage_key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.storage_key = storage_key
        self._tasks: List[Task] = []
        self._listeners: List[Callable[[], None]] = []

    # -------------------- persistence --------------------
    def load(self) -> None:
        raw = self.storage.get_item(self.storage_key)
        self._tasks = self._deserialize(raw)
        logger.info("Loaded %d task(s) from storage key %r", len(self._tasks), self.storage_key)

    def _deserialize(self, raw: Optional[str]) -> List[Task]:
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored tasks are not valid JSON; starting with an empty list")
            return []
        if not isinstance(data, list):
            logger.warning("Stored tasks are not a JSON array; starting with an empty list")
            return []
        tasks = [Task.from_dict(d) for d in data if isinstance(d, dict)]
        # later duplicates get a fresh id that no stored task uses
        taken = {t.id for t in tasks}
        seen = set()
        for task in tasks:
            if task.id in seen:
                old_id = task.id
                task.id = new_id()
                while task.id in taken:
                    task.id = new_id()
                taken.add(task.id)
                logger.warning("Duplicate stored task id %s; reassigned to %s", old_id, task.id)
            seen.add(task.id)
        return tasks

    def serialize(self) -> str:
        return json.dumps([t.to_dict() for t in self._tasks])

    def _commit(self) -> None:
        self.storage.set_item(self.storage_key, self.serialize())
        for listener in list(self._listeners):
            listener()

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    # -------------------- queries --------------------
    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return -1

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    # -------------------- mutations --------------------
    def _unique_id(self) -> str:
        taken = {t.id for t in self._tasks}
        tid = new_id()
        while tid in taken:
            tid = new_id()
        return tid

    def add(self, text: str) -> Optional[Task]:
        if not text or not text.strip():
            logger.debug("Ignoring add with blank text")
            return None
        task = Task(id=self._unique_id(), text=text.strip())
        self._tasks.append(task)
        self._commit()
        logger.debug("Added task %s", task.id)
        return task

    def remove(self, task_id: str) -> bool:
        idx = self.index_of(task_id)
        if idx < 0:
            logger.warning("remove: task %s not found", task_id)
            return False
        del self._tasks[idx]
        self._commit()
        return True

    def toggle_completed(self, task_id: str) -> bool:
        task = self.get(task_id)
        if task is None:
            logger.warning("toggle_completed: task %s not found", task_id)
            return False
        task.completed = not task.completed
        self._commit()
        return True

    def reorder(self, from_index: int, to_index: Optional[int]) -> bool:
        """Move the task at ``from_index`` so it ends up at ``to_index``.

        ``to_index`` of None is a drop outside the list and does nothing. The
        insert position is clamped to the list bounds; ``from_index`` must be
        a valid position.
        """
        if to_index is None:
            return False
        if not 0 <= from_index < len(self._tasks):
            raise IndexError(f"reorder: no task at position {from_index}")
        task = self._tasks.pop(from_index)
        to_index = max(0, min(to_index, len(self._tasks)))
        self._tasks.insert(to_index, task)
        self._commit()
        return True

    def replace(self, task: Task) -> bool:
        idx = self.index_of(task.id)
        if idx < 0:
            logger.warning("replace: task %s not found", task.id)
            return False
        self._tasks[idx] = task
        self._commit()
        return True
