# src/tasklist/services/filters.py
from enum import Enum
from typing import Iterable, List

from tasklist.models.task import Task


class FilterMode(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw) -> "FilterMode":
        if not raw:
            return cls.ALL
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.ALL


def filter_tasks(tasks: Iterable[Task], mode: FilterMode) -> List[Task]:
    """Return the tasks visible under ``mode``, keeping store order."""
    if mode == FilterMode.ACTIVE:
        return [t for t in tasks if not t.completed]
    if mode == FilterMode.COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)
