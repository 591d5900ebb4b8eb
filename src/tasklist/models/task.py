from dataclasses import dataclass, field, asdict
from typing import List, Optional
import time

PRIORITIES = ("Low", "Medium", "High")
DEFAULT_PRIORITY = "Medium"

# offered as completions in the labels editor; free-form labels are still allowed
SUGGESTED_LABELS = ("Work", "Personal", "Urgent", "Later", "Shopping", "Home")

_last_id = 0


def new_id() -> str:
    """Millisecond timestamp id, strictly increasing within the process."""
    global _last_id
    now = int(time.time() * 1000)
    if now <= _last_id:
        now = _last_id + 1
    _last_id = now
    return str(now)


@dataclass
class Subtask:
    id: str = field(default_factory=new_id)
    text: str = ""
    completed: bool = False

    def to_dict(self):
        return asdict(self)

    @staticmethod
    def from_dict(d):
        return Subtask(
            id=str(d.get("id") or new_id()),
            text=d.get("text") or "",
            completed=bool(d.get("completed", False)),
        )


@dataclass
class Task:
    id: str = field(default_factory=new_id)
    text: str = ""
    completed: bool = False
    due_date: Optional[str] = None  # "YYYY-MM-DD" or None
    details: str = ""
    priority: str = DEFAULT_PRIORITY  # Low|Medium|High
    labels: List[str] = field(default_factory=list)
    subtasks: List[Subtask] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)

    def to_dict(self):
        """Persisted record layout (camelCase ``dueDate``)."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "dueDate": self.due_date,
            "details": self.details,
            "priority": self.priority,
            "labels": list(self.labels),
            "subtasks": [s.to_dict() for s in self.subtasks],
            "comments": list(self.comments),
        }

    @staticmethod
    def from_dict(d):
        # missing fields fall back to their defaults; values are not validated
        subtasks = [
            Subtask.from_dict(s) for s in (d.get("subtasks") or []) if isinstance(s, dict)
        ]
        return Task(
            id=str(d.get("id") or new_id()),
            text=d.get("text") or "",
            completed=bool(d.get("completed", False)),
            due_date=d.get("dueDate", d.get("due_date")),
            details=d.get("details") or "",
            priority=d.get("priority") or DEFAULT_PRIORITY,
            labels=list(d.get("labels") or []),
            subtasks=subtasks,
            comments=list(d.get("comments") or []),
        )
