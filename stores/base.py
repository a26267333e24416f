"""Task entity and the CRUD contract every task store implements."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from core.task_fields import DEFAULT_PRIORITY, DEFAULT_STATUS, PRIORITIES, STATUSES


class TaskStoreError(Exception):
    """Raised when a store rejects a read or mutation (missing task, invalid field, I/O)."""


class TaskNotFoundError(TaskStoreError):
    """Raised when no task has the requested id."""


@dataclass
class Task:
    """Represent a single card on the board."""

    id: str
    title: str
    status: str = DEFAULT_STATUS
    priority: str = DEFAULT_PRIORITY
    position: int = 0
    due_date: Optional[str] = None
    time_estimate: Optional[int] = None
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def snapshot(self) -> Dict[str, Any]:
        """Fields shared with the chat model: title, status, priority, due date, estimate."""

        return {
            "title": self.title,
            "status": self.status,
            "priority": self.priority,
            "due_date": self.due_date,
            "time_estimate": self.time_estimate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        tags = data.get("tags") or []
        estimate = data.get("time_estimate")
        return cls(
            id=str(data.get("id", "")).strip(),
            title=str(data.get("title", "")).strip(),
            status=data.get("status") if data.get("status") in STATUSES else DEFAULT_STATUS,
            priority=data.get("priority") if data.get("priority") in PRIORITIES else DEFAULT_PRIORITY,
            position=int(data.get("position") or 0),
            due_date=str(data["due_date"]) if data.get("due_date") else None,
            time_estimate=int(estimate) if isinstance(estimate, (int, float)) and estimate >= 0 else None,
            description=str(data["description"]) if data.get("description") else None,
            tags=[str(tag) for tag in tags if str(tag).strip()] if isinstance(tags, list) else [],
            created_at=str(data.get("created_at", "")),
            updated_at=str(data.get("updated_at", "")),
        )


class TaskStore(Protocol):
    """Narrow CRUD contract the assistant relies on; calls are atomic from the caller's view."""

    def list_tasks(self) -> List[Task]:
        ...

    def create_task(
        self,
        title: str,
        *,
        status: str = DEFAULT_STATUS,
        priority: str = DEFAULT_PRIORITY,
        due_date: Optional[str] = None,
        time_estimate: Optional[int] = None,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Task:
        ...

    def update_task(self, task_id: str, **changes: Any) -> Task:
        ...

    def delete_task(self, task_id: str) -> None:
        ...


__all__ = ["Task", "TaskNotFoundError", "TaskStore", "TaskStoreError"]
