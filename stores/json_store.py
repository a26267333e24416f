"""File-backed task store implementing the ``TaskStore`` contract with JSON persistence."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.json_storage import load_task_document, save_task_document
from core.task_fields import DEFAULT_PRIORITY, DEFAULT_STATUS, PRIORITIES, STATUSES
from stores.base import Task, TaskNotFoundError, TaskStoreError

logger = logging.getLogger(__name__)

_DEFAULT_STORAGE_PATH = Path("data/tasks.json")
_UPDATABLE_FIELDS = {
    "title",
    "status",
    "priority",
    "due_date",
    "time_estimate",
    "description",
    "tags",
    "position",
}


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _sort_key(task: Task) -> tuple:
    return (STATUSES.index(task.status), task.position)


class JsonTaskStore:
    """JSON document store for tasks, ordered by status then position."""

    def __init__(self, storage_path: Path | None = None) -> None:
        self._storage_path = storage_path or _DEFAULT_STORAGE_PATH

    @property
    def storage_path(self) -> Path:
        return self._storage_path

    def list_tasks(self) -> List[Task]:
        tasks = self._load_items()
        tasks.sort(key=_sort_key)
        return tasks

    def get_task(self, task_id: str) -> Optional[Task]:
        for task in self._load_items():
            if task.id == task_id:
                return task
        return None

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
        fields = _validate_changes(
            {
                "title": title,
                "status": status,
                "priority": priority,
                "due_date": due_date,
                "time_estimate": time_estimate,
                "description": description,
                "tags": list(tags or []),
            }
        )
        tasks = self._load_items()
        now = _utc_timestamp()
        task = Task(
            id=uuid.uuid4().hex,
            position=max([0] + [item.position for item in tasks]) + 1,
            created_at=now,
            updated_at=now,
            **fields,
        )
        tasks.append(task)
        self._write_items(tasks)
        logger.debug("Created task %s (%s)", task.id, task.title)
        return task

    def update_task(self, task_id: str, **changes: Any) -> Task:
        if not changes:
            raise TaskStoreError("No fields to update.")
        validated = _validate_changes(changes)
        tasks = self._load_items()
        for idx, task in enumerate(tasks):
            if task.id != task_id:
                continue
            updated = replace(task, updated_at=_utc_timestamp(), **validated)
            tasks[idx] = updated
            self._write_items(tasks)
            logger.debug("Updated task %s: %s", task_id, sorted(validated))
            return updated
        raise TaskNotFoundError(f"Task '{task_id}' was not found.")

    def delete_task(self, task_id: str) -> None:
        tasks = self._load_items()
        remaining = [task for task in tasks if task.id != task_id]
        if len(remaining) == len(tasks):
            raise TaskNotFoundError(f"Task '{task_id}' was not found.")
        self._write_items(remaining)
        logger.debug("Deleted task %s", task_id)

    def _load_items(self) -> List[Task]:
        # json.JSONDecodeError is a ValueError subclass.
        try:
            rows = load_task_document(self._storage_path)
        except (OSError, ValueError) as exc:
            raise TaskStoreError(f"Could not read {self._storage_path}: {exc}") from exc

        tasks = [Task.from_dict(row) for row in rows]
        return [task for task in tasks if task.id]

    def _write_items(self, tasks: List[Task]) -> None:
        try:
            save_task_document(self._storage_path, [task.to_dict() for task in tasks])
        except OSError as exc:
            raise TaskStoreError(f"Could not write {self._storage_path}: {exc}") from exc


def _validate_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Check field names and values, returning the cleaned mapping or raising ``TaskStoreError``."""

    unknown = set(changes) - _UPDATABLE_FIELDS
    if unknown:
        raise TaskStoreError(f"Unsupported task field(s): {', '.join(sorted(unknown))}.")

    cleaned: Dict[str, Any] = {}
    for name, value in changes.items():
        if name == "title":
            title = str(value or "").strip()
            if not title:
                raise TaskStoreError("Task title is required.")
            cleaned[name] = title
        elif name == "status":
            if value not in STATUSES:
                raise TaskStoreError(f"Unsupported status '{value}'. Use one of: {', '.join(STATUSES)}.")
            cleaned[name] = value
        elif name == "priority":
            if value not in PRIORITIES:
                raise TaskStoreError(f"Unsupported priority '{value}'. Use one of: {', '.join(PRIORITIES)}.")
            cleaned[name] = value
        elif name == "due_date":
            cleaned[name] = _coerce_due_date(value)
        elif name == "time_estimate":
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise TaskStoreError("Time estimate must be a non-negative number of minutes.")
            cleaned[name] = value
        elif name == "description":
            text = str(value).strip() if value is not None else ""
            cleaned[name] = text or None
        elif name == "tags":
            if not isinstance(value, (list, tuple, set)):
                raise TaskStoreError("Tags must be a list of strings.")
            cleaned[name] = sorted({str(tag).strip() for tag in value if str(tag).strip()})
        elif name == "position":
            if isinstance(value, bool) or not isinstance(value, int):
                raise TaskStoreError("Position must be an integer.")
            cleaned[name] = value
    return cleaned


def _coerce_due_date(value: Any) -> Optional[str]:
    if value in (None, ""):
        return None
    try:
        return date.fromisoformat(str(value)[:10]).isoformat()
    except ValueError as exc:
        raise TaskStoreError(f"Due date '{value}' is not a YYYY-MM-DD date.") from exc


__all__ = ["JsonTaskStore"]
