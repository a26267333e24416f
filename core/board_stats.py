"""Dashboard counters and the favorites view, computed from a task snapshot."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence

from core.task_fields import PRIORITY_HIGH, STATUS_DONE, STATUS_IN_PROGRESS, STATUS_TODO
from stores.base import Task


@dataclass
class BoardStats:
    total: int
    todo: int
    in_progress: int
    done: int
    completion_rate: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_board_stats(tasks: Sequence[Task]) -> BoardStats:
    """Count tasks per status; the completion rate is a rounded percentage, 0 for an empty board."""

    total = len(tasks)
    done = sum(1 for task in tasks if task.status == STATUS_DONE)
    rate = int(done * 100 / total + 0.5) if total else 0
    return BoardStats(
        total=total,
        todo=sum(1 for task in tasks if task.status == STATUS_TODO),
        in_progress=sum(1 for task in tasks if task.status == STATUS_IN_PROGRESS),
        done=done,
        completion_rate=rate,
    )


def favorite_tasks(tasks: Sequence[Task]) -> List[Task]:
    """High priority tasks double as favorites."""

    return [task for task in tasks if task.priority == PRIORITY_HIGH]


__all__ = ["BoardStats", "compute_board_stats", "favorite_tasks"]
