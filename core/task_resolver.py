"""Resolve a user-typed title fragment to one stored task."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from core.text_parsing import strip_leading_emoji
from stores.base import Task


def normalize_title(value: str) -> str:
    """Casefold and collapse whitespace so "Buy  Milk" and "buy milk" compare equal."""

    return " ".join((value or "").split()).casefold()


def find_task(query: str, tasks: Iterable[Task]) -> Optional[Task]:
    """Return the first task matching ``query``, case- and whitespace-insensitively.

    Stages, first hit wins: exact title, title containing the query, then the
    emoji-stripped title containing the emoji-stripped query. Several matches in
    one stage resolve to the earliest task in collection order.
    """

    needle = normalize_title(query)
    if not needle:
        return None
    candidates = list(tasks)

    for task in candidates:
        if normalize_title(task.title) == needle:
            return task
    for task in candidates:
        if needle in normalize_title(task.title):
            return task

    bare_needle = normalize_title(strip_leading_emoji(query))
    if not bare_needle:
        return None
    for task in candidates:
        if bare_needle in normalize_title(strip_leading_emoji(task.title)):
            return task
    return None


def sample_titles(tasks: Sequence[Task], limit: int = 3) -> List[str]:
    """Titles offered as suggestions when a lookup fails."""

    return [task.title for task in list(tasks)[: max(limit, 0)]]


__all__ = ["normalize_title", "find_task", "sample_titles"]
