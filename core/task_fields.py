"""Shared vocabulary for task fields: canonical values and their synonyms.

Both the command parsers and the executor normalise through these tables so a
word such as "completed" or "urgent" means the same thing everywhere.
"""

from __future__ import annotations

import re
from typing import Dict, Tuple

STATUS_TODO = "todo"
STATUS_IN_PROGRESS = "in_progress"
STATUS_DONE = "done"
STATUSES: Tuple[str, ...] = (STATUS_TODO, STATUS_IN_PROGRESS, STATUS_DONE)

PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"
PRIORITIES: Tuple[str, ...] = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH)

DEFAULT_STATUS = STATUS_TODO
DEFAULT_PRIORITY = PRIORITY_MEDIUM

STATUS_LABELS: Dict[str, str] = {
    STATUS_TODO: "To Do",
    STATUS_IN_PROGRESS: "In Progress",
    STATUS_DONE: "Done",
}

# Keys are compacted: lowercase with spaces, dashes and underscores removed.
STATUS_SYNONYMS: Dict[str, str] = {
    "todo": STATUS_TODO,
    "inprogress": STATUS_IN_PROGRESS,
    "done": STATUS_DONE,
    "completed": STATUS_DONE,
    "complete": STATUS_DONE,
}

# Order matters: the first keyword found in the text wins.
PRIORITY_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("urgent", PRIORITY_HIGH),
    ("high", PRIORITY_HIGH),
    ("personal", PRIORITY_LOW),
    ("low", PRIORITY_LOW),
    ("work", PRIORITY_MEDIUM),
    ("medium", PRIORITY_MEDIUM),
)

# Regex fragment matching any status synonym as typed by a user.
STATUS_WORD_PATTERN = r"to[\s_-]?do|in[\s_-]?progress|done|completed?"

_COMPACT_PATTERN = re.compile(r"[\s_\-]+")


def compact_status_word(text: str) -> str:
    """Lowercase ``text`` and drop whitespace, dashes and underscores."""

    return _COMPACT_PATTERN.sub("", (text or "").strip().lower())


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status.replace("_", " ").title())


__all__ = [
    "STATUS_TODO",
    "STATUS_IN_PROGRESS",
    "STATUS_DONE",
    "STATUSES",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "PRIORITY_HIGH",
    "PRIORITIES",
    "DEFAULT_STATUS",
    "DEFAULT_PRIORITY",
    "STATUS_LABELS",
    "STATUS_SYNONYMS",
    "PRIORITY_KEYWORDS",
    "STATUS_WORD_PATTERN",
    "compact_status_word",
    "status_label",
]
