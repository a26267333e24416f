"""Move / mark-as-status intent parsing."""

from __future__ import annotations

import re
from typing import Optional

from core.parser_utils import POLITE_PREFIX, clean_title
from core.parsers.types import MoveCommand
from core.task_fields import STATUS_WORD_PATTERN
from core.text_parsing import parse_status

_STATUS_GROUP = rf"(?P<status>{STATUS_WORD_PATTERN})"
_END = r"\s*[.!]*\s*$"
_REQUEST_END = r"\s*[.!?]*\s*$"

# Titles are greedy so "Move Go to gym to done" keeps "Go to gym" as the title.
_MOVE_PATTERNS = (
    re.compile(
        POLITE_PREFIX
        + r"(?:move|change|put)\s+(?:the\s+status\s+of\s+|status\s+of\s+)?(?P<title>.+)\s+(?:to|status)\s+"
        + _STATUS_GROUP
        + _REQUEST_END,
        re.IGNORECASE,
    ),
    re.compile(
        POLITE_PREFIX + r"(?:set|update)\s+(?:the\s+)?status\s+(?:of|for)\s+(?P<title>.+)\s+to\s+" + _STATUS_GROUP + _REQUEST_END,
        re.IGNORECASE,
    ),
    re.compile(POLITE_PREFIX + r"(?:mark|set)\s+(?P<title>.+)\s+as\s+" + _STATUS_GROUP + _REQUEST_END, re.IGNORECASE),
    # No "?" allowed at the end, so "which task is done?" stays a chat question.
    re.compile(r"^\s*(?P<title>.+)\s+is\s+(?:now\s+)?(?P<status>done|completed?)" + _END, re.IGNORECASE),
)


def parse(message: str, lowered: str) -> Optional[MoveCommand]:
    """Return a ``MoveCommand`` for "move X to done", "mark X as in progress" or "X is done"."""
    for pattern in _MOVE_PATTERNS:
        match = pattern.match(message)
        if not match:
            continue
        status = parse_status(match.group("status"))
        title = clean_title(match.group("title"))
        if status and title:
            return MoveCommand(title=title, status=status)
    return None
