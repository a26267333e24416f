"""Delete intent parsing."""

from __future__ import annotations

import re
from typing import Optional

from core.parser_utils import POLITE_PREFIX, clean_title
from core.parsers.types import DeleteCommand

_DELETE_PATTERN = re.compile(
    POLITE_PREFIX + r"(?:delete|remove)\s+(?P<title>.+?)\s*$",
    re.IGNORECASE | re.DOTALL,
)


def parse(message: str, lowered: str) -> Optional[DeleteCommand]:
    """Everything after delete/remove is the title (minus a leading "task"/"the task")."""
    match = _DELETE_PATTERN.match(message)
    if not match:
        return None
    title = clean_title(match.group("title"))
    if not title:
        return None
    return DeleteCommand(title=title)
