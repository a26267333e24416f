"""List and help intents: keyword checks, no fields to extract."""

from __future__ import annotations

import re
from typing import Optional

from core.parser_utils import contains_keyword
from core.parsers.types import HelpCommand, ListCommand

_TASK_WORD_PATTERN = re.compile(r"\btasks?\b")


def parse_list(message: str, lowered: str) -> Optional[ListCommand]:
    """WHAT: detect "list my tasks" / "show tasks" phrasing.
    WHY: a summary of the board is a read-only answer that needs no store mutation.
    HOW: whole word "list", or both "show" and "task(s)"."""
    if contains_keyword(lowered, ("list",)):
        return ListCommand()
    if contains_keyword(lowered, ("show",)) and _TASK_WORD_PATTERN.search(lowered):
        return ListCommand()
    return None


def parse_help(message: str, lowered: str) -> Optional[HelpCommand]:
    if contains_keyword(lowered, ("help",)) or "what can you do" in lowered:
        return HelpCommand()
    return None
