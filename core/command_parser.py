"""Command parser that turns free-form chat text into a structured task command."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from core.parsers import create, delete, emoji, listing, status, update
from core.parsers.types import ChatCommand, ParsedCommand

RuleParser = Callable[[str, str], Optional[ParsedCommand]]

# Priority order is part of the grammar: the first rule that claims a message wins,
# with no backtracking into later rules.
COMMAND_RULES: Tuple[Tuple[str, RuleParser], ...] = (
    ("create", create.parse),
    ("move", status.parse),
    ("emoji", emoji.parse),
    ("update", update.parse),
    ("delete", delete.parse),
    ("list", listing.parse_list),
    ("help", listing.parse_help),
)


def parse_command(message: str) -> ParsedCommand:
    """Try each rule in priority order until one claims the utterance.

    WHAT: classify a chat message as create/move/emoji/update/delete/list/help.
    WHY: deterministic parsing keeps task edits auditable and avoids a model
    round-trip when the user's intent is explicit.
    HOW: walk ``COMMAND_RULES`` passing both the original text and a lowered
    copy; anything unclaimed becomes a ``ChatCommand`` for the chat fallback.
    """
    text = (message or "").strip()
    if not text:
        return ChatCommand(message="")
    lowered = text.lower()

    for _intent, rule in COMMAND_RULES:
        result = rule(text, lowered)
        if result is not None:
            return result
    return ChatCommand(message=text)


__all__ = ["COMMAND_RULES", "parse_command", "ParsedCommand"]
