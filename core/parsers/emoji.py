"""Add-emoji intent parsing."""

from __future__ import annotations

import re
from typing import Optional

from core.parser_utils import POLITE_PREFIX, clean_title
from core.parsers.types import EmojiCommand
from core.text_parsing import contains_emoji, find_emoji

_TRIGGER = POLITE_PREFIX + r"(?:add|put|give)\s+"
# "add 🚀 to Go to gym": the emoji side is short, so split on the first to/on.
_EMOJI_FIRST_PATTERN = re.compile(
    _TRIGGER + r"(?P<first>.+?)\s+(?:to|on)\s+(?P<second>.+?)\s*[.!]*\s*$",
    re.IGNORECASE,
)
# "give Go to gym to 🚀": the title comes first, so split on the last to/on.
_EMOJI_LAST_PATTERN = re.compile(
    _TRIGGER + r"(?P<first>.+)\s+(?:to|on)\s+(?P<second>.+?)\s*[.!]*\s*$",
    re.IGNORECASE,
)
_EMOJI_WORDS = re.compile(r"\b(?:an?\s+|the\s+)?emojis?\b", re.IGNORECASE)


def parse(message: str, lowered: str) -> Optional[EmojiCommand]:
    """WHAT: detect "add 🚀 to Ship it" and the reversed "give Ship it to 🚀".
    WHY: both word orders show up in chat; only the side holding an emoji is the emoji.
    HOW: capture both sides of to/on and test which one contains an emoji code point."""
    match = _EMOJI_FIRST_PATTERN.match(message)
    if match and contains_emoji(match.group("first")):
        return _build(emoji_source=match.group("first"), title_source=match.group("second"))

    match = _EMOJI_LAST_PATTERN.match(message)
    if match and contains_emoji(match.group("second")):
        return _build(emoji_source=match.group("second"), title_source=match.group("first"))
    return None


def _build(*, emoji_source: str, title_source: str) -> Optional[EmojiCommand]:
    emoji = find_emoji(emoji_source)
    title = clean_title(_EMOJI_WORDS.sub("", title_source))
    if not emoji or not title:
        return None
    return EmojiCommand(title=title, emoji=emoji)
