"""Common text-processing helpers shared across command parsers."""

from __future__ import annotations

import re
from typing import Iterable, List

# Courtesy words users put in front of a command ("please move...", "can you add...").
POLITE_PREFIX = r"^\s*(?:(?:please|pls|can\s+you|could\s+you|would\s+you)\s+)*"

_SEGMENT_SPLITTER = re.compile(r"[,;]")
_TITLE_ARTICLE_PATTERN = re.compile(r"^(?:(?:the|my)\s+)?(?:task|todo)\s+(?=\S)|^(?:the|my)\s+(?=\S)", re.IGNORECASE)
_QUOTES = "\"'“”‘’`"


def contains_keyword(text: str, keywords: Iterable[str]) -> bool:
    """Return True when any whole-word keyword occurs in ``text``."""

    return any(re.search(rf"\b{re.escape(keyword)}\b", text) for keyword in keywords)


def split_segments(content: str) -> List[str]:
    """Split comma/semicolon separated command content, keeping empty segments out."""

    return [segment.strip() for segment in _SEGMENT_SPLITTER.split(content or "") if segment.strip()]


def clean_title(raw: str) -> str:
    """Strip quotes, a leading "the task"/"my" article and trailing punctuation from a title fragment."""

    title = (raw or "").strip().rstrip(" .!?")
    title = title.strip(_QUOTES).strip()
    title = _TITLE_ARTICLE_PATTERN.sub("", title, count=1)
    return title.strip(_QUOTES).strip()


__all__ = [
    "POLITE_PREFIX",
    "contains_keyword",
    "split_segments",
    "clean_title",
]
