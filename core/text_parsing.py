"""Field normalizers that turn free-text fragments into typed task values."""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

from dateutil import parser as dateparser

from core.task_fields import PRIORITY_KEYWORDS, STATUS_SYNONYMS, compact_status_word

# Pictographs, dingbats, misc symbols, regional indicators and skin tones.
_EMOJI_BASE = (
    "\U0001F000-\U0001FAFF"
    "\u2600-\u27BF"
    "\u2300-\u23FF"
    "\u2B00-\u2BFF"
    "\u2934\u2935\u3030\u303D\u3297\u3299"
)
# Joiners, variation selectors, keycap and tag sequences that glue emoji together.
_EMOJI_GLUE = "\u200D\uFE0E\uFE0F\u20E3\U000E0020-\U000E007F"

_EMOJI_CLUSTER = f"[{_EMOJI_BASE}][{_EMOJI_BASE}{_EMOJI_GLUE}]*"
_LEADING_EMOJI_PATTERN = re.compile(rf"^\s*({_EMOJI_CLUSTER})\s*")
_EMOJI_PATTERN = re.compile(_EMOJI_CLUSTER)

_HOURS_PATTERN = re.compile(
    r"^(\d+(?:\.\d+)?)\s*h(?:ours?|rs?)?(?:\s*(?:and\s+)?(\d+)\s*m(?:in(?:ute)?s?)?)?$",
    re.IGNORECASE,
)
_MINUTES_PATTERN = re.compile(r"^(\d+)\s*m(?:in(?:ute)?s?)?$", re.IGNORECASE)

_WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}
_RELATIVE_KEYWORDS = {
    "today": 0,
    "tomorrow": 1,
}
_NEXT_WEEKDAY_PATTERN = re.compile(r"^next\s+(" + "|".join(_WEEKDAYS) + r")$", re.IGNORECASE)
_IN_DAYS_PATTERN = re.compile(r"^in\s+(\d+)\s+days?$", re.IGNORECASE)
_DUE_PREFIX_PATTERN = re.compile(r"^(?:due|by|on)\s+", re.IGNORECASE)
_TRAILING_PUNCTUATION = " .!?"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_duration(text: str) -> Optional[int]:
    """Return a time estimate in minutes for ``2h``, ``30m``, ``1h 30m``, ``1.5 hours``..."""

    if not text:
        return None
    value = text.strip().lower().rstrip(_TRAILING_PUNCTUATION)
    if not value:
        return None

    match = _HOURS_PATTERN.match(value)
    if match:
        hours = float(match.group(1))
        minutes = int(match.group(2)) if match.group(2) else 0
        return _round_half_up(hours * 60 + minutes)

    match = _MINUTES_PATTERN.match(value)
    if match:
        return int(match.group(1))
    return None


def format_time_estimate(minutes: Optional[int]) -> str:
    """Render minutes the way the board shows them (``45m``, ``2h``, ``1h 30m``)."""

    if not minutes or minutes <= 0:
        return ""
    hours, remaining = divmod(int(minutes), 60)
    if hours == 0:
        return f"{remaining}m"
    if remaining == 0:
        return f"{hours}h"
    return f"{hours}h {remaining}m"


def parse_due_date(text: str, reference: Optional[date] = None) -> Optional[str]:
    """Parse relative or absolute date phrases into ``YYYY-MM-DD``.

    Recognises ``today``, ``tomorrow``, ``next <weekday>`` (always strictly
    after ``reference``), ``in <N> days`` and anything python-dateutil can read
    as long as it contains a digit.
    """

    if not text:
        return None
    reference = reference or date.today()
    value = text.strip().rstrip(_TRAILING_PUNCTUATION)
    value = _DUE_PREFIX_PATTERN.sub("", value, count=1).strip()
    lowered = value.lower()
    if not lowered:
        return None

    if lowered in _RELATIVE_KEYWORDS:
        return (reference + timedelta(days=_RELATIVE_KEYWORDS[lowered])).isoformat()

    weekday_match = _NEXT_WEEKDAY_PATTERN.match(lowered)
    if weekday_match:
        return _next_weekday(_WEEKDAYS[weekday_match.group(1)], reference).isoformat()

    days_match = _IN_DAYS_PATTERN.match(lowered)
    if days_match:
        try:
            return (reference + timedelta(days=int(days_match.group(1)))).isoformat()
        except (OverflowError, ValueError):
            return None

    if not re.search(r"\d", lowered):
        return None
    try:
        parsed = dateparser.parse(value, default=datetime.combine(reference, time()))
    except (ValueError, OverflowError):
        return None
    return parsed.date().isoformat()


def _next_weekday(target: int, reference: date) -> date:
    delta = (target - reference.weekday()) % 7 or 7
    return reference + timedelta(days=delta)


def parse_priority(text: str) -> Optional[str]:
    """Map priority synonyms (urgent/high, personal/low, work/medium) to a level."""

    lowered = (text or "").lower()
    if not lowered.strip():
        return None
    for keyword, level in PRIORITY_KEYWORDS:
        if re.search(rf"\b{keyword}\b", lowered):
            return level
    return None


def parse_status(text: str) -> Optional[str]:
    """Collapse status spellings (``in progress``, ``In-Progress``, ``completed``...)."""

    compact = compact_status_word((text or "").rstrip(_TRAILING_PUNCTUATION))
    if not compact:
        return None
    return STATUS_SYNONYMS.get(compact)


def extract_leading_emoji(title: str) -> Tuple[Optional[str], str]:
    """Split ``"🚀 Ship it"`` into ``("🚀", "Ship it")``; titles without emoji come back untouched."""

    text = title or ""
    match = _LEADING_EMOJI_PATTERN.match(text)
    if not match:
        return None, text
    return match.group(1), text[match.end():]


def strip_leading_emoji(title: str) -> str:
    return extract_leading_emoji(title)[1]


def contains_emoji(text: str) -> bool:
    return bool(_EMOJI_PATTERN.search(text or ""))


def find_emoji(text: str) -> Optional[str]:
    """Return the first emoji cluster found anywhere in ``text``."""

    match = _EMOJI_PATTERN.search(text or "")
    return match.group(0) if match else None


__all__ = [
    "parse_duration",
    "format_time_estimate",
    "parse_due_date",
    "parse_priority",
    "parse_status",
    "extract_leading_emoji",
    "strip_leading_emoji",
    "contains_emoji",
    "find_emoji",
]
