"""Create-task intent parsing."""

from __future__ import annotations

import re
from typing import Dict, Optional

from core.parser_utils import POLITE_PREFIX, split_segments
from core.parsers.types import CreateCommand
from core.text_parsing import parse_due_date, parse_duration, parse_priority, parse_status

_CREATE_PATTERN = re.compile(
    POLITE_PREFIX
    + r"(?:create|add|new)\s+(?:(?:a|an)\s+)?(?:new\s+)?(?:task|todo)\b\s*(?::|\bcalled\b)?\s*(?P<content>.*)$",
    re.IGNORECASE | re.DOTALL,
)


def parse(message: str, lowered: str) -> Optional[CreateCommand]:
    """WHAT: turn "Create task: 🏃 Morning jog, 30m, tomorrow, work" into a ``CreateCommand``.
    WHY: inline metadata lets users fill the whole card from one sentence.
    HOW: the first comma/semicolon segment is the title; later segments are offered to the
    duration, due-date, priority and status normalizers in that order and dropped when none accepts them."""
    match = _CREATE_PATTERN.match(message)
    if not match:
        return None

    segments = split_segments(match.group("content"))
    title = segments[0].strip().strip('"') if segments else ""
    fields: Dict[str, object] = {}
    for segment in segments[1:]:
        minutes = parse_duration(segment)
        if minutes is not None:
            fields["time_estimate"] = minutes
            continue
        due_date = parse_due_date(segment)
        if due_date:
            fields["due_date"] = due_date
            continue
        priority = parse_priority(segment)
        if priority:
            fields["priority"] = priority
            continue
        status = parse_status(segment)
        if status:
            fields["status"] = status
    return CreateCommand(title=title, **fields)  # type: ignore[arg-type]
