"""Update-field intent parsing."""

from __future__ import annotations

import re
from typing import Optional

from core.parser_utils import POLITE_PREFIX, clean_title
from core.parsers.types import UpdateCommand
from core.updatable_fields import FIELD_ALIAS_PATTERN, UpdatableField

_UPDATE_PATTERN = re.compile(
    POLITE_PREFIX
    + r"(?:change|update|set)\s+(?:the\s+)?(?P<field>"
    + FIELD_ALIAS_PATTERN
    + r")\s+(?:of|for)\s+(?P<title>.+)\s+to\s+(?P<value>.+?)\s*$",
    re.IGNORECASE | re.DOTALL,
)


def parse(message: str, lowered: str) -> Optional[UpdateCommand]:
    """Return an ``UpdateCommand`` carrying the raw value; the executor normalizes it per field."""
    match = _UPDATE_PATTERN.match(message)
    if not match:
        return None
    field = UpdatableField.from_alias(match.group("field"))
    title = clean_title(match.group("title"))
    value = match.group("value").strip()
    if field is not UpdatableField.DESCRIPTION:
        value = value.rstrip(" .!?").strip('"')
    if not field or not title or not value:
        return None
    return UpdateCommand(title=title, field=field.store_field, value=value)
