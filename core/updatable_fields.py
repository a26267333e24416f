"""Closed set of task fields that chat commands may update.

Each member binds the words users type for it, the normalizer that turns the
raw value into a stored value, the store field name and the hint shown when
the value cannot be parsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from core.text_parsing import format_time_estimate, parse_due_date, parse_duration, parse_priority


def _format_minutes(value: object) -> str:
    return format_time_estimate(value) or "0m"  # type: ignore[arg-type]


def _parse_description(value: str) -> Optional[str]:
    text = (value or "").strip()
    return text or None


@dataclass(frozen=True)
class FieldSpec:
    store_field: str
    label: str
    aliases: Tuple[str, ...]
    normalizer: Callable[[str], object]
    expected_format: str
    formatter: Callable[[object], str] = str


class UpdatableField(Enum):
    TIME_ESTIMATE = FieldSpec(
        store_field="time_estimate",
        label="time estimate",
        aliases=("time estimate", "time", "duration", "estimate"),
        normalizer=parse_duration,
        expected_format='a duration like "30m", "2h", "1h 30m" or "1.5 hours"',
        formatter=_format_minutes,
    )
    DUE_DATE = FieldSpec(
        store_field="due_date",
        label="due date",
        aliases=("due date", "date", "deadline"),
        normalizer=parse_due_date,
        expected_format='a date like "today", "tomorrow", "next monday", "in 3 days" or "2025-12-31"',
    )
    PRIORITY = FieldSpec(
        store_field="priority",
        label="priority",
        aliases=("priority",),
        normalizer=parse_priority,
        expected_format='"high"/"urgent", "medium"/"work" or "low"/"personal"',
    )
    DESCRIPTION = FieldSpec(
        store_field="description",
        label="description",
        aliases=("description",),
        normalizer=_parse_description,
        expected_format="some description text",
    )

    @property
    def store_field(self) -> str:
        return self.value.store_field

    @property
    def label(self) -> str:
        return self.value.label

    @property
    def expected_format(self) -> str:
        return self.value.expected_format

    def normalize(self, raw_value: str) -> object:
        """Return the typed value for ``raw_value`` or ``None`` when it does not parse."""

        return self.value.normalizer(raw_value)

    def format_value(self, value: object) -> str:
        return self.value.formatter(value)

    @classmethod
    def from_alias(cls, text: str) -> Optional["UpdatableField"]:
        normalized = " ".join((text or "").lower().split())
        for member in cls:
            if normalized in member.value.aliases:
                return member
        return None

    @classmethod
    def from_store_field(cls, name: str) -> Optional["UpdatableField"]:
        for member in cls:
            if member.store_field == name:
                return member
        return None


# Longest aliases first so "due date" wins over "date" inside the regex alternation.
FIELD_ALIAS_PATTERN = "|".join(
    alias.replace(" ", r"\s+")
    for alias in sorted(
        (alias for member in UpdatableField for alias in member.value.aliases),
        key=len,
        reverse=True,
    )
)


__all__ = ["FieldSpec", "UpdatableField", "FIELD_ALIAS_PATTERN"]
