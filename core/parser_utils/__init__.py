"""Shared helper utilities for command parsing."""

from .text import POLITE_PREFIX, clean_title, contains_keyword, split_segments
from .datetime import format_smart_date

__all__ = [
    "POLITE_PREFIX",
    "clean_title",
    "contains_keyword",
    "split_segments",
    "format_smart_date",
]
