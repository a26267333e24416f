from datetime import date, timedelta

import pytest

from core.parser_utils import clean_title, format_smart_date, split_segments
from core.text_parsing import (
    extract_leading_emoji,
    find_emoji,
    format_time_estimate,
    parse_due_date,
    parse_duration,
    parse_priority,
    parse_status,
    strip_leading_emoji,
)

# Monday
REFERENCE = date(2025, 10, 20)


@pytest.mark.parametrize(
    "text, minutes",
    [
        ("2h", 120),
        ("30m", 30),
        ("1h 30m", 90),
        ("1h30m", 90),
        ("1 hour and 15 minutes", 75),
        ("1.5 hours", 90),
        ("2 hrs", 120),
        ("45 minutes", 45),
        ("0.25h", 15),
        ("1.01h", 61),
        ("  3H  ", 180),
    ],
)
def test_parse_duration_accepts_common_forms(text, minutes):
    assert parse_duration(text) == minutes


@pytest.mark.parametrize("text", ["", "garbage", "h", "tomorrow", "30 seconds"])
def test_parse_duration_rejects_other_text(text):
    assert parse_duration(text) is None


def test_format_time_estimate():
    assert format_time_estimate(45) == "45m"
    assert format_time_estimate(120) == "2h"
    assert format_time_estimate(90) == "1h 30m"
    assert format_time_estimate(None) == ""


def test_parse_due_date_relative_keywords():
    assert parse_due_date("today", REFERENCE) == "2025-10-20"
    assert parse_due_date("Tomorrow", REFERENCE) == "2025-10-21"
    assert parse_due_date("in 3 days", REFERENCE) == "2025-10-23"
    assert parse_due_date("in 1 day", REFERENCE) == "2025-10-21"
    assert parse_due_date("due tomorrow", REFERENCE) == "2025-10-21"


@pytest.mark.parametrize(
    "weekday, expected",
    [
        ("monday", "2025-10-27"),
        ("tuesday", "2025-10-21"),
        ("wednesday", "2025-10-22"),
        ("thursday", "2025-10-23"),
        ("friday", "2025-10-24"),
        ("saturday", "2025-10-25"),
        ("sunday", "2025-10-26"),
    ],
)
def test_parse_due_date_next_weekday_is_strictly_after_reference(weekday, expected):
    assert parse_due_date(f"next {weekday}", REFERENCE) == expected


@pytest.mark.parametrize("offset", range(7))
def test_next_monday_from_every_weekday(offset):
    today = REFERENCE + timedelta(days=offset)

    due = date.fromisoformat(parse_due_date("next monday", today))

    assert due.weekday() == 0
    assert 1 <= (due - today).days <= 7


@pytest.mark.parametrize("text", ["in 3000000 days", "in 99999999999 days"])
def test_parse_due_date_out_of_range_offset_is_rejected(text):
    assert parse_due_date(text, REFERENCE) is None


def test_parse_due_date_absolute_formats():
    assert parse_due_date("2025-12-31", REFERENCE) == "2025-12-31"
    assert parse_due_date("12/25/2025", REFERENCE) == "2025-12-25"
    assert parse_due_date("Dec 25", REFERENCE) == "2025-12-25"
    assert parse_due_date("by 2026-01-05", REFERENCE) == "2026-01-05"


@pytest.mark.parametrize("text", ["", "someday", "friday", "next week", "2025-13-45", "work"])
def test_parse_due_date_rejects_unknown_text(text):
    assert parse_due_date(text, REFERENCE) is None


@pytest.mark.parametrize(
    "text, priority",
    [
        ("urgent", "high"),
        ("High", "high"),
        ("personal", "low"),
        ("low", "low"),
        ("work", "medium"),
        ("medium priority", "medium"),
        ("work stuff, urgent", "high"),
    ],
)
def test_parse_priority_synonyms(text, priority):
    assert parse_priority(text) == priority


def test_parse_priority_unknown():
    assert parse_priority("whenever") is None
    assert parse_priority("") is None
    assert parse_priority("homework") is None


@pytest.mark.parametrize(
    "text, status",
    [
        ("to do", "todo"),
        ("todo", "todo"),
        ("in progress", "in_progress"),
        ("In-Progress", "in_progress"),
        ("in_progress", "in_progress"),
        ("done", "done"),
        ("completed", "done"),
        ("Complete!", "done"),
    ],
)
def test_parse_status_synonyms(text, status):
    assert parse_status(text) == status


def test_parse_status_unknown():
    assert parse_status("later") is None
    assert parse_status("") is None


def test_extract_leading_emoji():
    assert extract_leading_emoji("🚀 Ship it") == ("🚀", "Ship it")
    assert extract_leading_emoji("Ship it") == (None, "Ship it")
    assert extract_leading_emoji("👨‍💻 Code review") == ("👨‍💻", "Code review")
    assert extract_leading_emoji("❤️ Call mom") == ("❤️", "Call mom")
    assert extract_leading_emoji("") == (None, "")


def test_strip_and_find_emoji():
    assert strip_leading_emoji("🛒 Buy milk") == "Buy milk"
    assert strip_leading_emoji("Buy 🛒 milk") == "Buy 🛒 milk"
    assert find_emoji("add 🔥 please") == "🔥"
    assert find_emoji("no emoji here") is None


def test_format_smart_date():
    assert format_smart_date("2025-10-20", REFERENCE) == "Today"
    assert format_smart_date("2025-10-21", REFERENCE) == "Tomorrow"
    assert format_smart_date("2025-10-24", REFERENCE) == "Friday"
    assert format_smart_date("2025-10-19", REFERENCE) == "Sunday"
    assert format_smart_date("2025-10-27", REFERENCE) == "Oct 27"
    assert format_smart_date(None, REFERENCE) == ""
    assert format_smart_date("not a date", REFERENCE) == ""


def test_title_and_segment_helpers():
    assert clean_title(' "the task Buy milk". ') == "Buy milk"
    assert clean_title("my Laundry") == "Laundry"
    assert clean_title("Taskforce meeting") == "Taskforce meeting"
    assert split_segments("Buy milk, tomorrow;; high ,") == ["Buy milk", "tomorrow", "high"]
