from datetime import date, timedelta

import pytest

from core.command_parser import COMMAND_RULES, parse_command
from core.parsers.types import (
    ChatCommand,
    CreateCommand,
    DeleteCommand,
    EmojiCommand,
    HelpCommand,
    ListCommand,
    MoveCommand,
    UpdateCommand,
)


def test_rules_are_ordered_by_priority():
    assert [intent for intent, _ in COMMAND_RULES] == [
        "create",
        "move",
        "emoji",
        "update",
        "delete",
        "list",
        "help",
    ]


def test_create_with_inline_fields():
    result = parse_command("Create task: 🏃 Morning jog, 30m, tomorrow, work")
    assert result == CreateCommand(
        title="🏃 Morning jog",
        priority="medium",
        due_date=(date.today() + timedelta(days=1)).isoformat(),
        time_estimate=30,
    )


def test_create_priority_and_status_segments():
    result = parse_command("add task Buy milk, urgent, in progress")
    assert isinstance(result, CreateCommand)
    assert result.title == "Buy milk"
    assert result.priority == "high"
    assert result.status == "in_progress"
    assert result.due_date is None
    assert result.time_estimate is None


def test_create_drops_unrecognised_segments():
    result = parse_command("new task Plan trip, with friends, 2h")
    assert result == CreateCommand(title="Plan trip", time_estimate=120)


@pytest.mark.parametrize(
    "message, title",
    [
        ("Create task called Write report", "Write report"),
        ("Please add a new task: Call mom", "Call mom"),
        ("create todo Water plants", "Water plants"),
    ],
)
def test_create_phrasings(message, title):
    result = parse_command(message)
    assert isinstance(result, CreateCommand)
    assert result.title == title


def test_create_without_title_keeps_empty_title():
    result = parse_command("create task")
    assert result == CreateCommand(title="")


def test_create_wins_over_move_wording():
    result = parse_command("Create task: Move boxes to done")
    assert isinstance(result, CreateCommand)
    assert result.title == "Move boxes to done"


@pytest.mark.parametrize(
    "message, title, status",
    [
        ("Move Go to gym to done", "Go to gym", "done"),
        ("move the task Write report to in progress", "Write report", "in_progress"),
        ("mark Write report as completed", "Write report", "done"),
        ("Set Write report as To-Do", "Write report", "todo"),
        ("update the status of Write report to done", "Write report", "done"),
        ("Write report is done", "Write report", "done"),
        ("can you put Laundry to in_progress?", "Laundry", "in_progress"),
    ],
)
def test_move_phrasings(message, title, status):
    assert parse_command(message) == MoveCommand(title=title, status=status)


def test_status_question_stays_chat():
    result = parse_command("which task is done?")
    assert result == ChatCommand(message="which task is done?")


def test_add_emoji_emoji_first():
    result = parse_command("Add 🚀 to Ship release")
    assert result == EmojiCommand(title="Ship release", emoji="🚀")


def test_add_emoji_title_first():
    result = parse_command("give Go to gym to 🚀")
    assert result == EmojiCommand(title="Go to gym", emoji="🚀")


def test_add_emoji_with_emoji_word():
    result = parse_command("add an emoji 🔥 to the task Ship release")
    assert result == EmojiCommand(title="Ship release", emoji="🔥")


def test_add_without_emoji_is_not_emoji_command():
    result = parse_command("add milk to the shopping list")
    assert not isinstance(result, EmojiCommand)


def test_update_due_date():
    result = parse_command("Change the due date of Ship release to next friday")
    assert result == UpdateCommand(title="Ship release", field="due_date", value="next friday")


def test_update_time_estimate_alias():
    result = parse_command("set the time estimate for Ship release to 2h.")
    assert result == UpdateCommand(title="Ship release", field="time_estimate", value="2h")


def test_update_priority():
    result = parse_command("update priority of Ship release to urgent")
    assert result == UpdateCommand(title="Ship release", field="priority", value="urgent")


def test_update_description_keeps_punctuation():
    result = parse_command("Update the description of Ship release to Include the changelog.")
    assert result == UpdateCommand(
        title="Ship release",
        field="description",
        value="Include the changelog.",
    )


@pytest.mark.parametrize(
    "message, title",
    [
        ("Delete task Ship release", "Ship release"),
        ("remove the task Buy milk", "Buy milk"),
        ('delete "Call mom"', "Call mom"),
    ],
)
def test_delete_phrasings(message, title):
    assert parse_command(message) == DeleteCommand(title=title)


def test_delete_comes_before_list():
    assert parse_command("delete list") == DeleteCommand(title="list")


@pytest.mark.parametrize("message", ["List my tasks", "list", "show me my tasks", "Show tasks"])
def test_list_phrasings(message):
    assert parse_command(message) == ListCommand()


def test_show_without_tasks_is_chat():
    assert isinstance(parse_command("show me the weather"), ChatCommand)


def test_listing_word_is_not_list():
    assert isinstance(parse_command("what is a shortlisted item"), ChatCommand)


@pytest.mark.parametrize("message", ["help", "Help me please", "What can you do?"])
def test_help_phrasings(message):
    assert parse_command(message) == HelpCommand()


def test_unmatched_text_is_chat():
    result = parse_command("What should I focus on today?")
    assert result == ChatCommand(message="What should I focus on today?")
    assert result.to_payload() == {"intent": "chat", "message": "What should I focus on today?"}


def test_empty_text_is_empty_chat():
    assert parse_command("   ") == ChatCommand(message="")


def test_parsing_is_deterministic():
    message = "Create task: 🏃 Morning jog, 30m, tomorrow, work"
    assert parse_command(message) == parse_command(message)


def test_payload_includes_intent_tag():
    payload = parse_command("Move Go to gym to done").to_payload()
    assert payload == {"intent": "move", "title": "Go to gym", "status": "done"}
