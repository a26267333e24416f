"""Execute parsed task commands against a task store and phrase the reply.

Every branch issues at most one store call. Expected failures (unknown task,
unparseable value, store rejection) come back as ordinary reply text so the
conversation loop never sees an exception from here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from core.parser_utils import format_smart_date
from core.parsers.types import (
    ChatCommand,
    CreateCommand,
    DeleteCommand,
    EmojiCommand,
    HelpCommand,
    ListCommand,
    MoveCommand,
    ParsedCommand,
    UpdateCommand,
)
from core.task_fields import DEFAULT_PRIORITY, DEFAULT_STATUS, STATUSES, status_label
from core.task_resolver import find_task, sample_titles
from core.text_parsing import format_time_estimate, strip_leading_emoji
from core.updatable_fields import UpdatableField
from stores.base import Task, TaskStore

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Here's what I can do with your tasks:\n"
    '- **Create**: "Create task: 🏃 Morning jog, 30m, tomorrow, high"\n'
    '- **Move**: "Move Morning jog to in progress" or "Mark Morning jog as done"\n'
    '- **Emoji**: "Add 🚀 to Ship release"\n'
    '- **Update**: "Set the due date of Ship release to next friday" '
    "(time, due date, priority or description)\n"
    '- **Delete**: "Delete task Ship release"\n'
    '- **List**: "List my tasks"\n'
    "Durations look like 30m, 2h, 1h 30m or 1.5 hours; dates like today, tomorrow, "
    "next monday, in 3 days or 2025-12-31; priorities are high/urgent, medium/work "
    "or low/personal.\n"
    "Anything else goes to the AI assistant."
)


@dataclass
class CommandOutcome:
    """Result of executing one command: the reply plus what happened to the store."""

    text: str
    intent: str
    handled: bool = True
    store_action: Optional[str] = None
    success: Optional[bool] = None
    task: Optional[Task] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "intent": self.intent,
            "handled": self.handled,
            "store_action": self.store_action,
            "success": self.success,
            "task": self.task.to_dict() if self.task else None,
        }


class CommandExecutor:
    """Map a ``ParsedCommand`` onto one ``TaskStore`` call and a reply string."""

    def __init__(self, store: TaskStore) -> None:
        self._store = store

    def execute(self, command: ParsedCommand, tasks: Sequence[Task]) -> CommandOutcome:
        """Run ``command`` against the caller's current ``tasks`` snapshot."""

        if isinstance(command, CreateCommand):
            return self._create(command)
        if isinstance(command, MoveCommand):
            return self._move(command, tasks)
        if isinstance(command, EmojiCommand):
            return self._emoji(command, tasks)
        if isinstance(command, UpdateCommand):
            return self._update(command, tasks)
        if isinstance(command, DeleteCommand):
            return self._delete(command, tasks)
        if isinstance(command, ListCommand):
            return CommandOutcome(text=format_task_summary(tasks), intent=command.intent)
        if isinstance(command, HelpCommand):
            return CommandOutcome(text=HELP_TEXT, intent=command.intent)
        if isinstance(command, ChatCommand):
            return CommandOutcome(text="", intent=command.intent, handled=False)
        raise TypeError(f"Unsupported command type: {type(command).__name__}")

    # --- Branches ------------------------------------------------------------
    def _create(self, command: CreateCommand) -> CommandOutcome:
        title = command.title.strip()
        if not title:
            return CommandOutcome(
                text='❌ Please give the task a title, e.g. "Create task: Buy milk, tomorrow".',
                intent=command.intent,
                success=False,
            )
        return self._call_store(
            command.intent,
            "create",
            lambda: self._store.create_task(
                title,
                status=command.status,
                priority=command.priority,
                due_date=command.due_date,
                time_estimate=command.time_estimate,
            ),
            format_created,
        )

    def _move(self, command: MoveCommand, tasks: Sequence[Task]) -> CommandOutcome:
        task = find_task(command.title, tasks)
        if not task:
            return _not_found(command.intent, command.title, tasks)
        return self._call_store(
            command.intent,
            "update",
            lambda: self._store.update_task(task.id, status=command.status),
            lambda updated: f'✅ Moved "{updated.title}" to {status_label(updated.status)}.',
        )

    def _emoji(self, command: EmojiCommand, tasks: Sequence[Task]) -> CommandOutcome:
        task = find_task(command.title, tasks)
        if not task:
            return _not_found(command.intent, command.title, tasks)
        if not command.emoji:
            return CommandOutcome(text="❌ Which emoji should I add?", intent=command.intent, success=False)
        old_title = task.title
        new_title = f"{command.emoji} {strip_leading_emoji(old_title).strip()}".strip()
        return self._call_store(
            command.intent,
            "update",
            lambda: self._store.update_task(task.id, title=new_title),
            lambda updated: f'✅ Updated "{old_title}" → "{updated.title}".',
        )

    def _update(self, command: UpdateCommand, tasks: Sequence[Task]) -> CommandOutcome:
        field = UpdatableField.from_store_field(command.field)
        if field is None:
            return CommandOutcome(
                text=f"❌ I can't update the {command.field} of a task.",
                intent=command.intent,
                success=False,
            )
        task = find_task(command.title, tasks)
        if not task:
            return _not_found(command.intent, command.title, tasks)
        value = field.normalize(command.value)
        if value is None:
            return CommandOutcome(
                text=f'❌ I couldn\'t understand "{command.value}" as a {field.label}. Try {field.expected_format}.',
                intent=command.intent,
                success=False,
            )
        return self._call_store(
            command.intent,
            "update",
            lambda: self._store.update_task(task.id, **{field.store_field: value}),
            lambda updated: f'✅ Set the {field.label} of "{updated.title}" to {field.format_value(value)}.',
        )

    def _delete(self, command: DeleteCommand, tasks: Sequence[Task]) -> CommandOutcome:
        task = find_task(command.title, tasks)
        if not task:
            return _not_found(command.intent, command.title, tasks)

        def _remove() -> Task:
            self._store.delete_task(task.id)
            return task

        return self._call_store(
            command.intent,
            "delete",
            _remove,
            lambda removed: f'🗑️ Deleted "{removed.title}".',
        )

    # --- Store boundary ------------------------------------------------------
    def _call_store(
        self,
        intent: str,
        action: str,
        call: Callable[[], Task],
        describe: Callable[[Task], str],
    ) -> CommandOutcome:
        """Issue the single store call for a command and convert failures to text."""
        try:
            task = call()
        except Exception:  # store failures of any kind surface as a retry hint
            logger.exception("Task store %s failed for %s command", action, intent)
            return CommandOutcome(
                text=f"❌ Failed to {_FAILURE_VERBS.get(intent, action)} the task. Please try again.",
                intent=intent,
                store_action=action,
                success=False,
            )
        return CommandOutcome(text=describe(task), intent=intent, store_action=action, success=True, task=task)


_FAILURE_VERBS = {
    "create": "create",
    "move": "move",
    "emoji": "update",
    "update": "update",
    "delete": "delete",
}


def _not_found(intent: str, query: str, tasks: Sequence[Task]) -> CommandOutcome:
    message = f'❌ I couldn\'t find a task matching "{query}".'
    samples = sample_titles(tasks)
    if samples:
        message += " Your tasks include: " + ", ".join(f'"{title}"' for title in samples) + "."
    return CommandOutcome(text=message, intent=intent, success=False)


    # WHAT: phrase a create confirmation naming the title and every non-default field.
    # WHY: users should see which inline metadata ("30m, tomorrow, urgent") was understood.
    # HOW: start from the title and append status/priority when they differ from defaults, then due date and estimate.
def format_created(task: Task) -> str:

    details: List[str] = []
    if task.status != DEFAULT_STATUS:
        details.append(f"in {status_label(task.status)}")
    if task.priority != DEFAULT_PRIORITY:
        details.append(f"{task.priority} priority")
    if task.due_date:
        details.append(f"due {format_smart_date(task.due_date)} ({task.due_date})")
    if task.time_estimate is not None:
        details.append(f"estimated {format_time_estimate(task.time_estimate) or '0m'}")
    message = f'✅ Created task "{task.title}"'
    if details:
        message += " (" + ", ".join(details) + ")"
    return message + "."


def format_task_line(task: Task) -> str:
    extras: List[str] = [task.priority]
    if task.due_date:
        extras.append(f"due {format_smart_date(task.due_date)}")
    estimate = format_time_estimate(task.time_estimate)
    if estimate:
        extras.append(estimate)
    return f"- {task.title} ({', '.join(extras)})"


def format_task_summary(tasks: Sequence[Task]) -> str:
    """Group tasks by status for the list command, skipping empty groups."""

    if not tasks:
        return 'You have no tasks yet. Try "Create task: Buy milk, tomorrow".'
    sections: List[str] = []
    for status in STATUSES:
        group = [task for task in tasks if task.status == status]
        if not group:
            continue
        lines = "\n".join(format_task_line(task) for task in group)
        sections.append(f"**{status_label(status)}** ({len(group)})\n{lines}")
    return "Here are your tasks:\n\n" + "\n\n".join(sections)


__all__ = [
    "HELP_TEXT",
    "CommandOutcome",
    "CommandExecutor",
    "format_created",
    "format_task_line",
    "format_task_summary",
]
