"""Parsed command variants produced by the command parsers.

Each variant is a small frozen dataclass carrying only the fields its intent
needs; ``intent`` is a class-level tag so ``ParsedCommand`` works as a tagged
union for ``isinstance`` dispatch.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, Optional, Union

from core.task_fields import DEFAULT_PRIORITY, DEFAULT_STATUS


@dataclass(frozen=True)
class _CommandBase:
    intent: ClassVar[str] = ""

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"intent": self.intent}
        payload.update(asdict(self))
        return payload


@dataclass(frozen=True)
class CreateCommand(_CommandBase):
    intent: ClassVar[str] = "create"

    title: str
    status: str = DEFAULT_STATUS
    priority: str = DEFAULT_PRIORITY
    due_date: Optional[str] = None
    time_estimate: Optional[int] = None


@dataclass(frozen=True)
class MoveCommand(_CommandBase):
    intent: ClassVar[str] = "move"

    title: str
    status: str


@dataclass(frozen=True)
class EmojiCommand(_CommandBase):
    intent: ClassVar[str] = "emoji"

    title: str
    emoji: str


@dataclass(frozen=True)
class UpdateCommand(_CommandBase):
    intent: ClassVar[str] = "update"

    title: str
    field: str
    value: str


@dataclass(frozen=True)
class DeleteCommand(_CommandBase):
    intent: ClassVar[str] = "delete"

    title: str


@dataclass(frozen=True)
class ListCommand(_CommandBase):
    intent: ClassVar[str] = "list"


@dataclass(frozen=True)
class HelpCommand(_CommandBase):
    intent: ClassVar[str] = "help"


@dataclass(frozen=True)
class ChatCommand(_CommandBase):
    """Unclassified text; the conversation loop routes it to the chat model."""

    intent: ClassVar[str] = "chat"

    message: str


ParsedCommand = Union[
    CreateCommand,
    MoveCommand,
    EmojiCommand,
    UpdateCommand,
    DeleteCommand,
    ListCommand,
    HelpCommand,
    ChatCommand,
]


__all__ = [
    "CreateCommand",
    "MoveCommand",
    "EmojiCommand",
    "UpdateCommand",
    "DeleteCommand",
    "ListCommand",
    "HelpCommand",
    "ChatCommand",
    "ParsedCommand",
]
