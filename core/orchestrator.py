"""Coordinate one assistant turn between the command parser, the executor and the chat model.

Every message first goes through the deterministic command parser. Task
commands are executed against the store right away; only unclassified text is
handed to the remote chat model together with the conversation history and a
snapshot of the board.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict, List, Optional

from core.chat_fallback import ERROR_REPLY, ChatFallback
from core.command_executor import CommandExecutor, CommandOutcome
from core.command_parser import parse_command
from core.conversation_memory import ConversationMemory
from core.parsers.types import ChatCommand
from core.turn_logger import TurnLogger, TurnRecord
from stores.base import Task, TaskStore

logger = logging.getLogger(__name__)

EMPTY_MESSAGE_REPLY = 'Type a message, or "help" to see what I can do.'


@dataclass
class ChatTurn:
    """Structured result for a single assistant turn."""

    text: str
    user_text: str
    intent: str
    command: Dict[str, Any]
    handled: bool
    store_action: Optional[str]
    success: Optional[bool]
    task: Optional[Task]
    fallback_triggered: bool
    latency_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reply": self.text,
            "user_text": self.user_text,
            "intent": self.intent,
            "command": self.command,
            "handled": self.handled,
            "store_action": self.store_action,
            "success": self.success,
            "task": self.task.to_dict() if self.task else None,
            "fallback_triggered": self.fallback_triggered,
            "latency_ms": self.latency_ms,
        }


class Orchestrator:
    """Conversation loop: parse, execute or fall back, remember, log."""

    def __init__(
        self,
        store: TaskStore,
        fallback: ChatFallback,
        *,
        executor: Optional[CommandExecutor] = None,
        memory: Optional[ConversationMemory] = None,
        turn_logger: Optional[TurnLogger] = None,
    ) -> None:
        self._store = store
        self._fallback = fallback
        self._executor = executor if executor is not None else CommandExecutor(store)
        self._memory = memory if memory is not None else ConversationMemory()
        self._turn_logger = turn_logger

    @property
    def memory(self) -> ConversationMemory:
        return self._memory

    @property
    def store(self) -> TaskStore:
        return self._store

    def handle_message(self, message: str) -> str:
        """Convenience wrapper for CLI clients that only need the reply text."""
        return self.handle_message_with_details(message).text

    def handle_message_with_details(self, message: str) -> ChatTurn:
        """End-to-end turn execution.

        WHAT: classify the message, run the matching task command or ask the
        chat model, and record the exchange.
        WHY: CLI, web API and tests share one funnel so behaviour never diverges.
        HOW: read a fresh task snapshot, parse, hand task commands to the
        executor (one store call at most), stream the fallback for chat
        messages, then append both sides to memory and log the turn.
        """
        start = perf_counter()
        text = (message or "").strip()
        if not text:
            return ChatTurn(
                text=EMPTY_MESSAGE_REPLY,
                user_text="",
                intent="empty",
                command={},
                handled=False,
                store_action=None,
                success=None,
                task=None,
                fallback_triggered=False,
                latency_ms=0,
            )

        self._memory.add_user(text)
        command = parse_command(text)
        fallback_triggered = False
        tasks = self._read_tasks()

        if tasks is None:
            outcome = CommandOutcome(text=ERROR_REPLY, intent=command.intent, handled=False, success=False)
        elif isinstance(command, ChatCommand):
            fallback_triggered = True
            reply = self._fallback.general_answer(self._memory.history(), tasks)
            outcome = CommandOutcome(text=reply, intent=command.intent, handled=False)
        else:
            outcome = self._executor.execute(command, tasks)

        self._memory.add_assistant(outcome.text)
        latency_ms = int((perf_counter() - start) * 1000)
        turn = ChatTurn(
            text=outcome.text,
            user_text=text,
            intent=command.intent,
            command=command.to_payload(),
            handled=outcome.handled,
            store_action=outcome.store_action,
            success=outcome.success,
            task=outcome.task,
            fallback_triggered=fallback_triggered,
            latency_ms=latency_ms,
        )
        self._log_turn(turn)
        return turn

    def _read_tasks(self) -> Optional[List[Task]]:
        try:
            return list(self._store.list_tasks())
        except Exception:  # the loop must answer even when the store is down
            logger.exception("Could not load tasks for chat turn")
            return None

    def _log_turn(self, turn: ChatTurn) -> None:
        logger.info(
            "chat turn intent=%s handled=%s store_action=%s success=%s fallback=%s latency_ms=%d",
            turn.intent,
            turn.handled,
            turn.store_action,
            turn.success,
            turn.fallback_triggered,
            turn.latency_ms,
        )
        if not self._turn_logger:
            return
        try:
            self._turn_logger.log_turn(
                TurnRecord.new(
                    user_text=turn.user_text,
                    intent=turn.intent,
                    command=turn.command,
                    handled=turn.handled,
                    store_action=turn.store_action,
                    store_success=turn.success,
                    fallback_triggered=turn.fallback_triggered,
                    response_text=turn.text,
                    latency_ms=turn.latency_ms,
                )
            )
        except OSError:
            logger.exception("Could not write turn log to %s", self._turn_logger.path)


__all__ = ["ChatTurn", "Orchestrator", "EMPTY_MESSAGE_REPLY"]
