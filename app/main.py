"""Assemble the orchestrator and run the interactive CLI loop."""

from __future__ import annotations

import logging

from app.config import (
    get_chat_api_key,
    get_chat_completion_url,
    get_chat_timeout,
    get_conversation_max_turns,
    get_log_backup_count,
    get_log_level,
    get_log_max_bytes,
    get_tasks_path,
    get_turn_log_path,
    is_logging_enabled,
)
from core.board_stats import compute_board_stats
from core.chat_fallback import ChatFallback
from core.conversation_memory import ConversationMemory
from core.orchestrator import Orchestrator
from core.turn_logger import TurnLogger
from stores import JsonTaskStore, TaskStore, TaskStoreError

logger = logging.getLogger(__name__)


# -- Orchestrator construction -------------------------------------------------
def build_orchestrator(store: TaskStore | None = None) -> Orchestrator:
    """Wire up the assistant for the CLI and the web API.

    WHAT: instantiate the task store, chat fallback client, turn logger and
    conversation memory.
    WHY: every entry point must share identical wiring so a command behaves the
    same from the terminal and from the browser.
    HOW: pull runtime configuration from ``app.config`` helpers and hand the
    resulting instances to ``core.orchestrator.Orchestrator``.
    """
    task_store = store or JsonTaskStore(get_tasks_path())
    fallback = ChatFallback(
        get_chat_completion_url(),
        get_chat_api_key(),
        timeout=get_chat_timeout(),
    )
    turn_logger = TurnLogger(
        turn_log_path=get_turn_log_path(),
        enabled=is_logging_enabled(),
        max_bytes=get_log_max_bytes(),
        backup_count=get_log_backup_count(),
    )
    memory = ConversationMemory(max_turns=get_conversation_max_turns())
    return Orchestrator(task_store, fallback, memory=memory, turn_logger=turn_logger)


def configure_logging() -> None:
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# -- Interactive CLI loop ------------------------------------------------------
_EXIT_WORDS = {"quit", "exit"}
_CLEAR_WORD = "clear"


def _startup_banner(orchestrator: Orchestrator) -> str:
    try:
        stats = compute_board_stats(orchestrator.store.list_tasks())
    except TaskStoreError:
        logger.exception("Could not read the board at startup")
        return "Task assistant ready (board unavailable)."
    return (
        f"Task assistant ready: {stats.total} tasks, {stats.todo} to do, "
        f"{stats.in_progress} in progress, {stats.done} done ({stats.completion_rate}% complete)."
    )


def main() -> None:
    """Terminal chat against the local board.

    WHAT: forward each line to the orchestrator and print the reply.
    WHY: exercising commands from a shell is the quickest way to check the
    grammar against a real task file.
    HOW: reuse ``build_orchestrator`` (same wiring as the web API); "clear"
    forgets the conversation, "quit"/"exit" or EOF/Ctrl-C stop the loop.
    """
    configure_logging()
    orchestrator = build_orchestrator()
    print(_startup_banner(orchestrator))
    print('Type "help" for commands, "clear" to forget the conversation, "quit" to stop.')

    while True:
        try:
            message = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        command = message.strip().lower()
        if command in _EXIT_WORDS:
            break
        if command == _CLEAR_WORD:
            orchestrator.memory.clear()
            print("Conversation cleared.\n")
            continue

        print(orchestrator.handle_message(message) + "\n")


if __name__ == "__main__":
    main()
