"""Centralize defaults and environment lookups for the task assistant.

Every accessor takes an optional ``env`` mapping used instead of
``os.environ`` so tests can pass plain dicts. Unparseable or out-of-range
values fall back to the default rather than failing at startup.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, TypeVar

from dotenv import load_dotenv

load_dotenv()

N = TypeVar("N", int, float)

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_TASKS_PATH = "data/tasks.json"
_DEFAULT_CHAT_TIMEOUT_SECONDS = 30.0
_DEFAULT_CONVERSATION_MAX_TURNS = 20
_DEFAULT_LOGGING_ENABLED = True
_DEFAULT_LOG_DIR = "logs"
_TURN_LOG_FILENAME = "turns.jsonl"
_DEFAULT_LOG_MAX_BYTES = 1_000_000
_DEFAULT_LOG_BACKUP_COUNT = 5
_DEFAULT_LOG_LEVEL = "INFO"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_DEFAULT_WEB_UI_HOST = "127.0.0.1"
_DEFAULT_WEB_UI_PORT = 9000

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def _source(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return env if env is not None else os.environ


def _env_text(env: Optional[Mapping[str, str]], key: str) -> Optional[str]:
    value = (_source(env).get(key) or "").strip()
    return value or None


def _env_number(
    env: Optional[Mapping[str, str]],
    key: str,
    default: N,
    cast: Callable[[str], N],
    accept: Callable[[N], bool],
) -> N:
    raw = _env_text(env, key)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        return default
    return value if accept(value) else default


def _env_int(env, key: str, default: int, *, minimum: int = 0, maximum: Optional[int] = None) -> int:
    return _env_number(
        env,
        key,
        default,
        int,
        lambda value: value >= minimum and (maximum is None or value <= maximum),
    )


def _env_float(env, key: str, default: float) -> float:
    return _env_number(env, key, default, float, lambda value: value > 0)


# ---------------------------------------------------------------------------
# Task storage and chat model
# ---------------------------------------------------------------------------
def get_tasks_path(env: Dict[str, str] | None = None) -> Path:
    """Return the JSON file backing the local task store (``TASKS_PATH``)."""

    return Path(_env_text(env, "TASKS_PATH") or _DEFAULT_TASKS_PATH)


def get_chat_completion_url(env: Dict[str, str] | None = None) -> str | None:
    """Return the streaming chat endpoint used for free-form questions.

    Args:
        env: Optional mapping used instead of ``os.environ`` to simplify testing.

    Returns:
        ``CHAT_COMPLETION_URL`` if set, otherwise ``None`` (fallback disabled).
    """

    return _env_text(env, "CHAT_COMPLETION_URL")


def get_chat_api_key(env: Dict[str, str] | None = None) -> str | None:
    return _env_text(env, "CHAT_API_KEY")


def get_chat_timeout(env: Dict[str, str] | None = None) -> float:
    """HTTP timeout in seconds for chat completion requests; must be positive."""

    return _env_float(env, "CHAT_TIMEOUT_SECONDS", _DEFAULT_CHAT_TIMEOUT_SECONDS)


def get_conversation_max_turns(env: Dict[str, str] | None = None) -> int:
    """Number of chat messages kept in memory and sent to the model."""

    return _env_int(env, "CONVERSATION_MAX_TURNS", _DEFAULT_CONVERSATION_MAX_TURNS, minimum=1)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def is_logging_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether the JSONL turn log is written."""

    raw = (_env_text(env, "LOGGING_ENABLED") or "").lower()
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    return _DEFAULT_LOGGING_ENABLED


def get_log_dir(env: Dict[str, str] | None = None) -> Path:
    return Path(_env_text(env, "LOG_DIR") or _DEFAULT_LOG_DIR)


def get_turn_log_path(env: Dict[str, str] | None = None) -> Path:
    """Return ``<LOG_DIR>/turns.jsonl``."""

    return get_log_dir(env) / _TURN_LOG_FILENAME


def get_log_max_bytes(env: Dict[str, str] | None = None) -> int:
    """Size in bytes before the turn log rotates; 0 disables rotation."""

    return _env_int(env, "LOG_MAX_BYTES", _DEFAULT_LOG_MAX_BYTES)


def get_log_backup_count(env: Dict[str, str] | None = None) -> int:
    return _env_int(env, "LOG_BACKUP_COUNT", _DEFAULT_LOG_BACKUP_COUNT)


def get_log_level(env: Dict[str, str] | None = None) -> str:
    """Root logging level name for ``logging.basicConfig``."""

    value = (_env_text(env, "LOG_LEVEL") or _DEFAULT_LOG_LEVEL).upper()
    return value if value in _LOG_LEVELS else _DEFAULT_LOG_LEVEL


# ---------------------------------------------------------------------------
# Web server
# ---------------------------------------------------------------------------
def get_web_ui_host(env: Dict[str, str] | None = None) -> str:
    return _env_text(env, "WEB_UI_HOST") or _DEFAULT_WEB_UI_HOST


def get_web_ui_port(env: Dict[str, str] | None = None) -> int:
    return _env_int(env, "WEB_UI_PORT", _DEFAULT_WEB_UI_PORT, minimum=1, maximum=65535)
