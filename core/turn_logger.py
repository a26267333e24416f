"""Structured JSONL logging of chat turns.

Each handled message produces one ``TurnRecord`` describing what the parser
decided, which store call ran and what the user was told. Records are
appended as newline-delimited JSON with size-based rotation so a long-running
assistant never grows the file without bound.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any, Dict, Optional


def _utc_now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


@dataclass
class TurnRecord:
    """WHAT: structured schema for a single chat turn.

    WHY: replaying a turn needs the parsed intent and fields, the store action
    and its outcome, and the exact reply text.
    HOW: plain dataclass plus a ``new`` factory that stamps the timestamp.
    """

    timestamp: str
    user_text: str
    intent: str
    command: Dict[str, Any] = field(default_factory=dict)
    handled: bool = True
    store_action: Optional[str] = None
    store_success: Optional[bool] = None
    fallback_triggered: bool = False
    response_text: str = ""
    latency_ms: Optional[int] = None

    @classmethod
    def new(
        cls,
        *,
        user_text: str,
        intent: str,
        command: Dict[str, Any] | None = None,
        handled: bool = True,
        store_action: Optional[str] = None,
        store_success: Optional[bool] = None,
        fallback_triggered: bool = False,
        response_text: str = "",
        latency_ms: Optional[int] = None,
    ) -> "TurnRecord":
        return cls(
            timestamp=_utc_now(),
            user_text=user_text,
            intent=intent,
            command=command or {},
            handled=handled,
            store_action=store_action,
            store_success=store_success,
            fallback_triggered=fallback_triggered,
            response_text=response_text,
            latency_ms=latency_ms,
        )


class TurnLogger:
    """WHAT: append-only JSONL logger for chat turns.

    WHY: task edits made through chat should be traceable after the fact.
    HOW: ``log_turn`` serializes the record, rotates the file when it would
    exceed ``max_bytes`` and appends one line; disabled loggers do nothing.
    """

    def __init__(
        self,
        *,
        turn_log_path: Path,
        enabled: bool = True,
        max_bytes: int = 0,
        backup_count: int = 0,
    ) -> None:
        self._turn_log_path = turn_log_path
        self._enabled = enabled
        self._max_bytes = max_bytes
        self._backup_count = backup_count

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def path(self) -> Path:
        return self._turn_log_path

    def log_turn(self, record: TurnRecord) -> None:
        if not self._enabled:
            return
        self._append_json_line(self._turn_log_path, asdict(record))

    def _append_json_line(self, path: Path, payload: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(payload, ensure_ascii=False)
        self._rotate_if_needed(path, len(line.encode("utf-8")) + 1)
        with self._open_file(path) as handle:
            handle.write(line)
            handle.write("\n")

    @staticmethod
    def _open_file(path: Path) -> IO[str]:
        return path.open("a", encoding="utf-8")

    def _rotate_if_needed(self, path: Path, incoming_bytes: int) -> None:
        """Shift ``turns.jsonl`` -> ``turns.jsonl.1`` -> ... when the size limit is hit."""
        if self._max_bytes <= 0:
            return
        if not path.exists():
            return

        current_size = path.stat().st_size
        if current_size + incoming_bytes <= self._max_bytes:
            return

        if self._backup_count <= 0:
            path.unlink()
            return

        for index in range(self._backup_count - 1, 0, -1):
            src = Path(f"{path}.{index}")
            dst = Path(f"{path}.{index + 1}")
            if src.exists():
                src.replace(dst)

        rotated = Path(f"{path}.1")
        if rotated.exists():
            rotated.unlink()
        path.replace(rotated)


__all__ = ["TurnRecord", "TurnLogger"]
