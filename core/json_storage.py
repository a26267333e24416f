"""Read and write the ``{"tasks": [...]}`` document behind the local task store.

The store rewrites the whole document on every mutation; writing to a sibling
temp file and swapping it in keeps a crash from leaving half a task list.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List

TASKS_KEY = "tasks"


def load_task_document(path: Path) -> List[Dict[str, Any]]:
    """Return the raw task rows stored at ``path``.

    A missing or blank file is an empty board. Malformed JSON raises
    ``json.JSONDecodeError``; a document without a ``tasks`` list raises
    ``ValueError``.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    if not raw.strip():
        return []
    document = json.loads(raw)
    rows = document.get(TASKS_KEY) if isinstance(document, dict) else None
    if not isinstance(rows, list):
        raise ValueError(f"Invalid tasks format in {path}: '{TASKS_KEY}' must be a list")
    return [row for row in rows if isinstance(row, dict)]


def save_task_document(path: Path, rows: List[Dict[str, Any]]) -> None:
    """Atomically replace ``path`` with ``rows``; emoji titles stay readable on disk."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump({TASKS_KEY: rows}, handle, indent=2, ensure_ascii=False)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


__all__ = ["TASKS_KEY", "load_task_document", "save_task_document"]
