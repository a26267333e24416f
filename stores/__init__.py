"""Task store contract and the built-in JSON implementation.

The hosted backend owns persistence in production; anything implementing
``TaskStore`` can be handed to the orchestrator and the web API.
"""

from __future__ import annotations

from stores.base import Task, TaskNotFoundError, TaskStore, TaskStoreError
from stores.json_store import JsonTaskStore

__all__ = ["Task", "TaskNotFoundError", "TaskStore", "TaskStoreError", "JsonTaskStore"]
