"""FastAPI application serving the board's chat assistant and task endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from app.main import build_orchestrator
from core.board_stats import compute_board_stats, favorite_tasks
from core.orchestrator import Orchestrator
from core.task_fields import DEFAULT_PRIORITY, DEFAULT_STATUS
from stores import TaskNotFoundError, TaskStore, TaskStoreError

logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    message: str


class TaskCreatePayload(BaseModel):
    title: str
    status: str = DEFAULT_STATUS
    priority: str = DEFAULT_PRIORITY
    due_date: Optional[str] = None
    time_estimate: Optional[int] = None
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class TaskUpdatePayload(BaseModel):
    title: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    time_estimate: Optional[int] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    position: Optional[int] = None


def _store_error(exc: TaskStoreError) -> HTTPException:
    """Missing tasks surface as 404, every other rejection as 400."""
    status_code = 404 if isinstance(exc, TaskNotFoundError) else 400
    return HTTPException(status_code=status_code, detail=str(exc))


def create_app(
    orchestrator: Optional[Orchestrator] = None,
    *,
    store: Optional[TaskStore] = None,
) -> FastAPI:
    """WHAT: instantiate FastAPI with the same orchestrator wiring as the CLI.

    WHY: the board UI drives both the chat panel and direct card edits, and
    both must hit the same store the assistant mutates.
    HOW: accept dependency overrides (tests), keep the orchestrator and its
    store on ``app.state`` and register the chat and task routes.
    """
    orch = orchestrator or build_orchestrator(store)
    task_store = store or orch.store

    app = FastAPI(title="Task Board Assistant API", version="1.0.0")
    app.state.orchestrator = orch
    app.state.store = task_store

    def _list_tasks() -> List[Any]:
        try:
            return app.state.store.list_tasks()
        except TaskStoreError as exc:
            logger.exception("Task listing failed")
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    @app.get("/api/health")
    def health_check() -> Dict[str, Any]:
        return {
            "status": "ok",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.post("/api/chat")
    def chat(payload: ChatRequest) -> Dict[str, Any]:
        """WHAT: run one assistant turn for the chat panel.

        WHY: the UI renders the reply and refreshes the board whenever a store
        action succeeded, so it needs the structured turn, not just the text.
        HOW: reject blank prompts, then return ``ChatTurn.to_dict()``.
        """
        message = payload.message.strip()
        if not message:
            raise HTTPException(status_code=400, detail="Message is required.")
        turn = app.state.orchestrator.handle_message_with_details(message)
        return turn.to_dict()

    @app.get("/api/tasks")
    def list_tasks() -> Dict[str, Any]:
        return {"tasks": [task.to_dict() for task in _list_tasks()]}

    @app.post("/api/tasks", status_code=201)
    def create_task(payload: TaskCreatePayload) -> Dict[str, Any]:
        data = payload.model_dump()
        title = data.pop("title")
        try:
            task = app.state.store.create_task(title, **data)
        except TaskStoreError as exc:
            raise _store_error(exc) from exc
        return {"task": task.to_dict()}

    @app.patch("/api/tasks/{task_id}")
    def update_task(task_id: str, payload: TaskUpdatePayload) -> Dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise HTTPException(status_code=400, detail="No fields to update.")
        try:
            task = app.state.store.update_task(task_id, **changes)
        except TaskStoreError as exc:
            raise _store_error(exc) from exc
        return {"task": task.to_dict()}

    @app.delete("/api/tasks/{task_id}")
    def delete_task(task_id: str) -> Dict[str, Any]:
        try:
            app.state.store.delete_task(task_id)
        except TaskStoreError as exc:
            raise _store_error(exc) from exc
        return {"deleted": task_id}

    @app.get("/api/stats")
    def stats() -> Dict[str, Any]:
        return compute_board_stats(_list_tasks()).to_dict()

    @app.get("/api/favorites")
    def favorites() -> Dict[str, Any]:
        return {"tasks": [task.to_dict() for task in favorite_tasks(_list_tasks())]}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    from app.config import get_web_ui_host, get_web_ui_port

    uvicorn.run(
        "app.web_api:app",
        host=get_web_ui_host(),
        port=get_web_ui_port(),
        reload=False,
    )
