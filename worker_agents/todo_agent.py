"""
Демо-воркер списка задач.
"""

from __future__ import annotations

import uuid
from threading import Lock
from typing import Any, Optional

from fastapi import FastAPI

from .base import create_worker_app, require_str


class TodoStore:
    """In-memory хранилище задач."""

    def __init__(self) -> None:
        self._tasks: list[dict[str, Any]] = []
        self._lock = Lock()

    def add_task(self, payload: dict[str, Any]) -> dict[str, Any]:
        task = {"id": str(uuid.uuid4()), "task": require_str(payload, "task")}
        with self._lock:
            self._tasks.append(task)
        return {"task": task}

    def list_tasks(self, payload: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            return {"tasks": [dict(t) for t in self._tasks]}


def create_todo_app(store: Optional[TodoStore] = None) -> FastAPI:
    store = store or TodoStore()
    app = create_worker_app(
        "todo",
        {
            "add_task": store.add_task,
            "list_tasks": store.list_tasks,
        },
    )
    app.state.store = store
    return app
