from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from agent_orchestrator.main import configure_logging

from .calendar_agent import create_calendar_app
from .config import WorkerConfig
from .todo_agent import create_todo_app

logger = logging.getLogger(__name__)


def _serve(name: str, app: FastAPI, host: str, port: int, log_level: str) -> None:
    configure_logging(log_level)
    logger.info("%s agent running :%d", name, port)
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())


def run_calendar() -> None:
    """Точка входа воркера календаря."""
    config = WorkerConfig.from_env()
    _serve("calendar", create_calendar_app(), config.host, config.calendar_port, config.log_level)


def run_todo() -> None:
    """Точка входа воркера задач."""
    config = WorkerConfig.from_env()
    _serve("todo", create_todo_app(), config.host, config.todo_port, config.log_level)
