"""
Демо-воркеры для локального запуска и end-to-end тестов оркестратора.

Каждый воркер — независимое FastAPI-приложение с эндпоинтами
`/v1/meta` и `/v1/handle`.
"""

from .base import PayloadError, create_worker_app, require_str
from .calendar_agent import CalendarStore, create_calendar_app
from .todo_agent import TodoStore, create_todo_app

__all__ = [
    "PayloadError",
    "create_worker_app",
    "require_str",
    "CalendarStore",
    "create_calendar_app",
    "TodoStore",
    "create_todo_app",
]
