from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(filename=".env.workers", raise_error_if_not_found=False))
load_dotenv(find_dotenv())

DEFAULT_HOST = "0.0.0.0"
DEFAULT_CALENDAR_PORT = 8081
DEFAULT_TODO_PORT = 8082


@dataclass
class WorkerConfig:
    """
    Параметры запуска демо-воркеров.
    """

    host: str = DEFAULT_HOST
    calendar_port: int = DEFAULT_CALENDAR_PORT
    todo_port: int = DEFAULT_TODO_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "WorkerConfig":
        return cls(
            host=os.getenv("HOST", DEFAULT_HOST),
            calendar_port=int(os.getenv("CALENDAR_PORT", str(DEFAULT_CALENDAR_PORT))),
            todo_port=int(os.getenv("TODO_PORT", str(DEFAULT_TODO_PORT))),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
