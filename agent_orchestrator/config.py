from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .nlu import DEFAULT_PROVIDER
from .transport import HttpTransportConfig

# Приоритетно загружаем .env.orchestrator, затем общий .env
load_dotenv(find_dotenv(filename=".env.orchestrator", raise_error_if_not_found=False))
load_dotenv(find_dotenv())

# Значения по умолчанию; переопределяются переменными окружения.
DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
DEFAULT_CALENDAR_URL = "http://localhost:8081"
DEFAULT_TODO_URL = "http://localhost:8082"
DEFAULT_AGENT_TIMEOUT_SECONDS = 10.0
DEFAULT_REQUEST_TIMEOUT_SECONDS = 15.0
DEFAULT_LOG_LEVEL = "INFO"


def _get_bool(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "y", "on"}


def _get_optional_float(value: str | None, *, default: Optional[float]) -> Optional[float]:
    if value is None or value.strip() == "":
        return default
    parsed = float(value)
    return parsed if parsed > 0 else None


def _get_positive_float(name: str, *, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    parsed = float(value)
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return parsed


@dataclass
class OrchestratorConfig:
    """
    Хранит параметры HTTP-сервера оркестратора и адреса воркеров.
    """

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    calendar_url: str = DEFAULT_CALENDAR_URL
    todo_url: str = DEFAULT_TODO_URL
    nlu_provider: str = DEFAULT_PROVIDER
    agent_timeout_seconds: float = DEFAULT_AGENT_TIMEOUT_SECONDS
    request_timeout_seconds: Optional[float] = DEFAULT_REQUEST_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL
    enable_monitoring: bool = False
    otel_endpoint: Optional[str] = None
    otel_service_name: Optional[str] = None

    @classmethod
    def from_env(cls) -> "OrchestratorConfig":
        """
        Построить конфигурацию из переменных окружения.

        REQUEST_TIMEOUT_SECONDS <= 0 отключает дедлайн оркестратора
        (остаётся только тайм-аут транспорта). AGENT_TIMEOUT_SECONDS обязан
        быть положительным: иначе ValueError при старте.
        """
        return cls(
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            host=os.getenv("HOST", DEFAULT_HOST),
            calendar_url=os.getenv("CALENDAR_URL") or DEFAULT_CALENDAR_URL,
            todo_url=os.getenv("TODO_URL") or DEFAULT_TODO_URL,
            nlu_provider=os.getenv("NLU_PROVIDER") or DEFAULT_PROVIDER,
            agent_timeout_seconds=_get_positive_float(
                "AGENT_TIMEOUT_SECONDS",
                default=DEFAULT_AGENT_TIMEOUT_SECONDS,
            ),
            request_timeout_seconds=_get_optional_float(
                os.getenv("REQUEST_TIMEOUT_SECONDS"),
                default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
            ),
            log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            enable_monitoring=_get_bool(os.getenv("ENABLE_MONITORING")),
            otel_endpoint=os.getenv("OTEL_ENDPOINT"),
            otel_service_name=os.getenv("OTEL_SERVICE_NAME"),
        )

    def agent_urls(self) -> dict[str, str]:
        """Базовые URL воркеров по именам агентов."""
        return {
            "calendar": self.calendar_url,
            "todo": self.todo_url,
        }

    def agent_configs(self) -> list[HttpTransportConfig]:
        """
        Сконструировать конфигурации HTTP-транспортов для всех агентов.
        """
        return [
            HttpTransportConfig(name=name, url=url, timeout_seconds=self.agent_timeout_seconds)
            for name, url in self.agent_urls().items()
        ]
