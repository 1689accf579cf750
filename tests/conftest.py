"""
Pytest configuration for agent-orchestrator tests.
"""

import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

# Добавляем корень репозитория в sys.path для импортов без установки пакета.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from agent_orchestrator.models import AgentDescription, AgentMessage, AgentResponse  # noqa: E402


# Настройка anyio для async тестов
@pytest.fixture
def anyio_backend():
    """Use asyncio as the async backend."""
    return "asyncio"


class RecordingTransport:
    """
    Тестовый транспорт: записывает сообщения и возвращает заданный ответ.

    По умолчанию работает как echo — возвращает payload сообщения в `response`.
    """

    def __init__(
        self,
        name: str = "stub",
        response: Optional[dict[str, Any]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        intents: Optional[list[str]] = None,
    ) -> None:
        self.name = name
        self.response = response
        self.error = error
        self.delay = delay
        self.intents = intents or []
        self.messages: list[AgentMessage] = []
        self.cancelled = False
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.messages)

    async def handle(self, message: AgentMessage) -> AgentResponse:
        self.messages.append(message)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        if self.response is None:
            return AgentResponse.ok(dict(message.payload))
        return AgentResponse.ok(self.response)

    async def describe(self) -> AgentDescription:
        if self.error is not None:
            raise self.error
        return AgentDescription(name=self.name, intents=self.intents)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Фабрика тестовых транспортов."""
    return RecordingTransport
