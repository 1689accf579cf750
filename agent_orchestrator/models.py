"""
Модели данных оркестратора: структурированный запрос и wire-модели обмена с воркерами.

Определяет структуры данных для:
- StructuredRequest — результат разбора текста парсером намерений
- AgentMessage — запрос, отправляемый воркеру
- AgentResponse — ответ воркера
- AgentDescription — описание возможностей воркера (/v1/meta)
- QueryInput — тело входящего HTTP-запроса
"""

from __future__ import annotations

import uuid
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


def new_request_id() -> str:
    """Сгенерировать уникальный идентификатор запроса."""
    return str(uuid.uuid4())


class AgentMessage(BaseModel):
    """
    Wire-запрос к воркеру.

    Подмножество StructuredRequest: имя агента потребляется маршрутизацией
    и воркеру не передаётся.

    Attributes:
        id: Идентификатор запроса, сгенерированный парсером.
        action: Имя операции внутри воркера.
        payload: Произвольный JSON-словарь параметров операции.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "id": "5f0c7a4e-2d3b-4d8e-9b61-0c1f3e2a9d77",
                    "action": "create_event",
                    "payload": {"title": "schedule a meeting with bob"},
                }
            ]
        }
    )

    id: str = Field(..., min_length=1, description="Идентификатор запроса")
    action: str = Field(..., min_length=1, description="Имя операции воркера")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Параметры операции (схема определяется воркером)",
    )


class StructuredRequest(BaseModel):
    """
    Структурированное намерение, полученное из свободного текста.

    Модель неизменяема: `id` присваивается один раз при разборе
    и дальше не переписывается.

    Attributes:
        id: Уникальный идентификатор, генерируется при создании.
        agent: Имя целевого воркера (ключ в реестре).
        action: Имя операции внутри воркера.
        payload: Произвольный JSON-словарь параметров.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=new_request_id,
        min_length=1,
        description="Уникальный идентификатор запроса",
    )
    agent: str = Field(
        ...,
        min_length=1,
        description="Имя целевого агента",
        examples=["calendar", "todo"],
    )
    action: str = Field(
        ...,
        min_length=1,
        description="Имя операции внутри агента",
        examples=["create_event", "add_task"],
    )
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Параметры операции",
    )

    def to_message(self) -> AgentMessage:
        """Построить AgentMessage для отправки воркеру."""
        return AgentMessage(id=self.id, action=self.action, payload=dict(self.payload))


class AgentResponse(BaseModel):
    """
    Ответ воркера на `/v1/handle`.

    Attributes:
        status: "ok" при успехе, "error" при отказе воркера.
        response: Результат операции (присутствует только при успехе).
        message: Описание ошибки, если воркер его передал.
    """

    model_config = ConfigDict(extra="ignore")

    status: Literal["ok", "error"] = Field(..., description="Статус выполнения")
    response: Optional[dict[str, Any]] = Field(
        default=None,
        description="Результат операции",
    )
    message: Optional[str] = Field(
        default=None,
        description="Описание ошибки (если status='error')",
    )

    @classmethod
    def ok(cls, response: Optional[dict[str, Any]] = None) -> AgentResponse:
        """Создать успешный ответ."""
        return cls(status="ok", response=response or {})

    @classmethod
    def error(cls, message: str) -> AgentResponse:
        """Создать ответ с ошибкой."""
        return cls(status="error", response=None, message=message)

    @property
    def is_ok(self) -> bool:
        """Проверить, успешен ли ответ."""
        return self.status == "ok"


class AgentDescription(BaseModel):
    """Описание возможностей воркера (справочная информация, не используется при маршрутизации)."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, description="Имя воркера")
    intents: list[str] = Field(
        default_factory=list,
        description="Поддерживаемые операции",
        examples=[["create_event", "list_availability"]],
    )

    def supports(self, action: str) -> bool:
        """Проверить, заявлена ли операция воркером."""
        return action in self.intents


class QueryInput(BaseModel):
    """Тело запроса `POST /v1/query`."""

    input: str = Field(..., description="Команда пользователя в свободной форме")
