"""
Общий каркас воркера: `/v1/meta` и `/v1/handle` поверх таблицы обработчиков.

Воркер регистрирует по одному обработчику на операцию. Обработчик получает
payload и возвращает словарь `response`; ошибки валидации payload
превращаются в 400 с plain-text сообщением.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError

from agent_orchestrator.models import AgentDescription, AgentMessage, AgentResponse

logger = logging.getLogger(__name__)

ActionHandler = Callable[[dict[str, Any]], dict[str, Any]]


class PayloadError(ValueError):
    """Payload не содержит обязательного ключа или значение имеет неверный тип."""


def require_str(payload: dict[str, Any], key: str) -> str:
    """
    Достать обязательное строковое поле из payload.

    Raises:
        PayloadError: Ключ отсутствует или значение не строка.
    """
    value = payload.get(key)
    if not isinstance(value, str):
        raise PayloadError(f"payload.{key} must be a string")
    return value


def create_worker_app(name: str, handlers: dict[str, ActionHandler]) -> FastAPI:
    """
    Создать FastAPI-приложение воркера.

    Args:
        name: Имя воркера (возвращается в /v1/meta).
        handlers: Отображение action -> обработчик.

    Returns:
        FastAPI-приложение с эндпоинтами /v1/meta, /v1/handle и /health.
    """
    app = FastAPI(title=f"{name}-agent", version="0.1.0")
    description = AgentDescription(name=name, intents=list(handlers))

    @app.get("/health")
    async def health() -> PlainTextResponse:
        return PlainTextResponse("ok")

    @app.get("/v1/meta")
    async def meta() -> dict[str, Any]:
        return description.model_dump()

    @app.post("/v1/handle")
    async def handle(request: Request) -> Response:
        raw = await request.body()
        try:
            message = AgentMessage.model_validate(json.loads(raw))
        except (ValueError, ValidationError):
            return PlainTextResponse("invalid request body", status_code=400)

        handler = handlers.get(message.action)
        if handler is None:
            logger.info("%s: unknown action '%s' (request %s)", name, message.action, message.id)
            return PlainTextResponse("unknown action", status_code=400)

        try:
            result = handler(message.payload)
        except PayloadError as e:
            return PlainTextResponse(str(e), status_code=400)

        logger.info("%s: handled %s (request %s)", name, message.action, message.id)
        return JSONResponse(AgentResponse.ok(result).model_dump(exclude_none=True))

    return app
