"""
HTTP-адаптер оркестратора.

Поднимает FastAPI-приложение с эндпоинтами:
- POST /v1/query  — разбор команды и вызов воркера;
- GET  /health    — проверка готовности;
- GET  /metrics   — Prometheus-метрики;
- GET  /v1/agents — справочные описания зарегистрированных воркеров.

Ошибки отдаются plain-text сообщением; машиночитаемый код ошибки
передаётся в заголовке X-Error-Type.
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Optional, TypeVar

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError

from .error_mapper import ErrorMapper
from .exceptions import InvalidQuery, RequestCancelled
from .models import AgentDescription, QueryInput
from .orchestrator import Orchestrator
from .telemetry import BaseMetrics, NullMetrics

logger = logging.getLogger(__name__)

ERROR_TYPE_HEADER = "X-Error-Type"
DISCONNECT_POLL_SECONDS = 0.05

T = TypeVar("T")


def create_app(
    orchestrator: Orchestrator,
    metrics: Optional[BaseMetrics] = None,
    *,
    title: str = "agent-orchestrator",
    version: str = "0.1.0",
) -> FastAPI:
    """
    Создать FastAPI-приложение вокруг готового оркестратора.

    Args:
        orchestrator: Оркестратор с зарегистрированными агентами.
        metrics: Метрики для /metrics (по умолчанию — метрики оркестратора).
        title: Название приложения.
        version: Версия приложения.

    Returns:
        Сконфигурированное FastAPI-приложение.
    """
    metrics = metrics or orchestrator.metrics or NullMetrics()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info("Orchestrator ready, agents: %s", orchestrator.registry.list_available())
        yield
        await orchestrator.aclose()

    app = FastAPI(
        title=title,
        version=version,
        description="Оркестратор: свободный текст -> намерение -> воркер.",
        lifespan=lifespan,
    )
    app.state.orchestrator = orchestrator

    @app.get("/health")
    async def health() -> PlainTextResponse:
        return PlainTextResponse("ok")

    @app.get("/metrics")
    async def metrics_route() -> PlainTextResponse:
        body, content_type = metrics.render()
        return PlainTextResponse(body, media_type=content_type)

    @app.post("/v1/query")
    async def query(request: Request) -> Response:
        """
        Обработать команду пользователя: `{"input": <text>}` -> ответ воркера.
        """
        try:
            query_input = await _read_query(request)
            result = await run_until_disconnect(
                request,
                orchestrator.handle_query(query_input.input),
            )
        except Exception as exc:
            return _error_response(exc)
        return JSONResponse(result)

    @app.get("/v1/agents")
    async def agents() -> dict[str, Any]:
        """Справочные описания воркеров (не используются при маршрутизации)."""
        descriptions = await orchestrator.describe_agents()
        return {
            name: value.model_dump() if isinstance(value, AgentDescription) else {"error": value}
            for name, value in descriptions.items()
        }

    return app


async def run_until_disconnect(request: Request, awaitable: Awaitable[T]) -> T:
    """
    Выполнить корутину, отменив её при отключении клиента.

    Raises:
        RequestCancelled: Клиент отключился до завершения обработки.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                await asyncio.wait({task})
                raise RequestCancelled("client disconnected")
    finally:
        if not task.done():
            task.cancel()


async def _read_query(request: Request) -> QueryInput:
    raw = await request.body()
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise InvalidQuery("invalid JSON") from e
    try:
        return QueryInput.model_validate(data)
    except ValidationError as e:
        raise InvalidQuery('request body must be {"input": <text>}') from e


def _error_response(exc: Exception) -> PlainTextResponse:
    info = ErrorMapper.map_exception(exc)
    if info.error_type == "INTERNAL_ERROR":
        logger.error("Query handler failed", exc_info=exc)
    elif not info.is_client_error:
        logger.warning("Query failed with %s: %s", info.error_type, info.message)
    return PlainTextResponse(
        info.message,
        status_code=info.status_code,
        headers={ERROR_TYPE_HEADER: info.error_type},
    )
