"""
Orchestrator — координатор между парсером намерений и воркерами.

Отвечает за:
1. Разбор текста в StructuredRequest (через IntentParser)
2. Поиск транспорта целевого агента в реестре
3. Вызов воркера с ограничением по времени
4. Возврат результата воркера или проброс ошибки
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Optional, Union

from .exceptions import OrchestratorError, TransportTimeout
from .lifecycle import RequestLifecycle, RequestState
from .models import AgentDescription, StructuredRequest
from .nlu import IntentParser
from .registry import AgentRegistry
from .telemetry import BaseMetrics, NullMetrics, NullTracing
from .transport import AgentTransport

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "INTERNAL_ERROR"
CANCELLED = "CANCELLED"


class Orchestrator:
    """
    Координатор маршрутизации запросов к воркерам.

    Ошибки не обрабатываются локально: нет повторов, запасного агента
    и альтернативной маршрутизации. Любой сбой сразу пробрасывается вызывающему.

    Attributes:
        parser: Парсер намерений.
        registry: Реестр транспортов (внедряется через конструктор).
        metrics: Метрики вызовов агентов.
        tracing: Трейсинг вызовов агентов.
        request_timeout_seconds: Дедлайн на один вызов воркера (None — без дедлайна
            сверх тайм-аута транспорта).
    """

    def __init__(
        self,
        parser: IntentParser,
        registry: Optional[AgentRegistry] = None,
        metrics: Optional[BaseMetrics] = None,
        tracing: Optional[NullTracing] = None,
        request_timeout_seconds: Optional[float] = None,
    ) -> None:
        """
        Инициализация оркестратора.

        Args:
            parser: Реализация IntentParser.
            registry: Реестр агентов. Если не указан, создаётся пустой.
            metrics: Метрики. По умолчанию NullMetrics.
            tracing: Трейсинг. По умолчанию NullTracing.
            request_timeout_seconds: Дедлайн на вызов воркера (секунды).
        """
        if request_timeout_seconds is not None and request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        self.parser = parser
        self.registry = registry if registry is not None else AgentRegistry()
        self.metrics = metrics or NullMetrics()
        self.tracing = tracing or NullTracing()
        self.request_timeout_seconds = request_timeout_seconds

    # ------------------------------------------------------------------ #
    # Администрирование
    # ------------------------------------------------------------------ #
    def register_agent(self, name: str, transport: AgentTransport) -> None:
        """
        Зарегистрировать транспорт агента (действие на этапе старта).

        Args:
            name: Имя агента.
            transport: Транспорт к воркеру.
        """
        self.registry.register(name, transport)

    async def aclose(self) -> None:
        """Закрыть все зарегистрированные транспорты и выгрузить трейсы."""
        for name, transport in self.registry.snapshot().items():
            try:
                await transport.close()
            except Exception:
                logger.exception("Failed to close transport for agent '%s'", name)
        self.tracing.shutdown()

    # ------------------------------------------------------------------ #
    # Обработка запросов
    # ------------------------------------------------------------------ #
    def parse_input(self, text: str) -> StructuredRequest:
        """
        Преобразовать свободный текст в StructuredRequest.

        Raises:
            NoIntentMatched: Пробрасывается от парсера без изменений.
        """
        return self.parser.parse(text)

    async def route_and_execute(self, request: StructuredRequest) -> dict[str, Any]:
        """
        Направить запрос воркеру и вернуть его результат.

        Args:
            request: Разобранный запрос.

        Returns:
            Словарь `response` из ответа воркера (статус не пробрасывается).

        Raises:
            AgentNotRegistered: Агент не найден; сетевой вызов не выполняется.
            TransportTimeout: Воркер не ответил до дедлайна.
            TransportUnavailable | TransportError: Ошибки транспорта.
        """
        lifecycle = RequestLifecycle(request.id, initial=RequestState.PARSED)
        try:
            return await self._route_and_execute(request, lifecycle)
        except OrchestratorError as e:
            lifecycle.fail(e.error_type)
            raise
        except asyncio.CancelledError:
            lifecycle.fail(CANCELLED)
            raise
        except Exception:
            lifecycle.fail(INTERNAL_ERROR)
            raise

    async def handle_query(self, text: str) -> dict[str, Any]:
        """
        Полный цикл обработки: разбор текста, маршрутизация, вызов воркера.

        Args:
            text: Команда пользователя.

        Returns:
            Словарь `response` из ответа воркера.

        Raises:
            NoIntentMatched | AgentNotRegistered | TransportUnavailable | TransportError
        """
        lifecycle = RequestLifecycle()
        try:
            request = self.parse_input(text)
            lifecycle.request_id = request.id
            lifecycle.advance(RequestState.PARSED)
            result = await self._route_and_execute(request, lifecycle)
        except OrchestratorError as e:
            lifecycle.fail(e.error_type)
            self.metrics.inc_query(e.error_type.lower())
            logger.warning(
                "Request %s failed in %.2fms: %s",
                lifecycle.request_id or "-",
                lifecycle.elapsed_ms,
                e.message,
            )
            raise
        except asyncio.CancelledError:
            lifecycle.fail(CANCELLED)
            self.metrics.inc_query(CANCELLED.lower())
            logger.info("Request %s cancelled", lifecycle.request_id or "-")
            raise
        except Exception:
            lifecycle.fail(INTERNAL_ERROR)
            self.metrics.inc_query(INTERNAL_ERROR.lower())
            logger.exception("Request %s failed with unexpected error", lifecycle.request_id or "-")
            raise

        self.metrics.inc_query(RequestState.COMPLETED.value)
        return result

    async def describe_agents(self) -> dict[str, Union[AgentDescription, str]]:
        """
        Собрать описания возможностей всех зарегистрированных агентов.

        Справочная операция: ошибки отдельных воркеров не прерывают сбор,
        а возвращаются строкой на месте описания.

        Returns:
            Словарь name -> AgentDescription или текст ошибки.
        """
        transports = self.registry.snapshot()
        names = sorted(transports)
        results = await asyncio.gather(
            *(transports[name].describe() for name in names),
            return_exceptions=True,
        )
        descriptions: dict[str, Union[AgentDescription, str]] = {}
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning("Describe failed for agent '%s': %s", name, result)
                descriptions[name] = str(result) or type(result).__name__
            else:
                descriptions[name] = result
        return descriptions

    # ------------------------------------------------------------------ #
    # Внутренние вспомогательные методы
    # ------------------------------------------------------------------ #
    async def _route_and_execute(
        self,
        request: StructuredRequest,
        lifecycle: RequestLifecycle,
    ) -> dict[str, Any]:
        transport = self.registry.lookup(request.agent)
        lifecycle.advance(RequestState.ROUTED)

        message = request.to_message()
        logger.info(
            "Routing request %s to agent %s (action=%s)",
            request.id,
            request.agent,
            request.action,
        )

        self.metrics.inc_agent_call(request.agent)
        start_time = time.perf_counter()
        try:
            with self.tracing.agent_span(request):
                response = await self._call_with_deadline(transport, message, request.agent)
        except OrchestratorError as e:
            self.metrics.inc_agent_error(request.agent, e.error_type)
            raise
        finally:
            self.metrics.observe_latency(request.agent, time.perf_counter() - start_time)

        lifecycle.advance(RequestState.EXECUTED)
        result = dict(response.response or {})
        lifecycle.advance(RequestState.COMPLETED)
        logger.info(
            "Request %s completed by agent %s in %.2fms",
            request.id,
            request.agent,
            lifecycle.elapsed_ms,
        )
        return result

    async def _call_with_deadline(self, transport: AgentTransport, message, agent: str):
        if self.request_timeout_seconds is None:
            return await transport.handle(message)
        try:
            return await asyncio.wait_for(
                transport.handle(message),
                timeout=self.request_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise TransportTimeout(
                f"agent {agent} did not respond within {self.request_timeout_seconds}s",
                details={"request_id": message.id},
            ) from e
