"""
Трейсинг вызовов воркеров через OpenTelemetry.

Один span на каждый маршрутизированный вызов: `agent.<name>.handle`
с атрибутами агента, операции и идентификатора запроса.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor, SpanExporter
from opentelemetry.trace import Span, Status, StatusCode

from ..models import StructuredRequest

logger = logging.getLogger(__name__)

ATTR_AGENT = "agent.name"
ATTR_ACTION = "agent.action"
ATTR_REQUEST_ID = "request.id"
ATTR_ERROR_TYPE = "error.type"


class NullTracing:
    """Заглушка, когда OTEL не настроен."""

    enabled = False

    @contextmanager
    def agent_span(self, request: StructuredRequest) -> Iterator[Optional[Span]]:
        yield None

    def shutdown(self) -> None:
        return None


class OrchestratorTracing(NullTracing):
    """
    OTEL-трейсинг оркестратора.

    Провайдер создаётся, если заданы endpoint и service_name (экспорт по OTLP HTTP),
    либо явно передан exporter. Провайдер не регистрируется глобально:
    несколько экземпляров не мешают друг другу.

    Attributes:
        service_name: Имя сервиса в ресурсе OTEL.
    """

    def __init__(
        self,
        *,
        service_name: Optional[str],
        otel_endpoint: Optional[str],
        exporter: Optional[SpanExporter] = None,
    ) -> None:
        self.service_name = service_name or "agent-orchestrator"
        self._provider: Optional[TracerProvider] = None
        self._tracer = None

        if exporter is not None:
            processor = SimpleSpanProcessor(exporter)
        elif service_name and otel_endpoint:
            processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=otel_endpoint))
        else:
            return

        self._provider = TracerProvider(resource=Resource.create({"service.name": self.service_name}))
        self._provider.add_span_processor(processor)
        self._tracer = self._provider.get_tracer("agent_orchestrator")
        logger.info("Tracing enabled for service '%s'", self.service_name)

    @property
    def enabled(self) -> bool:
        return self._tracer is not None

    @contextmanager
    def agent_span(self, request: StructuredRequest) -> Iterator[Optional[Span]]:
        """
        Открыть span вызова воркера.

        Исключение из тела записывается в span со статусом ERROR и пробрасывается дальше.
        """
        if self._tracer is None:
            yield None
            return

        with self._tracer.start_as_current_span(
            f"agent.{request.agent}.handle",
            attributes={
                ATTR_AGENT: request.agent,
                ATTR_ACTION: request.action,
                ATTR_REQUEST_ID: request.id,
            },
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            try:
                yield span
            except BaseException as exc:
                span.record_exception(exc)
                span.set_attribute(ATTR_ERROR_TYPE, getattr(exc, "error_type", type(exc).__name__))
                span.set_status(Status(StatusCode.ERROR, str(exc) or type(exc).__name__))
                raise
            span.set_status(Status(StatusCode.OK))

    def shutdown(self) -> None:
        """Выгрузить накопленные span'ы и остановить провайдер."""
        if self._provider is None:
            return
        self._provider.shutdown()
        self._provider = None
        self._tracer = None
