from __future__ import annotations

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)


class BaseMetrics:
    """Интерфейс метрик оркестратора."""

    def inc_agent_call(self, agent: str) -> None:
        raise NotImplementedError

    def inc_agent_error(self, agent: str, error_type: str) -> None:
        raise NotImplementedError

    def observe_latency(self, agent: str, seconds: float) -> None:
        raise NotImplementedError

    def inc_query(self, outcome: str) -> None:
        raise NotImplementedError

    def render(self) -> tuple[str, str]:
        """
        Вернуть сериализованные метрики и MIME-тип.
        """
        raise NotImplementedError


class NullMetrics(BaseMetrics):
    """Пустая реализация, когда мониторинг выключен."""

    def inc_agent_call(self, agent: str) -> None:
        return None

    def inc_agent_error(self, agent: str, error_type: str) -> None:
        return None

    def observe_latency(self, agent: str, seconds: float) -> None:
        return None

    def inc_query(self, outcome: str) -> None:
        return None

    def render(self) -> tuple[str, str]:
        return "# monitoring disabled\n", "text/plain"


class OrchestratorMetrics(BaseMetrics):
    """
    Prometheus-метрики оркестратора.

    Экспортирует:
    - agent_calls_total{agent}
    - agent_errors_total{agent,error_type}
    - agent_call_latency_seconds{agent}
    - queries_total{outcome}
    - agent_orchestrator_up (gauge)
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.agent_calls_total = Counter(
            "agent_calls_total",
            "Total number of calls routed to worker agents.",
            ["agent"],
            registry=self.registry,
        )
        self.agent_errors_total = Counter(
            "agent_errors_total",
            "Total number of failed worker agent calls by type.",
            ["agent", "error_type"],
            registry=self.registry,
        )
        self.agent_call_latency_seconds = Histogram(
            "agent_call_latency_seconds",
            "Latency of worker agent calls in seconds.",
            ["agent"],
            registry=self.registry,
            buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
        )
        self.queries_total = Counter(
            "queries_total",
            "Total number of inbound queries by outcome.",
            ["outcome"],
            registry=self.registry,
        )
        self.up_gauge = Gauge(
            "agent_orchestrator_up",
            "Synthetic metric indicating the orchestrator is running.",
            registry=self.registry,
        )
        self.up_gauge.set(1)

    def inc_agent_call(self, agent: str) -> None:
        self.agent_calls_total.labels(agent=agent).inc()

    def inc_agent_error(self, agent: str, error_type: str) -> None:
        self.agent_errors_total.labels(agent=agent, error_type=error_type).inc()

    def observe_latency(self, agent: str, seconds: float) -> None:
        self.agent_call_latency_seconds.labels(agent=agent).observe(seconds)

    def inc_query(self, outcome: str) -> None:
        self.queries_total.labels(outcome=outcome).inc()

    def render(self) -> tuple[str, str]:
        body = generate_latest(self.registry).decode("utf-8")
        return body, CONTENT_TYPE_LATEST
