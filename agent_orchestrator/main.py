from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .config import OrchestratorConfig
from .nlu import build_intent_parser
from .orchestrator import Orchestrator
from .registry import AgentRegistry
from .server import create_app
from .telemetry import NullMetrics, OrchestratorMetrics, OrchestratorTracing
from .transport import HttpAgentTransport

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def build_orchestrator(config: OrchestratorConfig) -> Orchestrator:
    """
    Собрать оркестратор: парсер по NLU_PROVIDER, метрики, трейсинг
    и HTTP-транспорты для всех настроенных агентов.
    """
    metrics = OrchestratorMetrics() if config.enable_monitoring else NullMetrics()
    tracing = OrchestratorTracing(
        service_name=config.otel_service_name,
        otel_endpoint=config.otel_endpoint,
    )
    orchestrator = Orchestrator(
        parser=build_intent_parser(config.nlu_provider),
        registry=AgentRegistry(),
        metrics=metrics,
        tracing=tracing,
        request_timeout_seconds=config.request_timeout_seconds,
    )
    for transport_config in config.agent_configs():
        orchestrator.register_agent(transport_config.name, HttpAgentTransport(transport_config))
    return orchestrator


def build_app(config: Optional[OrchestratorConfig] = None) -> FastAPI:
    config = config or OrchestratorConfig.from_env()
    return create_app(build_orchestrator(config))


def main() -> None:
    """
    Точка входа процесса оркестратора.
    """
    config = OrchestratorConfig.from_env()
    configure_logging(config.log_level)
    logger.info("Starting orchestrator (NLU_PROVIDER=%s) on %s:%s", config.nlu_provider, config.host, config.port)
    app = build_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
