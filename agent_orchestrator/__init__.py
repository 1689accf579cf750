"""
Agent Orchestrator — тонкий координатор между распознаванием намерений и воркерами.

Основные модули:
- nlu: Контракт IntentParser и rule-based реализация по ключевым словам
- registry: Реестр транспортов к воркерам
- transport: Контракт AgentTransport и HTTP-реализация
- orchestrator: Разбор, маршрутизация и вызов воркера
- server: HTTP-адаптер (FastAPI)

Пример использования:

    from agent_orchestrator import (
        AgentRegistry,
        HttpAgentTransport,
        HttpTransportConfig,
        KeywordIntentParser,
        Orchestrator,
    )

    registry = AgentRegistry()
    orchestrator = Orchestrator(parser=KeywordIntentParser(), registry=registry)
    orchestrator.register_agent(
        "calendar",
        HttpAgentTransport(HttpTransportConfig(name="calendar", url="http://localhost:8081")),
    )

    result = await orchestrator.handle_query("schedule a meeting with bob")
    print(result["event"])
"""

__version__ = "0.1.0"

from .exceptions import (
    AgentNotRegistered,
    InvalidQuery,
    InvalidTransition,
    NoIntentMatched,
    OrchestratorError,
    RequestCancelled,
    TransportError,
    TransportTimeout,
    TransportUnavailable,
)
from .lifecycle import RequestLifecycle, RequestState
from .models import AgentDescription, AgentMessage, AgentResponse, QueryInput, StructuredRequest
from .nlu import IntentParser, IntentRule, KeywordIntentParser, build_intent_parser
from .orchestrator import Orchestrator
from .registry import AgentRegistry
from .transport import AgentTransport, HttpAgentTransport, HttpTransportConfig

__all__ = [
    # Version
    "__version__",
    # Models
    "StructuredRequest",
    "AgentMessage",
    "AgentResponse",
    "AgentDescription",
    "QueryInput",
    # NLU
    "IntentParser",
    "IntentRule",
    "KeywordIntentParser",
    "build_intent_parser",
    # Registry / transport
    "AgentRegistry",
    "AgentTransport",
    "HttpAgentTransport",
    "HttpTransportConfig",
    # Orchestrator
    "Orchestrator",
    "RequestLifecycle",
    "RequestState",
    # Errors
    "OrchestratorError",
    "InvalidQuery",
    "NoIntentMatched",
    "AgentNotRegistered",
    "TransportUnavailable",
    "TransportTimeout",
    "TransportError",
    "RequestCancelled",
    "InvalidTransition",
]
