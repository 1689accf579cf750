"""
Распознавание намерений: контракт IntentParser и его реализации.

Пример использования:

    from agent_orchestrator.nlu import build_intent_parser

    parser = build_intent_parser("keyword")
    request = parser.parse("remind me to buy milk")
    # request.agent == "todo", request.action == "add_task"
"""

from .base import IntentParser
from .factory import (
    DEFAULT_PROVIDER,
    available_providers,
    build_intent_parser,
    register_intent_parser,
)
from .keyword import DEFAULT_RULES, IntentRule, KeywordIntentParser

__all__ = [
    "IntentParser",
    "IntentRule",
    "KeywordIntentParser",
    "DEFAULT_RULES",
    "DEFAULT_PROVIDER",
    "available_providers",
    "build_intent_parser",
    "register_intent_parser",
]
