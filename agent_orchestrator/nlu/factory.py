"""
Выбор реализации IntentParser по имени провайдера (NLU_PROVIDER).
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, Optional

from .base import IntentParser
from .keyword import KeywordIntentParser

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "keyword"

ParserFactory = Callable[[], IntentParser]

_providers: dict[str, ParserFactory] = {
    DEFAULT_PROVIDER: KeywordIntentParser,
}
_providers_lock = Lock()


def register_intent_parser(name: str, factory: ParserFactory) -> None:
    """
    Зарегистрировать провайдера парсера намерений.

    Args:
        name: Имя провайдера (значение NLU_PROVIDER).
        factory: Callable без аргументов, возвращающий IntentParser.
    """
    if not name:
        raise ValueError("Provider name must be non-empty")
    with _providers_lock:
        _providers[name.lower()] = factory
    logger.info("Registered intent parser provider '%s'", name)


def available_providers() -> list[str]:
    with _providers_lock:
        return sorted(_providers)


def build_intent_parser(provider: Optional[str] = None) -> IntentParser:
    """
    Создать парсер намерений по имени провайдера.

    Неизвестное имя не считается фатальной ошибкой: используется
    провайдер по умолчанию (keyword) с предупреждением в логе.

    Args:
        provider: Имя провайдера; None или пустая строка — провайдер по умолчанию.

    Returns:
        Экземпляр IntentParser.
    """
    name = (provider or DEFAULT_PROVIDER).lower()
    with _providers_lock:
        factory = _providers.get(name)
        if factory is None:
            logger.warning(
                "Unknown NLU provider '%s', falling back to '%s'. Available: %s",
                provider,
                DEFAULT_PROVIDER,
                sorted(_providers),
            )
            factory = _providers[DEFAULT_PROVIDER]
    parser = factory()
    if not isinstance(parser, IntentParser):
        raise TypeError(f"Provider '{name}' returned {type(parser).__name__}, which has no parse()")
    return parser
