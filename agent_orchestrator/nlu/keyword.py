"""
KeywordIntentParser — rule-based парсер намерений по ключевым словам.

Сопоставляет текст со словарями агентов по вхождению подстроки без учёта
регистра. Правила проверяются в порядке регистрации, выигрывает первое
совпадение: без скоринга и без бэктрекинга.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..exceptions import NoIntentMatched
from ..models import StructuredRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentRule:
    """
    Правило сопоставления текста с намерением.

    Attributes:
        agent: Имя целевого агента.
        action: Операция внутри агента.
        payload_key: Ключ payload, в который кладётся исходный текст.
        keywords: Словарь ключевых слов (в нижнем регистре).
    """

    agent: str
    action: str
    payload_key: str
    keywords: tuple[str, ...]

    def matches(self, text_lower: str) -> bool:
        return any(keyword in text_lower for keyword in self.keywords)


# Порядок важен: текст, подходящий под несколько словарей,
# уходит агенту, чьё правило стоит раньше.
DEFAULT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        agent="calendar",
        action="create_event",
        payload_key="title",
        keywords=("meeting", "schedule", "calendar"),
    ),
    IntentRule(
        agent="todo",
        action="add_task",
        payload_key="task",
        keywords=("task", "todo", "remind"),
    ),
)


class KeywordIntentParser:
    """
    Парсер намерений на основе ключевых слов.

    Attributes:
        rules: Упорядоченный список правил сопоставления.

    Example:
        >>> parser = KeywordIntentParser()
        >>> request = parser.parse("schedule a meeting with bob")
        >>> request.agent, request.action
        ('calendar', 'create_event')
    """

    def __init__(self, rules: Optional[Iterable[IntentRule]] = None) -> None:
        rules_tuple = tuple(rules) if rules is not None else DEFAULT_RULES
        if not rules_tuple:
            raise ValueError("KeywordIntentParser requires at least one rule")
        self._rules: tuple[IntentRule, ...] = tuple(
            IntentRule(
                agent=rule.agent,
                action=rule.action,
                payload_key=rule.payload_key,
                keywords=tuple(k.lower() for k in rule.keywords),
            )
            for rule in rules_tuple
        )

    @property
    def rules(self) -> Sequence[IntentRule]:
        return self._rules

    def parse(self, text: str) -> StructuredRequest:
        """
        Разобрать текст в StructuredRequest.

        Args:
            text: Команда пользователя в свободной форме.

        Returns:
            StructuredRequest с payload `{payload_key: text}`.

        Raises:
            NoIntentMatched: Текст пустой или не совпал ни с одним словарём.
        """
        if not text or not text.strip():
            raise NoIntentMatched("could not parse intent: empty input")

        text_lower = text.lower()
        for rule in self._rules:
            if rule.matches(text_lower):
                request = StructuredRequest(
                    agent=rule.agent,
                    action=rule.action,
                    payload={rule.payload_key: text},
                )
                logger.debug(
                    "Matched intent %s.%s for request %s",
                    rule.agent,
                    rule.action,
                    request.id,
                )
                return request

        logger.info("No intent matched for input: %s...", text[:100])
        raise NoIntentMatched("could not parse intent", details={"input": text})

    def __repr__(self) -> str:
        agents = [rule.agent for rule in self._rules]
        return f"<KeywordIntentParser(agents={agents!r})>"
