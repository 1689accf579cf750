"""
IntentParser — контракт компонента распознавания намерений.

Любая реализация (ключевые слова, правила, статистическая модель)
взаимозаменяема, если выполняет единственную операцию `parse`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import StructuredRequest


@runtime_checkable
class IntentParser(Protocol):
    """
    Интерфейс парсера намерений.

    Реализация обязана:
    - вернуть StructuredRequest с непустыми `agent` и `action`
      и свежесгенерированным `id`;
    - бросить NoIntentMatched, если ни один шаблон не подошёл.
    """

    def parse(self, text: str) -> StructuredRequest:
        ...
