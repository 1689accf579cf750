"""
Жизненный цикл одного запроса к оркестратору.

    RECEIVED -> PARSED -> ROUTED -> EXECUTED -> COMPLETED
        \\          \\         \\
         +----------+---------+--> FAILED

Обратных переходов и повторов нет: упавший запрос терминален
и может быть только отправлен заново вызывающей стороной.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Optional

from .exceptions import InvalidTransition

logger = logging.getLogger(__name__)


class RequestState(str, Enum):
    """Состояния запроса."""

    RECEIVED = "received"
    PARSED = "parsed"
    ROUTED = "routed"
    EXECUTED = "executed"
    COMPLETED = "completed"
    FAILED = "failed"


_ALLOWED_TRANSITIONS: dict[RequestState, frozenset[RequestState]] = {
    RequestState.RECEIVED: frozenset({RequestState.PARSED, RequestState.FAILED}),
    RequestState.PARSED: frozenset({RequestState.ROUTED, RequestState.FAILED}),
    RequestState.ROUTED: frozenset({RequestState.EXECUTED, RequestState.FAILED}),
    RequestState.EXECUTED: frozenset({RequestState.COMPLETED}),
    RequestState.COMPLETED: frozenset(),
    RequestState.FAILED: frozenset(),
}


class RequestLifecycle:
    """
    Отслеживание состояний одного запроса.

    Attributes:
        request_id: Идентификатор запроса (до разбора может быть None).
        state: Текущее состояние.
        history: Пройденные состояния в порядке переходов.
        error_type: Код ошибки, если запрос завершился FAILED.
    """

    def __init__(
        self,
        request_id: Optional[str] = None,
        initial: RequestState = RequestState.RECEIVED,
    ) -> None:
        self.request_id = request_id
        self.state = initial
        self.history: list[RequestState] = [initial]
        self.error_type: Optional[str] = None
        self._started_at = time.perf_counter()

    @property
    def is_terminal(self) -> bool:
        return not _ALLOWED_TRANSITIONS[self.state]

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._started_at) * 1000

    def advance(self, new_state: RequestState) -> None:
        """
        Перейти в новое состояние.

        Raises:
            InvalidTransition: Переход не разрешён из текущего состояния.
        """
        if new_state not in _ALLOWED_TRANSITIONS[self.state]:
            raise InvalidTransition(
                f"cannot move request from {self.state.value} to {new_state.value}",
                details={"request_id": self.request_id},
            )
        self.state = new_state
        self.history.append(new_state)
        logger.debug("Request %s -> %s", self.request_id or "-", new_state.value)

    def fail(self, error_type: str) -> None:
        """Перевести запрос в FAILED, если он ещё не терминален."""
        if self.is_terminal:
            return
        self.error_type = error_type
        self.advance(RequestState.FAILED)

    def __repr__(self) -> str:
        return f"<RequestLifecycle(request_id={self.request_id!r}, state={self.state.value!r})>"
