"""
Нормализованная иерархия исключений оркестратора.

Каждое исключение несёт машиночитаемый `error_type`, чтобы HTTP-слой мог
маппить его в код ответа без разбора текста сообщения.
"""

from typing import Any, Optional


class OrchestratorError(Exception):
    """Базовый класс для всех ошибок оркестратора."""

    error_type: str = "UNKNOWN"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __repr__(self) -> str:  # pragma: no cover - мелкий хелпер
        return f"{self.__class__.__name__}(message={self.message!r})"


class InvalidQuery(OrchestratorError):
    """Тело входящего запроса не является корректным `{"input": <text>}`."""

    error_type = "INVALID_QUERY"


class NoIntentMatched(OrchestratorError):
    """Текст запроса не совпал ни с одним известным словарём намерений."""

    error_type = "NO_INTENT_MATCHED"


class AgentNotRegistered(OrchestratorError):
    """Запрос адресован агенту, которого нет в реестре."""

    error_type = "AGENT_NOT_REGISTERED"

    def __init__(self, agent: str, *, available: Optional[list[str]] = None) -> None:
        super().__init__(
            f"agent {agent} not registered",
            details={"agent": agent, "available": available or []},
        )
        self.agent = agent


class TransportUnavailable(OrchestratorError):
    """Воркер недоступен по сети (отказ соединения, DNS и т.п.)."""

    error_type = "TRANSPORT_UNAVAILABLE"


class TransportTimeout(TransportUnavailable):
    """Воркер не ответил в пределах тайм-аута."""

    error_type = "TRANSPORT_TIMEOUT"


class TransportError(OrchestratorError):
    """Воркер ответил ошибкой: non-2xx, статус `error` или некорректное тело."""

    error_type = "TRANSPORT_ERROR"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code


class RequestCancelled(OrchestratorError):
    """Клиент отключился до завершения обработки запроса."""

    error_type = "REQUEST_CANCELLED"


class InvalidTransition(OrchestratorError):
    """Недопустимый переход в жизненном цикле запроса."""

    error_type = "INVALID_TRANSITION"
