"""
Модуль для нормализации ошибок в ответ HTTP-слоя.

ErrorMapper преобразует исключения оркестратора и прочие ошибки в ErrorInfo:
машиночитаемый код, человекочитаемое сообщение и HTTP-статус.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .exceptions import (
    AgentNotRegistered,
    InvalidQuery,
    NoIntentMatched,
    OrchestratorError,
    RequestCancelled,
    TransportError,
    TransportUnavailable,
)

# 499: client closed request (код nginx).
CLIENT_CLOSED_REQUEST = 499

# Порядок важен: подклассы должны стоять раньше базовых классов.
_STATUS_BY_ERROR: tuple[tuple[type[OrchestratorError], int], ...] = (
    (InvalidQuery, 400),
    (NoIntentMatched, 400),
    (RequestCancelled, CLIENT_CLOSED_REQUEST),
    (AgentNotRegistered, 500),
    (TransportUnavailable, 500),
    (TransportError, 500),
)


class ErrorInfo(BaseModel):
    """
    Унифицированное описание ошибки для HTTP-ответа.
    """

    error_type: str = Field(description="Тип ошибки (NO_INTENT_MATCHED, TRANSPORT_ERROR и т.д.)")
    message: str = Field(description="Человекочитаемое сообщение об ошибке")
    status_code: int = Field(description="HTTP-статус ответа")

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500


class ErrorMapper:
    """
    Маппер для преобразования исключений в ErrorInfo.
    """

    @staticmethod
    def map_exception(exc: Exception) -> ErrorInfo:
        """
        Преобразовать исключение в ErrorInfo.

        Args:
            exc: Исключение для маппинга.

        Returns:
            ErrorInfo с нормализованными полями.
        """
        if isinstance(exc, OrchestratorError):
            status_code = 500
            for error_cls, code in _STATUS_BY_ERROR:
                if isinstance(exc, error_cls):
                    status_code = code
                    break
            return ErrorInfo(
                error_type=exc.error_type,
                message=exc.message,
                status_code=status_code,
            )

        return ErrorInfo(
            error_type="INTERNAL_ERROR",
            message=f"internal error: {type(exc).__name__}",
            status_code=500,
        )
