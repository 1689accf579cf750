"""
Transport configuration models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpTransportConfig(BaseModel):
    """
    Configuration for an HTTP worker transport.

    Attributes:
        name: Agent name the transport serves (e.g., "calendar").
        url: Base URL of the worker (e.g., "http://localhost:8081").
        timeout_seconds: Per-call timeout in seconds.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Agent name the transport serves",
        examples=["calendar", "todo"],
    )

    url: str = Field(
        ...,
        min_length=1,
        description="Base URL of the worker",
        examples=["http://localhost:8081", "http://todo-agent:8082"],
    )

    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=300.0,
        description="Per-call timeout in seconds",
    )

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
