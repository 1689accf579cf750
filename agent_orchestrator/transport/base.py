"""
AgentTransport contract.

The orchestrator talks to workers only through this interface, so transports
(HTTP, in-process stubs, future gRPC) are interchangeable.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import AgentDescription, AgentMessage, AgentResponse


@runtime_checkable
class AgentTransport(Protocol):
    """
    Single request/response exchange with one worker.

    Implementations make exactly one attempt per ``handle`` call and raise
    ``TransportUnavailable`` / ``TransportError`` on failure.
    """

    async def handle(self, message: AgentMessage) -> AgentResponse:
        ...

    async def describe(self) -> AgentDescription:
        ...

    async def close(self) -> None:
        ...
