"""
HttpAgentTransport — HTTP client for worker services.

Sends AgentMessage to ``POST {url}/v1/handle`` and reads capability metadata
from ``GET {url}/v1/meta``. Every call is attempted exactly once and bounded by
the configured timeout; transport failures are normalized into orchestrator
exceptions.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ..exceptions import TransportError, TransportTimeout, TransportUnavailable
from ..models import AgentDescription, AgentMessage, AgentResponse
from .types import HttpTransportConfig

logger = logging.getLogger(__name__)

HANDLE_PATH = "/v1/handle"
META_PATH = "/v1/meta"
_BODY_SNIPPET_LIMIT = 200


class HttpAgentTransport:
    """
    HTTP transport to a single worker.

    Attributes:
        config: Transport configuration.
        _client: httpx.AsyncClient instance.

    Example:
        >>> config = HttpTransportConfig(name="calendar", url="http://localhost:8081")
        >>> transport = HttpAgentTransport(config)
        >>> response = await transport.handle(message)
        >>> response.response
        {'event': {...}}
    """

    def __init__(
        self,
        config: HttpTransportConfig,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize transport.

        Args:
            config: Transport configuration.
            client: Optional pre-configured httpx client (for testing).
                It must be created with ``base_url=config.url``.
        """
        self.config = config
        self._client = client
        self._owns_client = client is None

    @property
    def name(self) -> str:
        return self.config.name

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.url,
                timeout=self.config.timeout_seconds,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def handle(self, message: AgentMessage) -> AgentResponse:
        """
        Deliver a message to the worker and return its response.

        Args:
            message: Wire message with id, action and payload.

        Returns:
            AgentResponse with status "ok".

        Raises:
            TransportTimeout: The worker did not answer within the timeout.
            TransportUnavailable: The worker could not be reached.
            TransportError: Non-2xx status, malformed body or status "error".
        """
        start_time = time.perf_counter()
        body = await self._request("POST", HANDLE_PATH, json=message.model_dump(mode="json"))

        try:
            response = AgentResponse.model_validate(body)
        except ValidationError as e:
            raise TransportError(
                f"agent {self.name} returned malformed response",
                details={"errors": e.errors(include_url=False)},
            ) from e

        if not response.is_ok:
            raise TransportError(
                f"agent {self.name} failed: {response.message or 'status error'}",
                details={"request_id": message.id, "action": message.action},
            )

        if response.response is None:
            response = AgentResponse.ok({})

        logger.info(
            "Agent %s.%s completed in %.2fms (request %s)",
            self.name,
            message.action,
            (time.perf_counter() - start_time) * 1000,
            message.id,
        )
        return response

    async def describe(self) -> AgentDescription:
        """
        Fetch advisory capability metadata from the worker.

        Raises:
            TransportUnavailable | TransportError: Same mapping as ``handle``.
        """
        body = await self._request("GET", META_PATH)
        try:
            return AgentDescription.model_validate(body)
        except ValidationError as e:
            raise TransportError(
                f"agent {self.name} returned malformed metadata",
                details={"errors": e.errors(include_url=False)},
            ) from e

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Execute one HTTP call and decode the JSON body.

        Raises:
            TransportTimeout | TransportUnavailable | TransportError
        """
        client = self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("Agent %s %s %s timed out: %s", self.name, method, path, e)
            raise TransportTimeout(
                f"agent {self.name} timed out after {self.config.timeout_seconds}s",
                details={"url": self.config.url, "path": path},
            ) from e
        except httpx.RequestError as e:
            logger.warning("Agent %s %s %s unreachable: %s", self.name, method, path, e)
            raise TransportUnavailable(
                f"agent {self.name} unreachable: {e}",
                details={"url": self.config.url, "path": path},
            ) from e

        if not response.is_success:
            snippet = response.text[:_BODY_SNIPPET_LIMIT]
            logger.warning(
                "Agent %s %s %s returned HTTP %d: %s",
                self.name,
                method,
                path,
                response.status_code,
                snippet,
            )
            message = f"agent {self.name} returned HTTP {response.status_code}"
            if snippet:
                message = f"{message}: {snippet}"
            raise TransportError(
                message,
                details={"url": self.config.url, "path": path},
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"agent {self.name} returned invalid JSON",
                details={"url": self.config.url, "path": path},
                status_code=response.status_code,
            ) from e

    def __repr__(self) -> str:
        """String representation."""
        return f"<HttpAgentTransport(name={self.config.name!r}, url={self.config.url!r})>"
