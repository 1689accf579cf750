"""
Transports to worker services.

Provides the AgentTransport contract and the HTTP implementation.
"""

from .base import AgentTransport
from .http import HttpAgentTransport
from .types import HttpTransportConfig

__all__ = [
    "AgentTransport",
    "HttpAgentTransport",
    "HttpTransportConfig",
]
