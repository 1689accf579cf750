from .metrics import BaseMetrics, NullMetrics, OrchestratorMetrics
from .tracing import NullTracing, OrchestratorTracing

__all__ = [
    "BaseMetrics",
    "NullMetrics",
    "OrchestratorMetrics",
    "NullTracing",
    "OrchestratorTracing",
]
