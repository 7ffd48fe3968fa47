"""Host telemetry collection for the stats dashboard."""

from .collector import MetricsCollector, MetricsProvider
from .errors import CollectionError
from .models import CpuMetrics, DiskMetrics, MemoryMetrics, MetricsSnapshot, NetworkMetrics
try:  # pragma: no cover - optional at import time for minimal test environments
    from .provider import TelemetryProvider
except Exception:  # pragma: no cover
    TelemetryProvider = None  # type: ignore[assignment]

__all__ = [
    "CollectionError",
    "CpuMetrics",
    "DiskMetrics",
    "MemoryMetrics",
    "MetricsCollector",
    "MetricsProvider",
    "MetricsSnapshot",
    "NetworkMetrics",
]

if TelemetryProvider is not None:
    __all__.append("TelemetryProvider")
