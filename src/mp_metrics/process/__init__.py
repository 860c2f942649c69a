"""Process – swappable providers of process-level gauges."""
from mp_metrics.process.provider import (
    NoopProcessMetricsProvider,
    ProcessMetricsProvider,
    PsutilProcessMetricsProvider,
    StaticProcessMetricsProvider,
)

__all__ = [
    "NoopProcessMetricsProvider",
    "ProcessMetricsProvider",
    "PsutilProcessMetricsProvider",
    "StaticProcessMetricsProvider",
]
