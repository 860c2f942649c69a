"""
mp_metrics – in-process metrics instrumentation.

Import path convention::

    from mp_metrics import MetricKind, MetricsRegistry
    from mp_metrics.exposition import render
    from mp_metrics.adapters.fastapi import FastAPIMetricsRouter
"""

from mp_metrics.core import MetricKind, MetricsRegistry, ObservationPolicy
from mp_metrics.exposition import CONTENT_TYPE_LATEST, generate_latest, render

__version__ = "0.1.0"
__all__ = [
    "CONTENT_TYPE_LATEST",
    "MetricKind",
    "MetricsRegistry",
    "ObservationPolicy",
    "__version__",
    "generate_latest",
    "render",
]
