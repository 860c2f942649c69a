"""Core – MetricKind."""
from __future__ import annotations

from enum import Enum


class MetricKind(str, Enum):
    """Instrument type, rendered verbatim on the ``# TYPE`` line."""

    COUNTER = "counter"
    HISTOGRAM = "histogram"
    GAUGE = "gauge"


__all__ = ["MetricKind"]
