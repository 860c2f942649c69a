"""Core – instrument handles bound to a registry and metric name."""
from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from mp_metrics.core.labels import LabelsLike

if TYPE_CHECKING:
    from mp_metrics.core.registry import MetricsRegistry
    from mp_metrics.timing import Timer

F = TypeVar("F", bound=Callable[..., Any])


class BoundCounter:
    """Counter handle; every call goes through the registry's error policy."""

    def __init__(self, registry: "MetricsRegistry", name: str) -> None:
        self._registry = registry
        self.name = name

    def inc(self, delta: float = 1.0, labels: LabelsLike = None) -> None:
        self._registry.counter_increment(self.name, labels, delta)

    def __repr__(self) -> str:
        return f"BoundCounter(name={self.name!r})"


class BoundHistogram:
    """Histogram handle with observe / timer / decorator helpers."""

    def __init__(self, registry: "MetricsRegistry", name: str) -> None:
        self._registry = registry
        self.name = name

    def observe(self, value: float, labels: LabelsLike = None) -> None:
        self._registry.histogram_observe(self.name, labels, value)

    def time(self, labels: LabelsLike = None) -> "Timer":
        """Start a timer recording into this histogram (usable as ``with``)."""
        return self._registry.start_timer(self.name, labels)

    def timed(self, labels: LabelsLike = None) -> Callable[[F], F]:
        """Decorator form of :meth:`time`."""
        return self._registry.time(self.name, labels)

    def __repr__(self) -> str:
        return f"BoundHistogram(name={self.name!r})"


__all__ = ["BoundCounter", "BoundHistogram"]
