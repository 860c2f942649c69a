"""Core – Counter and Histogram metrics with per-series locking.

Each metric owns a mapping from series key (sorted label pairs) to a series
object. Series creation is guarded by the metric's lock; updates to an
existing series only take that series' own lock, so writers on different
series never contend.
"""
from __future__ import annotations

import math
import threading
from collections.abc import Sequence
from typing import Generic, TypeVar

from mp_metrics.core.kind import MetricKind
from mp_metrics.core.labels import LabelPairs, LabelSet
from mp_metrics.core.snapshot import HistogramSample, MetricFamily, SeriesSample
from mp_metrics.errors import (
    InvalidBucketsError,
    InvalidDeltaError,
    InvalidNameError,
    InvalidValueError,
)

DEFAULT_BUCKETS: tuple[float, ...] = (
    0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0,
)

S = TypeVar("S")


class _CounterSeries:
    __slots__ = ("_lock", "value")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.value = 0.0

    def add(self, delta: float) -> None:
        with self._lock:
            self.value += delta

    def read(self, labels: LabelPairs) -> SeriesSample:
        with self._lock:
            return SeriesSample(labels=labels, value=self.value)


class _HistogramSeries:
    __slots__ = ("_lock", "bucket_counts", "count", "sum")

    def __init__(self, size: int) -> None:
        self._lock = threading.Lock()
        self.bucket_counts = [0] * size
        self.count = 0
        self.sum = 0.0

    def observe(self, bounds: tuple[float, ...], value: float) -> None:
        with self._lock:
            # Counts are stored cumulatively: every bound >= value moves.
            for i, bound in enumerate(bounds):
                if value <= bound:
                    self.bucket_counts[i] += 1
            self.count += 1
            self.sum += value

    def read(self, labels: LabelPairs) -> HistogramSample:
        with self._lock:
            return HistogramSample(
                labels=labels,
                bucket_counts=tuple(self.bucket_counts),
                count=self.count,
                sum=self.sum,
            )


class Metric(Generic[S]):
    """Base class: named instrument holding one series per label set."""

    kind: MetricKind

    def __init__(self, name: str, help: str) -> None:  # noqa: A002
        self.name = name
        self.help = help
        self._lock = threading.Lock()
        self._series: dict[LabelPairs, S] = {}

    def _new_series(self) -> S:
        raise NotImplementedError

    def _check_labels(self, labels: LabelSet) -> None:
        """Hook for kind-specific label restrictions."""

    def _series_for(self, labels: LabelSet) -> S:
        key = labels.key
        series = self._series.get(key)
        if series is None:
            self._check_labels(labels)
            with self._lock:
                series = self._series.get(key)
                if series is None:
                    series = self._new_series()
                    self._series[key] = series
        return series

    def _series_items(self) -> list[tuple[LabelPairs, S]]:
        with self._lock:
            return list(self._series.items())

    def __len__(self) -> int:
        return len(self._series)

    def collect(self) -> MetricFamily:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class Counter(Metric[_CounterSeries]):
    """Monotonically non-decreasing sum per label set."""

    kind = MetricKind.COUNTER

    def _new_series(self) -> _CounterSeries:
        return _CounterSeries()

    def increment(self, labels: LabelSet, delta: float = 1.0) -> None:
        try:
            amount = float(delta)
        except (TypeError, ValueError) as exc:
            raise InvalidDeltaError(self.name, delta, cause=exc) from exc
        # NaN fails every comparison, so this also rejects it.
        if not amount >= 0:
            raise InvalidDeltaError(self.name, delta)
        self._series_for(labels).add(amount)

    def collect(self) -> MetricFamily:
        samples = tuple(series.read(key) for key, series in self._series_items())
        return MetricFamily(name=self.name, help=self.help, kind=self.kind, samples=samples)


class Histogram(Metric[_HistogramSeries]):
    """Bucketed distribution of observed values per label set."""

    kind = MetricKind.HISTOGRAM

    def __init__(self, name: str, help: str, buckets: tuple[float, ...]) -> None:  # noqa: A002
        super().__init__(name, help)
        self.buckets = buckets

    def _new_series(self) -> _HistogramSeries:
        return _HistogramSeries(len(self.buckets))

    def _check_labels(self, labels: LabelSet) -> None:
        if "le" in labels.names:
            raise InvalidNameError("le", kind="label", reason="reserved for histogram buckets")

    def observe(self, labels: LabelSet, value: float) -> None:
        try:
            amount = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidValueError(self.name, value, cause=exc) from exc
        self._series_for(labels).observe(self.buckets, amount)

    def collect(self) -> MetricFamily:
        samples = tuple(series.read(key) for key, series in self._series_items())
        return MetricFamily(
            name=self.name,
            help=self.help,
            kind=self.kind,
            samples=samples,
            buckets=self.buckets,
        )


def normalize_buckets(name: str, buckets: Sequence[float] | None) -> tuple[float, ...]:
    """Validate *buckets* and return them as a tuple of finite floats.

    A trailing ``+Inf`` is dropped since the ``+Inf`` bucket is always
    implicit.
    """
    if buckets is None:
        return DEFAULT_BUCKETS
    try:
        bounds = [float(b) for b in buckets]
    except (TypeError, ValueError) as exc:
        raise InvalidBucketsError(name, "bounds must be numbers", cause=exc) from exc
    if bounds and bounds[-1] == math.inf:
        bounds.pop()
    if not bounds:
        raise InvalidBucketsError(name, "at least one finite bound is required")
    if any(math.isnan(b) or math.isinf(b) for b in bounds):
        raise InvalidBucketsError(name, "bounds must be finite")
    if any(lower >= upper for lower, upper in zip(bounds, bounds[1:])):
        raise InvalidBucketsError(name, "bounds must be strictly ascending")
    return tuple(bounds)


__all__ = ["DEFAULT_BUCKETS", "Counter", "Histogram", "Metric", "normalize_buckets"]
