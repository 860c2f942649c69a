"""Core – MetricsRegistry.

The registry is an explicit object: construct one at process startup and
hand it to every call site (tests build their own)::

    registry = MetricsRegistry()
    registry.register("jobs_total", "Jobs processed.", MetricKind.COUNTER)
    registry.counter_increment("jobs_total")

    with registry.start_timer("request_seconds", {"route": "/items"}):
        ...

Locking
-------
* ``self._lock`` guards the name → metric mapping (registration only).
* Each metric's lock guards creation of new series.
* Each series' lock guards its values.

``snapshot()`` only holds the structural locks while copying lists, then
reads every series under its own lock, so a concurrent update is seen either
completely or not at all.
"""
from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar, overload

from mp_metrics.core.instruments import BoundCounter, BoundHistogram
from mp_metrics.core.kind import MetricKind
from mp_metrics.core.labels import LabelSet, LabelsLike, validate_metric_name
from mp_metrics.core.metric import DEFAULT_BUCKETS, Counter, Histogram, Metric, normalize_buckets
from mp_metrics.core.snapshot import MetricFamily, RegistrySnapshot
from mp_metrics.errors import (
    DuplicateMetricError,
    InvalidBucketsError,
    InvalidNameError,
    ObservationError,
    RegistrationError,
    UnknownMetricError,
    WrongKindError,
)
from mp_metrics.logging import get_logger
from mp_metrics.process import (
    NoopProcessMetricsProvider,
    ProcessMetricsProvider,
    PsutilProcessMetricsProvider,
)
from mp_metrics.time import MonotonicClock, SystemMonotonicClock
from mp_metrics.timing import Timer, timed

if TYPE_CHECKING:
    from mp_metrics.config.settings import MetricsSettings

logger = get_logger(__name__)

M = TypeVar("M", bound=Metric)
F = TypeVar("F", bound=Callable[..., Any])


class ObservationPolicy(str, Enum):
    """What to do when an observation cannot be applied.

    ``LOG`` drops the observation and logs ``metrics.observation_dropped``
    at warning level; ``RAISE`` propagates the error to the caller.
    """

    LOG = "log"
    RAISE = "raise"


class MetricsRegistry:
    """Owns every registered metric and produces consistent snapshots.

    Parameters
    ----------
    process_provider:
        Source of process-level gauges added to each snapshot. Defaults to
        :class:`PsutilProcessMetricsProvider`.
    clock:
        Monotonic clock used by timers.
    observation_policy:
        Handling of hot-path observation errors, see :class:`ObservationPolicy`.
    default_buckets:
        Bucket bounds for histograms registered without explicit buckets.
    """

    def __init__(
        self,
        *,
        process_provider: ProcessMetricsProvider | None = None,
        clock: MonotonicClock | None = None,
        observation_policy: ObservationPolicy | str = ObservationPolicy.LOG,
        default_buckets: Sequence[float] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._metrics: dict[str, Metric] = {}
        self._process_provider = process_provider if process_provider is not None else PsutilProcessMetricsProvider()
        self._clock = clock or SystemMonotonicClock()
        self._policy = ObservationPolicy(observation_policy)
        self._default_buckets = (
            normalize_buckets("default_buckets", default_buckets) if default_buckets is not None else DEFAULT_BUCKETS
        )
        self._dropped_lock = threading.Lock()
        self._dropped = 0

    @classmethod
    def from_settings(
        cls,
        settings: "MetricsSettings",
        *,
        clock: MonotonicClock | None = None,
    ) -> "MetricsRegistry":
        """Build a registry configured by :class:`MetricsSettings`."""
        provider: ProcessMetricsProvider = (
            PsutilProcessMetricsProvider(prefix=settings.process_prefix)
            if settings.process_metrics
            else NoopProcessMetricsProvider()
        )
        return cls(
            process_provider=provider,
            clock=clock,
            observation_policy=settings.observation_policy,
            default_buckets=settings.default_buckets,
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        name: str,
        help: str,  # noqa: A002
        kind: MetricKind | str,
        buckets: Sequence[float] | None = None,
    ) -> Metric:
        """Create and store a metric, or return the identical existing one.

        Raises
        ------
        InvalidNameError
            *name* does not match ``[a-zA-Z_:][a-zA-Z0-9_:]*``.
        DuplicateMetricError
            *name* is registered with another kind, help text or, when
            *buckets* is given, other bucket bounds.
        InvalidBucketsError
            Bucket bounds are unusable, or given for a counter.
        """
        validate_metric_name(name)
        kind = _registrable_kind(name, kind)
        if kind is MetricKind.COUNTER:
            if buckets is not None:
                raise InvalidBucketsError(name, "buckets only apply to histograms")
            requested: tuple[float, ...] | None = None
        else:
            requested = normalize_buckets(name, buckets) if buckets is not None else None

        with self._lock:
            existing = self._metrics.get(name)
            if existing is not None:
                self._check_compatible(existing, help, kind, requested)
                return existing
            metric: Metric
            if kind is MetricKind.COUNTER:
                metric = Counter(name, help)
            else:
                metric = Histogram(name, help, requested or self._default_buckets)
            self._metrics[name] = metric
        logger.debug("metrics.registered", metric=name, kind=kind.value)
        return metric

    @staticmethod
    def _check_compatible(
        existing: Metric,
        help: str,  # noqa: A002
        kind: MetricKind,
        bounds: tuple[float, ...] | None,
    ) -> None:
        # Bounds are only compared when the caller passed some.
        if existing.kind is not kind:
            raise DuplicateMetricError(existing.name, f"registered as {existing.kind.value}, not {kind.value}")
        if existing.help != help:
            raise DuplicateMetricError(existing.name, "help text differs")
        if bounds is not None and isinstance(existing, Histogram) and existing.buckets != bounds:
            raise DuplicateMetricError(existing.name, "bucket bounds differ")

    def counter(self, name: str, help: str) -> BoundCounter:  # noqa: A002
        """Register (or fetch) a counter and return a handle bound to it."""
        self.register(name, help, MetricKind.COUNTER)
        return BoundCounter(self, name)

    def histogram(
        self,
        name: str,
        help: str,  # noqa: A002
        buckets: Sequence[float] | None = None,
    ) -> BoundHistogram:
        """Register (or fetch) a histogram and return a handle bound to it."""
        self.register(name, help, MetricKind.HISTOGRAM, buckets)
        return BoundHistogram(self, name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> Metric | None:
        return self._metrics.get(name)

    def names(self) -> list[str]:
        """Registered names in registration order."""
        with self._lock:
            return list(self._metrics)

    def __contains__(self, name: object) -> bool:
        return name in self._metrics

    def __len__(self) -> int:
        return len(self._metrics)

    @overload
    def _lookup(self, name: str, cls: type[Counter]) -> Counter: ...

    @overload
    def _lookup(self, name: str, cls: type[Histogram]) -> Histogram: ...

    def _lookup(self, name: str, cls: type[M]) -> M:
        metric = self._metrics.get(name)
        if metric is None:
            raise UnknownMetricError(name)
        if not isinstance(metric, cls):
            raise WrongKindError(name, expected=cls.kind.value, actual=metric.kind.value)
        return metric

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def observation_policy(self) -> ObservationPolicy:
        return self._policy

    @property
    def dropped_observations(self) -> int:
        """Number of observations dropped under :attr:`ObservationPolicy.LOG`."""
        return self._dropped

    def counter_increment(self, name: str, labels: LabelsLike = None, delta: float = 1.0) -> None:
        """Add *delta* (>= 0) to the counter series for *labels*."""
        try:
            self._lookup(name, Counter).increment(LabelSet.of(labels), delta)
        except (ObservationError, InvalidNameError) as exc:
            self._observation_failed(name, exc)

    def histogram_observe(self, name: str, labels: LabelsLike, value: float) -> None:
        """Record *value* in the histogram series for *labels*."""
        try:
            self._lookup(name, Histogram).observe(LabelSet.of(labels), value)
        except (ObservationError, InvalidNameError) as exc:
            self._observation_failed(name, exc)

    def _observation_failed(self, name: str, exc: ObservationError | InvalidNameError) -> None:
        if self._policy is ObservationPolicy.RAISE:
            raise exc
        with self._dropped_lock:
            self._dropped += 1
        logger.warning("metrics.observation_dropped", metric=name, **exc.log_fields())

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------

    def start_timer(self, name: str, labels: LabelsLike = None) -> Timer:
        """Start timing a scope; the returned handle records into *name*."""
        return Timer(self.histogram_observe, name, labels, self._clock)

    def time(self, name: str, labels: LabelsLike = None) -> Callable[[F], F]:
        """Decorator recording each call's duration into histogram *name*."""
        return timed(lambda: self.start_timer(name, labels))

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    def collect_process_metrics(self) -> tuple[MetricFamily, ...]:
        """Ask the process provider for fresh gauges.

        Families whose name is already registered are skipped. A failing
        provider is logged and contributes nothing.
        """
        try:
            families = tuple(self._process_provider.collect())
        except Exception as exc:
            logger.error("metrics.process_collection_failed", error=str(exc), exc_info=True)
            return ()
        return tuple(f for f in families if f.name not in self._metrics)

    def snapshot(self) -> RegistrySnapshot:
        """Return an immutable copy of every family and series."""
        with self._lock:
            metrics = list(self._metrics.values())
        families = [metric.collect() for metric in metrics]
        families.extend(self.collect_process_metrics())
        return RegistrySnapshot(families=tuple(families))

    def __repr__(self) -> str:
        return f"MetricsRegistry(metrics={len(self._metrics)}, policy={self._policy.value})"


def _registrable_kind(name: str, kind: MetricKind | str) -> MetricKind:
    # Gauges only come from the process provider.
    try:
        resolved = MetricKind(kind)
    except ValueError:
        resolved = None
    if resolved not in (MetricKind.COUNTER, MetricKind.HISTOGRAM):
        raise RegistrationError(
            f"Metric {name!r} has unsupported kind {kind!r}",
            code="unsupported_kind",
            detail={"name": name, "kind": str(kind)},
        )
    return resolved


__all__ = ["MetricsRegistry", "ObservationPolicy"]
