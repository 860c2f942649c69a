"""Core – immutable registry snapshot consumed by the renderer."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterator

from mp_metrics.core.kind import MetricKind
from mp_metrics.core.labels import LabelPairs


@dataclasses.dataclass(frozen=True)
class SeriesSample:
    """Counter or gauge value for one label set."""

    labels: LabelPairs
    value: float


@dataclasses.dataclass(frozen=True)
class HistogramSample:
    """Histogram state for one label set.

    ``bucket_counts`` is cumulative and aligned with the family's ``buckets``;
    the implicit ``+Inf`` bucket is ``count``.
    """

    labels: LabelPairs
    bucket_counts: tuple[int, ...]
    count: int
    sum: float


@dataclasses.dataclass(frozen=True)
class MetricFamily:
    name: str
    help: str
    kind: MetricKind
    samples: tuple[SeriesSample | HistogramSample, ...] = ()
    buckets: tuple[float, ...] = ()

    def sample(self, labels: LabelPairs = ()) -> SeriesSample | HistogramSample | None:
        """Return the sample whose (sorted) labels equal *labels*, if any."""
        wanted = tuple(sorted(labels))
        for sample in self.samples:
            if sample.labels == wanted:
                return sample
        return None


@dataclasses.dataclass(frozen=True)
class RegistrySnapshot:
    """Point-in-time copy of every family, in registration order."""

    families: tuple[MetricFamily, ...] = ()

    def __iter__(self) -> Iterator[MetricFamily]:
        return iter(self.families)

    def __len__(self) -> int:
        return len(self.families)

    def get(self, name: str) -> MetricFamily | None:
        for family in self.families:
            if family.name == name:
                return family
        return None


__all__ = ["HistogramSample", "MetricFamily", "RegistrySnapshot", "SeriesSample"]
