"""Core – metrics, label sets, registry and snapshots."""
from mp_metrics.core.instruments import BoundCounter, BoundHistogram
from mp_metrics.core.kind import MetricKind
from mp_metrics.core.labels import EMPTY_LABELS, LabelSet, LabelsLike, merge_labels
from mp_metrics.core.metric import DEFAULT_BUCKETS, Counter, Histogram, Metric
from mp_metrics.core.registry import MetricsRegistry, ObservationPolicy
from mp_metrics.core.snapshot import HistogramSample, MetricFamily, RegistrySnapshot, SeriesSample

__all__ = [
    "BoundCounter",
    "BoundHistogram",
    "Counter",
    "DEFAULT_BUCKETS",
    "EMPTY_LABELS",
    "Histogram",
    "HistogramSample",
    "LabelSet",
    "LabelsLike",
    "Metric",
    "MetricFamily",
    "MetricKind",
    "MetricsRegistry",
    "ObservationPolicy",
    "RegistrySnapshot",
    "SeriesSample",
    "merge_labels",
]
