"""Exposition – Prometheus text format (version 0.0.4) renderer.

Output for one counter and one histogram::

    # HELP jobs_total Jobs processed.
    # TYPE jobs_total counter
    jobs_total 2
    # HELP request_seconds Request latency.
    # TYPE request_seconds histogram
    request_seconds_bucket{le="0.1"} 1
    request_seconds_bucket{le="+Inf"} 3
    request_seconds_sum 2.35
    request_seconds_count 3
"""
from __future__ import annotations

import math
from collections.abc import Iterator
from typing import TYPE_CHECKING

from mp_metrics.core.kind import MetricKind
from mp_metrics.core.labels import LabelPairs
from mp_metrics.core.snapshot import MetricFamily, RegistrySnapshot
from mp_metrics.errors import RenderError
from mp_metrics.logging import get_logger

if TYPE_CHECKING:
    from mp_metrics.core.registry import MetricsRegistry

logger = get_logger(__name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

# From here on repr() switches to exponent notation.
_MAX_PLAIN_INTEGER = 1e16


def format_value(value: float) -> str:
    """Format a sample value or bucket bound.

    Whole numbers drop the decimal point (``2``, not ``2.0``); other values
    use the shortest representation that round-trips.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < _MAX_PLAIN_INTEGER:
        return str(int(value))
    return repr(value)


def escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def format_labels(labels: LabelPairs, extra: tuple[str, str] | None = None) -> str:
    pairs = list(labels)
    if extra is not None:
        pairs.append(extra)
    if not pairs:
        return ""
    body = ",".join(f'{name}="{escape_label_value(value)}"' for name, value in pairs)
    return "{" + body + "}"


def _family_lines(family: MetricFamily) -> Iterator[str]:
    yield f"# HELP {family.name} {escape_help(family.help)}"
    yield f"# TYPE {family.name} {family.kind.value}"
    if family.kind is MetricKind.HISTOGRAM:
        bounds = [format_value(b) for b in family.buckets]
        for sample in family.samples:
            for bound, count in zip(bounds, sample.bucket_counts):
                yield f"{family.name}_bucket{format_labels(sample.labels, ('le', bound))} {count}"
            yield f"{family.name}_bucket{format_labels(sample.labels, ('le', '+Inf'))} {sample.count}"
            yield f"{family.name}_sum{format_labels(sample.labels)} {format_value(sample.sum)}"
            yield f"{family.name}_count{format_labels(sample.labels)} {sample.count}"
    else:
        for sample in family.samples:
            yield f"{family.name}{format_labels(sample.labels)} {format_value(sample.value)}"


def render(snapshot: RegistrySnapshot) -> str:
    """Serialise *snapshot*; families keep snapshot (registration) order."""
    lines: list[str] = []
    for family in snapshot:
        lines.extend(_family_lines(family))
    return "\n".join(lines) + "\n" if lines else ""


def render_bytes(snapshot: RegistrySnapshot) -> bytes:
    """UTF-8 encoded :func:`render`; any failure becomes :class:`RenderError`."""
    try:
        return render(snapshot).encode("utf-8")
    except Exception as exc:
        logger.error("metrics.render_failed", error=str(exc))
        raise RenderError(f"Failed to render metrics: {exc}", cause=exc) from exc


def generate_latest(registry: "MetricsRegistry") -> bytes:
    """Snapshot *registry* and return the encoded exposition text."""
    try:
        snapshot = registry.snapshot()
    except Exception as exc:
        logger.error("metrics.render_failed", error=str(exc), stage="snapshot")
        raise RenderError(f"Failed to snapshot metrics: {exc}", cause=exc) from exc
    return render_bytes(snapshot)


__all__ = [
    "CONTENT_TYPE_LATEST",
    "escape_help",
    "escape_label_value",
    "format_labels",
    "format_value",
    "generate_latest",
    "render",
    "render_bytes",
]
