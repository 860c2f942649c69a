"""Property-based tests for counter and histogram accumulation."""
from __future__ import annotations

import math

from hypothesis import given, settings
from hypothesis import strategies as st

from mp_metrics.core import MetricKind, MetricsRegistry
from mp_metrics.exposition import render
from mp_metrics.process import NoopProcessMetricsProvider

_deltas = st.lists(st.integers(min_value=0, max_value=10_000), max_size=50)
_values = st.lists(
    st.floats(min_value=0, max_value=100, allow_nan=False, allow_infinity=False),
    min_size=1,
    max_size=60,
)
_buckets = st.lists(
    st.floats(min_value=0.001, max_value=50, allow_nan=False, allow_infinity=False),
    min_size=1,
    max_size=10,
    unique=True,
).map(sorted)


def _registry() -> MetricsRegistry:
    return MetricsRegistry(process_provider=NoopProcessMetricsProvider(), observation_policy="raise")


def _parse(text: str) -> dict[str, float]:
    values: dict[str, float] = {}
    for line in text.splitlines():
        if line.startswith("#"):
            continue
        series, _, raw = line.rpartition(" ")
        values[series] = float(raw)
    return values


class TestCounterProperties:
    @given(deltas=_deltas)
    @settings(max_examples=50)
    def test_rendered_value_is_sum_of_deltas(self, deltas: list[int]) -> None:
        reg = _registry()
        reg.register("c_total", "C.", MetricKind.COUNTER)
        reg.counter_increment("c_total", None, 0)
        for delta in deltas:
            reg.counter_increment("c_total", None, delta)
        assert _parse(render(reg.snapshot()))["c_total"] == sum(deltas)

    @given(deltas=_deltas)
    @settings(max_examples=25)
    def test_value_never_decreases(self, deltas: list[int]) -> None:
        reg = _registry()
        reg.register("c_total", "C.", MetricKind.COUNTER)
        previous = 0.0
        for delta in deltas:
            reg.counter_increment("c_total", None, delta)
            current = reg.snapshot().get("c_total").sample().value
            assert current >= previous
            previous = current


class TestHistogramProperties:
    @given(buckets=_buckets, values=_values)
    @settings(max_examples=50)
    def test_buckets_cumulative_and_totals_match(self, buckets: list[float], values: list[float]) -> None:
        reg = _registry()
        reg.register("h", "H.", MetricKind.HISTOGRAM, buckets)
        for value in values:
            reg.histogram_observe("h", None, value)

        sample = reg.snapshot().get("h").sample()
        for bound, count in zip(buckets, sample.bucket_counts):
            assert count == sum(1 for v in values if v <= bound)
        assert list(sample.bucket_counts) == sorted(sample.bucket_counts)
        assert sample.count == len(values)
        assert math.isclose(sample.sum, math.fsum(values), rel_tol=1e-9, abs_tol=1e-9)

        parsed = _parse(render(reg.snapshot()))
        assert parsed['h_bucket{le="+Inf"}'] == len(values)
        assert parsed["h_count"] == len(values)
        assert math.isclose(parsed["h_sum"], math.fsum(values), rel_tol=1e-9, abs_tol=1e-9)

    @given(values=_values)
    @settings(max_examples=25)
    def test_render_is_idempotent(self, values: list[float]) -> None:
        reg = _registry()
        reg.register("h", "H.", MetricKind.HISTOGRAM, [1, 10])
        for value in values:
            reg.histogram_observe("h", {"op": "x"}, value)
        assert render(reg.snapshot()) == render(reg.snapshot())
