"""Unit tests for Timer and the timing decorators."""
from __future__ import annotations

import asyncio
import inspect

import pytest
from structlog.testing import capture_logs

from mp_metrics.core import MetricKind, MetricsRegistry
from mp_metrics.errors import DoubleStopError, UnknownMetricError
from mp_metrics.time import ManualClock
from mp_metrics.timing import Timer, timed


@pytest.fixture
def registry(metrics_registry: MetricsRegistry) -> MetricsRegistry:
    metrics_registry.register("op_seconds", "Operation latency.", MetricKind.HISTOGRAM, [0.1, 1.0, 5.0])
    return metrics_registry


def _sample(registry: MetricsRegistry, labels=()):
    return registry.snapshot().get("op_seconds").sample(labels)


class TestTimer:
    def test_records_elapsed_time(self, registry: MetricsRegistry, fake_clock: ManualClock) -> None:
        timer = registry.start_timer("op_seconds")
        fake_clock.advance(0.75)
        assert timer.stop() == 0.75
        sample = _sample(registry)
        assert sample.count == 1
        assert sample.sum == 0.75
        assert sample.bucket_counts == (0, 1, 1)

    def test_context_manager_records_once(self, registry: MetricsRegistry, fake_clock: ManualClock) -> None:
        with registry.start_timer("op_seconds") as timer:
            fake_clock.advance(2.0)
        assert timer.stopped
        assert timer.elapsed == 2.0
        assert _sample(registry).count == 1

    def test_exception_path_still_records(self, registry: MetricsRegistry, fake_clock: ManualClock) -> None:
        with pytest.raises(KeyError):
            with registry.start_timer("op_seconds", {"op": "lookup"}):
                fake_clock.advance(0.05)
                raise KeyError("missing")
        sample = _sample(registry, (("op", "lookup"),))
        assert sample.count == 1
        assert sample.sum == pytest.approx(0.05)

    def test_second_stop_raises(self, registry: MetricsRegistry) -> None:
        timer = registry.start_timer("op_seconds")
        timer.stop()
        with pytest.raises(DoubleStopError) as info:
            timer.stop()
        assert info.value.code == "double_stop"
        assert _sample(registry).count == 1

    def test_exit_after_explicit_stop_does_not_record_again(self, registry: MetricsRegistry) -> None:
        with registry.start_timer("op_seconds") as timer:
            timer.stop()
        assert _sample(registry).count == 1

    def test_label_precedence(self, registry: MetricsRegistry) -> None:
        timer = registry.start_timer("op_seconds", {"op": "read", "status": "pending"})
        timer.set_labels(status="ok", shard=3)
        timer.stop({"shard": "7"})
        family = registry.snapshot().get("op_seconds")
        assert [s.labels for s in family.samples] == [(("op", "read"), ("shard", "7"), ("status", "ok"))]

    def test_set_labels_accepts_mapping(self, registry: MetricsRegistry) -> None:
        with registry.start_timer("op_seconds") as timer:
            timer.set_labels({"op": "write"})
        assert _sample(registry, (("op", "write"),)).count == 1

    def test_clock_going_backwards_clamps_to_zero(self) -> None:
        recorded: list[float] = []

        class _Backwards:
            values = iter([10.0, 9.0])

            def monotonic(self) -> float:
                return next(self.values)

        timer = Timer(lambda name, labels, v: recorded.append(v), "x", None, _Backwards())
        assert timer.stop() == 0.0
        assert recorded == [0.0]

    def test_unknown_histogram_under_raise_policy(self, metrics_registry: MetricsRegistry) -> None:
        timer = metrics_registry.start_timer("nope_seconds")
        with pytest.raises(UnknownMetricError):
            timer.stop()

    def test_block_exception_wins_over_failed_record(self, metrics_registry: MetricsRegistry) -> None:
        with capture_logs() as logs:
            with pytest.raises(KeyError):
                with metrics_registry.start_timer("nope_seconds"):
                    raise KeyError("order-42")
        assert logs == [
            {
                "event": "metrics.timer_record_failed",
                "log_level": "warning",
                "metric": "nope_seconds",
                "unwinding": "KeyError",
                "code": "unknown_metric",
                "error": "Metric 'nope_seconds' is not registered",
            }
        ]

    def test_failed_record_raises_when_block_succeeds(self, metrics_registry: MetricsRegistry) -> None:
        with pytest.raises(UnknownMetricError):
            with metrics_registry.start_timer("nope_seconds"):
                pass


class TestTimedDecorator:
    def test_sync_function(self, registry: MetricsRegistry, fake_clock: ManualClock) -> None:
        @registry.time("op_seconds", {"op": "sync"})
        def work(x: int) -> int:
            fake_clock.advance(0.5)
            return x * 2

        assert work(21) == 42
        assert work.__name__ == "work"
        sample = _sample(registry, (("op", "sync"),))
        assert sample.count == 1
        assert sample.sum == 0.5

    def test_sync_function_raising(self, registry: MetricsRegistry) -> None:
        @registry.time("op_seconds")
        def boom() -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            boom()
        assert _sample(registry).count == 1

    def test_async_function_timed_until_completion(self, registry: MetricsRegistry, fake_clock: ManualClock) -> None:
        @registry.time("op_seconds", {"op": "async"})
        async def work() -> str:
            await asyncio.sleep(0)
            fake_clock.advance(3.0)
            return "done"

        assert inspect.iscoroutinefunction(work)
        assert asyncio.run(work()) == "done"
        sample = _sample(registry, (("op", "async"),))
        assert sample.count == 1
        assert sample.sum == 3.0

    def test_each_call_gets_a_fresh_timer(self) -> None:
        started: list[Timer] = []
        clock = ManualClock()

        def start() -> Timer:
            timer = Timer(lambda *a: None, "x", None, clock)
            started.append(timer)
            return timer

        fn = timed(start)(lambda: None)
        fn()
        fn()
        assert len(started) == 2
        assert all(t.stopped for t in started)


class TestBoundHistogramTiming:
    def test_time_context(self, metrics_registry: MetricsRegistry, fake_clock: ManualClock) -> None:
        latency = metrics_registry.histogram("db_seconds", "DB latency.", [0.5])
        with latency.time({"query": "select"}):
            fake_clock.advance(0.25)
        sample = metrics_registry.snapshot().get("db_seconds").sample((("query", "select"),))
        assert sample.bucket_counts == (1,)

    def test_timed_decorator(self, metrics_registry: MetricsRegistry, fake_clock: ManualClock) -> None:
        latency = metrics_registry.histogram("db_seconds", "DB latency.", [0.5])

        @latency.timed()
        def query() -> None:
            fake_clock.advance(1.0)

        query()
        sample = metrics_registry.snapshot().get("db_seconds").sample()
        assert sample.bucket_counts == (0,)
        assert sample.count == 1
