"""Concurrency tests: no lost updates, snapshots never see half-applied writes."""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from mp_metrics.core import MetricKind, MetricsRegistry
from mp_metrics.exposition import render
from mp_metrics.process import NoopProcessMetricsProvider

THREADS = 8
ITERATIONS = 2_000


def _registry() -> MetricsRegistry:
    return MetricsRegistry(process_provider=NoopProcessMetricsProvider(), observation_policy="raise")


class TestConcurrentWrites:
    def test_shared_counter_has_no_lost_updates(self) -> None:
        reg = _registry()
        reg.register("hits_total", "Hits.", MetricKind.COUNTER)
        barrier = threading.Barrier(THREADS)

        def work() -> None:
            barrier.wait()
            for _ in range(ITERATIONS):
                reg.counter_increment("hits_total")

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            for future in [pool.submit(work) for _ in range(THREADS)]:
                future.result()

        assert f"hits_total {THREADS * ITERATIONS}\n" in render(reg.snapshot())

    def test_concurrent_series_creation_yields_one_series(self) -> None:
        reg = _registry()
        reg.register("hits_total", "Hits.", MetricKind.COUNTER)
        barrier = threading.Barrier(THREADS)

        def work(i: int) -> None:
            barrier.wait()
            # Same label set, different insertion order per thread.
            labels = {"a": "1", "b": "2"} if i % 2 else {"b": "2", "a": "1"}
            for _ in range(100):
                reg.counter_increment("hits_total", labels)

        threads = [threading.Thread(target=work, args=(i,)) for i in range(THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        family = reg.snapshot().get("hits_total")
        assert len(family.samples) == 1
        assert family.samples[0].value == THREADS * 100

    def test_histogram_count_matches_observations(self) -> None:
        reg = _registry()
        reg.register("lat_seconds", "Latency.", MetricKind.HISTOGRAM, [0.5, 1.0])

        def work() -> None:
            for i in range(ITERATIONS):
                reg.histogram_observe("lat_seconds", {"op": "read"}, 0.25 if i % 2 else 0.75)

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            for future in [pool.submit(work) for _ in range(THREADS)]:
                future.result()

        sample = reg.snapshot().get("lat_seconds").sample((("op", "read"),))
        total = THREADS * ITERATIONS
        assert sample.count == total
        assert sample.bucket_counts == (total // 2, total)
        assert sample.sum == total // 2 * 0.25 + total // 2 * 0.75


class TestSnapshotConsistency:
    def test_snapshots_during_writes_are_internally_consistent(self) -> None:
        reg = _registry()
        reg.register("lat_seconds", "Latency.", MetricKind.HISTOGRAM, [1.0, 2.0])
        stop = threading.Event()
        errors: list[str] = []

        def writer() -> None:
            while not stop.is_set():
                reg.histogram_observe("lat_seconds", None, 1.5)

        def reader() -> None:
            for _ in range(500):
                sample = reg.snapshot().get("lat_seconds").sample()
                if sample is None:
                    continue
                # Every observation is 1.5: bucket 1 empty, bucket 2 == count,
                # sum == 1.5 * count. A torn read would break one of these.
                if sample.bucket_counts != (0, sample.count) or sample.sum != 1.5 * sample.count:
                    errors.append(repr(sample))

        writers = [threading.Thread(target=writer) for _ in range(4)]
        for t in writers:
            t.start()
        try:
            reader()
        finally:
            stop.set()
            for t in writers:
                t.join()

        assert errors == []

    def test_registration_during_snapshot(self) -> None:
        reg = _registry()

        def register_many() -> None:
            for i in range(200):
                reg.register(f"m{i}_total", "M.", MetricKind.COUNTER)
                reg.counter_increment(f"m{i}_total")

        t = threading.Thread(target=register_many)
        t.start()
        while t.is_alive():
            reg.snapshot()
        t.join()
        assert len(reg.snapshot()) == 200
