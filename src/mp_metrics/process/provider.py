"""Process – providers of process-level gauges computed at snapshot time.

Providers are asked for fresh values on every snapshot; nothing is
accumulated between scrapes.
"""
from __future__ import annotations

import os
import time
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

import psutil

from mp_metrics.core.kind import MetricKind
from mp_metrics.core.snapshot import MetricFamily, SeriesSample


@runtime_checkable
class ProcessMetricsProvider(Protocol):
    """Port: produce process-level metric families on demand."""

    def collect(self) -> Sequence[MetricFamily]: ...


class NoopProcessMetricsProvider:
    """Provider that reports nothing."""

    def collect(self) -> Sequence[MetricFamily]:
        return ()


class PsutilProcessMetricsProvider:
    """Read CPU, memory, file-descriptor and thread figures via psutil.

    Parameters
    ----------
    prefix:
        Name prefix of every reported family (``process`` by default).
    pid:
        Process to inspect; the current process when omitted.
    """

    def __init__(self, prefix: str = "process", pid: int | None = None) -> None:
        self._prefix = prefix
        self._process = psutil.Process(pid if pid is not None else os.getpid())
        self._start_time = self._process.create_time()

    def collect(self) -> Sequence[MetricFamily]:
        p = self._prefix
        with self._process.oneshot():
            memory = self._process.memory_info()
            cpu = self._process.cpu_times()
            threads = self._process.num_threads()
            fds = self._open_fds()

        families = [
            _single(f"{p}_start_time_seconds", "Start time of the process since unix epoch in seconds.",
                    MetricKind.GAUGE, self._start_time),
            _single(f"{p}_uptime_seconds", "Seconds since the process started.",
                    MetricKind.GAUGE, max(time.time() - self._start_time, 0.0)),
            _single(f"{p}_cpu_seconds_total", "Total user and system CPU time spent in seconds.",
                    MetricKind.COUNTER, cpu.user + cpu.system),
            _single(f"{p}_resident_memory_bytes", "Resident memory size in bytes.",
                    MetricKind.GAUGE, float(memory.rss)),
            _single(f"{p}_virtual_memory_bytes", "Virtual memory size in bytes.",
                    MetricKind.GAUGE, float(memory.vms)),
            _single(f"{p}_threads", "Number of OS threads in the process.",
                    MetricKind.GAUGE, float(threads)),
        ]
        if fds is not None:
            families.append(
                _single(f"{p}_open_fds", "Number of open file descriptors.", MetricKind.GAUGE, float(fds))
            )
        return tuple(families)

    def _open_fds(self) -> int | None:
        # num_fds() only exists on POSIX platforms.
        num_fds = getattr(self._process, "num_fds", None)
        return num_fds() if num_fds is not None else None


class StaticProcessMetricsProvider:
    """Report fixed gauge values; used in tests and examples.

    ``values`` maps family name to value. ``help_texts`` optionally overrides
    the generated help text per name.
    """

    def __init__(
        self,
        values: Mapping[str, float] | None = None,
        help_texts: Mapping[str, str] | None = None,
    ) -> None:
        self.values: dict[str, float] = dict(values or {})
        self._help = dict(help_texts or {})
        self.calls = 0

    def collect(self) -> Sequence[MetricFamily]:
        self.calls += 1
        return tuple(
            _single(name, self._help.get(name, f"Static value of {name}."), MetricKind.GAUGE, value)
            for name, value in self.values.items()
        )


def _single(name: str, help: str, kind: MetricKind, value: float) -> MetricFamily:  # noqa: A002
    return MetricFamily(name=name, help=help, kind=kind, samples=(SeriesSample(labels=(), value=value),))


__all__ = [
    "NoopProcessMetricsProvider",
    "ProcessMetricsProvider",
    "PsutilProcessMetricsProvider",
    "StaticProcessMetricsProvider",
]
