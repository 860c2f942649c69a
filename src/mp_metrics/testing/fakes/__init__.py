"""Testing fakes – deterministic doubles for clock and process ports."""
from mp_metrics.process import NoopProcessMetricsProvider, StaticProcessMetricsProvider
from mp_metrics.testing.fakes.clock import FakeClock
from mp_metrics.time import ManualClock

__all__ = [
    "FakeClock",
    "ManualClock",
    "NoopProcessMetricsProvider",
    "StaticProcessMetricsProvider",
]
