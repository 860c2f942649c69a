"""Testing support – fakes and pytest fixtures.

Import in your ``conftest.py``::

    pytest_plugins = ["mp_metrics.testing.fixtures"]
"""

from mp_metrics.testing.fakes import (
    FakeClock,
    ManualClock,
    NoopProcessMetricsProvider,
    StaticProcessMetricsProvider,
)

__all__ = [
    "FakeClock",
    "ManualClock",
    "NoopProcessMetricsProvider",
    "StaticProcessMetricsProvider",
]
