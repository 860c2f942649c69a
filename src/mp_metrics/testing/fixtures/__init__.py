"""Testing fixtures – pytest fixtures for fake doubles.

Enable in a ``conftest.py``::

    pytest_plugins = ["mp_metrics.testing.fixtures"]
"""
from mp_metrics.testing.fixtures.registry import fake_clock, metrics_registry

__all__ = ["fake_clock", "metrics_registry"]
