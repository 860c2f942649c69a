"""Shared pytest configuration."""
from __future__ import annotations

pytest_plugins = ["mp_metrics.testing.fixtures"]
