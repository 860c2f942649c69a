"""Micro-benchmarks for the registry hot path (pytest-benchmark).

    pytest tests/benchmarks/ --benchmark-sort=median

Pass ``--benchmark-disable`` to run them as plain tests.
"""
