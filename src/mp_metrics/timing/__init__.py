"""Timing – Timer handle and decorator."""
from mp_metrics.timing.timer import Timer, timed

__all__ = ["Timer", "timed"]
