"""Time – MonotonicClock port + implementations."""
from mp_metrics.time.clock import ManualClock, MonotonicClock, SystemMonotonicClock

__all__ = ["ManualClock", "MonotonicClock", "SystemMonotonicClock"]
