"""Timing – scoped duration measurement into a histogram.

A :class:`Timer` reads the monotonic clock when it is created and records the
elapsed seconds when it is stopped. Used as a context manager it stops on
every exit path of the ``with`` block, including exceptions::

    with registry.start_timer("request_seconds", {"route": "/items"}) as timer:
        response = handle()
        timer.set_labels(status=response.status_code)
"""
from __future__ import annotations

import functools
import inspect
import threading
from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar

from mp_metrics.core.labels import LabelsLike, merge_labels
from mp_metrics.errors import DoubleStopError, MetricsError
from mp_metrics.logging import get_logger
from mp_metrics.time import MonotonicClock

Observe = Callable[[str, LabelsLike, float], None]
F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger(__name__)


class Timer:
    """Single-use handle measuring one scope.

    ``stop`` fires exactly once; a second call raises :class:`DoubleStopError`.
    Leaving a ``with`` block after an explicit ``stop`` does not record again.
    If recording fails while the block is raising, the failure is logged and
    the block's own exception propagates.
    """

    def __init__(
        self,
        observe: Observe,
        name: str,
        labels: LabelsLike,
        clock: MonotonicClock,
    ) -> None:
        self.name = name
        self._observe = observe
        self._base = labels
        self._pending: dict[str, Any] = {}
        self._clock = clock
        self._lock = threading.Lock()
        self._stopped = False
        self._start = clock.monotonic()
        self.elapsed: float | None = None

    @property
    def stopped(self) -> bool:
        return self._stopped

    def set_labels(self, labels: LabelsLike = None, **kwargs: Any) -> "Timer":
        """Attach labels known only inside the scope (e.g. a status code)."""
        self._pending.update(merge_labels(labels, kwargs))
        return self

    def stop(self, extra_labels: LabelsLike = None) -> float:
        """Record the elapsed time and return it in seconds.

        *extra_labels* win over labels given at start and via
        :meth:`set_labels`.
        """
        with self._lock:
            if self._stopped:
                raise DoubleStopError(self.name)
            self._stopped = True
        elapsed = max(self._clock.monotonic() - self._start, 0.0)
        self.elapsed = elapsed
        labels = merge_labels(self._base, self._pending, extra_labels)
        self._observe(self.name, labels, elapsed)
        return elapsed

    def __enter__(self) -> "Timer":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._stopped:
            return
        if exc is None:
            self.stop()
            return
        # The exception leaving the block takes precedence over a failed record.
        try:
            self.stop()
        except MetricsError as record_error:
            logger.warning(
                "metrics.timer_record_failed",
                metric=self.name,
                unwinding=type(exc).__name__,
                **record_error.log_fields(),
            )

    def __repr__(self) -> str:
        return f"Timer(name={self.name!r}, stopped={self._stopped})"


def timed(start: Callable[[], Timer]) -> Callable[[F], F]:
    """Decorator factory: time every call of the wrapped function.

    *start* returns a fresh :class:`Timer` per call. Coroutine functions are
    timed until the coroutine completes.
    """

    def decorator(fn: F) -> F:
        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with start():
                    return await fn(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with start():
                return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["Observe", "Timer", "timed"]
