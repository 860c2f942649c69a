"""Observation errors raised on the hot path, governed by ``ObservationPolicy``."""

from __future__ import annotations

from typing import Any

from mp_metrics.errors.base import MetricsError


class ObservationError(MetricsError):
    """An observation could not be applied to any series."""

    default_code = "observation_error"


class UnknownMetricError(ObservationError):
    """No metric is registered under the given name."""

    default_code = "unknown_metric"

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(f"Metric {name!r} is not registered", detail={"name": name}, **kwargs)
        self.name = name


class WrongKindError(ObservationError):
    """The metric exists but is of another kind than the operation needs."""

    default_code = "wrong_kind"

    def __init__(self, name: str, expected: str, actual: str, **kwargs: Any) -> None:
        super().__init__(
            f"Metric {name!r} is a {actual}, not a {expected}",
            detail={"name": name, "expected": expected, "actual": actual},
            **kwargs,
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class InvalidDeltaError(ObservationError):
    """A counter was asked to move by a negative, NaN or non-numeric amount."""

    default_code = "invalid_delta"

    def __init__(self, name: str, delta: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Counter {name!r} cannot be incremented by {delta!r}",
            detail={"name": name, "delta": delta},
            **kwargs,
        )
        self.name = name
        self.delta = delta


class InvalidValueError(ObservationError):
    """A histogram was given a value that is not a number."""

    default_code = "invalid_value"

    def __init__(self, name: str, value: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Histogram {name!r} cannot observe {value!r}",
            detail={"name": name, "value": value},
            **kwargs,
        )
        self.name = name
        self.value = value


class DoubleStopError(MetricsError):
    """A timer handle was stopped more than once."""

    default_code = "double_stop"

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(f"Timer for {name!r} was already stopped", detail={"name": name}, **kwargs)
        self.name = name


__all__ = [
    "DoubleStopError",
    "InvalidDeltaError",
    "InvalidValueError",
    "ObservationError",
    "UnknownMetricError",
    "WrongKindError",
]
