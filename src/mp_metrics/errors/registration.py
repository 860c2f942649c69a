"""Registration errors: caller configuration mistakes, raised immediately."""

from __future__ import annotations

from typing import Any

from mp_metrics.errors.base import MetricsError


class RegistrationError(MetricsError):
    """A metric could not be registered as requested."""

    default_code = "registration_error"


class InvalidNameError(RegistrationError):
    """A metric or label name does not match the identifier pattern."""

    default_code = "invalid_name"

    def __init__(self, name: str, *, kind: str = "metric", reason: str | None = None, **kwargs: Any) -> None:
        message = f"Invalid {kind} name {name!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            detail={"name": name, "kind": kind, "reason": reason},
            **kwargs,
        )
        self.name = name
        self.kind = kind
        self.reason = reason


class DuplicateMetricError(RegistrationError):
    """The name is already registered with an incompatible definition."""

    default_code = "duplicate_metric"

    def __init__(self, name: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Metric {name!r} is already registered: {reason}",
            detail={"name": name, "reason": reason},
            **kwargs,
        )
        self.name = name
        self.reason = reason


class InvalidBucketsError(RegistrationError):
    """Histogram bucket bounds are empty, unsorted or otherwise unusable."""

    default_code = "invalid_buckets"

    def __init__(self, name: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid buckets for {name!r}: {reason}",
            detail={"name": name, "reason": reason},
            **kwargs,
        )
        self.name = name
        self.reason = reason


__all__ = [
    "DuplicateMetricError",
    "InvalidBucketsError",
    "InvalidNameError",
    "RegistrationError",
]
