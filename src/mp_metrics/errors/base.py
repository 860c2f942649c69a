"""Root error class for the mp-metrics error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class MetricsError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description; also what ``str()`` returns.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Structured context, e.g. the offending metric name.
        cause: Underlying exception, chained as ``__cause__``.
    """

    default_code: str = "metrics_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"

    def log_fields(self) -> dict[str, Any]:
        """Key-value pairs for a structlog event describing this error."""
        return {"code": self.code, "error": self.message}

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for HTTP bodies and structured logs."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


__all__ = ["MetricsError"]
