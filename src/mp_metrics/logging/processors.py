"""Logging – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


class StaticFieldsProcessor:
    """structlog processor that adds fixed fields to every event.

    Existing keys on the event are never overwritten. Typical use is tagging
    every line with the service name::

        structlog.configure(processors=[StaticFieldsProcessor(service="api"), ...])
    """

    def __init__(self, **fields: Any) -> None:
        self._fields = fields

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        for key, value in self._fields.items():
            event_dict.setdefault(key, value)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["StaticFieldsProcessor", "get_logger"]
