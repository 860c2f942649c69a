"""Logging – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from mp_metrics.logging.processors import StaticFieldsProcessor


class JsonLoggerFactory:
    """Configure structlog for JSON output through stdlib logging."""

    @staticmethod
    def configure(
        level: int = logging.INFO,
        static_fields: dict[str, Any] | None = None,
        cache_logger_on_first_use: bool = True,
    ) -> None:
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        if static_fields:
            shared_processors.insert(0, StaticFieldsProcessor(**static_fields))

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=cache_logger_on_first_use,
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


__all__ = ["JsonLoggerFactory"]
