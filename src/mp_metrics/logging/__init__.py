"""Logging – structlog configuration and logger helpers."""
from mp_metrics.logging.factory import JsonLoggerFactory
from mp_metrics.logging.processors import StaticFieldsProcessor, get_logger

__all__ = ["JsonLoggerFactory", "StaticFieldsProcessor", "get_logger"]
