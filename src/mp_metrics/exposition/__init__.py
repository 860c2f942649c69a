"""Exposition – text format rendering."""
from mp_metrics.exposition.text import (
    CONTENT_TYPE_LATEST,
    escape_help,
    escape_label_value,
    format_value,
    generate_latest,
    render,
    render_bytes,
)

__all__ = [
    "CONTENT_TYPE_LATEST",
    "escape_help",
    "escape_label_value",
    "format_value",
    "generate_latest",
    "render",
    "render_bytes",
]
