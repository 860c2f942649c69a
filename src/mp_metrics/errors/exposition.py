"""Exposition errors: a failed scrape."""

from __future__ import annotations

from mp_metrics.errors.base import MetricsError


class RenderError(MetricsError):
    """The registry snapshot could not be serialised."""

    default_code = "render_error"


__all__ = ["RenderError"]
