"""FastAPI adapter – metrics exposition router."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mp_metrics.adapters.fastapi._compat import _require_fastapi
from mp_metrics.errors import RenderError
from mp_metrics.exposition import CONTENT_TYPE_LATEST, generate_latest
from mp_metrics.logging import get_logger

if TYPE_CHECKING:
    from mp_metrics.core.registry import MetricsRegistry

logger = get_logger(__name__)


def FastAPIMetricsRouter(
    registry: "MetricsRegistry",
    path: str = "/metrics",
    tags: list[str] | None = None,
) -> Any:
    """Return a router exposing *registry* in the text exposition format.

    The single ``GET`` route is read-only and idempotent. A
    :class:`RenderError` becomes a ``500`` whose plain-text body is the error
    message; the scraper retries on its own schedule.
    """
    _require_fastapi()
    from fastapi import APIRouter  # type: ignore[import-untyped]
    from fastapi.responses import PlainTextResponse, Response  # type: ignore[import-untyped]

    router = APIRouter(tags=tags or ["ops"])

    @router.get(path, response_class=Response, include_in_schema=False)
    def metrics():
        try:
            body = generate_latest(registry)
        except RenderError as exc:
            logger.error("metrics.scrape_failed", **exc.log_fields())
            return PlainTextResponse(exc.message, status_code=500)
        return Response(content=body, media_type=CONTENT_TYPE_LATEST)

    return router


__all__ = ["FastAPIMetricsRouter"]
