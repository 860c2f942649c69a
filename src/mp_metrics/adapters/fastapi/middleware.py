"""FastAPI adapter – request instrumentation middleware."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from mp_metrics.adapters.fastapi._compat import _require_fastapi

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from mp_metrics.core.registry import MetricsRegistry

UNMATCHED_ROUTE = "unmatched"


class FastAPIMetricsMiddleware:
    """Count and time HTTP requests into *registry*.

    Series are keyed by method, matched route template and status class
    (``2xx``, ``5xx``, ...), never by the raw path. A request whose handler
    raises is recorded as ``5xx`` before the exception propagates.

    Usage::

        app.add_middleware(FastAPIMetricsMiddleware, registry=registry)
    """

    def __init__(
        self,
        app: "ASGIApp",
        registry: "MetricsRegistry",
        *,
        requests_metric: str = "http_requests_total",
        duration_metric: str = "http_request_duration_seconds",
        buckets: Sequence[float] | None = None,
    ) -> None:
        _require_fastapi()
        self.app = app
        self._requests = registry.counter(requests_metric, "Total HTTP requests.")
        self._duration = registry.histogram(duration_metric, "HTTP request duration in seconds.", buckets)

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        timer = self._duration.time({"method": method})
        status_code: list[int] = [500]

        async def send_capturing(message: Any) -> None:
            if message["type"] == "http.response.start":
                status_code[0] = message.get("status", 200)
            await send(message)

        try:
            await self.app(scope, receive, send_capturing)
        finally:
            route = _route_template(scope)
            timer.stop({"route": route})
            self._requests.inc(
                1.0,
                {"method": method, "route": route, "status_class": f"{status_code[0] // 100}xx"},
            )


def _route_template(scope: "Scope") -> str:
    # The router stores the matched route object in the (shared) scope.
    route = scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


__all__ = ["FastAPIMetricsMiddleware", "UNMATCHED_ROUTE"]
