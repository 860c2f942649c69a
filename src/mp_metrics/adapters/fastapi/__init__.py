"""FastAPI adapter – exposition router and request metrics middleware."""
from mp_metrics.adapters.fastapi.middleware import FastAPIMetricsMiddleware
from mp_metrics.adapters.fastapi.routers import FastAPIMetricsRouter

__all__ = ["FastAPIMetricsMiddleware", "FastAPIMetricsRouter"]
