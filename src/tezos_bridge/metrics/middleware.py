"""Prometheus HTTP request metrics middleware for FastAPI.

Tracks:
- ``tezos_bridge_http_requests_total`` (counter) by method, route, status
- ``tezos_bridge_http_request_duration_seconds`` (histogram) by method, route
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

if TYPE_CHECKING:
    from collections.abc import Callable

    from prometheus_client import CollectorRegistry
    from starlette.requests import Request
    from starlette.responses import Response

_LABELS = ("method", "route", "status_code")
_DURATION_LABELS = ("method", "route")


def _route_template(request: Request) -> str:
    """Matched route path (``/api/v1/transactions/status``), else the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that records request count and duration."""

    def __init__(self, app: object, *, registry: CollectorRegistry) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._requests = Counter(
            "tezos_bridge_http_requests",
            "Total HTTP requests",
            _LABELS,
            registry=registry,
        )
        self._duration = Histogram(
            "tezos_bridge_http_request_duration_seconds",
            "HTTP request duration in seconds",
            _DURATION_LABELS,
            registry=registry,
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[type-arg]
        start = time.monotonic()
        response: Response = await call_next(request)
        elapsed = time.monotonic() - start

        route = _route_template(request)
        self._requests.labels(
            method=request.method, route=route, status_code=str(response.status_code)
        ).inc()
        self._duration.labels(method=request.method, route=route).observe(elapsed)
        return response
