"""
Prometheus HTTP metrics.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from greffier.infrastructure.monitoring import metrics


def _endpoint_label(request: Request) -> str:
    """Route template (``/api/wallet``) rather than the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Count requests and errors, time each request.

    Requests that raise out of the app are counted as errors by
    exception type; 4xx/5xx responses as client_error/server_error.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        method = request.method
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            endpoint = _endpoint_label(request)
            metrics.http_errors_total.labels(
                method=method, endpoint=endpoint, error_type=type(e).__name__
            ).inc()
            raise
        finally:
            metrics.http_request_duration_seconds.labels(
                method=method, endpoint=_endpoint_label(request)
            ).observe(time.perf_counter() - started)

        endpoint = _endpoint_label(request)
        metrics.http_requests_total.labels(
            method=method, endpoint=endpoint, status=response.status_code
        ).inc()

        if response.status_code >= 400:
            metrics.http_errors_total.labels(
                method=method,
                endpoint=endpoint,
                error_type="server_error"
                if response.status_code >= 500
                else "client_error",
            ).inc()

        return response
