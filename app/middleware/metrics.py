"""
Food Ordering API — HTTP metrics middleware

Records http_requests_total and http_request_duration_seconds per route
template ("/orders", not "/orders?x=1"). Requests that match no route are
recorded under handler "none"; status codes are grouped as 2xx/4xx/5xx.
"""
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.metrics import HTTP_REQUEST_DURATION, HTTP_REQUESTS


def route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or "none"


class HTTPMetricsMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            handler = route_template(request)
            HTTP_REQUESTS.labels(
                method=request.method, status=f"{status // 100}xx", handler=handler,
            ).inc()
            HTTP_REQUEST_DURATION.labels(method=request.method, handler=handler).observe(
                time.perf_counter() - start
            )
