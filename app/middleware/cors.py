"""
Food Ordering API — CORS middleware

Answers every OPTIONS request with 204 and the permissive CORS headers,
whether or not the browser sent Origin / Access-Control-Request-Method,
and stamps the same headers on every other response.
"""
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import get_settings


def cors_headers() -> dict[str, str]:
    settings = get_settings()
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN,
        "Access-Control-Allow-Methods": settings.CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": settings.CORS_ALLOW_HEADERS,
    }


class PermissiveCORSMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=cors_headers())

        response = await call_next(request)
        response.headers.update(cors_headers())
        return response
