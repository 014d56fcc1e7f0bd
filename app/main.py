"""
Food Ordering API — FastAPI application entrypoint
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.errors import AppError, MethodNotAllowedError, NotFoundError, ValidationError
from app.core.metrics import metrics_app
from app.db.database import engine, Base
from app.middleware.cors import PermissiveCORSMiddleware, cors_headers
from app.middleware.metrics import HTTPMetricsMiddleware
from app.api import health, menu, orders, profile

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables (migrations are out of scope for this service)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(
    title="Food Ordering API",
    description="Menu, order placement with sequential queue numbers, order history and profiles.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
)

app.add_middleware(PermissiveCORSMiddleware)

if settings.METRICS_ENABLED:
    app.add_middleware(HTTPMetricsMiddleware)
    app.mount("/metrics", metrics_app)


# ── Error envelope ────────────────────────────────────────────────────────────

def error_response(error: AppError) -> JSONResponse:
    # Catch-all 500s are rendered outside PermissiveCORSMiddleware
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "error": error.category, "message": error.message},
        headers={**cors_headers(), **(error.headers or {})},
    )


def first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.default_message
    err = errors[0]
    field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    if err.get("type") == "missing":
        return f"Invalid request: {field or 'body'} is required"
    msg = str(err.get("msg", ""))
    return msg.removeprefix("Value error, ") or ValidationError.default_message


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc.__cause__ or exc)
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected payload on %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(ValidationError(first_error_message(exc)))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        error: AppError = MethodNotAllowedError()
    elif exc.status_code == 404:
        error = NotFoundError()
    else:
        error = AppError(str(exc.detail))
        error.status_code = exc.status_code
        error.category = "http_error"
    error.headers = exc.headers
    return error_response(error)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(AppError())


# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(menu.router)
app.include_router(orders.router)
app.include_router(profile.router)
app.include_router(health.router)


@app.get("/")
async def root():
    return {"service": settings.SERVICE_NAME, "version": settings.SERVICE_VERSION}
