"""
Real-estate listing service: user accounts and property listings
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import logging
import time

from .config import Settings, get_settings
from .db import Database
from .errors import InmoError, PersistenceError
from .hashing import PasswordHasher
from .routes import health, properties, users
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _error_body(title: str, message: str, details=None) -> dict:
    body = {"error": title, "message": message}
    if details is not None:
        body["details"] = details
    return body


async def inmo_error_handler(request: Request, exc: InmoError) -> JSONResponse:
    """Translate domain errors into their HTTP status and a safe message."""
    if isinstance(exc, PersistenceError):
        # Full cause is already logged by the store; clients get a generic message
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc.__cause__)
        message = "An unexpected error occurred"
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
        message = str(exc)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.title, message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: invalid request data")
    # Rejected input is not echoed back
    details = [
        {"loc": err["loc"], "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=_error_body(
            "Invalid request",
            "Failed to parse request data",
            jsonable_encoder(details)
        )
    )


async def log_requests(request: Request, call_next):
    """Log method, path, status and processing time of each request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    logger.info(f"{request.method} {request.url.path} - {response.status_code} - {elapsed:.4f}s")
    return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize database on startup"""
        app.state.database.init_db()
        app.state.started_at = time.monotonic()
        yield
        app.state.database.dispose()

    app = FastAPI(
        title="Inmo Backend",
        description="CRUD backend for a real-estate listing service",
        version=settings.SERVICE_VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.hasher = PasswordHasher.from_settings(settings)
    app.state.started_at = time.monotonic()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(InmoError, inmo_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include routers
    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(users.router, prefix=settings.API_PREFIX)
    app.include_router(properties.router, prefix=settings.API_PREFIX)

    return app


app = create_app()
