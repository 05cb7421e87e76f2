from __future__ import annotations

"""
Entry point for the Expedientes HTTP API.

This module creates the FastAPI application, wires up middleware and
exception handlers, and mounts the routers under the configured API
prefix (``/api`` by default).

Intended usage:
    uvicorn expedientes_api.main:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from expedientes_api import __version__
from expedientes_api.config import Settings, get_settings
from expedientes_api.db import session as db_session
from expedientes_api.errors import AuthenticationError, DomainError
from expedientes_api.logging import get_logger
from expedientes_api.logging.config import configure_logging
from expedientes_api.middleware import RequestContextMiddleware
from expedientes_api.routers import auth, expedientes, health, tipos_expediente
from expedientes_api.schemas.common import ErrorDetail, ErrorResponse

logger = get_logger("expedientes_api")


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details=None,
    headers=None,
) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}

    logger.info(
        "domain_error",
        code=exc.code,
        status_code=exc.status_code,
        message=exc.message,
    )

    return _error_response(exc.status_code, exc.code, exc.message, exc.details, headers)


def _build_unhandled_error_handler(settings: Settings):
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", error=str(exc))
        message = str(exc) if settings.DEBUG else "Internal server error"
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", message
        )

    return unhandled_error_handler


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    settings.check_production_safety()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "app_startup",
            env=settings.APP_ENV.value,
            version=__version__,
            api_prefix=settings.API_PREFIX,
        )
        if settings.AUTO_CREATE_SCHEMA:
            db_session.create_schema()
        yield
        logger.info("app_shutdown")

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        description="REST backend for expedientes (case files).",
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.DOCS_ENABLED else None,
        docs_url="/docs" if settings.DOCS_ENABLED else None,
        redoc_url=None,
    )

    cors_origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        # Browsers reject credentialed requests against a wildcard origin.
        allow_credentials=cors_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count", "X-Request-Id", "Location"],
    )
    unhandled_error_handler = _build_unhandled_error_handler(settings)
    app.add_middleware(RequestContextMiddleware, error_handler=unhandled_error_handler)

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health.router)
    app.include_router(auth.router, prefix=settings.API_PREFIX)
    app.include_router(expedientes.router, prefix=settings.API_PREFIX)
    app.include_router(tipos_expediente.router, prefix=settings.API_PREFIX)

    return app


# Default application instance
app = create_app()


# ---------------------------------------------------------------------------
# Local development entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("expedientes_api.main:app", host="0.0.0.0", port=8000, reload=True)
