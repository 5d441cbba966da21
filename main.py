"""
JINAQ FastAPI Application
Main entry point: settings-driven middleware, storage bootstrap and routers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import health, menu

from domain.models import init_database
from adapters import s3_adapter

from app.config import settings

from api.middleware import (
    RequestLoggingMiddleware,
    HostHeaderMiddleware,
    SecurityHeadersMiddleware,
    validation_exception_handler,
    http_exception_handler,
    jinaq_exception_handler,
    general_exception_handler,
)
from app.exceptions import JinaqError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format=settings.log_format,
)
_logger = logging.getLogger("jinaq.main")

CORS_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE", "OPTIONS"]
CORS_HEADERS = [
    "Origin",
    "X-Requested-With",
    "Content-Type",
    "Accept",
    "Authorization",
    "X-Virtual-Request-Id",
]
CORS_EXPOSE_HEADERS = ["Content-Disposition"]
GZIP_MINIMUM_SIZE = 1000


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: create missing tables outside production and bootstrap the
    media bucket. Shutdown: release the object storage client.
    """
    _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")

    try:
        if not settings.is_production():
            # Blocking DDL runs in a worker thread to keep the event loop free
            await anyio.to_thread.run_sync(init_database)

        if settings.storage_bootstrap_on_startup:
            storage = s3_adapter.connect(settings.s3)
            # Bucket creation failure is fatal; policy/prefix failures are logged
            await anyio.to_thread.run_sync(storage.bootstrap)
        else:
            _logger.info("Object storage bootstrap disabled")

        _logger.info(
            f"Application is running on: http://{settings.host}:{settings.server_port}{settings.api_prefix}"
        )
        if not settings.is_production():
            _logger.info(
                f"Swagger documentation: http://{settings.host}:{settings.server_port}{settings.api_prefix}/docs"
            )

        yield
    finally:
        _logger.info(f"Shutting down {settings.app_name}")
        s3_adapter.close()


def create_app() -> FastAPI:
    """Build the application from the current settings."""
    docs_enabled = not settings.is_production()
    application = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=f"{settings.api_prefix}/openapi.json" if docs_enabled else None,
        docs_url=f"{settings.api_prefix}/docs" if docs_enabled else None,
        redoc_url=f"{settings.api_prefix}/redoc" if docs_enabled else None,
    )

    # Innermost first: the host check runs closest to the routes
    application.add_middleware(HostHeaderMiddleware)
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.backend_cors_origins,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=CORS_EXPOSE_HEADERS,
    )
    application.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(JinaqError, jinaq_exception_handler)
    application.add_exception_handler(Exception, general_exception_handler)

    application.include_router(health.router, prefix=settings.api_prefix)
    application.include_router(menu.router, prefix=settings.api_prefix)
    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.server_port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
