"""
FastAPI application entry point for the Music Catalog API.

This module provides the main FastAPI application with:
- Style CRUD and remote album lookup routers
- Health and readiness endpoints
- Request logging with correlation IDs
- Prometheus metrics
- Database engine and HTTP client lifecycle management
"""

import time
import uuid
import structlog
import uvicorn
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry

from music_api.src import database
from music_api.src.clients.album_client import AlbumClient
from music_api.src.config import Settings, get_settings
from music_api.src.errors import AlbumClientError, StoreError
from music_api.src.routers import albums, styles
from shared.logging import bind_context, clear_context, configure_logging
from shared.metrics import HttpMetrics, get_metrics_handler
from shared.models import HealthStatus, ReadinessReport, ServiceInfo

logger = structlog.get_logger(__name__)


# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Handles:
    - Database engine initialization (and optional schema creation)
    - Album client initialization
    - Graceful shutdown and resource cleanup
    """
    settings: Settings = app.state.settings

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    # ========================================================================
    # Startup: Initialize Resources
    # ========================================================================

    try:
        database.init_engine(settings)
        if settings.database_create_schema:
            database.create_schema()

        app.state.album_client = AlbumClient(
            base_url=settings.album_client_base_url,
            timeout=settings.album_client_timeout
        )

        logger.info(
            "application_started",
            app_name=settings.app_name,
            album_service=settings.album_client_base_url
        )

        yield

    except Exception as e:
        logger.error("application_startup_failed", error=str(e), exc_info=True)
        raise

    # ========================================================================
    # Shutdown: Cleanup Resources
    # ========================================================================

    finally:
        logger.info("application_shutting_down")

        album_client: Optional[AlbumClient] = getattr(app.state, "album_client", None)
        if album_client is not None:
            album_client.close()
            app.state.album_client = None

        database.dispose_engine()
        logger.info("application_shutdown_complete")


# ============================================================================
# Middleware
# ============================================================================

UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: Request) -> str:
    """Route template of the matched endpoint, for bounded metric labels."""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ENDPOINT)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging, correlation IDs and metrics."""

    def __init__(self, app, metrics: HttpMetrics):
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        bind_context(correlation_id=correlation_id)

        method = request.method
        path = request.url.path

        self.metrics.requests_in_progress.labels(method=method).inc()
        start_time = time.time()

        logger.info(
            "request_started",
            method=method,
            path=path,
            client_ip=request.client.host if request.client else "unknown"
        )

        try:
            response = await call_next(request)
            duration = time.time() - start_time
            endpoint = endpoint_label(request)

            self.metrics.requests_total.labels(
                method=method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()
            self.metrics.request_duration.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)

            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration=f"{duration:.3f}s"
            )

            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                "request_failed",
                method=method,
                path=path,
                error=str(e),
                duration=f"{duration:.3f}s",
                exc_info=True
            )
            raise

        finally:
            self.metrics.requests_in_progress.labels(method=method).dec()
            clear_context()


# ============================================================================
# Exception Handlers
# ============================================================================

def register_exception_handlers(app: FastAPI, metrics: HttpMetrics) -> None:
    """Attach the JSON error handlers to the application."""

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        """Handle entity store failures."""
        metrics.store_errors.labels(endpoint=endpoint_label(request)).inc()
        logger.error(
            "store_error",
            path=request.url.path,
            entity=exc.entity,
            error=str(exc)
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Entity store unavailable"}
        )

    @app.exception_handler(AlbumClientError)
    async def album_client_exception_handler(request: Request, exc: AlbumClientError):
        """Handle remote albums service failures."""
        logger.warning(
            "album_service_error",
            path=request.url.path,
            upstream_status=exc.status_code,
            error=str(exc)
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc)}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        logger.warning(
            "validation_error",
            path=request.url.path,
            errors=exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_encoder(exc.errors())}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        logger.warning(
            "http_exception",
            path=request.url.path,
            status_code=exc.status_code,
            detail=exc.detail
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(
            "unexpected_exception",
            path=request.url.path,
            error=str(exc),
            exc_info=True
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"}
        )


# ============================================================================
# FastAPI Application
# ============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.log_format == "json",
        service_name=settings.app_name,
        environment=settings.environment
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "Music catalog API. Manages music styles and looks up albums "
            "from the remote albums service."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings

    # Each application gets its own registry so several apps can coexist
    registry = CollectorRegistry()
    metrics = HttpMetrics(registry)
    render_metrics = get_metrics_handler(registry)

    if settings.cors_enabled:
        logger.info("configuring_cors", origins=settings.cors_origins)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "OPTIONS"],
            allow_headers=["*"],
        )

    app.add_middleware(RequestLoggingMiddleware, metrics=metrics)
    register_exception_handlers(app, metrics)

    # ========================================================================
    # Health, Readiness and Metrics Endpoints
    # ========================================================================

    @app.get("/health", tags=["Health"], response_model=ServiceInfo)
    def health_check() -> ServiceInfo:
        """
        Health check endpoint.

        Returns basic health status without checking dependencies.
        """
        return ServiceInfo(
            service_name=settings.app_name,
            version=settings.app_version,
            environment=settings.environment,
            status=HealthStatus.HEALTHY
        )

    @app.get("/ready", tags=["Health"], response_model=ReadinessReport)
    def readiness_check():
        """
        Readiness check endpoint.

        Verifies database connectivity. Answers 503 when a dependency
        is unhealthy.
        """
        checks = {}
        try:
            database.ping()
            checks["database"] = HealthStatus.HEALTHY
        except Exception as e:
            logger.error("database_health_check_failed", error=str(e))
            checks["database"] = HealthStatus.UNHEALTHY

        report = ReadinessReport.from_checks(settings.app_name, settings.app_version, checks)
        status_code = status.HTTP_200_OK if report.ready else status.HTTP_503_SERVICE_UNAVAILABLE

        return JSONResponse(status_code=status_code, content=report.model_dump())

    if settings.metrics_enabled:
        @app.get("/metrics", tags=["Monitoring"], response_class=PlainTextResponse)
        def metrics_endpoint() -> Response:
            """Prometheus metrics endpoint."""
            return Response(content=render_metrics(), media_type=CONTENT_TYPE_LATEST)

    # ========================================================================
    # API Router Registration
    # ========================================================================

    app.include_router(styles.router, prefix=settings.api_prefix)
    app.include_router(albums.router, prefix=settings.api_prefix)

    return app


app = create_app()


# ============================================================================
# Application Entry Point
# ============================================================================

if __name__ == "__main__":
    settings = get_settings()
    reload = settings.reload_enabled

    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=reload
    )

    uvicorn.run(
        "music_api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
