"""
FastAPI application entry point.

create_app() is the application factory. It runs the whole startup sequence
synchronously before returning: settings validation, client construction and
the bucket reachability check. If any of these fail it raises, so a server
never starts against an unverified bucket.

The presign routes are added to the route table only when
S3M_AUTOENDPOINT=true; otherwise they do not exist and requests get 404.

For local development:
    uvicorn s3m.main:create_app --factory --reload

Or, with a startup diagnostic and non-zero exit on failure:
    python -m s3m.main
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import health, presign
from .bootstrap import bootstrap
from .config.settings import ConfigValidationError, Settings, get_settings
from .core.presign import PresignError, PresignService
from .infrastructure.storage.client import StartupError

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown. Components are already built by create_app."""
    settings: Settings = app.state.settings

    logger.info(
        "s3m API starting",
        extra={
            "version": settings.api_version,
            "bucket": settings.bucket.name,
            "autoendpoint": settings.autoendpoint,
        }
    )

    yield

    logger.info("s3m API shutting down")


def create_app(
    settings: Optional[Settings] = None,
    s3_client: Optional[Any] = None,
    presign_client: Optional[Any] = None,
    service: Optional[PresignService] = None,
) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Settings to use instead of reading the environment
        s3_client: Storage client to use instead of building one
        presign_client: Presign client to use instead of building one
        service: Presigning service to use instead of building one

    Raises:
        ConfigValidationError: required settings are blank or invalid
        StartupError: the bucket is not reachable
    """
    if settings is None:
        settings = get_settings()

    components = bootstrap(
        settings=settings,
        s3_client=s3_client,
        presign_client=presign_client,
        service=service,
    )

    logging.getLogger().setLevel(settings.log_level.strip().upper())

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
        Presigned upload and download URLs for S3-compatible object storage.

        - `GET /api/s3m/upload?key=...&expireMinutes=...`
        - `GET /api/s3m/download?key=...&expireMinutes=...`

        The presign endpoints are only available when `S3M_AUTOENDPOINT=true`.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = components.settings
    app.state.storage_clients = components.clients
    app.state.presign_service = components.service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    if settings.autoendpoint:
        app.include_router(
            presign.router,
            prefix="/api/s3m",
            tags=["Presign"],
        )
        logger.info("Registered presign endpoints at /api/s3m")
    else:
        logger.info("Presign endpoints disabled (S3M_AUTOENDPOINT=false)")

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": settings.api_title,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    @app.exception_handler(PresignError)
    async def presign_error_handler(request: Request, exc: PresignError):
        logger.error(
            "Presigning failed",
            extra={"path": request.url.path, "error": str(exc)},
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc)},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error. Please contact support if this persists."
            }
        )

    logger.info(
        "FastAPI application created",
        extra={
            "title": settings.api_title,
            "version": settings.api_version,
        }
    )

    return app


def main(
    settings: Optional[Settings] = None,
    s3_client: Optional[Any] = None,
    presign_client: Optional[Any] = None,
) -> int:
    """
    Build the application and serve it with uvicorn.

    Returns 1, after logging the bucket and cause, when configuration or the
    bucket check fails; the server is never started in that case.
    """
    if settings is None:
        settings = get_settings()

    try:
        app = create_app(
            settings,
            s3_client=s3_client,
            presign_client=presign_client,
        )
    except ConfigValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    except StartupError as e:
        logger.error("Startup failed for bucket '%s': %s", e.bucket, e.cause)
        return 1

    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.strip().lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
