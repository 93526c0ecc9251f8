"""
Greffier FastAPI application.

Run with ``greffier`` or ``uvicorn greffier.main:get_app --factory``.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from greffier import __version__
from greffier.config.settings import Settings, get_settings
from greffier.di import get_container, initialize_container, shutdown_container
from greffier.domain.exceptions import GreffierException
from greffier.infrastructure.monitoring import get_logger, setup_logging
from greffier.presentation.api.middleware import (
    greffier_exception_handler,
    request_validation_exception_handler,
)
from greffier.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from greffier.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)
from greffier.presentation.api.routes import auth, users, wallet

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the container's database on startup, release it on shutdown."""
    await initialize_container()
    logger.info("Greffier started")
    try:
        yield
    finally:
        await shutdown_container()
        logger.info("Greffier stopped")


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    # Starlette runs the last-added middleware first
    if settings.METRICS_ENABLED:
        app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )


def _add_service_routes(app: FastAPI, settings: Settings) -> None:
    @app.get("/", tags=["Service"])
    async def root():
        return {"service": settings.APP_NAME, "version": __version__}

    @app.get("/health", tags=["Service"])
    async def health(response: Response):
        """Liveness plus database reachability; 503 when the store is down."""
        database_ok = await get_container().database.health_check()
        if not database_ok:
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

        state = "healthy" if database_ok else "unhealthy"
        return {
            "status": state,
            "version": __version__,
            "components": {"database": {"status": state}},
        }

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Service"], include_in_schema=False)
        async def prometheus_metrics():
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use instead of the global ones (tests)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    setup_logging(level=settings.LOG_LEVEL, json_logs=settings.ENV == "production")

    app = FastAPI(
        title="Greffier API",
        description="Identity reconciliation and wallet binding",
        version=__version__,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    _add_middleware(app, settings)
    app.add_exception_handler(GreffierException, greffier_exception_handler)
    app.add_exception_handler(
        RequestValidationError, request_validation_exception_handler
    )

    for router in (auth.router, users.router, wallet.router):
        app.include_router(router, prefix="/api")

    _add_service_routes(app, settings)

    logger.info(f"Greffier app created (ENV={settings.ENV})")
    return app


def get_app() -> FastAPI:
    """Factory entry point for uvicorn."""
    return create_app()


def main():
    """Console entry point."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "greffier.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
    )


if __name__ == "__main__":
    main()
