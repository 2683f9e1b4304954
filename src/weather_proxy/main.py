"""Application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from prometheus_client import make_asgi_app

from weather_proxy import __version__
from weather_proxy.api.errors import request_validation_error_handler, service_error_handler
from weather_proxy.api.routes import api_router, health_router
from weather_proxy.config import Settings, get_settings
from weather_proxy.errors import ServiceError
from weather_proxy.middleware.cors import configure_cors
from weather_proxy.middleware.logging import LoggingMiddleware, configure_logging
from weather_proxy.services.openweather import OpenWeatherClient


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Report startup state."""
    settings: Settings = app.state.settings
    logger = structlog.get_logger()
    logger.info("Server running", host=settings.app_host, port=settings.port)
    if settings.api_key_configured:
        logger.info("OpenWeatherMap API key configured")
    else:
        logger.warning("OpenWeatherMap API key missing")
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    if settings is None:
        settings = get_settings()

    configure_logging(settings)

    app = FastAPI(
        title="Weather Proxy API",
        description="OpenWeatherMap proxy for the weather frontend",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.openweather_client = OpenWeatherClient(settings)

    app.add_exception_handler(ServiceError, service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        request_validation_error_handler,  # type: ignore[arg-type]
    )

    # Middleware added last runs first
    configure_cors(app, settings)
    app.add_middleware(LoggingMiddleware)

    app.include_router(api_router)
    app.include_router(health_router)

    # Mount Prometheus metrics endpoint
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    return app


# Create app instance for ASGI servers
app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "weather_proxy.main:app",
        host=settings.app_host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
