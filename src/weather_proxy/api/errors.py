"""Upstream error classification and error response rendering."""

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from weather_proxy.api.schemas import ErrorResponse
from weather_proxy.errors import (
    InvalidRequestError,
    ServiceError,
    UpstreamAuthError,
    UpstreamNotFoundError,
    UpstreamUnavailableError,
)
from weather_proxy.services.openweather import (
    OpenWeatherAPIError,
    OpenWeatherError,
    OpenWeatherTimeoutError,
)

logger = structlog.get_logger()


def map_upstream_error(exc: OpenWeatherError) -> ServiceError:
    """Classify an upstream failure into the error returned to the caller.

    401 and 404 from upstream are passed through; everything else, including
    timeouts and malformed payloads, becomes a generic unavailable error.
    Upstream details are only logged.
    """
    if isinstance(exc, OpenWeatherAPIError):
        logger.error(
            "Upstream API error",
            status_code=exc.status_code,
            detail=exc.body if exc.body else str(exc),
        )
        if exc.status_code == 401:
            return UpstreamAuthError()
        if exc.status_code == 404:
            return UpstreamNotFoundError()
    elif isinstance(exc, OpenWeatherTimeoutError):
        logger.error("Upstream timeout", detail=str(exc))
    else:
        logger.error("Upstream request failed", detail=str(exc))

    return UpstreamUnavailableError()


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError as a JSON error body."""
    body = ErrorResponse(error=exc.message, solution=exc.solution)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures in the same shape as other errors."""
    logger.warning("Invalid request parameters", errors=exc.errors())
    return await service_error_handler(request, InvalidRequestError())
