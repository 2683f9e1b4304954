"""Request logging, request metrics and structlog setup."""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

from weather_proxy.config import Settings

REQUEST_ID_HEADER = "X-Request-ID"

# Route label for requests that matched no route
UNMATCHED_ROUTE = "<unmatched>"

http_requests = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "route", "status"],
)
http_duration = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds, upstream time included",
    ["method", "route"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 7.5],
)


def configure_logging(settings: Settings) -> None:
    """Configure structlog for JSON (production) or console (local) output."""
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.log_format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def route_label(request: Request) -> str:
    """Route template the request matched, e.g. ``/api/weather``."""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Bind per-request log context and record one log line and metric per request."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            origin=request.headers.get("origin"),
        )
        logger = structlog.get_logger()
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error while serving request")
            http_requests.labels(request.method, route_label(request), "500").inc()
            raise

        duration = time.perf_counter() - start
        route = route_label(request)
        http_requests.labels(request.method, route, str(response.status_code)).inc()
        http_duration.labels(request.method, route).observe(duration)

        log = logger.warning if 400 <= response.status_code < 500 else logger.info
        log(
            "Request completed",
            route=route,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
