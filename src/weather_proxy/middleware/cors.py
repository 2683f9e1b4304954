"""Cross-origin policy."""

from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from weather_proxy.api.schemas import ErrorResponse
from weather_proxy.config import Settings

ALLOWED_METHODS = ["GET"]


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject browser requests sent from any origin but the allowed one.

    Requests without an Origin header are not browser cross-origin calls
    and pass through.
    """

    def __init__(self, app: ASGIApp, allowed_origin: str) -> None:
        super().__init__(app)
        self._allowed_origin = allowed_origin

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        origin = request.headers.get("origin")
        if origin is not None and origin != self._allowed_origin:
            structlog.get_logger().warning("Rejected cross-origin request", origin=origin)
            return JSONResponse(
                status_code=403,
                content=ErrorResponse(error="Origin not allowed").model_dump(exclude_none=True),
            )
        return await call_next(request)


def configure_cors(app: FastAPI, settings: Settings) -> None:
    """Restrict callers to GET requests from the configured origin."""
    app.add_middleware(OriginGuardMiddleware, allowed_origin=settings.allowed_origin)
    # Added last so it wraps the guard and answers preflights itself
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_methods=ALLOWED_METHODS,
    )
