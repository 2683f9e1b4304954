"""OpenWeatherMap API client."""

import asyncio
import time
from typing import Any, TypeVar

import httpx
import structlog
from prometheus_client import Counter, Histogram
from pydantic import BaseModel, Field, ValidationError

from weather_proxy.api.schemas import WeatherQuery
from weather_proxy.config import Settings


class OpenWeatherError(Exception):
    """Base exception for OpenWeatherMap client errors."""


class OpenWeatherTimeoutError(OpenWeatherError):
    """Raised when upstream request times out."""


class OpenWeatherAPIError(OpenWeatherError):
    """Raised when upstream returns an error."""

    def __init__(self, message: str, status_code: int, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


logger = structlog.get_logger()

PayloadT = TypeVar("PayloadT", bound=BaseModel)

# Metrics
upstream_requests = Counter(
    "upstream_requests_total",
    "Total upstream API requests",
    ["endpoint", "status"],
)
upstream_duration = Histogram(
    "upstream_request_duration_seconds",
    "Upstream request duration in seconds",
    ["endpoint"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


class Coord(BaseModel):
    lon: float
    lat: float


class Condition(BaseModel):
    description: str
    icon: str


class CurrentMain(BaseModel):
    temp: float
    feels_like: float
    humidity: int


class Wind(BaseModel):
    speed: float


class Sys(BaseModel):
    country: str | None = None


class CurrentWeatherPayload(BaseModel):
    """Subset of the upstream ``/weather`` response."""

    name: str
    sys: Sys | None = None
    main: CurrentMain
    wind: Wind
    weather: list[Condition] = Field(..., min_length=1)
    coord: Coord | None = None


class ForecastMain(BaseModel):
    temp: float


class ForecastItem(BaseModel):
    dt: int
    main: ForecastMain
    weather: list[Condition] = Field(..., min_length=1)


class ForecastPayload(BaseModel):
    """Subset of the upstream ``/forecast`` response."""

    items: list[ForecastItem] = Field(..., alias="list")


class OpenWeatherClient:
    """HTTP client for the OpenWeatherMap current weather and forecast APIs."""

    def __init__(self, settings: Settings) -> None:
        """Initialize client with settings."""
        self._base_url = settings.upstream_url.rstrip("/")
        self._timeout = settings.upstream_timeout_seconds

    async def get_current_weather(
        self, query: WeatherQuery, api_key: str
    ) -> CurrentWeatherPayload:
        """Fetch current weather for a city or coordinates.

        Raises:
            OpenWeatherTimeoutError: If request times out
            OpenWeatherAPIError: If upstream returns an error
            OpenWeatherError: If the request fails or the response is malformed
        """
        data = await self._get("weather", query, api_key)
        return self._parse(CurrentWeatherPayload, data)

    async def get_forecast(self, query: WeatherQuery, api_key: str) -> ForecastPayload:
        """Fetch the 5 day / 3 hour forecast for a city or coordinates.

        Raises the same exceptions as :meth:`get_current_weather`.
        """
        data = await self._get("forecast", query, api_key)
        return self._parse(ForecastPayload, data)

    async def _get(self, endpoint: str, query: WeatherQuery, api_key: str) -> Any:
        params: dict[str, str | float] = {
            **query.to_upstream_params(),
            "appid": api_key,
            "units": "metric",
        }

        with upstream_duration.labels(endpoint=endpoint).time():
            try:
                start = time.perf_counter()
                # Deadline for the whole call, httpx timeouts are per step
                async with asyncio.timeout(self._timeout):
                    async with httpx.AsyncClient(timeout=self._timeout) as client:
                        response = await client.get(
                            f"{self._base_url}/{endpoint}", params=params
                        )

                logger.debug(
                    "Upstream call completed",
                    upstream_endpoint=endpoint,
                    upstream_status=response.status_code,
                    upstream_duration_ms=round((time.perf_counter() - start) * 1000, 2),
                )

                if response.status_code != 200:
                    upstream_requests.labels(endpoint=endpoint, status="error").inc()
                    raise OpenWeatherAPIError(
                        f"OpenWeatherMap API returned {response.status_code}",
                        response.status_code,
                        body=_error_body(response),
                    )

                upstream_requests.labels(endpoint=endpoint, status="success").inc()
                return response.json()

            except (httpx.TimeoutException, TimeoutError) as e:
                upstream_requests.labels(endpoint=endpoint, status="timeout").inc()
                raise OpenWeatherTimeoutError(
                    f"OpenWeatherMap API request timed out after {self._timeout}s"
                ) from e

            except httpx.RequestError as e:
                upstream_requests.labels(endpoint=endpoint, status="error").inc()
                raise OpenWeatherError(f"OpenWeatherMap API request failed: {e}") from e

            except ValueError as e:
                raise OpenWeatherError("OpenWeatherMap API returned invalid JSON") from e

    @staticmethod
    def _parse(model: type[PayloadT], data: Any) -> PayloadT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise OpenWeatherError(
                f"Malformed OpenWeatherMap response: {e.error_count()} validation errors"
            ) from e


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
