"""API route definitions."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from weather_proxy.api.dependencies import SettingsDep, WeatherServiceDep
from weather_proxy.api.errors import map_upstream_error
from weather_proxy.api.schemas import (
    CurrentWeatherResponse,
    ErrorResponse,
    ForecastEntry,
    HealthResponse,
    ReadinessResponse,
    WeatherQuery,
)
from weather_proxy.services.openweather import OpenWeatherError

# API router for weather endpoints
api_router = APIRouter(prefix="/api", tags=["weather"])

# Health router for health checks
health_router = APIRouter(prefix="/health", tags=["health"])

CityParam = Annotated[str | None, Query(description="City name")]
LatParam = Annotated[str | None, Query(description="Latitude, -90 to 90")]
LonParam = Annotated[str | None, Query(description="Longitude, -180 to 180")]

UPSTREAM_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Missing or invalid city or coordinates"},
    401: {"model": ErrorResponse, "description": "Upstream rejected the API key"},
    404: {"model": ErrorResponse, "description": "Location not found"},
    500: {"model": ErrorResponse, "description": "Misconfiguration or upstream failure"},
}


@api_router.get(
    "/weather",
    response_model=CurrentWeatherResponse,
    response_model_exclude_none=True,
    responses=UPSTREAM_ERROR_RESPONSES,
)
async def get_weather(
    weather_service: WeatherServiceDep,
    city: CityParam = None,
    lat: LatParam = None,
    lon: LonParam = None,
) -> CurrentWeatherResponse:
    """Get current weather for a city or coordinates."""
    query = WeatherQuery.from_params(city, lat, lon)
    try:
        return await weather_service.get_current_weather(query)
    except OpenWeatherError as e:
        raise map_upstream_error(e) from e


@api_router.get(
    "/forecast",
    response_model=list[ForecastEntry],
    responses=UPSTREAM_ERROR_RESPONSES,
)
async def get_forecast(
    weather_service: WeatherServiceDep,
    city: CityParam = None,
    lat: LatParam = None,
    lon: LonParam = None,
) -> list[ForecastEntry]:
    """Get the 5 day / 3 hour forecast for a city or coordinates.

    Entries are returned in upstream chronological order.
    """
    query = WeatherQuery.from_params(city, lat, lon)
    try:
        return await weather_service.get_forecast(query)
    except OpenWeatherError as e:
        raise map_upstream_error(e) from e


@health_router.get("/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe - checks if the service is running."""
    return HealthResponse(status="ok")


@health_router.get("/ready", response_model=ReadinessResponse)
async def readiness(settings: SettingsDep) -> ReadinessResponse:
    """Readiness probe - checks if the upstream API key is configured."""
    api_key_status = "ok" if settings.api_key_configured else "missing"

    overall_status = "ok" if api_key_status == "ok" else "unhealthy"

    response = ReadinessResponse(
        status=overall_status,
        checks={"api_key": api_key_status},
    )

    if overall_status != "ok":
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response.model_dump(),
        )

    return response
