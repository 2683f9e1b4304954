"""Weather service translating upstream payloads into API responses."""

import structlog

from weather_proxy.api.schemas import (
    Coordinates,
    CurrentWeatherResponse,
    ForecastEntry,
    WeatherQuery,
)
from weather_proxy.services.openweather import (
    CurrentWeatherPayload,
    ForecastPayload,
    OpenWeatherClient,
)

logger = structlog.get_logger()


def to_current_weather(payload: CurrentWeatherPayload) -> CurrentWeatherResponse:
    """Map an upstream current weather payload to the API response."""
    condition = payload.weather[0]
    return CurrentWeatherResponse(
        city=payload.name,
        country=payload.sys.country if payload.sys else None,
        temp=payload.main.temp,
        feels_like=payload.main.feels_like,
        humidity=payload.main.humidity,
        wind=payload.wind.speed,
        description=condition.description,
        icon=condition.icon,
        coord=Coordinates(lon=payload.coord.lon, lat=payload.coord.lat)
        if payload.coord
        else None,
    )


def to_forecast(payload: ForecastPayload) -> list[ForecastEntry]:
    """Map an upstream forecast payload to entries, keeping upstream order."""
    return [
        ForecastEntry(
            dt=item.dt,
            temp=item.main.temp,
            icon=item.weather[0].icon,
            description=item.weather[0].description,
        )
        for item in payload.items
    ]


class WeatherService:
    """Service for fetching weather data for a single request."""

    def __init__(self, client: OpenWeatherClient, api_key: str) -> None:
        """Initialize service with client and upstream API key."""
        self._client = client
        self._api_key = api_key

    async def get_current_weather(self, query: WeatherQuery) -> CurrentWeatherResponse:
        """Get current weather for a city or coordinates."""
        logger.info(
            "Fetching current weather from upstream",
            city=query.city,
            lat=query.lat,
            lon=query.lon,
        )
        payload = await self._client.get_current_weather(query, self._api_key)
        return to_current_weather(payload)

    async def get_forecast(self, query: WeatherQuery) -> list[ForecastEntry]:
        """Get the 5 day / 3 hour forecast for a city or coordinates."""
        logger.info(
            "Fetching forecast from upstream",
            city=query.city,
            lat=query.lat,
            lon=query.lon,
        )
        payload = await self._client.get_forecast(query, self._api_key)
        entries = to_forecast(payload)
        logger.debug("Forecast translated", entries=len(entries))
        return entries
