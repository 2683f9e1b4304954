"""FastAPI dependencies."""

from typing import Annotated

import structlog
from fastapi import Depends, Request

from weather_proxy.config import Settings
from weather_proxy.errors import ConfigurationError
from weather_proxy.services.openweather import OpenWeatherClient
from weather_proxy.services.weather import WeatherService

logger = structlog.get_logger()


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    settings: Settings = request.app.state.settings
    return settings


def get_openweather_client(request: Request) -> OpenWeatherClient:
    """Get the application's OpenWeatherMap client."""
    client: OpenWeatherClient = request.app.state.openweather_client
    return client


def require_api_key(settings: Annotated[Settings, Depends(get_app_settings)]) -> str:
    """Guard weather routes against a missing upstream API key.

    Evaluated on every request, before the route handler runs.
    """
    api_key = settings.openweather_api_key
    if not api_key:
        logger.error("Missing OpenWeatherMap API key")
        raise ConfigurationError()
    return api_key


def get_weather_service(
    client: Annotated[OpenWeatherClient, Depends(get_openweather_client)],
    api_key: Annotated[str, Depends(require_api_key)],
) -> WeatherService:
    """Get weather service instance."""
    return WeatherService(client, api_key)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
WeatherServiceDep = Annotated[WeatherService, Depends(get_weather_service)]
