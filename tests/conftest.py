"""Test fixtures."""

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from weather_proxy.config import Settings
from weather_proxy.main import create_app
from weather_proxy.services.openweather import OpenWeatherClient

ALLOWED_ORIGIN = "http://localhost:3000"


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        openweather_api_key="test-key",
        allowed_origin=ALLOWED_ORIGIN,
        upstream_timeout_seconds=5.0,
        log_level="DEBUG",
        log_format="text",
    )


@pytest.fixture
def openweather_client(settings: Settings) -> OpenWeatherClient:
    """Create test OpenWeatherMap client."""
    return OpenWeatherClient(settings)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create test application."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def unconfigured_client(settings: Settings) -> TestClient:
    """Create test client for an app started without an API key."""
    return TestClient(create_app(settings.model_copy(update={"openweather_api_key": None})))


@pytest.fixture
def current_weather_payload() -> dict[str, Any]:
    """Upstream current weather response for London."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
        "main": {
            "temp": 14.2,
            "feels_like": 13.6,
            "temp_min": 12.9,
            "temp_max": 15.3,
            "pressure": 1012,
            "humidity": 77,
        },
        "wind": {"speed": 4.63, "deg": 240},
        "sys": {"country": "GB", "sunrise": 1697610543, "sunset": 1697648385},
        "name": "London",
        "cod": 200,
    }


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    """Upstream forecast response with three entries."""
    return {
        "cod": "200",
        "cnt": 3,
        "list": [
            {
                "dt": 1697630400,
                "main": {"temp": 14.9, "humidity": 75},
                "weather": [{"description": "light rain", "icon": "10d"}],
            },
            {
                "dt": 1697641200,
                "main": {"temp": 13.1, "humidity": 80},
                "weather": [{"description": "overcast clouds", "icon": "04n"}],
            },
            {
                "dt": 1697652000,
                "main": {"temp": 11.8, "humidity": 84},
                "weather": [{"description": "clear sky", "icon": "01n"}],
            },
        ],
        "city": {"name": "London", "country": "GB"},
    }
