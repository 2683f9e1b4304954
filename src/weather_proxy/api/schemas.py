"""API request and response schemas."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from weather_proxy.errors import InvalidCoordinatesError, LocationRequiredError


class WeatherQuery(BaseModel):
    """Location to query: a city name or a coordinate pair."""

    model_config = ConfigDict(frozen=True)

    city: str | None = Field(default=None, description="City name")
    lat: float | None = Field(default=None, ge=-90, le=90, description="Latitude")
    lon: float | None = Field(default=None, ge=-180, le=180, description="Longitude")

    @classmethod
    def from_params(
        cls,
        city: str | None = None,
        lat: str | float | None = None,
        lon: str | float | None = None,
    ) -> Self:
        """Build a query from raw request parameters.

        City takes precedence over coordinates when both are given, and
        coordinates are not looked at in that case. Empty values count as
        absent.

        Raises:
            LocationRequiredError: If neither a city nor both coordinates are given
            InvalidCoordinatesError: If a coordinate is not a number in range
        """
        if city:
            return cls(city=city)
        if lat is None or lat == "" or lon is None or lon == "":
            raise LocationRequiredError()
        try:
            return cls(lat=lat, lon=lon)
        except ValidationError as e:
            raise InvalidCoordinatesError() from e

    def to_upstream_params(self) -> dict[str, str | float]:
        """Query parameters selecting this location upstream."""
        if self.city:
            return {"q": self.city}
        assert self.lat is not None and self.lon is not None
        return {"lat": self.lat, "lon": self.lon}


class Coordinates(BaseModel):
    """Geographic location."""

    lon: float = Field(..., description="Longitude")
    lat: float = Field(..., description="Latitude")


class CurrentWeatherResponse(BaseModel):
    """Current weather conditions."""

    city: str = Field(..., description="City name")
    country: str | None = Field(default=None, description="ISO country code")
    temp: float = Field(..., description="Temperature in Celsius")
    feels_like: float = Field(..., description="Feels-like temperature in Celsius")
    humidity: int = Field(..., description="Relative humidity in percent")
    wind: float = Field(..., description="Wind speed in m/s")
    description: str = Field(..., description="Weather description")
    icon: str = Field(..., description="Weather icon code")
    coord: Coordinates | None = None


class ForecastEntry(BaseModel):
    """Single 3-hour forecast step."""

    dt: int = Field(..., description="Unix timestamp of the forecast step")
    temp: float = Field(..., description="Temperature in Celsius")
    icon: str = Field(..., description="Weather icon code")
    description: str = Field(..., description="Weather description")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    solution: str | None = Field(default=None, description="Remediation hint")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status")


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: str = Field(..., description="Readiness status")
    checks: dict[str, str] = Field(default_factory=dict, description="Component checks")
