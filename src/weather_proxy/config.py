"""Application configuration management."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Read once at startup and never mutated afterwards.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
    )

    # Server settings
    app_host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=5000, description="Server bind port")
    allowed_origin: str = Field(
        default="http://localhost:3000",
        description="The only browser origin allowed to call the API",
    )

    # Upstream API settings
    openweather_api_key: str | None = Field(
        default=None,
        description="OpenWeatherMap API key",
    )
    upstream_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="OpenWeatherMap API base URL",
    )
    upstream_timeout_seconds: float = Field(
        default=5.0,
        description="Upstream request timeout in seconds",
        ge=0.1,
        le=30.0,
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="json",
        description="Log format (json or text)",
    )

    @property
    def api_key_configured(self) -> bool:
        """Whether a non-empty upstream API key is set."""
        return bool(self.openweather_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
