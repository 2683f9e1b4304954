"""Weather Proxy - OpenWeatherMap proxy for browser clients."""

__version__ = "1.0.0"
