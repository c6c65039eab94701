"""Weather data providers."""

from amar_foshol.providers.base import ProviderError, RateLimitError, WeatherProvider
from amar_foshol.providers.openmeteo import OpenMeteoProvider

__all__ = [
    "WeatherProvider",
    "ProviderError",
    "RateLimitError",
    "OpenMeteoProvider",
]
