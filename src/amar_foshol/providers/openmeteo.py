"""Open-Meteo weather provider.

## Endpoint
- Base URL: https://api.open-meteo.com/v1/forecast
- Auth: none
- Rate limit: 10,000 requests/day (non-commercial)

## Daily forecast request
```
?latitude=23.8103&longitude=90.4125
&daily=temperature_2m_max,temperature_2m_min,precipitation_probability_max,relative_humidity_2m_max
&forecast_days=5&timezone=Asia/Dhaka
```

## Response Format
```json
{
  "latitude": 23.8,
  "longitude": 90.4,
  "timezone": "Asia/Dhaka",
  "daily": {
    "time": ["2024-06-01", "2024-06-02", ...],
    "temperature_2m_max": [33.1, 34.0, ...],
    "temperature_2m_min": [26.2, 26.8, ...],
    "precipitation_probability_max": [80, 75, ...],
    "relative_humidity_2m_max": [85, 82, ...]
  }
}
```

## Variable Translation (Open-Meteo -> Canonical)
| Open-Meteo Field | Canonical Field |
|------------------|-----------------|
| daily.time | WeatherForecast.date |
| temperature_2m_max | WeatherForecast.temp_max |
| temperature_2m_min | WeatherForecast.temp_min |
| relative_humidity_2m_max | WeatherForecast.humidity |
| precipitation_probability_max | WeatherForecast.rain_probability |

Next-day conditions for crop risk use `temperature_2m_max`,
`precipitation_sum` and `relative_humidity_2m_mean` at index 1 (index 0 is
today).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import ValidationError

from amar_foshol.config import Settings, get_settings
from amar_foshol.models.location import Coordinates
from amar_foshol.models.weather import (
    ForecastLocation,
    NextDayConditions,
    WeatherData,
    WeatherForecast,
)
from amar_foshol.providers.base import ProviderError, WeatherProvider

logger = logging.getLogger(__name__)

DAILY_FORECAST_VARIABLES = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_probability_max",
    "relative_humidity_2m_max",
)

NEXT_DAY_VARIABLES = (
    "temperature_2m_max",
    "precipitation_sum",
    "relative_humidity_2m_mean",
)


@dataclass
class _CacheEntry:
    data: WeatherData
    stored_at: float


class OpenMeteoProvider(WeatherProvider):
    """Open-Meteo daily forecast provider with an in-memory TTL cache.

    Example:
        ```python
        async with OpenMeteoProvider(cache_ttl=1800) as provider:
            data = await provider.get_forecast(coords)
            advisories = generate_advisories(data.window().forecasts)
        ```
    """

    name = "open-meteo"
    base_url = "https://api.open-meteo.com/v1/forecast"

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float = 30.0,
        forecast_days: int = 5,
        forecast_timezone: str = "Asia/Dhaka",
        cache_ttl: float = 30 * 60,
        client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the Open-Meteo provider.

        Args:
            base_url: Override the forecast endpoint
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
            forecast_days: Number of days requested
            forecast_timezone: Timezone the daily values are aggregated in
            cache_ttl: Seconds a fetched forecast is reused (0 disables caching)
            client: Preconfigured HTTP client
            clock: Monotonic time source for cache expiry
        """
        super().__init__(
            base_url=base_url, user_agent=user_agent, timeout=timeout, client=client
        )
        self.forecast_days = forecast_days
        self.forecast_timezone = forecast_timezone
        self.cache_ttl = cache_ttl
        self._clock = clock
        self._cache: dict[str, _CacheEntry] = {}

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> OpenMeteoProvider:
        """Create a provider configured from application settings."""
        settings = settings or get_settings()
        return cls(
            base_url=settings.open_meteo_base_url,
            user_agent=settings.user_agent,
            timeout=settings.provider_timeout_seconds,
            forecast_days=settings.forecast_days,
            forecast_timezone=settings.forecast_timezone,
            cache_ttl=settings.weather_cache_ttl_seconds,
        )

    async def get_forecast(self, coordinates: Coordinates) -> WeatherData:
        """Get the daily forecast, served from cache while still fresh.

        Raises:
            ProviderError: If the request fails or the payload is malformed
        """
        key = coordinates.cache_key()

        cached = self._cache.get(key)
        if cached and self._clock() - cached.stored_at < self.cache_ttl:
            logger.debug(f"Using cached forecast for {key}")
            return cached.data

        params = {
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "daily": ",".join(DAILY_FORECAST_VARIABLES),
            "forecast_days": self.forecast_days,
            "timezone": self.forecast_timezone,
        }
        logger.info(f"Fetching forecast from Open-Meteo for {key}")
        try:
            data = await self._fetch_json(self.base_url, params=params)
        except ProviderError as e:
            logger.error(f"Forecast fetch failed for {key}: {e}")
            raise

        weather = self._translate_response(data, coordinates)
        if self.cache_ttl > 0:
            self._cache[key] = _CacheEntry(data=weather, stored_at=self._clock())
        return weather

    async def get_next_day_conditions(
        self, coordinates: Coordinates
    ) -> NextDayConditions:
        """Get tomorrow's temperature, precipitation and humidity.

        Raises:
            ProviderError: If the request fails or the payload is malformed
        """
        params = {
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "daily": ",".join(NEXT_DAY_VARIABLES),
            "timezone": "auto",
        }
        data = await self._fetch_json(self.base_url, params=params)

        try:
            daily = data["daily"]
            temp = daily["temperature_2m_max"][1]
            precipitation = daily["precipitation_sum"][1]
            humidity = daily["relative_humidity_2m_mean"][1]
            return NextDayConditions(
                rain=precipitation > 0,
                humidity=humidity,
                temp=temp,
                rain_amount=precipitation,
            )
        except (KeyError, IndexError, TypeError, ValidationError) as e:
            raise ProviderError(
                f"Malformed next-day payload: {e}", provider=self.name
            ) from e

    def _translate_response(
        self,
        response_data: dict[str, Any],
        coordinates: Coordinates,
    ) -> WeatherData:
        """Translate an Open-Meteo daily response to WeatherData.

        See module docstring for the field mapping.
        """
        try:
            daily = response_data["daily"]
            forecasts = [
                WeatherForecast(
                    date=day,
                    temp_max=daily["temperature_2m_max"][i],
                    temp_min=daily["temperature_2m_min"][i],
                    humidity=daily["relative_humidity_2m_max"][i],
                    rain_probability=daily["precipitation_probability_max"][i],
                )
                for i, day in enumerate(daily["time"])
            ]
            location = ForecastLocation(
                latitude=response_data.get("latitude", coordinates.latitude),
                longitude=response_data.get("longitude", coordinates.longitude),
                timezone=response_data.get("timezone"),
            )
        except (KeyError, IndexError, TypeError, ValidationError) as e:
            raise ProviderError(
                f"Malformed forecast payload: {e}", provider=self.name
            ) from e

        return WeatherData(
            location=location,
            forecasts=forecasts,
            last_updated=datetime.now(timezone.utc),
            provider=self.name,
        )

    def clear_cache(self) -> None:
        """Drop all cached forecasts."""
        self._cache.clear()
        logger.info("Weather cache cleared")

    def cache_stats(self) -> dict[str, Any]:
        """Get the number of cached forecasts and their keys."""
        return {"size": len(self._cache), "keys": list(self._cache)}
