"""Weather forecast routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from amar_foshol.api.dependencies import get_weather_provider, resolve_district
from amar_foshol.models.location import District
from amar_foshol.models.weather import WeatherData
from amar_foshol.providers.base import ProviderError, WeatherProvider

logger = logging.getLogger(__name__)

router = APIRouter()

CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"


async def fetch_forecast(provider: WeatherProvider, place: District) -> WeatherData:
    """Fetch the forecast for a district, mapping provider failures to 502."""
    try:
        return await provider.get_forecast(place.coordinates)
    except ProviderError as e:
        logger.error(f"Weather fetch error for {place.display_name()}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch weather data: {e}",
        )


@router.get("", response_model=WeatherData)
async def get_weather(
    response: Response,
    division: str | None = Query(default=None),
    district: str | None = Query(default=None),
    provider: WeatherProvider = Depends(get_weather_provider),
) -> WeatherData:
    """Get the 5-day forecast for a district."""
    place = resolve_district(division, district)
    weather = await fetch_forecast(provider, place)
    response.headers["Cache-Control"] = CACHE_CONTROL
    return weather
