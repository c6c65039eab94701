"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from amar_foshol.locations import LocationNotFoundError, get_district
from amar_foshol.models.location import District
from amar_foshol.providers.base import WeatherProvider


def get_weather_provider(request: Request) -> WeatherProvider:
    """The weather provider created at startup."""
    return request.app.state.weather_provider


def resolve_district(division: str | None, district: str | None) -> District:
    """Look up a district from query parameters.

    Raises:
        HTTPException: 400 if a parameter is missing, 404 if unknown
    """
    if not division or not district:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Please provide both "division" and "district" query parameters',
        )
    try:
        return get_district(division, district)
    except LocationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
