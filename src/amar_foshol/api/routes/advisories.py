"""Advisory routes.

Advisories are generated from the 5-day forecast of a district, or from a
forecast window posted by the client, and logged in the advisory history.
Field-work advisories depend on the cropping season, taken from `month` or,
when omitted, from the month of the window's first day.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from amar_foshol.api.dependencies import get_weather_provider, resolve_district
from amar_foshol.api.routes.weather import fetch_forecast
from amar_foshol.database.connection import get_db_session
from amar_foshol.history import AdvisoryHistory
from amar_foshol.models.advisory import Advisory, AdvisorySummary
from amar_foshol.models.location import District
from amar_foshol.models.weather import ForecastWindow, WeatherForecast
from amar_foshol.providers.base import WeatherProvider
from amar_foshol.rules.engine import (
    generate_advisories,
    generate_field_advisories,
    summarize,
)
from amar_foshol.rules.seasons import Season, season_for_month

logger = logging.getLogger(__name__)

router = APIRouter()


class AdvisoryResponse(BaseModel):
    """Advisories for one forecast window."""

    location: str | None = None
    forecasts: list[WeatherForecast]
    advisories: list[Advisory]
    summary: AdvisorySummary


class FieldAdvisoryResponse(AdvisoryResponse):
    """Field-work advisories with the season they were chosen for."""

    month: int
    season: Season


class HistoryResponse(BaseModel):
    advisories: list[Advisory]


class ClearHistoryResponse(BaseModel):
    deleted: int


def _respond(
    window: ForecastWindow, location: str | None = None
) -> AdvisoryResponse:
    advisories = generate_advisories(window.forecasts)
    return AdvisoryResponse(
        location=location,
        forecasts=window.forecasts,
        advisories=advisories,
        summary=summarize(advisories),
    )


def _respond_field(
    window: ForecastWindow, month: int | None, location: str | None = None
) -> FieldAdvisoryResponse:
    month = month or window.start.month
    advisories = generate_field_advisories(window.forecasts, month)
    return FieldAdvisoryResponse(
        location=location,
        forecasts=window.forecasts,
        advisories=advisories,
        summary=summarize(advisories),
        month=month,
        season=season_for_month(month),
    )


async def _district_window(
    provider: WeatherProvider, place: District
) -> ForecastWindow:
    weather = await fetch_forecast(provider, place)

    try:
        return weather.window()
    except ValidationError as e:
        logger.error(f"Unusable forecast for {place.display_name()}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Weather provider returned an incomplete forecast",
        )


@router.get("", response_model=AdvisoryResponse)
async def get_advisories(
    division: str | None = Query(default=None),
    district: str | None = Query(default=None),
    provider: WeatherProvider = Depends(get_weather_provider),
    db: AsyncSession = Depends(get_db_session),
) -> AdvisoryResponse:
    """Generate advisories from a district's forecast and log them."""
    place = resolve_district(division, district)
    window = await _district_window(provider, place)

    result = _respond(window, place.display_name())
    await AdvisoryHistory(db).record_many(result.advisories, location=result.location)
    return result


@router.post("/evaluate", response_model=AdvisoryResponse)
async def evaluate_window(
    window: ForecastWindow,
    record: bool = Query(default=False, description="Log the advisories in history"),
    db: AsyncSession = Depends(get_db_session),
) -> AdvisoryResponse:
    """Generate advisories for a client-supplied 5-day window."""
    result = _respond(window)
    if record:
        await AdvisoryHistory(db).record_many(result.advisories)
    return result


@router.get("/field", response_model=FieldAdvisoryResponse)
async def get_field_advisories(
    division: str | None = Query(default=None),
    district: str | None = Query(default=None),
    month: int | None = Query(
        default=None, ge=1, le=12, description="Month for seasonal advice"
    ),
    provider: WeatherProvider = Depends(get_weather_provider),
    db: AsyncSession = Depends(get_db_session),
) -> FieldAdvisoryResponse:
    """Generate field-work advisories from a district's forecast and log them."""
    place = resolve_district(division, district)
    window = await _district_window(provider, place)

    result = _respond_field(window, month, place.display_name())
    await AdvisoryHistory(db).record_many(result.advisories, location=result.location)
    return result


@router.post("/field/evaluate", response_model=FieldAdvisoryResponse)
async def evaluate_field_window(
    window: ForecastWindow,
    month: int | None = Query(
        default=None, ge=1, le=12, description="Month for seasonal advice"
    ),
    record: bool = Query(default=False, description="Log the advisories in history"),
    db: AsyncSession = Depends(get_db_session),
) -> FieldAdvisoryResponse:
    """Generate field-work advisories for a client-supplied 5-day window."""
    result = _respond_field(window, month)
    if record:
        await AdvisoryHistory(db).record_many(result.advisories)
    return result


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    limit: int = Query(default=10, ge=1, le=100),
    db: AsyncSession = Depends(get_db_session),
) -> HistoryResponse:
    """Most recently generated advisories, newest first."""
    return HistoryResponse(advisories=await AdvisoryHistory(db).recent(limit))


@router.delete("/history", response_model=ClearHistoryResponse)
async def clear_history(
    db: AsyncSession = Depends(get_db_session),
) -> ClearHistoryResponse:
    return ClearHistoryResponse(deleted=await AdvisoryHistory(db).clear())
