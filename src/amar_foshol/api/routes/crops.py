"""Crop risk routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from amar_foshol.api.dependencies import get_weather_provider, resolve_district
from amar_foshol.models.weather import NextDayConditions
from amar_foshol.providers.base import ProviderError, WeatherProvider
from amar_foshol.risk.crop_risk import (
    CROP_NAMES_BN,
    CropAlert,
    RiskAssessment,
    calculate_risk,
    generate_alert,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class CropInfo(BaseModel):
    crop: str
    name_bn: str


class CropRiskResponse(BaseModel):
    """Tomorrow's risk for a crop in a district."""

    crop: str
    location: str
    conditions: NextDayConditions
    risk: RiskAssessment
    alert: CropAlert | None = None


@router.get("", response_model=list[CropInfo])
async def list_crops() -> list[CropInfo]:
    """Crops with specific risk rules."""
    return [CropInfo(crop=crop, name_bn=name) for crop, name in CROP_NAMES_BN.items()]


@router.get("/risk", response_model=CropRiskResponse)
async def get_crop_risk(
    crop: str = Query(..., min_length=1),
    division: str | None = Query(default=None),
    district: str | None = Query(default=None),
    provider: WeatherProvider = Depends(get_weather_provider),
) -> CropRiskResponse:
    """Assess tomorrow's weather risk for a crop."""
    place = resolve_district(division, district)
    location = place.display_name()

    try:
        conditions = await provider.get_next_day_conditions(place.coordinates)
    except ProviderError as e:
        logger.error(f"Next-day conditions fetch failed for {location}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch weather data: {e}",
        )

    risk = calculate_risk(crop, conditions)
    return CropRiskResponse(
        crop=crop,
        location=location,
        conditions=conditions,
        risk=risk,
        alert=generate_alert(crop, conditions, risk, location),
    )
