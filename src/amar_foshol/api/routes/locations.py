"""Division and district lookup routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from amar_foshol.locations import LocationNotFoundError, get_districts, get_divisions

router = APIRouter()


class DivisionsResponse(BaseModel):
    divisions: list[str]


class DistrictsResponse(BaseModel):
    division: str
    districts: list[str]


@router.get("", response_model=DivisionsResponse)
async def list_divisions() -> DivisionsResponse:
    """List all divisions."""
    return DivisionsResponse(divisions=get_divisions())


@router.get("/{division}", response_model=DistrictsResponse)
async def list_districts(division: str) -> DistrictsResponse:
    """List the districts of a division."""
    try:
        districts = get_districts(division)
    except LocationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DistrictsResponse(division=division, districts=districts)
