"""Location models."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, Field


# Regex for parsing lat/long coordinates: "latitude,longitude"
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)$"
)


class Coordinates(BaseModel):
    """Geographic coordinates (latitude/longitude) in decimal degrees."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse coordinates from string format 'latitude,longitude'.

        Examples:
            '23.8103,90.4125' -> Dhaka
            '22.3569,91.7832' -> Chattogram
        """
        match = COORDINATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected format: 'latitude,longitude' (e.g., '23.8103,90.4125')"
            )
        return cls(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
        )

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def to_tuple(self) -> tuple[float, float]:
        """Return coordinates as (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def cache_key(self) -> str:
        """Key identifying this point to four decimal places."""
        return f"{self.latitude:.4f},{self.longitude:.4f}"


class District(BaseModel):
    """A district within one of Bangladesh's divisions."""

    division: str = Field(..., description="Division name (Bangla)")
    name: str = Field(..., description="District name (Bangla)")
    coordinates: Coordinates

    def display_name(self) -> str:
        """Get a display name for this district."""
        return f"{self.name}, {self.division}"
