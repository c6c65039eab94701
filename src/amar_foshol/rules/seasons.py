"""Bangladesh cropping seasons."""

from __future__ import annotations

from enum import Enum


class Season(str, Enum):
    """Cropping season, used to pick season-specific advice."""

    RABI = "rabi"  # Nov-Mar: wheat, mustard, potato, winter vegetables
    PRE_MONSOON = "pre_monsoon"  # Apr-May
    KHARIF = "kharif"  # Jun-Oct: aman rice, jute

    @property
    def name_bn(self) -> str:
        return SEASON_NAMES_BN[self]


SEASON_NAMES_BN: dict[Season, str] = {
    Season.RABI: "রবি",
    Season.PRE_MONSOON: "প্রাক-বর্ষা",
    Season.KHARIF: "খরিফ",
}


def season_for_month(month: int) -> Season:
    """Get the cropping season of a calendar month.

    Args:
        month: Month number, 1 (January) to 12 (December)

    Raises:
        ValueError: If month is out of range
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    if month >= 11 or month <= 3:
        return Season.RABI
    if month <= 5:
        return Season.PRE_MONSOON
    return Season.KHARIF
