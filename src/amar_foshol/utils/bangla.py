"""Bangla numeral formatting."""

from __future__ import annotations

import math
import re

BANGLA_DIGITS = "০১২৩৪৫৬৭৮৯"

_ASCII_DIGIT = re.compile(r"[0-9]")
_BANGLA_DIGIT = re.compile(f"[{BANGLA_DIGITS}]")


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up (36.5 -> 37)."""
    return math.floor(value + 0.5)


def to_bangla_number(value: int | float | str) -> str:
    """Convert ASCII digits to Bangla digits.

    Examples:
        123 -> "১২৩"
        "45.6" -> "৪৫.৬"
    """
    return _ASCII_DIGIT.sub(lambda m: BANGLA_DIGITS[int(m.group())], str(value))


def to_english_number(value: str) -> str:
    """Convert Bangla digits back to ASCII digits."""
    return _BANGLA_DIGIT.sub(lambda m: str(BANGLA_DIGITS.index(m.group())), value)


def format_temperature_bn(celsius: float) -> str:
    """Format a temperature for Bangla text, e.g. 32 -> "৩২°সে"."""
    return f"{to_bangla_number(round_half_up(celsius))}°সে"


def format_percentage_bn(percentage: float) -> str:
    """Format a percentage for Bangla text, e.g. 85 -> "৮৫%"."""
    return f"{to_bangla_number(round_half_up(percentage))}%"
