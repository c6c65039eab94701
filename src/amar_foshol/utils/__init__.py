"""Shared helpers."""

from amar_foshol.utils.bangla import (
    format_percentage_bn,
    format_temperature_bn,
    round_half_up,
    to_bangla_number,
    to_english_number,
)

__all__ = [
    "format_percentage_bn",
    "format_temperature_bn",
    "round_half_up",
    "to_bangla_number",
    "to_english_number",
]
