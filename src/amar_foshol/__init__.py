"""Amar Foshol: weather-driven crop advisories for Bangladeshi farmers."""

from amar_foshol.models import Advisory, ForecastWindow, WeatherForecast
from amar_foshol.rules import AdvisoryEngine, generate_advisories

__version__ = "0.1.0"

__all__ = [
    "Advisory",
    "AdvisoryEngine",
    "ForecastWindow",
    "WeatherForecast",
    "generate_advisories",
]
