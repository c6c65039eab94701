"""Domain models for weather-driven farming advisories."""

from amar_foshol.models.location import Coordinates, District
from amar_foshol.models.weather import (
    FORECAST_WINDOW_DAYS,
    ForecastLocation,
    ForecastWindow,
    NextDayConditions,
    WeatherData,
    WeatherForecast,
)
from amar_foshol.models.advisory import (
    Advisory,
    AdvisoryIcon,
    AdvisorySummary,
    AdvisoryType,
    risk_level_label,
)

__all__ = [
    # Location
    "Coordinates",
    "District",
    # Weather
    "FORECAST_WINDOW_DAYS",
    "ForecastLocation",
    "ForecastWindow",
    "NextDayConditions",
    "WeatherData",
    "WeatherForecast",
    # Advisory
    "Advisory",
    "AdvisoryIcon",
    "AdvisorySummary",
    "AdvisoryType",
    "risk_level_label",
]
