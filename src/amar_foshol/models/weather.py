"""Weather and forecast models.

Daily forecasts are exchanged in camelCase (`tempMax`, `rainProbability`) to
stay compatible with existing web clients; the snake_case attribute names are
accepted on input as well.
"""

from __future__ import annotations

import datetime as dt
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

FORECAST_WINDOW_DAYS = 5


class WeatherForecast(BaseModel):
    """Weather summary for a single day."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: dt.date = Field(..., description="Calendar date of the forecast")
    temp_max: float = Field(..., alias="tempMax", description="Maximum temperature (°C)")
    temp_min: float = Field(..., alias="tempMin", description="Minimum temperature (°C)")
    humidity: float = Field(
        ..., ge=0, le=100, description="Relative humidity percentage"
    )
    rain_probability: float = Field(
        ...,
        ge=0,
        le=100,
        alias="rainProbability",
        description="Probability of precipitation (%)",
    )


class ForecastWindow(BaseModel):
    """The fixed 5-day sequence of daily forecasts fed to the advisory engine.

    The engine trusts its input, so this model is where the window shape is
    enforced: exactly five days, in chronological order, without repeats.
    """

    forecasts: list[WeatherForecast] = Field(
        ...,
        min_length=FORECAST_WINDOW_DAYS,
        max_length=FORECAST_WINDOW_DAYS,
        description="Daily forecasts, earliest first",
    )

    @model_validator(mode="after")
    def validate_chronological(self) -> Self:
        """Ensure dates strictly increase."""
        dates = [f.date for f in self.forecasts]
        if len(set(dates)) != len(dates):
            raise ValueError("Forecast window contains duplicate dates")
        if dates != sorted(dates):
            raise ValueError("Forecast window must be in chronological order")
        return self

    @property
    def start(self) -> dt.date:
        return self.forecasts[0].date

    @property
    def end(self) -> dt.date:
        return self.forecasts[-1].date


class ForecastLocation(BaseModel):
    """Where a forecast applies, as reported by the provider."""

    latitude: float
    longitude: float
    timezone: str | None = None


class WeatherData(BaseModel):
    """Daily forecast for a location, as returned by a weather provider."""

    model_config = ConfigDict(populate_by_name=True)

    location: ForecastLocation
    forecasts: list[WeatherForecast] = Field(default_factory=list)
    last_updated: dt.datetime = Field(..., alias="lastUpdated")
    provider: str = Field(..., description="Weather data provider name")

    def window(self) -> ForecastWindow:
        """Validate the leading five days as an advisory window.

        Raises:
            pydantic.ValidationError: If fewer than five days are available
                or the dates are out of order
        """
        return ForecastWindow(forecasts=self.forecasts[:FORECAST_WINDOW_DAYS])


class NextDayConditions(BaseModel):
    """Tomorrow's conditions, used for crop risk assessment."""

    rain: bool = Field(..., description="Any precipitation expected")
    humidity: float = Field(..., ge=0, le=100, description="Mean relative humidity (%)")
    temp: float = Field(..., description="Maximum temperature (°C)")
    rain_amount: float = Field(default=0.0, ge=0, description="Precipitation sum (mm)")
