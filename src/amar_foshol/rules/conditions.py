"""Condition definitions for the advisory rule engine.

A condition is a single comparison against one field of a daily forecast.
A rule's day predicate is a list of conditions that must all hold for a day
to count toward the rule.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from amar_foshol.models.weather import WeatherForecast


class ForecastField(str, Enum):
    """Daily forecast values that conditions can test."""

    TEMP_MAX = "temp_max"
    TEMP_MIN = "temp_min"
    HUMIDITY = "humidity"
    RAIN_PROBABILITY = "rain_probability"


class ComparisonOperator(str, Enum):
    """Operators for comparing values."""

    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    BETWEEN = "between"  # Inclusive on both ends


_COMPARISONS = {
    ComparisonOperator.LESS_THAN: lambda a, e: a < e,
    ComparisonOperator.LESS_THAN_OR_EQUAL: lambda a, e: a <= e,
    ComparisonOperator.GREATER_THAN: lambda a, e: a > e,
    ComparisonOperator.GREATER_THAN_OR_EQUAL: lambda a, e: a >= e,
    ComparisonOperator.BETWEEN: lambda a, e: e[0] <= a <= e[1],
}

_SYMBOLS = {
    ComparisonOperator.LESS_THAN: "<",
    ComparisonOperator.LESS_THAN_OR_EQUAL: "<=",
    ComparisonOperator.GREATER_THAN: ">",
    ComparisonOperator.GREATER_THAN_OR_EQUAL: ">=",
}


class Condition(BaseModel):
    """A single comparison against one field of a daily forecast.

    Example:
        ```python
        # Rain more likely than not
        wet = Condition(
            field=ForecastField.RAIN_PROBABILITY,
            operator=ComparisonOperator.GREATER_THAN,
            value=50,
        )
        wet.matches(day)
        ```
    """

    model_config = ConfigDict(frozen=True)

    field: ForecastField = Field(..., description="Forecast value to test")
    operator: ComparisonOperator = Field(..., description="Comparison operator")
    value: Any = Field(..., description="Threshold, or (low, high) for BETWEEN")

    def extract(self, day: WeatherForecast) -> float:
        """Get the tested value from a daily forecast."""
        return getattr(day, self.field.value)

    def matches(self, day: WeatherForecast) -> bool:
        """Check whether the day satisfies this condition."""
        return _COMPARISONS[self.operator](self.extract(day), self.value)

    def describe(self) -> str:
        if self.operator == ComparisonOperator.BETWEEN:
            low, high = self.value
            return f"{low} <= {self.field.value} <= {high}"
        return f"{self.field.value} {_SYMBOLS[self.operator]} {self.value}"


def above(field: ForecastField, value: float) -> Condition:
    """Strictly greater than value."""
    return Condition(field=field, operator=ComparisonOperator.GREATER_THAN, value=value)


def below(field: ForecastField, value: float) -> Condition:
    """Strictly less than value."""
    return Condition(field=field, operator=ComparisonOperator.LESS_THAN, value=value)


def at_most(field: ForecastField, value: float) -> Condition:
    """Less than or equal to value."""
    return Condition(
        field=field, operator=ComparisonOperator.LESS_THAN_OR_EQUAL, value=value
    )


def between(field: ForecastField, low: float, high: float) -> Condition:
    """Within [low, high], inclusive."""
    return Condition(
        field=field, operator=ComparisonOperator.BETWEEN, value=(low, high)
    )


def all_match(conditions: Iterable[Condition], day: WeatherForecast) -> bool:
    """Check whether a day satisfies every condition."""
    return all(c.matches(day) for c in conditions)
