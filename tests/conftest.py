"""Pytest fixtures for Amar Foshol tests.

This module provides test fixtures that ensure:
1. No external API calls are made (the weather provider is faked or mocked)
2. Each database test gets its own SQLite file
3. Isolated test environment with controlled configuration
"""

import os
from datetime import date, datetime, timedelta, timezone

import pytest
import pytest_asyncio

# Set test environment BEFORE importing application modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from amar_foshol.models.location import Coordinates
from amar_foshol.models.weather import (
    ForecastLocation,
    ForecastWindow,
    NextDayConditions,
    WeatherData,
    WeatherForecast,
)
from amar_foshol.providers.base import ProviderError, WeatherProvider


START_DATE = date(2024, 6, 1)


def make_day(
    offset: int,
    rain: float = 10,
    humidity: float = 60,
    temp_max: float = 28,
    temp_min: float = 20,
) -> WeatherForecast:
    """One day of forecast, `offset` days after START_DATE."""
    return WeatherForecast(
        date=START_DATE + timedelta(days=offset),
        temp_max=temp_max,
        temp_min=temp_min,
        humidity=humidity,
        rain_probability=rain,
    )


def make_window(*days: dict) -> list[WeatherForecast]:
    """Consecutive days built from keyword overrides per day."""
    return [make_day(i, **overrides) for i, overrides in enumerate(days)]


class FakeProvider(WeatherProvider):
    """In-memory provider returning canned data."""

    name = "fake"
    base_url = "http://fake.invalid"

    def __init__(
        self,
        forecasts: list[WeatherForecast] | None = None,
        next_day: NextDayConditions | None = None,
        error: ProviderError | None = None,
    ):
        super().__init__()
        self.forecasts = forecasts or []
        self.next_day = next_day
        self.error = error
        self.requested: list[Coordinates] = []

    async def get_forecast(self, coordinates: Coordinates) -> WeatherData:
        self.requested.append(coordinates)
        if self.error:
            raise self.error
        return self._translate_response({}, coordinates)

    async def get_next_day_conditions(
        self, coordinates: Coordinates
    ) -> NextDayConditions:
        self.requested.append(coordinates)
        if self.error:
            raise self.error
        return self.next_day

    def _translate_response(self, response_data, coordinates) -> WeatherData:
        return WeatherData(
            location=ForecastLocation(
                latitude=coordinates.latitude,
                longitude=coordinates.longitude,
                timezone="Asia/Dhaka",
            ),
            forecasts=self.forecasts,
            last_updated=datetime(2024, 6, 1, 6, 0, tzinfo=timezone.utc),
            provider=self.name,
        )


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from amar_foshol.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def database_url(tmp_path) -> str:
    """SQLite database file private to one test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'history.db'}"


@pytest_asyncio.fixture
async def db_session(database_url):
    """Session on a freshly created history database."""
    from amar_foshol.database.connection import (
        close_db,
        create_tables,
        drop_tables,
        get_db,
        init_db,
    )

    await init_db(database_url)
    await create_tables()
    async with get_db() as session:
        yield session
    await drop_tables()
    await close_db()


# =============================================================================
# Forecast Fixtures
# =============================================================================


@pytest.fixture
def dhaka() -> Coordinates:
    """Coordinates of Dhaka district."""
    return Coordinates(latitude=23.8103, longitude=90.4125)


@pytest.fixture
def monsoon_forecast() -> list[WeatherForecast]:
    """Three wet, humid days followed by two drier ones."""
    return make_window(
        {"rain": 80, "humidity": 85, "temp_max": 33, "temp_min": 24},
        {"rain": 75, "humidity": 82, "temp_max": 34, "temp_min": 25},
        {"rain": 78, "humidity": 81, "temp_max": 32, "temp_min": 23},
        {"rain": 20, "humidity": 60, "temp_max": 28, "temp_min": 20},
        {"rain": 15, "humidity": 55, "temp_max": 27, "temp_min": 19},
    )


@pytest.fixture
def ideal_forecast() -> list[WeatherForecast]:
    """Five mild, dry days suited to drying crops."""
    return make_window(*[{"rain": 10, "humidity": 60, "temp_max": 25, "temp_min": 20}] * 5)


@pytest.fixture
def monsoon_window(monsoon_forecast) -> ForecastWindow:
    return ForecastWindow(forecasts=monsoon_forecast)


@pytest.fixture
def fake_provider(monsoon_forecast) -> FakeProvider:
    """Provider serving the monsoon forecast and a hot, dry tomorrow."""
    return FakeProvider(
        forecasts=monsoon_forecast,
        next_day=NextDayConditions(rain=False, humidity=50, temp=34, rain_amount=0),
    )
