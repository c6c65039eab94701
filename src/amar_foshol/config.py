"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Nothing here is secret; every value has a working default so the service and
the CLI run without a `.env` file.

## Optional Environment Variables

- DATABASE_URL: SQLAlchemy async URL for the advisory history
  (default: local SQLite file)
- OPEN_METEO_BASE_URL: Forecast endpoint (default: public Open-Meteo API)
- WEATHER_CACHE_TTL_SECONDS: How long fetched forecasts are reused (default: 1800)
- ADVISORY_HISTORY_LIMIT: Number of advisories kept in history (default: 100)
- DEBUG: Enable debug mode (default: false)

## Example .env file

```
DATABASE_URL=sqlite+aiosqlite:///./amar_foshol.db
WEATHER_CACHE_TTL_SECONDS=900
DEBUG=true
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Amar Foshol Advisories"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="CORS allowed origins",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./amar_foshol.db",
        description="SQLAlchemy async connection string",
    )
    database_pool_size: int = Field(default=5, ge=1, le=50)
    database_max_overflow: int = Field(default=10, ge=0, le=50)
    database_echo: bool = False  # Log SQL queries

    # Weather provider
    open_meteo_base_url: str = "https://api.open-meteo.com/v1/forecast"
    forecast_days: int = Field(default=5, ge=1, le=16)
    forecast_timezone: str = "Asia/Dhaka"
    weather_cache_ttl_seconds: int = Field(default=30 * 60, ge=0)
    provider_timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = "AmarFoshol/0.1.0"

    # Advisories
    advisory_history_limit: int = Field(default=100, ge=1, le=10000)

    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Ensure database URL uses an async driver."""
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
