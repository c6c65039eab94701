"""FastAPI application factory.

## Usage

```python
from amar_foshol.api import create_app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
```

The app is configured via environment variables. See `amar_foshol.config`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from amar_foshol.config import get_settings
from amar_foshol.database.connection import close_db, create_tables, init_db
from amar_foshol.providers.openmeteo import OpenMeteoProvider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the history database and the weather provider for the app's lifetime."""
    settings = get_settings()

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    await init_db()
    await create_tables()
    app.state.weather_provider = OpenMeteoProvider.from_settings(settings)

    yield

    logger.info("Shutting down")
    await app.state.weather_provider.aclose()
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Weather-driven crop advisories for Bangladeshi farmers",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    from amar_foshol.api.routes import advisories, crops, locations, weather

    app.include_router(locations.router, prefix="/api/locations", tags=["Locations"])
    app.include_router(weather.router, prefix="/api/weather", tags=["Weather"])
    app.include_router(
        advisories.router, prefix="/api/advisories", tags=["Advisories"]
    )
    app.include_router(crops.router, prefix="/api/crops", tags=["Crops"])

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app
