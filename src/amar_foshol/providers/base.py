"""Base weather provider abstraction.

Providers fetch daily forecasts and translate them into the models in
`amar_foshol.models.weather`, so the advisory engine and the crop risk
assessment never see a provider's native payload.

## Canonical Units
- Temperature: Celsius (°C)
- Humidity: percentage (0-100)
- Precipitation probability: percentage (0-100)
- Precipitation amount: millimeters (mm)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from amar_foshol.models.location import Coordinates
from amar_foshol.models.weather import NextDayConditions, WeatherData


class ProviderError(Exception):
    """Base exception for weather provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class RateLimitError(ProviderError):
    """Raised when provider rate limit is exceeded."""

    def __init__(
        self,
        provider: str,
        retry_after: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            status_code=status_code,
        )
        self.retry_after = retry_after


class WeatherProvider(ABC):
    """Abstract base class for daily forecast providers.

    Attributes:
        name: Provider name, reported in `WeatherData.provider`
        base_url: Forecast endpoint

    Example:
        ```python
        async with OpenMeteoProvider() as provider:
            data = await provider.get_forecast(
                Coordinates(latitude=23.8103, longitude=90.4125)
            )
        ```
    """

    name: str
    base_url: str

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the provider.

        Args:
            base_url: Override the provider's default endpoint
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
            client: Preconfigured HTTP client (e.g. with a mock transport)
        """
        if base_url:
            self.base_url = base_url
        self.user_agent = user_agent or "AmarFoshol/0.1.0"
        self.timeout = timeout
        self._client = client

    async def __aenter__(self) -> WeatherProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
        reraise=True,
    )
    async def _fetch(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Fetch data from the API with retry logic.

        Raises:
            RateLimitError: If rate limit is exceeded
            ProviderError: If the API answers with an error status
        """
        client = self._get_client()
        response = await client.get(
            url, params=params, headers=self._get_default_headers()
        )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                self.name,
                retry_after=int(retry_after) if retry_after else None,
                status_code=429,
            )

        if response.status_code >= 400:
            raise ProviderError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        return response

    async def _fetch_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Fetch and decode a JSON object.

        Network failures that survive the retries surface as ProviderError.
        """
        try:
            response = await self._fetch(url, params=params)
        except httpx.HTTPError as e:
            raise ProviderError(
                f"Request to {self.name} failed: {e}", provider=self.name
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Failed to parse response: {e}",
                provider=self.name,
                response_body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise ProviderError(
                "Unexpected response payload",
                provider=self.name,
                response_body=response.text,
            )
        return data

    @abstractmethod
    async def get_forecast(self, coordinates: Coordinates) -> WeatherData:
        """Get the daily forecast for a location.

        Raises:
            ProviderError: If forecast cannot be retrieved
        """

    @abstractmethod
    async def get_next_day_conditions(
        self, coordinates: Coordinates
    ) -> NextDayConditions:
        """Get tomorrow's conditions for a location.

        Raises:
            ProviderError: If conditions cannot be retrieved
        """

    @abstractmethod
    def _translate_response(
        self,
        response_data: dict[str, Any],
        coordinates: Coordinates,
    ) -> WeatherData:
        """Translate a provider-specific response to WeatherData."""
