import logging
from typing import Any

import httpx
from pydantic import ValidationError

from app.config.settings import Settings
from app.models.openweather import CurrentWeatherResponse
from app.utils.exceptions import ConfigurationError, ExternalAPIError

logger = logging.getLogger(__name__)


class WeatherClient:
    """
    Async client for the OpenWeatherMap current weather endpoint.

    One httpx.AsyncClient is opened on entry and shared by all requests until
    exit. A client may also be injected, in which case its lifecycle belongs
    to the caller.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None):
        self.settings = settings
        self.client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "WeatherClient":
        """Async context manager entry"""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.openweather_api_timeout),
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit"""
        if self.client and self._owns_client:
            await self.client.aclose()
            self.client = None

    async def fetch_current_weather(
        self, params: dict[str, Any]
    ) -> CurrentWeatherResponse:
        """Fetch current weather for a query (``q`` or ``lat``/``lon``)"""
        if not self.client:
            raise ConfigurationError(
                "Weather client not initialized. Use async context manager."
            )

        logger.info(f"Fetching current weather for {_describe(params)}")

        response = await self._make_api_request(params)
        return self._parse_response(response, params)

    async def _make_api_request(self, params: dict[str, Any]) -> httpx.Response:
        """Make HTTP request to weather API"""
        query = {
            **params,
            "appid": self.settings.openweather_api_key,
            "units": "metric",
        }

        try:
            response = await self.client.get(self.settings.weather_endpoint, params=query)
        except httpx.RequestError as e:
            logger.error(f"Request error for {_describe(params)}: {e}")
            raise ExternalAPIError(f"Request failed: {str(e)}") from e

        if response.is_success:
            return response

        upstream_message = _extract_message(response)
        logger.warning(
            f"OpenWeatherMap returned {response.status_code} for "
            f"{_describe(params)}: {upstream_message}"
        )
        raise ExternalAPIError(
            f"API returned status {response.status_code}",
            response.status_code,
            response.text,
            upstream_message,
        )

    def _parse_response(
        self, response: httpx.Response, params: dict[str, Any]
    ) -> CurrentWeatherResponse:
        """Parse API response into the provider schema"""
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response for {_describe(params)}: {e}")
            raise ExternalAPIError(f"Invalid JSON response: {str(e)}") from e

        try:
            return CurrentWeatherResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected payload shape for {_describe(params)}: {e}")
            raise ExternalAPIError(f"Failed to parse weather data: {str(e)}") from e


def _describe(params: dict[str, Any]) -> str:
    if "q" in params:
        return f"location '{params['q']}'"
    return f"coordinates ({params.get('lat')}, {params.get('lon')})"


def _extract_message(response: httpx.Response) -> str | None:
    """Return the ``message`` field of an OpenWeatherMap error body, if any"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if message:
            return str(message)
    return None
