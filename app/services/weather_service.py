"""
Weather service dispatching lookups to OpenWeatherMap.

Each lookup issues exactly one upstream call and translates the outcome into
either a normalized record or one client-facing error. Nothing is cached or
retried.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from app.config.settings import Settings
from app.models.openweather import CurrentWeatherResponse
from app.models.weather import CityInfo, Coordinate, WeatherRecord
from app.services.transform import transform_city, transform_weather
from app.services.validation import validate_coordinates
from app.services.weather_client import WeatherClient
from app.utils.exceptions import (
    ConfigurationError,
    ExternalAPIError,
    InvalidCoordinatesError,
    NotFoundError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
    WeatherAPIError,
)

logger = logging.getLogger(__name__)

LIST_ALL_UNAVAILABLE = (
    "This endpoint is not available. "
    "Use /weather/location/{location} or /weather/coordinates"
)


class WeatherService:
    """
    Entry point for the weather lookups.

    The API key comes from the injected settings and is checked before any
    request is made, so a missing key never costs a network round trip.
    """

    def __init__(self, settings: Settings, weather_client: WeatherClient | None = None):
        self.settings = settings
        if weather_client is None:
            weather_client = WeatherClient(settings)
        self._weather_client = weather_client
        self._initialized = False

    async def initialize(self) -> None:
        """Open the upstream HTTP client"""
        if self._initialized:
            return

        await self._weather_client.__aenter__()
        self._initialized = True
        logger.info("Weather service initialized successfully")

    async def cleanup(self) -> None:
        """Cleanup resources"""
        if self._initialized:
            await self._weather_client.__aexit__(None, None, None)
        self._initialized = False
        logger.info("Weather service cleanup completed")

    async def get_all_weather(self) -> list[WeatherRecord]:
        """There is no way to list every location; always raises NotFoundError"""
        raise NotFoundError(LIST_ALL_UNAVAILABLE)

    async def get_weather_by_location(self, location: str) -> WeatherRecord:
        location = (location or "").strip()
        if not location:
            raise ValidationError("Location name cannot be empty")

        self._ensure_configured()

        try:
            data = await self._weather_client.fetch_current_weather({"q": location})
        except ExternalAPIError as e:
            if e.status_code == 404:
                raise NotFoundError(
                    f'Location "{location}" not found', {"location": location}
                ) from e
            raise self._map_upstream_error(e, "Failed to fetch weather data") from e

        logger.info(f"Weather lookup succeeded for location '{location}'")
        return transform_weather(data)

    async def get_weather_by_coordinates(self, lat: Any, lon: Any) -> WeatherRecord:
        coordinate = validate_coordinates(lat, lon)
        data = await self._fetch_by_coordinates(coordinate, "Failed to fetch weather data")

        logger.info(f"Weather lookup succeeded for ({coordinate.lat}, {coordinate.lon})")
        return transform_weather(data)

    async def get_city_by_coordinates(self, lat: Any, lon: Any) -> CityInfo:
        coordinate = validate_coordinates(lat, lon)
        data = await self._fetch_by_coordinates(
            coordinate, "Failed to fetch city information"
        )

        try:
            return transform_city(data, coordinate)
        except ValueError as e:
            raise UpstreamError(None, "Failed to fetch city information") from e

    async def _fetch_by_coordinates(
        self, coordinate: Coordinate, fallback: str
    ) -> CurrentWeatherResponse:
        self._ensure_configured()

        try:
            return await self._weather_client.fetch_current_weather(
                {"lat": coordinate.lat, "lon": coordinate.lon}
            )
        except ExternalAPIError as e:
            if e.status_code == 400:
                raise InvalidCoordinatesError(coordinate.lat, coordinate.lon) from e
            raise self._map_upstream_error(e, fallback) from e

    def _ensure_configured(self) -> None:
        if not self.settings.has_api_key:
            logger.error("Rejecting lookup: OpenWeatherMap API key is not configured")
            raise ConfigurationError("OpenWeatherMap API key is not configured")

    @staticmethod
    def _map_upstream_error(error: ExternalAPIError, fallback: str) -> WeatherAPIError:
        if error.status_code == 401:
            return UnauthorizedError(error.upstream_message)
        return UpstreamError(error.status_code, error.upstream_message or fallback)

    async def health_check(self) -> dict[str, Any]:
        """Report component status without calling the provider"""
        if not self._initialized:
            status = "unhealthy"
        elif not self.settings.has_api_key:
            status = "degraded"
        else:
            status = "healthy"

        return {
            "service": status,
            "components": {
                "weather_client": {
                    "status": "healthy" if self._initialized else "unhealthy"
                },
                "api_key": {
                    "status": "configured" if self.settings.has_api_key else "missing"
                },
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


async def create_weather_service(settings: Settings) -> WeatherService:
    """
    Factory function to create and initialize a weather service.

    Usage:
        service = await create_weather_service(settings)
        try:
            record = await service.get_weather_by_location("London")
        finally:
            await service.cleanup()
    """
    service = WeatherService(settings)
    await service.initialize()
    return service
