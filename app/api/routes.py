from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request
from fastapi.responses import JSONResponse

from app.models.weather import CityInfo, WeatherRecord
from app.services.weather_service import LIST_ALL_UNAVAILABLE, WeatherService
from app.utils.exceptions import NotFoundError, WeatherAPIError

logger = structlog.get_logger(__name__)
router = APIRouter()

ERROR_EXAMPLE = {
    "error": "NOT_FOUND",
    "message": 'Location "Atlantis" not found',
    "details": {"location": "Atlantis"},
}

LatQuery = Annotated[
    str | None,
    Query(description="Latitude in decimal degrees, -90 to 90", examples=["40.7128"]),
]
LonQuery = Annotated[
    str | None,
    Query(
        description="Longitude in decimal degrees, -180 to 180", examples=["-74.006"]
    ),
]


def get_weather_service(request: Request) -> WeatherService:
    """
    Dependency injection for weather service.

    Retrieves the weather service instance from the application state.
    This service is initialized during application startup.
    """
    if not hasattr(request.app.state, "weather_service"):
        raise HTTPException(status_code=503, detail="Weather service not available")

    return request.app.state.weather_service


@router.get(
    "/weather",
    response_model=list[WeatherRecord],
    summary="Get all weather data",
    description="""
    Listing weather for every location is not supported by the provider.

    This endpoint always answers 404 and points to
    `/weather/location/{location}` and `/weather/coordinates`.
    """,
    responses={404: {"description": "This endpoint is not available"}},
    tags=["Weather"],
)
async def get_all_weather() -> list[WeatherRecord]:
    logger.info("List-all weather request received")
    raise NotFoundError(LIST_ALL_UNAVAILABLE)


@router.get(
    "/weather/location/{location}",
    response_model=WeatherRecord,
    summary="Get weather by location name",
    description="""
    Retrieve current weather for a place name such as `London` or `Paris,FR`.

    **Response includes:**
    - Temperature and feels-like temperature (rounded, Celsius)
    - Condition keyword and description
    - Humidity, pressure and computed dew point
    - Visibility in km (null when the provider does not report it)
    - Wind speed in km/h, direction in degrees and as a compass label
    """,
    responses={
        200: {"description": "Returns weather for the specified location"},
        400: {"description": "Blank location name"},
        401: {"description": "Invalid API key"},
        404: {
            "description": "Location not found",
            "content": {"application/json": {"example": ERROR_EXAMPLE}},
        },
        500: {"description": "Provider error or missing API key"},
    },
    tags=["Weather"],
)
async def get_weather_by_location(
    location: Annotated[
        str, Path(description="Place name to look up", examples=["London"])
    ],
    weather_service: WeatherService = Depends(get_weather_service),
) -> WeatherRecord:
    logger.info("Weather request received", location=location)

    try:
        record = await weather_service.get_weather_by_location(location)
    except WeatherAPIError as e:
        logger.warning(
            "Weather request failed",
            location=location,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise

    logger.info("Weather request completed successfully", location=location)
    return record


@router.get(
    "/weather/coordinates",
    response_model=WeatherRecord,
    summary="Get weather by coordinates",
    description="""
    Retrieve current weather for a latitude/longitude pair.

    Both parameters are required and validated before the provider is called.
    """,
    responses={
        200: {"description": "Returns weather for the specified coordinates"},
        400: {"description": "Invalid coordinates"},
        401: {"description": "Invalid API key"},
        500: {"description": "Provider error or missing API key"},
    },
    tags=["Weather"],
)
async def get_weather_by_coordinates(
    lat: LatQuery = None,
    lon: LonQuery = None,
    weather_service: WeatherService = Depends(get_weather_service),
) -> WeatherRecord:
    logger.info("Weather request received", lat=lat, lon=lon)

    try:
        record = await weather_service.get_weather_by_coordinates(lat, lon)
    except WeatherAPIError as e:
        logger.warning(
            "Weather request failed",
            lat=lat,
            lon=lon,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise

    logger.info("Weather request completed successfully", location=record.location)
    return record


@router.get(
    "/weather/city",
    response_model=CityInfo,
    summary="Get city name by coordinates (reverse geocoding)",
    description="""
    Resolve a latitude/longitude pair to the place name and country
    reported by the provider, along with the coordinates it matched.
    """,
    responses={
        200: {"description": "Returns city information for the specified coordinates"},
        400: {"description": "Invalid coordinates"},
        401: {"description": "Invalid API key"},
        500: {"description": "Provider error or missing API key"},
    },
    tags=["Weather"],
)
async def get_city_by_coordinates(
    lat: LatQuery = None,
    lon: LonQuery = None,
    weather_service: WeatherService = Depends(get_weather_service),
) -> CityInfo:
    logger.info("City request received", lat=lat, lon=lon)

    try:
        city = await weather_service.get_city_by_coordinates(lat, lon)
    except WeatherAPIError as e:
        logger.warning(
            "City request failed",
            lat=lat,
            lon=lon,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise

    logger.info("City request completed successfully", location=city.location)
    return city


@router.get(
    "/health",
    response_model=dict[str, Any],
    summary="Service health check",
    description="""
    Report the status of the service components without calling the provider:
    - Upstream HTTP client initialization
    - Whether an OpenWeatherMap API key is configured

    A missing API key reports `degraded`: the service runs but every
    lookup fails until a key is provided.
    """,
    tags=["Health"],
)
async def health_check(
    weather_service: WeatherService = Depends(get_weather_service),
) -> dict[str, Any]:
    logger.info("Health check requested")

    health_status = await weather_service.health_check()
    status_code = 503 if health_status["service"] == "unhealthy" else 200

    logger.info(
        "Health check completed",
        status=health_status["service"],
        status_code=status_code,
    )

    return JSONResponse(status_code=status_code, content=health_status)


@router.get(
    "/health/ready",
    response_model=dict[str, Any],
    summary="Readiness probe",
    description="""
    Simple readiness probe for container orchestration systems.

    Returns 200 once the service has been initialized, 503 otherwise.
    """,
    tags=["Health"],
)
async def readiness_check(
    weather_service: WeatherService = Depends(get_weather_service),
) -> dict[str, Any]:
    if not weather_service._initialized:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "message": "Service not initialized"},
        )

    return {"status": "ready"}
