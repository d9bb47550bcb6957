"""
Conversion of OpenWeatherMap payloads into the service's weather records.

Every function here is pure: the same payload always yields the same record.
Rounding is half-up (halves go toward positive infinity) so that values stay
comparable with other clients of the same API contract.
"""

import math

from app.models.openweather import CurrentWeatherResponse
from app.models.weather import CityInfo, Coordinate, WeatherRecord

COMPASS_POINTS = (
    "N",
    "NNE",
    "NE",
    "ENE",
    "E",
    "ESE",
    "SE",
    "SSE",
    "S",
    "SSW",
    "SW",
    "WSW",
    "W",
    "WNW",
    "NW",
    "NNW",
)

DEFAULT_CONDITION = "Unknown"
DEFAULT_DESCRIPTION = "No description available"

# Magnus formula coefficients
MAGNUS_A = 17.27
MAGNUS_B = 237.7


def round_half_up(value: float, ndigits: int = 0) -> float:
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def calculate_dew_point(temperature: float, humidity: float) -> float | None:
    """
    Approximate the dew point in Celsius from temperature and relative humidity.

    Returns None when humidity is not positive, where the logarithm is undefined.
    """
    if humidity <= 0:
        return None

    alpha = (MAGNUS_A * temperature) / (MAGNUS_B + temperature) + math.log(
        humidity / 100.0
    )
    return round_half_up((MAGNUS_B * alpha) / (MAGNUS_A - alpha), 1)


def meters_to_kilometers(meters: float | None) -> float | None:
    if meters is None:
        return None
    return round_half_up(meters / 1000, 1)


def ms_to_kmh(speed: float) -> float:
    return round_half_up(speed * 3.6, 1)


def wind_direction_text(degrees: float) -> str:
    """Map a bearing in degrees to its 16-point compass label."""
    index = int(round_half_up(degrees / 22.5)) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def _text_or_default(value: str | None, default: str) -> str:
    if value and value.strip():
        return value
    return default


def transform_weather(data: CurrentWeatherResponse) -> WeatherRecord:
    """Build a WeatherRecord from a current weather payload"""
    condition = data.weather[0] if data.weather else None
    wind_speed = data.wind.speed if data.wind else 0.0
    # Missing wind data reads as 0 degrees, i.e. "N"
    wind_deg = (data.wind.deg or 0.0) if data.wind else 0.0

    return WeatherRecord(
        location=data.name,
        temperature=int(round_half_up(data.main.temp)),
        feels_like=int(round_half_up(data.main.feels_like)),
        condition=_text_or_default(condition and condition.main, DEFAULT_CONDITION),
        description=_text_or_default(
            condition and condition.description, DEFAULT_DESCRIPTION
        ),
        humidity=int(round_half_up(data.main.humidity)),
        pressure=int(round_half_up(data.main.pressure)),
        dew_point=calculate_dew_point(data.main.temp, data.main.humidity),
        visibility=meters_to_kilometers(data.visibility),
        wind_speed=ms_to_kmh(wind_speed),
        wind_direction=int(round_half_up(wind_deg)) % 360,
        wind_direction_text=wind_direction_text(wind_deg),
    )


def transform_city(
    data: CurrentWeatherResponse, requested: Coordinate | None = None
) -> CityInfo:
    """
    Build a CityInfo from a current weather payload.

    The provider normally echoes the coordinates it resolved; when it does not,
    the requested coordinates are reported instead.
    """
    if data.coord is not None:
        coordinates = Coordinate(lat=data.coord.lat, lon=data.coord.lon)
    elif requested is not None:
        coordinates = requested
    else:
        raise ValueError("Provider response did not include coordinates")

    return CityInfo(
        location=data.name,
        country=(data.sys.country if data.sys else None) or "",
        coordinates=coordinates,
    )
