from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Coordinate(BaseModel):
    """Geographic coordinate pair"""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(
        ..., ge=-90, le=90, allow_inf_nan=False, description="Latitude", examples=[40.7128]
    )
    lon: float = Field(
        ...,
        ge=-180,
        le=180,
        allow_inf_nan=False,
        description="Longitude",
        examples=[-74.006],
    )


class WeatherRecord(BaseModel):
    """Normalized current weather for one location"""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    location: str = Field(..., description="Place name reported by the provider")
    temperature: int = Field(..., description="Temperature in Celsius")
    feels_like: int = Field(..., description="Perceived temperature in Celsius")
    condition: str = Field(..., description="Primary weather condition keyword")
    description: str = Field(..., description="Free-text weather description")
    humidity: int = Field(..., description="Relative humidity percentage")
    pressure: int = Field(..., description="Atmospheric pressure in hPa")
    dew_point: float | None = Field(
        ..., description="Dew point in Celsius, null when humidity is 0"
    )
    visibility: float | None = Field(
        ..., description="Visibility in km, null when the provider omits it"
    )
    wind_speed: float = Field(..., description="Wind speed in km/h")
    wind_direction: int = Field(..., description="Wind direction in degrees")
    wind_direction_text: str = Field(..., description="16-point compass label")


class CityInfo(BaseModel):
    """Reverse-geocoded place for a coordinate pair"""

    model_config = ConfigDict(frozen=True)

    location: str = Field(..., description="Place name reported by the provider")
    country: str = Field("", description="ISO country code, may be empty")
    coordinates: Coordinate = Field(..., description="Coordinates echoed by the provider")
