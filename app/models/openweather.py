"""
Schema of the OpenWeatherMap current weather payload.

Only the fields the service consumes are modelled; everything else the
provider sends is ignored. Blocks the provider may leave out are optional
and the transform layer applies the documented defaults.
"""

from pydantic import BaseModel, ConfigDict, Field


class ProviderModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class SysBlock(ProviderModel):
    country: str | None = None


class CoordBlock(ProviderModel):
    lat: float
    lon: float


class MainBlock(ProviderModel):
    temp: float
    feels_like: float
    humidity: float
    pressure: float


class ConditionEntry(ProviderModel):
    main: str | None = None
    description: str | None = None


class WindBlock(ProviderModel):
    speed: float = 0.0
    deg: float | None = None


class CurrentWeatherResponse(ProviderModel):
    """Payload of GET /weather"""

    name: str = ""
    sys: SysBlock | None = None
    coord: CoordBlock | None = None
    main: MainBlock
    weather: list[ConditionEntry] = Field(default_factory=list)
    wind: WindBlock | None = None
    visibility: float | None = Field(None, ge=0, description="Visibility in meters")
