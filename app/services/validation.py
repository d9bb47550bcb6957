from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.models.weather import Coordinate
from app.utils.exceptions import ValidationError


def validate_coordinates(lat: Any, lon: Any) -> Coordinate:
    """
    Validate a raw latitude/longitude pair.

    Values may arrive as numbers or as numeric strings from a query string.
    Missing, non-numeric, non-finite or out-of-range values raise
    ValidationError listing every offending field.
    """
    errors: dict[str, str] = {}
    # pydantic coerces booleans to floats in lax mode
    for name, value in (("lat", lat), ("lon", lon)):
        if isinstance(value, bool):
            errors[name] = "Input should be a valid number"

    if not errors:
        try:
            return Coordinate(lat=lat, lon=lon)
        except PydanticValidationError as e:
            for error in e.errors():
                errors[".".join(str(part) for part in error["loc"])] = error["msg"]

    raise ValidationError(
        f"Invalid coordinates: {', '.join(sorted(errors))}",
        {"errors": errors},
    )
