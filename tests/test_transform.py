import pytest

from app.models.openweather import CurrentWeatherResponse
from app.models.weather import Coordinate
from app.services.transform import (
    calculate_dew_point,
    meters_to_kilometers,
    ms_to_kmh,
    round_half_up,
    transform_city,
    transform_weather,
    wind_direction_text,
)


class TestConversions:
    """Test suite for the unit conversion helpers"""

    def test_round_half_up_rounds_halves_upward(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(0.45, 1) == 0.5
        assert round_half_up(19.4) == 19

    def test_dew_point_magnus_approximation(self):
        assert calculate_dew_point(20, 50) == 9.3

    def test_dew_point_saturated_air_equals_temperature(self):
        assert calculate_dew_point(15, 100) == 15.0

    def test_dew_point_undefined_without_humidity(self):
        assert calculate_dew_point(20, 0) is None

    def test_wind_speed_converted_to_kmh(self):
        assert ms_to_kmh(5) == 18.0
        assert ms_to_kmh(3.2) == 11.5
        assert ms_to_kmh(0) == 0.0

    def test_visibility_converted_to_km(self):
        assert meters_to_kilometers(10000) == 10.0
        assert meters_to_kilometers(2345) == 2.3

    def test_visibility_absent_is_none_and_zero_is_kept(self):
        assert meters_to_kilometers(None) is None
        assert meters_to_kilometers(0) == 0.0

    @pytest.mark.parametrize(
        "degrees, expected",
        [
            (0, "N"),
            (90, "E"),
            (180, "S"),
            (202.5, "SSW"),
            (270, "W"),
            (348.75, "N"),
            (360, "N"),
            (11.25, "NNE"),
        ],
    )
    def test_wind_direction_text(self, degrees, expected):
        assert wind_direction_text(degrees) == expected


class TestTransformWeather:
    """Test suite for building WeatherRecord from provider payloads"""

    def test_full_payload(self, sample_api_response):
        record = transform_weather(CurrentWeatherResponse.model_validate(sample_api_response))

        assert record.model_dump(by_alias=True) == {
            "location": "London",
            "temperature": 20,
            "feelsLike": 20,
            "condition": "Clouds",
            "description": "broken clouds",
            "humidity": 50,
            "pressure": 1013,
            "dewPoint": 9.3,
            "visibility": 10.0,
            "windSpeed": 18.0,
            "windDirection": 203,
            "windDirectionText": "SSW",
        }

    def test_missing_optional_blocks_use_defaults(self, sample_api_response):
        payload = dict(sample_api_response)
        payload["weather"] = []
        del payload["wind"]
        del payload["visibility"]

        record = transform_weather(CurrentWeatherResponse.model_validate(payload))

        assert record.condition == "Unknown"
        assert record.description == "No description available"
        assert record.visibility is None
        assert record.wind_speed == 0.0
        assert record.wind_direction == 0
        assert record.wind_direction_text == "N"

    def test_blank_condition_fields_use_defaults(self, sample_api_response):
        payload = dict(sample_api_response)
        payload["weather"] = [{"main": "", "description": ""}]

        record = transform_weather(CurrentWeatherResponse.model_validate(payload))

        assert record.condition == "Unknown"
        assert record.description == "No description available"

    def test_wind_without_degrees_reads_north(self, sample_api_response):
        payload = dict(sample_api_response)
        payload["wind"] = {"speed": 2.0}

        record = transform_weather(CurrentWeatherResponse.model_validate(payload))

        assert record.wind_direction == 0
        assert record.wind_direction_text == "N"
        assert record.wind_speed == 7.2

    def test_whitespace_condition_fields_use_defaults(self, sample_api_response):
        payload = dict(sample_api_response)
        payload["weather"] = [{"main": "   ", "description": "\t"}]

        record = transform_weather(CurrentWeatherResponse.model_validate(payload))

        assert record.condition == "Unknown"
        assert record.description == "No description available"

    @pytest.mark.parametrize(
        "degrees, direction, label",
        [
            (11.25, 11, "NNE"),
            (33.75, 34, "NE"),
            (202.5, 203, "SSW"),
            (359.6, 0, "N"),
        ],
    )
    def test_fractional_bearing_labelled_from_raw_degrees(
        self, sample_api_response, degrees, direction, label
    ):
        payload = dict(sample_api_response)
        payload["wind"] = {"speed": 1, "deg": degrees}

        record = transform_weather(CurrentWeatherResponse.model_validate(payload))

        assert record.wind_direction == direction
        assert record.wind_direction_text == label

    def test_fractional_visibility_converted(self, sample_api_response):
        payload = dict(sample_api_response)
        payload["visibility"] = 9876.5

        record = transform_weather(CurrentWeatherResponse.model_validate(payload))

        assert record.visibility == 9.9

    def test_fractional_humidity_accepted(self, sample_api_response):
        payload = dict(sample_api_response)
        payload["main"] = {**sample_api_response["main"], "humidity": 49.5}

        record = transform_weather(CurrentWeatherResponse.model_validate(payload))

        assert record.humidity == 50
        assert record.dew_point == calculate_dew_point(20.0, 49.5)

    def test_transform_is_deterministic(self, sample_api_response):
        data = CurrentWeatherResponse.model_validate(sample_api_response)

        first = transform_weather(data).model_dump_json(by_alias=True)
        second = transform_weather(data).model_dump_json(by_alias=True)

        assert first == second


class TestTransformCity:
    """Test suite for building CityInfo from provider payloads"""

    def test_city_info_from_payload(self, sample_api_response):
        city = transform_city(CurrentWeatherResponse.model_validate(sample_api_response))

        assert city.location == "London"
        assert city.country == "GB"
        assert city.coordinates == Coordinate(lat=51.5085, lon=-0.1257)

    def test_missing_country_is_empty_string(self, sample_api_response):
        payload = dict(sample_api_response)
        del payload["sys"]

        city = transform_city(CurrentWeatherResponse.model_validate(payload))

        assert city.country == ""

    def test_missing_coordinates_fall_back_to_request(self, sample_api_response):
        payload = dict(sample_api_response)
        del payload["coord"]
        requested = Coordinate(lat=10.0, lon=20.0)

        city = transform_city(CurrentWeatherResponse.model_validate(payload), requested)

        assert city.coordinates == requested

    def test_missing_coordinates_without_request_raises(self, sample_api_response):
        payload = dict(sample_api_response)
        del payload["coord"]

        with pytest.raises(ValueError):
            transform_city(CurrentWeatherResponse.model_validate(payload))
