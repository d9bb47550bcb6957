import pytest

from app.config.settings import Settings


@pytest.fixture
def mock_settings():
    """Settings with a fake API key, independent of the environment"""
    return Settings(
        _env_file=None,
        openweather_api_key="test-api-key",
        openweather_api_url="https://api.openweathermap.org/data/2.5",
        openweather_api_timeout=10,
    )


@pytest.fixture
def unconfigured_settings():
    """Settings without an API key"""
    return Settings(_env_file=None, openweather_api_key="")


@pytest.fixture
def sample_api_response():
    """Sample current weather response from OpenWeatherMap"""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [
            {"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}
        ],
        "base": "stations",
        "main": {
            "temp": 20.0,
            "feels_like": 19.6,
            "temp_min": 18.9,
            "temp_max": 21.1,
            "pressure": 1013,
            "humidity": 50,
        },
        "visibility": 10000,
        "wind": {"speed": 5, "deg": 202.5},
        "clouds": {"all": 75},
        "dt": 1700490600,
        "sys": {"type": 2, "id": 2075535, "country": "GB"},
        "timezone": 0,
        "id": 2643743,
        "name": "London",
        "cod": 200,
    }
