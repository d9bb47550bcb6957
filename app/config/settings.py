from typing import Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Weather Proxy Service"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: Literal["development", "production"] = "development"

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    openweather_api_key: str = Field(
        default="",
        description="OpenWeatherMap API key; lookups fail while it is empty",
    )
    openweather_api_url: HttpUrl = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="OpenWeatherMap API base URL",
    )
    openweather_api_timeout: int = Field(
        default=30, description="OpenWeatherMap request timeout in seconds"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("openweather_api_key", mode="before")
    @classmethod
    def strip_api_key(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def has_api_key(self) -> bool:
        return bool(self.openweather_api_key)

    @property
    def weather_endpoint(self) -> str:
        return f"{str(self.openweather_api_url).rstrip('/')}/weather"


settings = Settings()
