"""Application configuration using Pydantic BaseSettings.

All settings are loaded from environment variables.

Usage:
    from flood_mission_planner.config import get_settings

    settings = get_settings()
    print(settings.environment)
    print(settings.battery_percent_per_minute)
"""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flood_mission_planner import constants


class Environment(StrEnum):
    """Valid deployment environments."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    DEMO = "demo"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        service_name: Name of this service for logging.
        environment: Deployment environment.
        log_level: Logging level.
        origin_latitude: Latitude new waypoints are placed around.
        origin_longitude: Longitude new waypoints are placed around.
        coordinate_jitter_degrees: Half-width of the random placement box.
        template_latitude_step_degrees: Latitude offset between template waypoints.
        template_longitude_step_degrees: Longitude offset between template waypoints.
        default_route_step_degrees: Offset between blank-mission waypoints.
        minimum_default_altitude: Lower bound of the random default altitude.
        maximum_default_altitude: Upper bound of the random default altitude.
        minimum_default_speed: Lower bound of the random default speed.
        maximum_default_speed: Upper bound of the random default speed.
        meters_per_degree_latitude: Flat-earth latitude scale.
        meters_per_degree_longitude: Flat-earth longitude scale.
        battery_percent_per_minute: Linear battery consumption proxy.
        battery_tight_ratio: Share of drone battery above which a plan is tight.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
        str_strip_whitespace=True,
    )

    # Service identification
    service_name: str = Field(default=constants.SERVICE_NAME, min_length=1)
    environment: Environment = Field(default=Environment.DEVELOPMENT)

    # Logging
    log_level: str = Field(default="INFO")

    # Waypoint placement
    origin_latitude: float = Field(default=constants.DEFAULT_ORIGIN_LATITUDE, ge=-90, le=90)
    origin_longitude: float = Field(default=constants.DEFAULT_ORIGIN_LONGITUDE, ge=-180, le=180)
    coordinate_jitter_degrees: float = Field(default=constants.COORDINATE_JITTER_DEGREES, ge=0, le=1)
    template_latitude_step_degrees: float = Field(
        default=constants.TEMPLATE_LATITUDE_STEP_DEGREES,
    )
    template_longitude_step_degrees: float = Field(
        default=constants.TEMPLATE_LONGITUDE_STEP_DEGREES,
    )
    default_route_step_degrees: float = Field(default=constants.DEFAULT_ROUTE_STEP_DEGREES)

    # Waypoint defaults
    minimum_default_altitude: float = Field(
        default=constants.DEFAULT_ALTITUDE_RANGE_METERS[0],
        ge=constants.MINIMUM_ALTITUDE_METERS,
        le=constants.MAXIMUM_ALTITUDE_METERS,
    )
    maximum_default_altitude: float = Field(
        default=constants.DEFAULT_ALTITUDE_RANGE_METERS[1],
        ge=constants.MINIMUM_ALTITUDE_METERS,
        le=constants.MAXIMUM_ALTITUDE_METERS,
    )
    minimum_default_speed: float = Field(
        default=constants.DEFAULT_SPEED_RANGE_METERS_PER_SECOND[0],
        gt=0,
        le=constants.MAXIMUM_SPEED_METERS_PER_SECOND,
    )
    maximum_default_speed: float = Field(
        default=constants.DEFAULT_SPEED_RANGE_METERS_PER_SECOND[1],
        gt=0,
        le=constants.MAXIMUM_SPEED_METERS_PER_SECOND,
    )

    # Estimation
    meters_per_degree_latitude: float = Field(default=constants.METERS_PER_DEGREE_LATITUDE, gt=0)
    meters_per_degree_longitude: float = Field(default=constants.METERS_PER_DEGREE_LONGITUDE, gt=0)
    battery_percent_per_minute: float = Field(default=constants.BATTERY_PERCENT_PER_MINUTE, ge=0)
    battery_tight_ratio: float = Field(default=constants.BATTERY_TIGHT_RATIO, gt=0, le=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed:
            error_message = f"log_level must be one of {allowed}, got '{value}'"
            raise ValueError(error_message)
        return upper_value

    @model_validator(mode="after")
    def validate_default_ranges(self) -> "Settings":
        """Reject inverted altitude or speed ranges."""
        if self.minimum_default_altitude > self.maximum_default_altitude:
            error_message = "minimum_default_altitude must not exceed maximum_default_altitude"
            raise ValueError(error_message)
        if self.minimum_default_speed > self.maximum_default_speed:
            error_message = "minimum_default_speed must not exceed maximum_default_speed"
            raise ValueError(error_message)
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def validate_startup_config() -> Settings:
    """Validate configuration on application startup.

    Returns:
        Validated Settings instance.

    Raises:
        pydantic.ValidationError: If configuration is invalid.
    """
    return get_settings()
