"""Logging settings read from the environment.

``LOG_LEVEL``, ``LOG_FORMAT`` and ``USE_COLORS`` are the variables an
operator normally sets; the rest default to what the JSON pipeline wants.
"""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from flood_mission_planner.constants import SERVICE_NAME, SERVICE_VERSION


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(StrEnum):
    """``json`` for aggregation, ``human`` for a terminal."""

    JSON = "json"
    HUMAN = "human"


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Attributes:
        log_level: Root logger threshold.
        log_format: Formatter to install.
        service_name: Stamped on every JSON record as ``service``.
        service_version: Stamped on every JSON record as ``version``.
        include_timestamp: Add a UTC ``timestamp`` to JSON records.
        include_location: Add ``module``, ``function`` and ``line``.
        use_colors: Color the level column of the human format.
    """

    # Shares the environment with Settings, so unknown keys are expected
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: LogFormat = Field(default=LogFormat.JSON)
    service_name: str = Field(default=SERVICE_NAME)
    service_version: str = Field(default=SERVICE_VERSION)
    include_timestamp: bool = Field(default=True)
    include_location: bool = Field(default=True)
    use_colors: bool = Field(default=True)


@lru_cache
def get_logging_config() -> LoggingConfig:
    return LoggingConfig()
