"""Shared test fixtures."""

import pytest

from flood_mission_planner.config import get_settings
from flood_mission_planner.logging.config import get_logging_config


@pytest.fixture(autouse=True)
def _clear_environment(monkeypatch):
    """Clear environment variables that affect settings."""
    env_vars_to_clear = [
        "SERVICE_NAME",
        "SERVICE_VERSION",
        "ENVIRONMENT",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "USE_COLORS",
        "ORIGIN_LATITUDE",
        "ORIGIN_LONGITUDE",
        "COORDINATE_JITTER_DEGREES",
        "TEMPLATE_LATITUDE_STEP_DEGREES",
        "TEMPLATE_LONGITUDE_STEP_DEGREES",
        "DEFAULT_ROUTE_STEP_DEGREES",
        "MINIMUM_DEFAULT_ALTITUDE",
        "MAXIMUM_DEFAULT_ALTITUDE",
        "MINIMUM_DEFAULT_SPEED",
        "MAXIMUM_DEFAULT_SPEED",
        "METERS_PER_DEGREE_LATITUDE",
        "METERS_PER_DEGREE_LONGITUDE",
        "BATTERY_PERCENT_PER_MINUTE",
        "BATTERY_TIGHT_RATIO",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    get_logging_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_logging_config.cache_clear()


class MidpointGenerator:
    """Deterministic stand-in for ``random.Random``: always the midpoint."""

    def __init__(self) -> None:
        self.calls: list[tuple[float, float]] = []

    def uniform(self, a: float, b: float) -> float:
        self.calls.append((a, b))
        return (a + b) / 2


@pytest.fixture()
def midpoint_generator() -> MidpointGenerator:
    return MidpointGenerator()
