"""Tests for application constants."""

from flood_mission_planner.constants import (
    BATTERY_PERCENT_PER_MINUTE,
    BATTERY_TIGHT_RATIO,
    DEFAULT_ALTITUDE_RANGE_METERS,
    DEFAULT_ROUTE_WAYPOINT_COUNT,
    DEFAULT_SPEED_RANGE_METERS_PER_SECOND,
    MAXIMUM_ALTITUDE_METERS,
    MAXIMUM_BATTERY_PERCENT,
    MAXIMUM_SPEED_METERS_PER_SECOND,
    METERS_PER_DEGREE_LATITUDE,
    METERS_PER_DEGREE_LONGITUDE,
    MINIMUM_ALTITUDE_METERS,
    MISSION_ID_PREFIX,
    SERVICE_NAME,
    SERVICE_VERSION,
    WAYPOINT_ID_PREFIX,
)


class TestServiceConstants:
    def test_service_name(self):
        assert SERVICE_NAME == "flood-mission-planner"

    def test_service_version(self):
        assert SERVICE_VERSION == "0.1.0"


class TestEstimationConstants:
    def test_degree_scale(self):
        assert METERS_PER_DEGREE_LATITUDE == 111_000.0
        assert METERS_PER_DEGREE_LONGITUDE == 85_000.0

    def test_battery(self):
        assert BATTERY_PERCENT_PER_MINUTE == 2.5
        assert MAXIMUM_BATTERY_PERCENT == 100.0
        assert BATTERY_TIGHT_RATIO == 0.8


class TestWaypointConstants:
    def test_flight_envelope(self):
        assert MINIMUM_ALTITUDE_METERS == 5.0
        assert MAXIMUM_ALTITUDE_METERS == 120.0
        assert MAXIMUM_SPEED_METERS_PER_SECOND == 20.0

    def test_default_ranges_inside_envelope(self):
        low, high = DEFAULT_ALTITUDE_RANGE_METERS
        assert MINIMUM_ALTITUDE_METERS <= low <= high <= MAXIMUM_ALTITUDE_METERS
        low, high = DEFAULT_SPEED_RANGE_METERS_PER_SECOND
        assert 0 < low <= high <= MAXIMUM_SPEED_METERS_PER_SECOND

    def test_default_route_length(self):
        assert DEFAULT_ROUTE_WAYPOINT_COUNT == 3


class TestIdentifierPrefixes:
    def test_prefixes(self):
        assert WAYPOINT_ID_PREFIX == "wp-"
        assert MISSION_ID_PREFIX == "mission-"
