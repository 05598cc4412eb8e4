"""Tests for waypoint creation."""

import random

import pytest

from flood_mission_planner.config import Settings
from flood_mission_planner.exceptions.client_errors import InvalidWaypointError
from flood_mission_planner.mission.models import (
    Coordinate,
    TemplateWaypoint,
    WaypointAction,
    WaypointParameters,
    WaypointUpdate,
)
from flood_mission_planner.mission.waypoint_factory import WaypointFactory, generate_waypoint_id


class TestGenerateWaypointId:
    def test_prefix(self) -> None:
        assert generate_waypoint_id().startswith("wp-")

    def test_unique(self) -> None:
        assert len({generate_waypoint_id() for _ in range(100)}) == 100


class TestDefaults:
    def test_midpoint_defaults(self, midpoint_generator) -> None:
        factory = WaypointFactory(midpoint_generator)
        waypoint = factory.create_waypoint()

        assert waypoint.latitude == pytest.approx(37.5665)
        assert waypoint.longitude == pytest.approx(126.9780)
        assert waypoint.altitude == pytest.approx(50.0)
        assert waypoint.speed == pytest.approx(10.0)
        assert waypoint.action == WaypointAction.TRANSIT
        assert waypoint.duration_seconds == 0

    def test_draws_from_configured_ranges(self, midpoint_generator) -> None:
        WaypointFactory(midpoint_generator).create_waypoint()
        assert (-0.01, 0.01) in midpoint_generator.calls
        assert (30.0, 70.0) in midpoint_generator.calls
        assert (8.0, 12.0) in midpoint_generator.calls

    def test_seeded_random_stays_in_bounds(self) -> None:
        factory = WaypointFactory(random.Random(42))
        for _ in range(50):
            waypoint = factory.create_waypoint()
            assert abs(waypoint.latitude - 37.5665) <= 0.01
            assert abs(waypoint.longitude - 126.9780) <= 0.01
            assert 30.0 <= waypoint.altitude <= 70.0
            assert 8.0 <= waypoint.speed <= 12.0

    def test_seeded_random_is_reproducible(self) -> None:
        first = WaypointFactory(random.Random(7)).create_waypoint()
        second = WaypointFactory(random.Random(7)).create_waypoint()
        assert first.latitude == second.latitude
        assert first.altitude == second.altitude
        assert first.waypoint_id != second.waypoint_id

    def test_ids_are_unique(self, midpoint_generator) -> None:
        factory = WaypointFactory(midpoint_generator)
        ids = {factory.create_waypoint().waypoint_id for _ in range(20)}
        assert len(ids) == 20

    def test_custom_origin(self, midpoint_generator) -> None:
        settings = Settings(origin_latitude=10.0, origin_longitude=20.0)
        factory = WaypointFactory(midpoint_generator, settings=settings)
        assert factory.origin == Coordinate(latitude=10.0, longitude=20.0)
        waypoint = factory.create_waypoint()
        assert waypoint.latitude == pytest.approx(10.0)
        assert waypoint.longitude == pytest.approx(20.0)

    def test_explicit_coordinate(self, midpoint_generator) -> None:
        factory = WaypointFactory(midpoint_generator)
        waypoint = factory.create_waypoint(Coordinate(latitude=1.5, longitude=2.5))
        assert waypoint.latitude == 1.5
        assert waypoint.longitude == 2.5


class TestOverrides:
    def test_update_overrides_win(self, midpoint_generator) -> None:
        factory = WaypointFactory(midpoint_generator)
        waypoint = factory.create_waypoint(
            overrides=WaypointUpdate(
                altitude=100.0,
                speed=3.0,
                action=WaypointAction.HOVER,
                duration_seconds=15,
            ),
        )
        assert waypoint.altitude == 100.0
        assert waypoint.speed == 3.0
        assert waypoint.action == WaypointAction.HOVER
        assert waypoint.duration_seconds == 15

    def test_coordinate_override(self, midpoint_generator) -> None:
        factory = WaypointFactory(midpoint_generator)
        waypoint = factory.create_waypoint(overrides=WaypointUpdate(latitude=40.0))
        assert waypoint.latitude == 40.0
        assert waypoint.longitude == pytest.approx(126.9780)

    def test_template_entry_overrides(self, midpoint_generator) -> None:
        factory = WaypointFactory(midpoint_generator)
        entry = TemplateWaypoint(
            action=WaypointAction.SURVEY,
            duration_seconds=120,
            speed=6,
            altitude=30,
            parameters=WaypointParameters(capture_photos=True, sample_depth=True),
        )
        waypoint = factory.create_waypoint(Coordinate(latitude=0, longitude=0), entry)
        assert waypoint.action == WaypointAction.SURVEY
        assert waypoint.duration_seconds == 120
        assert waypoint.speed == 6
        assert waypoint.altitude == 30
        assert waypoint.parameters.capture_photos is True
        assert waypoint.parameters.sample_depth is True

    def test_invalid_overrides_raise(self, midpoint_generator) -> None:
        factory = WaypointFactory(midpoint_generator)
        with pytest.raises(InvalidWaypointError) as error_info:
            factory.create_waypoint(overrides=WaypointUpdate(duration_seconds=30))
        assert error_info.value.error_code == "INVALID_WAYPOINT"
        assert error_info.value.context["waypoint_id"].startswith("wp-")
