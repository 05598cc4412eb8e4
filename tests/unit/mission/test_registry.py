"""Tests for the in-memory mission registry."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from flood_mission_planner.config import Settings
from flood_mission_planner.exceptions.client_errors import (
    InvalidTransitionError,
    NotFoundError,
)
from flood_mission_planner.mission.estimator import estimate_route
from flood_mission_planner.mission.models import (
    MissionStatus,
    MissionUpdate,
    Waypoint,
    WaypointAction,
    WaypointUpdate,
)
from flood_mission_planner.mission.registry import MissionRegistry
from flood_mission_planner.mission.templates import FLOOD_SURVEY, MISSION_TEMPLATES
from flood_mission_planner.mission.waypoint_factory import WaypointFactory

FIXED_TIME = datetime(2024, 5, 17, 8, 30, tzinfo=UTC)


def _assign_alpha() -> str:
    return "UAV_ALPHA"


@pytest.fixture()
def registry(midpoint_generator) -> MissionRegistry:
    return MissionRegistry(WaypointFactory(midpoint_generator), clock=lambda: FIXED_TIME)


class TestCreateFromTemplate:
    """Tests for creating missions from templates."""

    def test_flood_survey(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(FLOOD_SURVEY, _assign_alpha)

        assert len(mission.waypoints) == 4
        assert mission.statistics.duration_minutes > 0
        assert mission.statistics.estimated_battery_percent > 0
        assert mission.name == "Flood Area Survey - 2024-05-17"
        assert mission.description == FLOOD_SURVEY.description
        assert mission.resource_id == "UAV_ALPHA"
        assert mission.template_id == "template_flood_survey"
        assert mission.status == MissionStatus.DRAFT
        assert mission.created_at == FIXED_TIME.isoformat()
        assert registry.selected is mission

    def test_template_fields_are_copied(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(FLOOD_SURVEY, _assign_alpha)
        for waypoint, entry in zip(mission.waypoints, FLOOD_SURVEY.waypoints, strict=True):
            assert waypoint.action == entry.action
            assert waypoint.duration_seconds == entry.duration_seconds
            assert waypoint.speed == entry.speed
            assert waypoint.altitude == entry.altitude
        assert mission.waypoints[1].parameters.capture_photos is True

    def test_template_layout_is_diagonal(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(FLOOD_SURVEY, _assign_alpha)
        for index, waypoint in enumerate(mission.waypoints):
            assert waypoint.latitude == pytest.approx(37.5665 + index * 0.01)
            assert waypoint.longitude == pytest.approx(126.9780 + index * 0.008)

    def test_blank_mission(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)

        assert len(mission.waypoints) == 3
        assert mission.name == "New Mission - 08:30:00"
        assert mission.description == "Custom mission plan"
        assert mission.template_id is None
        assert all(waypoint.action == WaypointAction.TRANSIT for waypoint in mission.waypoints)
        assert mission.statistics.distance_meters > 0

    def test_blank_mission_layout(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        for index, waypoint in enumerate(mission.waypoints):
            assert waypoint.latitude == pytest.approx(37.5665 + index * 0.001)
            assert waypoint.longitude == pytest.approx(126.9780 + index * 0.001)

    @pytest.mark.parametrize("template", MISSION_TEMPLATES, ids=lambda t: t.template_id)
    def test_every_template_is_estimable(self, registry: MissionRegistry, template) -> None:
        mission = registry.create_from_template(template, _assign_alpha)
        assert len(mission.waypoints) == len(template.waypoints)
        assert mission.statistics.duration_minutes > 0

    def test_assigner_is_called(self, registry: MissionRegistry) -> None:
        calls: list[str] = []

        def assigner() -> str:
            calls.append("called")
            return "UAV_DELTA"

        mission = registry.create_from_template(None, assigner)
        assert calls == ["called"]
        assert mission.resource_id == "UAV_DELTA"

    def test_settings_drive_estimation(self, midpoint_generator) -> None:
        settings = Settings(battery_percent_per_minute=0.0)
        registry = MissionRegistry(WaypointFactory(midpoint_generator), settings=settings)
        mission = registry.create_from_template(FLOOD_SURVEY, _assign_alpha)
        assert mission.statistics.estimated_battery_percent == 0.0
        assert mission.statistics.duration_minutes > 0


class TestListingAndSelection:
    def test_newest_first(self, registry: MissionRegistry) -> None:
        first = registry.create_from_template(None, _assign_alpha)
        second = registry.create_from_template(FLOOD_SURVEY, _assign_alpha)
        assert registry.list_missions() == [second, first]
        assert list(registry) == [second, first]

    def test_empty_registry(self, registry: MissionRegistry) -> None:
        assert registry.list_missions() == []
        assert registry.selected is None
        assert len(registry) == 0

    def test_len_and_contains(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        assert len(registry) == 1
        assert mission.mission_id in registry
        assert "mission-missing" not in registry

    def test_select(self, registry: MissionRegistry) -> None:
        first = registry.create_from_template(None, _assign_alpha)
        registry.create_from_template(None, _assign_alpha)
        registry.select(first.mission_id)
        assert registry.selected is first

    def test_select_unknown(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        with pytest.raises(NotFoundError):
            registry.select("mission-missing")
        assert registry.selected is mission

    def test_clear_selection(self, registry: MissionRegistry) -> None:
        registry.create_from_template(None, _assign_alpha)
        registry.clear_selection()
        assert registry.selected is None

    def test_get_unknown(self, registry: MissionRegistry) -> None:
        with pytest.raises(NotFoundError) as error_info:
            registry.get("mission-missing")
        assert error_info.value.context["resource_type"] == "Mission"

    def test_registries_are_independent(self, midpoint_generator) -> None:
        first = MissionRegistry(WaypointFactory(midpoint_generator))
        second = MissionRegistry(WaypointFactory(midpoint_generator))
        first.create_from_template(None, _assign_alpha)
        assert len(second) == 0
        assert second.selected is None


class TestRemove:
    def test_remove_selected_clears_selection(self, registry: MissionRegistry) -> None:
        first = registry.create_from_template(None, _assign_alpha)
        second = registry.create_from_template(None, _assign_alpha)
        registry.remove(second.mission_id)
        assert registry.selected is None
        assert registry.list_missions() == [first]

    def test_remove_other_keeps_selection(self, registry: MissionRegistry) -> None:
        first = registry.create_from_template(None, _assign_alpha)
        second = registry.create_from_template(None, _assign_alpha)
        registry.remove(first.mission_id)
        assert registry.selected is second

    def test_remove_unknown(self, registry: MissionRegistry) -> None:
        with pytest.raises(NotFoundError):
            registry.remove("mission-missing")


class TestEdits:
    """Tests for edits routed through the registry."""

    def test_update_status(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        registry.update(mission.mission_id, MissionUpdate(status=MissionStatus.PLANNED))
        assert registry.get(mission.mission_id).status == MissionStatus.PLANNED

    def test_update_invalid_transition(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        with pytest.raises(InvalidTransitionError):
            registry.update(mission.mission_id, MissionUpdate(status=MissionStatus.ACTIVE))

    def test_insert_returns_stored_waypoint(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        waypoint = registry.insert_waypoint(mission.mission_id, 0)
        assert mission.waypoints[1] is waypoint
        assert len(mission.waypoints) == 4
        registry.remove_waypoint(mission.mission_id, waypoint.waypoint_id)
        assert len(mission.waypoints) == 3

    def test_insert_with_overrides(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        waypoint = registry.insert_waypoint(
            mission.mission_id,
            overrides=WaypointUpdate(action=WaypointAction.HOVER, duration_seconds=30),
        )
        assert mission.waypoints[-1] is waypoint
        assert waypoint.action == WaypointAction.HOVER
        assert waypoint.duration_seconds == 30

    def test_insert_explicit_waypoint(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        explicit = Waypoint(
            waypoint_id="wp-explicit", latitude=37.6, longitude=127.0, altitude=60.0, speed=9.0,
        )
        stored = registry.insert_waypoint(mission.mission_id, waypoint=explicit)
        assert stored.waypoint_id == "wp-explicit"
        assert stored is not explicit

    def test_inserted_waypoint_rejects_assignment(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        stored = registry.insert_waypoint(mission.mission_id)
        with pytest.raises(PydanticValidationError):
            stored.speed = 0.0  # type: ignore[misc]
        assert mission.statistics == estimate_route(mission.waypoints)

    def test_update_waypoint(self, registry: MissionRegistry) -> None:
        mission = registry.create_from_template(None, _assign_alpha)
        waypoint_id = mission.waypoints[0].waypoint_id
        registry.update_waypoint(mission.mission_id, waypoint_id, WaypointUpdate(altitude=90.0))
        assert mission.waypoints[0].altitude == 90.0

    def test_create_mission_with_explicit_route(self, registry: MissionRegistry) -> None:
        route = [
            Waypoint(waypoint_id="wp-1", latitude=37.0, longitude=127.0, altitude=50, speed=10),
            Waypoint(waypoint_id="wp-2", latitude=37.001, longitude=127.0, altitude=50, speed=10),
        ]
        mission = registry.create_mission("Manual", "UAV_BRAVO", route)
        assert mission.statistics.distance_meters == pytest.approx(111.0)
        assert registry.selected is mission
