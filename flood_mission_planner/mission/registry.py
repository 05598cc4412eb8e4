"""In-memory mission registry with current-selection tracking."""

from collections.abc import Callable, Iterable, Iterator
from datetime import UTC, datetime
from functools import partial

from flood_mission_planner.config import Settings, get_settings
from flood_mission_planner.constants import DEFAULT_ROUTE_WAYPOINT_COUNT
from flood_mission_planner.exceptions.client_errors import NotFoundError
from flood_mission_planner.logging import get_logger
from flood_mission_planner.mission.aggregate import Estimator, Mission
from flood_mission_planner.mission.estimator import EstimatorConstants, estimate_route
from flood_mission_planner.mission.models import (
    MissionPriority,
    MissionTemplate,
    MissionUpdate,
    Waypoint,
    WaypointUpdate,
)
from flood_mission_planner.mission.waypoint_factory import WaypointFactory
from flood_mission_planner.types import ResourceAssigner

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class MissionRegistry:
    """Owns every mission and the single current selection.

    Missions are kept newest-first: a new mission goes to the front of
    ``list_missions()`` so it is the first one an operator sees.
    """

    def __init__(
        self,
        waypoint_factory: WaypointFactory | None = None,
        *,
        settings: Settings | None = None,
        estimator: Estimator | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize an empty registry.

        Args:
            waypoint_factory: Factory for seeded and inserted waypoints.
            settings: Layout and estimation settings; cached application
                settings when omitted.
            estimator: Route estimator handed to every mission; built
                from ``settings`` when omitted.
            clock: Source of creation timestamps.
        """
        self._settings = settings or get_settings()
        self._factory = waypoint_factory or WaypointFactory(settings=self._settings)
        self._estimator = estimator or partial(
            estimate_route,
            constants=EstimatorConstants.from_settings(self._settings),
        )
        self._clock = clock
        self._missions: list[Mission] = []
        self._selected_id: str | None = None

    def __len__(self) -> int:
        return len(self._missions)

    def __contains__(self, mission_id: object) -> bool:
        return any(mission.mission_id == mission_id for mission in self._missions)

    def __iter__(self) -> Iterator[Mission]:
        return iter(list(self._missions))

    @property
    def selected(self) -> Mission | None:
        """Currently selected mission, if any."""
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def list_missions(self) -> list[Mission]:
        """Return all missions, newest first."""
        return list(self._missions)

    def get(self, mission_id: str) -> Mission:
        """Get a mission by ID.

        Raises:
            NotFoundError: If mission does not exist.
        """
        for mission in self._missions:
            if mission.mission_id == mission_id:
                return mission
        raise NotFoundError(
            f"Mission {mission_id} not found",
            resource_type="Mission",
            resource_id=mission_id,
        )

    def select(self, mission_id: str) -> Mission:
        """Make a mission the current selection.

        Raises:
            NotFoundError: If mission does not exist.
        """
        mission = self.get(mission_id)
        self._selected_id = mission.mission_id
        return mission

    def clear_selection(self) -> None:
        """Deselect without selecting another mission."""
        self._selected_id = None

    def create_mission(
        self,
        name: str,
        resource_id: str,
        waypoints: Iterable[Waypoint],
        *,
        priority: MissionPriority = MissionPriority.NORMAL,
        description: str = "",
        template_id: str | None = None,
    ) -> Mission:
        """Create a mission from an explicit route, add it and select it."""
        mission = Mission.create(
            name,
            resource_id,
            waypoints,
            priority,
            template_id,
            description=description,
            estimator=self._estimator,
            created_at=self._clock().isoformat(),
        )
        self._add(mission)
        return mission

    def create_from_template(
        self,
        template: MissionTemplate | None,
        resource_assigner: ResourceAssigner,
    ) -> Mission:
        """Create a mission seeded from a template, or a blank default route.

        Template entries are laid out on a diagonal from the origin; without
        a template the mission gets a short default route. Either way the
        new mission goes to the front and becomes the selection.

        Args:
            template: Template to seed from, or None for a blank mission.
            resource_assigner: Supplies the drone id to assign.

        Returns:
            The new mission.
        """
        now = self._clock()
        if template is None:
            waypoints = self._build_default_route()
            name = f"New Mission - {now:%H:%M:%S}"
            description = "Custom mission plan"
            template_id = None
        else:
            waypoints = self._build_template_route(template)
            name = f"{template.name} - {now:%Y-%m-%d}"
            description = template.description
            template_id = template.template_id

        mission = Mission.create(
            name,
            resource_assigner(),
            waypoints,
            template_id=template_id,
            description=description,
            estimator=self._estimator,
            created_at=now.isoformat(),
        )
        self._add(mission)
        return mission

    def update(self, mission_id: str, update: MissionUpdate) -> Mission:
        """Merge metadata fields into a mission.

        Raises:
            NotFoundError: If mission does not exist.
            InvalidTransitionError: If the status change is not allowed.
        """
        mission = self.get(mission_id).update_fields(update)
        if update.status is not None:
            logger.info(
                "Mission status changed",
                extra={"mission_id": mission_id, "status": str(mission.status)},
            )
        return mission

    def insert_waypoint(
        self,
        mission_id: str,
        after_index: int | None = None,
        waypoint: Waypoint | None = None,
        *,
        overrides: WaypointUpdate | None = None,
    ) -> Waypoint:
        """Insert a waypoint into a mission's route.

        Args:
            mission_id: Mission to edit.
            after_index: Index to insert after; append when None.
            waypoint: Waypoint to insert; a fresh factory waypoint when None.
            overrides: Fields applied to the factory waypoint. Ignored when
                ``waypoint`` is given.

        Returns:
            The stored waypoint, whose id can be used to remove it again.
        """
        mission = self.get(mission_id)
        new_waypoint = waypoint
        if new_waypoint is None:
            new_waypoint = self._factory.create_waypoint(overrides=overrides)
        mission.insert_waypoint(new_waypoint, after_index)
        logger.debug(
            "Waypoint inserted",
            extra={"mission_id": mission_id, "waypoint_id": new_waypoint.waypoint_id},
        )
        return mission.find_waypoint(new_waypoint.waypoint_id)

    def remove_waypoint(self, mission_id: str, waypoint_id: str) -> Mission:
        """Remove a waypoint from a mission and re-estimate its route."""
        return self.get(mission_id).remove_waypoint(waypoint_id)

    def update_waypoint(
        self,
        mission_id: str,
        waypoint_id: str,
        update: WaypointUpdate,
    ) -> Mission:
        """Merge fields into a mission waypoint and re-estimate its route."""
        return self.get(mission_id).update_waypoint(waypoint_id, update)

    def remove(self, mission_id: str) -> Mission:
        """Remove a mission. Clears the selection if it pointed at it.

        Raises:
            NotFoundError: If mission does not exist.
        """
        mission = self.get(mission_id)
        self._missions.remove(mission)
        if self._selected_id == mission_id:
            self._selected_id = None
        logger.info("Mission removed", extra={"mission_id": mission_id})
        return mission

    def _add(self, mission: Mission) -> None:
        self._missions.insert(0, mission)
        self._selected_id = mission.mission_id
        logger.info(
            "Mission created",
            extra={
                "mission_id": mission.mission_id,
                "template_id": mission.template_id,
                "waypoint_count": len(mission.waypoints),
            },
        )

    def _build_template_route(self, template: MissionTemplate) -> list[Waypoint]:
        origin = self._factory.origin
        return [
            self._factory.create_waypoint(
                origin.offset(
                    index * self._settings.template_latitude_step_degrees,
                    index * self._settings.template_longitude_step_degrees,
                ),
                entry,
            )
            for index, entry in enumerate(template.waypoints)
        ]

    def _build_default_route(self) -> list[Waypoint]:
        origin = self._factory.origin
        step = self._settings.default_route_step_degrees
        return [
            self._factory.create_waypoint(origin.offset(index * step, index * step))
            for index in range(DEFAULT_ROUTE_WAYPOINT_COUNT)
        ]
