"""Mission aggregate: ordered waypoints plus metadata and route statistics.

Every waypoint edit goes through a ``Mission`` method, which validates the
edit, re-estimates the whole route and only then stores the new sequence
and statistics together. A rejected edit leaves the mission untouched.
"""

from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field, PrivateAttr
from pydantic import ValidationError as PydanticValidationError

from flood_mission_planner.constants import MISSION_ID_PREFIX
from flood_mission_planner.exceptions.client_errors import (
    IndexOutOfRangeError,
    InvalidTransitionError,
    InvalidWaypointError,
    NotFoundError,
)
from flood_mission_planner.mission.estimator import estimate_route
from flood_mission_planner.mission.models import (
    TERMINAL_STATUSES,
    MissionPriority,
    MissionStatus,
    MissionUpdate,
    RouteEstimate,
    Waypoint,
    WaypointAction,
    WaypointUpdate,
    validate_transition,
)

Estimator = Callable[[Sequence[Waypoint]], RouteEstimate]


def generate_mission_id() -> str:
    """Return a new unique mission id."""
    return f"{MISSION_ID_PREFIX}{uuid4()}"


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _copy_waypoints(waypoints: Iterable[Waypoint]) -> list[Waypoint]:
    """Copy waypoints so the mission owns them exclusively."""
    copies = [waypoint.model_copy(deep=True) for waypoint in waypoints]
    seen: set[str] = set()
    for waypoint in copies:
        if waypoint.waypoint_id in seen:
            raise InvalidWaypointError(
                f"Duplicate waypoint id {waypoint.waypoint_id}",
                waypoint_id=waypoint.waypoint_id,
                field="waypoint_id",
            )
        seen.add(waypoint.waypoint_id)
    return copies


class Mission(BaseModel):
    """Ordered flight plan with metadata and derived statistics.

    ``statistics`` always equals the estimator applied to ``waypoints``.
    """

    mission_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    resource_id: str = Field(min_length=1)
    waypoints: list[Waypoint] = Field(default_factory=list)
    statistics: RouteEstimate = Field(default_factory=RouteEstimate)
    priority: MissionPriority = Field(default=MissionPriority.NORMAL)
    status: MissionStatus = Field(default=MissionStatus.DRAFT)
    template_id: str | None = None
    scheduled_start: str | None = None
    created_at: str = Field(default_factory=_now)
    updated_at: str = Field(default_factory=_now)

    _estimator: Estimator = PrivateAttr(default=estimate_route)

    @classmethod
    def create(
        cls,
        name: str,
        resource_id: str,
        waypoints: Iterable[Waypoint],
        priority: MissionPriority = MissionPriority.NORMAL,
        template_id: str | None = None,
        *,
        description: str = "",
        estimator: Estimator = estimate_route,
        created_at: str | None = None,
    ) -> "Mission":
        """Create a draft mission with statistics computed immediately.

        Args:
            name: Display name.
            resource_id: Id of the assigned drone.
            waypoints: Initial route in flight order. The mission stores copies.
            priority: Mission priority.
            template_id: Template the route was seeded from, if any.
            description: Free-form description.
            estimator: Route estimator used now and on every later edit.
            created_at: ISO-8601 creation time; now when omitted.

        Returns:
            The new mission.

        Raises:
            InvalidWaypointError: If the route cannot be estimated or
                repeats a waypoint id.
        """
        route = _copy_waypoints(waypoints)
        statistics = estimator(route)
        timestamp = created_at or _now()
        mission = cls(
            mission_id=generate_mission_id(),
            name=name,
            description=description,
            resource_id=resource_id,
            waypoints=route,
            statistics=statistics,
            priority=priority,
            template_id=template_id,
            created_at=timestamp,
            updated_at=timestamp,
        )
        mission._estimator = estimator
        return mission

    @property
    def is_terminal(self) -> bool:
        """Whether the status accepts no further transitions."""
        return self.status in TERMINAL_STATUSES

    def update_fields(self, update: MissionUpdate) -> "Mission":
        """Shallow-merge metadata fields.

        Setting ``status`` to its current value is a no-op; any other
        status must be a valid transition.

        Raises:
            InvalidTransitionError: If the status change is not allowed.
        """
        changes = update.changes()
        target = changes.get("status")
        if target is not None and target != self.status:
            if not validate_transition(self.status, MissionStatus(target)):
                raise InvalidTransitionError(
                    f"Cannot transition from {self.status} to {target}",
                    current_status=self.status,
                    target_status=str(target),
                )

        for field_name, value in changes.items():
            setattr(self, field_name, value)
        self.updated_at = _now()
        return self

    def abort(self) -> "Mission":
        """Cancel the mission. Terminal."""
        return self.update_fields(MissionUpdate(status=MissionStatus.ABORTED))

    def find_waypoint(self, waypoint_id: str) -> Waypoint:
        """Return the waypoint with the given id.

        Raises:
            NotFoundError: If the mission has no such waypoint.
        """
        return self.waypoints[self._index_of(waypoint_id)]

    def insert_waypoint(
        self,
        waypoint: Waypoint,
        after_index: int | None = None,
    ) -> "Mission":
        """Insert a waypoint after ``after_index``, or append it.

        Args:
            waypoint: Waypoint to add. The mission stores a copy.
            after_index: Index of the waypoint to insert after; append
                when None.

        Raises:
            IndexOutOfRangeError: If ``after_index`` is not an index of
                the current sequence.
            InvalidWaypointError: If the id is already in use or the new
                route cannot be estimated.
        """
        length = len(self.waypoints)
        if after_index is None:
            position = length
        elif 0 <= after_index < length:
            position = after_index + 1
        else:
            raise IndexOutOfRangeError(
                f"Cannot insert after index {after_index} in a route of {length} waypoints",
                index=after_index,
                length=length,
            )

        route = list(self.waypoints)
        route.insert(position, waypoint)
        self._replace_route(_copy_waypoints(route))
        return self

    def remove_waypoint(self, waypoint_id: str) -> "Mission":
        """Remove a waypoint by id.

        Raises:
            NotFoundError: If the mission has no such waypoint.
        """
        index = self._index_of(waypoint_id)
        route = self.waypoints[:index] + self.waypoints[index + 1 :]
        self._replace_route(route)
        return self

    def update_waypoint(self, waypoint_id: str, update: WaypointUpdate) -> "Mission":
        """Merge fields into a waypoint and re-estimate the route.

        Statistics are recomputed on every call, whichever fields changed.

        Raises:
            NotFoundError: If the mission has no such waypoint.
            InvalidWaypointError: If the merged waypoint is invalid or the
                route cannot be estimated.
        """
        index = self._index_of(waypoint_id)
        merged = self.waypoints[index].model_dump()
        merged.update(update.changes())
        try:
            replacement = Waypoint.model_validate(merged)
        except PydanticValidationError as error:
            raise InvalidWaypointError(
                f"Invalid update for waypoint {waypoint_id}: {error.errors()[0]['msg']}",
                waypoint_id=waypoint_id,
            ) from error

        route = list(self.waypoints)
        route[index] = replacement
        self._replace_route(route)
        return self

    def count_actions(self) -> dict[WaypointAction, int]:
        """Number of waypoints per action, zero counts included."""
        counts = Counter(waypoint.action for waypoint in self.waypoints)
        return {action: counts.get(action, 0) for action in WaypointAction}

    def _index_of(self, waypoint_id: str) -> int:
        for index, waypoint in enumerate(self.waypoints):
            if waypoint.waypoint_id == waypoint_id:
                return index
        raise NotFoundError(
            f"Waypoint {waypoint_id} not found in mission {self.mission_id}",
            resource_type="Waypoint",
            resource_id=waypoint_id,
        )

    def _replace_route(self, route: list[Waypoint]) -> None:
        # Estimate first: a rejected route must not leave a half-applied edit.
        statistics = self._estimator(route)
        self.waypoints = route
        self.statistics = statistics
        self.updated_at = _now()
