"""Mission planning domain models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from flood_mission_planner.constants import (
    MAXIMUM_ALTITUDE_METERS,
    MAXIMUM_SPEED_METERS_PER_SECOND,
    MINIMUM_ALTITUDE_METERS,
)


class WaypointAction(StrEnum):
    """What the drone does on reaching a waypoint."""

    TRANSIT = "transit"
    HOVER = "hover"
    SAMPLE = "sample"
    SURVEY = "survey"
    LOITER = "loiter"


class MissionPriority(StrEnum):
    """Operator-assigned mission priority."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


class MissionStatus(StrEnum):
    """Mission planning lifecycle states."""

    DRAFT = "draft"
    PLANNED = "planned"
    APPROVED = "approved"
    ACTIVE = "active"
    COMPLETED = "completed"
    ABORTED = "aborted"


class TemplateCategory(StrEnum):
    """Mission template families."""

    SURVEY = "survey"
    PATROL = "patrol"
    EMERGENCY = "emergency"
    MONITORING = "monitoring"


class Coordinate(BaseModel):
    """Geographic position on the planning map."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    def offset(self, latitude_degrees: float, longitude_degrees: float) -> "Coordinate":
        """Return a coordinate shifted by the given number of degrees."""
        return Coordinate(
            latitude=self.latitude + latitude_degrees,
            longitude=self.longitude + longitude_degrees,
        )


class WaypointParameters(BaseModel):
    """Action-specific flags carried by a waypoint."""

    model_config = ConfigDict(frozen=True)

    capture_photos: bool | None = None
    sample_depth: bool | None = None
    sensor_reading: bool | None = None
    video_duration_seconds: int | None = Field(default=None, ge=0)


class Waypoint(BaseModel):
    """Single point in a mission's flight plan.

    Speed 0 is allowed so a final, stationary waypoint can be expressed;
    the estimator rejects it on any waypoint that still has a leg to fly.
    Waypoints are immutable; edits go through ``Mission.update_waypoint``
    so the route statistics are recomputed.
    """

    model_config = ConfigDict(frozen=True)

    waypoint_id: str = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    altitude: float = Field(ge=MINIMUM_ALTITUDE_METERS, le=MAXIMUM_ALTITUDE_METERS)
    action: WaypointAction = Field(default=WaypointAction.TRANSIT)
    duration_seconds: int = Field(default=0, ge=0)
    speed: float = Field(ge=0, le=MAXIMUM_SPEED_METERS_PER_SECOND)
    parameters: WaypointParameters = Field(default_factory=WaypointParameters)

    @model_validator(mode="after")
    def validate_transit_duration(self) -> "Waypoint":
        """Transit waypoints pass through without dwelling."""
        if self.action == WaypointAction.TRANSIT and self.duration_seconds != 0:
            error_message = "transit waypoints must have duration_seconds == 0"
            raise ValueError(error_message)
        return self

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class WaypointUpdate(BaseModel):
    """Partial waypoint fields.

    Only fields explicitly set are merged; see ``changes``.
    """

    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    altitude: float | None = Field(
        default=None, ge=MINIMUM_ALTITUDE_METERS, le=MAXIMUM_ALTITUDE_METERS,
    )
    action: WaypointAction | None = None
    duration_seconds: int | None = Field(default=None, ge=0)
    speed: float | None = Field(default=None, ge=0, le=MAXIMUM_SPEED_METERS_PER_SECOND)
    parameters: WaypointParameters | None = None

    def changes(self) -> dict[str, object]:
        """Return the explicitly set, non-null fields."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class TemplateWaypoint(BaseModel):
    """Waypoint pattern entry of a template. Coordinates are filled in later."""

    model_config = ConfigDict(frozen=True)

    action: WaypointAction
    duration_seconds: int = Field(default=0, ge=0)
    speed: float = Field(gt=0, le=MAXIMUM_SPEED_METERS_PER_SECOND)
    altitude: float = Field(ge=MINIMUM_ALTITUDE_METERS, le=MAXIMUM_ALTITUDE_METERS)
    parameters: WaypointParameters = Field(default_factory=WaypointParameters)

    def to_update(self) -> WaypointUpdate:
        """Express this entry as overrides for the waypoint factory."""
        return WaypointUpdate(
            action=self.action,
            duration_seconds=self.duration_seconds,
            speed=self.speed,
            altitude=self.altitude,
            parameters=self.parameters.model_copy(),
        )


class MissionTemplate(BaseModel):
    """Reusable waypoint pattern used to seed new missions."""

    model_config = ConfigDict(frozen=True)

    template_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = Field(default="")
    category: TemplateCategory
    waypoints: tuple[TemplateWaypoint, ...] = Field(min_length=1)
    recommended_altitude: float = Field(
        ge=MINIMUM_ALTITUDE_METERS, le=MAXIMUM_ALTITUDE_METERS,
    )
    estimated_area_square_kilometers: float | None = Field(default=None, ge=0)


class RouteEstimate(BaseModel):
    """Aggregate statistics derived from a waypoint sequence."""

    model_config = ConfigDict(frozen=True)

    distance_meters: float = Field(default=0.0, ge=0)
    duration_minutes: float = Field(default=0.0, ge=0)
    estimated_battery_percent: float = Field(default=0.0, ge=0, le=100)


class MissionUpdate(BaseModel):
    """Partial mission metadata fields."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    priority: MissionPriority | None = None
    resource_id: str | None = Field(default=None, min_length=1)
    status: MissionStatus | None = None
    scheduled_start: str | None = None

    def changes(self) -> dict[str, object]:
        """Return the explicitly set, non-null fields."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


# Valid state transitions
VALID_TRANSITIONS: dict[MissionStatus, set[MissionStatus]] = {
    MissionStatus.DRAFT: {MissionStatus.PLANNED, MissionStatus.ABORTED},
    MissionStatus.PLANNED: {MissionStatus.APPROVED, MissionStatus.ABORTED},
    MissionStatus.APPROVED: {MissionStatus.ACTIVE, MissionStatus.ABORTED},
    MissionStatus.ACTIVE: {MissionStatus.COMPLETED, MissionStatus.ABORTED},
    MissionStatus.COMPLETED: set(),
    MissionStatus.ABORTED: set(),
}

TERMINAL_STATUSES: frozenset[MissionStatus] = frozenset(
    status for status, targets in VALID_TRANSITIONS.items() if not targets
)


def validate_transition(current: MissionStatus, target: MissionStatus) -> bool:
    """Check if a mission status transition is valid.

    Args:
        current: Current mission status.
        target: Target mission status.

    Returns:
        True if the transition is valid.
    """
    return target in VALID_TRANSITIONS.get(current, set())
