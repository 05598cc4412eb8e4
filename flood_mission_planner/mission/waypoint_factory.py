"""Waypoint creation with injectable randomness."""

import random
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from flood_mission_planner.config import Settings, get_settings
from flood_mission_planner.constants import WAYPOINT_ID_PREFIX
from flood_mission_planner.exceptions.client_errors import InvalidWaypointError
from flood_mission_planner.mission.models import (
    Coordinate,
    TemplateWaypoint,
    Waypoint,
    WaypointAction,
    WaypointUpdate,
)
from flood_mission_planner.types import RandomGenerator


def generate_waypoint_id() -> str:
    """Return a waypoint id that is never reused within the process."""
    return f"{WAYPOINT_ID_PREFIX}{uuid4()}"


class WaypointFactory:
    """Build new waypoints from defaults, an optional position and overrides.

    Random placement stands in for picking a point on the map and has no
    geodesic meaning.
    """

    def __init__(
        self,
        random_generator: RandomGenerator | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            random_generator: Source of random defaults. A fresh
                ``random.Random`` when omitted.
            settings: Origin, jitter and default ranges. Cached
                application settings when omitted.
        """
        self._random = random_generator or random.Random()
        self._settings = settings or get_settings()

    @property
    def origin(self) -> Coordinate:
        """Map origin new missions are laid out from."""
        return Coordinate(
            latitude=self._settings.origin_latitude,
            longitude=self._settings.origin_longitude,
        )

    def generate_coordinate(self) -> Coordinate:
        """Pick a random point inside the jitter box around the origin."""
        jitter = self._settings.coordinate_jitter_degrees
        return self.origin.offset(
            self._random.uniform(-jitter, jitter),
            self._random.uniform(-jitter, jitter),
        )

    def create_waypoint(
        self,
        coordinate: Coordinate | None = None,
        overrides: WaypointUpdate | TemplateWaypoint | None = None,
    ) -> Waypoint:
        """Create a waypoint with a fresh id.

        Args:
            coordinate: Position; random near the origin when omitted.
            overrides: Fields applied after the defaults, so template
                values win over random ones.

        Returns:
            The new waypoint.

        Raises:
            InvalidWaypointError: If the overrides produce an invalid waypoint.
        """
        position = coordinate or self.generate_coordinate()
        fields: dict[str, object] = {
            "waypoint_id": generate_waypoint_id(),
            "latitude": position.latitude,
            "longitude": position.longitude,
            "altitude": self._random.uniform(
                self._settings.minimum_default_altitude,
                self._settings.maximum_default_altitude,
            ),
            "action": WaypointAction.TRANSIT,
            "duration_seconds": 0,
            "speed": self._random.uniform(
                self._settings.minimum_default_speed,
                self._settings.maximum_default_speed,
            ),
        }

        if isinstance(overrides, TemplateWaypoint):
            overrides = overrides.to_update()
        if overrides is not None:
            fields.update(overrides.changes())

        try:
            return Waypoint.model_validate(fields)
        except PydanticValidationError as error:
            raise InvalidWaypointError(
                f"Cannot create waypoint: {error.errors()[0]['msg']}",
                waypoint_id=str(fields["waypoint_id"]),
            ) from error
