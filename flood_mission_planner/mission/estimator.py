"""Route distance, duration and battery estimation.

The model is deliberately crude: planar distance from fixed
degree-to-meter scales (flat earth, not great-circle) and a linear
battery-per-minute proxy. Both scales are placeholders and are exposed
as ``EstimatorConstants`` so callers can override them.
"""

import math
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from flood_mission_planner.config import Settings
from flood_mission_planner.constants import (
    BATTERY_PERCENT_PER_MINUTE,
    MAXIMUM_BATTERY_PERCENT,
    METERS_PER_DEGREE_LATITUDE,
    METERS_PER_DEGREE_LONGITUDE,
)
from flood_mission_planner.exceptions.client_errors import InvalidWaypointError
from flood_mission_planner.mission.models import RouteEstimate, Waypoint

SECONDS_PER_MINUTE = 60.0


class EstimatorConstants(BaseModel):
    """Scale factors used by ``estimate_route``."""

    model_config = ConfigDict(frozen=True)

    meters_per_degree_latitude: float = Field(default=METERS_PER_DEGREE_LATITUDE, gt=0)
    meters_per_degree_longitude: float = Field(
        default=METERS_PER_DEGREE_LONGITUDE, gt=0,
    )
    battery_percent_per_minute: float = Field(default=BATTERY_PERCENT_PER_MINUTE, ge=0)
    maximum_battery_percent: float = Field(default=MAXIMUM_BATTERY_PERCENT, gt=0, le=100)

    @classmethod
    def from_settings(cls, settings: Settings) -> "EstimatorConstants":
        """Build constants from application settings."""
        return cls(
            meters_per_degree_latitude=settings.meters_per_degree_latitude,
            meters_per_degree_longitude=settings.meters_per_degree_longitude,
            battery_percent_per_minute=settings.battery_percent_per_minute,
        )


DEFAULT_CONSTANTS = EstimatorConstants()


def calculate_segment_distance(
    origin: Waypoint,
    destination: Waypoint,
    scale: EstimatorConstants = DEFAULT_CONSTANTS,
) -> float:
    """Planar distance in meters between two waypoints. Altitude is ignored."""
    north = (destination.latitude - origin.latitude) * scale.meters_per_degree_latitude
    east = (destination.longitude - origin.longitude) * scale.meters_per_degree_longitude
    return math.hypot(north, east)


def estimate_route(
    waypoints: Sequence[Waypoint],
    *,
    constants: EstimatorConstants | None = None,
) -> RouteEstimate:
    """Estimate distance, duration and battery use for an ordered route.

    Each leg is flown at the departing waypoint's speed, and each waypoint
    adds its own dwell time, the final one included.

    Args:
        waypoints: Waypoints in flight order.
        constants: Scale factors; module defaults when omitted.

    Returns:
        Distance in meters, duration in minutes and battery percent
        (capped at the maximum).

    Raises:
        InvalidWaypointError: If a waypoint with an outgoing leg has a
            non-positive speed.
    """
    scale = constants or DEFAULT_CONSTANTS
    if not waypoints:
        return RouteEstimate()

    total_distance = 0.0
    total_seconds = 0.0

    for current, following in zip(waypoints, waypoints[1:], strict=False):
        if current.speed <= 0:
            raise InvalidWaypointError(
                f"Waypoint {current.waypoint_id} has a leg to fly but speed {current.speed}",
                waypoint_id=current.waypoint_id,
                field="speed",
                value=current.speed,
            )
        distance = calculate_segment_distance(current, following, scale)
        total_distance += distance
        total_seconds += distance / current.speed + current.duration_seconds

    total_seconds += waypoints[-1].duration_seconds

    duration_minutes = total_seconds / SECONDS_PER_MINUTE
    battery = min(
        scale.maximum_battery_percent,
        duration_minutes * scale.battery_percent_per_minute,
    )
    return RouteEstimate(
        distance_meters=total_distance,
        duration_minutes=duration_minutes,
        estimated_battery_percent=battery,
    )
