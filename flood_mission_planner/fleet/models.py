"""Fleet domain models for drone assignment."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from flood_mission_planner.constants import BATTERY_TIGHT_RATIO


class DroneStatus(StrEnum):
    """Drone availability as seen by the planner."""

    AVAILABLE = "available"
    BUSY = "busy"
    MAINTENANCE = "maintenance"
    OFFLINE = "offline"


class BatterySufficiency(StrEnum):
    """How a mission's battery estimate compares with a drone's charge."""

    SAFE = "safe"
    TIGHT = "tight"
    INSUFFICIENT = "insufficient"


class Drone(BaseModel):
    """Drone record supplied by the fleet directory."""

    model_config = ConfigDict(frozen=True)

    drone_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=200)
    status: DroneStatus = Field(default=DroneStatus.AVAILABLE)
    battery_percent: float = Field(ge=0, le=100)
    max_flight_time_minutes: int = Field(ge=0)
    capabilities: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def is_available(self) -> bool:
        return self.status == DroneStatus.AVAILABLE


def check_battery_sufficiency(
    required_percent: float,
    drone: Drone,
    *,
    tight_ratio: float = BATTERY_TIGHT_RATIO,
) -> BatterySufficiency:
    """Compare a mission's estimated battery use with a drone's charge.

    Args:
        required_percent: Estimated battery percent the mission needs.
        drone: Drone assigned to the mission.
        tight_ratio: Share of the drone's charge above which the margin
            is considered tight.

    Returns:
        INSUFFICIENT above the drone's charge, TIGHT above
        ``tight_ratio`` of it, SAFE otherwise.
    """
    if required_percent > drone.battery_percent:
        return BatterySufficiency.INSUFFICIENT
    if required_percent > drone.battery_percent * tight_ratio:
        return BatterySufficiency.TIGHT
    return BatterySufficiency.SAFE
