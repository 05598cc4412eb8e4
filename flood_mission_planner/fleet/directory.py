"""Read-only drone directory consulted during mission planning."""

from collections.abc import Iterable

from flood_mission_planner.exceptions.client_errors import NotFoundError
from flood_mission_planner.fleet.models import Drone, DroneStatus

DEFAULT_FLEET: tuple[Drone, ...] = (
    Drone(
        drone_id="UAV_ALPHA",
        name="Alpha Scout",
        status=DroneStatus.AVAILABLE,
        battery_percent=85,
        max_flight_time_minutes=45,
        capabilities=("camera", "lidar", "water_sensor"),
    ),
    Drone(
        drone_id="UAV_BRAVO",
        name="Bravo Survey",
        status=DroneStatus.AVAILABLE,
        battery_percent=92,
        max_flight_time_minutes=60,
        capabilities=("camera", "thermal", "gps"),
    ),
    Drone(
        drone_id="UAV_CHARLIE",
        name="Charlie Patrol",
        status=DroneStatus.BUSY,
        battery_percent=45,
        max_flight_time_minutes=40,
        capabilities=("camera", "night_vision"),
    ),
    Drone(
        drone_id="UAV_DELTA",
        name="Delta Monitor",
        status=DroneStatus.AVAILABLE,
        battery_percent=78,
        max_flight_time_minutes=55,
        capabilities=("camera", "water_sensor", "weather"),
    ),
    Drone(
        drone_id="UAV_ECHO",
        name="Echo Rescue",
        status=DroneStatus.MAINTENANCE,
        battery_percent=0,
        max_flight_time_minutes=50,
        capabilities=("camera", "thermal", "speaker"),
    ),
)


class DroneDirectory:
    """Lookup of drones by id, in registration order."""

    def __init__(self, drones: Iterable[Drone] = DEFAULT_FLEET) -> None:
        self._drones: dict[str, Drone] = {drone.drone_id: drone for drone in drones}

    def __len__(self) -> int:
        return len(self._drones)

    def get(self, drone_id: str) -> Drone:
        """Get a drone by ID.

        Raises:
            NotFoundError: If the drone is not registered.
        """
        drone = self._drones.get(drone_id)
        if drone is None:
            raise NotFoundError(
                f"Drone {drone_id} not found",
                resource_type="Drone",
                resource_id=drone_id,
            )
        return drone

    def list_drones(self) -> list[Drone]:
        """Every registered drone, in registration order."""
        return list(self._drones.values())

    def list_available(self) -> list[Drone]:
        """Drones whose status is ``available``."""
        return [drone for drone in self._drones.values() if drone.is_available]

    def assign_first_available(self) -> str:
        """Pick a drone id for a new mission.

        Returns the first available drone, falling back to the first
        registered drone when none is available.

        Raises:
            NotFoundError: If the directory is empty.
        """
        available = self.list_available()
        if available:
            return available[0].drone_id
        if not self._drones:
            raise NotFoundError("No drones registered", resource_type="Drone")
        return next(iter(self._drones))
