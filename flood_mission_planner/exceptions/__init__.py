"""Flood mission planner exception hierarchy.

Architecture:
    MissionPlannerError (base)
    └── ClientError (4xx)
        ├── ValidationError (400)
        │   └── InvalidWaypointError (400)
        ├── IndexOutOfRangeError (400)
        ├── BadRequestError (400)
        ├── NotFoundError (404)
        └── ConflictError (409)
            └── InvalidTransitionError (409)

Usage:
    from flood_mission_planner.exceptions import NotFoundError

    def get_mission(mission_id: str) -> Mission:
        mission = missions.get(mission_id)
        if mission is None:
            raise NotFoundError(
                f"Mission {mission_id} not found",
                resource_type="Mission",
                resource_id=mission_id,
            )
        return mission
"""

from flood_mission_planner.exceptions.base import MissionPlannerError
from flood_mission_planner.exceptions.client_errors import (
    BadRequestError,
    ClientError,
    ConflictError,
    IndexOutOfRangeError,
    InvalidTransitionError,
    InvalidWaypointError,
    NotFoundError,
    ValidationError,
)
from flood_mission_planner.exceptions.handlers import (
    create_error_response,
    create_exception_handler,
    create_success_response,
    get_http_status_for_error_code,
)

__all__ = [
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "IndexOutOfRangeError",
    "InvalidTransitionError",
    "InvalidWaypointError",
    "MissionPlannerError",
    "NotFoundError",
    "ValidationError",
    "create_error_response",
    "create_exception_handler",
    "create_success_response",
    "get_http_status_for_error_code",
]
