"""Mission planning request handler.

Routes API-Gateway-shaped events to a ``MissionRegistry``. Responses are
JSON; errors are RFC 7807 problem documents.
"""

import json
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from flood_mission_planner.config import Settings, get_settings
from flood_mission_planner.exceptions.client_errors import (
    BadRequestError,
    NotFoundError,
    ValidationError,
)
from flood_mission_planner.exceptions.handlers import (
    create_exception_handler,
    create_success_response,
)
from flood_mission_planner.fleet.directory import DroneDirectory
from flood_mission_planner.fleet.models import check_battery_sufficiency
from flood_mission_planner.logging import bind_mission, get_logger
from flood_mission_planner.logging.adapters.request_adapter import set_request_context
from flood_mission_planner.mission.aggregate import Mission
from flood_mission_planner.mission.models import (
    MissionPriority,
    MissionUpdate,
    WaypointUpdate,
)
from flood_mission_planner.mission.registry import MissionRegistry
from flood_mission_planner.mission.templates import MISSION_TEMPLATES, get_template
from flood_mission_planner.types import ApiEvent, ApiResponse
from flood_mission_planner.utils.formatting import format_duration, format_percent

logger = get_logger(__name__)

MISSIONS_RESOURCE = "/api/v1/missions"
MISSION_RESOURCE = "/api/v1/missions/{mission_id}"
SELECT_RESOURCE = "/api/v1/missions/{mission_id}/select"
WAYPOINTS_RESOURCE = "/api/v1/missions/{mission_id}/waypoints"
WAYPOINT_RESOURCE = "/api/v1/missions/{mission_id}/waypoints/{waypoint_id}"
BATTERY_CHECK_RESOURCE = "/api/v1/missions/{mission_id}/battery-check"
TEMPLATES_RESOURCE = "/api/v1/templates"


class CreateMissionRequest(BaseModel):
    """Body of a create-mission request."""

    template_id: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    priority: MissionPriority | None = None


class InsertWaypointRequest(BaseModel):
    """Body of an insert-waypoint request."""

    after_index: int | None = None
    waypoint: WaypointUpdate | None = None


class MissionController:
    """Request-facing wrapper around a registry and a drone directory."""

    def __init__(
        self,
        registry: MissionRegistry,
        drone_directory: DroneDirectory | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            registry: Missions served by the routes.
            drone_directory: Drones used for assignment and battery checks;
                the default fleet when omitted.
            settings: Battery margin settings; cached application settings
                when omitted.
        """
        self.registry = registry
        self.drone_directory = drone_directory or DroneDirectory()
        self.settings = settings or get_settings()


ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse_body(event: ApiEvent, model: type[ModelT]) -> ModelT:
    """Parse and validate a JSON request body.

    Raises:
        BadRequestError: If the body is not a JSON object.
        ValidationError: If the object does not match ``model``.
    """
    raw_body = event.get("body")
    if raw_body is None or raw_body == "":
        data: object = {}
    elif isinstance(raw_body, str):
        try:
            data = json.loads(raw_body)
        except json.JSONDecodeError as error:
            raise BadRequestError(f"Request body is not valid JSON: {error.msg}") from error
    else:
        data = raw_body

    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")

    try:
        return model.model_validate(data)
    except PydanticValidationError as error:
        first_error = error.errors()[0]
        raise ValidationError(
            f"Invalid request body: {first_error['msg']}",
            field=".".join(str(part) for part in first_error["loc"]) or None,
        ) from error


def _extract_path_parameter(event: ApiEvent, parameter: str) -> str:
    """Extract a path parameter from the event.

    Raises:
        BadRequestError: If parameter is missing.
    """
    path_params: dict[str, str] = event.get("pathParameters") or {}
    value: str | None = path_params.get(parameter)
    if not value:
        raise BadRequestError(f"Missing path parameter: {parameter}")
    return value


def _serialize_mission(mission: Mission) -> dict[str, Any]:
    """Dump a mission with preformatted display values."""
    body = mission.model_dump(mode="json")
    body["display"] = {
        "duration": format_duration(mission.statistics.duration_minutes),
        "battery": format_percent(mission.statistics.estimated_battery_percent),
        "action_counts": {str(action): count for action, count in mission.count_actions().items()},
    }
    return body


def _list_missions(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """List missions newest-first with the current selection."""
    registry = controller.registry
    selected = registry.selected
    return create_success_response(
        HTTPStatus.OK,
        {
            "missions": [_serialize_mission(mission) for mission in registry.list_missions()],
            "selected_mission_id": selected.mission_id if selected else None,
        },
    )


def _create_mission(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Create a mission, optionally from a template, and select it."""
    request = _parse_body(event, CreateMissionRequest)
    template = get_template(request.template_id) if request.template_id else None
    mission = controller.registry.create_from_template(
        template,
        controller.drone_directory.assign_first_available,
    )
    overrides = MissionUpdate(
        name=request.name,
        description=request.description,
        priority=request.priority,
    )
    if overrides.changes():
        mission.update_fields(overrides)
    return create_success_response(HTTPStatus.CREATED, _serialize_mission(mission))


def _get_mission(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Return one mission."""
    mission = controller.registry.get(_extract_path_parameter(event, "mission_id"))
    return create_success_response(HTTPStatus.OK, _serialize_mission(mission))


def _update_mission(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Apply name, description, priority, drone or status changes."""
    mission_id = _extract_path_parameter(event, "mission_id")
    update = _parse_body(event, MissionUpdate)
    mission = controller.registry.update(mission_id, update)
    return create_success_response(HTTPStatus.OK, _serialize_mission(mission))


def _remove_mission(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Delete a mission, clearing the selection if it was selected."""
    mission = controller.registry.remove(_extract_path_parameter(event, "mission_id"))
    return create_success_response(HTTPStatus.OK, {"mission_id": mission.mission_id})


def _select_mission(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Make a mission the current selection."""
    mission = controller.registry.select(_extract_path_parameter(event, "mission_id"))
    return create_success_response(HTTPStatus.OK, _serialize_mission(mission))


def _insert_waypoint(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Insert a factory waypoint, optionally after a given index."""
    mission_id = _extract_path_parameter(event, "mission_id")
    request = _parse_body(event, InsertWaypointRequest)
    waypoint = controller.registry.insert_waypoint(
        mission_id,
        request.after_index,
        overrides=request.waypoint,
    )
    mission = controller.registry.get(mission_id)
    return create_success_response(
        HTTPStatus.CREATED,
        {
            "waypoint": waypoint.model_dump(mode="json"),
            "mission": _serialize_mission(mission),
        },
    )


def _update_waypoint(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Merge fields into one waypoint and re-estimate the route."""
    mission_id = _extract_path_parameter(event, "mission_id")
    waypoint_id = _extract_path_parameter(event, "waypoint_id")
    update = _parse_body(event, WaypointUpdate)
    mission = controller.registry.update_waypoint(mission_id, waypoint_id, update)
    return create_success_response(HTTPStatus.OK, _serialize_mission(mission))


def _remove_waypoint(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Remove one waypoint and re-estimate the route."""
    mission_id = _extract_path_parameter(event, "mission_id")
    waypoint_id = _extract_path_parameter(event, "waypoint_id")
    mission = controller.registry.remove_waypoint(mission_id, waypoint_id)
    return create_success_response(HTTPStatus.OK, _serialize_mission(mission))


def _check_battery(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Compare estimated battery use with the assigned drone's charge."""
    mission = controller.registry.get(_extract_path_parameter(event, "mission_id"))
    drone = controller.drone_directory.get(mission.resource_id)
    required = mission.statistics.estimated_battery_percent
    return create_success_response(
        HTTPStatus.OK,
        {
            "mission_id": mission.mission_id,
            "drone_id": drone.drone_id,
            "required_battery_percent": required,
            "drone_battery_percent": drone.battery_percent,
            "sufficiency": check_battery_sufficiency(
                required,
                drone,
                tight_ratio=controller.settings.battery_tight_ratio,
            ),
        },
    )


def _list_templates(controller: MissionController, event: ApiEvent) -> ApiResponse:
    """Return the built-in template catalog."""
    return create_success_response(
        HTTPStatus.OK,
        {"templates": [template.model_dump(mode="json") for template in MISSION_TEMPLATES]},
    )


RouteHandler = Callable[[MissionController, ApiEvent], ApiResponse]

ROUTES: dict[tuple[str, str], RouteHandler] = {
    (MISSIONS_RESOURCE, "GET"): _list_missions,
    (MISSIONS_RESOURCE, "POST"): _create_mission,
    (MISSION_RESOURCE, "GET"): _get_mission,
    (MISSION_RESOURCE, "PATCH"): _update_mission,
    (MISSION_RESOURCE, "DELETE"): _remove_mission,
    (SELECT_RESOURCE, "POST"): _select_mission,
    (WAYPOINTS_RESOURCE, "POST"): _insert_waypoint,
    (WAYPOINT_RESOURCE, "PATCH"): _update_waypoint,
    (WAYPOINT_RESOURCE, "DELETE"): _remove_waypoint,
    (BATTERY_CHECK_RESOURCE, "GET"): _check_battery,
    (TEMPLATES_RESOURCE, "GET"): _list_templates,
}


@create_exception_handler
def handle_request(event: ApiEvent, controller: MissionController) -> ApiResponse:
    """Handle one mission planning request.

    Args:
        event: Request event with ``resource``, ``httpMethod``,
            ``pathParameters`` and a JSON ``body``.
        controller: Registry and drone directory to act on.

    Returns:
        Response with ``statusCode``, ``headers`` and a JSON ``body``.
    """
    set_request_context(event)
    http_method = str(event.get("httpMethod", "")).upper()
    resource = str(event.get("resource", ""))

    route = ROUTES.get((resource, http_method))
    if route is None:
        raise NotFoundError(
            f"No route for {http_method} {resource}",
            resource_type="Route",
            resource_id=f"{http_method} {resource}",
        )

    path_params = event.get("pathParameters") or {}
    mission_id = path_params.get("mission_id") if isinstance(path_params, dict) else None
    if mission_id:
        with bind_mission(mission_id):
            logger.info("Handling mission request")
            return route(controller, event)

    logger.info("Handling request")
    return route(controller, event)
