"""Errors caused by the caller (HTTP 4xx).

The mission model only holds in-memory state, so every failure it can
report is a rejected request: a bad field, an unknown id or a forbidden
status change.
"""

from http import HTTPStatus
from typing import Any, ClassVar

from flood_mission_planner.exceptions.base import MissionPlannerError


def _merge_context(context: dict[str, Any] | None, **fields: Any) -> dict[str, Any]:
    """Add the non-None ``fields`` to a copy of ``context``."""
    merged = dict(context or {})
    merged.update({key: value for key, value in fields.items() if value is not None})
    return merged


class ClientError(MissionPlannerError):
    """Request could not be applied to the current state."""

    error_code: ClassVar[str] = "CLIENT_ERROR"
    http_status: ClassVar[int] = HTTPStatus.BAD_REQUEST


class ValidationError(ClientError):
    """A field value breaks a model rule.

    Args:
        message: What is wrong with the value.
        field: Dotted name of the offending field.
        value: The rejected value.
        context: Extra identifiers to report.
    """

    error_code: ClassVar[str] = "VALIDATION_ERROR"
    http_status: ClassVar[int] = HTTPStatus.BAD_REQUEST

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context=_merge_context(context, field=field, value=value))


class InvalidWaypointError(ValidationError):
    """Waypoint fields cannot be used for planning.

    Raised for a non-positive speed on a waypoint that still has a leg to
    fly, for a repeated waypoint id, and for edits that break the waypoint
    field rules.
    """

    error_code: ClassVar[str] = "INVALID_WAYPOINT"

    def __init__(
        self,
        message: str,
        *,
        waypoint_id: str | None = None,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            field=field,
            value=value,
            context=_merge_context(context, waypoint_id=waypoint_id),
        )


class IndexOutOfRangeError(ClientError):
    """Insert position lies outside the current waypoint sequence."""

    error_code: ClassVar[str] = "INDEX_OUT_OF_RANGE"
    http_status: ClassVar[int] = HTTPStatus.BAD_REQUEST

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        length: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context=_merge_context(context, index=index, length=length))


class NotFoundError(ClientError):
    """No mission, waypoint, template, drone or route with the given id.

    ``resource_type`` names which kind of thing was looked up.
    """

    error_code: ClassVar[str] = "NOT_FOUND"
    http_status: ClassVar[int] = HTTPStatus.NOT_FOUND

    def __init__(
        self,
        message: str,
        *,
        resource_type: str | None = None,
        resource_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            context=_merge_context(context, resource_type=resource_type, resource_id=resource_id),
        )


class ConflictError(ClientError):
    """Request contradicts the current state of the resource."""

    error_code: ClassVar[str] = "CONFLICT"
    http_status: ClassVar[int] = HTTPStatus.CONFLICT


class InvalidTransitionError(ConflictError):
    """Mission status change is not allowed by the planning state machine."""

    error_code: ClassVar[str] = "INVALID_TRANSITION"

    def __init__(
        self,
        message: str,
        *,
        current_status: str | None = None,
        target_status: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            context=_merge_context(
                context,
                current_status=None if current_status is None else str(current_status),
                target_status=None if target_status is None else str(target_status),
            ),
        )


class BadRequestError(ClientError):
    """Request is malformed, e.g. a body that is not a JSON object."""

    error_code: ClassVar[str] = "BAD_REQUEST"
    http_status: ClassVar[int] = HTTPStatus.BAD_REQUEST
