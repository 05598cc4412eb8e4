"""Turn planner exceptions into responses.

Error bodies are RFC 7807 problem documents::

    {
        "type": "https://flood-mission-planner.io/errors/INVALID_TRANSITION",
        "title": "Invalid Transition",
        "status": 409,
        "detail": "Cannot transition from draft to completed",
        "instance": "/requests/<request id>",
        "context": {"current_status": "draft", "target_status": "completed"}
    }
"""

import json
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any, ParamSpec, TypeVar

from flood_mission_planner.exceptions.base import MissionPlannerError
from flood_mission_planner.logging import get_logger
from flood_mission_planner.types import ApiResponse

logger = get_logger(__name__)

ERROR_TYPE_BASE_URL = "https://flood-mission-planner.io/errors"
PROBLEM_CONTENT_TYPE = "application/problem+json"
JSON_CONTENT_TYPE = "application/json"

P = ParamSpec("P")
T = TypeVar("T")


def create_error_response(
    exception: MissionPlannerError,
    *,
    include_context: bool = True,
    request_id: str | None = None,
) -> ApiResponse:
    """Build a problem-document response for ``exception``.

    Args:
        exception: Error to report.
        include_context: Whether ``exception.context`` goes into the body.
        request_id: Request the error belongs to, reported as ``instance``.
    """
    problem: dict[str, Any] = {
        "type": f"{ERROR_TYPE_BASE_URL}/{exception.error_code}",
        "title": exception.title(),
        "status": int(exception.http_status),
        "detail": exception.message,
    }
    if request_id:
        problem["instance"] = f"/requests/{request_id}"
    if include_context and exception.context:
        problem["context"] = exception.context

    return {
        "statusCode": exception.http_status,
        "headers": {"Content-Type": PROBLEM_CONTENT_TYPE},
        # Context may carry enums or sets
        "body": json.dumps(problem, default=str),
    }


def create_success_response(status_code: int, body: dict[str, Any]) -> ApiResponse:
    """Create a JSON success response.

    Args:
        status_code: HTTP status code (2xx).
        body: Response body dictionary.

    Returns:
        Response with a JSON content type.
    """
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": JSON_CONTENT_TYPE},
        "body": json.dumps(body),
    }


def create_exception_handler(
    func: Callable[P, T],
) -> Callable[P, T | ApiResponse]:
    """Decorate a request handler so planner errors become error responses.

    The request id is read from the first positional argument when it is
    an event carrying ``requestContext.requestId``. Exceptions outside the
    planner hierarchy propagate unchanged.
    """

    @wraps(func)
    def handle_call(*args: P.args, **kwargs: P.kwargs) -> T | ApiResponse:
        try:
            return func(*args, **kwargs)
        except MissionPlannerError as error:
            logger.warning("Request rejected", extra={"error": error.to_log_dict()})
            return create_error_response(error, request_id=_extract_request_id(args))

    return handle_call


def _extract_request_id(args: tuple[object, ...]) -> str | None:
    event = args[0] if args else None
    if not isinstance(event, dict):
        return None
    request_context = event.get("requestContext")
    if not isinstance(request_context, dict):
        return None
    request_id = request_context.get("requestId")
    return request_id if isinstance(request_id, str) else None


def get_http_status_for_error_code(error_code: str) -> int:
    """Status for a registered error code, 500 for unknown codes."""
    exception_class = MissionPlannerError.get_by_error_code(error_code)
    if exception_class is None:
        return HTTPStatus.INTERNAL_SERVER_ERROR
    return exception_class.http_status
