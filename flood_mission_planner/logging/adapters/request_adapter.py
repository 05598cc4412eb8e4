"""Adapter for setting logging context from an incoming request event."""

from flood_mission_planner.logging.context import (
    generate_correlation_id,
    set_correlation_id,
    set_extra_context,
)
from flood_mission_planner.types import ApiEvent


def set_request_context(event: ApiEvent) -> str:
    """Set logging context from a request event.

    The request id becomes the correlation id; a fresh one is generated
    when the event carries none.

    Args:
        event: Request event dictionary.

    Returns:
        The correlation id now in effect.
    """
    request_context = event.get("requestContext")
    request_id = None
    if isinstance(request_context, dict):
        request_id = request_context.get("requestId")

    if isinstance(request_id, str) and request_id:
        set_correlation_id(request_id)
        correlation = request_id
    else:
        correlation = generate_correlation_id()

    set_extra_context(
        http_method=str(event.get("httpMethod", "")),
        resource=str(event.get("resource", "")),
    )
    return correlation
