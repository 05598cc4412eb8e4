"""Context variables for request- and mission-scoped logging data.

Uses contextvars so the values follow the calling thread or task.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

_extra_context: ContextVar[dict[str, Any] | None] = ContextVar("extra_context", default=None)


def get_correlation_id() -> str:
    """Get the current correlation ID."""
    return correlation_id.get()


def set_correlation_id(value: str) -> None:
    """Set the correlation ID for the current context."""
    correlation_id.set(value)


def generate_correlation_id() -> str:
    """Generate and set a new correlation ID.

    Returns:
        The generated correlation ID.
    """
    new_id = str(uuid4())
    correlation_id.set(new_id)
    return new_id


def get_extra_context() -> dict[str, Any]:
    """Get a copy of the fields added to every log record."""
    context = _extra_context.get()
    if context is None:
        return {}
    return context.copy()


def set_extra_context(**kwargs: Any) -> None:
    """Set additional context fields to include in all log messages.

    Args:
        **kwargs: Key-value pairs to include in log messages.
    """
    current = _extra_context.get()
    current = {} if current is None else current.copy()
    current.update(kwargs)
    _extra_context.set(current)


@contextmanager
def bind_mission(mission_id: str) -> Iterator[None]:
    """Attach ``mission_id`` to every record logged inside the block.

    The previous extra context is restored on exit.

    Args:
        mission_id: Mission the enclosed operations act on.
    """
    current = _extra_context.get()
    updated = {} if current is None else current.copy()
    updated["mission_id"] = mission_id
    token = _extra_context.set(updated)
    try:
        yield
    finally:
        _extra_context.reset(token)


def clear_context() -> None:
    """Clear all context (correlation ID and extra context)."""
    correlation_id.set("")
    _extra_context.set(None)
