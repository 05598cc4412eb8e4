"""Root of the planner's exception hierarchy.

Subclasses declare ``error_code`` and ``http_status`` as class attributes
and are registered by code as they are defined, so a code seen in a
response or a log line maps back to its exception class.
"""

from http import HTTPStatus
from typing import Any, ClassVar


class MissionPlannerError(Exception):
    """Base exception for every error raised by the mission planner.

    Attributes:
        message: Human-readable description of what went wrong.
        error_code: Stable machine-readable code, e.g. ``"NOT_FOUND"``.
        http_status: Status returned when the error reaches a request handler.
        context: Identifiers and values that explain the failure, e.g. the
            waypoint id or the rejected status.
    """

    error_code: ClassVar[str] = "INTERNAL_ERROR"
    http_status: ClassVar[int] = HTTPStatus.INTERNAL_SERVER_ERROR

    _registry: ClassVar[dict[str, type["MissionPlannerError"]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        MissionPlannerError._registry[cls.error_code] = cls

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    @classmethod
    def title(cls) -> str:
        """Error code as a heading, e.g. ``"Invalid Transition"``."""
        return cls.error_code.replace("_", " ").title()

    @classmethod
    def get_by_error_code(cls, error_code: str) -> type["MissionPlannerError"] | None:
        """Return the exception class registered for ``error_code``, if any."""
        return cls._registry.get(error_code)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error code, message and context."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }

    def to_log_dict(self) -> dict[str, Any]:
        """Same as ``to_dict`` plus the status and concrete exception type."""
        log_fields = self.to_dict()
        log_fields["http_status"] = int(self.http_status)
        log_fields["exception_type"] = type(self).__name__
        return log_fields

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{self.message} (context: {self.context})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"error_code={self.error_code!r}, context={self.context!r})"
        )
