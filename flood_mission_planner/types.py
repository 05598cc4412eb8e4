"""Type definitions for request handling and injected capabilities."""

from collections.abc import Callable
from typing import Any, NotRequired, Protocol, TypedDict


class RandomGenerator(Protocol):
    """Source of pseudo-random floats.

    ``random.Random`` satisfies this interface; tests pass a seeded
    instance or a fixed stub.
    """

    def uniform(self, a: float, b: float) -> float:
        """Return a float between a and b."""
        ...


class ApiResponse(TypedDict):
    """Standard response structure."""

    statusCode: int
    body: str
    headers: NotRequired[dict[str, str]]


# API-Gateway-shaped request event: resource, httpMethod, pathParameters, body
ApiEvent = dict[str, Any]

# Supplies the drone id assigned to a newly created mission
ResourceAssigner = Callable[[], str]
