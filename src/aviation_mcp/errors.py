"""Typed errors for route search and itinerary composition.

All errors inherit from AviationError and can optionally wrap a root
cause exception for logging.
"""

from dataclasses import dataclass, field


@dataclass
class AviationError(Exception):
    """Base error for the aviation route search domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Exception | None = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class IncompleteCriteriaError(AviationError):
    """Search submitted without origin, destination, or date.

    Recovered locally by the search controller: the state does not change
    and the message is shown to the user as a prompt.

    Attributes:
        missing: Names of the criteria fields that were not set
    """

    missing: tuple[str, ...] = ()


@dataclass
class RouteQueryError(AviationError):
    """The route-query service failed or returned an unusable payload."""


@dataclass
class EmptyRouteError(AviationError):
    """A stop sequence was requested for a route with no segments.

    A route always has at least one segment, so this signals an upstream
    data contract violation rather than a user-facing condition.
    """


@dataclass
class AuthenticationError(AviationError):
    """Login was rejected, or an operation requires a signed-in session."""
