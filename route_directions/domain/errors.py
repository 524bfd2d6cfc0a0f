"""Typed domain errors for route direction assignment.

Every failure in the core is fatal for the batch: a wrong direction or
stop order silently corrupts rider-facing output, so nothing here is
retried or recovered locally. Each error carries the route/trip/stop
identifiers needed to fix the registry or the feed before rerunning.

All errors inherit from RouteDirectionError and can optionally wrap a
root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RouteDirectionError(Exception):
    """Base error for the route direction domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class UnclassifiableTripError(RouteDirectionError):
    """No classification strategy produced a direction for a trip.

    Attributes:
        route_id: Route of the trip
        trip_id: The trip that could not be classified
        heading_text: Raw heading text as found in the feed
    """

    route_id: Optional[int] = None
    trip_id: str = ""
    heading_text: str = ""


@dataclass
class AmbiguousAlignmentError(RouteDirectionError):
    """A trip aligns equally well to both canonical sequences of a route.

    Attributes:
        route_id: Route whose registry entry needs refinement
        trip_id: The ambiguous trip
        score: The shared alignment score
    """

    route_id: Optional[int] = None
    trip_id: str = ""
    score: int = 0


@dataclass
class RequiredOrderViolationError(RouteDirectionError):
    """Ranked stops of a trip appear out of their canonical order.

    Attributes:
        route_id: Route of the trip
        trip_id: The offending trip
        stop_id: First stop found out of order
        direction: Name of the direction the trip was aligned to
    """

    route_id: Optional[int] = None
    trip_id: str = ""
    stop_id: str = ""
    direction: str = ""


@dataclass
class RegistryConstructionError(RouteDirectionError):
    """Invalid canonical sequence data, raised before any trip is processed.

    Attributes:
        route_id: Route whose registry entry is invalid, if known
    """

    route_id: Optional[int] = None


@dataclass
class AlternateCollisionError(RouteDirectionError):
    """Two alternates of the same canonical slot occur in one trip.

    Only raised when strict alternate collisions are enabled; otherwise
    the collision is logged and resolved by feed sequence number.

    Attributes:
        route_id: Route of the trip
        trip_id: The trip holding both alternates
        stop_ids: The colliding stop ids in feed order
        slot: Canonical slot they both substitute
    """

    route_id: Optional[int] = None
    trip_id: str = ""
    stop_ids: tuple[str, ...] = ()
    slot: int = -1


@dataclass
class DirectionConflictError(RouteDirectionError):
    """A route produced direction labels that are not one opposing pair.

    Attributes:
        route_id: The route
        directions: Sorted names of the labels observed for the route
    """

    route_id: Optional[int] = None
    directions: tuple[str, ...] = ()


@dataclass
class ConfigurationError(RouteDirectionError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
