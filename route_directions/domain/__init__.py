"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    AlternateCollisionError,
    AmbiguousAlignmentError,
    ConfigurationError,
    DirectionConflictError,
    RegistryConstructionError,
    RequiredOrderViolationError,
    RouteDirectionError,
    UnclassifiableTripError,
)
from .models import (
    CanonicalSequence,
    Direction,
    DirectionSpec,
    Ordering,
    OutputTrip,
    Route,
    SequenceEntry,
    SequenceRole,
    StopTime,
    Trip,
)

__all__ = [
    # Models
    "Direction",
    "SequenceRole",
    "Ordering",
    "StopTime",
    "Route",
    "Trip",
    "SequenceEntry",
    "CanonicalSequence",
    "DirectionSpec",
    "OutputTrip",
    # Errors
    "RouteDirectionError",
    "UnclassifiableTripError",
    "AmbiguousAlignmentError",
    "RequiredOrderViolationError",
    "RegistryConstructionError",
    "AlternateCollisionError",
    "DirectionConflictError",
    "ConfigurationError",
]
