"""Registry ports - Read-only access to canonical stop sequences."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Direction, DirectionSpec


class RegistryPort(Protocol):
    """Port for the canonical sequence registry.

    Implementation: adapters/registry/static_registry.py

    The registry is built and validated once before any trip is
    processed, and never written to afterwards.
    """

    def lookup(self, route_id: int) -> Optional[DirectionSpec]:
        """Get the direction spec of a route.

        Args:
            route_id: Numeric route id.

        Returns:
            The route's DirectionSpec, or None if the route is not governed
            by the registry.
        """
        ...

    def direction_flag_override(
        self, route_id: int, direction_flag: Optional[int]
    ) -> Optional[Direction]:
        """Get the direction mapped to a route's raw direction flag.

        Args:
            route_id: Numeric route id.
            direction_flag: Raw 0/1 flag from the feed, or None.

        Returns:
            The mapped direction, or None if no override exists.
        """
        ...
