"""Classification ports - One step of the direction heuristic cascade."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Direction, Route, Trip


class DirectionStrategyPort(Protocol):
    """Port for a single direction classification heuristic.

    Implementations:
    - adapters/classification/heading.py (cardinal word in heading text)
    - adapters/classification/direction_flag.py (per-route flag overrides)

    A strategy either returns a definite direction or None when it has
    no opinion; the classifier moves on to the next strategy.
    """

    def propose(self, route: Route, trip: Trip) -> Optional[Direction]:
        """Propose a direction for a trip.

        Args:
            route: The route the trip belongs to.
            trip: The trip to classify.

        Returns:
            A direction, or None if this heuristic does not apply.
        """
        ...
