"""Direction classifier - Heuristic cascade for unregistered routes.

The cascade is an ordered list of strategies. Each returns a definite
direction or None ("no opinion"); the first definite answer wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..config import ClassifierConfig, get_config
from ..domain.errors import UnclassifiableTripError
from ..domain.models import Direction, Route, Trip
from ..ports.classification import DirectionStrategyPort
from ..ports.registry import RegistryPort


@dataclass
class DirectionClassifier:
    """Assigns EAST/WEST/NORTH/SOUTH to a trip.

    Pure function of (route, trip): strategies hold no per-trip state,
    so classifying the same trip twice gives the same answer.

    Attributes:
        strategies: Heuristics evaluated in priority order
    """

    strategies: Sequence[DirectionStrategyPort]

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.strategies = tuple(self.strategies)
        self._logger = logging.getLogger(__name__)

    @classmethod
    def default(
        cls,
        registry: RegistryPort,
        config: Optional[ClassifierConfig] = None,
    ) -> DirectionClassifier:
        """Build the standard cascade: heading text, then flag overrides.

        Args:
            registry: Registry holding the direction flag override table.
            config: Classifier configuration.

        Returns:
            A configured DirectionClassifier.
        """
        from ..adapters.classification import (
            CardinalHeadingStrategy,
            DirectionFlagOverrideStrategy,
        )

        config = config or get_config().classifier
        strategies: list[DirectionStrategyPort] = [CardinalHeadingStrategy()]
        if config.use_direction_flag_overrides:
            strategies.append(DirectionFlagOverrideStrategy(registry))
        return cls(strategies=strategies)

    def classify(self, route: Route, trip: Trip) -> Direction:
        """Classify the direction of a trip.

        Args:
            route: The route the trip belongs to.
            trip: The trip to classify.

        Returns:
            The direction proposed by the first strategy with an opinion.

        Raises:
            UnclassifiableTripError: If no strategy has an opinion.
        """
        for strategy in self.strategies:
            direction = strategy.propose(route, trip)
            if direction is not None:
                self._logger.debug(
                    "Trip classified",
                    extra={
                        "route_id": route.id,
                        "trip_id": trip.id,
                        "strategy": type(strategy).__name__,
                        "direction": direction.name,
                    },
                )
                return direction

        raise UnclassifiableTripError(
            f"Route {route.id}: cannot classify trip {trip.id}"
            f" (heading {trip.heading_text!r}, direction flag {trip.direction_flag!r})",
            route_id=route.id,
            trip_id=trip.id,
            heading_text=trip.heading_text,
        )
