"""Direction flag override strategy."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...domain.models import Direction, Route, Trip
from ...ports.registry import RegistryPort


@dataclass
class DirectionFlagOverrideStrategy:
    """Direction from the registry's (route id, raw flag) override table.

    Covers feeds that only ever populate the binary direction flag and
    leave the heading text empty.

    Attributes:
        registry: Registry holding the override table
    """

    registry: RegistryPort
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def propose(self, route: Route, trip: Trip) -> Optional[Direction]:
        direction = self.registry.direction_flag_override(route.id, trip.direction_flag)
        if direction is not None:
            self._logger.debug(
                "Direction from flag override",
                extra={
                    "route_id": route.id,
                    "trip_id": trip.id,
                    "direction_flag": trip.direction_flag,
                    "direction": direction.name,
                },
            )
        return direction
