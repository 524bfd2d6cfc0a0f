"""Heading text strategy.

Most feeds prefix the trip heading with the direction, as in
"East - 506 Carlton towards Main Street Station".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...domain.models import Direction, Route, Trip


@dataclass
class CardinalHeadingStrategy:
    """Direction from a cardinal word at the start of the heading text.

    The heading is trimmed and compared case-insensitively, so
    "  EASTBOUND" and "east - 506" both give EAST.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def propose(self, route: Route, trip: Trip) -> Optional[Direction]:
        heading = (trip.heading_text or "").strip().lower()
        for direction in Direction:
            if heading.startswith(direction.word):
                self._logger.debug(
                    "Direction from heading text",
                    extra={"trip_id": trip.id, "direction": direction.name},
                )
                return direction
        return None
