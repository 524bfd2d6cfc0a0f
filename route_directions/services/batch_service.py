"""Batch service - Runs the trip splitter over a whole feed snapshot.

The batch is all-or-nothing: the first domain error is logged with its
context and re-raised, so no feed ships with some routes silently
mislabelled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..domain.errors import (
    AmbiguousAlignmentError,
    DirectionConflictError,
    RequiredOrderViolationError,
    RouteDirectionError,
    UnclassifiableTripError,
)
from ..domain.models import OutputTrip, Route, Trip
from .trip_splitter import TripSplitter

RouteBatch = Iterable[Tuple[Route, Iterable[Trip]]]


@dataclass(frozen=True)
class BatchResult:
    """Output of a batch run.

    Attributes:
        trips: Output trips in input order
        trips_in: Number of feed trips processed
        split_trips: Feed trips cut into two output trips
        registry_trips: Feed trips ordered against the registry
        classified_trips: Feed trips labelled by the classifier
    """

    trips: Tuple[OutputTrip, ...] = ()
    trips_in: int = 0
    split_trips: int = 0
    registry_trips: int = 0
    classified_trips: int = 0

    @property
    def trips_out(self) -> int:
        return len(self.trips)


@dataclass
class DirectionBatchService:
    """Assigns directions and stop orders to every trip of a batch.

    Attributes:
        splitter: Per-trip splitter
    """

    splitter: TripSplitter

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def process(self, batch: RouteBatch) -> BatchResult:
        """Process every route of a batch.

        Args:
            batch: Pairs of (route, trips of that route).

        Returns:
            BatchResult with all output trips and run counters.

        Raises:
            RouteDirectionError: The first failure; the batch is aborted.
        """
        outputs: List[OutputTrip] = []
        trips_in = split_trips = registry_trips = 0

        for route, trips in batch:
            route_outputs: List[OutputTrip] = []
            try:
                for trip in trips:
                    produced = self.splitter.split(route, trip)
                    trips_in += 1
                    if produced[0].from_registry:
                        registry_trips += 1
                    if len(produced) > 1:
                        split_trips += 1
                    route_outputs.extend(produced)
                self._check_directions(route, route_outputs)
            except RouteDirectionError as e:
                self._logger.error(
                    "Batch aborted",
                    extra={
                        "route_id": route.id,
                        "error_type": type(e).__name__,
                        "error": str(e),
                    },
                )
                raise
            outputs.extend(route_outputs)

        result = BatchResult(
            trips=tuple(outputs),
            trips_in=trips_in,
            split_trips=split_trips,
            registry_trips=registry_trips,
            classified_trips=trips_in - registry_trips,
        )
        self._logger.info(
            "Batch complete",
            extra={
                "trips_in": result.trips_in,
                "trips_out": result.trips_out,
                "split_trips": result.split_trips,
                "registry_trips": result.registry_trips,
                "classified_trips": result.classified_trips,
            },
        )
        return result

    def process_safe(
        self, batch: RouteBatch
    ) -> Tuple[Optional[BatchResult], Optional[str]]:
        """Process a batch, returning an error message instead of raising.

        Args:
            batch: Pairs of (route, trips of that route).

        Returns:
            Tuple of (BatchResult or None, error message or None).
        """
        try:
            return self.process(batch), None
        except UnclassifiableTripError as e:
            return None, f"Unclassifiable trip: {e.message}"
        except AmbiguousAlignmentError as e:
            return None, f"Ambiguous alignment, refine the registry: {e.message}"
        except RequiredOrderViolationError as e:
            return None, f"Stop order violation: {e.message}"
        except DirectionConflictError as e:
            return None, f"Direction conflict: {e.message}"
        except RouteDirectionError as e:
            return None, f"Error: {e}"

    def _check_directions(self, route: Route, outputs: List[OutputTrip]) -> None:
        # A route has at most two logical directions, and they are opposite.
        directions = {o.direction for o in outputs}
        if len(directions) < 2:
            return
        if len(directions) == 2:
            a, b = directions
            if a.opposite is b:
                return
        names = tuple(sorted(d.name for d in directions))
        raise DirectionConflictError(
            f"Route {route.id} has directions {', '.join(names)},"
            " expected one opposing pair",
            route_id=route.id,
            directions=names,
        )
