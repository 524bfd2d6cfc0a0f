"""Trip splitter - Direction and stop order for one feed trip.

The registry decides which mechanism applies to a route:

- route absent from the registry: the DirectionClassifier labels the
  trip and its stop-times are passed through unchanged;
- route present: the trip is aligned against both canonical sequences,
  labelled with the direction of the better one, checked for ranked
  stops out of order, and reordered with the StopOrderComparator.

A feed trip that runs out and back in one record is cut at its
turnaround into two direction-specific trips.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..config import AlignmentConfig, get_config
from ..domain.errors import (
    AlternateCollisionError,
    AmbiguousAlignmentError,
    RequiredOrderViolationError,
)
from ..domain.models import (
    CanonicalSequence,
    DirectionSpec,
    OutputTrip,
    Route,
    SequenceRole,
    StopTime,
    Trip,
)
from ..ports.registry import RegistryPort
from .direction_classifier import DirectionClassifier
from .stop_order import StopOrderComparator


@dataclass(frozen=True)
class RoundTripCut:
    """Where a feed trip turns around, and the sequence of each half.

    The turnaround stop-time belongs to both halves.
    """

    index: int
    score: int
    head: CanonicalSequence
    tail: CanonicalSequence


@dataclass
class TripSplitter:
    """Turns one feed trip into one or two direction-labelled trips.

    Attributes:
        registry: Canonical sequence registry
        classifier: Classifier for routes absent from the registry
        config: Alignment configuration
    """

    registry: RegistryPort
    classifier: DirectionClassifier
    config: AlignmentConfig = field(default_factory=lambda: get_config().alignment)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def split(self, route: Route, trip: Trip) -> Tuple[OutputTrip, ...]:
        """Assign direction and canonical stop order to a trip.

        Args:
            route: The route the trip belongs to.
            trip: The feed trip.

        Returns:
            One OutputTrip, or two when a round trip is cut at its turnaround.

        Raises:
            UnclassifiableTripError: If an unregistered route's trip matches
                no classification heuristic.
            AmbiguousAlignmentError: If the trip aligns equally well to both
                canonical sequences.
            RequiredOrderViolationError: If ranked stops are out of order.
            AlternateCollisionError: If two alternates of one slot occur and
                strict alternate collisions are enabled.
        """
        if trip.route_id != route.id:
            raise ValueError(
                f"Trip {trip.id} belongs to route {trip.route_id}, not {route.id}"
            )

        spec = self.registry.lookup(route.id)
        if spec is None:
            direction = self.classifier.classify(route, trip)
            return (
                OutputTrip(
                    direction=direction,
                    stop_times=trip.stop_times,
                    route_id=route.id,
                    trip_id=trip.id,
                    from_registry=False,
                ),
            )

        stops = trip.stops_in_feed_order()

        if self.config.split_round_trips:
            cut = self.find_round_trip_cut(spec, stops)
            if cut is not None:
                self._logger.info(
                    "Round trip split at turnaround",
                    extra={
                        "route_id": route.id,
                        "trip_id": trip.id,
                        "turnaround_stop": stops[cut.index].stop_id,
                        "directions": [cut.head.direction.name, cut.tail.direction.name],
                    },
                )
                return (
                    self._ordered(route, trip, cut.head, stops[: cut.index + 1], 0),
                    self._ordered(route, trip, cut.tail, stops[cut.index :], 1),
                )

        sequence = self.align(route, trip, spec, stops)
        return (self._ordered(route, trip, sequence, stops, 0),)

    def align(
        self,
        route: Route,
        trip: Trip,
        spec: DirectionSpec,
        stops: Sequence[StopTime],
    ) -> CanonicalSequence:
        """Pick the canonical sequence the trip's stops match best.

        Raises:
            AmbiguousAlignmentError: If both sequences score the same.
        """
        stop_ids = [st.stop_id for st in stops]
        (first, first_score), (second, second_score) = (
            (sequence, alignment_score(sequence, stop_ids)) for sequence in spec.sequences
        )

        self._logger.debug(
            "Trip aligned",
            extra={
                "route_id": route.id,
                "trip_id": trip.id,
                "scores": {first.direction.name: first_score, second.direction.name: second_score},
            },
        )

        if first_score == second_score:
            raise AmbiguousAlignmentError(
                f"Route {route.id}: trip {trip.id} aligns equally to"
                f" {first.direction.name} and {second.direction.name}"
                f" (score {first_score})",
                route_id=route.id,
                trip_id=trip.id,
                score=first_score,
            )
        return first if first_score > second_score else second

    def find_round_trip_cut(
        self, spec: DirectionSpec, stops: Sequence[StopTime]
    ) -> Optional[RoundTripCut]:
        """Find the turnaround of a trip that covers both directions.

        A cut is kept only if each half matches its own sequence strictly
        better than the other one, each half reaches the configured minimum
        score, and together they beat the best single-sequence score. The
        highest combined score wins, then the earliest cut.
        """
        stop_ids = [st.stop_id for st in stops]
        if len(stop_ids) < 3:
            return None

        # prefix[s][k]: score of stop_ids[:k]; suffix[s][k]: score of stop_ids[k:]
        prefix = {}
        suffix = {}
        for sequence in spec.sequences:
            ranked = sequence.ranked_stop_ids
            prefix[sequence] = _prefix_scores(ranked, stop_ids)
            backwards = _prefix_scores(ranked[::-1], stop_ids[::-1])
            suffix[sequence] = backwards[::-1]

        total = len(stop_ids)
        single_best = max(prefix[s][total] for s in spec.sequences)
        minimum = self.config.min_split_segment_score

        best: Optional[RoundTripCut] = None
        first, second = spec.sequences
        for index in range(1, total - 1):
            for head, tail in ((first, second), (second, first)):
                head_score = prefix[head][index + 1]
                tail_score = suffix[tail][index]
                if head_score < minimum or tail_score < minimum:
                    continue
                if head_score <= prefix[tail][index + 1] or tail_score <= suffix[head][index]:
                    continue
                combined = head_score + tail_score
                if combined <= single_best:
                    continue
                if best is None or combined > best.score:
                    best = RoundTripCut(index=index, score=combined, head=head, tail=tail)
        return best

    def _ordered(
        self,
        route: Route,
        trip: Trip,
        sequence: CanonicalSequence,
        stops: Sequence[StopTime],
        segment: int,
    ) -> OutputTrip:
        self._check_required_order(route, trip, sequence, stops)
        self._check_alternate_collisions(route, trip, sequence, stops)

        ordered = StopOrderComparator(sequence, tuple(stops)).order()
        return OutputTrip(
            direction=sequence.direction,
            stop_times=ordered,
            route_id=route.id,
            trip_id=trip.id,
            from_registry=True,
            segment=segment,
        )

    def _check_required_order(
        self,
        route: Route,
        trip: Trip,
        sequence: CanonicalSequence,
        stops: Sequence[StopTime],
    ) -> None:
        last_slot = -1
        for stop_time in stops:
            role = sequence.role_of(stop_time.stop_id)
            if role is None or role is SequenceRole.ALTERNATE:
                continue
            slot = sequence.slot_of(stop_time.stop_id)
            if slot <= last_slot:
                raise RequiredOrderViolationError(
                    f"Route {route.id}: trip {trip.id} visits stop"
                    f" {stop_time.stop_id} out of {sequence.direction.name} order",
                    route_id=route.id,
                    trip_id=trip.id,
                    stop_id=stop_time.stop_id,
                    direction=sequence.direction.name,
                )
            last_slot = slot

    def _check_alternate_collisions(
        self,
        route: Route,
        trip: Trip,
        sequence: CanonicalSequence,
        stops: Sequence[StopTime],
    ) -> None:
        alternates_by_slot: defaultdict[int, List[str]] = defaultdict(list)
        for stop_time in stops:
            if sequence.role_of(stop_time.stop_id) is SequenceRole.ALTERNATE:
                alternates_by_slot[sequence.slot_of(stop_time.stop_id)].append(
                    stop_time.stop_id
                )

        for slot, stop_ids in sorted(alternates_by_slot.items()):
            if len(stop_ids) < 2:
                continue
            if self.config.strict_alternate_collisions:
                raise AlternateCollisionError(
                    f"Route {route.id}: trip {trip.id} serves alternates"
                    f" {', '.join(stop_ids)} of the same {sequence.direction.name} slot",
                    route_id=route.id,
                    trip_id=trip.id,
                    stop_ids=tuple(stop_ids),
                    slot=slot,
                )
            self._logger.warning(
                "Alternates of one slot in a trip, ordered by feed sequence",
                extra={
                    "route_id": route.id,
                    "trip_id": trip.id,
                    "direction": sequence.direction.name,
                    "slot": slot,
                    "stop_ids": stop_ids,
                },
            )


def alignment_score(sequence: CanonicalSequence, stop_ids: Sequence[str]) -> int:
    """Count the sequence's ranked stops found, in order, within a trip."""
    return _prefix_scores(sequence.ranked_stop_ids, stop_ids)[-1]


def _prefix_scores(ranked: Sequence[str], stop_ids: Sequence[str]) -> List[int]:
    # Longest common subsequence, one score per prefix of stop_ids.
    scores = [0]
    previous = [0] * (len(ranked) + 1)
    for stop_id in stop_ids:
        current = [0]
        for j, ranked_id in enumerate(ranked, 1):
            if stop_id == ranked_id:
                current.append(previous[j - 1] + 1)
            else:
                current.append(max(previous[j], current[j - 1]))
        previous = current
        scores.append(previous[-1])
    return scores
