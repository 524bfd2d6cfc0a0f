"""Stop order comparator - Orders a trip's stops against a canonical sequence.

Every stop-time gets a sort key `(slot, feed sequence number)`:

- a ranked stop (REQUIRED, LOOP_ANCHOR) uses its own slot;
- an ALTERNATE uses the slot of the stop it substitutes;
- a stop the sequence does not know takes the slot of its nearest known
  neighbour in feed order, the preceding one first.

The feed sequence number breaks every same-slot tie, so stops the
registry does not know keep the local order the feed gives them, and
two alternates of one slot come out in feed order. Keys are computed
once at construction; comparing is a lookup, which makes the
comparator a strict weak ordering that gives the same answer on every
call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from ..domain.models import CanonicalSequence, Ordering, StopTime

SortKey = Tuple[int, int]


@dataclass(frozen=True)
class StopOrderComparator:
    """Comparator bound to one canonical sequence and one trip.

    Attributes:
        sequence: Canonical sequence of the trip's direction
        stop_times: Stop-times of the trip being ordered
    """

    sequence: CanonicalSequence
    stop_times: Tuple[StopTime, ...] = ()
    _keys: Mapping[StopTime, SortKey] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        in_feed_order = sorted(self.stop_times, key=lambda st: st.sequence)
        slots = [self.sequence.slot_of(st.stop_id) for st in in_feed_order]

        keys: dict[StopTime, SortKey] = {}
        for index, stop_time in enumerate(in_feed_order):
            slot = slots[index]
            if slot is None:
                slot = _neighbour_slot(slots, index)
            keys[stop_time] = (slot, stop_time.sequence)

        object.__setattr__(self, "stop_times", tuple(self.stop_times))
        object.__setattr__(self, "_keys", MappingProxyType(keys))

    def slot_of(self, stop_id: str) -> Optional[int]:
        return self.sequence.slot_of(stop_id)

    def sort_key(self, stop_time: StopTime) -> SortKey:
        """Return the canonical sort key of a stop-time.

        Raises:
            ValueError: If the stop is unknown to the sequence and not part
                of the bound trip, so it has no neighbour to rank by.
        """
        key = self._keys.get(stop_time)
        if key is not None:
            return key
        slot = self.sequence.slot_of(stop_time.stop_id)
        if slot is None:
            raise ValueError(
                f"Stop {stop_time.stop_id} is not in the"
                f" {self.sequence.direction.name} sequence nor in the bound trip"
            )
        return (slot, stop_time.sequence)

    def compare(self, a: StopTime, b: StopTime) -> Ordering:
        key_a = self.sort_key(a)
        key_b = self.sort_key(b)
        if key_a < key_b:
            return Ordering.BEFORE
        if key_a > key_b:
            return Ordering.AFTER
        return Ordering.EQUAL

    def order(self, stop_times: Optional[Iterable[StopTime]] = None) -> Tuple[StopTime, ...]:
        """Sort stop-times (the bound trip's by default) in canonical order."""
        if stop_times is None:
            stop_times = self.stop_times
        return tuple(sorted(stop_times, key=self.sort_key))


def compare_stop_times(
    sequence: CanonicalSequence,
    a: StopTime,
    b: StopTime,
    context: Sequence[StopTime],
) -> Ordering:
    """Order two stop-times of one trip against a canonical sequence.

    `context` is the whole trip. An unknown stop is ranked by its
    neighbours in that trip, so every call on the same trip agrees.

    Raises:
        ValueError: If a stop is unknown to the sequence and absent from
            `context`.
    """
    return StopOrderComparator(sequence, tuple(context)).compare(a, b)


def _neighbour_slot(slots: Sequence[Optional[int]], index: int) -> int:
    for slot in reversed(slots[:index]):
        if slot is not None:
            return slot
    for slot in slots[index + 1 :]:
        if slot is not None:
            return slot
    return 0
