"""Immutable domain models for route direction assignment.

Feed records (Route, Trip, StopTime) are built by the feed loader and
only read by the core. Registry records (SequenceEntry,
CanonicalSequence, DirectionSpec) are build-time constants shared by
every trip of a route. All of them are frozen dataclasses with slots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping, Optional


class Direction(Enum):
    """Rider-facing travel direction of a trip."""

    EAST = auto()
    WEST = auto()
    NORTH = auto()
    SOUTH = auto()

    @property
    def word(self) -> str:
        """Lower-case cardinal word, as it appears in heading text."""
        return self.name.lower()

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
}


class SequenceRole(Enum):
    """Role of a stop inside a canonical sequence.

    Attributes
    ----------
    REQUIRED
        Defines the authoritative relative order; opens a slot.
    ALTERNATE
        Stands in for a ranked stop (detour, street-side split); shares
        the slot of the stop it substitutes.
    LOOP_ANCHOR
        Opens and closes a loop; ranked like REQUIRED and present in
        both directions of the route.
    """

    REQUIRED = auto()
    ALTERNATE = auto()
    LOOP_ANCHOR = auto()


class Ordering(Enum):
    """Relative order of two stop-times."""

    BEFORE = auto()
    AFTER = auto()
    EQUAL = auto()


@dataclass(frozen=True, slots=True)
class StopTime:
    """A stop visited by a trip.

    Attributes:
        stop_id: Feed stop identifier (e.g., '14260')
        sequence: Position of the stop within its trip, from the feed
    """

    stop_id: str
    sequence: int


@dataclass(frozen=True, slots=True)
class Route:
    """A transit route.

    Attributes:
        id: Numeric route id, parsed from the short display code
        short_code: Short display code from the feed (e.g., '506')
        name: Display name
    """

    id: int
    short_code: str = ""
    name: str = ""

    @classmethod
    def from_short_code(cls, short_code: str, name: str = "") -> Route:
        """Build a route whose id is the numeric value of its short code."""
        code = short_code.strip()
        if not code.isdigit():
            raise ValueError(f"Route short code must be numeric, got {short_code!r}")
        return cls(id=int(code), short_code=code, name=name)


@dataclass(frozen=True, slots=True)
class Trip:
    """A feed trip with its stop-times.

    Attributes:
        id: Feed trip identifier
        route_id: Id of the route the trip belongs to
        heading_text: Raw rider-facing destination text
        direction_flag: Raw binary direction indicator (0/1), None if absent
        stop_times: Stop-times in the order the feed lists them
    """

    id: str
    route_id: int
    heading_text: str = ""
    direction_flag: Optional[int] = None
    stop_times: tuple[StopTime, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate the direction flag and sequence number uniqueness."""
        object.__setattr__(self, "stop_times", tuple(self.stop_times))
        if self.direction_flag not in (0, 1, None):
            raise ValueError(
                f"Direction flag must be 0 or 1, got {self.direction_flag!r}"
            )
        sequences = [st.sequence for st in self.stop_times]
        if len(set(sequences)) != len(sequences):
            raise ValueError(f"Trip {self.id} has duplicate stop sequence numbers")

    def stops_in_feed_order(self) -> tuple[StopTime, ...]:
        """Return the stop-times sorted by feed sequence number."""
        return tuple(sorted(self.stop_times, key=lambda st: st.sequence))


@dataclass(frozen=True, slots=True)
class SequenceEntry:
    """One stop of a canonical sequence.

    Attributes:
        stop_id: Feed stop identifier
        role: Role of the stop in the sequence
        substitutes: For ALTERNATE entries, the ranked stop id it stands in for
        label: Stop name, for people reading the registry
    """

    stop_id: str
    role: SequenceRole = SequenceRole.REQUIRED
    substitutes: Optional[str] = None
    label: str = field(default="", compare=False)

    @property
    def is_ranked(self) -> bool:
        return self.role is not SequenceRole.ALTERNATE


@dataclass(frozen=True, slots=True)
class CanonicalSequence:
    """Authoritative ordered stops of one direction of one route.

    Ranked entries (REQUIRED, LOOP_ANCHOR) open slots numbered in
    authoring order; ALTERNATE entries resolve to the slot of the entry
    they substitute.
    """

    direction: Direction
    entries: tuple[SequenceEntry, ...]
    _slots: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))
        slots: dict[str, int] = {}
        next_slot = 0
        for entry in self.entries:
            if entry.is_ranked:
                slots.setdefault(entry.stop_id, next_slot)
                next_slot += 1
        for entry in self.entries:
            if entry.is_ranked or entry.substitutes not in slots:
                continue
            slots.setdefault(entry.stop_id, slots[entry.substitutes])
        object.__setattr__(self, "_slots", MappingProxyType(slots))

    @property
    def ranked_stop_ids(self) -> tuple[str, ...]:
        """Stop ids of the ranked entries, in slot order."""
        return tuple(e.stop_id for e in self.entries if e.is_ranked)

    @property
    def loop_anchor_ids(self) -> frozenset[str]:
        return frozenset(
            e.stop_id for e in self.entries if e.role is SequenceRole.LOOP_ANCHOR
        )

    def slot_of(self, stop_id: str) -> Optional[int]:
        """Return the canonical slot of a stop, or None if it is unknown."""
        return self._slots.get(stop_id)

    def role_of(self, stop_id: str) -> Optional[SequenceRole]:
        for entry in self.entries:
            if entry.stop_id == stop_id:
                return entry.role
        return None

    def __contains__(self, stop_id: object) -> bool:
        return stop_id in self._slots


@dataclass(frozen=True, slots=True)
class DirectionSpec:
    """The two canonical sequences of a registry-governed route."""

    route_id: int
    sequences: tuple[CanonicalSequence, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "sequences", tuple(self.sequences))

    @property
    def directions(self) -> tuple[Direction, ...]:
        return tuple(s.direction for s in self.sequences)

    def sequence_for(self, direction: Direction) -> Optional[CanonicalSequence]:
        for sequence in self.sequences:
            if sequence.direction is direction:
                return sequence
        return None


@dataclass(frozen=True, slots=True)
class OutputTrip:
    """A direction-labelled trip produced by the core.

    Attributes:
        direction: Assigned direction label
        stop_times: Stop-times in final order
        route_id: Originating route
        trip_id: Originating feed trip
        from_registry: True when the route is governed by the registry
        segment: Half index (0 or 1) when a feed trip was split in two
    """

    direction: Direction
    stop_times: tuple[StopTime, ...]
    route_id: int
    trip_id: str
    from_registry: bool = False
    segment: int = 0

    @property
    def stop_ids(self) -> tuple[str, ...]:
        return tuple(st.stop_id for st in self.stop_times)
