"""Static canonical sequence registry.

The registry is the one piece of hand-maintained domain knowledge: for
each governed route, the two canonical stop sequences with their role
annotations, plus the small table of raw direction flag overrides for
feeds that never populate heading text.

Construction validates everything and fails fast with
RegistryConstructionError, so a bad entry stops the run before any
trip is processed. After construction the registry is read-only and
can be shared freely between workers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from ...domain.errors import RegistryConstructionError
from ...domain.models import (
    CanonicalSequence,
    Direction,
    DirectionSpec,
    SequenceRole,
)

# (route id, raw direction flag) -> direction
DirectionFlagOverrides = Mapping[Tuple[int, int], Direction]


@dataclass(frozen=True, eq=False)
class CanonicalSequenceRegistry:
    """Read-only table of route id -> DirectionSpec.

    This adapter implements RegistryPort. Build it with
    `CanonicalSequenceRegistry.build(...)`; the constructor itself does
    not validate.

    Attributes:
        specs: Direction specs keyed by route id
        overrides: Direction flag overrides keyed by (route id, flag)
    """

    specs: Mapping[int, DirectionSpec] = field(
        default_factory=lambda: MappingProxyType({})
    )
    overrides: DirectionFlagOverrides = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def build(
        cls,
        specs: Iterable[DirectionSpec] = (),
        overrides: Optional[DirectionFlagOverrides] = None,
    ) -> CanonicalSequenceRegistry:
        """Validate the sequence data and freeze it into a registry.

        Args:
            specs: One DirectionSpec per governed route.
            overrides: (route id, flag) -> direction table.

        Returns:
            The validated registry.

        Raises:
            RegistryConstructionError: If any entry is invalid.
        """
        logger = logging.getLogger(__name__)

        by_route: dict[int, DirectionSpec] = {}
        for spec in specs:
            if spec.route_id in by_route:
                raise RegistryConstructionError(
                    f"Route {spec.route_id} is registered twice",
                    route_id=spec.route_id,
                )
            _validate_spec(spec)
            by_route[spec.route_id] = spec

        flag_table: dict[Tuple[int, int], Direction] = {}
        for (route_id, flag), direction in (overrides or {}).items():
            if flag not in (0, 1):
                raise RegistryConstructionError(
                    f"Route {route_id}: direction flag override must use 0 or 1,"
                    f" got {flag!r}",
                    route_id=route_id,
                )
            flag_table[(route_id, flag)] = direction

        logger.info(
            "Registry built",
            extra={"routes": sorted(by_route), "overrides": len(flag_table)},
        )
        return cls(
            specs=MappingProxyType(by_route),
            overrides=MappingProxyType(flag_table),
        )

    def lookup(self, route_id: int) -> Optional[DirectionSpec]:
        return self.specs.get(route_id)

    def direction_flag_override(
        self, route_id: int, direction_flag: Optional[int]
    ) -> Optional[Direction]:
        if direction_flag is None:
            return None
        return self.overrides.get((route_id, direction_flag))

    def route_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self.specs))

    def __contains__(self, route_id: object) -> bool:
        return route_id in self.specs

    def __len__(self) -> int:
        return len(self.specs)

    def __iter__(self) -> Iterator[DirectionSpec]:
        return iter(self.specs[route_id] for route_id in self.route_ids())


def _validate_spec(spec: DirectionSpec) -> None:
    route_id = spec.route_id

    if len(spec.sequences) != 2:
        raise RegistryConstructionError(
            f"Route {route_id} must have exactly two canonical sequences,"
            f" got {len(spec.sequences)}",
            route_id=route_id,
        )

    first, second = spec.sequences
    if first.direction is second.direction:
        raise RegistryConstructionError(
            f"Route {route_id}: both canonical sequences are {first.direction.name}",
            route_id=route_id,
        )

    for sequence in spec.sequences:
        _validate_sequence(route_id, sequence)

    # A loop anchor opens and closes the loop, so both directions must carry it.
    for sequence, other in ((first, second), (second, first)):
        for stop_id in sorted(sequence.loop_anchor_ids):
            if other.role_of(stop_id) is not SequenceRole.LOOP_ANCHOR:
                raise RegistryConstructionError(
                    f"Route {route_id}: loop anchor {stop_id} of"
                    f" {sequence.direction.name} is not a loop anchor of"
                    f" {other.direction.name}",
                    route_id=route_id,
                )


def _validate_sequence(route_id: int, sequence: CanonicalSequence) -> None:
    name = sequence.direction.name

    ranked = sequence.ranked_stop_ids
    if not ranked:
        raise RegistryConstructionError(
            f"Route {route_id} {name}: sequence has no required stop",
            route_id=route_id,
        )

    seen: set[str] = set()
    for entry in sequence.entries:
        if entry.stop_id in seen:
            raise RegistryConstructionError(
                f"Route {route_id} {name}: stop {entry.stop_id} appears twice",
                route_id=route_id,
            )
        seen.add(entry.stop_id)

        if entry.role is SequenceRole.ALTERNATE:
            if entry.substitutes not in ranked:
                raise RegistryConstructionError(
                    f"Route {route_id} {name}: alternate {entry.stop_id} must"
                    f" substitute a required stop, got {entry.substitutes!r}",
                    route_id=route_id,
                )
        elif entry.substitutes is not None:
            raise RegistryConstructionError(
                f"Route {route_id} {name}: only alternates may substitute,"
                f" {entry.stop_id} is {entry.role.name}",
                route_id=route_id,
            )
