"""Compiled-in canonical sequences for the TTC light rail network.

Edit this table when a route's physical pattern changes. Stop ids are
the feed's stop ids; labels are the feed's stop names.

Role conventions:
- LOOP_ANCHOR: terminal loops, shared by both directions of a route
- ALTERNATE: the other side of the street, or a detour stop served
  instead of the ranked stop it substitutes
"""

from __future__ import annotations

from functools import lru_cache

from ...domain.models import (
    CanonicalSequence,
    Direction,
    DirectionSpec,
    SequenceEntry,
    SequenceRole,
)
from .static_registry import CanonicalSequenceRegistry

REQUIRED = SequenceRole.REQUIRED
ALTERNATE = SequenceRole.ALTERNATE
LOOP_ANCHOR = SequenceRole.LOOP_ANCHOR


ROUTE_506 = DirectionSpec(
    route_id=506,
    sequences=(
        CanonicalSequence(
            Direction.EAST,
            (
                SequenceEntry("5292", LOOP_ANCHOR, label="High Park Loop"),
                SequenceEntry("8763", REQUIRED, label="Howard Park Ave at Roncesvalles Ave"),
                SequenceEntry("8999", ALTERNATE, "8763", "Howard Park Ave at Dundas St West"),
                SequenceEntry("9132", ALTERNATE, "8763", "Howard Park Ave at Roncesvalles Ave"),
                SequenceEntry("2954", ALTERNATE, "2243", "Dundas St West at Howard Park Ave"),
                SequenceEntry("2243", REQUIRED, label="Dundas St West at Sorauren Ave"),
                SequenceEntry("7506", REQUIRED, label="Dundas St West at Sterling Rd"),
                SequenceEntry("3797", REQUIRED, label="Gerrard St East at Coxwell Ave"),
                SequenceEntry("8980", REQUIRED, label="Coxwell Ave at Upper Gerrard St East"),
                SequenceEntry("14260", LOOP_ANCHOR, label="Main Street Station"),
            ),
        ),
        CanonicalSequence(
            Direction.WEST,
            (
                SequenceEntry("14260", LOOP_ANCHOR, label="Main Street Station"),
                SequenceEntry("10283", REQUIRED, label="Coxwell Ave at Lower Gerrard St East"),
                SequenceEntry("2048", REQUIRED, label="Gerrard St East at Ashdale Ave"),
                SequenceEntry("8135", REQUIRED, label="College St at Lansdowne Ave"),
                SequenceEntry("9132", REQUIRED, label="Howard Park Ave at Roncesvalles Ave"),
                SequenceEntry("5292", LOOP_ANCHOR, label="High Park Loop"),
            ),
        ),
    ),
)

ROUTE_510 = DirectionSpec(
    route_id=510,
    sequences=(
        CanonicalSequence(
            Direction.NORTH,
            (
                SequenceEntry("9227", LOOP_ANCHOR, label="Union Station"),
                SequenceEntry("6075", ALTERNATE, "478", "Spadina Ave at Queens Quay West North Side"),
                SequenceEntry("478", LOOP_ANCHOR, label="Queens Quay Loop at Lower Spadina Ave"),
                # 9243 (Bremner Blvd North Side) is optional and left out; trips
                # place it after 478.
                SequenceEntry("5275", REQUIRED, label="Spadina Ave at King St West North Side"),
                SequenceEntry("8346", REQUIRED, label="Spadina Ave at Richmond St West"),
                SequenceEntry("7582", REQUIRED, label="Spadina Ave at Queen St West North Side"),
                SequenceEntry("14339", LOOP_ANCHOR, label="Spadina Station"),
            ),
        ),
        CanonicalSequence(
            Direction.SOUTH,
            (
                SequenceEntry("14339", LOOP_ANCHOR, label="Spadina Station"),
                SequenceEntry("9203", REQUIRED, label="Spadina Ave at Queen St West South Side"),
                SequenceEntry("10089", ALTERNATE, "10138", "Charlotte St at Oxley St"),
                SequenceEntry("10138", REQUIRED, label="Spadina Ave at King St West"),
                SequenceEntry("6639", REQUIRED, label="Spadina Ave at Bremner Blvd"),
                SequenceEntry("2125", ALTERNATE, "478", "Queens Quay West at Lower Spadina Ave East Side"),
                SequenceEntry("478", LOOP_ANCHOR, label="Queens Quay Loop at Lower Spadina Ave"),
                SequenceEntry("15122", REQUIRED, label="Queens Quay W at Rees St"),
                SequenceEntry("9227", LOOP_ANCHOR, label="Union Station"),
            ),
        ),
    ),
)

# Routes whose feed only ever populates the binary direction flag.
DIRECTION_FLAG_OVERRIDES = {
    (504, 0): Direction.EAST,
    (504, 1): Direction.WEST,
}


@lru_cache(maxsize=1)
def default_registry() -> CanonicalSequenceRegistry:
    """Build the TTC light rail registry once per process."""
    return CanonicalSequenceRegistry.build(
        specs=(ROUTE_506, ROUTE_510),
        overrides=DIRECTION_FLAG_OVERRIDES,
    )
