"""Tests for the batch service."""

import logging

import pytest

from route_directions.adapters.registry import default_registry
from route_directions.config import AlignmentConfig, ClassifierConfig
from route_directions.domain.errors import (
    DirectionConflictError,
    UnclassifiableTripError,
)
from route_directions.domain.models import Direction, Route, StopTime, Trip
from route_directions.services import (
    BatchResult,
    DirectionBatchService,
    DirectionClassifier,
    TripSplitter,
)

ROUTE_504 = Route(id=504, short_code="504")
ROUTE_506 = Route(id=506, short_code="506")
ROUTE_510 = Route(id=510, short_code="510")


def make_trip(route_id, trip_id, *stop_ids, heading_text="", direction_flag=None):
    return Trip(
        id=trip_id,
        route_id=route_id,
        heading_text=heading_text,
        direction_flag=direction_flag,
        stop_times=tuple(StopTime(stop_id, n) for n, stop_id in enumerate(stop_ids, 1)),
    )


@pytest.fixture
def service():
    registry = default_registry()
    splitter = TripSplitter(
        registry=registry,
        classifier=DirectionClassifier.default(registry, ClassifierConfig()),
        config=AlignmentConfig(),
    )
    return DirectionBatchService(splitter=splitter)


@pytest.fixture
def batch():
    return [
        (
            ROUTE_506,
            [
                make_trip(506, "e1", "5292", "8763", "2243", "7506", "3797", "8980", "14260"),
                make_trip(
                    506, "rt1",
                    "5292", "8763", "2243", "7506", "3797", "8980", "14260",
                    "10283", "2048", "8135", "9132", "5292",
                ),
            ],
        ),
        (
            ROUTE_504,
            [
                make_trip(504, "k0", "a", "b", direction_flag=0),
                make_trip(504, "k1", "b", "a", direction_flag=1),
            ],
        ),
    ]


class TestDirectionBatchService:
    def test_process_counts(self, service, batch):
        result = service.process(batch)

        assert isinstance(result, BatchResult)
        assert result.trips_in == 4
        assert result.trips_out == 5
        assert result.split_trips == 1
        assert result.registry_trips == 2
        assert result.classified_trips == 2

    def test_outputs_keep_input_order(self, service, batch):
        result = service.process(batch)

        assert [o.trip_id for o in result.trips] == ["e1", "rt1", "rt1", "k0", "k1"]
        assert [o.direction for o in result.trips] == [
            Direction.EAST,
            Direction.EAST,
            Direction.WEST,
            Direction.EAST,
            Direction.WEST,
        ]

    def test_accepts_generators(self, service):
        trips = (make_trip(510, f"n{i}", "9227", "478", "14339") for i in range(3))

        result = service.process(iter([(ROUTE_510, trips)]))

        assert result.trips_in == 3
        assert {o.direction for o in result.trips} == {Direction.NORTH}

    def test_empty_batch(self, service):
        result = service.process([])

        assert result == BatchResult()
        assert result.trips_out == 0

    def test_first_error_aborts_batch(self, service, caplog):
        batch = [
            (ROUTE_504, [make_trip(504, "k0", "a", direction_flag=0)]),
            (Route(id=999), [make_trip(999, "x1", "a", heading_text="Towards Downtown")]),
        ]

        with caplog.at_level(logging.ERROR):
            with pytest.raises(UnclassifiableTripError):
                service.process(batch)

        aborted = [r for r in caplog.records if r.getMessage() == "Batch aborted"]
        assert len(aborted) == 1
        assert aborted[0].route_id == 999
        assert aborted[0].error_type == "UnclassifiableTripError"

    def test_route_with_two_axes_is_a_conflict(self, service):
        route = Route(id=999)
        batch = [
            (
                route,
                [
                    make_trip(999, "a", "s1", heading_text="East - 999"),
                    make_trip(999, "b", "s1", heading_text="North - 999"),
                ],
            )
        ]

        with pytest.raises(DirectionConflictError) as exc_info:
            service.process(batch)

        assert exc_info.value.route_id == 999
        assert exc_info.value.directions == ("EAST", "NORTH")

    def test_same_direction_on_different_routes_is_fine(self, service):
        batch = [
            (Route(id=1), [make_trip(1, "a", "s1", heading_text="East")]),
            (Route(id=2), [make_trip(2, "b", "s1", heading_text="North")]),
        ]

        result = service.process(batch)

        assert result.trips_out == 2


class TestProcessSafe:
    def test_success(self, service, batch):
        result, error = service.process_safe(batch)

        assert error is None
        assert result.trips_out == 5

    def test_unclassifiable_message(self, service):
        batch = [(Route(id=999), [make_trip(999, "x1", "a", heading_text="Towards Downtown")])]

        result, error = service.process_safe(batch)

        assert result is None
        assert error.startswith("Unclassifiable trip: ")
        assert "x1" in error

    def test_ambiguous_message(self, service):
        batch = [(ROUTE_510, [make_trip(510, "short", "478")])]

        result, error = service.process_safe(batch)

        assert result is None
        assert error.startswith("Ambiguous alignment, refine the registry: ")

    def test_order_violation_message(self, service):
        trip = make_trip(506, "bad", "5292", "8763", "7506", "2243", "3797", "8980", "14260")

        result, error = service.process_safe([(ROUTE_506, [trip])])

        assert result is None
        assert error.startswith("Stop order violation: ")
        assert "2243" in error

    def test_direction_conflict_message(self, service):
        batch = [
            (
                Route(id=999),
                [
                    make_trip(999, "a", "s1", heading_text="West"),
                    make_trip(999, "b", "s1", heading_text="South"),
                ],
            )
        ]

        result, error = service.process_safe(batch)

        assert result is None
        assert error.startswith("Direction conflict: ")
