"""Tests for the direction classifier cascade."""

import pytest

from route_directions.adapters.classification import (
    CardinalHeadingStrategy,
    DirectionFlagOverrideStrategy,
)
from route_directions.adapters.registry import default_registry
from route_directions.config import ClassifierConfig
from route_directions.domain.errors import UnclassifiableTripError
from route_directions.domain.models import Direction, Route, Trip
from route_directions.services import DirectionClassifier


def make_trip(route_id, heading_text="", direction_flag=None, trip_id="t1"):
    return Trip(
        id=trip_id,
        route_id=route_id,
        heading_text=heading_text,
        direction_flag=direction_flag,
    )


class TestDirectionClassifier:
    @pytest.fixture
    def classifier(self):
        return DirectionClassifier.default(default_registry(), ClassifierConfig())

    @pytest.mark.parametrize(
        "heading, expected",
        [
            ("East - 504 King towards Broadview Station", Direction.EAST),
            ("West - 504 King towards Dundas West Station", Direction.WEST),
            ("North - 505 Dundas", Direction.NORTH),
            ("South", Direction.SOUTH),
            ("  EASTBOUND", Direction.EAST),
            ("southbound to Union", Direction.SOUTH),
        ],
    )
    def test_cardinal_prefix(self, classifier, heading, expected):
        route = Route(id=999)

        assert classifier.classify(route, make_trip(999, heading)) is expected

    def test_cardinal_prefix_wins_over_direction_flag(self, classifier):
        """Flag 0 maps to EAST on route 504, but the heading says West."""
        route = Route(id=504)
        trip = make_trip(504, "West - 504 King", direction_flag=0)

        assert classifier.classify(route, trip) is Direction.WEST

    @pytest.mark.parametrize("flag, expected", [(0, Direction.EAST), (1, Direction.WEST)])
    def test_direction_flag_override_for_504(self, classifier, flag, expected):
        route = Route.from_short_code("504")

        assert classifier.classify(route, make_trip(504, "", flag)) is expected

    def test_unclassifiable_trip(self, classifier):
        route = Route(id=999)
        trip = make_trip(999, "Towards Downtown", trip_id="t-42")

        with pytest.raises(UnclassifiableTripError) as exc_info:
            classifier.classify(route, trip)

        error = exc_info.value
        assert error.route_id == 999
        assert error.trip_id == "t-42"
        assert error.heading_text == "Towards Downtown"
        assert "999" in str(error) and "t-42" in str(error)

    def test_flag_without_override_entry_is_unclassifiable(self, classifier):
        with pytest.raises(UnclassifiableTripError):
            classifier.classify(Route(id=999), make_trip(999, "", direction_flag=0))

    def test_overrides_can_be_disabled(self):
        classifier = DirectionClassifier.default(
            default_registry(), ClassifierConfig(use_direction_flag_overrides=False)
        )

        assert len(classifier.strategies) == 1
        with pytest.raises(UnclassifiableTripError):
            classifier.classify(Route(id=504), make_trip(504, "", direction_flag=0))

    def test_classify_is_idempotent(self, classifier):
        route = Route(id=504)
        trip = make_trip(504, "", direction_flag=1)

        assert classifier.classify(route, trip) is classifier.classify(route, trip)

    def test_strategies_run_in_order(self):
        classifier = DirectionClassifier(
            strategies=[
                DirectionFlagOverrideStrategy(default_registry()),
                CardinalHeadingStrategy(),
            ]
        )
        trip = make_trip(504, "West - 504 King", direction_flag=0)

        assert classifier.classify(Route(id=504), trip) is Direction.EAST


def test_heading_strategy_has_no_opinion_without_cardinal_word():
    strategy = CardinalHeadingStrategy()

    assert strategy.propose(Route(id=1), make_trip(1, "Towards Downtown")) is None
    assert strategy.propose(Route(id=1), make_trip(1, "")) is None
