"""Tests for the dependency injection container."""

import pytest

from route_directions.adapters.registry import default_registry
from route_directions.config import AlignmentConfig, AppConfig
from route_directions.container import Container, get_container, reset_container
from route_directions.domain.models import Direction, Route, StopTime, Trip
from route_directions.ports.registry import RegistryPort
from route_directions.services import (
    DirectionBatchService,
    DirectionClassifier,
    TripSplitter,
)


class TestContainer:
    @pytest.fixture
    def container(self):
        return Container.create_default(
            AppConfig(alignment=AlignmentConfig(min_split_segment_score=3))
        )

    def test_resolves_registry(self, container):
        assert container.resolve(RegistryPort) is default_registry()

    def test_singletons_are_shared(self, container):
        service = container.resolve(DirectionBatchService)

        assert container.resolve(DirectionBatchService) is service
        assert service.splitter is container.resolve(TripSplitter)
        assert service.splitter.classifier is container.resolve(DirectionClassifier)

    def test_alignment_config_reaches_splitter(self, container):
        assert container.resolve(TripSplitter).config.min_split_segment_score == 3

    def test_resolved_service_processes_trips(self, container):
        service = container.resolve(DirectionBatchService)
        trip = Trip(
            id="t1",
            route_id=504,
            direction_flag=1,
            stop_times=(StopTime("a", 1),),
        )

        result = service.process([(Route(id=504), [trip])])

        assert result.trips[0].direction is Direction.WEST

    def test_unregistered_type(self, container):
        with pytest.raises(KeyError):
            container.resolve(int)

    def test_non_singleton_factory(self, container):
        container.register(list, list, singleton=False)

        assert container.resolve(list) is not container.resolve(list)

    def test_register_replaces_binding(self, container):
        container.resolve(DirectionBatchService)
        container.register(DirectionBatchService, lambda: "stub")

        assert container.resolve(DirectionBatchService) == "stub"

    def test_rebinding_drops_built_singleton(self, container):
        first = container.resolve(TripSplitter)
        container.register(TripSplitter, lambda: "other")

        assert container.resolve(TripSplitter) != first

    def test_singleton_factory_that_returns_none_runs_once(self, container):
        calls = []
        container.register(int, lambda: calls.append(1))

        container.resolve(int)
        container.resolve(int)

        assert calls == [1]

    def test_clear(self, container):
        container.clear()

        with pytest.raises(KeyError):
            container.resolve(RegistryPort)


def test_global_container_is_reset():
    reset_container()
    first = get_container()

    assert get_container() is first

    reset_container()
    assert get_container() is not first
    reset_container()
