"""Dependency injection container.

Wires the registry, classifier, splitter and batch service together
without a DI framework. Each port type maps to one binding; singleton
bindings build their instance on first resolve, under a lock, so worker
threads can share a container.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class _Binding:
    factory: Callable[[], Any]
    singleton: bool
    instance: Any = None
    built: bool = False


@dataclass
class Container:
    """Port type -> binding table.

    Usage:
        container = Container.create_default()
        service = container.resolve(DirectionBatchService)

        # Tests swap a binding
        container.register(RegistryPort, lambda: CanonicalSequenceRegistry.build(specs))

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type[Any], _Binding] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind a port type to a factory, replacing any earlier binding."""
        with self._lock:
            self._bindings[port_type] = _Binding(factory=factory, singleton=singleton)

    def resolve(self, port_type: type[Any]) -> Any:
        """Return the instance bound to a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            binding = self._bindings.get(port_type)
            if binding is None:
                raise KeyError(f"Type not registered: {port_type}")
            if not binding.singleton:
                return binding.factory()
            if not binding.built:
                binding.instance = binding.factory()
                binding.built = True
            return binding.instance

    def clear(self) -> None:
        with self._lock:
            self._bindings.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.registry import default_registry
        from .ports.registry import RegistryPort
        from .services import DirectionBatchService, DirectionClassifier, TripSplitter

        config = config or get_config()
        container = cls(config=config)

        container.register(RegistryPort, default_registry)

        container.register(
            DirectionClassifier,
            lambda: DirectionClassifier.default(
                container.resolve(RegistryPort), config.classifier
            ),
        )

        container.register(
            TripSplitter,
            lambda: TripSplitter(
                registry=container.resolve(RegistryPort),
                classifier=container.resolve(DirectionClassifier),
                config=config.alignment,
            ),
        )

        container.register(
            DirectionBatchService,
            lambda: DirectionBatchService(splitter=container.resolve(TripSplitter)),
        )

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container, creating it if needed."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear()
        _default_container = None
