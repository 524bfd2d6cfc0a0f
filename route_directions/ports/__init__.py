"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the services and the adapters
that supply direction knowledge: classification strategies and the
canonical sequence registry.
"""

from .classification import DirectionStrategyPort
from .registry import RegistryPort

__all__ = [
    "DirectionStrategyPort",
    "RegistryPort",
]
