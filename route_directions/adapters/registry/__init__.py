"""Registry adapters - Implementations of the registry port.

Available implementations:
- CanonicalSequenceRegistry: Validated, read-only table of canonical sequences
- default_registry: The compiled-in TTC light rail table
"""

from .static_registry import CanonicalSequenceRegistry
from .ttc_light_rail import default_registry

__all__ = ["CanonicalSequenceRegistry", "default_registry"]
