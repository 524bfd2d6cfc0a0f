"""Classification adapters - Implementations of DirectionStrategyPort.

Available implementations:
- CardinalHeadingStrategy: Cardinal word at the start of the heading text
- DirectionFlagOverrideStrategy: Per-route raw direction flag table
"""

from .direction_flag import DirectionFlagOverrideStrategy
from .heading import CardinalHeadingStrategy

__all__ = ["CardinalHeadingStrategy", "DirectionFlagOverrideStrategy"]
