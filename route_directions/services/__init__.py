"""Services layer - Application orchestration.

Available services:
- DirectionClassifier: Heuristic cascade for routes outside the registry
- StopOrderComparator: Canonical ordering of a trip's stop-times
- TripSplitter: Direction and stop order for one feed trip
- DirectionBatchService: All-or-nothing run over a feed snapshot
"""

from .batch_service import BatchResult, DirectionBatchService
from .direction_classifier import DirectionClassifier
from .stop_order import StopOrderComparator, compare_stop_times
from .trip_splitter import TripSplitter, alignment_score

__all__ = [
    "DirectionClassifier",
    "StopOrderComparator",
    "compare_stop_times",
    "TripSplitter",
    "alignment_score",
    "DirectionBatchService",
    "BatchResult",
]
