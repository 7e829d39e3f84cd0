"""Linkage-distance estimation.

- SingleLinkage: configure and run the search
- hilbert_sort: arrange points along a Hilbert curve
- DistanceGrowthStats, DistanceBin: building blocks of the two searches
"""

from .ordering import hilbert_indices, hilbert_sort
from .growth import DistanceGrowthStats
from .bins import DistanceBin
from .strategies import (
    BaseLinkageStrategy,
    SortingStrategy,
    BinningStrategy,
    STRATEGY_REGISTRY,
    create_linkage_strategy,
)
from .single_linkage import SingleLinkage

__all__ = [
    "hilbert_indices",
    "hilbert_sort",
    "DistanceGrowthStats",
    "DistanceBin",
    "BaseLinkageStrategy",
    "SortingStrategy",
    "BinningStrategy",
    "STRATEGY_REGISTRY",
    "create_linkage_strategy",
    "SingleLinkage",
]
