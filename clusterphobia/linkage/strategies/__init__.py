"""Linkage-distance search strategies.

This module provides the two ways to pick a linkage distance:
    - sorting: exact, fully sorts the pair distances (default)
    - binning: approximate, logarithmic bucket sort in linear time
"""

from typing import Dict, Type

from .base import BaseLinkageStrategy
from .sorting import SortingStrategy
from .binning import BinningStrategy
from ...config import LinkageConfig

# Registry of available strategies
STRATEGY_REGISTRY: Dict[str, Type[BaseLinkageStrategy]] = {
    "sorting": SortingStrategy,
    "binning": BinningStrategy,
}


def create_linkage_strategy(strategy_type: str, config: LinkageConfig) -> BaseLinkageStrategy:
    """Factory function to create linkage strategy instances.

    Args:
        strategy_type: Name of the strategy. One of:
            - "sorting": Exact O(N log N) search
            - "binning": Approximate O(N) search
        config: Configuration resolved against the number of points.

    Returns:
        Configured strategy instance.

    Raises:
        ValueError: If strategy_type is not recognized.
    """
    if strategy_type not in STRATEGY_REGISTRY:
        available = list(STRATEGY_REGISTRY.keys())
        raise ValueError(
            f"Unknown strategy type: {strategy_type}. "
            f"Available: {available}"
        )
    return STRATEGY_REGISTRY[strategy_type](config)


__all__ = [
    "BaseLinkageStrategy",
    "SortingStrategy",
    "BinningStrategy",
    "create_linkage_strategy",
    "STRATEGY_REGISTRY",
]
