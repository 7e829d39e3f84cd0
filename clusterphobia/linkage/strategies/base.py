"""Base class for linkage-distance search strategies."""

from abc import ABC, abstractmethod
from typing import Sequence

from ...config import LinkageConfig
from ...core.types import AdjacentPairDistance


class BaseLinkageStrategy(ABC):
    """Base interface for turning pair distances into a linkage threshold.

    A strategy only picks the square distance. Estimating how many clusters
    that distance produces is shared and lives in SingleLinkage.

    Attributes:
        config: Configuration with its N-dependent defaults already resolved.
    """

    name = "base"

    def __init__(self, config: LinkageConfig):
        """Initialize the strategy.

        Args:
            config: Resolved configuration (see LinkageConfig.resolve).
        """
        if config.minimum_cluster_count is None or config.lowest_index_for_checking_growth_ratio is None:
            raise ValueError("config must be resolved against the number of points first")
        self.config = config

    @abstractmethod
    def find_threshold(self, distances: Sequence[AdjacentPairDistance], num_points: int) -> int:
        """Pick the square distance separating same-cluster pairs from the rest.

        Args:
            distances: Consecutive-pair distances in curve order.
            num_points: Number of points the distances were taken from.

        Returns:
            Candidate linkage square distance (may be zero; the caller floors it).
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(config={self.config!r})"
