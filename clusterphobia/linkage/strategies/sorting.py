"""
Exact linkage search: fully sort the distances and look for the elbow.

O(N log N). More accurate than binning.
"""

import logging
from typing import Sequence

from .base import BaseLinkageStrategy
from ..growth import DistanceGrowthStats
from ...core.types import AdjacentPairDistance

logger = logging.getLogger(__name__)


class SortingStrategy(BaseLinkageStrategy):
    """Sort every pair distance, then scan for the sharpest growth.

    Each sorted distance is compared with the one noise_skip_by + 1
    positions earlier, which smooths out single noisy steps. The scan stops
    short of the top minimum_cluster_count distances so the threshold always
    leaves that many clusters apart. The threshold is the distance just
    before the jump, matching what the binning search returns.
    """

    name = "sorting"

    def find_threshold(self, distances: Sequence[AdjacentPairDistance], num_points: int) -> int:
        # The caller still needs the curve-ordered list, so sort a copy.
        sorted_distances = [d.square_distance for d in sorted(distances)]
        skip = self.config.noise_skip_by
        lowest_index = self.config.lowest_index_for_checking_growth_ratio

        last_index = len(sorted_distances) - 1
        high = max(min(num_points - self.config.minimum_cluster_count, last_index), 0)
        low = min(lowest_index, high)

        stats = DistanceGrowthStats()
        for i in range(1 + skip + lowest_index, high):
            stats.accumulate(i, sorted_distances[i - 1 - skip], sorted_distances[i])

        index = stats.get_index_of_max_change(low, high)
        threshold = self.value_before_jump(sorted_distances, index, skip)
        logger.debug(
            "Scanned sorted distances [%d, %d) of %d; chose index %d (%s), threshold %d",
            1 + skip + lowest_index, high, len(sorted_distances), index, stats, threshold,
        )
        return threshold

    @staticmethod
    def value_before_jump(sorted_distances: Sequence[int], index: int, skip: int) -> int:
        """Value just below the biggest step among the skip + 1 steps ending at index.

        The growth scan compares each distance with the one skip + 1 places
        earlier, so the jump it reports lies somewhere in that window. The
        value before the jump is the largest distance still inside a cluster.

        Args:
            sorted_distances: Square distances in ascending order.
            index: Index reported by the growth scan.
            skip: The noise_skip_by used by the scan.

        Returns:
            sorted_distances[index] when no step in the window is positive.
        """
        value_before = sorted_distances[index]
        biggest_step = 0
        for i in range(max(index - 1 - skip, 0) + 1, index + 1):
            step = sorted_distances[i] - sorted_distances[i - 1]
            if step > biggest_step:
                biggest_step = step
                value_before = sorted_distances[i - 1]
        return value_before
