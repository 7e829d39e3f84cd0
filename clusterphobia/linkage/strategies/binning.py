"""
Approximate linkage search using a logarithmic bucket sort.

O(N). Distances are dropped into geometrically widening bins, sparse bins are
merged, and only the bin where the spacing between values jumps is sorted.
"""

import logging
from typing import List, Sequence

from .base import BaseLinkageStrategy
from ..bins import DistanceBin
from ...core.types import AdjacentPairDistance

logger = logging.getLogger(__name__)


class BinningStrategy(BaseLinkageStrategy):
    """Find the linkage distance from bins instead of a full sort.

    1. Bucket the distances into logarithmic bins.
    2. Merge sparse bins so each holds at least max(noise_skip_by, 5) values.
    3. Walk the bins looking for the largest increase in average spread and
       the largest spread ratio.
    4. Pick a bin from those two signals.
    5. Sort that bin alone and return the value before its largest gap.
    """

    name = "binning"

    def make_bins(self, distances: Sequence[AdjacentPairDistance]) -> List[DistanceBin]:
        """Bucket the distances and consolidate sparse bins."""
        values = [d.square_distance for d in distances]
        largest_possible = 1 << (2 * self.config.bits_per_dimension)
        top = max(largest_possible, max(values, default=0) + 1)

        bins = DistanceBin.make_bins(
            self.config.first_bin_top,
            top,
            self.config.minimum_bin_width,
            self.config.bin_multiplier,
        )
        DistanceBin.assign(values, bins)
        return DistanceBin.consolidate(bins, max(self.config.noise_skip_by, 5))

    def choose_bin(self, bins: Sequence[DistanceBin], num_points: int) -> int:
        """Index of the bin most likely to hold the jump in distance."""
        half = num_points // 2
        index_of_maximum_increase = 0
        index_of_maximum_ratio = 0
        bin_of_maximum_increase = 0
        bin_of_maximum_ratio = 0
        max_increase = 0
        max_ratio = 0.0
        cume_points = 0
        previous_spread = 0

        for i_bin, distance_bin in enumerate(bins):
            spread = distance_bin.average_spread()
            diff = spread - previous_spread
            if diff > max_increase:
                max_increase = diff
                index_of_maximum_increase = cume_points
                bin_of_maximum_increase = i_bin
            if previous_spread > 1 and cume_points >= self.config.lowest_index_for_checking_growth_ratio:
                ratio = spread / previous_spread
                if ratio > max_ratio:
                    max_ratio = ratio
                    index_of_maximum_ratio = cume_points
                    bin_of_maximum_ratio = i_bin
                    if cume_points > half and max_ratio > self.config.early_exit_ratio:
                        logger.debug("Early exit at bin %d (ratio %.2f)", i_bin, max_ratio)
                        break
            cume_points += len(distance_bin)
            previous_spread = spread

        # Agreement is unambiguous. A ratio peak in the lower half usually
        # comes from tiny values (1 -> 10) and is not trusted.
        if index_of_maximum_increase == index_of_maximum_ratio:
            chosen = bin_of_maximum_increase
        elif index_of_maximum_ratio < half:
            chosen = bin_of_maximum_increase
        else:
            chosen = bin_of_maximum_ratio

        logger.debug(
            "Bin walk over %d bins: max increase %d at bin %d, max ratio %.2f at bin %d; chose bin %d",
            len(bins), max_increase, bin_of_maximum_increase,
            max_ratio, bin_of_maximum_ratio, chosen,
        )
        return chosen

    def find_threshold(self, distances: Sequence[AdjacentPairDistance], num_points: int) -> int:
        bins = self.make_bins(distances)
        i_bin = self.choose_bin(bins, num_points)

        previous = bins[i_bin - 1] if i_bin > 0 else None
        if previous is None or len(previous) == 0:
            anchor = bins[i_bin].start
        else:
            anchor = previous.highest_value_added

        # No noise_skip_by here: the binning already smooths the curve.
        return bins[i_bin].find_square_distance_before_jump(anchor)
