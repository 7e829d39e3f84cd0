"""
Growth statistics over an ascending sequence of square distances.

Tracks where the sequence grows the most in absolute terms, where it grows the
most in relative terms, and where both maxima were set by the same step.
"""

from dataclasses import dataclass


@dataclass
class DistanceGrowthStats:
    """Running maxima of the increase and ratio between two sorted distances.

    Attributes:
        index_of_maximum_increase: Index whose step had the largest increase.
        index_of_maximum_ratio: Index whose step had the largest ratio.
        index_of_maximum_increase_and_ratio: Last index that raised both maxima at once.
        max_increase_alone: Largest increase seen.
        max_ratio_alone: Largest ratio seen.
        max_increase_paired: Increase at index_of_maximum_increase_and_ratio.
        max_ratio_paired: Ratio at index_of_maximum_increase_and_ratio.
    """
    index_of_maximum_increase: int = 0
    index_of_maximum_ratio: int = 0
    index_of_maximum_increase_and_ratio: int = 0
    max_increase_alone: int = 0
    max_ratio_alone: float = 0.0
    max_increase_paired: int = 0
    max_ratio_paired: float = 0.0

    def accumulate(self, index: int, previous_value: int, new_value: int) -> None:
        """Record the step from previous_value to new_value at index.

        Steps starting from zero are ignored since their ratio is undefined.
        """
        if previous_value == 0:
            return
        delta = new_value - previous_value
        ratio = new_value / previous_value

        both_high = True
        if delta > self.max_increase_alone:
            self.max_increase_alone = delta
            self.index_of_maximum_increase = index
        else:
            both_high = False

        if ratio > self.max_ratio_alone:
            self.max_ratio_alone = ratio
            self.index_of_maximum_ratio = index
        else:
            both_high = False

        if both_high:
            self.index_of_maximum_increase_and_ratio = index
            self.max_increase_paired = delta
            self.max_ratio_paired = ratio

    def get_index_of_max_change(self, low: int, high: int) -> int:
        """Pick the index where the distance grew the most, leaning low when signals disagree.

        Args:
            low: Do not pick a lone increase or ratio index below this.
            high: Never return an index above this.

        Returns:
            Index into the sorted distances of the best linkage guess.
        """
        conservative = low + (high - low) * 3 // 4
        paired = self.index_of_maximum_increase_and_ratio
        if paired > high:
            return high
        if paired > conservative:
            return paired
        if self.index_of_maximum_ratio < conservative:
            return max(min(high, self.index_of_maximum_increase), low)
        if self.index_of_maximum_increase < conservative:
            return max(min(high, self.index_of_maximum_ratio), low)
        return min(high, self.index_of_maximum_increase, self.index_of_maximum_ratio)
