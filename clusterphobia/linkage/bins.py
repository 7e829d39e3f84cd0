"""
Logarithmic bins for an O(N) partial sort of square distances.

Bins start narrow near zero and grow geometrically, so small distances (where
intra-cluster spacing lives) get fine resolution and large ones are lumped
together. Only the one bin judged to hold the jump is ever fully sorted.
"""

import bisect
import logging
import math
from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

logger = logging.getLogger(__name__)

_INT64_MAX = 2 ** 63 - 1


@dataclass
class DistanceBin:
    """Unsorted values falling in the half-open range [start, end).

    Attributes:
        start: Smallest value the bin accepts.
        end: Exclusive upper bound.
        lowest_value_added: Smallest value added so far (end while empty).
        highest_value_added: Largest value added so far (start while empty).
        values_added: Raw values, in the order they were added.
    """
    start: int
    end: int
    lowest_value_added: int = field(init=False)
    highest_value_added: int = field(init=False)
    values_added: List[int] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"Bin end ({self.end}) must exceed its start ({self.start})")
        self.lowest_value_added = self.end
        self.highest_value_added = self.start

    def __len__(self) -> int:
        return len(self.values_added)

    def is_in_bounds(self, value: int) -> bool:
        return self.start <= value < self.end

    def add(self, value: int) -> bool:
        """Add a value if it falls within the bounds.

        Returns:
            True if the value was added, False if it is out of bounds.
        """
        if not self.is_in_bounds(value):
            return False
        if value > self.highest_value_added:
            self.highest_value_added = value
        if value < self.lowest_value_added:
            self.lowest_value_added = value
        self.values_added.append(value)
        return True

    def merge(self, higher_bin: "DistanceBin") -> None:
        """Widen this bin to the end of higher_bin and take over its values.

        Raises:
            ValueError: If higher_bin starts before this bin ends.
        """
        if higher_bin.start < self.end:
            raise ValueError("The second bin in a merge must come after the first")
        self.end = higher_bin.end
        if len(higher_bin):
            if self.values_added:
                self.lowest_value_added = min(self.lowest_value_added, higher_bin.lowest_value_added)
                self.highest_value_added = max(self.highest_value_added, higher_bin.highest_value_added)
            else:
                self.lowest_value_added = higher_bin.lowest_value_added
                self.highest_value_added = higher_bin.highest_value_added
            self.values_added.extend(higher_bin.values_added)
        elif not self.values_added:
            self.lowest_value_added = self.end

    def extend_to(self, value: int) -> None:
        """Widen the bin so that value falls inside it."""
        if value >= self.end:
            if not self.values_added:
                self.lowest_value_added = value + 1
            self.end = value + 1

    def sort(self) -> None:
        self.values_added.sort()

    def average_spread(self) -> int:
        """Average gap between consecutive values in the bin.

        A bin with zero or one values reports its width instead.
        """
        if len(self) <= 1:
            return self.end - self.start
        return (self.highest_value_added - self.lowest_value_added) // (len(self) - 1)

    def find_square_distance_before_jump(self, highest_value_from_previous_bin: int) -> int:
        """Sort the bin and return the value just before its largest gap.

        The gap from highest_value_from_previous_bin up to the first value
        counts too, in which case that anchor value is returned.
        """
        if not self.values_added:
            return self.start
        if len(self) <= 2:
            return self.lowest_value_added

        self.sort()
        value_before_biggest_jump = highest_value_from_previous_bin
        high_delta = self.lowest_value_added - highest_value_from_previous_bin
        previous_value = highest_value_from_previous_bin
        for value in self.values_added:
            delta = value - previous_value
            if delta > high_delta:
                value_before_biggest_jump = previous_value
                high_delta = delta
            previous_value = value
        return value_before_biggest_jump

    # ------------------------------------------------------------------ #
    # Operations on a run of bins
    # ------------------------------------------------------------------ #

    @classmethod
    def make_bins(
        cls,
        first_bin_top: int,
        top_of_highest_bin: int,
        minimum_bin_width: int,
        multiplier: float,
    ) -> List["DistanceBin"]:
        """Contiguous bins covering [0, top_of_highest_bin).

        Args:
            first_bin_top: The first bin is [0, first_bin_top).
            top_of_highest_bin: Exclusive end of the last bin.
            minimum_bin_width: No bin (except possibly the last) is narrower.
            multiplier: Each bin's top is the previous top times this (min 1.001).
        """
        if first_bin_top >= top_of_highest_bin:
            return [cls(0, top_of_highest_bin)]
        multiplier = max(multiplier, 1.001)

        bins = [cls(0, first_bin_top)]
        bottom = float(first_bin_top)
        top = float(math.ceil(first_bin_top * multiplier))
        while True:
            top = max(top, bottom + minimum_bin_width)
            if top >= top_of_highest_bin:
                break
            bins.append(cls(int(bottom), int(top)))
            bottom = top
            top = top * multiplier
        bins.append(cls(int(bottom), top_of_highest_bin))
        return bins

    @staticmethod
    def find_bin(value: int, bins: Sequence["DistanceBin"]) -> int:
        """Binary search for the bin holding value; values past the end go to the top bin."""
        if value >= bins[-1].end:
            return len(bins) - 1
        starts = [b.start for b in bins]
        return max(bisect.bisect_right(starts, value) - 1, 0)

    @classmethod
    def assign(cls, values: Sequence[int], bins: Sequence["DistanceBin"]) -> None:
        """Add every value to its bin.

        Uses numpy's searchsorted when all bounds fit in int64, a per-value
        binary search otherwise.
        """
        if not len(values):
            return
        if max(bins[-1].end, max(values)) <= _INT64_MAX:
            starts = np.array([b.start for b in bins], dtype=np.int64)
            indices = np.searchsorted(starts, np.asarray(values, dtype=np.int64), side="right") - 1
            indices = np.clip(indices, 0, len(bins) - 1).tolist()
        else:
            indices = [cls.find_bin(value, bins) for value in values]

        for value, index in zip(values, indices):
            target = bins[index]
            if not target.add(value):
                # Only the top bin rejects values: they lie beyond its end.
                target.extend_to(value)
                target.add(value)

    @staticmethod
    def consolidate(bins: Sequence["DistanceBin"], minimum_size: int) -> List["DistanceBin"]:
        """Merge runs of sparse bins until each holds at least minimum_size values.

        A sparse bin absorbs the bins after it until it is big enough. A sparse
        remainder at the end is folded into the last bin that survived. The
        input bins are consumed.
        """
        consolidated: List[DistanceBin] = []
        held = None
        for distance_bin in bins:
            if held is None:
                if len(distance_bin) >= minimum_size:
                    consolidated.append(distance_bin)
                else:
                    held = distance_bin
            else:
                held.merge(distance_bin)
                if len(held) >= minimum_size:
                    consolidated.append(held)
                    held = None

        if held is not None:
            if consolidated:
                consolidated[-1].merge(held)
            else:
                consolidated.append(held)

        logger.debug("Consolidated %d bins into %d", len(bins), len(consolidated))
        return consolidated
