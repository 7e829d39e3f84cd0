"""
Settings for the linkage-distance search. Changing these values changes how
aggressively the search smooths noise, how many clusters it insists on keeping,
and which of the two algorithms (exact sort or approximate binning) runs.
"""

import math
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LinkageConfig:
    """Configuration for SingleLinkage.

    Attributes:
        bits_per_dimension: Coordinate Resolution.
               Coordinates lie in [0, 2^bits). Bounds the largest square
               distance the binning path expects (2^(2*bits)).
        need_to_sort_by_hilbert_curve: Ordering Switch.
               False = points already arrive in Hilbert curve order.
               True = find() sorts them in place first.
        minimum_cluster_count: Cluster Floor.
               The chosen distance must still leave at least this many
               clusters. None = max(10, sqrt(N)/2). Explicit values below 6
               are raised to 6.
        noise_skip_by: Smoothing Gap.
               Compare each sorted distance with the one this many positions
               (plus one) earlier. Larger = smoother but lower result. 0 is allowed.
        outlier_cluster_size: Outlier Cutoff.
               Runs of points up to this size count as outliers, not clusters.
        sort_distances_completely: Algorithm Switch.
               True = exact O(N log N) sort. False = approximate O(N) binning.
        lowest_index_for_checking_growth_ratio: Ratio Guard.
               Ratio jumps below this sorted index are not trusted (a jump
               from 2 to 10 is fivefold but meaningless). None = N/2.
        bin_multiplier: Bin Growth.
               Each bin's top is the previous top times this (min 1.001).
        first_bin_top: End of the first bin, which starts at zero.
        minimum_bin_width: No bin is narrower than this.
        early_exit_ratio: Bin Walk Cutoff.
               Stop walking bins once past N/2 points and a spread ratio
               above this has been seen.
    """

    bits_per_dimension: int
    need_to_sort_by_hilbert_curve: bool = False
    minimum_cluster_count: Optional[int] = None
    noise_skip_by: int = 5
    outlier_cluster_size: int = 10
    sort_distances_completely: bool = True
    lowest_index_for_checking_growth_ratio: Optional[int] = None

    # Binning path
    bin_multiplier: float = 1.05
    first_bin_top: int = 20
    minimum_bin_width: int = 20
    early_exit_ratio: float = 5.0

    def __post_init__(self):
        """Sanity checks to prevent invalid configurations."""
        if not 1 <= self.bits_per_dimension <= 62:
            raise ValueError("bits_per_dimension must be between 1 and 62")
        if self.minimum_cluster_count is not None and self.minimum_cluster_count < 6:
            object.__setattr__(self, "minimum_cluster_count", 6)
        if self.noise_skip_by < 0:
            raise ValueError("noise_skip_by must be >= 0")
        if self.outlier_cluster_size < 0:
            raise ValueError("outlier_cluster_size must be >= 0")
        if (self.lowest_index_for_checking_growth_ratio is not None
                and self.lowest_index_for_checking_growth_ratio < 0):
            raise ValueError("lowest_index_for_checking_growth_ratio must be >= 0")
        if self.bin_multiplier < 1.001:
            object.__setattr__(self, "bin_multiplier", 1.001)
        if self.first_bin_top < 1:
            raise ValueError("first_bin_top must be >= 1")
        if self.minimum_bin_width < 1:
            raise ValueError("minimum_bin_width must be >= 1")
        if self.early_exit_ratio <= 1.0:
            raise ValueError("early_exit_ratio must be > 1.0")

    @property
    def strategy_name(self) -> str:
        """Registry key of the algorithm selected by sort_distances_completely."""
        return "sorting" if self.sort_distances_completely else "binning"

    def resolve(self, num_points: int) -> "LinkageConfig":
        """Return a copy with the N-dependent defaults filled in.

        Args:
            num_points: Number of points that will be analyzed.
        """
        changes = {}
        if self.minimum_cluster_count is None:
            changes["minimum_cluster_count"] = max(10, int(math.sqrt(num_points) / 2.0))
        if self.lowest_index_for_checking_growth_ratio is None:
            changes["lowest_index_for_checking_growth_ratio"] = num_points // 2
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinkageConfig":
        """Create from dict, ignoring unknown keys."""
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)
