"""
Estimate the linkage distance for single-link agglomerative clustering.

Points are arranged along a Hilbert curve and the distances between each
point and the next are examined. Pairs inside a cluster are close, pairs that
straddle two clusters are far apart, so somewhere in the sorted distances
there is a sudden jump. The distance just before that jump is the linkage
distance: the largest distance at which two points still belong together.

Two searches are available (see clusterphobia.linkage.strategies):
    - sorting: exact, O(N log N)
    - binning: approximate, O(N)
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from .ordering import hilbert_sort
from .strategies import create_linkage_strategy
from ..config import LinkageConfig
from ..core.types import AdjacentPairDistance, LinkageResult, Point
from ..exceptions import DegenerateLinkageError

logger = logging.getLogger(__name__)


class SingleLinkage:
    """Finds the single-linkage distance for a set of points.

    Instances are immutable; each with_*/without_* method returns a new
    SingleLinkage with one setting changed.

    Example:
        linkage = (SingleLinkage(len(points), bits_per_dimension=10)
                   .with_need_to_sort_by_hilbert_curve()
                   .with_noise_skip_by(9))
        result = linkage.find(points)

    Attributes:
        num_points: Expected number of points; used to fill the N-dependent
            defaults of the configuration.
        config: Settings, possibly with unresolved (None) defaults.
    """

    def __init__(self, num_points: int, bits_per_dimension: int, config: Optional[LinkageConfig] = None):
        """Initialize with default settings unless a config is given.

        Args:
            num_points: Number of points that will be analyzed.
            bits_per_dimension: Bits needed to hold the largest coordinate.
            config: Starting configuration. Its bits_per_dimension is replaced
                by the argument.
        """
        if num_points < 0:
            raise ValueError("num_points must be >= 0")
        if config is None:
            config = LinkageConfig(bits_per_dimension=bits_per_dimension)
        elif config.bits_per_dimension != bits_per_dimension:
            config = replace(config, bits_per_dimension=bits_per_dimension)
        self.num_points = num_points
        self.config = config

    @property
    def bits_per_dimension(self) -> int:
        return self.config.bits_per_dimension

    @property
    def resolved_config(self) -> LinkageConfig:
        """Configuration with every default filled in for num_points."""
        return self.config.resolve(self.num_points)

    # ------------------------------------------------------------------ #
    # Fluent configuration
    # ------------------------------------------------------------------ #

    def _with(self, **changes) -> "SingleLinkage":
        return SingleLinkage(self.num_points, self.bits_per_dimension, replace(self.config, **changes))

    def with_need_to_sort_by_hilbert_curve(self) -> "SingleLinkage":
        """find() will sort the points along the Hilbert curve first."""
        return self._with(need_to_sort_by_hilbert_curve=True)

    def without_need_to_sort_by_hilbert_curve(self) -> "SingleLinkage":
        """find() will trust that the points are already in curve order."""
        return self._with(need_to_sort_by_hilbert_curve=False)

    def with_noise_skip_by(self, noise_skip_by: int) -> "SingleLinkage":
        return self._with(noise_skip_by=noise_skip_by)

    def with_minimum_cluster_count(self, minimum_cluster_count: int) -> "SingleLinkage":
        """Values below 6 are raised to 6."""
        return self._with(minimum_cluster_count=minimum_cluster_count)

    def with_outlier_cluster_size(self, outlier_cluster_size: int) -> "SingleLinkage":
        return self._with(outlier_cluster_size=outlier_cluster_size)

    def with_sort_distances_completely(self) -> "SingleLinkage":
        """Use the exact O(N log N) search."""
        return self._with(sort_distances_completely=True)

    def without_sort_distances_completely(self) -> "SingleLinkage":
        """Use the approximate O(N) binning search."""
        return self._with(sort_distances_completely=False)

    def with_lowest_index_for_checking_growth_ratio(self, index: int) -> "SingleLinkage":
        return self._with(lowest_index_for_checking_growth_ratio=index)

    def with_early_exit_ratio(self, ratio: float) -> "SingleLinkage":
        return self._with(early_exit_ratio=ratio)

    # ------------------------------------------------------------------ #
    # Search
    # ------------------------------------------------------------------ #

    def find(self, points: List[Point]) -> LinkageResult:
        """Find the linkage distance and estimate the clusters it yields.

        Args:
            points: Points to analyze. Sorted in place along the Hilbert curve
                when need_to_sort_by_hilbert_curve is set.

        Returns:
            LinkageResult with a linkage_square_distance greater than zero and
            no larger than the largest consecutive-pair distance.

        Raises:
            DegenerateLinkageError: With fewer than two points, or when every
                point sits at the same location.
        """
        if len(points) < 2:
            raise DegenerateLinkageError(f"Need at least two points, got {len(points)}")

        config = self.resolved_config
        if config.need_to_sort_by_hilbert_curve:
            hilbert_sort(points, config.bits_per_dimension)
        distances = AdjacentPairDistance.all_pairs(points)

        strategy = create_linkage_strategy(config.strategy_name, config)
        logger.debug("Searching %d pair distances with %r", len(distances), strategy)
        threshold = strategy.find_threshold(distances, len(points))

        if threshold <= 0:
            positive = [d.square_distance for d in distances if d.square_distance > 0]
            if not positive:
                raise DegenerateLinkageError(
                    f"All {len(points)} points coincide; no positive linkage distance exists"
                )
            threshold = min(positive)
            logger.debug("Raised zero threshold to smallest positive distance %d", threshold)

        result = self.estimate_cluster_counts(distances, threshold)
        logger.info(
            "Linkage square distance %d (%s): %d large clusters, %d outlier clusters",
            result.linkage_square_distance, strategy.name,
            result.large_cluster_count, result.outlier_cluster_count,
        )
        return result

    def estimate_cluster_counts(
        self,
        hilbert_sorted_distances: Sequence[AdjacentPairDistance],
        linkage_square_distance: int,
    ) -> LinkageResult:
        """Estimate the clusters formed by one pass over points in curve order.

        Every pair farther apart than linkage_square_distance ends the current
        run of points. Runs no larger than outlier_cluster_size are outliers,
        bigger runs are large clusters. All counts are upper bounds: a full
        clustering merges some runs that this pass keeps apart.

        Args:
            hilbert_sorted_distances: Consecutive-pair distances in curve order
                (not sorted by distance).
            linkage_square_distance: Largest square distance that still links
                two points.

        Raises:
            DegenerateLinkageError: If linkage_square_distance is not positive
                or there are no distances.
        """
        if linkage_square_distance <= 0:
            raise DegenerateLinkageError("linkage_square_distance must be greater than zero")
        if not hilbert_sorted_distances:
            raise DegenerateLinkageError("Need at least one pair distance")

        outlier_size = self.config.outlier_cluster_size
        num_points = hilbert_sorted_distances[-1].second_index + 1
        too_large = 0
        large_clusters = 0
        outlier_clusters = 0
        outliers = 0

        def close_run(size: int) -> None:
            nonlocal large_clusters, outlier_clusters, outliers
            if size <= outlier_size:
                outlier_clusters += 1
                outliers += size
            else:
                large_clusters += 1

        run_start = 0
        for pair in hilbert_sorted_distances:
            if pair.square_distance > linkage_square_distance:
                close_run(pair.second_index - run_start)
                too_large += 1
                run_start = pair.second_index
        close_run(num_points - run_start)

        return LinkageResult(
            linkage_square_distance=linkage_square_distance,
            count_of_too_large_distances=too_large,
            large_cluster_count=large_clusters,
            outlier_cluster_count=outlier_clusters,
            outlier_count=outliers,
        )

    def __repr__(self) -> str:
        return f"SingleLinkage(num_points={self.num_points}, config={self.config!r})"
