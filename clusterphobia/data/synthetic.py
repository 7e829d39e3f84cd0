"""
Generate well-separated synthetic clusters on an integer grid.

Cluster centres sit on a regular lattice inside the unit cube, points are
drawn around them with sklearn's make_blobs, and the result is rescaled onto
[0, 2^bits_per_dimension). Because centres are evenly spaced, a small
cluster_std keeps the clusters clearly apart.
"""

import itertools
import logging
import math

import numpy as np
from sklearn.datasets import make_blobs

from .loader import ClusteredDataset
from ..clustering import Clustering
from ..core.types import Point

logger = logging.getLogger(__name__)


def lattice_centers(n_clusters: int, n_dimensions: int) -> np.ndarray:
    """First n_clusters cell centres of an evenly spaced lattice in [0, 1]^d."""
    per_axis = max(math.ceil(n_clusters ** (1.0 / n_dimensions) - 1e-9), 1)
    while per_axis ** n_dimensions < n_clusters:
        per_axis += 1
    axis = (np.arange(per_axis) + 0.5) / per_axis
    cells = itertools.islice(itertools.product(axis, repeat=n_dimensions), n_clusters)
    return np.array(list(cells), dtype=float)


def make_clustered_points(
    n_clusters: int,
    points_per_cluster: int,
    bits_per_dimension: int,
    n_dimensions: int = 2,
    cluster_std: float = 0.01,
    seed: int = 42,
) -> ClusteredDataset:
    """Draw labelled points around lattice centres.

    Args:
        n_clusters: Number of clusters.
        points_per_cluster: Points drawn around each centre.
        bits_per_dimension: Coordinates are rescaled onto [0, 2^bits).
        n_dimensions: Dimensions of each point.
        cluster_std: Standard deviation of each blob, in unit-cube units.
        seed: Random seed (same seed, same points).

    Returns:
        ClusteredDataset with ids 0..N-1 in shuffled order and the generating
        blob as the gold category.
    """
    if n_clusters < 1 or points_per_cluster < 1:
        raise ValueError("n_clusters and points_per_cluster must be >= 1")
    if n_dimensions < 1:
        raise ValueError("n_dimensions must be >= 1")
    if cluster_std <= 0:
        raise ValueError("cluster_std must be > 0")

    centers = lattice_centers(n_clusters, n_dimensions)
    X, y = make_blobs(
        n_samples=[points_per_cluster] * n_clusters,
        centers=centers,
        cluster_std=cluster_std,
        random_state=seed,
    )

    top = (1 << bits_per_dimension) - 1
    grid = np.clip(np.rint(X * top), 0, top).astype(np.int64)

    points = [Point(i, tuple(row)) for i, row in enumerate(grid.tolist())]
    gold = Clustering.from_labels(y.tolist())
    logger.debug(
        "Generated %d points in %d clusters (%d dims, %d bits)",
        len(points), n_clusters, n_dimensions, bits_per_dimension,
    )
    return ClusteredDataset(points=points, gold=gold)
