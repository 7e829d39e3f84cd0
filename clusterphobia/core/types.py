"""Shared data types used across the codebase.

This module contains dataclasses that are used by multiple packages:
- Point: A labelled point on an integer grid
- AdjacentPairDistance: Square distance between consecutive points in curve order
- LinkageResult: Linkage distance plus predicted cluster counts
"""

import operator
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Sequence, Tuple

import numpy as np

# Largest square distance that is safe to accumulate in int64.
_INT64_SAFE_LIMIT = 2 ** 63 - 1


@dataclass(frozen=True)
class Point:
    """A point with a stable id and non-negative integer coordinates.

    Attributes:
        id: Stable identifier, independent of the point's position in any ordering.
        coordinates: One non-negative integer per dimension.
    """
    id: int
    coordinates: Tuple[int, ...]

    def __post_init__(self):
        try:
            coords = tuple(operator.index(c) for c in self.coordinates)
        except TypeError:
            raise ValueError(
                f"Point {self.id} coordinates must be integers, got {tuple(self.coordinates)}"
            ) from None
        if any(c < 0 for c in coords):
            raise ValueError(f"Point {self.id} has a negative coordinate: {coords}")
        object.__setattr__(self, "coordinates", coords)

    @property
    def dimensions(self) -> int:
        return len(self.coordinates)

    def square_distance(self, other: "Point") -> int:
        """Exact square of the Euclidean distance to another point."""
        if other.dimensions != self.dimensions:
            raise ValueError(
                f"Points {self.id} and {other.id} differ in dimensions "
                f"({self.dimensions} vs {other.dimensions})"
            )
        return sum((a - b) * (a - b) for a, b in zip(self.coordinates, other.coordinates))


def _coordinate_matrix(points: Sequence[Point]) -> np.ndarray:
    """Stack point coordinates, using int64 only when no square distance can overflow it."""
    dims = points[0].dimensions
    max_coord = max(max(p.coordinates, default=0) for p in points)
    if dims * max_coord * max_coord <= _INT64_SAFE_LIMIT:
        return np.array([p.coordinates for p in points], dtype=np.int64)
    return np.array([p.coordinates for p in points], dtype=object)


@dataclass(frozen=True, order=True)
class AdjacentPairDistance:
    """Square distance between two points adjacent in Hilbert curve order.

    Ordering (and equality) uses (square_distance, first_index, second_index)
    so that sorting is deterministic even when distances tie.

    Attributes:
        square_distance: Exact square of the distance between the two points.
        first_index: Zero-based position of the first point in curve order.
        second_index: Zero-based position of the second point in curve order.
        first_id: Id of the first point.
        second_id: Id of the second point.
    """
    square_distance: int
    first_index: int
    second_index: int
    first_id: int = field(compare=False)
    second_id: int = field(compare=False)

    @classmethod
    def between(cls, p1: Point, p2: Point, index1: int, index2: int) -> "AdjacentPairDistance":
        return cls(
            square_distance=p1.square_distance(p2),
            first_index=index1,
            second_index=index2,
            first_id=p1.id,
            second_id=p2.id,
        )

    @classmethod
    def all_pairs(cls, points: Sequence[Point]) -> List["AdjacentPairDistance"]:
        """Distances between each point and the next, in the order given.

        Args:
            points: Points already arranged in curve order.

        Returns:
            len(points) - 1 records; empty if there are fewer than two points.
        """
        if len(points) <= 1:
            return []

        coords = _coordinate_matrix(points)
        steps = np.diff(coords, axis=0)
        square_distances = (steps * steps).sum(axis=1)

        return [
            cls(
                square_distance=int(square_distances[i]),
                first_index=i,
                second_index=i + 1,
                first_id=points[i].id,
                second_id=points[i + 1].id,
            )
            for i in range(len(points) - 1)
        ]


@dataclass(frozen=True)
class LinkageResult:
    """Linkage distance plus statistics about the clustering it would produce.

    All counts are upper bounds from a single pass over points in curve order;
    a full clustering typically yields fewer clusters.

    Attributes:
        linkage_square_distance: Square of the largest distance still joining two
            points into one cluster.
        count_of_too_large_distances: Consecutive pairs farther apart than the
            linkage distance.
        large_cluster_count: Runs of linked points larger than the outlier size.
            Experiment shows this tends to be 1.5x to 3x the true cluster count.
        outlier_cluster_count: Runs of linked points no larger than the outlier size.
        outlier_count: Points that fall into outlier runs.
    """
    linkage_square_distance: int
    count_of_too_large_distances: int = 0
    large_cluster_count: int = 0
    outlier_cluster_count: int = 0
    outlier_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
