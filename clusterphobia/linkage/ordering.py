"""Hilbert curve ordering of points.

Points close together in space tend to be close together along a Hilbert
curve, so the distances between consecutive points in curve order are a cheap
(linear) sample of nearest-neighbour distances.
"""

import logging
from typing import List, Sequence

from hilbertcurve.hilbertcurve import HilbertCurve

from ..core.types import Point

logger = logging.getLogger(__name__)


def hilbert_indices(points: Sequence[Point], bits_per_dimension: int) -> List[int]:
    """Position of each point along the Hilbert curve.

    Args:
        points: Points sharing the same number of dimensions, with every
            coordinate in [0, 2^bits_per_dimension).
        bits_per_dimension: Curve iterations; one bit of each coordinate per iteration.

    Returns:
        One integer per point, in input order.

    Raises:
        ValueError: If a coordinate does not fit in bits_per_dimension bits or
            the points disagree on dimensions.
    """
    if not points:
        return []

    dims = points[0].dimensions
    limit = 1 << bits_per_dimension
    for point in points:
        if point.dimensions != dims:
            raise ValueError(
                f"Point {point.id} has {point.dimensions} dimensions, expected {dims}"
            )
        if any(c >= limit for c in point.coordinates):
            raise ValueError(
                f"Point {point.id} has a coordinate that does not fit in "
                f"{bits_per_dimension} bits: {point.coordinates}"
            )

    curve = HilbertCurve(bits_per_dimension, dims)
    return [int(d) for d in curve.distances_from_points([list(p.coordinates) for p in points])]


def hilbert_sort(points: List[Point], bits_per_dimension: int) -> None:
    """Sort points in place along the Hilbert curve.

    Ties (coincident points) are broken by point id so the order is reproducible.
    """
    indices = hilbert_indices(points, bits_per_dimension)
    keyed = sorted(zip(indices, (p.id for p in points), range(len(points))))
    points[:] = [points[position] for _, _, position in keyed]
    logger.debug("Sorted %d points along a %d-bit Hilbert curve", len(points), bits_per_dimension)
