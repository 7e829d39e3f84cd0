"""Shared fixtures for clusterphobia tests."""

from typing import List

import pytest

from clusterphobia.core.types import AdjacentPairDistance, Point

# Twelve clusters of twelve points laid out along the x axis.
# Neighbours inside a cluster are 30 apart (square distance 900),
# neighbouring clusters are 1000 apart (square distance 1_000_000).
CLUSTER_COUNT = 12
CLUSTER_SIZE = 12
INTRA_STEP = 30
INTER_STEP = 1000
SEPARATED_BITS = 14


def make_separated_points() -> List[Point]:
    points = []
    x = 0
    for cluster in range(CLUSTER_COUNT):
        if cluster:
            x += INTER_STEP
        for member in range(CLUSTER_SIZE):
            if member:
                x += INTRA_STEP
            points.append(Point(len(points), (x, 0)))
    return points


def make_distances(square_distances) -> List[AdjacentPairDistance]:
    """Pair records in curve order for the given consecutive square distances."""
    return [
        AdjacentPairDistance(d, i, i + 1, i, i + 1)
        for i, d in enumerate(square_distances)
    ]


@pytest.fixture
def separated_points() -> List[Point]:
    """144 points in 12 well-separated clusters, already in curve order."""
    return make_separated_points()


@pytest.fixture
def separated_csv(tmp_path):
    """The separated points written as id,x,y,category CSV."""
    path = tmp_path / "separated.csv"
    lines = ["id,x,y,category"]
    for point in make_separated_points():
        x, y = point.coordinates
        lines.append(f"{point.id},{x},{y},{point.id // CLUSTER_SIZE + 1}")
    path.write_text("\n".join(lines) + "\n")
    return path
