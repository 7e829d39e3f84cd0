"""Core data types and metrics shared across clusterphobia."""

from clusterphobia.core.types import Point, AdjacentPairDistance, LinkageResult
from clusterphobia.core.metrics import BCubed, compute_precision, compute_recall, tally_squares

__all__ = [
    "Point",
    "AdjacentPairDistance",
    "LinkageResult",
    "BCubed",
    "compute_precision",
    "compute_recall",
    "tally_squares",
]
