"""Labelled point sets: file loading and synthetic generation."""

from .loader import ClusteredDataset, frame_to_dataset, load_clustered_points
from .synthetic import lattice_centers, make_clustered_points

__all__ = [
    "ClusteredDataset",
    "frame_to_dataset",
    "load_clustered_points",
    "lattice_centers",
    "make_clustered_points",
]
