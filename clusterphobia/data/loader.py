"""
Load labelled point sets from CSV or Parquet files.

Each row is one point: an integer id, one integer column per dimension, and a
category column holding the true cluster the point belongs to. The categories
become a gold-standard Clustering for scoring with BCubed.

Example CSV:
    id,x,y,category
    0,664159,550946,1
    1,665845,557965,1
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd
import pyarrow.parquet as pq

from ..clustering import Clustering
from ..core.types import Point

logger = logging.getLogger(__name__)


@dataclass
class ClusteredDataset:
    """Points plus the clustering they are known to belong to.

    Attributes:
        points: Points in file order.
        gold: Clustering of point ids by their true category.
    """
    points: List[Point]
    gold: Clustering

    def __len__(self) -> int:
        return len(self.points)

    @property
    def bits_per_dimension(self) -> int:
        """Fewest bits that hold every coordinate (at least 1)."""
        largest = max((max(p.coordinates, default=0) for p in self.points), default=0)
        return max(int(largest).bit_length(), 1)


def _read_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() in (".parquet", ".pq"):
        return pq.read_table(path).to_pandas()
    return pd.read_csv(path)


def frame_to_dataset(
    df: pd.DataFrame,
    id_column: str = "id",
    category_column: str = "category",
    coordinate_columns: Optional[Sequence[str]] = None,
) -> ClusteredDataset:
    """Convert a DataFrame of labelled points into a ClusteredDataset.

    Args:
        df: One row per point.
        id_column: Column of unique integer ids.
        category_column: Column of true cluster labels (any hashable values).
        coordinate_columns: Coordinate columns in dimension order. Defaults to
            every other column, in frame order.

    Raises:
        ValueError: On missing columns, duplicate ids, non-integer or negative
            coordinates.
    """
    missing = [c for c in (id_column, category_column) if c not in df.columns]
    if coordinate_columns is None:
        coordinate_columns = [c for c in df.columns if c not in (id_column, category_column)]
    else:
        coordinate_columns = list(coordinate_columns)
        missing += [c for c in coordinate_columns if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {missing}. Available: {list(df.columns)}")
    if not coordinate_columns:
        raise ValueError("No coordinate columns found")

    for column in [id_column, *coordinate_columns]:
        if not pd.api.types.is_integer_dtype(df[column]):
            raise ValueError(f"Column '{column}' must hold integers, found {df[column].dtype}")
    if (df[coordinate_columns] < 0).any().any():
        raise ValueError("Coordinates must be non-negative")
    if df[id_column].duplicated().any():
        raise ValueError(f"Column '{id_column}' has duplicate ids")

    ids = df[id_column].tolist()
    coordinates = df[coordinate_columns].to_numpy().tolist()
    points = [Point(int(i), tuple(c)) for i, c in zip(ids, coordinates)]
    gold = Clustering.from_labels(df[category_column].tolist(), members=[int(i) for i in ids])
    return ClusteredDataset(points=points, gold=gold)


def load_clustered_points(
    path: Union[str, Path],
    id_column: str = "id",
    category_column: str = "category",
    coordinate_columns: Optional[Sequence[str]] = None,
) -> ClusteredDataset:
    """Load labelled points from a CSV or Parquet file.

    Args:
        path: File to read; .parquet/.pq files are read as Parquet, anything
            else as CSV.
        id_column: Column of unique integer ids.
        category_column: Column of true cluster labels.
        coordinate_columns: Coordinate columns; defaults to all other columns.

    Returns:
        ClusteredDataset of the points and their gold Clustering.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    df = _read_frame(path)
    dataset = frame_to_dataset(df, id_column, category_column, coordinate_columns)
    logger.info(
        "Loaded %d points in %d categories from %s",
        len(dataset.points), dataset.gold.cluster_count(), path,
    )
    return dataset
