"""clusterphobia: single-linkage distance estimation and clustering quality.

- SingleLinkage: find the distance that separates clusters
- Clustering / Cluster: partition of items into clusters
- BCubed: score a Clustering against a gold standard
"""

from .config import LinkageConfig
from .core import (
    Point,
    AdjacentPairDistance,
    LinkageResult,
    BCubed,
    compute_precision,
    compute_recall,
    tally_squares,
)
from .clustering import (
    Cluster,
    Clustering,
    Added,
    AlreadyClustered,
    integer_clustering,
    from_delimited_string,
)
from .linkage import SingleLinkage, hilbert_sort
from .exceptions import (
    ClusterphobiaError,
    DegenerateLinkageError,
    ClusteringError,
    UnknownCategoryError,
    CategoryExhaustedError,
    InconsistentClusteringError,
    DelimitedFormatError,
    MismatchedUniverseError,
)

__version__ = "0.1.0"

__all__ = [
    "LinkageConfig",
    "Point",
    "AdjacentPairDistance",
    "LinkageResult",
    "BCubed",
    "compute_precision",
    "compute_recall",
    "tally_squares",
    "Cluster",
    "Clustering",
    "Added",
    "AlreadyClustered",
    "integer_clustering",
    "from_delimited_string",
    "SingleLinkage",
    "hilbert_sort",
    "ClusterphobiaError",
    "DegenerateLinkageError",
    "ClusteringError",
    "UnknownCategoryError",
    "CategoryExhaustedError",
    "InconsistentClusteringError",
    "DelimitedFormatError",
    "MismatchedUniverseError",
]
