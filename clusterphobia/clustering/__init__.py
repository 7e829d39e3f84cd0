"""Partition data structures.

Clustering (with its Clusters) records which items are grouped together:
- Clustering: dual-indexed partition with merge/move/remove
- Cluster: one category and its members
- Category suppliers: where fresh Cluster categories come from
"""

from .categories import (
    CategorySupplier,
    SequentialCategorySupplier,
    IteratorCategorySupplier,
    as_category_supplier,
)
from .cluster import Cluster
from .clustering import (
    Clustering,
    Placement,
    Added,
    AlreadyClustered,
    integer_clustering,
    from_delimited_string,
)

__all__ = [
    "CategorySupplier",
    "SequentialCategorySupplier",
    "IteratorCategorySupplier",
    "as_category_supplier",
    "Cluster",
    "Clustering",
    "Placement",
    "Added",
    "AlreadyClustered",
    "integer_clustering",
    "from_delimited_string",
]
