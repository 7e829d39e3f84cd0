"""Exceptions raised by clusterphobia.

Everything derives from ClusterphobiaError so callers can catch the whole
family at once. Where an error is also a natural ValueError or KeyError it
inherits from that builtin too.

"Already present" outcomes of Clustering operations are not errors; they are
returned as Placement values (see clusterphobia.clustering.clustering).
"""


class ClusterphobiaError(Exception):
    """Base class for all clusterphobia errors."""


class DegenerateLinkageError(ClusterphobiaError, ValueError):
    """Raised when no positive linkage distance can be derived.

    Happens for fewer than two points, for all-coincident points, or when
    estimate_cluster_counts is handed a threshold of zero.
    """


class ClusteringError(ClusterphobiaError):
    """Base class for Clustering invariant violations."""


class UnknownCategoryError(ClusteringError, KeyError):
    """Raised when an operation references a category with no Cluster."""

    def __init__(self, category):
        self.category = category
        super().__init__(f"No cluster for category {category!r}")

    def __str__(self) -> str:
        return self.args[0]


class CategoryExhaustedError(ClusteringError):
    """Raised when the category supplier cannot produce a fresh category."""


class InconsistentClusteringError(ClusteringError):
    """Raised when the member index and the cluster index disagree."""


class DelimitedFormatError(ClusterphobiaError, ValueError):
    """Raised when a delimited partition string cannot be parsed."""


class MismatchedUniverseError(ClusterphobiaError, KeyError):
    """Raised when two Clusterings being compared hold different items."""

    def __init__(self, item):
        self.item = item
        super().__init__(f"Item {item!r} from one Clustering not present in the other")

    def __str__(self) -> str:
        return self.args[0]
