"""Partition of items into non-overlapping Clusters.

A Clustering keeps two indices that are always consistent with each other:
member -> category and category -> Cluster. Every query is a dict lookup.
Empty Clusters are deleted as soon as their last member leaves.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Generic, Hashable, Iterable, Iterator, Mapping, Optional, Sequence, TypeVar
from types import MappingProxyType

from .categories import CategorySupplier, SequentialCategorySupplier, as_category_supplier
from .cluster import Cluster
from ..exceptions import (
    DelimitedFormatError,
    InconsistentClusteringError,
    UnknownCategoryError,
)

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Hashable)
M = TypeVar("M", bound=Hashable)


@dataclass(frozen=True)
class Placement:
    """Outcome of placing an item into a Clustering.

    Attributes:
        category: Category the item now belongs to (Added), or the category it
            already belonged to (AlreadyClustered).
    """
    category: Hashable

    @property
    def added(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return self.added


@dataclass(frozen=True)
class Added(Placement):
    """The item was not clustered before and now is."""

    @property
    def added(self) -> bool:
        return True


@dataclass(frozen=True)
class AlreadyClustered(Placement):
    """The item was already clustered; nothing changed."""


class Clustering(Generic[C, M]):
    """Partitions items into one or more non-overlapping Clusters.

    Each item belongs to at most one Cluster. Clusters are combined with
    merge(); new categories come from the injected CategorySupplier.

    Attributes:
        category_supplier: Source of fresh categories for new Clusters.
    """

    def __init__(self, category_supplier=None):
        """Create an empty Clustering.

        Args:
            category_supplier: A CategorySupplier, an iterable of fresh
                categories, or None for integers counting up from zero.
        """
        self.category_supplier: CategorySupplier = as_category_supplier(category_supplier)
        self._member_to_category: Dict[M, C] = {}
        self._clusters: Dict[C, Cluster[C, M]] = {}

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def uncategorized(cls, items: Iterable[M], category_supplier=None) -> "Clustering[C, M]":
        """Create a Clustering with each item alone in its own Cluster."""
        clustering = cls(category_supplier)
        for item in items:
            placement = clustering.add_to_new_cluster(item)
            if not placement:
                raise ValueError(f"Item {item!r} appears more than once")
        return clustering

    @classmethod
    def from_labels(
        cls,
        labels: Iterable[Hashable],
        members: Optional[Sequence[M]] = None,
        category_supplier=None,
    ) -> "Clustering":
        """Group members that share a label into the same Cluster.

        Categories come from the supplier in order of first appearance of
        each label, so the labels themselves are not kept.

        Args:
            labels: One label per member (e.g. an array of cluster labels).
            members: Member ids; defaults to 0, 1, 2, ...
            category_supplier: Source of categories (default: integers from zero).
        """
        labels = list(labels)
        if members is None:
            members = range(len(labels))
        elif len(members) != len(labels):
            raise ValueError("labels and members must share the same length.")

        clustering = cls(category_supplier)
        label_to_category: Dict[Hashable, C] = {}
        for member, label in zip(members, labels):
            if label in label_to_category:
                placement = clustering.add_to_cluster(member, label_to_category[label])
            else:
                placement = clustering.add_to_new_cluster(member)
                label_to_category[label] = placement.category
            if not placement:
                raise ValueError(f"Member {member!r} appears more than once")
        return clustering

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #

    def add_to_new_cluster(self, item: M) -> Placement:
        """Create a new Cluster holding the given item.

        Returns:
            Added(new category) if the item was not yet clustered,
            AlreadyClustered(current category) otherwise.

        Raises:
            CategoryExhaustedError: If the supplier has no fresh categories.
        """
        if item in self._member_to_category:
            return AlreadyClustered(self._member_to_category[item])

        category = self.category_supplier.next_category()
        if category in self._clusters:
            raise InconsistentClusteringError(
                f"Category supplier returned {category!r}, which is already in use"
            )
        self._clusters[category] = Cluster.with_member(category, item)
        self._member_to_category[item] = category
        return Added(category)

    def add_to_cluster(self, item: M, category: C) -> Placement:
        """Add a not-yet-clustered item to the existing Cluster for category.

        Returns:
            Added(category) if the item was added,
            AlreadyClustered(current category) if it was already clustered.

        Raises:
            UnknownCategoryError: If there is no Cluster for category.
        """
        if item in self._member_to_category:
            return AlreadyClustered(self._member_to_category[item])

        cluster = self._clusters.get(category)
        if cluster is None:
            raise UnknownCategoryError(category)
        cluster.add_member(item)
        self._member_to_category[item] = category
        return Added(category)

    def merge(self, item1: M, item2: M) -> bool:
        """Merge the Cluster holding item1 with the Cluster holding item2.

        The merge is transitive: everything grouped with item2 ends up grouped
        with item1.

        1. Already together: nothing changes.
        2. Both clustered: all members of item2's Cluster move to item1's
           Cluster and item2's Cluster is deleted.
        3. Only one clustered: the other item joins its Cluster.
        4. Neither clustered: a new Cluster holds both.

        Returns:
            False if the items were already together, True otherwise.
        """
        category1 = self._member_to_category.get(item1)
        category2 = self._member_to_category.get(item2)
        in1 = item1 in self._member_to_category
        in2 = item2 in self._member_to_category

        if in1 and in2:
            if category1 == category2:
                return False
            cluster1 = self._require_cluster(category1)
            cluster2 = self._require_cluster(category2)
            for member in cluster2:
                self._member_to_category[member] = category1
            cluster1.merge(cluster2)
            del self._clusters[category2]
        elif in1:
            self.add_to_cluster(item2, category1)
        elif in2:
            self.add_to_cluster(item1, category2)
        else:
            new_category = self.add_to_new_cluster(item1).category
            if item2 != item1:
                self.add_to_cluster(item2, new_category)
        return True

    def remove_item(self, item: M) -> bool:
        """Remove an item, deleting its Cluster if it was the last member.

        Returns:
            True if the item was removed, False if it was not clustered.
        """
        if item not in self._member_to_category:
            return False
        category = self._member_to_category.pop(item)
        cluster = self._require_cluster(category)
        if not cluster.remove_member(item):
            raise InconsistentClusteringError(
                f"Member {item!r} indexed under {category!r} but missing from its Cluster"
            )
        if cluster.is_empty():
            del self._clusters[category]
        return True

    def move_item(self, item: M, new_category: C) -> bool:
        """Move a single item to a different, existing category.

        Unlike merge, only the item moves; whatever it was grouped with stays.

        1. new_category does not exist: nothing changes, return False.
        2. Item not clustered: add it to new_category, return True.
        3. Item already in new_category: nothing changes, return False.
        4. Otherwise remove it from its Cluster (deleting that Cluster if now
           empty) and add it to new_category, return True.
        """
        if new_category not in self._clusters:
            return False
        if item in self._member_to_category:
            if self._member_to_category[item] == new_category:
                return False
            self.remove_item(item)
        self.add_to_cluster(item, new_category)
        return True

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def contains_item(self, item: M) -> bool:
        return item in self._member_to_category

    def contains_category(self, category: C) -> bool:
        return category in self._clusters

    def get_category(self, item: M) -> Optional[C]:
        """Category of the Cluster holding item, or None if it is not clustered."""
        return self._member_to_category.get(item)

    def get_cluster(self, category: C) -> Optional[Cluster[C, M]]:
        """Cluster for category, or None if there is none."""
        return self._clusters.get(category)

    @property
    def clusters(self) -> Mapping[C, Cluster[C, M]]:
        """Read-only mapping of category -> Cluster."""
        return MappingProxyType(self._clusters)

    def are_together(self, item1: M, item2: M) -> bool:
        """True if both items are clustered and share a Cluster."""
        if item1 not in self._member_to_category or item2 not in self._member_to_category:
            return False
        return self._member_to_category[item1] == self._member_to_category[item2]

    def cluster_count(self) -> int:
        """Number of Clusters the items are partitioned into."""
        return len(self._clusters)

    def member_count(self) -> int:
        """Number of members across all Clusters."""
        return len(self._member_to_category)

    def __len__(self) -> int:
        return self.member_count()

    def __contains__(self, item) -> bool:
        return item in self._member_to_category

    def __iter__(self) -> Iterator[Cluster[C, M]]:
        return iter(self._clusters.values())

    def _require_cluster(self, category: C) -> Cluster[C, M]:
        cluster = self._clusters.get(category)
        if cluster is None:
            raise InconsistentClusteringError(
                f"Member index refers to category {category!r}, which has no Cluster"
            )
        return cluster

    # ------------------------------------------------------------------ #
    # Text form
    # ------------------------------------------------------------------ #

    def to_delimited_string(self) -> str:
        """Serialize as members joined by ',' within clusters and ';' between them.

        Clusters are ordered by their smallest member and members ascend, so
        equal partitions serialize identically whatever their categories.
        """
        groups = sorted(sorted(cluster.members) for cluster in self._clusters.values())
        return ";".join(",".join(str(m) for m in group) for group in groups)

    def __repr__(self) -> str:
        return (
            f"Clustering(members={self.member_count()}, "
            f"clusters={self.cluster_count()})"
        )


def integer_clustering() -> Clustering[int, int]:
    """Empty Clustering whose categories are integers counting up from zero.

    Integer members usually index into a list or dict held by the caller.
    """
    return Clustering(SequentialCategorySupplier())


def from_delimited_string(clustering_string: str) -> Clustering[int, int]:
    """Parse a Clustering of non-negative integers.

    Commas separate members within a cluster and semicolons separate
    clusters. Categories are numbered from zero in order of appearance; the
    text carries member ids only.

    >>> clustering = from_delimited_string("1,2,3;4,5,6;7,8,9;10")
    >>> clustering.cluster_count(), clustering.member_count()
    (4, 10)

    Raises:
        DelimitedFormatError: On an empty segment, a token that is not a
            non-negative integer, or a member listed twice.
    """
    clustering = integer_clustering()
    for cluster_index, cluster_string in enumerate(clustering_string.split(";")):
        category = None
        for member_string in cluster_string.split(","):
            token = member_string.strip()
            if not (token.isascii() and token.isdigit()):
                raise DelimitedFormatError(
                    f"Cluster {cluster_index}: {member_string!r} is not a non-negative integer"
                )
            member = int(token)
            if category is None:
                placement = clustering.add_to_new_cluster(member)
                category = placement.category
            else:
                placement = clustering.add_to_cluster(member, category)
            if not placement:
                raise DelimitedFormatError(
                    f"Member {member} listed more than once "
                    f"(already in cluster {placement.category})"
                )
    logger.debug("Parsed %r", clustering)
    return clustering
