"""A single category of items within a Clustering."""

from typing import AbstractSet, Generic, Hashable, Iterator, Set, TypeVar

C = TypeVar("C", bound=Hashable)
M = TypeVar("M", bound=Hashable)


class Cluster(Generic[C, M]):
    """Groups zero or more members under one category.

    Members are usually integer ids the caller uses to look up the real
    objects, but any hashable value works.

    Attributes:
        category: Key of the cluster, unique within its Clustering.
    """

    def __init__(self, category: C, members=()):
        self.category = category
        self._members: Set[M] = set(members)

    @classmethod
    def with_member(cls, category: C, member: M) -> "Cluster[C, M]":
        """Create a cluster holding a single member."""
        return cls(category, (member,))

    @property
    def members(self) -> AbstractSet[M]:
        """Read-only view of the members."""
        return frozenset(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[M]:
        return iter(self._members)

    def __contains__(self, item) -> bool:
        return item in self._members

    def is_empty(self) -> bool:
        return not self._members

    def is_member(self, item: M) -> bool:
        return item in self._members

    def add_member(self, item: M) -> bool:
        """Add a member.

        Returns:
            True if the item was added, False if it was already present.
        """
        if item in self._members:
            return False
        self._members.add(item)
        return True

    def remove_member(self, item: M) -> bool:
        """Remove a member.

        Returns:
            True if the item was removed, False if it was not present.
        """
        if item not in self._members:
            return False
        self._members.remove(item)
        return True

    def merge(self, other: "Cluster[C, M]") -> None:
        """Move every member of other into this cluster, leaving other empty."""
        self._members.update(other._members)
        other._members.clear()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cluster):
            return NotImplemented
        return self.category == other.category and self._members == other._members

    __hash__ = None

    def __repr__(self) -> str:
        try:
            ordered = sorted(self._members)
        except TypeError:
            # Mixed member types
            ordered = sorted(self._members, key=repr)
        member_list = ",".join(repr(m) for m in ordered)
        return (
            f"Cluster(category={self.category!r}, "
            f"size={len(self._members)}, members=[{member_list}])"
        )
