"""Suppliers of fresh Cluster categories.

A Clustering never invents category keys itself. It asks a CategorySupplier,
which must return a value it has never returned before, or raise
CategoryExhaustedError when it has none left.
"""

from abc import ABC, abstractmethod
from typing import Hashable, Iterable, Iterator, Optional

from ..exceptions import CategoryExhaustedError


class CategorySupplier(ABC):
    """Base interface for producing never-before-seen category keys."""

    @abstractmethod
    def next_category(self) -> Hashable:
        """Return a fresh category.

        Raises:
            CategoryExhaustedError: If no new categories remain.
        """
        pass


class SequentialCategorySupplier(CategorySupplier):
    """Auto-incrementing integer categories: start, start + 1, ...

    Attributes:
        start: First category handed out.
        stop: Exclusive upper limit, or None for no limit.
    """

    def __init__(self, start: int = 0, stop: Optional[int] = None):
        if stop is not None and stop < start:
            raise ValueError("stop must be >= start")
        self.start = start
        self.stop = stop
        self._next = start

    def next_category(self) -> int:
        if self.stop is not None and self._next >= self.stop:
            raise CategoryExhaustedError(
                f"All categories in [{self.start}, {self.stop}) have been used"
            )
        category = self._next
        self._next += 1
        return category

    def __repr__(self) -> str:
        return f"SequentialCategorySupplier(next={self._next}, stop={self.stop})"


class IteratorCategorySupplier(CategorySupplier):
    """Categories drawn from any iterable, e.g. itertools.count() or a list of labels.

    The iterable is trusted not to repeat itself.
    """

    def __init__(self, categories: Iterable[Hashable]):
        self._iterator: Iterator[Hashable] = iter(categories)

    def next_category(self) -> Hashable:
        try:
            return next(self._iterator)
        except StopIteration:
            raise CategoryExhaustedError("Category iterator ran out of new categories") from None


def as_category_supplier(source=None) -> CategorySupplier:
    """Coerce None, a CategorySupplier or an iterable into a CategorySupplier.

    Args:
        source: None for sequential integers from zero, an existing supplier,
            or an iterable of fresh categories.
    """
    if source is None:
        return SequentialCategorySupplier()
    if isinstance(source, CategorySupplier):
        return source
    if isinstance(source, range) and source.step == 1:
        return SequentialCategorySupplier(source.start, source.stop)
    if hasattr(source, "__iter__"):
        return IteratorCategorySupplier(source)
    raise TypeError(f"Cannot use {type(source).__name__} as a category supplier")
