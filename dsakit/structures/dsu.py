"""Disjoint-set union (union-find) with path compression and union by rank."""

from collections.abc import Hashable
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


class DSU(Generic[T]):
    """Partition of elements into disjoint sets.

    Elements must be registered with :meth:`make_set` before they can be
    found or merged; unknown elements raise ``KeyError``.

    Example:
        >>> sets = DSU()
        >>> for x in (1, 2, 3):
        ...     sets.make_set(x)
        >>> sets.union(1, 2)
        >>> sets.same_set(1, 2), sets.same_set(1, 3)
        (True, False)
    """

    def __init__(self):
        self._parent: dict[T, T] = {}
        self._rank: dict[T, int] = {}

    def __len__(self) -> int:
        return len(self._parent)

    def __contains__(self, item: object) -> bool:
        return item in self._parent

    def make_set(self, x: T) -> None:
        """Register x as a singleton set. Known elements are left alone."""
        if x in self._parent:
            return
        self._parent[x] = x
        self._rank[x] = 0

    def find(self, x: T) -> T:
        """Return the representative of x's set, compressing the path to it."""
        if x not in self._parent:
            msg = f"Element not found in DSU: {x!r}"
            raise KeyError(msg)

        root = x
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[x] != root:
            self._parent[x], x = root, self._parent[x]
        return root

    def union(self, x: T, y: T) -> None:
        """Merge the sets containing x and y, attaching the shallower tree."""
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return

        if self._rank[root_x] < self._rank[root_y]:
            self._parent[root_x] = root_y
        elif self._rank[root_x] > self._rank[root_y]:
            self._parent[root_y] = root_x
        else:
            self._parent[root_y] = root_x
            self._rank[root_x] += 1

    unite = union

    def same_set(self, x: T, y: T) -> bool:
        return self.find(x) == self.find(y)

    def sets(self) -> dict[T, T]:
        """Map every element to its representative."""
        return {x: self.find(x) for x in list(self._parent)}
