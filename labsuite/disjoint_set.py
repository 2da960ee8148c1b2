"""Union-find over the integers 0..n-1 with path compression and union by size."""

from __future__ import annotations


class DisjointSet:
    """A partition of ``range(n)`` into disjoint sets."""

    def __init__(self, n: int) -> None:
        if n < 0:
            raise ValueError("size must not be negative")
        self._parent = list(range(n))
        self._rank = [1] * n

    def __len__(self) -> int:
        return len(self._parent)

    def _check(self, x: int) -> None:
        if not 0 <= x < len(self._parent):
            raise IndexError(f"element out of range: {x}")

    def find(self, x: int) -> int:
        """Return the root of the set holding ``x``."""
        self._check(x)
        root = x
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[x] != root:
            self._parent[x], x = root, self._parent[x]
        return root

    def is_in_same_set(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)

    def merge(self, x: int, y: int) -> int:
        """Join the sets of ``x`` and ``y`` and return the resulting root."""
        x_root = self.find(x)
        y_root = self.find(y)
        if x_root == y_root:
            return x_root
        if self._rank[x_root] < self._rank[y_root]:
            self._parent[x_root] = y_root
            self._rank[y_root] += self._rank[x_root]
            return y_root
        self._parent[y_root] = x_root
        self._rank[x_root] += self._rank[y_root]
        return x_root