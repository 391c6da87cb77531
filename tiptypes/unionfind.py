"""Union-find over type terms, keyed by structural equality."""

from __future__ import annotations

import logging
from typing import Iterable

from .types import TipType

log = logging.getLogger(__name__)


class UnionFind:
    """Union-find forest whose elements are type terms compared by value."""

    def __init__(self, seed: Iterable[TipType] = ()) -> None:
        self._parents: dict[TipType, TipType] = {}
        self.add(seed)

    def add(self, seed: Iterable[TipType]) -> None:
        """Add terms not yet present, each as its own root."""
        for term in seed:
            self._insert(term)

    def _insert(self, t: TipType) -> TipType:
        """Return the parent of ``t``, adding ``t`` as a root if absent."""
        if t is None:
            raise ValueError("Refusing to insert None into the union-find structure.")
        parent = self._parents.get(t)
        if parent is not None:
            return parent
        log.debug("UnionFind adding %s to graph", t)
        self._parents[t] = t
        return t

    def find(self, t: TipType) -> TipType:
        """Return the representative of ``t``, adding it if unknown."""
        current = self._insert(t)
        while True:
            parent = self._insert(current)
            if parent == current:
                return current
            current = parent

    def quick_union(self, t1: TipType, t2: TipType) -> None:
        """Make the root of ``t2`` the parent of the root of ``t1``."""
        root1 = self.find(t1)
        root2 = self.find(t2)
        log.debug("UnionFind linking %s to %s", root1, root2)
        self._parents[root1] = root2

    def connected(self, t1: TipType, t2: TipType) -> bool:
        """True when both terms share a representative."""
        return self.find(t1) == self.find(t2)

    def __len__(self) -> int:
        return len(self._parents)

    def __str__(self) -> str:
        lines = sorted(f"  {child} => {parent}" for child, parent in self._parents.items())
        return "UnionFind edges {\n" + "".join(line + "\n" for line in lines) + "}"