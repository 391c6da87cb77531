"""Cubic-time solver for the set constraints of control-flow analysis."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Hashable, Iterable

log = logging.getLogger(__name__)


class _SolverNode:
    """A set variable: membership bits, pending conditionals and inclusion edges."""

    __slots__ = ("bits", "conditionals", "supsets", "subsets")

    def __init__(self, count: int) -> None:
        self.bits: list[bool] = [False] * count
        self.conditionals: list[list[tuple[Any, Any]]] = [[] for _ in range(count)]
        self.supsets: set[_SolverNode] = set()
        self.subsets: set[_SolverNode] = set()


class CubicSolver:
    """Solves constraints of the forms ``f ∈ ⟦n⟧``, ``⟦a⟧ ⊆ ⟦b⟧`` and
    ``f ∈ ⟦n⟧ ⇒ ⟦a⟧ ⊆ ⟦b⟧`` over a fixed set of functions.

    Cycles of inclusion edges are collapsed into a single variable as they
    appear.
    """

    def __init__(self, functions: Iterable[Hashable]) -> None:
        self._functions: dict[Any, int] = {}
        for fn in functions:
            self._functions.setdefault(fn, len(self._functions))
        self._variables: dict[Any, _SolverNode] = {}

    def _index(self, fn: Any) -> int:
        try:
            return self._functions[fn]
        except KeyError:
            raise ValueError(f"unknown function {fn}") from None

    def _variable(self, node: Any) -> _SolverNode:
        variable = self._variables.get(node)
        if variable is None:
            variable = _SolverNode(len(self._functions))
            self._variables[node] = variable
        return variable

    def add_element_of_constraint(self, fn: Any, node: Any) -> None:
        """Record ``fn ∈ ⟦node⟧``."""
        log.debug("Generating control flow constraint: %s \u2208 \u27e6%s\u27e7", fn, node)
        index = self._index(fn)
        variable = self._variable(node)
        variable.bits[index] = True
        self._propagate(variable)

    def add_conditional_constraint(
        self, condition: Any, within: Any, source: Any, target: Any
    ) -> None:
        """Record ``condition ∈ ⟦within⟧ ⇒ ⟦source⟧ ⊆ ⟦target⟧``."""
        log.debug(
            "Generating control flow constraint: %s \u2208 \u27e6%s\u27e7 "
            "\u21d2 \u27e6%s\u27e7 \u2286 \u27e6%s\u27e7",
            condition, within, source, target,
        )
        index = self._index(condition)
        self._variable(within)
        self._variable(source)
        self._variable(target)
        self._variables[within].conditionals[index].append((source, target))
        self._propagate(self._variables[within])

    def add_subseteq_constraint(self, source: Any, target: Any) -> None:
        """Record ``⟦source⟧ ⊆ ⟦target⟧``."""
        log.debug(
            "Generating control flow constraint: \u27e6%s\u27e7 \u2286 \u27e6%s\u27e7",
            source, target,
        )
        self._variable(source)
        self._variable(target)
        self._include(source, target)

    def possible_functions_for_expr(self, node: Any) -> list[Any]:
        """Functions in the solution for ``node``, in the order they were given."""
        variable = self._variables.get(node)
        if variable is None:
            return []
        return [fn for fn, index in self._functions.items() if variable.bits[index]]

    def _include(self, source: Any, target: Any) -> None:
        lower = self._variables[source]
        upper = self._variables[target]
        if lower is upper:
            return
        lower.supsets.add(upper)
        upper.subsets.add(lower)
        self._kill_cycles_at(lower)
        self._propagate(self._variables[source])

    def _propagate(self, variable: _SolverNode) -> None:
        for index, bit in enumerate(variable.bits):
            if bit:
                pending = variable.conditionals[index]
                variable.conditionals[index] = []
                for source, target in pending:
                    self._include(source, target)
        for upper in list(variable.supsets):
            upper.bits[:] = [a or b for a, b in zip(upper.bits, variable.bits)]
            self._propagate(upper)

    def _kill_cycles_at(self, variable: _SolverNode) -> _SolverNode:
        while True:
            for upper in list(variable.supsets):
                path = self._find_path(upper, variable)
                if path:
                    variable = self._merge_path(path)
                    break
            else:
                return variable

    def _find_path(self, source: _SolverNode, target: _SolverNode) -> list[_SolverNode]:
        """Shortest path along inclusion edges, listed from ``target`` back to ``source``."""
        distances = {source: 0}
        queue: deque[_SolverNode] = deque([source])
        while queue and target not in distances:
            current = queue.popleft()
            for upper in current.supsets:
                if upper not in distances:
                    distances[upper] = distances[current] + 1
                    queue.append(upper)

        if target not in distances:
            return []

        path = [target]
        current = target
        while current is not source:
            wanted = distances[current] - 1
            current = next(n for n in current.subsets if distances.get(n) == wanted)
            path.append(current)
        return path

    def _merge_path(self, path: list[_SolverNode]) -> _SolverNode:
        while len(path) > 1:
            a = path.pop()
            b = path.pop()
            path.append(self._merge(a, b))
        return path[0]

    def _merge(self, keep: _SolverNode, gone: _SolverNode) -> _SolverNode:
        for key, variable in self._variables.items():
            if variable is gone:
                self._variables[key] = keep
        keep.bits[:] = [a or b for a, b in zip(keep.bits, gone.bits)]
        for mine, theirs in zip(keep.conditionals, gone.conditionals):
            mine.extend(theirs)
        for upper in gone.supsets:
            if upper is keep:
                continue
            upper.subsets.discard(gone)
            upper.subsets.add(keep)
            keep.supsets.add(upper)
        for lower in gone.subsets:
            if lower is keep:
                continue
            lower.supsets.discard(gone)
            lower.supsets.add(keep)
            keep.subsets.add(lower)
        keep.supsets.discard(gone)
        keep.subsets.discard(gone)
        return keep