"""Solving type constraints by unification, and closing inferred types."""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable

from .constraints import ConstraintHandler, TypeConstraint
from .errors import InternalError, UnificationError
from .substitution import copy, substitute, type_vars
from .types import TipAlpha, TipCons, TipMu, TipType, TipVar
from .unionfind import UnionFind

log = logging.getLogger(__name__)


def is_cons(t: TipType) -> bool:
    """True for proper types built by a type constructor."""
    return isinstance(t, TipCons)


def is_mu(t: TipType) -> bool:
    """True for recursive types."""
    return isinstance(t, TipMu)


def is_var(t: TipType) -> bool:
    """True for type variables, including alphas."""
    return isinstance(t, TipVar)


def is_alpha(t: TipType) -> bool:
    """True for free type variables."""
    return isinstance(t, TipAlpha)


def is_proper_type(t: TipType) -> bool:
    """True for every term that is not a type variable."""
    return not isinstance(t, TipVar)


def _terms_of(constraints: Iterable[TypeConstraint]) -> list[TipType]:
    """Both sides of each constraint, followed by the arguments of constructors."""
    terms: list[TipType] = []
    for constraint in constraints:
        terms.extend((constraint.lhs, constraint.rhs))
        for side in (constraint.lhs, constraint.rhs):
            if isinstance(side, TipCons):
                terms.extend(side.arguments)
    return terms


class Unifier:
    """Solves type equations with a union-find structure.

    Raises :class:`UnificationError` whenever two terms cannot be unified
    because their constructors or arities differ.
    """

    def __init__(self, constraints: Iterable[TypeConstraint] = ()) -> None:
        self._constraints: list[TypeConstraint] = list(constraints)
        self._union_find = UnionFind(_terms_of(self._constraints))

    @property
    def constraints(self) -> list[TypeConstraint]:
        return list(self._constraints)

    def add(self, constraints: Iterable[TypeConstraint]) -> None:
        """Add constraints; they are unified on the next :meth:`solve`."""
        new = list(constraints)
        self._constraints.extend(new)
        self._union_find.add(_terms_of(new))

    def solve(self) -> None:
        """Unify every constraint presented so far."""
        for constraint in self._constraints:
            self.unify(constraint.lhs, constraint.rhs)

    def unify(self, t1: TipType, t2: TipType) -> None:
        """Unify two terms, raising :class:`UnificationError` on failure.

        A proper type always becomes the representative when joined with a
        variable; two proper types must match in constructor and arity, and
        their arguments are unified in turn.
        """
        log.debug("Unifying %s and %s", t1, t2)
        rep1 = self._union_find.find(t1)
        rep2 = self._union_find.find(t2)
        log.debug("Unifying with representatives %s and %s", rep1, rep2)

        if rep1 == rep2:
            return

        if is_var(rep1) and is_var(rep2):
            self._union_find.quick_union(rep1, rep2)
        elif is_var(rep1) and is_proper_type(rep2):
            self._union_find.quick_union(rep1, rep2)
        elif is_proper_type(rep1) and is_var(rep2):
            self._union_find.quick_union(rep2, rep1)
        elif is_cons(rep1) and is_cons(rep2):
            if not rep1.do_match(rep2):
                self._fail(t1, t2)
            self._union_find.quick_union(rep1, rep2)
            for a1, a2 in zip(list(rep1.arguments), list(rep2.arguments)):
                self.unify(a1, a2)
        else:
            self._fail(t1, t2)

        log.debug("Unifying representatives to %s", self._union_find.find(t1))

    def inferred(self, t: TipType) -> TipType:
        """Return the closed type of ``t`` under the current solution.

        Variables bound to proper types are replaced by them; cyclic bindings
        produce mu types and unbound variables become alphas.
        """
        return self._close(t, frozenset())

    def _close(self, t: TipType, visited: AbstractSet[TipVar]) -> TipType:
        if is_var(t):
            representative = self._union_find.find(t)
            if t not in visited and representative != t:
                visited = visited | {t}
                closed = self._close(representative, visited)
                new_var = t if is_alpha(t) else TipAlpha(t.node)
                log.debug("Close var %s using %s and closed %s", t, new_var, closed)
                if closed != new_var and new_var in type_vars(closed):
                    body = substitute(closed, t, new_var)
                    mu = TipMu(new_var, body)
                    log.debug("Close making %s to end var %s", mu, t)
                    return mu
                return closed
            alpha = TipAlpha(t.node)
            log.debug("Close making %s to end var %s", alpha, t)
            return alpha

        if is_cons(t):
            result = copy(t)
            current = list(t.arguments)
            for var in type_vars(t):
                closed_var = self._close(var, visited)
                current = [substitute(a, var, closed_var) for a in current]
            result.arguments = current
            self._union_find.add([result])
            log.debug("Close making %s to end cons %s", result, t)
            return result

        if is_mu(t):
            return TipMu(t.v, self._close(t.t, visited))

        raise InternalError("unreachable : type must be Var, Cons or Mu")

    def _fail(self, t1: TipType, t2: TipType) -> None:
        log.debug("Unifying failed with union-find %s", self._union_find)
        raise UnificationError(
            f"Type error cannot unify {t1} and {t2} (respective roots are: "
            f"{self._union_find.find(t1)} and {self._union_find.find(t2)})"
        )


class ConstraintUnifier(ConstraintHandler):
    """A constraint handler that unifies each constraint as it arrives."""

    def __init__(self) -> None:
        self.unifier = Unifier()

    def handle(self, t1: TipType, t2: TipType) -> None:
        self.unifier.unify(t1, t2)