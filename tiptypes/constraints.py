"""Type constraints and handlers that receive them as they are generated."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .types import TipType

log = logging.getLogger(__name__)


class TypeConstraint:
    """An equation ``lhs = rhs`` between two type terms.

    Two constraints are equal when their left-hand sides are equal.
    """

    __slots__ = ("lhs", "rhs")

    def __init__(self, lhs: TipType, rhs: TipType) -> None:
        self.lhs = lhs
        self.rhs = rhs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeConstraint):
            return NotImplemented
        return self.lhs == other.lhs

    def __hash__(self) -> int:
        return hash(self.lhs)

    def __str__(self) -> str:
        return f"{self.lhs} = {self.rhs}"

    def __repr__(self) -> str:
        return f"<TypeConstraint {self}>"


class ConstraintHandler(ABC):
    """Receives type constraints as they are generated."""

    @abstractmethod
    def handle(self, t1: TipType, t2: TipType) -> None:
        """Process the constraint ``t1 = t2``."""


class ConstraintCollector(ConstraintHandler):
    """Records constraints in the order they arrive."""

    def __init__(self) -> None:
        self.collected: list[TypeConstraint] = []

    def handle(self, t1: TipType, t2: TipType) -> None:
        log.debug("Generating type constraint: %s = %s", t1, t2)
        self.collected.append(TypeConstraint(t1, t2))