"""Copying, substitution and variable collection over type terms."""

from __future__ import annotations

from typing import Any

from .types import (
    TipAbsentField,
    TipAlpha,
    TipFunction,
    TipInt,
    TipMu,
    TipRecord,
    TipRef,
    TipType,
    TipTypeVisitor,
    TipVar,
)


class _Substituter(TipTypeVisitor):
    """Rebuilds a term bottom-up, replacing occurrences of a target variable."""

    def __init__(
        self, target: TipVar | None = None, substitution: TipType | None = None
    ) -> None:
        self._target = target
        self._substitution = substitution
        self._stack: list[TipType] = []

    @property
    def result(self) -> TipType:
        return self._stack[-1]

    def _pop(self, count: int) -> list[TipType]:
        if count == 0:
            return []
        items = self._stack[-count:]
        del self._stack[-count:]
        return items

    def _is_target(self, element: TipVar) -> bool:
        return self._target is not None and element == self._target

    def end_visit_function(self, element: TipFunction) -> None:
        args = self._pop(element.arity())
        self._stack.append(TipFunction(args[:-1], args[-1]))

    def end_visit_int(self, element: TipInt) -> None:
        self._stack.append(TipInt())

    def end_visit_mu(self, element: TipMu) -> None:
        v, t = self._pop(2)
        self._stack.append(TipMu(v, t))

    def end_visit_record(self, element: TipRecord) -> None:
        inits = self._pop(element.arity())
        self._stack.append(TipRecord(inits, element.names))

    def end_visit_absent_field(self, element: TipAbsentField) -> None:
        self._stack.append(TipAbsentField())

    def end_visit_ref(self, element: TipRef) -> None:
        (pointed_to,) = self._pop(1)
        self._stack.append(TipRef(pointed_to))

    def end_visit_var(self, element: TipVar) -> None:
        if self._is_target(element):
            self._stack.append(copy(self._substitution))
        else:
            self._stack.append(TipVar(element.node))

    def end_visit_alpha(self, element: TipAlpha) -> None:
        if self._is_target(element):
            self._stack.append(copy(self._substitution))
        else:
            self._stack.append(TipAlpha(element.node, element.name))


class _Copier(_Substituter):
    """Rebuilds a term unchanged; alphas lose their usage context."""

    def end_visit_var(self, element: TipVar) -> None:
        self._stack.append(TipVar(element.node))

    def end_visit_alpha(self, element: TipAlpha) -> None:
        self._stack.append(TipAlpha(element.node, element.name))


class _FreshAlphaCopier(_Copier):
    """Copies a term, giving every alpha the supplied usage context."""

    def __init__(self, context: Any) -> None:
        super().__init__()
        self._context = context

    def end_visit_alpha(self, element: TipAlpha) -> None:
        self._stack.append(TipAlpha(element.node, element.name, self._context))


def _plain(v: TipVar) -> TipVar:
    if isinstance(v, TipAlpha):
        return TipAlpha(v.node, v.name)
    return TipVar(v.node)


class _TypeVarCollector(TipTypeVisitor):
    def __init__(self) -> None:
        self.found: dict[TipVar, None] = {}

    def end_visit_var(self, element: TipVar) -> None:
        self.found.setdefault(TipVar(element.node), None)

    def end_visit_alpha(self, element: TipAlpha) -> None:
        self.found.setdefault(TipAlpha(element.node, element.name), None)

    def end_visit_mu(self, element: TipMu) -> None:
        self.found.pop(_plain(element.v), None)


def substitute(t: TipType, target: TipVar, substitution: TipType) -> TipType:
    """Return a copy of ``t`` with every occurrence of ``target`` replaced.

    Each replacement is a fresh copy of ``substitution``.
    """
    visitor = _Substituter(target, substitution)
    t.accept(visitor)
    return visitor.result


def copy(t: TipType) -> TipType:
    """Return a structurally equal copy of ``t``."""
    visitor = _Copier()
    t.accept(visitor)
    return visitor.result


def fresh_alpha_copy(t: TipType, context: Any) -> TipType:
    """Copy ``t``, replacing every alpha with one specific to ``context``."""
    visitor = _FreshAlphaCopier(context)
    t.accept(visitor)
    return visitor.result


def type_vars(t: TipType) -> list[TipVar]:
    """Return the type variables of ``t`` not bound by a mu, in order of appearance."""
    visitor = _TypeVarCollector()
    t.accept(visitor)
    return list(visitor.found)