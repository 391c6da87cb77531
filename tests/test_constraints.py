import pytest

from tiptypes.constraints import ConstraintCollector, ConstraintHandler, TypeConstraint
from tiptypes.types import TipInt, TipRef, TipVar


class Node:
    def __init__(self, text, line=1, column=1):
        self.text = text
        self.line = line
        self.column = column

    def __str__(self):
        return self.text


def test_collector_keeps_order():
    a, b = Node("a"), Node("b")
    collector = ConstraintCollector()
    collector.handle(TipVar(a), TipInt())
    collector.handle(TipVar(b), TipRef(TipVar(a)))
    assert [c.lhs for c in collector.collected] == [TipVar(a), TipVar(b)]
    assert [c.rhs for c in collector.collected] == [TipInt(), TipRef(TipVar(a))]


def test_collector_starts_empty():
    assert ConstraintCollector().collected == []


def test_constraints_compare_left_hand_sides_only():
    a = Node("a")
    first = TypeConstraint(TipVar(a), TipInt())
    second = TypeConstraint(TipVar(a), TipRef(TipInt()))
    assert first == second
    assert TypeConstraint(TipInt(), TipInt()) != first


def test_constraint_str():
    constraint = TypeConstraint(TipInt(), TipRef(TipInt()))
    assert str(constraint) == "int = \u2b61int"


def test_handler_is_abstract():
    with pytest.raises(TypeError):
        ConstraintHandler()