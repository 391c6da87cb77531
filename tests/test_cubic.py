import pytest

from tiptypes.cubic import CubicSolver


class Fn:
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.name


@pytest.fixture
def funcs():
    return Fn("f"), Fn("g")


def test_element_of(funcs):
    f, g = funcs
    solver = CubicSolver([f, g])
    n = object()
    solver.add_element_of_constraint(f, n)
    assert solver.possible_functions_for_expr(n) == [f]


def test_unknown_node_is_empty(funcs):
    solver = CubicSolver(funcs)
    assert solver.possible_functions_for_expr(object()) == []


def test_unknown_function_raises(funcs):
    solver = CubicSolver(funcs)
    with pytest.raises(ValueError):
        solver.add_element_of_constraint(Fn("h"), object())


def test_order_follows_function_list(funcs):
    f, g = funcs
    solver = CubicSolver([f, g])
    n = object()
    solver.add_element_of_constraint(g, n)
    solver.add_element_of_constraint(f, n)
    assert solver.possible_functions_for_expr(n) == [f, g]


def test_subset_propagates_either_order(funcs):
    f, g = funcs
    solver = CubicSolver([f, g])
    a, b, c, d = object(), object(), object(), object()
    solver.add_element_of_constraint(f, a)
    solver.add_subseteq_constraint(a, b)
    solver.add_subseteq_constraint(c, d)
    solver.add_element_of_constraint(g, c)
    assert solver.possible_functions_for_expr(b) == [f]
    assert solver.possible_functions_for_expr(d) == [g]
    assert solver.possible_functions_for_expr(a) == [f]


def test_chain(funcs):
    f, _ = funcs
    solver = CubicSolver(funcs)
    a, b, c = object(), object(), object()
    solver.add_subseteq_constraint(a, b)
    solver.add_subseteq_constraint(b, c)
    solver.add_element_of_constraint(f, a)
    assert solver.possible_functions_for_expr(c) == [f]


def test_self_subset_is_noop(funcs):
    f, _ = funcs
    solver = CubicSolver(funcs)
    a = object()
    solver.add_subseteq_constraint(a, a)
    solver.add_element_of_constraint(f, a)
    assert solver.possible_functions_for_expr(a) == [f]


def test_cycle_collapses(funcs):
    f, g = funcs
    solver = CubicSolver([f, g])
    a, b = object(), object()
    solver.add_subseteq_constraint(a, b)
    solver.add_subseteq_constraint(b, a)
    solver.add_element_of_constraint(f, a)
    solver.add_element_of_constraint(g, b)
    assert solver.possible_functions_for_expr(a) == [f, g]
    assert solver.possible_functions_for_expr(b) == [f, g]


def test_longer_cycle(funcs):
    f, _ = funcs
    solver = CubicSolver(funcs)
    a, b, c, d = object(), object(), object(), object()
    solver.add_subseteq_constraint(a, b)
    solver.add_subseteq_constraint(b, c)
    solver.add_subseteq_constraint(c, a)
    solver.add_subseteq_constraint(c, d)
    solver.add_element_of_constraint(f, b)
    for node in (a, b, c, d):
        assert solver.possible_functions_for_expr(node) == [f]


def test_conditional_waits_for_condition(funcs):
    f, g = funcs
    solver = CubicSolver([f, g])
    within, src, dst = object(), object(), object()
    solver.add_element_of_constraint(g, src)
    solver.add_conditional_constraint(f, within, src, dst)
    assert solver.possible_functions_for_expr(dst) == []
    solver.add_element_of_constraint(f, within)
    assert solver.possible_functions_for_expr(dst) == [g]


def test_conditional_fires_immediately(funcs):
    f, g = funcs
    solver = CubicSolver([f, g])
    within, src, dst = object(), object(), object()
    solver.add_element_of_constraint(f, within)
    solver.add_element_of_constraint(g, src)
    solver.add_conditional_constraint(f, within, src, dst)
    assert solver.possible_functions_for_expr(dst) == [g]


def test_conditional_on_other_function_does_not_fire(funcs):
    f, g = funcs
    solver = CubicSolver([f, g])
    within, src, dst = object(), object(), object()
    solver.add_element_of_constraint(g, within)
    solver.add_element_of_constraint(g, src)
    solver.add_conditional_constraint(f, within, src, dst)
    assert solver.possible_functions_for_expr(dst) == []