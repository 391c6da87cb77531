# tiptypes

`tiptypes` is the type-analysis core for the TIP teaching language. It has no
dependencies outside the standard library.

## What is in it

- **`tiptypes.types`** holds the type terms. `TipType` is the abstract base.
  The proper types are `TipInt`, `TipFunction`, `TipRef`, `TipRecord` and
  `TipAbsentField`, and all of them derive from `TipCons`. The type variables
  are `TipVar` and `TipAlpha`. `TipMu` is the recursive type `μv.t`.
  `TipTypeVisitor` walks a term. It calls `visit` before the children of a
  term and `end_visit` after them. Both methods dispatch to
  `visit_<kind>` / `end_visit_<kind>` if a subclass defines them. The kinds are
  `int`, `function`, `ref`, `record`, `absent_field`, `var`, `alpha` and `mu`.
- **`tiptypes.substitution`** rewrites terms:
  - `substitute(t, target, substitution)` replaces every occurrence of a variable.
  - `copy(t)` makes a structural copy.
  - `fresh_alpha_copy(t, context)` gives every alpha in the term the usage context `context`.
  - `type_vars(t)` returns the variables that no mu binds, in order of first appearance.
- **`tiptypes.unionfind`** holds `UnionFind`, a union-find forest whose
  elements are compared by value. It offers `add`, `find`, `quick_union` and
  `connected`.
- **`tiptypes.constraints`** holds three classes:
  - `TypeConstraint` is an equation `lhs = rhs`.
  - `ConstraintHandler` is the abstract receiver of constraints.
  - `ConstraintCollector` records the constraints in its `collected` list.
- **`tiptypes.unifier`** solves constraints.
  - `Unifier` offers `add`, `solve`, `unify` and `inferred`. `inferred` returns
    the closed type of a term. Variables bound to proper types are replaced by
    those types. Cyclic bindings become `TipMu`. Unbound variables become
    `TipAlpha`.
  - `ConstraintUnifier` is a handler that unifies each constraint as soon as it
    arrives.
  - The predicates `is_cons`, `is_mu`, `is_var`, `is_alpha` and `is_proper_type`
    test the kind of a term.
- **`tiptypes.errors`** holds the exceptions:
  - `SemanticError`.
  - `UnificationError`, a subclass of `SemanticError`, raised when two terms
    differ in constructor or arity.
  - `InternalError`.
- **`tiptypes.cubic`** holds `CubicSolver`, the cubic-time solver for
  control-flow set constraints over a fixed set of functions. It accepts three
  kinds of constraint:
  - `add_element_of_constraint` for `f ∈ ⟦n⟧`.
  - `add_subseteq_constraint` for `⟦a⟧ ⊆ ⟦b⟧`.
  - `add_conditional_constraint` for `f ∈ ⟦n⟧ ⇒ ⟦a⟧ ⊆ ⟦b⟧`.

  When inclusion cycles appear, the solver collapses them.
  `possible_functions_for_expr` returns the solution for a node, in the order
  in which the functions were given. If a constraint names a function that is
  not in that set, the solver raises `ValueError`.

## Nodes

Type variables stand for program nodes. A node can be any object that has
`line` and `column` attributes. Its `str()` is used when terms are printed.
Two variables are equal only if they refer to the very same node object.

## Example

```python
from tiptypes.types import TipVar, TipInt, TipFunction
from tiptypes.constraints import TypeConstraint
from tiptypes.unifier import Unifier

class Node:
    def __init__(self, text, line, column):
        self.text, self.line, self.column = text, line, column
    def __str__(self):
        return self.text

f, x = Node("f", 1, 1), Node("x", 1, 3)
unifier = Unifier([
    TypeConstraint(TipVar(f), TipFunction([TipVar(x)], TipInt())),
    TypeConstraint(TipVar(x), TipInt()),
])
unifier.solve()
print(unifier.inferred(TipVar(f)))   # (int) -> int
```

A minimal run of the control-flow solver:

```python
from tiptypes.cubic import CubicSolver

solver = CubicSolver(["inc", "dec"])
solver.add_element_of_constraint("inc", "p")
solver.add_subseteq_constraint("p", "q")
print(solver.possible_functions_for_expr("q"))   # ['inc']
```

## What it does not do

The package has no parser and no syntax tree for TIP programs. It does not
walk programs to generate constraints, build symbol tables or call graphs, and
it has no command-line tool. You create the type terms and constraints
yourself and pass them to the unifier or to the cubic solver.

## Installing and testing

```
pip install .[test]
pytest
```