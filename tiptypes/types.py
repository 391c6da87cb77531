"""Type terms used by TIP type inference, and a visitor for walking them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterable, Sequence


def _describe(node: Any) -> str:
    """Render an AST node as ``text@line:column``."""
    return f"{node}@{node.line}:{node.column}"


class TipType(ABC):
    """Base of all type terms.

    Type variables and the mu operator subclass this directly; every proper
    type is a :class:`TipCons`.
    """

    kind: ClassVar[str] = ""

    @abstractmethod
    def accept(self, visitor: TipTypeVisitor) -> None:
        """Let ``visitor`` walk this term."""

    @abstractmethod
    def __eq__(self, other: object) -> bool: ...

    @abstractmethod
    def __hash__(self) -> int: ...

    @abstractmethod
    def __str__(self) -> str: ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class TipTypeVisitor:
    """Traversal over type terms.

    ``visit`` is called before the children of a term and returns whether
    they should be walked; ``end_visit`` is called afterwards.  Both dispatch
    on the kind of term to ``visit_<kind>`` and ``end_visit_<kind>`` when a
    subclass defines them.  Without such a method, ``visit`` walks the
    children and ``end_visit`` does nothing.

    The kinds are ``alpha``, ``function``, ``int``, ``mu``, ``record``,
    ``absent_field``, ``ref`` and ``var``.
    """

    def visit(self, element: TipType) -> bool:
        handler = getattr(self, "visit_" + element.kind, None)
        return True if handler is None else bool(handler(element))

    def end_visit(self, element: TipType) -> None:
        handler = getattr(self, "end_visit_" + element.kind, None)
        if handler is not None:
            handler(element)


class TipVar(TipType):
    """A type variable standing for the type of an AST node.

    The node must provide ``line`` and ``column`` attributes; variables are
    equal when they refer to the very same node object.
    """

    kind = "var"

    def __init__(self, node: Any) -> None:
        self.node = node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TipType):
            return NotImplemented
        if not isinstance(other, TipVar) or isinstance(other, TipAlpha):
            return False
        return self.node is other.node

    def __hash__(self) -> int:
        return hash(("var", id(self.node)))

    def __str__(self) -> str:
        return f"\u27e6{_describe(self.node)}\u27e7"

    def accept(self, visitor: TipTypeVisitor) -> None:
        visitor.visit(self)
        visitor.end_visit(self)


class TipAlpha(TipVar):
    """A free type variable, optionally tied to a field name and a usage context."""

    kind = "alpha"

    def __init__(self, node: Any, name: str = "", context: Any = None) -> None:
        super().__init__(node)
        self.name = name
        self.context = context

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TipType):
            return NotImplemented
        if not isinstance(other, TipAlpha):
            return False
        return (
            self.node is other.node
            and self.context is other.context
            and self.name == other.name
        )

    def __hash__(self) -> int:
        return hash(("alpha", id(self.node), id(self.context), self.name))

    def __str__(self) -> str:
        text = "\u03b1<" + _describe(self.node)
        if self.context is not None:
            text += "{" + _describe(self.context) + "}"
        if self.name:
            text += f"[{self.name}]>"
        else:
            text += ">"
        return text

    def accept(self, visitor: TipTypeVisitor) -> None:
        visitor.end_visit(self)


class TipCons(TipType):
    """Base of proper types, which carry a list of type arguments."""

    def __init__(self, arguments: Iterable[TipType] = ()) -> None:
        self._arguments: list[TipType] = list(arguments)

    @property
    def arguments(self) -> list[TipType]:
        return self._arguments

    @arguments.setter
    def arguments(self, value: Iterable[TipType]) -> None:
        self._arguments = list(value)

    def arity(self) -> int:
        """Number of type arguments."""
        return len(self._arguments)

    def do_match(self, other: TipType) -> bool:
        """True when ``other`` is the same kind of constructor with the same arity.

        Only functions, ints, records and references can match.
        """
        for cls in (TipFunction, TipInt, TipRecord, TipRef):
            if isinstance(self, cls) and isinstance(other, cls):
                return other.arity() == self.arity()
        return False

    def _walk_arguments(self, visitor: TipTypeVisitor) -> None:
        if visitor.visit(self):
            for argument in self._arguments:
                argument.accept(visitor)
        visitor.end_visit(self)


class TipInt(TipCons):
    """The integer type."""

    kind = "int"

    def __init__(self) -> None:
        super().__init__()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TipType):
            return NotImplemented
        return isinstance(other, TipInt)

    def __hash__(self) -> int:
        return hash("int")

    def __str__(self) -> str:
        return "int"

    def accept(self, visitor: TipTypeVisitor) -> None:
        visitor.visit(self)
        visitor.end_visit(self)


class TipAbsentField(TipCons):
    """The type of a record field that is not present."""

    kind = "absent_field"

    def __init__(self) -> None:
        super().__init__()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TipType):
            return NotImplemented
        return isinstance(other, TipAbsentField)

    def __hash__(self) -> int:
        return hash("absent_field")

    def __str__(self) -> str:
        return "\u25c7"

    def accept(self, visitor: TipTypeVisitor) -> None:
        visitor.visit(self)
        visitor.end_visit(self)


class TipFunction(TipCons):
    """A function type; the return type is stored as the last argument."""

    kind = "function"

    def __init__(self, params: Sequence[TipType], ret: TipType) -> None:
        super().__init__([*params, ret])

    @property
    def params(self) -> list[TipType]:
        return self._arguments[:-1]

    @property
    def return_value(self) -> TipType:
        return self._arguments[-1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TipType):
            return NotImplemented
        if not isinstance(other, TipFunction):
            return False
        return len(self._arguments) == len(other._arguments) and all(
            a == b for a, b in zip(self._arguments, other._arguments)
        )

    def __hash__(self) -> int:
        return hash(("function", tuple(self._arguments)))

    def __str__(self) -> str:
        params = ",".join(str(p) for p in self._arguments[:-1])
        return f"({params}) -> {self._arguments[-1]}"

    def accept(self, visitor: TipTypeVisitor) -> None:
        self._walk_arguments(visitor)


class TipRef(TipCons):
    """A reference (pointer) type."""

    kind = "ref"

    def __init__(self, of: TipType) -> None:
        super().__init__([of])

    @property
    def address_of_field(self) -> TipType:
        return self._arguments[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TipType):
            return NotImplemented
        if not isinstance(other, TipRef):
            return False
        return self._arguments[0] == other.address_of_field

    def __hash__(self) -> int:
        return hash(("ref", self._arguments[0]))

    def __str__(self) -> str:
        return f"\u2b61{self._arguments[0]}"

    def accept(self, visitor: TipTypeVisitor) -> None:
        self._walk_arguments(visitor)


class TipRecord(TipCons):
    """A record type with one field type per field name.

    Equality compares only the field types, not the names.
    """

    kind = "record"

    def __init__(self, inits: Sequence[TipType], names: Sequence[str]) -> None:
        super().__init__(inits)
        self._names: tuple[str, ...] = tuple(names)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def inits(self) -> list[TipType]:
        return self._arguments

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TipType):
            return NotImplemented
        if not isinstance(other, TipRecord):
            return False
        return self.arity() == other.arity() and all(
            a == b for a, b in zip(self._arguments, other._arguments)
        )

    def __hash__(self) -> int:
        return hash(("record", tuple(self._arguments)))

    def __str__(self) -> str:
        fields = ",".join(
            f"{name}:{init}" for name, init in zip(self._names, self._arguments)
        )
        return "{" + fields + "}"

    def accept(self, visitor: TipTypeVisitor) -> None:
        self._walk_arguments(visitor)


class TipMu(TipType):
    """A recursive type ``μv.t``."""

    kind = "mu"

    def __init__(self, v: TipVar, t: TipType) -> None:
        self.v = v
        self.t = t

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TipType):
            return NotImplemented
        if not isinstance(other, TipMu):
            return False
        return self.v == other.v and self.t == other.t

    def __hash__(self) -> int:
        return hash(("mu", self.v, self.t))

    def __str__(self) -> str:
        return f"\u03bc{self.v}.{self.t}"

    def accept(self, visitor: TipTypeVisitor) -> None:
        if visitor.visit(self):
            self.v.accept(visitor)
            self.t.accept(visitor)
        visitor.end_visit(self)