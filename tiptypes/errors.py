"""Exceptions raised by the type analyses."""


class SemanticError(Exception):
    """A program violates a semantic rule, such as a type error."""


class UnificationError(SemanticError):
    """Two type terms cannot be unified."""


class InternalError(Exception):
    """An analysis reached a state that should be impossible."""