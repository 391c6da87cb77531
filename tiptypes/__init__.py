"""Type terms, unification-based type inference and a cubic control-flow solver for TIP."""

__version__ = "0.1.0"
__all__ = ["types", "errors", "substitution", "unionfind", "constraints", "unifier", "cubic"]