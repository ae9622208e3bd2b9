"""
Error Types

Typed failures raised by the graph engine. Parsing malformed DSL text is
not an error (unmatched lines are dropped), and model mutation, detection
and export never fail, so the hierarchy is small.
"""


class ArchGraphError(Exception):
    """Base class for every failure raised by archgraph."""


class EmptyModelError(ArchGraphError):
    """Layout was requested for a model without nodes."""

    def __init__(self, message: str = "empty model"):
        super().__init__(message)


class MatrixNotBuiltError(ArchGraphError):
    """Layout was requested before build_adjacency_matrix() produced a usable matrix."""

    def __init__(self, message: str = "adjacency matrix not built"):
        super().__init__(message)


class InvalidConfigurationError(ArchGraphError, ValueError):
    """A threshold or optimizer parameter is outside its valid range."""


class MalformedInterchangeError(ArchGraphError, ValueError):
    """A deserialized model or configuration payload is missing required fields."""
