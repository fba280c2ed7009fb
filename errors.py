class RoutingError(Exception):
    """Base exception for graph construction and route calculation failures."""


class InvalidSize(RoutingError, ValueError):
    """Raised when a graph is created with a negative vertex count."""


class OutOfRange(RoutingError, IndexError):
    """Raised when a vertex index falls outside [0, vertex_count)."""


class InvalidWeight(RoutingError, ValueError):
    """Raised when an edge weight is negative or not an integer."""


class ConfigError(RoutingError, ValueError):
    """Raised when a network instance file is malformed."""
