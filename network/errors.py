"""Error taxonomy for city/road graph operations."""

from __future__ import annotations


class GraphError(Exception):
    """Base class for all road network errors."""


class InputValidationError(GraphError):
    """Raised for empty names, forbidden characters or out-of-range numbers."""


class NotFoundError(GraphError):
    """Raised when a city index or name is unknown."""


class DuplicateNameError(GraphError):
    """Raised when a city name is already held by another city."""

    def __init__(self, name: str) -> None:
        super().__init__(f"City named '{name}' already exists!")
        self.name = name


class DuplicateEdgeError(GraphError):
    """Raised when a road between two cities already exists."""


class InvalidSelfLoopError(GraphError):
    """Raised when a road would connect a city to itself."""


class NoEdgeError(GraphError):
    """Raised when budgeting a road that does not exist."""


class ParseError(GraphError):
    """One unreadable line in a persisted data file."""

    def __init__(self, file_name: str, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"{file_name}:{line_number}: {reason} ({line!r})")
        self.file_name = file_name
        self.line_number = line_number
        self.line = line
        self.reason = reason
