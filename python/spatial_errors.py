"""
Error types raised by the spatial and graph helpers.

Hierarchy:
    SpatialError
    ├── ParseError           (Point/Vector from a malformed string or key)
    ├── OutOfBoundsError     (Grid.set with strict_bounds outside the grid)
    ├── ParentNotFoundError  (Graph.add with an unknown parent)
    └── CycleError           (Graph.add would break the DAG invariant)

Each error also derives from the closest builtin so callers can catch
ValueError / IndexError / LookupError where that reads better.
"""

from __future__ import annotations

from typing import Any


class SpatialError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        context_str = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} | Context: {context_str}"


class ParseError(SpatialError, ValueError):
    """A string or key could not be converted to a Point or Vector."""


class OutOfBoundsError(SpatialError, IndexError):
    """A strict write landed outside the current grid bounds."""


class ParentNotFoundError(SpatialError, LookupError):
    """The parent passed to Graph.add is not registered in that graph."""


class CycleError(SpatialError, ValueError):
    """Adding the requested edge would make a node its own ancestor."""
