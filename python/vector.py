"""
Direction vectors and the shared coordinate parsing used by Point and Vector.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union

from spatial_errors import ParseError

# "row,col" with optional sign on either part, e.g. "0,0", "-1,+2", "+3,-4"
POINT_PATTERN = re.compile(r"^([+-]?[0-9]+),([+-]?[0-9]+)$")


@dataclass(frozen=True)
class SpatialKey:
    """
    An interned identifier for a Point or Vector.

    Equal descriptions map to the identical object when created through
    spatial_key(). A key without a description cannot be parsed.
    """

    description: str | None = None


_INTERNED_KEYS: dict[str, SpatialKey] = {}


def spatial_key(description: str) -> SpatialKey:
    """Return the interned key for a canonical coordinate string."""
    key = _INTERNED_KEYS.get(description)
    if key is None:
        key = _INTERNED_KEYS.setdefault(description, SpatialKey(description))
    return key


def parse_coordinates(value: str | SpatialKey, kind: str) -> tuple[int, int]:
    """
    Parse a "row,col" string (or a key describing one) into integers.

    Args:
        value: Canonical string or SpatialKey
        kind: Name of the type being built, used in error messages

    Raises:
        ParseError: If the key has no description or the text does not match
    """
    if isinstance(value, SpatialKey):
        if value.description is None:
            raise ParseError("Supplied identifier has no description")
        text = value.description
    else:
        text = value

    match = POINT_PATTERN.fullmatch(text)
    if match is None:
        raise ParseError(f'Cannot convert "{text}" to {kind}')
    return int(match.group(1)), int(match.group(2))


def _signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)


CoordinateSource = Union["Vector", Mapping[str, int], str, SpatialKey]


@dataclass(frozen=True)
class Vector:
    """Immutable 2D offset (row delta, col delta)."""

    row: int
    col: int

    @classmethod
    def from_row_col(cls, coords: Mapping[str, int]) -> Vector:
        return cls(coords["row"], coords["col"])

    @classmethod
    def from_str(cls, text: str) -> Vector:
        return cls(*parse_coordinates(text, "Vector"))

    @classmethod
    def from_key(cls, key: SpatialKey) -> Vector:
        return cls(*parse_coordinates(key, "Vector"))

    @classmethod
    def of(cls, value: CoordinateSource) -> Vector:
        """Build a Vector from any of the supported input forms."""
        if isinstance(value, Vector):
            return value
        if isinstance(value, (str, SpatialKey)):
            return cls(*parse_coordinates(value, "Vector"))
        return cls.from_row_col(value)

    @property
    def key(self) -> SpatialKey:
        return spatial_key(str(self))

    def eq(self, other: Vector) -> bool:
        return self.row == other.row and self.col == other.col

    def invert(self) -> Vector:
        """
        Negate both components.

        Example:
            Vector(1, -2).invert()  -> Vector(-1,+2)
        """
        return Vector(-self.row, -self.col)

    def __str__(self) -> str:
        return f"{_signed(self.row)},{_signed(self.col)}"

    def __repr__(self) -> str:
        return f"Vector({self})"


class Direction(Enum):
    """Compass direction for neighbour generation."""

    N = "N"  # Up (decreasing row)
    E = "E"  # Right (increasing col)
    S = "S"  # Down (increasing row)
    W = "W"  # Left (decreasing col)
    NE = "NE"
    SE = "SE"
    SW = "SW"
    NW = "NW"

    @property
    def vector(self) -> Vector:
        return VECTORS[self.value]


# Direction deltas: (row_delta, col_delta)
_DELTAS = {
    "N": (-1, 0),
    "E": (0, 1),
    "S": (1, 0),
    "W": (0, -1),
    "NE": (-1, 1),
    "SE": (1, 1),
    "SW": (1, -1),
    "NW": (-1, -1),
}

VECTORS: dict[str, Vector] = {name: Vector(dr, dc) for name, (dr, dc) in _DELTAS.items()}

CARDINAL_VECTORS: tuple[Vector, ...] = (VECTORS["N"], VECTORS["E"], VECTORS["S"], VECTORS["W"])

DIAGONAL_VECTORS: tuple[Vector, ...] = (VECTORS["NE"], VECTORS["SE"], VECTORS["SW"], VECTORS["NW"])

ALL_VECTORS: tuple[Vector, ...] = CARDINAL_VECTORS + DIAGONAL_VECTORS
