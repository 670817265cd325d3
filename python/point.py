"""
Immutable 2D grid coordinate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Union

from vector import CARDINAL_VECTORS, SpatialKey, Vector, parse_coordinates, spatial_key

PointSource = Union["Point", Mapping[str, int], str, SpatialKey]


@dataclass(frozen=True, order=True)
class Point:
    """
    A (row, col) position.

    Points compare and sort row-major: by row, then by col. The canonical
    string form is "row,col" and round-trips through Point.from_str.

    A Point can be built from:
    - row and col directly: Point(1, 2)
    - a mapping: Point.from_row_col({"row": 1, "col": 2})
    - a "row,col" string: Point.from_str("1,2")
    - a key: Point.from_key(spatial_key("1,2"))
    """

    row: int
    col: int

    @classmethod
    def from_row_col(cls, coords: Mapping[str, int]) -> Point:
        return cls(coords["row"], coords["col"])

    @classmethod
    def from_str(cls, text: str) -> Point:
        """
        Parse a "row,col" string. Signs are optional: "-3,+5" is valid.

        Raises:
            ParseError: If the text is not of the form signed-int,signed-int
        """
        return cls(*parse_coordinates(text, "Point"))

    @classmethod
    def from_key(cls, key: SpatialKey) -> Point:
        """
        Build a point from a key whose description is a "row,col" string.

        Raises:
            ParseError: If the key has no description or it cannot be parsed
        """
        return cls(*parse_coordinates(key, "Point"))

    @classmethod
    def of(cls, value: PointSource) -> Point:
        """Build a Point from any of the supported input forms."""
        if isinstance(value, Point):
            return value
        if isinstance(value, (str, SpatialKey)):
            return cls(*parse_coordinates(value, "Point"))
        return cls.from_row_col(value)

    @staticmethod
    def compare(a: Point, b: Point) -> int:
        """Row-major three-way comparison: -1, 0 or 1."""
        if a.row != b.row:
            return -1 if a.row < b.row else 1
        if a.col != b.col:
            return -1 if a.col < b.col else 1
        return 0

    @property
    def key(self) -> SpatialKey:
        """Interned key for this point's canonical string."""
        return spatial_key(str(self))

    def equals(self, other: Point) -> bool:
        return Point.compare(self, other) == 0

    def apply_vector(self, vector: Vector, reverse: bool = False) -> Point:
        """
        Move the point by a vector (or by its negation if reverse is set).

        Example:
            Point(1, 1).apply_vector(Vector(0, 2))  -> Point(1,3)
        """
        if reverse:
            return Point(self.row - vector.row, self.col - vector.col)
        return Point(self.row + vector.row, self.col + vector.col)

    def get_vector_to(self, other: Point) -> Vector:
        """The offset that takes this point to other."""
        return Vector(other.row - self.row, other.col - self.col)

    def get_distance_to(self, other: Point) -> float:
        """Straight-line (Euclidean) distance, e.g. (0,0) -> (3,4) is 5.0."""
        vector = self.get_vector_to(other)
        return math.hypot(vector.row, vector.col)

    def neighbours(self, directions: Iterable[Vector] = CARDINAL_VECTORS) -> list[Point]:
        """Adjacent points in the given directions. No bounds filtering."""
        return [self.apply_vector(direction) for direction in directions]

    def __str__(self) -> str:
        return f"{self.row},{self.col}"

    def __repr__(self) -> str:
        return f"Point({self})"
