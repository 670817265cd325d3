"""
Sparse 2D grid with bounds tracking and a callback-driven BFS/DFS traversal.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, Sequence, TypeVar

from point import Point
from spatial_errors import OutOfBoundsError
from vector import CARDINAL_VECTORS, Vector

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C")


class TraversalMode(Enum):
    """Order in which the frontier is consumed."""

    BFS = "bfs"  # FIFO
    DFS = "dfs"  # LIFO


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class PointAndValue(Generic[T]):
    """A point with whatever is stored there (None for a hole)."""

    point: Point
    value: T | None = None


@dataclass(frozen=True)
class GridCell(Generic[T]):
    """One stored cell, as produced by iterating a Grid."""

    row: int
    col: int
    point: Point
    value: T


@dataclass(frozen=True)
class VisitResult:
    """
    What the traversal should do after a visit.

    abort wins over visit_neighbours: an aborted traversal never expands
    the current point.
    """

    abort: bool
    visit_neighbours: bool


@dataclass
class TraversalContext(Generic[C]):
    """State shared by every visit of one traversal, returned when it ends."""

    directions: tuple[Vector, ...]
    global_visited: set[Point] = field(default_factory=set)
    custom: C | None = None


@dataclass
class VisitInfo(Generic[T, C]):
    """
    A frontier entry, and the argument passed to on_visit.

    path holds the (point, value) pairs taken to get here, not including
    this point. this_path_visited is private to this entry; children get
    a copy.
    """

    this_point_and_value: PointAndValue[T]
    path: tuple[PointAndValue[T], ...]
    this_path_visited: set[Point]
    context: TraversalContext[C]

    @property
    def point(self) -> Point:
        return self.this_point_and_value.point

    @property
    def value(self) -> T | None:
        return self.this_point_and_value.value

    @property
    def global_visited(self) -> set[Point]:
        return self.context.global_visited

    @property
    def directions(self) -> tuple[Vector, ...]:
        return self.context.directions

    @property
    def custom(self) -> C | None:
        return self.context.custom


OnVisit = Callable[[VisitInfo[T, C]], VisitResult]


def _point_and_value_to_string(point_and_value: PointAndValue[Any]) -> str:
    return f"{point_and_value.point}={point_and_value.value}"


def _path_to_string(path: Sequence[PointAndValue[Any]]) -> str:
    if not path:
        return "<empty>"
    return "=>".join(str(step.point) for step in path)


def visit_info_to_string(visit_info: VisitInfo[Any, Any]) -> str:
    """Describe a visit as "row,col=value (path=r,c=>r,c)"."""
    this = _point_and_value_to_string(visit_info.this_point_and_value)
    return f"{this} (path={_path_to_string(visit_info.path)})"


# =============================================================================
# Grid
# =============================================================================


class Grid(Generic[T]):
    """
    A sparse 2D grid.

    Values live in a row -> col -> value mapping, so rows may have different
    lengths and set() may grow the grid. num_rows and num_cols are exclusive
    upper bounds of any index ever stored, not counts of stored cells, and
    they never shrink.

    Example:
        grid = Grid([[1, 2, 3], [4, 5, 6]])
        grid.at(Point(1, 2))  -> 6
        str(grid)             -> "123\\n456"
    """

    def __init__(self, rows: Iterable[Sequence[T]] = ()) -> None:
        self._data: dict[int, dict[int, T]] = {}
        self._num_rows = 0
        self._num_cols = 0

        for row_idx, row in enumerate(rows):
            row_map = self._data.setdefault(row_idx, {})
            for col_idx, value in enumerate(row):
                row_map[col_idx] = value
            self._num_rows = row_idx + 1
            self._num_cols = max(self._num_cols, len(row))

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def num_cols(self) -> int:
        return self._num_cols

    def at(self, point: Point | None) -> T | None:
        """The stored value, or None for a missing point or no point at all."""
        if point is None:
            return None
        row_map = self._data.get(point.row)
        if row_map is None:
            return None
        return row_map.get(point.col)

    def bounds_contain(self, point: Point) -> bool:
        return 0 <= point.row < self._num_rows and 0 <= point.col < self._num_cols

    def exists(self, point: Point) -> bool:
        """True only if a value was stored at exactly this point."""
        row_map = self._data.get(point.row)
        return row_map is not None and point.col in row_map

    def set(self, point: Point, value: T, strict_bounds: bool = False) -> None:
        """
        Store a value, growing the bounds to include the point if needed.

        Args:
            point: Where to store the value
            value: The value to store
            strict_bounds: If True, refuse points outside the current bounds

        Raises:
            OutOfBoundsError: If strict_bounds is set and the point is outside
        """
        if strict_bounds and not self.bounds_contain(point):
            raise OutOfBoundsError(
                f"Point {point} is out of bounds (grid is {self._num_rows}x{self._num_cols})",
                {"point": point, "num_rows": self._num_rows, "num_cols": self._num_cols},
            )

        self._data.setdefault(point.row, {})[point.col] = value

        if point.row >= self._num_rows:
            self._num_rows = point.row + 1
        if point.col >= self._num_cols:
            self._num_cols = point.col + 1

    def get_neighbours(
        self, point: Point, directions: Iterable[Vector] = CARDINAL_VECTORS
    ) -> list[PointAndValue[T]]:
        """In-bounds neighbours of a point, in the order of directions."""
        neighbours: list[PointAndValue[T]] = []
        for direction in directions:
            neighbour = point.apply_vector(direction)
            if self.bounds_contain(neighbour):
                neighbours.append(PointAndValue(neighbour, self.at(neighbour)))
        return neighbours

    def __iter__(self) -> Iterator[GridCell[T]]:
        """Every stored cell, row by row, then column by column."""
        for row in sorted(self._data):
            row_map = self._data[row]
            for col in sorted(row_map):
                yield GridCell(row, col, Point(row, col), row_map[col])

    def to_string(self, mapper: Callable[[T], str] | None = None) -> str:
        """
        Render num_rows lines of num_cols characters. Holes render as '.'.

        Example:
            Grid([[1, 2], [3]]).to_string()                  -> "12\\n3."
            Grid([[1, 2]]).to_string(lambda v: "#" if v == 1 else " ")  -> "# "
        """
        lines: list[str] = []
        for row in range(self._num_rows):
            row_map = self._data.get(row, {})
            chars: list[str] = []
            for col in range(self._num_cols):
                if col not in row_map:
                    chars.append(".")
                elif mapper is not None:
                    chars.append(mapper(row_map[col]))
                else:
                    chars.append(str(row_map[col]))
            lines.append("".join(chars))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Grid({self._num_rows}x{self._num_cols})"

    def traverse(
        self,
        start: Point,
        mode: TraversalMode | str,
        *,
        multipath: bool,
        on_visit: OnVisit[T, C],
        directions: Iterable[Vector] = CARDINAL_VECTORS,
        skip_empty: bool = False,
        custom_context: C | None = None,
        debug: bool = False,
    ) -> TraversalContext[C]:
        """
        Explore the grid breadth- or depth-first from start.

        The search itself is driven by on_visit, which is called once for
        every frontier entry that passes the visited check and returns a
        VisitResult:
        - abort=True stops the whole traversal immediately
        - visit_neighbours=False ends this path without expanding it

        With multipath=False a point is visited at most once overall. With
        multipath=True a point is only excluded if it is already on the
        path being extended, so it can be reached again via other paths
        (global_visited is still recorded, it just doesn't block).

        Args:
            start: Where to begin (may be a hole)
            mode: "bfs"/"dfs" or a TraversalMode
            multipath: Track visited state per path instead of globally
            on_visit: Callback deciding what happens at each point
            directions: Vectors used to generate neighbours (default N, E, S, W)
            skip_empty: Drop entries with no stored value without visiting them
            custom_context: Caller state exposed as info.custom and context.custom
            debug: Log each visit at DEBUG level

        Returns:
            The TraversalContext: directions, global_visited and custom

        Example:
            # Count cells reachable from the top-left corner
            grid = lines_to_number_grid(["123", "456"])
            context = grid.traverse(
                Point(0, 0),
                "bfs",
                multipath=False,
                on_visit=lambda info: VisitResult(abort=False, visit_neighbours=True),
            )
            len(context.global_visited)  -> 6
        """
        mode = TraversalMode(mode)
        context: TraversalContext[C] = TraversalContext(tuple(directions), set(), custom_context)

        frontier: deque[VisitInfo[T, C]] = deque(
            [VisitInfo(PointAndValue(start, self.at(start)), (), set(), context)]
        )
        take_next = frontier.popleft if mode is TraversalMode.BFS else frontier.pop

        while frontier:
            entry = take_next()
            point = entry.point

            if skip_empty and not self.exists(point):
                continue

            visited = entry.this_path_visited if multipath else context.global_visited
            if point in visited:
                continue

            context.global_visited.add(point)
            result = on_visit(entry)

            if debug:
                logger.debug(
                    "Visiting %s ... %s",
                    visit_info_to_string(entry),
                    "expand" if result.visit_neighbours else "stop",
                )

            if result.abort:
                break
            if not result.visit_neighbours:
                continue

            entry.this_path_visited.add(point)
            path = entry.path + (entry.this_point_and_value,)
            for direction in context.directions:
                neighbour = point.apply_vector(direction)
                if neighbour in entry.this_path_visited or not self.bounds_contain(neighbour):
                    continue
                frontier.append(
                    VisitInfo(
                        PointAndValue(neighbour, self.at(neighbour)),
                        path,
                        set(entry.this_path_visited),
                        context,
                    )
                )

        return context
