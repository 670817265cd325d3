"""
Grid parsing utilities for puzzle input.

Each input line becomes one grid row and each character one cell:
1. Number grids - every character converted with int()
2. String grids - every character kept as is
3. Custom grids - every character passed through a transform

Lines of different lengths give a ragged grid (see Grid).
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from grid import Grid

__all__ = ["lines_to_custom_grid", "lines_to_number_grid", "lines_to_string_grid", "split_lines"]

T = TypeVar("T")


def split_lines(text: str) -> list[str]:
    """Split raw puzzle input into lines, trimming each and dropping blank ones."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def lines_to_custom_grid(lines: Iterable[str], transform: Callable[[str], T]) -> Grid[T]:
    """
    Convert lines of text into a grid, transforming each character.

    Example:
        # Mark trees vs. open ground
        grid = lines_to_custom_grid([".#.", "##."], lambda char: char == "#")
        grid.at(Point(0, 1))  -> True

    Args:
        lines: One string per grid row
        transform: Applied to every raw character

    Returns:
        Grid of transformed values
    """
    return Grid([[transform(char) for char in line] for line in lines])


def lines_to_number_grid(lines: Iterable[str]) -> Grid[int]:
    """
    Convert digit lines into a grid of ints.

    Raises:
        ValueError: If a character is not a digit
    """
    return lines_to_custom_grid(lines, int)


def lines_to_string_grid(lines: Iterable[str]) -> Grid[str]:
    """Convert lines into a grid of single characters."""
    return lines_to_custom_grid(lines, str)
