"""
Binary search helpers for monotonic puzzle data.

find_transition locates the first index where a predicate flips from
False to True, e.g. the first time a simulated value passes a threshold.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

__all__ = ["find_transition", "get_midpoint"]

T = TypeVar("T")


def get_midpoint(start: int | None, end: int | None) -> int:
    """
    The next candidate of a binary search over the inclusive range start..end.

    Example:
        get_midpoint(4, 6)  -> 5
        get_midpoint(4, 5)  -> 4

    Raises:
        ValueError: If either bound is missing or start is above end
    """
    if start is None or end is None or start > end:
        raise ValueError(f"Range invalid (start={start}, end={end})")
    return (start + end) // 2


def find_transition(
    items: Sequence[T], predicate: Callable[[T, int, Sequence[T]], bool]
) -> int | None:
    """
    Find the first index whose predicate is True.

    The predicate must be monotonic over items: False up to some index and
    True from there on.

    Args:
        items: The sequence to search
        predicate: Called as predicate(value, index, items)

    Returns:
        The first index where the predicate holds, or None if it never does

    Example:
        find_transition([0, 0, 0, 1, 1], lambda value, *_: value == 1)   -> 3
        find_transition([4, 9, 16, 25], lambda value, *_: value >= 20)  -> 3
    """
    start = 0
    end = len(items) - 1

    transition: int | None = None
    while start <= end:
        pointer = get_midpoint(start, end)
        if predicate(items[pointer], pointer, items):
            transition = pointer
            end = pointer - 1
        else:
            start = pointer + 1

    return transition
