"""
Console reporting for puzzle runs: day headers, answers and timings.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Union

from simple_chalk import chalk  # type: ignore[import-untyped]

Expected = Union[Any, Callable[[Any], bool]]


def elapsed_since(started_at: float) -> str:
    """Milliseconds since a time.perf_counter() reading, e.g. "12.3ms"."""
    return f"{(time.perf_counter() - started_at) * 1000:,.1f}ms"


def format_answer(answer: Any) -> str:
    """Answer text; numbers get thousands separators plus the raw value."""
    if isinstance(answer, (int, float)) and not isinstance(answer, bool):
        formatted = f"{answer:,}"
        raw = str(answer)
        if formatted != raw:
            return f"Answer is {formatted} ({raw})"
        return f"Answer is {formatted}"
    return f"Answer is {answer}"


def log_start() -> None:
    print("\n=== Starting puzzle run ===")


def log_puzzle_day(day: int, is_first: bool = True) -> None:
    if not is_first:
        print("")
    print(chalk.green.bold(f"\nRunning day {day} ..."))


def log_answer(
    answer: Any,
    part: int,
    started_at: float,
    expected: Expected | None = None,
) -> bool | None:
    """
    Print one part's answer and whether it matches the known result.

    Args:
        answer: The computed answer
        part: 1 or 2
        started_at: time.perf_counter() reading taken when the part began
        expected: Known answer, or a predicate accepting the answer

    Returns:
        True/False for a match/mismatch, None when nothing was expected
    """
    part_text = f"Part {part} took {elapsed_since(started_at)}"
    answer_text = format_answer(answer)

    matched: bool | None = None
    if expected is None:
        answer_text += " ❔"
    else:
        if callable(expected):
            matched = expected(answer) is True
            display = "verify-function result"
        else:
            matched = answer == expected
            display = repr(expected)

        if matched:
            answer_text += chalk.green(" ✅")
        else:
            answer_text += chalk.red(f" ❌ (should equal {display})")

    print(" ".join([chalk.cyan.bold(part_text), "➡️ ", chalk.yellow.bold(answer_text)]))
    return matched


def log_time(started_at: float, day: int) -> None:
    print(chalk.green(f"Took {elapsed_since(started_at)} to run all tasks for day {day}"))


def log_complete(started_at: float) -> None:
    print(f"\n===  All completed in {elapsed_since(started_at)} ===\n")


def log_error(label: str, error: BaseException | None = None) -> None:
    if error is None:
        print(chalk.red.bold(label))
    else:
        print(chalk.red.bold(label), error)


def log_info(*args: Any) -> None:
    print(*args)
