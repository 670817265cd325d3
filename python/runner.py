"""
Puzzle runner: finds day modules, feeds them their inputs and times them.

A day module is a file named day_DD.py in the puzzles directory that
defines run_tasks(data: PuzzleData, config: RunnerConfig) -> None and
reports its answers with puzzle_log.log_answer.

Usage:
    python runner.py latest
    python runner.py all --test-data
    python runner.py 7 --puzzles-dir puzzles --inputs-dir inputs
"""

from __future__ import annotations

import argparse
import importlib.util
import logging
import re
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Sequence, Union

from puzzle_inputs import get_data_for_puzzle
from puzzle_log import log_complete, log_error, log_info, log_puzzle_day, log_start, log_time

logger = logging.getLogger(__name__)

DAY_PATTERN = re.compile(r"^day_(\d{2})\.py$")

Selection = Union[str, int]  # "all", "latest" or a day number


@dataclass(frozen=True)
class RunnerConfig:
    """Where puzzles and inputs live, and which input to use."""

    puzzles_dir: Path = Path("puzzles")
    inputs_dir: Path = Path("inputs")
    use_test_data: bool = False


@dataclass(frozen=True)
class PuzzleModule:
    """A discovered day module."""

    day: int
    path: Path


def discover_puzzles(puzzles_dir: Path) -> list[PuzzleModule]:
    """All day modules in a directory, ordered by day number."""
    puzzles_dir = Path(puzzles_dir)
    if not puzzles_dir.is_dir():
        return []

    found: list[PuzzleModule] = []
    for path in puzzles_dir.iterdir():
        match = DAY_PATTERN.match(path.name)
        if match is not None:
            found.append(PuzzleModule(int(match.group(1)), path))
    return sorted(found, key=lambda puzzle: puzzle.day)


def select_puzzles(puzzles: Sequence[PuzzleModule], which: Selection) -> list[PuzzleModule]:
    """
    Pick the puzzles to run.

    Raises:
        LookupError: If a specific day was asked for and is not present
        ValueError: If which is not "all", "latest" or a day number
    """
    if which == "all":
        return list(puzzles)
    if which == "latest":
        return list(puzzles[-1:])
    if isinstance(which, int):
        matches = [puzzle for puzzle in puzzles if puzzle.day == which]
        if not matches:
            raise LookupError(f"Puzzle {which} not found!")
        return matches
    raise ValueError(f'Must supply one of "latest", "all" or a puzzle number (was called with "{which}")')


def load_puzzle(puzzle: PuzzleModule) -> ModuleType:
    """Import a day module from its file path."""
    spec = importlib.util.spec_from_file_location(f"day_{puzzle.day:02d}", puzzle.path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load puzzle module from {puzzle.path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(spec.name, None)
        raise
    return module


def run(which: Selection, config: RunnerConfig) -> None:
    """Run the selected puzzles, logging a header and timing for each day."""
    puzzles = discover_puzzles(config.puzzles_dir)
    logger.debug("Found %d puzzle(s) in %s", len(puzzles), config.puzzles_dir)

    selected = select_puzzles(puzzles, which)

    log_start()
    before_all = time.perf_counter()
    if not puzzles:
        log_info(f'No puzzles found. Add files like "day_01.py" to {config.puzzles_dir}.')
        log_complete(before_all)
        return

    for index, puzzle in enumerate(selected):
        module = load_puzzle(puzzle)
        data = get_data_for_puzzle(puzzle.day, config.inputs_dir)

        log_puzzle_day(puzzle.day, is_first=index == 0)
        before = time.perf_counter()
        module.run_tasks(data, config)
        log_time(before, puzzle.day)

    log_complete(before_all)


def _selection(value: str) -> Selection:
    value = value.strip()
    if value in ("all", "latest"):
        return value
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f'Must supply one of "latest", "all" or a puzzle number (was called with "{value}")'
        ) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run daily puzzle solutions.")
    parser.add_argument("which", type=_selection, help='"all", "latest" or a day number')
    parser.add_argument("--puzzles-dir", type=Path, default=RunnerConfig.puzzles_dir)
    parser.add_argument("--inputs-dir", type=Path, default=RunnerConfig.inputs_dir)
    parser.add_argument("--test-data", action="store_true", help="Run against the example inputs")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    config = RunnerConfig(args.puzzles_dir, args.inputs_dir, args.test_data)

    try:
        run(args.which, config)
    except Exception as e:
        log_error("Error running program", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
