"""
Loading of per-day puzzle input fixtures.

Layout on disk:
    <inputs_dir>/<DD>/data.txt
    <inputs_dir>/<DD>/test-data-01.txt
    <inputs_dir>/<DD>/test-data-02.txt
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from grid_parser import split_lines

DATA_FILE = "data.txt"
TEST_DATA_FILES = ("test-data-01.txt", "test-data-02.txt")


@dataclass(frozen=True)
class PuzzleData:
    """Raw text of the real input and the two worked examples."""

    real: str
    test1: str
    test2: str

    def lines(self, part: int, use_test_data: bool = False) -> list[str]:
        """Non-empty lines of the input a part should run against."""
        if not use_test_data:
            return split_lines(self.real)
        return split_lines(self.test1 if part == 1 else self.test2)


def _read_optional(path: Path) -> str:
    return path.read_text(encoding="utf-8") if path.exists() else ""


def get_data_for_puzzle(day: int, inputs_dir: Path) -> PuzzleData:
    """
    Read the input files for a day.

    Missing example files read as empty text; the real input is required.

    Raises:
        FileNotFoundError: If data.txt does not exist for the day
    """
    day_dir = Path(inputs_dir) / f"{day:02d}"
    real = (day_dir / DATA_FILE).read_text(encoding="utf-8")
    test1, test2 = (_read_optional(day_dir / name) for name in TEST_DATA_FILES)
    return PuzzleData(real, test1, test2)
