"""
Interactive step-through viewer for Grid.traverse.

Loads a grid from a text file, records the order in which a BFS or DFS
visits its cells, then replays the visits one key press at a time.

Usage:
    python traverse_demo.py grid.txt [bfs|dfs] [row,col]
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from grid import Grid, TraversalMode, VisitInfo, VisitResult
from grid_parser import lines_to_string_grid, split_lines
from point import Point

logger = logging.getLogger(__name__)

WALL = "#"


def record_visits(
    grid: Grid[str],
    start: Point,
    mode: TraversalMode | str,
    multipath: bool = False,
) -> list[Point]:
    """Visit order of a flood fill that does not pass through walls."""

    def on_visit(info: VisitInfo[str, list[Point]]) -> VisitResult:
        if info.value == WALL:
            return VisitResult(abort=False, visit_neighbours=False)
        info.custom.append(info.point)  # type: ignore[union-attr]
        return VisitResult(abort=False, visit_neighbours=True)

    order: list[Point] = []
    grid.traverse(start, mode, multipath=multipath, on_visit=on_visit, skip_empty=True, custom_context=order)
    return order


def render_frame(grid: Grid[str], visits: list[Point], step: int) -> Text:
    """
    The grid with the first step visits shaded and the latest one highlighted.

    Holes render as '.' like Grid.to_string().
    """
    seen = set(visits[:step])
    current = visits[step - 1] if step > 0 else None

    text = Text()
    for row in range(grid.num_rows):
        for col in range(grid.num_cols):
            point = Point(row, col)
            value = grid.at(point)
            char = "." if value is None else str(value)
            if point == current:
                text.append(char, style="bold black on yellow")
            elif point in seen:
                text.append(char, style="green")
            else:
                text.append(char, style="dim")
        if row < grid.num_rows - 1:
            text.append("\n")
    return text


class TraverseDemo:
    """Replay a recorded traversal with keyboard controls."""

    def __init__(self, grid: Grid[str], start: Point, mode: TraversalMode) -> None:
        self.grid = grid
        self.start = start
        self.mode = mode
        self.visits = record_visits(grid, start, mode)
        self.step = 0
        self.console = Console()
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        status = Text()
        status.append("Mode: ", style="bold")
        status.append(f"{self.mode.value}  ")
        status.append("Start: ", style="bold")
        status.append(f"{self.start}  ")
        status.append("Step: ", style="bold")
        status.append(f"{self.step}/{len(self.visits)}\n\n")

        status.append(render_frame(self.grid, self.visits, self.step))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N / Space - Next visit\n")
        status.append("  B - Previous visit\n")
        status.append("  R - Restart\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Grid Traversal", border_style="green", width=80)

    def advance(self) -> None:
        if self.step >= len(self.visits):
            self.status_message = "Traversal complete"
            return
        self.step += 1
        self.status_message = f"Visited {self.visits[self.step - 1]}"

    def back(self) -> None:
        if self.step > 0:
            self.step -= 1
        self.status_message = f"Back to step {self.step}"

    def restart(self) -> None:
        self.step = 0
        self.status_message = "Restarted"

    def run(self) -> None:
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    key = readchar.readkey()

                    if key.lower() == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == "n" or key == " ":
                        self.advance()
                    elif key.lower() == "b":
                        self.back()
                    elif key.lower() == "r":
                        self.restart()
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(argv: list[str]) -> int:
    if not argv:
        print(__doc__)
        return 1

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    grid = lines_to_string_grid(split_lines(Path(argv[0]).read_text(encoding="utf-8")))
    mode = TraversalMode(argv[1]) if len(argv) > 1 else TraversalMode.BFS
    start = Point.from_str(argv[2]) if len(argv) > 2 else Point(0, 0)
    logger.info("Loaded %r from %s", grid, argv[0])

    TraverseDemo(grid, start, mode).run()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
