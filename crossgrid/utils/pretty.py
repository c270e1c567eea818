"""Pretty-print helpers for layouts and search runs."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Sequence

from ..core.constants import ExtendedField

if TYPE_CHECKING:
    from ..engine.search import SearchResult
    from ..engine.state import State


def cell_symbol(value: ExtendedField) -> str:
    return value.value


def _format_rows(rows: Sequence[Sequence[str]], width: int) -> str:
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(rows):
        row_render = " ".join(f"{symbol:>2}" for symbol in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_state(state: State) -> str:
    """Render a (possibly partial) state with ``.``, ``#`` and ``?`` cells."""

    rows = [[cell_symbol(value) for value in row] for row in state.rows()]
    return _format_rows(rows, state.problem.width)


def format_pattern_grid(pattern: str, width: int) -> str:
    """Render a row-major pattern string as a grid."""

    rows: List[List[str]] = [
        list(pattern[start:start + width]) for start in range(0, len(pattern), width)
    ]
    return _format_rows(rows, width)


def pretty_print_state(state: State, *, label: str | None = None, stream=None) -> None:
    """Print the layout in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_state(state), file=stream)


def print_search_stats(result: SearchResult, *, stream=None) -> None:
    """Print the summary of a finished search."""

    stream = stream or sys.stdout
    print(f"solutions: {result.solution_count}", file=stream)
    print(f"errors: {result.error_count}", file=stream)
    print(f"duration: {result.elapsed:.3f}s", file=stream)
    if result.stopped:
        print(f"stopped: {result.stop_reason}", file=stream)
    if result.violations:
        print(file=stream)
        print("--- Violations ---", file=stream)
        for violation, count in result.violations.most_common():
            print(f"  {violation.value:<26}{count:>12}", file=stream)
