"""Convenience entrypoint with predefined settings for debugging.

Usage in a Python console (Jupyter-style)::

    import debug_main
    state = debug_main.prepare_state()
    debug_main.step_push(state, "...###...#...##")
    debug_main.step_rollback(state, 5)
    result = debug_main.run_debug(problem_text="TINY: 3x5\\nA: 1,4,5\\nD: 1,2,3")

Call :func:`check_example_solution` to replay the worked example cell by cell.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from crossgrid.core.exceptions import RuleViolationError
from crossgrid.data.examples import EXAMPLE_PROBLEM_TEXT, EXAMPLE_SOLUTION
from crossgrid.engine.search import SearchConfig, SearchResult, search_problem
from crossgrid.engine.state import State
from crossgrid.io.patterns import parse_pattern
from crossgrid.io.problem_file import parse_problem
from crossgrid.utils.logger import configure_logging
from crossgrid.utils.pretty import pretty_print_state, print_search_stats

DEFAULT_DEBUG_ARGS: Dict[str, Any] = {
    "problem_text": EXAMPLE_PROBLEM_TEXT,
    "max_solutions": 5,
    "timeout_seconds": 30.0,
    "progress_interval": 1_000_000,
    "verify_solutions": True,
}

LOGGER = logging.getLogger(__name__)


def prepare_state(**overrides: Any) -> State:
    """Return an empty state for the configured problem."""

    args = {**DEFAULT_DEBUG_ARGS, **overrides}
    configure_logging(logging.DEBUG)
    return State(parse_problem(args["problem_text"]))


def step_push(state: State, symbols: str) -> State:
    """Commit ``symbols`` one cell at a time, stopping at the first violation."""

    for field in parse_pattern(symbols):
        try:
            state.push_one(field)
        except RuleViolationError as exc:
            LOGGER.warning("Cell %s rejected: %s", len(state.fields), exc.violation.value)
            break
    pretty_print_state(state, label=f"{len(state.fields)} cells committed")
    return state


def step_rollback(state: State, length: int) -> State:
    state.rollback(length)
    pretty_print_state(state, label=f"rolled back to {length} cells")
    return state


def check_example_solution() -> bool:
    """Replay the worked example; every cell must pass the incremental rules."""

    state = prepare_state(problem_text=EXAMPLE_PROBLEM_TEXT)
    for field in parse_pattern(EXAMPLE_SOLUTION):
        try:
            state.push_one(field)
        except RuleViolationError as exc:
            LOGGER.error("Example rejected: %s", exc)
            pretty_print_state(state)
            return False
    LOGGER.info("Example accepted (%s cells)", len(state.fields))
    return True


def run_debug(**overrides: Any) -> SearchResult:
    """Search the configured problem with the debug limits."""

    args = {**DEFAULT_DEBUG_ARGS, **overrides}
    configure_logging()
    problem = parse_problem(args["problem_text"])
    config = SearchConfig(
        progress_interval=int(args["progress_interval"]),
        max_solutions=args["max_solutions"],
        timeout_seconds=args["timeout_seconds"],
        verify_solutions=bool(args["verify_solutions"]),
    )
    result = search_problem(problem, config)
    print_search_stats(result)
    return result


def main() -> None:  # pragma: no cover - manual helper
    check_example_solution()
    result = run_debug()
    print(f"Found {result.solution_count} layouts")


if __name__ == "__main__":
    main()
