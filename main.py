"""CLI entrypoint for the crossword layout search."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from crossgrid.core.exceptions import GridStateError, ProblemFormatError, RuleViolationError
from crossgrid.core.models import Problem
from crossgrid.data.examples import EXAMPLE_PROBLEM_TEXT, EXAMPLE_SOLUTION
from crossgrid.engine.cp_solver import enumerate_layouts_cp_sat
from crossgrid.engine.layout_store import DEFAULT_STORE_DIR, LayoutStore
from crossgrid.engine.search import SearchConfig, search_problem
from crossgrid.engine.state import State
from crossgrid.engine.validator import LayoutValidator
from crossgrid.io.patterns import parse_pattern
from crossgrid.io.problem_file import load_problem, load_problem_file, parse_problem
from crossgrid.utils.logger import configure_logging
from crossgrid.utils.pretty import format_pattern_grid, format_state, print_search_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Enumerate symmetric crossword layouts matching given clue numbers",
    )
    parser.add_argument(
        "problem",
        nargs="?",
        default="-",
        help="Problem file ('NAME: WxH', 'A: ...', 'D: ...'); '-' reads stdin",
    )
    parser.add_argument(
        "--example",
        action="store_true",
        help="Use the built-in 15x15 example problem instead of a problem file",
    )
    parser.add_argument(
        "--check",
        type=str,
        metavar="PATTERN",
        help="Validate one layout ('.' white, '#' black, row-major) instead of searching",
    )
    parser.add_argument(
        "--backend",
        type=str,
        choices=["backtrack", "cp-sat"],
        default="backtrack",
        help="Search backend",
    )
    parser.add_argument("--max-solutions", type=int, help="Stop after this many layouts")
    parser.add_argument("--timeout", type=float, help="Stop after this many seconds")
    parser.add_argument(
        "--progress-interval",
        type=int,
        default=10_000_000,
        help="Log progress every N rejected cells (0 disables)",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Re-check every layout found with the whole-grid validator",
    )
    parser.add_argument("--quiet", action="store_true", help="Do not print each layout")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--store", action="store_true", help="Save the run to the layout store")
    parser.add_argument(
        "--store-dir",
        type=Path,
        default=DEFAULT_STORE_DIR,
        help="Directory of the layout store",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def read_problem(source: str) -> Problem:
    if source == "-":
        return load_problem(sys.stdin)
    return load_problem_file(source)


def check_layout(problem: Problem, pattern: str) -> bool:
    """Replay ``pattern`` through the incremental rules and the whole-grid validator."""

    validation = LayoutValidator().validate(problem, pattern)
    state = State(problem)
    try:
        for field in parse_pattern(pattern):
            state.push_one(field)
    except (RuleViolationError, GridStateError, ProblemFormatError) as exc:
        print(f"violation: {exc}")
        print(format_state(state))
        return False
    if not state.is_final():
        print(f"incomplete layout: {len(state.fields)} of {problem.field_count} cells")
        return False
    if not validation.ok:
        for message in validation.messages:
            print(f"validator: {message}")
        return False
    print(format_state(state))
    print("layout ok")
    return True


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        problem = parse_problem(EXAMPLE_PROBLEM_TEXT) if args.example else read_problem(args.problem)
    except (OSError, ProblemFormatError) as exc:
        parser.error(str(exc))

    print(f"Problem: {problem.name} ({problem.width}x{problem.height})")
    print()

    pattern = args.check if args.check is not None else (EXAMPLE_SOLUTION if args.example else None)
    if pattern is not None:
        if not check_layout(problem, pattern):
            raise SystemExit(1)
        return

    payload: Dict[str, Any] = {"problem": problem.to_jsonable(), "backend": args.backend}
    store = LayoutStore(args.store_dir) if args.store else None

    if args.backend == "cp-sat":
        cp_result = enumerate_layouts_cp_sat(
            problem, timeout=args.timeout, max_solutions=args.max_solutions
        )
        if not args.quiet:
            for layout in cp_result.solutions:
                print(format_pattern_grid(layout, problem.width))
                print()
        print(f"solutions: {cp_result.solution_count}")
        print(f"status: {cp_result.status}")
        print(f"duration: {cp_result.wall_time:.3f}s")
        solutions: List[str] = cp_result.solutions
        payload.update({"status": cp_result.status, "elapsed_seconds": cp_result.wall_time})
        if store is not None:
            payload["store_id"] = store.save_cp_sat(problem, cp_result)
    else:
        config = SearchConfig(
            progress_interval=args.progress_interval,
            max_solutions=args.max_solutions,
            timeout_seconds=args.timeout,
            verify_solutions=args.verify,
        )

        def show(state: State) -> None:
            print(format_state(state))
            print()

        result = search_problem(problem, config, on_solution=None if args.quiet else show)
        print_search_stats(result)
        solutions = result.solutions
        payload.update({
            "error_count": result.error_count,
            "elapsed_seconds": result.elapsed,
            "stopped": result.stopped,
            "stop_reason": result.stop_reason,
        })
        if store is not None:
            payload["store_id"] = store.save_search(problem, config, result)

    payload["solution_count"] = len(solutions)
    payload["solutions"] = solutions
    if args.output:
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")


if __name__ == "__main__":  # pragma: no cover
    main()
