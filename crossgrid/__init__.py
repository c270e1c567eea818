"""Crossword layout search.

Enumerates the black/white patterns of a rotationally symmetric crossword grid
that produce a given sequence of across and down clue numbers.

This package exposes the public API surface via:

- ``crossgrid.engine.state.State``: incremental, rule-checked grid state.
- ``crossgrid.engine.search.search_problem``: exhaustive backtracking search.
- ``crossgrid.engine.cp_solver.enumerate_layouts_cp_sat``: CP-SAT cross-check.
- ``crossgrid.io.problem_file`` helpers: problem loading.
"""

from .core.models import Counts, Problem, RuleViolation
from .engine.search import LayoutSearch, SearchConfig, SearchResult, search_problem
from .engine.state import State
from .io.problem_file import load_problem, load_problem_file, parse_problem

__all__ = [
    "Counts",
    "LayoutSearch",
    "Problem",
    "RuleViolation",
    "SearchConfig",
    "SearchResult",
    "State",
    "load_problem",
    "load_problem_file",
    "parse_problem",
    "search_problem",
]

__version__ = "0.1.0"
