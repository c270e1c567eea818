"""Exhaustive depth-first search over symmetric layouts.

Every explicit cell is tried white first, then black. The incremental rules in
:meth:`State.push` prune a branch as soon as it cannot lead to a valid layout,
and each candidate is undone by truncating the state's history.
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..core.constants import Field
from ..core.exceptions import GridStateError, RuleViolationError
from ..core.models import Problem, RuleViolation
from ..utils.logger import get_logger
from ..utils.pretty import format_state
from .state import State
from .validator import LayoutValidator


LOGGER = get_logger(__name__)

SolutionCallback = Callable[[State], None]
StopCheck = Callable[[], bool]


@dataclass
class SearchConfig:
    """Knobs for a single search run."""

    progress_interval: int = 10_000_000
    max_solutions: Optional[int] = None
    timeout_seconds: Optional[float] = None
    collect_solutions: bool = True
    verify_solutions: bool = False


@dataclass
class SearchResult:
    solution_count: int = 0
    error_count: int = 0
    elapsed: float = 0.0
    solutions: List[str] = field(default_factory=list)
    violations: Counter = field(default_factory=Counter)
    stopped: bool = False
    stop_reason: Optional[str] = None


class _StopSearch(Exception):
    """Unwinds the recursion when a stop condition triggers."""


class LayoutSearch:
    """Enumerates every layout that satisfies a problem."""

    def __init__(
        self,
        problem: Problem,
        config: Optional[SearchConfig] = None,
        on_solution: Optional[SolutionCallback] = None,
        should_stop: Optional[StopCheck] = None,
    ) -> None:
        self.problem = problem
        self.config = config or SearchConfig()
        self.on_solution = on_solution
        self.should_stop = should_stop
        self.validator = LayoutValidator()
        self.result = SearchResult()
        self._start = 0.0
        self._deadline: Optional[float] = None

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def run(self) -> SearchResult:
        self.result = SearchResult()
        self._start = time.perf_counter()
        self._deadline = (
            self._start + self.config.timeout_seconds
            if self.config.timeout_seconds is not None
            else None
        )
        state = State(self.problem)
        LOGGER.info(
            "Searching layouts for %s (%sx%s, %s across, %s down)",
            self.problem.name,
            self.problem.width,
            self.problem.height,
            len(self.problem.across),
            len(self.problem.down),
        )
        try:
            self._search(state)
        except _StopSearch as stop:
            state.rollback(0)
            self.result.stopped = True
            self.result.stop_reason = str(stop)
            LOGGER.info("Search stopped early: %s", stop)
        self.result.elapsed = time.perf_counter() - self._start
        LOGGER.info(
            "Search finished: %s solutions, %s errors in %.2fs",
            self.result.solution_count,
            self.result.error_count,
            self.result.elapsed,
        )
        return self.result

    # ------------------------------------------------------------------
    # Recursion
    # ------------------------------------------------------------------
    def _search(self, state: State) -> None:
        length = len(state.fields)
        for candidate in (Field.WHITE, Field.BLACK):
            self._check_stop()
            try:
                state.push(candidate)
            except RuleViolationError as exc:
                self._record_error(state, exc.violation)
            else:
                if state.is_final():
                    self._record_solution(state)
                else:
                    self._search(state)
            state.rollback(length)

    def _check_stop(self) -> None:
        if self.should_stop is not None and self.should_stop():
            raise _StopSearch("cancelled")
        if self._deadline is not None and time.perf_counter() > self._deadline:
            raise _StopSearch(f"timeout after {self.config.timeout_seconds}s")

    def _record_error(self, state: State, violation: RuleViolation) -> None:
        result = self.result
        result.error_count += 1
        result.violations[violation] += 1
        interval = self.config.progress_interval
        if interval and result.error_count % interval == 0:
            LOGGER.info(
                "Solutions: %s, Elapsed: %ds, Errors: %sM, %s",
                result.solution_count,
                time.perf_counter() - self._start,
                result.error_count // 1_000_000,
                violation.value,
            )
            LOGGER.debug("Partial layout:\n%s", format_state(state))

    def _record_solution(self, state: State) -> None:
        result = self.result
        if self.config.verify_solutions:
            validation = self.validator.validate(self.problem, state.fields)
            if not validation.ok:
                raise GridStateError(f"Search accepted an invalid layout: {validation.messages}")
        result.solution_count += 1
        pattern = state.to_pattern()
        if self.config.collect_solutions:
            result.solutions.append(pattern)
        LOGGER.info("Solution %s found: %s", result.solution_count, pattern)
        if self.on_solution is not None:
            self.on_solution(state)
        limit = self.config.max_solutions
        if limit is not None and result.solution_count >= limit:
            raise _StopSearch(f"reached {limit} solutions")


def search_problem(
    problem: Problem,
    config: Optional[SearchConfig] = None,
    *,
    on_solution: Optional[SolutionCallback] = None,
    should_stop: Optional[StopCheck] = None,
) -> SearchResult:
    """Run a full search and return its counters."""

    return LayoutSearch(problem, config, on_solution=on_solution, should_stop=should_stop).run()
