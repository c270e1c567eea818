"""CP-SAT layout enumeration using OR-Tools.

Models the same rules as the incremental engine declaratively, so the two
backends can be compared on small grids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from ortools.sat.python import cp_model

from ..core.constants import MINIMUM_WORD_LENGTH, Field
from ..core.models import Problem
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class CpSatResult:
    solutions: List[str] = field(default_factory=list)
    status: str = "UNKNOWN"
    wall_time: float = 0.0

    @property
    def solution_count(self) -> int:
        return len(self.solutions)


class _LayoutCollector(cp_model.CpSolverSolutionCallback):
    """Records every distinct layout the solver reports."""

    def __init__(self, cells: Sequence[cp_model.IntVar], max_solutions: Optional[int]) -> None:
        super().__init__()
        self._cells = cells
        self._max_solutions = max_solutions
        self._seen: Set[str] = set()
        self.solutions: List[str] = []

    def on_solution_callback(self) -> None:
        pattern = "".join(
            Field.WHITE.value if self.value(var) else Field.BLACK.value for var in self._cells
        )
        if pattern not in self._seen:
            self._seen.add(pattern)
            self.solutions.append(pattern)
        if self._max_solutions is not None and len(self.solutions) >= self._max_solutions:
            self.stop_search()


def enumerate_layouts_cp_sat(
    problem: Problem,
    timeout: Optional[float] = 60.0,
    max_solutions: Optional[int] = None,
) -> CpSatResult:
    """Enumerate every layout for ``problem`` with CP-SAT.

    Args:
        problem: Grid size and expected clue numbers.
        timeout: Solver time limit in seconds (``None`` for no limit).
        max_solutions: Stop after this many distinct layouts.

    Returns:
        A :class:`CpSatResult` holding the layouts as row-major ``.``/``#``
        strings together with the final solver status.
    """
    if not (_strictly_increasing(problem.across) and _strictly_increasing(problem.down)):
        LOGGER.warning("CP-SAT: clue numbers of %s are not strictly increasing", problem.name)
        return CpSatResult(status="INFEASIBLE")

    model, cells = build_layout_model(problem)

    solver = cp_model.CpSolver()
    solver.parameters.enumerate_all_solutions = True
    # full enumeration requires a single worker
    solver.parameters.num_workers = 1
    if timeout is not None:
        solver.parameters.max_time_in_seconds = timeout

    LOGGER.info(
        "CP-SAT: enumerating layouts for %s (%sx%s)",
        problem.name,
        problem.width,
        problem.height,
    )
    collector = _LayoutCollector(cells, max_solutions)
    status = solver.solve(model, collector)
    LOGGER.info(
        "CP-SAT: %d layouts, status=%s in %.2fs",
        len(collector.solutions),
        solver.status_name(status),
        solver.wall_time,
    )
    return CpSatResult(
        solutions=collector.solutions,
        status=solver.status_name(status),
        wall_time=solver.wall_time,
    )


def build_layout_model(problem: Problem):
    """Return the CP-SAT model and the per-cell whiteness literals (row-major)."""

    model = cp_model.CpModel()
    width, height = problem.size
    total = problem.field_count

    # ------------------------------------------------------------------
    # Step 1: one literal per mirror pair
    # ------------------------------------------------------------------
    cells: List[cp_model.IntVar] = [None] * total  # type: ignore[list-item]
    for index in range((total + 1) // 2):
        var = model.new_bool_var(f"W_{index}")
        cells[index] = var
        cells[total - 1 - index] = var

    def white(x: int, y: int):
        if 0 <= x < width and 0 <= y < height:
            return cells[y * width + x]
        return None

    # ------------------------------------------------------------------
    # Step 2: word starts, run lengths and running clue numbers
    # ------------------------------------------------------------------
    across_starts = []
    down_starts = []
    previous_number = None
    for y in range(height):
        for x in range(width):
            cell = white(x, y)
            starts_across = _start_literal(model, cell, white(x - 1, y), f"A_{x}_{y}")
            starts_down = _start_literal(model, cell, white(x, y - 1), f"D_{x}_{y}")
            _require_room(model, starts_across, [white(x + k, y) for k in range(1, MINIMUM_WORD_LENGTH)])
            _require_room(model, starts_down, [white(x, y + k) for k in range(1, MINIMUM_WORD_LENGTH)])

            numbered = model.new_bool_var(f"S_{x}_{y}")
            model.add(numbered >= starts_across)
            model.add(numbered >= starts_down)
            model.add(numbered <= starts_across + starts_down)

            number = model.new_int_var(0, total, f"N_{x}_{y}")
            if previous_number is None:
                model.add(number == numbered)
            else:
                model.add(number == previous_number + numbered)
            previous_number = number

            if problem.across:
                model.add_linear_expression_in_domain(
                    number, cp_model.Domain.from_values(list(problem.across))
                ).only_enforce_if(starts_across)
            if problem.down:
                model.add_linear_expression_in_domain(
                    number, cp_model.Domain.from_values(list(problem.down))
                ).only_enforce_if(starts_down)
            across_starts.append(starts_across)
            down_starts.append(starts_down)

    # ------------------------------------------------------------------
    # Step 3: every clue number is used
    # ------------------------------------------------------------------
    model.add(sum(across_starts) == len(problem.across))
    model.add(sum(down_starts) == len(problem.down))
    return model, cells


def _start_literal(model: cp_model.CpModel, cell, previous, name: str):
    """Literal that is true iff ``cell`` is white and ``previous`` is not."""

    if previous is None:
        return cell
    start = model.new_bool_var(name)
    model.add(start <= cell)
    model.add(start + previous <= 1)
    model.add(start >= cell - previous)
    return start


def _require_room(model: cp_model.CpModel, start, following: list) -> None:
    for cell in following:
        if cell is None:
            model.add(start == 0)
            return
        model.add_implication(start, cell)


def _strictly_increasing(numbers: Sequence[int]) -> bool:
    return all(a < b for a, b in zip(numbers, numbers[1:]))
