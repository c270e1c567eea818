"""Deterministic rule validation for finished layouts.

Independent of the incremental engine: every check rescans the whole grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..core.constants import MINIMUM_WORD_LENGTH, Field
from ..core.exceptions import ProblemFormatError, RuleViolationError
from ..core.models import Problem, RuleViolation
from ..io.patterns import parse_pattern
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


@dataclass(frozen=True)
class Numbering:
    """Clue numbers of a layout, split by direction."""

    across: Tuple[int, ...]
    down: Tuple[int, ...]


def number_layout(width: int, height: int, fields: Sequence[Field]) -> Numbering:
    """Number a complete layout the way a printed crossword is numbered."""

    def white(x: int, y: int) -> bool:
        return 0 <= x < width and 0 <= y < height and fields[y * width + x] is Field.WHITE

    across: List[int] = []
    down: List[int] = []
    number = 1
    for y in range(height):
        for x in range(width):
            if not white(x, y):
                continue
            starts_across = not white(x - 1, y)
            starts_down = not white(x, y - 1)
            if starts_across:
                across.append(number)
            if starts_down:
                down.append(number)
            if starts_across or starts_down:
                number += 1
    return Numbering(across=tuple(across), down=tuple(down))


class LayoutValidator:
    """Runs deterministic validation over a complete layout."""

    def validate(self, problem: Problem, pattern: str | Sequence[Field]) -> ValidationResult:
        messages: List[str] = []
        try:
            fields = parse_pattern(pattern) if isinstance(pattern, str) else list(pattern)
            self._check_size(problem, fields)
            self._check_symmetry(problem, fields)
            self._check_run_lengths(problem, fields)
            self._check_numbering(problem, fields)
        except (ProblemFormatError, RuleViolationError) as exc:
            messages.append(str(exc))
            LOGGER.debug("Layout validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_size(self, problem: Problem, fields: Sequence[Field]) -> None:
        if len(fields) != problem.field_count:
            raise ProblemFormatError(
                f"Layout has {len(fields)} cells, expected {problem.field_count}"
            )

    def _check_symmetry(self, problem: Problem, fields: Sequence[Field]) -> None:
        total = problem.field_count
        for index in range(total // 2):
            if fields[index] is not fields[total - 1 - index]:
                x, y = index % problem.width, index // problem.width
                raise ProblemFormatError(f"Cell ({x},{y}) breaks rotational symmetry")

    def _check_run_lengths(self, problem: Problem, fields: Sequence[Field]) -> None:
        width, height = problem.size
        for y in range(height):
            row = fields[y * width:(y + 1) * width]
            if _has_short_run(row):
                raise RuleViolationError(RuleViolation.WORD_TOO_SHORT_ACROSS, y * width)
        for x in range(width):
            column = fields[x::width]
            if _has_short_run(column):
                raise RuleViolationError(RuleViolation.WORD_TOO_SHORT_DOWN, x)

    def _check_numbering(self, problem: Problem, fields: Sequence[Field]) -> None:
        numbering = number_layout(problem.width, problem.height, fields)
        if numbering.across != problem.across:
            LOGGER.debug("Across numbers %s, expected %s", numbering.across, problem.across)
            raise RuleViolationError(RuleViolation.NUMBER_WRONG_ACROSS)
        if numbering.down != problem.down:
            LOGGER.debug("Down numbers %s, expected %s", numbering.down, problem.down)
            raise RuleViolationError(RuleViolation.NUMBER_WRONG_DOWN)


def _has_short_run(line: Sequence[Field]) -> bool:
    run = 0
    for field in list(line) + [Field.BLACK]:
        if field is Field.WHITE:
            run += 1
            continue
        if 0 < run < MINIMUM_WORD_LENGTH:
            return True
        run = 0
    return False
