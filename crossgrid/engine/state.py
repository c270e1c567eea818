"""Symmetric grid state with incremental numbering and spacing checks.

Only the first half of the cells (row-major) is ever decided explicitly; every
read beyond the middle is redirected to the 180-degree mirror cell. Each
committed cell appends one field and one :class:`Counts` snapshot, so undoing
any number of cells is a truncation of both lists.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.constants import (
    DOWN,
    LEFT,
    MINIMUM_WORD_LENGTH,
    UP,
    ExtendedField,
    Field,
    Marker,
    Position,
)
from ..core.exceptions import GridStateError, RuleViolationError, SymmetryError
from ..core.models import Counts, Problem, RuleViolation
from .scan import Scan, run_length


def _is_white(value: ExtendedField) -> bool:
    return value is Field.WHITE


def _is_open(value: ExtendedField) -> bool:
    return value is Field.WHITE or value is Marker.UNFILLED


def _clue_at(numbers: Sequence[int], used: int) -> Optional[int]:
    return numbers[used] if used < len(numbers) else None


def _clue_from_end(numbers: Sequence[int], used: int) -> Optional[int]:
    return numbers[len(numbers) - 1 - used] if used < len(numbers) else None


class State:
    """Committed fields plus the numbering history for one problem."""

    def __init__(self, problem: Problem) -> None:
        self.problem = problem
        self.fields: List[Field] = []
        self.counts: List[Counts] = [Counts.initial(problem)]

    # ------------------------------------------------------------------
    # Addressing
    # ------------------------------------------------------------------
    @property
    def explicit_count(self) -> int:
        """Number of cells the search decides before the mirror replay."""

        return (self.problem.field_count + 1) // 2

    def is_final(self) -> bool:
        return len(self.fields) == self.problem.field_count

    def position_of(self, index: int) -> Position:
        return index % self.problem.width, index // self.problem.width

    def index_of(self, position: Position) -> int:
        return position[1] * self.problem.width + position[0]

    def mirror(self, position: Position) -> Position:
        return (
            self.problem.width - 1 - position[0],
            self.problem.height - 1 - position[1],
        )

    def try_at(self, position: Position) -> ExtendedField:
        if not self.problem.in_bounds(position):
            return Marker.OUT_OF_BOUNDS
        total = self.problem.field_count
        index = self.index_of(position)
        if 2 * index >= total:
            index = total - 1 - index
        if index < len(self.fields):
            return self.fields[index]
        return Marker.UNFILLED

    def at(self, position: Position) -> Field:
        """Return the decided field at ``position``; the border reads as black."""

        value = self.try_at(position)
        if value is Marker.OUT_OF_BOUNDS:
            return Field.BLACK
        if value is Marker.UNFILLED:
            raise GridStateError(f"Cell {position} has not been decided yet")
        return value

    def scan(self, start: Position, direction: Position) -> Scan:
        return Scan(self, start, direction)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    @property
    def current(self) -> Counts:
        return self.counts[-1]

    def rollback(self, length: int) -> None:
        """Forget every cell committed after the first ``length`` ones."""

        if length < 0 or length > len(self.fields):
            raise GridStateError(f"Cannot roll back to {length} of {len(self.fields)} cells")
        del self.fields[length:]
        del self.counts[length + 1:]

    def snapshot(self) -> Tuple[Tuple[Field, ...], Tuple[Counts, ...]]:
        return tuple(self.fields), tuple(self.counts)

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------
    def push(self, field: Field) -> None:
        """Commit the next explicitly decided cell.

        Committing the last explicit cell also replays the decided half in
        mirror order, which completes the grid. If any replayed cell breaks a
        rule the whole push is undone before the error propagates.
        """

        length = len(self.fields)
        if length >= self.explicit_count:
            raise GridStateError("Every explicitly decided cell is already committed")
        self.push_one(field)
        if len(self.fields) < self.explicit_count:
            return
        try:
            self._replay_mirror()
        except RuleViolationError:
            self.rollback(length)
            raise

    def _replay_mirror(self) -> None:
        total = self.problem.field_count
        for index in range(len(self.fields), total):
            self.push_one(self.fields[total - 1 - index])

    def push_one(self, field: Field) -> None:
        """Commit the next cell in row-major order, checking every rule.

        Raises :class:`RuleViolationError` with the broken rule; the state is
        left exactly as it was before the call.
        """

        field = Field(field)
        index = len(self.fields)
        if index >= self.problem.field_count:
            raise GridStateError("The grid is already complete")
        position = self.position_of(index)
        if 2 * index >= self.problem.field_count:
            expected = self.at(self.mirror(position))
            if field is not expected:
                raise SymmetryError(
                    f"Cell {position} is {field.name} but its mirror is {expected.name}"
                )

        self.fields.append(field)
        try:
            counts = self._apply_rules(field, position, index)
        except RuleViolationError:
            self.fields.pop()
            raise
        self.counts.append(counts)

    def _apply_rules(self, field: Field, position: Position, index: int) -> Counts:
        problem = self.problem
        x, y = position
        counts = self.counts[-1].copy()

        if field is Field.WHITE:
            numbered = False
            if self.at((x - 1, y)) is Field.BLACK:
                # across word starts here
                numbered = True
                if _clue_at(problem.across, counts.across_used) != counts.number:
                    raise RuleViolationError(RuleViolation.NUMBER_WRONG_ACROSS, index)
                counts.across_used += 1
                if problem.width - x < MINIMUM_WORD_LENGTH:
                    raise RuleViolationError(RuleViolation.TOO_LITTLE_SPACE_ACROSS, index)
            if self.at((x, y - 1)) is Field.BLACK:
                # down word starts here
                numbered = True
                if _clue_at(problem.down, counts.down_used) != counts.number:
                    raise RuleViolationError(RuleViolation.NUMBER_WRONG_DOWN, index)
                counts.down_used += 1
                room = run_length(self.scan(position, DOWN), MINIMUM_WORD_LENGTH, _is_open)
                if room < MINIMUM_WORD_LENGTH:
                    raise RuleViolationError(RuleViolation.TOO_LITTLE_SPACE_DOWN, index)
            if numbered:
                counts.number += 1
        else:
            left_run = run_length(self.scan((x - 1, y), LEFT), MINIMUM_WORD_LENGTH, _is_white)
            if 0 < left_run < MINIMUM_WORD_LENGTH:
                raise RuleViolationError(RuleViolation.WORD_TOO_SHORT_ACROSS, index)
            up_run = run_length(self.scan((x, y - 1), UP), MINIMUM_WORD_LENGTH, _is_white)
            if 0 < up_run < MINIMUM_WORD_LENGTH:
                raise RuleViolationError(RuleViolation.WORD_TOO_SHORT_DOWN, index)

        # The cell above is final now that the cell below it is known. Read
        # upside down it is a cell of the rotated grid, whose down neighbour
        # is our (x, y) and whose across neighbour is our (x + 1, y - 1).
        if self.at((x, y - 1)) is Field.WHITE:
            numbered = False
            if field is Field.BLACK:
                numbered = True
                expected = _clue_from_end(problem.down, counts.reverse_down_used)
                if expected != counts.reverse_number:
                    raise RuleViolationError(RuleViolation.NUMBER_WRONG_DOWN_REVERSE, index)
                counts.reverse_down_used += 1
            if self.at((x + 1, y - 1)) is Field.BLACK:
                numbered = True
                expected = _clue_from_end(problem.across, counts.reverse_across_used)
                if expected != counts.reverse_number:
                    raise RuleViolationError(RuleViolation.NUMBER_WRONG_ACROSS_REVERSE, index)
                counts.reverse_across_used += 1
            if numbered:
                counts.reverse_number -= 1

        if index + 1 == problem.field_count:
            if counts.across_used != len(problem.across):
                raise RuleViolationError(RuleViolation.LEFT_OVER_ACROSS, index)
            if counts.down_used != len(problem.down):
                raise RuleViolationError(RuleViolation.LEFT_OVER_DOWN, index)

        return counts

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def rows(self) -> Iterator[List[ExtendedField]]:
        for y in range(self.problem.height):
            yield [self.try_at((x, y)) for x in range(self.problem.width)]

    def to_pattern(self) -> str:
        """Row-major symbols for the whole grid (``?`` for undecided cells)."""

        return "".join(value.value for row in self.rows() for value in row)


def replay_pattern(problem: Problem, fields: Sequence[Field]) -> State:
    """Commit a complete layout cell by cell through :meth:`State.push_one`.

    Raises the first :class:`RuleViolationError` encountered.
    """

    state = State(problem)
    for field in fields:
        state.push_one(field)
    return state
