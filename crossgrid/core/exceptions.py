"""Custom exception hierarchy for crossword layout search."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import RuleViolation


class CrosswordError(Exception):
    """Base exception for layout search failures."""


class ProblemFormatError(CrosswordError):
    """Raised when a problem description cannot be parsed or is inconsistent."""


class RuleViolationError(CrosswordError):
    """Raised when committing a cell breaks a numbering or spacing rule.

    These are ordinary search outcomes: the search catches them, counts them
    and tries the other colour.
    """

    def __init__(self, violation: "RuleViolation", index: Optional[int] = None) -> None:
        self.violation = violation
        self.index = index
        where = f" at cell {index}" if index is not None else ""
        super().__init__(f"{violation.value}{where}")


class GridStateError(CrosswordError):
    """Raised when the grid state is used in a way its invariants forbid."""


class SymmetryError(GridStateError):
    """Raised when a replayed cell disagrees with its already decided mirror."""


class LayoutStoreError(CrosswordError):
    """Raised when a stored layout document cannot be read."""
