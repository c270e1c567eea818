"""Data models supporting the layout search."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence, Tuple

from .constants import Position
from .exceptions import ProblemFormatError


class RuleViolation(str, Enum):
    """Every way a committed cell can break the layout rules."""

    NUMBER_WRONG_ACROSS = "NumberWrongAcross"
    NUMBER_WRONG_DOWN = "NumberWrongDown"
    NUMBER_WRONG_ACROSS_REVERSE = "NumberWrongAcrossReverse"
    NUMBER_WRONG_DOWN_REVERSE = "NumberWrongDownReverse"
    WORD_TOO_SHORT_ACROSS = "WordTooShortAcross"
    WORD_TOO_SHORT_DOWN = "WordTooShortDown"
    TOO_LITTLE_SPACE_ACROSS = "TooLittleSpaceAcross"
    TOO_LITTLE_SPACE_DOWN = "TooLittleSpaceDown"
    LEFT_OVER_ACROSS = "LeftOverAcross"
    LEFT_OVER_DOWN = "LeftOverDown"


@dataclass(frozen=True)
class Problem:
    """Grid size plus the clue numbers a layout has to produce."""

    name: str
    size: Tuple[int, int]
    across: Tuple[int, ...]
    down: Tuple[int, ...]

    def __post_init__(self) -> None:
        width, height = self.size
        if width < 1 or height < 1:
            raise ProblemFormatError(f"Grid size must be positive, got {width}x{height}")
        object.__setattr__(self, "size", (int(width), int(height)))
        object.__setattr__(self, "across", _clue_tuple("across", self.across))
        object.__setattr__(self, "down", _clue_tuple("down", self.down))

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def field_count(self) -> int:
        return self.width * self.height

    @property
    def max_number(self) -> int:
        """Highest clue number in either list; the last number of a valid grid."""

        return max(self.across + self.down, default=0)

    def in_bounds(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def to_jsonable(self) -> dict:
        return {
            "name": self.name,
            "size": list(self.size),
            "across": list(self.across),
            "down": list(self.down),
        }


def _clue_tuple(label: str, numbers: Sequence[int]) -> Tuple[int, ...]:
    values = tuple(numbers)
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ProblemFormatError(f"{label} clue numbers must be positive integers, got {value!r}")
    return values


@dataclass
class Counts:
    """Running numbering tallies after a committed cell.

    A snapshot is never modified once it is part of a state's history; the
    validator works on a copy.

    ``number``/``across_used``/``down_used`` follow the grid from the top-left;
    the ``reverse_*`` tallies follow its rotated image from the bottom-right,
    counting clue numbers down from the highest one.
    """

    number: int
    across_used: int
    down_used: int
    reverse_number: int
    reverse_across_used: int
    reverse_down_used: int

    @classmethod
    def initial(cls, problem: Problem) -> "Counts":
        return cls(
            number=1,
            across_used=0,
            down_used=0,
            reverse_number=problem.max_number,
            reverse_across_used=0,
            reverse_down_used=0,
        )

    def copy(self) -> "Counts":
        return replace(self)
