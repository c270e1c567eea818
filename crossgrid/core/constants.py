"""Shared constants and enumerations for the layout search."""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union


MINIMUM_WORD_LENGTH = 3


class Field(str, Enum):
    """The two colours a decided grid cell can take."""

    WHITE = "."
    BLACK = "#"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Field":
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Unknown cell symbol {symbol!r}") from None


class Marker(str, Enum):
    """Values a read can return besides a decided field."""

    OUT_OF_BOUNDS = "X"
    UNFILLED = "?"


ExtendedField = Union[Field, Marker]

Position = Tuple[int, int]

# (dx, dy) steps; x grows to the right, y grows downward.
RIGHT: Position = (1, 0)
LEFT: Position = (-1, 0)
DOWN: Position = (0, 1)
UP: Position = (0, -1)
