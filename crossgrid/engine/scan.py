"""Lazy ray scanning over a partially decided grid."""

from __future__ import annotations

from itertools import islice, takewhile
from typing import TYPE_CHECKING, Callable, Iterator

from ..core.constants import ExtendedField, Position

if TYPE_CHECKING:
    from .state import State


class Scan:
    """Endless sequence of cell values along a ray.

    Starts at ``start`` (inclusive) and advances by ``direction`` on every
    step. Positions outside the grid keep yielding ``Marker.OUT_OF_BOUNDS``,
    so the iterator never ends on its own; bound it at the call site.
    """

    def __init__(self, state: "State", start: Position, direction: Position) -> None:
        self.state = state
        self.position = start
        self.direction = direction

    def __iter__(self) -> Iterator[ExtendedField]:
        return self

    def __next__(self) -> ExtendedField:
        value = self.state.try_at(self.position)
        self.position = (
            self.position[0] + self.direction[0],
            self.position[1] + self.direction[1],
        )
        return value


def run_length(
    values: Iterator[ExtendedField],
    limit: int,
    accept: Callable[[ExtendedField], bool],
) -> int:
    """Count the leading accepted values among the first ``limit``."""

    return sum(1 for _ in takewhile(accept, islice(values, limit)))
