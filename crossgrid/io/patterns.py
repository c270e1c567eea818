"""Conversion between layouts and their ``.``/``#`` text form."""

from __future__ import annotations

from typing import Iterable, List

from ..core.constants import Field
from ..core.exceptions import ProblemFormatError


def parse_pattern(text: str) -> List[Field]:
    """Read a layout written as ``.`` (white) and ``#`` (black); whitespace is ignored."""

    fields: List[Field] = []
    for offset, symbol in enumerate(text):
        if symbol.isspace():
            continue
        try:
            fields.append(Field.from_symbol(symbol))
        except ValueError as exc:
            raise ProblemFormatError(f"{exc} at offset {offset}") from None
    return fields


def format_pattern(fields: Iterable[Field]) -> str:
    return "".join(field.value for field in fields)
