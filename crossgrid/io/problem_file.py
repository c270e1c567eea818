"""Problem file loading.

A problem file has three significant lines::

    EXAMPLE: 15x15
    A: 1,4,7,10
    D: 1,2,3,4

The size is ``WIDTHxHEIGHT``. Blank lines and ``#`` comments are skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, TextIO, Tuple

from ..core.exceptions import ProblemFormatError
from ..core.models import Problem
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def _significant_lines(text: str) -> List[Tuple[int, str]]:
    lines: List[Tuple[int, str]] = []
    for number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        lines.append((number, line))
    return lines


def _split_label(line_no: int, line: str) -> Tuple[str, str]:
    label, separator, value = line.partition(":")
    if not separator:
        raise ProblemFormatError(f"line {line_no}: expected 'LABEL: value', got {line!r}")
    return label.strip(), value.strip()


def _parse_size(line_no: int, value: str) -> Tuple[int, int]:
    parts = value.lower().split("x")
    if len(parts) != 2:
        raise ProblemFormatError(f"line {line_no}: size must look like WIDTHxHEIGHT, got {value!r}")
    try:
        width, height = (int(part) for part in parts)
    except ValueError:
        raise ProblemFormatError(f"line {line_no}: size must be numeric, got {value!r}") from None
    return width, height


def _parse_numbers(line_no: int, value: str) -> Tuple[int, ...]:
    if not value:
        return ()
    try:
        return tuple(int(part) for part in value.split(","))
    except ValueError:
        raise ProblemFormatError(f"line {line_no}: clue numbers must be integers, got {value!r}") from None


def parse_problem(text: str) -> Problem:
    """Parse the three-line problem format into a :class:`Problem`."""

    lines = _significant_lines(text)
    if len(lines) != 3:
        raise ProblemFormatError(f"expected 3 lines (header, across, down), found {len(lines)}")
    (header_no, header), (across_no, across_line), (down_no, down_line) = lines

    name, size_text = _split_label(header_no, header)
    across_label, across_text = _split_label(across_no, across_line)
    down_label, down_text = _split_label(down_no, down_line)
    if across_label != "A":
        raise ProblemFormatError(f"line {across_no}: expected label 'A', got {across_label!r}")
    if down_label != "D":
        raise ProblemFormatError(f"line {down_no}: expected label 'D', got {down_label!r}")

    try:
        problem = Problem(
            name=name,
            size=_parse_size(header_no, size_text),
            across=_parse_numbers(across_no, across_text),
            down=_parse_numbers(down_no, down_text),
        )
    except ProblemFormatError as exc:
        raise ProblemFormatError(f"{name}: {exc}") from None
    LOGGER.debug(
        "Loaded problem %s (%sx%s) with %s across and %s down clues",
        problem.name,
        problem.width,
        problem.height,
        len(problem.across),
        len(problem.down),
    )
    return problem


def load_problem(stream: TextIO) -> Problem:
    return parse_problem(stream.read())


def load_problem_file(path: Path | str) -> Problem:
    return parse_problem(Path(path).read_text(encoding="utf-8"))
