"""Worked example: a published 15x15 layout and its clue numbers."""

from __future__ import annotations

EXAMPLE_PROBLEM_TEXT = """\
EXAMPLE: 15x15
A: 1,4,7,10,13,14,16,17,18,20,21,23,24,26,28,29,33,35,36,38,39,42,44,45,47,49,50,52,55,56,58,59,61,63,67,69,70,71,72,73,74,75,76
D: 1,2,3,4,5,6,7,8,9,11,12,15,19,22,25,27,29,30,31,32,34,37,40,41,43,46,48,51,53,54,57,60,62,64,65,66,68
"""

EXAMPLE_SOLUTION = (
    "...###...#...##"
    ".....#...#....#"
    ".....#...#....."
    ".....#....#...."
    "###...#....#..."
    ".......#......."
    "...##...#......"
    ".....#...#....."
    "......#...##..."
    ".......#......."
    "...#....#...###"
    "....#....#....."
    ".....#...#....."
    "#....#...#....."
    "##...#...###..."
)
