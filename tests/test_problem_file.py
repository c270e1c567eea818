import io
import tempfile
import unittest
from pathlib import Path

from crossgrid.core.exceptions import ProblemFormatError
from crossgrid.data.examples import EXAMPLE_PROBLEM_TEXT
from crossgrid.io.problem_file import load_problem, load_problem_file, parse_problem


class ParseProblemTests(unittest.TestCase):
    def test_example_problem(self) -> None:
        problem = parse_problem(EXAMPLE_PROBLEM_TEXT)
        self.assertEqual(problem.size, (15, 15))
        self.assertEqual(problem.across[:3], (1, 4, 7))
        self.assertEqual(problem.down[:3], (1, 2, 3))
        self.assertEqual(problem.max_number, max(problem.across + problem.down))

    def test_comments_and_blank_lines_are_skipped(self) -> None:
        text = "# tiny grid\n\nTINY: 3x5\n\n  A: 1, 4, 5\n# downs\nD: 1,2,3\n"
        problem = parse_problem(text)
        self.assertEqual(problem.name, "TINY")
        self.assertEqual(problem.size, (3, 5))
        self.assertEqual(problem.across, (1, 4, 5))
        self.assertEqual(problem.down, (1, 2, 3))

    def test_empty_clue_list(self) -> None:
        problem = parse_problem("BLANK: 3x3\nA:\nD:")
        self.assertEqual(problem.across, ())
        self.assertEqual(problem.down, ())
        self.assertEqual(problem.max_number, 0)

    def test_wrong_label(self) -> None:
        with self.assertRaises(ProblemFormatError) as ctx:
            parse_problem("P: 3x3\nD: 1\nA: 1")
        self.assertIn("line 2", str(ctx.exception))

    def test_bad_size(self) -> None:
        for size in ("3", "3x", "axb", "3x3x3"):
            with self.subTest(size=size), self.assertRaises(ProblemFormatError):
                parse_problem(f"P: {size}\nA: 1\nD: 1")

    def test_zero_size(self) -> None:
        with self.assertRaises(ProblemFormatError) as ctx:
            parse_problem("P: 0x3\nA: 1\nD: 1")
        self.assertTrue(str(ctx.exception).startswith("P: "))

    def test_non_numeric_clue(self) -> None:
        with self.assertRaises(ProblemFormatError) as ctx:
            parse_problem("P: 3x3\nA: 1,four\nD: 1")
        self.assertIn("line 2", str(ctx.exception))

    def test_non_positive_clue(self) -> None:
        with self.assertRaises(ProblemFormatError):
            parse_problem("P: 3x3\nA: 1\nD: 0")

    def test_missing_line(self) -> None:
        with self.assertRaises(ProblemFormatError):
            parse_problem("P: 3x3\nA: 1")

    def test_missing_separator(self) -> None:
        with self.assertRaises(ProblemFormatError):
            parse_problem("P 3x3\nA: 1\nD: 1")


class LoadProblemTests(unittest.TestCase):
    def test_load_from_stream(self) -> None:
        problem = load_problem(io.StringIO("TINY: 3x5\nA: 1,4,5\nD: 1,2,3\n"))
        self.assertEqual(problem.size, (3, 5))

    def test_load_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "example.txt"
            path.write_text(EXAMPLE_PROBLEM_TEXT, encoding="utf-8")
            self.assertEqual(load_problem_file(path), parse_problem(EXAMPLE_PROBLEM_TEXT))
            self.assertEqual(load_problem_file(str(path)).name, "EXAMPLE")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
