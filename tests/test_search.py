import unittest

from crossgrid.core.models import Problem, RuleViolation
from crossgrid.engine.search import LayoutSearch, SearchConfig, search_problem
from crossgrid.engine.state import State
from crossgrid.engine.validator import LayoutValidator

OPEN_3X3 = Problem("open", (3, 3), (1, 4, 5), (1, 2, 3))
BANDED_3X5 = Problem("banded", (3, 5), (1, 4, 5), (1, 2, 3))
OPEN_4X4 = Problem("open", (4, 4), (1, 5, 6, 7), (1, 2, 3, 4))
# #...#
# .....
# .....
# .....
# #...#
NOTCHED_5X5 = Problem("notched", (5, 5), (1, 4, 6, 7, 8), (1, 2, 3, 4, 5))


class ExhaustiveSearchTests(unittest.TestCase):
    def test_open_3x3_has_exactly_one_layout(self) -> None:
        result = search_problem(OPEN_3X3)
        self.assertEqual(result.solutions, ["........."])
        self.assertEqual(result.solution_count, 1)
        self.assertGreater(result.error_count, 0)
        self.assertEqual(sum(result.violations.values()), result.error_count)
        self.assertFalse(result.stopped)

    def test_single_shared_clue_has_no_layout(self) -> None:
        result = search_problem(Problem("one", (3, 3), (1,), (1,)))
        self.assertEqual(result.solution_count, 0)
        self.assertEqual(result.solutions, [])

    def test_no_clues_means_all_black(self) -> None:
        result = search_problem(Problem("blank", (3, 3), (), ()))
        self.assertEqual(result.solutions, ["#########"])

    def test_banded_3x5(self) -> None:
        result = search_problem(BANDED_3X5)
        self.assertEqual(result.solutions, ["###.........###"])

    def test_even_grid_contains_open_layout(self) -> None:
        result = search_problem(OPEN_4X4)
        self.assertIn("." * 16, result.solutions)

    def test_every_solution_satisfies_the_rules(self) -> None:
        validator = LayoutValidator()
        for problem in (OPEN_3X3, BANDED_3X5, OPEN_4X4, NOTCHED_5X5):
            result = search_problem(problem)
            self.assertGreater(result.solution_count, 0, problem.name)
            for pattern in result.solutions:
                validation = validator.validate(problem, pattern)
                self.assertTrue(validation.ok, f"{problem.name}: {validation.messages}")

    def test_notched_layout_is_found(self) -> None:
        result = search_problem(NOTCHED_5X5, SearchConfig(verify_solutions=True))
        self.assertIn("#...#" + "." * 15 + "#...#", result.solutions)

    def test_unordered_clues_have_no_layout(self) -> None:
        result = search_problem(Problem("unordered", (3, 3), (4, 1, 5), (1, 2, 3)))
        self.assertEqual(result.solution_count, 0)
        self.assertGreater(result.violations[RuleViolation.NUMBER_WRONG_ACROSS], 0)


class SearchControlTests(unittest.TestCase):
    def test_solution_callback_sees_final_state(self) -> None:
        seen = []

        def record(state: State) -> None:
            self.assertTrue(state.is_final())
            seen.append(state.to_pattern())

        search_problem(BANDED_3X5, on_solution=record)
        self.assertEqual(seen, ["###.........###"])

    def test_max_solutions_stops_search(self) -> None:
        result = search_problem(OPEN_3X3, SearchConfig(max_solutions=1))
        self.assertTrue(result.stopped)
        self.assertEqual(result.solution_count, 1)
        self.assertIn("1 solutions", result.stop_reason)

    def test_cancellation_is_checked_before_each_commit(self) -> None:
        calls = []

        def stop() -> bool:
            calls.append(1)
            return len(calls) > 3

        result = search_problem(OPEN_3X3, should_stop=stop)
        self.assertTrue(result.stopped)
        self.assertEqual(result.stop_reason, "cancelled")
        self.assertEqual(len(calls), 4)
        self.assertEqual(result.solution_count, 0)

    def test_collect_solutions_can_be_disabled(self) -> None:
        result = search_problem(OPEN_3X3, SearchConfig(collect_solutions=False))
        self.assertEqual(result.solution_count, 1)
        self.assertEqual(result.solutions, [])

    def test_progress_is_logged_at_interval(self) -> None:
        with self.assertLogs("crossgrid.engine.search", level="INFO") as logs:
            result = LayoutSearch(OPEN_3X3, SearchConfig(progress_interval=1)).run()
        progress = [line for line in logs.output if "Errors:" in line]
        self.assertEqual(len(progress), result.error_count)

    def test_run_can_be_repeated(self) -> None:
        search = LayoutSearch(BANDED_3X5)
        first = search.run()
        second = search.run()
        self.assertEqual(first.solutions, second.solutions)
        self.assertEqual(first.error_count, second.error_count)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
