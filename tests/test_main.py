import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

import debug_main
import main
from crossgrid.data.examples import EXAMPLE_SOLUTION


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.tmp = Path(self._tmpdir.name)
        self.problem_path = self.tmp / "banded.txt"
        self.problem_path.write_text("BANDED: 3x5\nA: 1,4,5\nD: 1,2,3\n", encoding="utf-8")

    def run_main(self, *argv: str) -> str:
        out = io.StringIO()
        with redirect_stdout(out):
            main.main(["--log-level", "WARNING", *argv])
        return out.getvalue()

    def test_example_layout_is_accepted(self) -> None:
        output = self.run_main("--example")
        self.assertIn("Problem: EXAMPLE (15x15)", output)
        self.assertIn("layout ok", output)

    def test_explicit_check(self) -> None:
        output = self.run_main("--example", "--check", EXAMPLE_SOLUTION)
        self.assertIn("layout ok", output)

    def test_bad_check_exits_with_error(self) -> None:
        flipped = "#" + EXAMPLE_SOLUTION[1:-1] + "#"
        with self.assertRaises(SystemExit) as ctx:
            self.run_main("--example", "--check", flipped)
        self.assertEqual(ctx.exception.code, 1)

    def test_search_writes_json_output(self) -> None:
        output_path = self.tmp / "out.json"
        self.run_main(str(self.problem_path), "--quiet", "--output", str(output_path))
        payload = json.loads(output_path.read_text(encoding="utf-8"))
        self.assertEqual(payload["backend"], "backtrack")
        self.assertEqual(payload["solution_count"], 1)
        self.assertEqual(payload["solutions"], ["###.........###"])
        self.assertFalse(payload["stopped"])

    def test_cp_sat_backend(self) -> None:
        output_path = self.tmp / "out.json"
        output = self.run_main(
            str(self.problem_path), "--backend", "cp-sat", "--output", str(output_path)
        )
        self.assertIn("solutions: 1", output)
        payload = json.loads(output_path.read_text(encoding="utf-8"))
        self.assertEqual(payload["solutions"], ["###.........###"])

    def test_store_run(self) -> None:
        store_dir = self.tmp / "store"
        output_path = self.tmp / "out.json"
        self.run_main(
            str(self.problem_path),
            "--quiet",
            "--store",
            "--store-dir",
            str(store_dir),
            "--output",
            str(output_path),
        )
        payload = json.loads(output_path.read_text(encoding="utf-8"))
        self.assertTrue((store_dir / f"{payload['store_id']}.json").exists())

    def test_unreadable_problem_file(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main.main([str(self.tmp / "missing.txt")])
        self.assertEqual(ctx.exception.code, 2)


class DebugMainTests(unittest.TestCase):
    def test_example_solution_replays(self) -> None:
        with redirect_stdout(io.StringIO()):
            self.assertTrue(debug_main.check_example_solution())

    def test_step_push_stops_at_first_violation(self) -> None:
        with redirect_stdout(io.StringIO()):
            state = debug_main.prepare_state(problem_text="TINY: 3x5\nA: 1,4,5\nD: 1,2,3")
            debug_main.step_push(state, "##.")
        self.assertEqual(len(state.fields), 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
