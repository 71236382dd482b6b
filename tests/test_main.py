import unittest
import sys
import os
import io
from contextlib import redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.main import main


def run(*argv):
    out = io.StringIO()
    with redirect_stdout(out):
        code = main(list(argv))
    return code, out.getvalue()


class TestMain(unittest.TestCase):
    def test_generate(self):
        code, out = run("generate", "--size", "6", "--algo", "wilson", "--seed", "3")
        self.assertEqual(code, 0)
        # Text drawing: one border line plus two lines per row
        self.assertEqual(len(out.strip().split("\n")), 13)

    def test_solve(self):
        code, out = run("solve", "--size", "6", "--generator", "eller", "--algo", "astar", "--seed", "5")
        self.assertEqual(code, 0)
        self.assertIn("Path Length:", out)
        self.assertIn("*", out)

    def test_solve_gives_up(self):
        code, _ = run("solve", "--size", "6", "--algo", "dijkstra", "--seed", "5", "--max-steps", "1")
        self.assertEqual(code, 2)

    def test_benchmark(self):
        code, out = run("benchmark", "--size", "4")
        self.assertEqual(code, 0)
        self.assertIn("Sidewinder", out)
        self.assertIn("Wall Follower", out)
        self.assertNotIn("NOT PERFECT", out)
        self.assertNotIn("error", out)

    def test_no_command(self):
        code, _ = run()
        self.assertEqual(code, 0)

    def test_unknown_algorithm(self):
        with self.assertRaises(SystemExit):
            run("generate", "--algo", "braid")


if __name__ == '__main__':
    unittest.main()
