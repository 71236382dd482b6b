import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.analysis import MazeAnalyzer
from maze_lab.core.board import Board, MazeState
from maze_lab.core.session import GeneratorKind, create_generator
from maze_lab.algo.binary_tree import BinaryTree
from maze_lab.algo.growing_tree import GrowingTree, STRATEGIES
from maze_lab.algo.dfs import RecursiveBacktracker
from maze_lab.algo.recursive_division import RecursiveDivision


def generate(kind, size, seed):
    board = Board(size)
    algo = create_generator(kind, board, seed=seed)
    algo.run_all(board)
    return board, algo


class TestGenerators(unittest.TestCase):
    def assertPerfect(self, board, label):
        report = MazeAnalyzer.verify(board)
        n = len(board)
        self.assertTrue(report["connected"], f"{label}: only {report['reachable']} of {n} cells reachable")
        self.assertTrue(report["symmetric"], f"{label}: wall flags disagree")
        self.assertEqual(report["passages"], n - 1, f"{label}: not a spanning tree")

    def test_every_generator_builds_a_perfect_maze(self):
        for kind in GeneratorKind:
            for size in (2, 3, 8):
                for seed in (1, 7, 42):
                    with self.subTest(generator=kind.slug, size=size, seed=seed):
                        board, _ = generate(kind, size, seed)
                        self.assertPerfect(board, f"{kind} {size}x{size} seed={seed}")

    def test_every_cell_visited(self):
        for kind in GeneratorKind:
            with self.subTest(generator=kind.slug):
                board, _ = generate(kind, 12, 5)
                self.assertTrue(all(c.visited for c in board.cells))
                self.assertTrue(all(bits & Board.CELL_VISITED for bits in board.mask))

    def test_entrance_and_exit_stay_open(self):
        for kind in GeneratorKind:
            with self.subTest(generator=kind.slug):
                board, _ = generate(kind, 6, 3)
                self.assertFalse(board.cells[board.entrance_index].walls.left)
                self.assertFalse(board.cells[board.exit_index].walls.right)

    def test_no_cursor_left_behind(self):
        for kind in GeneratorKind:
            with self.subTest(generator=kind.slug):
                board, _ = generate(kind, 6, 9)
                self.assertFalse(any(bits & Board.CELL_CURSOR for bits in board.mask))

    def test_done_is_final(self):
        for kind in GeneratorKind:
            with self.subTest(generator=kind.slug):
                board, algo = generate(kind, 5, 11)
                before = board.mask.tobytes()
                self.assertEqual(algo.step(board), MazeState.GENERATION_DONE)
                self.assertEqual(board.mask.tobytes(), before)

    def test_determinism(self):
        for kind in GeneratorKind:
            with self.subTest(generator=kind.slug):
                board1, _ = generate(kind, 10, 12345)

                board2 = Board(10)
                algo = create_generator(kind, board2, seed=12345)
                for _ in algo.run(board2):
                    pass

                self.assertEqual(board1.mask.tobytes(), board2.mask.tobytes())

    def test_binary_tree_scenario(self):
        board = Board(5)
        algo = BinaryTree(board, seed=2024)
        steps = algo.run_all(board)

        self.assertEqual(steps, 25)
        self.assertEqual(MazeAnalyzer.passages(board), 24)
        self.assertTrue(MazeAnalyzer.verify(board)["connected"])

    def test_binary_tree_bias(self):
        # Last row can only go east, last column only south
        board = Board(6)
        BinaryTree(board, seed=3).run_all(board)
        for x in range(5):
            self.assertFalse(board.cells[board.get_index(x, 5)].walls.right)
        for y in range(5):
            self.assertFalse(board.cells[board.get_index(5, y)].walls.bottom)

    def test_sidewinder_top_row_is_one_corridor(self):
        board, _ = generate(GeneratorKind.SIDEWINDER, 7, 4)
        for x in range(6):
            self.assertFalse(board.cells[x].walls.right)

    def test_growing_tree_strategies(self):
        for strategy in STRATEGIES:
            with self.subTest(strategy=strategy):
                board = Board(9)
                GrowingTree(board, seed=21, strategy=strategy).run_all(board)
                self.assertPerfect(board, f"growing tree ({strategy})")

    def test_growing_tree_unknown_strategy(self):
        with self.assertRaises(ValueError):
            GrowingTree(Board(3), strategy="widest")

    def test_recursive_division_opens_board_first(self):
        board = Board(4)
        RecursiveDivision(board, seed=1)
        self.assertEqual(MazeAnalyzer.passages(board), 2 * 4 * 3)

    def test_dfs_uses_board_path_as_stack(self):
        board = Board(6)
        algo = RecursiveBacktracker(board, seed=8)
        self.assertEqual(board.path, [board.entrance_index])
        algo.run_all(board)
        self.assertEqual(board.path, [])

    def test_step_count(self):
        board = Board(6)
        algo = RecursiveBacktracker(board, seed=42)
        steps = algo.run_all(board)
        # Every cell is pushed once and popped once
        self.assertEqual(steps, 2 * 36 - 1)


if __name__ == '__main__':
    unittest.main()
