import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.analysis import MazeAnalyzer
from maze_lab.core.board import Board
from maze_lab.core.session import GeneratorKind, create_generator


class TestAnalysis(unittest.TestCase):
    def test_fresh_board(self):
        board = Board(4)
        report = MazeAnalyzer.verify(board)
        self.assertEqual(report["cells"], 16)
        self.assertEqual(report["reachable"], 1)
        self.assertFalse(report["connected"])
        self.assertEqual(report["passages"], 0)
        self.assertTrue(report["symmetric"])
        self.assertFalse(report["is_perfect"])

    def test_generated_board_is_perfect(self):
        board = Board(10)
        create_generator(GeneratorKind.HUNT_AND_KILL, board, seed=77).run_all(board)
        report = MazeAnalyzer.verify(board)
        self.assertTrue(report["is_perfect"])
        self.assertEqual(report["passages"], 99)

    def test_loop_is_not_perfect(self):
        board = Board(2)
        board.remove_wall(0, 1)
        board.remove_wall(1, 3)
        board.remove_wall(3, 2)
        board.remove_wall(2, 0)
        report = MazeAnalyzer.verify(board)
        self.assertTrue(report["connected"])
        self.assertEqual(report["passages"], 4)
        self.assertFalse(report["is_perfect"])

    def test_one_sided_wall_is_caught(self):
        board = Board(3)
        board.cells[4].walls.right = False
        self.assertFalse(MazeAnalyzer.is_symmetric(board))

    def test_mask_mismatch_is_caught(self):
        board = Board(3)
        board.mask[4] &= ~Board.WALL_TOP
        self.assertFalse(MazeAnalyzer.is_symmetric(board))

    def test_stats_cover_every_cell(self):
        board = Board(12)
        create_generator(GeneratorKind.RECURSIVE_BACKTRACKER, board, seed=8).run_all(board)
        stats = MazeAnalyzer.calculate_stats(board)
        total = stats["dead_ends"] + stats["corridors"] + stats["intersections"]
        self.assertEqual(total, len(board))
        self.assertGreater(stats["dead_ends"], 0)
        self.assertAlmostEqual(stats["dead_end_percent"], stats["dead_ends"] / 144 * 100)

    def test_reachable_from_cell(self):
        board = Board(3)
        board.remove_wall(4, 5)
        self.assertEqual(MazeAnalyzer.reachable(board, 4), 2)
        self.assertEqual(MazeAnalyzer.reachable(board), 1)


class TestValidPath(unittest.TestCase):
    def setUp(self):
        self.board = Board(3)
        for a, b in [(0, 1), (1, 2), (2, 5), (5, 8)]:
            self.board.remove_wall(a, b)

    def test_valid(self):
        self.assertTrue(MazeAnalyzer.is_valid_path(self.board, [0, 1, 2, 5, 8]))

    def test_rejections(self):
        self.assertFalse(MazeAnalyzer.is_valid_path(self.board, []))
        self.assertFalse(MazeAnalyzer.is_valid_path(self.board, [1, 2, 5, 8]))
        self.assertFalse(MazeAnalyzer.is_valid_path(self.board, [0, 1, 2, 5]))
        # Walks through a wall
        self.assertFalse(MazeAnalyzer.is_valid_path(self.board, [0, 3, 4, 5, 8]))
        # Jumps
        self.assertFalse(MazeAnalyzer.is_valid_path(self.board, [0, 2, 5, 8]))


if __name__ == '__main__':
    unittest.main()
