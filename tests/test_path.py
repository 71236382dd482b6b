import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_lab.core.board import Board, Cell
from maze_lab.core.path import (
    PathDirection, clear_direction, direction, draw_path, update_path
)


class TestPathDirection(unittest.TestCase):
    def test_straight(self):
        self.assertEqual(direction(Cell(1, 1), Cell(0, 1), Cell(2, 1)), PathDirection.HORIZONTAL)
        self.assertEqual(direction(Cell(1, 1), Cell(1, 2), Cell(1, 0)), PathDirection.VERTICAL)

    def test_corners(self):
        #  c n
        #  p
        self.assertEqual(direction(Cell(0, 0), Cell(0, 1), Cell(1, 0)), PathDirection.DOWN_RIGHT)
        # Order of prev / next does not matter
        self.assertEqual(direction(Cell(0, 0), Cell(1, 0), Cell(0, 1)), PathDirection.DOWN_RIGHT)
        self.assertEqual(direction(Cell(1, 0), Cell(0, 0), Cell(1, 1)), PathDirection.DOWN_LEFT)
        self.assertEqual(direction(Cell(1, 1), Cell(1, 0), Cell(2, 1)), PathDirection.UP_RIGHT)
        self.assertEqual(direction(Cell(1, 1), Cell(0, 1), Cell(1, 0)), PathDirection.UP_LEFT)

    def test_start_and_end(self):
        self.assertEqual(direction(Cell(0, 0), None, Cell(1, 0)), PathDirection.START_RIGHT)
        self.assertEqual(direction(Cell(0, 0), None, Cell(0, 1)), PathDirection.START_DOWN)
        self.assertEqual(direction(Cell(1, 1), Cell(1, 0), None), PathDirection.END_UP)
        self.assertEqual(direction(Cell(1, 1), Cell(0, 1), None), PathDirection.END_LEFT)

    def test_backtrack(self):
        self.assertEqual(direction(Cell(1, 1), Cell(1, 0), Cell(1, 0)), PathDirection.BACKTRACK)

    def test_no_direction(self):
        with self.assertRaises(ValueError):
            direction(Cell(0, 0), None, None)
        with self.assertRaises(ValueError):
            direction(Cell(0, 0), None, Cell(2, 2))


class TestPathBits(unittest.TestCase):
    def test_update_path(self):
        board = Board(3)
        path = [0, 1]
        update_path(board, path)
        self.assertTrue(board.mask[0] & Board.START_RIGHT)
        self.assertTrue(board.mask[1] & Board.END_LEFT)

        path.append(4)
        update_path(board, path)
        self.assertTrue(board.mask[1] & Board.PATH_DOWN_LEFT)
        self.assertFalse(board.mask[1] & Board.END_LEFT)
        self.assertTrue(board.mask[4] & Board.END_UP)

    def test_pop_then_update(self):
        board = Board(3)
        path = [0, 1, 2]
        update_path(board, path)
        clear_direction(board, path.pop())
        update_path(board, path)

        self.assertFalse(board.mask[2] & Board.PATH_BITS)
        self.assertTrue(board.mask[1] & Board.END_LEFT)
        self.assertFalse(board.mask[1] & Board.PATH_HORIZONTAL)

    def test_draw_path(self):
        board = Board(3)
        board.mark(7, Board.PATH_VERTICAL)
        draw_path(board, [0, 1, 2, 5, 8])

        self.assertFalse(board.mask[7] & Board.PATH_BITS, "Old path bits must be cleared")
        self.assertTrue(board.mask[0] & Board.START_RIGHT)
        self.assertTrue(board.mask[1] & Board.PATH_HORIZONTAL)
        self.assertTrue(board.mask[2] & Board.PATH_DOWN_LEFT)
        self.assertTrue(board.mask[5] & Board.PATH_VERTICAL)
        self.assertTrue(board.mask[8] & Board.END_UP)

    def test_bit_matches_board(self):
        self.assertEqual(PathDirection.UP_LEFT.bit, Board.PATH_UP_LEFT)
        self.assertEqual(PathDirection.BACKTRACK.bit, Board.CROSSED)


if __name__ == '__main__':
    unittest.main()
