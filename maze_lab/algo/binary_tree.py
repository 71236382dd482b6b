from typing import Optional

from maze_lab.core.board import Board, MazeState
from maze_lab.algo.base import Generator

EAST_PROBABILITY = 0.5


class BinaryTree(Generator):
    """Visits cells in row-major order and opens each one either east or south."""

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        self.x = 0
        self.y = 0

    def step(self, board: Board) -> MazeState:
        size = board.board_size
        if self.y >= size:
            return MazeState.GENERATION_DONE

        cell = board.get_index(self.x, self.y)
        board.unmark(cell, Board.CELL_CURSOR)

        can_east = self.x < size - 1
        can_south = self.y < size - 1
        if can_east and (not can_south or self.rng.random() < EAST_PROBABILITY):
            board.remove_wall(cell, cell + 1)
        elif can_south:
            board.remove_wall(cell, cell + size)

        self.x += 1
        if self.x >= size:
            self.x = 0
            self.y += 1
        if self.y >= size:
            return MazeState.GENERATION_DONE

        board.mark(board.get_index(self.x, self.y), Board.CELL_CURSOR)
        return MazeState.GENERATE
