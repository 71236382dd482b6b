from typing import List, Optional

from maze_lab.core.board import Board, MazeState
from maze_lab.algo.base import Generator

CLOSE_PROBABILITY = 0.5


class Sidewinder(Generator):
    """
    Row by row. The top row is one corridor. In every other row cells are
    collected into a run carved east; closing a run opens north from one
    random cell of it.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        self.x = 0
        self.y = 0
        self.run_cells: List[int] = []

    def step(self, board: Board) -> MazeState:
        size = board.board_size
        if self.y >= size:
            return MazeState.GENERATION_DONE

        cell = board.get_index(self.x, self.y)
        board.unmark(cell, Board.CELL_CURSOR)
        last_column = self.x == size - 1

        if self.y == 0:
            if not last_column:
                board.remove_wall(cell, cell + 1)
        else:
            self.run_cells.append(cell)
            if last_column or self.rng.random() < CLOSE_PROBABILITY:
                chosen = self.rng.choice(self.run_cells)
                board.remove_wall(chosen, chosen - size)
                self.run_cells = []
            else:
                board.remove_wall(cell, cell + 1)

        self.x += 1
        if self.x >= size:
            self.x = 0
            self.y += 1
        if self.y >= size:
            return MazeState.GENERATION_DONE

        board.mark(board.get_index(self.x, self.y), Board.CELL_CURSOR)
        return MazeState.GENERATE
