from typing import Optional

from maze_lab.core.board import Board, MazeState
from maze_lab.algo.base import Generator


class AldousBroder(Generator):
    """Pure random walk; a wall is removed only when the walk enters an unvisited cell."""

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        self.current = self.rng.randrange(len(board))
        self.visited = {self.current}
        board.set_visited(self.current)
        board.mark(self.current, Board.CELL_CURSOR)

    def step(self, board: Board) -> MazeState:
        if len(self.visited) >= len(board):
            return MazeState.GENERATION_DONE

        neighbors = [n for n in board.neighbors(self.current) if n is not None]
        nxt = self.rng.choice(neighbors)
        if nxt not in self.visited:
            board.remove_wall(self.current, nxt)
            self.visited.add(nxt)

        board.unmark(self.current, Board.CELL_CURSOR)
        self.current = nxt

        if len(self.visited) >= len(board):
            return MazeState.GENERATION_DONE
        board.mark(nxt, Board.CELL_CURSOR)
        return MazeState.GENERATE
