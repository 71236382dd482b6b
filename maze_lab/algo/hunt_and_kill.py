from enum import Enum
from typing import Optional

from maze_lab.core.board import Board, MazeState
from maze_lab.algo.base import Generator


class _Phase(Enum):
    KILL = 1
    HUNT = 2


class HuntAndKill(Generator):
    """
    Random walk into unvisited cells (kill). When the walk is stuck, scan the
    board row by row for an unvisited cell next to the visited region, join it
    to a random visited neighbor and walk on from there (hunt).
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        self.current = self.rng.randrange(len(board))
        self.visited = {self.current}
        board.set_visited(self.current)
        self.phase = _Phase.KILL

    def step(self, board: Board) -> MazeState:
        if len(self.visited) >= len(board):
            return MazeState.GENERATION_DONE
        if self.phase == _Phase.HUNT:
            return self.hunt(board)

        board.unmark(self.current, Board.CELL_CURSOR)
        free = [n for n in board.neighbors(self.current)
                if n is not None and n not in self.visited]
        if not free:
            self.phase = _Phase.HUNT
            return MazeState.GENERATE

        nxt = self.rng.choice(free)
        board.remove_wall(self.current, nxt)
        self.visited.add(nxt)
        self.current = nxt

        if len(self.visited) >= len(board):
            return MazeState.GENERATION_DONE
        board.mark(nxt, Board.CELL_CURSOR)
        return MazeState.GENERATE

    def hunt(self, board: Board) -> MazeState:
        size = board.board_size
        for y in range(size):
            for x in range(size):
                index = board.get_index(x, y)
                if index in self.visited:
                    continue
                joined = [n for n in board.neighbors(index)
                          if n is not None and n in self.visited]
                if joined:
                    board.remove_wall(index, self.rng.choice(joined))
                    self.visited.add(index)
                    self.current = index
                    self.phase = _Phase.KILL
                    if len(self.visited) >= len(board):
                        return MazeState.GENERATION_DONE
                    board.mark(index, Board.CELL_CURSOR)
                    return MazeState.GENERATE
        return MazeState.GENERATION_DONE
