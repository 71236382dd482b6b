from typing import Optional

from maze_lab.core.board import Board, MazeState
from maze_lab.algo.base import Generator


class RecursiveBacktracker(Generator):
    """Randomized depth-first search. Uses board.path as the explicit stack."""

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        self.current = board.entrance_index
        board.path = [self.current]
        board.set_visited(self.current)
        board.mark(self.current, Board.CELL_CURSOR)

    def step(self, board: Board) -> MazeState:
        stack = board.path
        if not stack:
            return MazeState.GENERATION_DONE

        board.unmark(self.current, Board.CELL_CURSOR)

        # Find unvisited neighbors
        free = [n for n in board.neighbors(self.current)
                if n is not None and not board.cells[n].visited]

        if free:
            nxt = self.rng.choice(free)
            board.remove_wall(self.current, nxt)
            board.mark(nxt, Board.CELL_BACKTRACK | Board.CELL_CURSOR)
            stack.append(nxt)
            self.current = nxt
            return MazeState.GENERATE

        # Backtrack
        board.unmark(stack.pop(), Board.CELL_BACKTRACK)
        if not stack:
            return MazeState.GENERATION_DONE
        self.current = stack[-1]
        board.mark(self.current, Board.CELL_CURSOR)
        return MazeState.GENERATE
