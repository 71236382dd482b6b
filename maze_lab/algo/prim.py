from typing import List, Optional, Set, Tuple

from maze_lab.core.board import Board, MazeState
from maze_lab.algo.base import Generator


class PrimsAlgorithm(Generator):
    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        start = self.rng.randrange(len(board))
        board.set_visited(start)

        # Frontier: List of (cell, visited neighbor it will be carved to)
        self.frontier: List[Tuple[int, int]] = []
        # Every cell that is in the tree or waiting in the frontier
        self.seen: Set[int] = {start}
        self.add_frontier(board, start)

    def add_frontier(self, board: Board, index: int):
        for n in board.neighbors(index):
            if n is not None and n not in self.seen:
                self.seen.add(n)
                self.frontier.append((n, index))
                board.mark(n, Board.CELL_CURSOR)

    def step(self, board: Board) -> MazeState:
        if not self.frontier:
            return MazeState.GENERATION_DONE

        # Pick random cell from frontier, swap remove for O(1)
        idx = self.rng.randrange(len(self.frontier))
        cell, parent = self.frontier[idx]
        self.frontier[idx] = self.frontier[-1]
        self.frontier.pop()

        board.remove_wall(cell, parent)
        board.unmark(cell, Board.CELL_CURSOR)
        self.add_frontier(board, cell)

        if not self.frontier:
            return MazeState.GENERATION_DONE
        return MazeState.GENERATE
