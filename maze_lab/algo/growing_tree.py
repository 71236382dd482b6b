from typing import List, Optional

from maze_lab.core.board import Board, MazeState
from maze_lab.algo.base import Generator

STRATEGIES = ("random", "newest", "oldest", "mixed")


class GrowingTree(Generator):
    """
    Growing tree over an active list of cells.

    The strategy decides which active cell grows next:
        random: uniform pick (default, behaves like Prim)
        newest: last added (behaves like the recursive backtracker)
        oldest: first added
        mixed:  newest half of the time, random otherwise
    A cell without unvisited neighbors is retired from the active list.
    """

    def __init__(self, board: Board, seed: Optional[int] = None, strategy: str = "random"):
        super().__init__(board, seed)
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown growing tree strategy {strategy!r}, expected one of {STRATEGIES}")
        self.strategy = strategy
        start = self.rng.randrange(len(board))
        self.active: List[int] = [start]
        self.seen = {start}
        board.set_visited(start)

    def select(self) -> int:
        if self.strategy == "newest":
            return len(self.active) - 1
        if self.strategy == "oldest":
            return 0
        if self.strategy == "mixed" and self.rng.random() < 0.5:
            return len(self.active) - 1
        return self.rng.randrange(len(self.active))

    def step(self, board: Board) -> MazeState:
        if not self.active:
            return MazeState.GENERATION_DONE

        position = self.select()
        cell = self.active[position]
        board.unmark(cell, Board.CELL_CURSOR)

        free = [n for n in board.neighbors(cell) if n is not None and n not in self.seen]
        if free:
            nxt = self.rng.choice(free)
            board.remove_wall(cell, nxt)
            board.mark(nxt, Board.CELL_CURSOR)
            self.seen.add(nxt)
            self.active.append(nxt)
        else:
            del self.active[position]

        if not self.active:
            return MazeState.GENERATION_DONE
        return MazeState.GENERATE
