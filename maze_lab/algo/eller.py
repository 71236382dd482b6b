from enum import Enum
from typing import Dict, List, Optional, Set

from maze_lab.core.board import Board, MazeState
from maze_lab.core.disjoint_set import DisjointSet
from maze_lab.algo.base import Generator

JOIN_PROBABILITY = 0.5


class _Phase(Enum):
    MERGE = 1   # decide east joins of the current row
    BOTTOM = 2  # decide south joins of the current row
    LAST = 3    # last row: join every pair still in different sets


class Eller(Generator):
    """
    Eller's algorithm, one row at a time.

    Each step makes one decision for one cell. When the south pass of a row
    finishes, every set of that row that has no passage down yet gets one
    (in a single batch), so no region is cut off from the rows below.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        self.x = 0
        self.y = 0
        self.merged = DisjointSet(len(board))
        self.phase = _Phase.MERGE
        # Row bucket: set root -> cells of the current row in that set
        self.row: Dict[int, List[int]] = {}
        self.roots: List[int] = []
        self.descended: Set[int] = set()

    def step(self, board: Board) -> MazeState:
        size = board.board_size

        if self.phase == _Phase.MERGE:
            cell = board.get_index(self.x, self.y)
            neighbor = board.get_index(self.x + 1, self.y)
            board.mark(cell, Board.CELL_CURSOR)
            if not self.merged.is_joined(cell, neighbor) and self.rng.random() < JOIN_PROBABILITY:
                self.merged.join(cell, neighbor)
                board.remove_wall(cell, neighbor)
            board.unmark(cell, Board.CELL_CURSOR)

            self.x += 1
            if self.x >= size - 1:
                self.start_row_bottom(board)
            return MazeState.GENERATE

        if self.phase == _Phase.BOTTOM:
            cell = board.get_index(self.x, self.y)
            root = self.roots[self.x]
            if self.rng.random() < JOIN_PROBABILITY:
                self.carve_down(board, cell)
                self.descended.add(root)

            self.x += 1
            if self.x >= size:
                self.finish_row_bottom(board)
            return MazeState.GENERATE

        # Last row
        if self.x >= size - 1:
            return MazeState.GENERATION_DONE
        cell = board.get_index(self.x, self.y)
        neighbor = board.get_index(self.x + 1, self.y)
        if self.merged.join(cell, neighbor):
            board.remove_wall(cell, neighbor)
        self.x += 1
        if self.x >= size - 1:
            return MazeState.GENERATION_DONE
        return MazeState.GENERATE

    def start_row_bottom(self, board: Board):
        # Roots are frozen before any south join changes them
        self.row = {}
        self.roots = []
        self.descended = set()
        for x in range(board.board_size):
            cell = board.get_index(x, self.y)
            board.set_visited(cell)
            root = self.merged.root_of(cell)
            self.roots.append(root)
            self.row.setdefault(root, []).append(cell)
        self.x = 0
        self.phase = _Phase.BOTTOM

    def finish_row_bottom(self, board: Board):
        for root, cells in self.row.items():
            if root not in self.descended:
                self.carve_down(board, self.rng.choice(cells))
        self.row.clear()

        self.x = 0
        self.y += 1
        if self.y == board.board_size - 1:
            self.phase = _Phase.LAST
        else:
            self.phase = _Phase.MERGE

    def carve_down(self, board: Board, cell: int):
        below = cell + board.board_size
        self.merged.join(cell, below)
        board.remove_wall(cell, below)
