from enum import Enum
from typing import Dict, List, Optional, Set

from maze_lab.core.board import Board, Direction, MazeState
from maze_lab.algo.base import Generator


class _Phase(Enum):
    SEARCH = 1
    FOLLOW_PATH = 2


class Wilson(Generator):
    """
    Wilson's algorithm (loop-erased random walks).

    SEARCH: random walk from a cell outside the tree, remembering the direction
    taken out of every cell. Walking back onto the current walk erases the loop.
    FOLLOW_PATH: once the walk touches the tree, retrace it from its start and
    carve one cell per step until the tree is reached again.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        target = self.rng.randrange(len(board))
        board.set_visited(target)

        self.tree: Set[int] = {target}
        self.available: Set[int] = set(range(len(board)))
        self.available.discard(target)

        self.walk: Dict[int, Direction] = {}
        self.trail: List[int] = []
        self.start = self.pick_start()
        self.current = self.start
        self.trail.append(self.start)
        self.phase = _Phase.SEARCH

    def pick_start(self) -> int:
        # sorted() so a seed gives the same maze regardless of set ordering
        return self.rng.choice(sorted(self.available))

    def step(self, board: Board) -> MazeState:
        if not self.available:
            return MazeState.GENERATION_DONE
        if self.phase == _Phase.SEARCH:
            return self.search(board)
        return self.follow_path(board)

    def search(self, board: Board) -> MazeState:
        last = self.current
        board.unmark(last, Board.CELL_CURSOR)

        options = [(d, n) for d, n in zip(Direction, board.neighbors(last)) if n is not None]
        direction, nxt = self.rng.choice(options)

        board.unmark(last, Board.ARROW_BITS)
        board.mark(last, Board.ARROW_BIT[direction])
        self.walk[last] = direction

        if nxt in self.tree:
            self.current = self.start
            self.phase = _Phase.FOLLOW_PATH
            return MazeState.GENERATE

        if nxt in self.walk:
            # Loop: erase everything walked since nxt was first entered
            while self.trail[-1] != nxt:
                erased = self.trail.pop()
                del self.walk[erased]
                board.unmark(erased, Board.ARROW_BITS | Board.CELL_BACKTRACK)
        else:
            self.trail.append(nxt)

        self.current = nxt
        board.mark(nxt, Board.CELL_CURSOR | Board.CELL_BACKTRACK)
        return MazeState.GENERATE

    def follow_path(self, board: Board) -> MazeState:
        last = self.current
        board.unmark(last, Board.CELL_BACKTRACK)
        self.tree.add(last)
        self.available.discard(last)

        direction = self.walk[last]
        nxt = board.neighbors(last)[direction.value]
        board.remove_wall(last, nxt)
        self.current = nxt

        if self.current in self.tree:
            board.clear_marks(Board.CELL_CURSOR | Board.CELL_BACKTRACK | Board.ARROW_BITS)
            if not self.available:
                return MazeState.GENERATION_DONE
            self.walk.clear()
            self.start = self.pick_start()
            self.current = self.start
            self.trail = [self.start]
            self.phase = _Phase.SEARCH
        return MazeState.GENERATE
