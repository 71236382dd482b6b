from typing import List, Optional, Tuple

from maze_lab.core.board import Board, Direction, MazeState
from maze_lab.core.disjoint_set import DisjointSet
from maze_lab.algo.base import Generator


class Kruskal(Generator):
    """
    Randomized Kruskal: every interior edge once, in shuffled order. An edge is
    carved only when it joins two different regions, so no loop can form.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        # Each cell owns the edge to its north and to its west neighbor
        self.edges: List[Tuple[int, Direction]] = []
        for y in range(board.board_size):
            for x in range(board.board_size):
                index = board.get_index(x, y)
                if y > 0:
                    self.edges.append((index, Direction.NORTH))
                if x > 0:
                    self.edges.append((index, Direction.WEST))
        self.rng.shuffle(self.edges)
        self.merged = DisjointSet(len(board))
        self.carved = 0

    def step(self, board: Board) -> MazeState:
        if not self.edges:
            return MazeState.GENERATION_DONE

        index, direction = self.edges.pop()
        neighbor = board.neighbor(index, direction)
        if self.merged.join(index, neighbor):
            board.remove_wall(index, neighbor)
            self.carved += 1

        if not self.edges:
            return MazeState.GENERATION_DONE
        return MazeState.GENERATE
