from typing import List, NamedTuple, Optional

from maze_lab.core.board import Board, MazeState
from maze_lab.algo.base import Generator

SPLIT_PROBABILITY = 0.5


class Area(NamedTuple):
    # start inclusive, end exclusive
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0


class RecursiveDivision(Generator):
    """
    Works the other way round: the board is opened completely, then each step
    splits one rectangular area with a wall that has a single gap. Sub-areas
    wider and taller than one cell go back on the stack.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        size = board.board_size
        for y in range(size):
            for x in range(size):
                index = board.get_index(x, y)
                if x < size - 1:
                    board.remove_wall(index, index + 1)
                if y < size - 1:
                    board.remove_wall(index, index + size)
        self.areas: List[Area] = [Area(0, 0, size, size)]

    def step(self, board: Board) -> MazeState:
        if not self.areas:
            return MazeState.GENERATION_DONE

        area = self.areas.pop()
        # Wall sits after row y / column x, the gap is at column x / row y
        y = self.rng.randrange(area.y0, area.y1 - 1)
        x = self.rng.randrange(area.x0, area.x1 - 1)

        if area.width < area.height:
            horizontal = True
        elif area.width > area.height:
            horizontal = False
        else:
            horizontal = self.rng.random() < SPLIT_PROBABILITY

        if horizontal:
            self.split_horizontal(board, area, x, y)
        else:
            self.split_vertical(board, area, x, y)

        if not self.areas:
            return MazeState.GENERATION_DONE
        return MazeState.GENERATE

    def split_horizontal(self, board: Board, area: Area, gap: int, y: int):
        for x in range(area.x0, area.x1):
            if x != gap:
                cell = board.get_index(x, y)
                board.add_wall(cell, cell + board.board_size)

        if y - area.y0 > 0:
            self.areas.append(Area(area.x0, area.y0, area.x1, y + 1))
        if area.y1 - (y + 2) > 0:
            self.areas.append(Area(area.x0, y + 1, area.x1, area.y1))

    def split_vertical(self, board: Board, area: Area, x: int, gap: int):
        for y in range(area.y0, area.y1):
            if y != gap:
                cell = board.get_index(x, y)
                board.add_wall(cell, cell + 1)

        if x - area.x0 > 0:
            self.areas.append(Area(area.x0, area.y0, x + 1, area.y1))
        if area.x1 - (x + 2) > 0:
            self.areas.append(Area(x + 1, area.y0, area.x1, area.y1))
