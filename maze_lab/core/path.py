from enum import Enum
from typing import Optional, Sequence

from maze_lab.core.board import Board, Cell


class PathDirection(Enum):
    UP_LEFT = Board.PATH_UP_LEFT
    UP_RIGHT = Board.PATH_UP_RIGHT
    DOWN_LEFT = Board.PATH_DOWN_LEFT
    DOWN_RIGHT = Board.PATH_DOWN_RIGHT
    HORIZONTAL = Board.PATH_HORIZONTAL
    VERTICAL = Board.PATH_VERTICAL
    START_LEFT = Board.START_LEFT
    START_RIGHT = Board.START_RIGHT
    START_UP = Board.START_UP
    START_DOWN = Board.START_DOWN
    END_LEFT = Board.END_LEFT
    END_RIGHT = Board.END_RIGHT
    END_UP = Board.END_UP
    END_DOWN = Board.END_DOWN
    # The path turns straight back on itself (prev == next)
    BACKTRACK = Board.CROSSED

    @property
    def bit(self) -> int:
        return self.value


def direction(current: Cell, prev: Optional[Cell], nxt: Optional[Cell]) -> PathDirection:
    """
    Classifies how a path passes through `current`.

    Corner names describe the two sides of the cell the path touches, e.g.
    DOWN_RIGHT joins the bottom and right edges:

        +---+---+
        | c | n |
        +---+---+
        | p |
        +---+
    """
    if prev is not None and nxt is not None:
        if prev.x == nxt.x and prev.y == nxt.y:
            return PathDirection.BACKTRACK
        if current.x == prev.x == nxt.x:
            return PathDirection.VERTICAL
        if current.y == prev.y == nxt.y:
            return PathDirection.HORIZONTAL

        sides = {_side(current, prev), _side(current, nxt)}
        if sides == {"down", "right"}:
            return PathDirection.DOWN_RIGHT
        if sides == {"down", "left"}:
            return PathDirection.DOWN_LEFT
        if sides == {"up", "right"}:
            return PathDirection.UP_RIGHT
        if sides == {"up", "left"}:
            return PathDirection.UP_LEFT
    elif nxt is not None:
        return {
            "right": PathDirection.START_RIGHT,
            "left": PathDirection.START_LEFT,
            "down": PathDirection.START_DOWN,
            "up": PathDirection.START_UP,
        }[_side(current, nxt)]
    elif prev is not None:
        return {
            "left": PathDirection.END_LEFT,
            "right": PathDirection.END_RIGHT,
            "up": PathDirection.END_UP,
            "down": PathDirection.END_DOWN,
        }[_side(current, prev)]
    raise ValueError(f"No path direction for cell ({current.x}, {current.y})")


def _side(current: Cell, other: Cell) -> str:
    if other.x > current.x and other.y == current.y:
        return "right"
    if other.x < current.x and other.y == current.y:
        return "left"
    if other.y > current.y and other.x == current.x:
        return "down"
    if other.y < current.y and other.x == current.x:
        return "up"
    raise ValueError(f"Cells ({current.x}, {current.y}) and ({other.x}, {other.y}) are not in line")


def clear_direction(board: Board, index: int):
    board.unmark(index, Board.PATH_BITS | Board.CROSSED)


def update_path(board: Board, path: Sequence[int]):
    """
    Refreshes the mirror bits of the last two cells of a growing path.
    Called after every push; after a pop call clear_direction() on the removed cell first.
    """
    cells = board.cells
    if len(path) >= 3:
        seg = direction(cells[path[-2]], cells[path[-3]], cells[path[-1]])
        clear_direction(board, path[-2])
        board.mark(path[-2], seg.bit)
        seg = direction(cells[path[-1]], cells[path[-2]], None)
        clear_direction(board, path[-1])
        board.mark(path[-1], seg.bit)
    elif len(path) == 2:
        seg = direction(cells[path[0]], None, cells[path[1]])
        clear_direction(board, path[0])
        board.mark(path[0], seg.bit)
        seg = direction(cells[path[1]], cells[path[0]], None)
        clear_direction(board, path[1])
        board.mark(path[1], seg.bit)
    elif len(path) == 1:
        clear_direction(board, path[0])


def draw_path(board: Board, path: Sequence[int]):
    """Rewrites the path bits of the whole board for `path`."""
    board.clear_marks(Board.PATH_BITS | Board.CROSSED)
    cells = board.cells
    last = len(path) - 1
    for i, index in enumerate(path):
        prev = cells[path[i - 1]] if i > 0 else None
        nxt = cells[path[i + 1]] if i < last else None
        if prev is None and nxt is None:
            continue
        board.mark(index, direction(cells[index], prev, nxt).bit)
