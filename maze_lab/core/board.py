from array import array
from enum import Enum
from typing import List, Optional, Tuple


class MazeState(Enum):
    WAIT = "Waiting"
    GENERATE = "Generating"
    GENERATION_DONE = "Generation Done"
    SOLVE = "Solving"
    DONE = "Done"

    def __str__(self):
        return self.value


class Direction(Enum):
    # Value is the position of the neighbor in Board.neighbors()
    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    def rotate_cw(self) -> "Direction":
        return _CLOCKWISE[self]

    def rotate_ccw(self) -> "Direction":
        return _COUNTER_CLOCKWISE[self]


_OPPOSITE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}
_CLOCKWISE = {
    Direction.NORTH: Direction.EAST,
    Direction.EAST: Direction.SOUTH,
    Direction.SOUTH: Direction.WEST,
    Direction.WEST: Direction.NORTH,
}
_COUNTER_CLOCKWISE = {v: k for k, v in _CLOCKWISE.items()}


class MazeInvariantError(RuntimeError):
    """Raised by a solver when the board breaks an assumption it relies on
    (exit unreachable, a loop where a tree was expected, ...)."""


class Walls:
    __slots__ = ('top', 'right', 'bottom', 'left')

    def __init__(self):
        self.top = True
        self.right = True
        self.bottom = True
        self.left = True

    def get(self, direction: Direction) -> bool:
        if direction is Direction.NORTH:
            return self.top
        if direction is Direction.SOUTH:
            return self.bottom
        if direction is Direction.EAST:
            return self.right
        return self.left

    def set(self, direction: Direction, present: bool):
        if direction is Direction.NORTH:
            self.top = present
        elif direction is Direction.SOUTH:
            self.bottom = present
        elif direction is Direction.EAST:
            self.right = present
        else:
            self.left = present

    def __repr__(self):
        return f"Walls(top={self.top}, right={self.right}, bottom={self.bottom}, left={self.left})"


class Cell:
    __slots__ = ('x', 'y', 'visited', 'walls')

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.visited = False
        self.walls = Walls()

    def direction(self, other: "Cell") -> Direction:
        """Cardinal direction from this cell to an orthogonally adjacent `other`."""
        dx = other.x - self.x
        dy = other.y - self.y
        if dx == 0 and dy == -1:
            return Direction.NORTH
        if dx == 0 and dy == 1:
            return Direction.SOUTH
        if dx == 1 and dy == 0:
            return Direction.EAST
        if dx == -1 and dy == 0:
            return Direction.WEST
        raise ValueError(f"Cells ({self.x}, {self.y}) and ({other.x}, {other.y}) are not adjacent")

    def count_walls(self) -> int:
        w = self.walls
        return int(w.top) + int(w.right) + int(w.bottom) + int(w.left)

    def is_dead_end(self) -> bool:
        return self.count_walls() == 3

    def __repr__(self):
        return f"Cell({self.x}, {self.y}, visited={self.visited}, {self.walls!r})"


class Board:
    # Bitmask mirror (one 32-bit word per cell, read by renderers)
    WALL_TOP    = 1 << 0
    WALL_RIGHT  = 1 << 1
    WALL_BOTTOM = 1 << 2
    WALL_LEFT   = 1 << 3
    CELL_VISITED   = 1 << 4
    CELL_BACKTRACK = 1 << 5
    CELL_CURSOR    = 1 << 6

    # Path segments
    PATH_HORIZONTAL = 1 << 7
    PATH_VERTICAL   = 1 << 8
    PATH_UP_LEFT    = 1 << 9
    PATH_UP_RIGHT   = 1 << 10
    PATH_DOWN_LEFT  = 1 << 11
    PATH_DOWN_RIGHT = 1 << 12
    START_LEFT  = 1 << 13
    START_RIGHT = 1 << 14
    START_UP    = 1 << 15
    START_DOWN  = 1 << 16
    END_LEFT  = 1 << 17
    END_RIGHT = 1 << 18
    END_UP    = 1 << 19
    END_DOWN  = 1 << 20

    # Wilson walk arrows
    ARROW_LEFT  = 1 << 21
    ARROW_RIGHT = 1 << 22
    ARROW_UP    = 1 << 23
    ARROW_DOWN  = 1 << 24

    CROSSED = 1 << 25
    CELL_WEIGHT = 1 << 26
    USE_WALL_FOLLOWER_PATH = 1 << 27

    ALL_WALLS = WALL_TOP | WALL_RIGHT | WALL_BOTTOM | WALL_LEFT
    PATH_BITS = (PATH_HORIZONTAL | PATH_VERTICAL | PATH_UP_LEFT | PATH_UP_RIGHT
                 | PATH_DOWN_LEFT | PATH_DOWN_RIGHT
                 | START_LEFT | START_RIGHT | START_UP | START_DOWN
                 | END_LEFT | END_RIGHT | END_UP | END_DOWN)
    ARROW_BITS = ARROW_LEFT | ARROW_RIGHT | ARROW_UP | ARROW_DOWN

    WALL_BIT = {
        Direction.NORTH: WALL_TOP,
        Direction.SOUTH: WALL_BOTTOM,
        Direction.EAST: WALL_RIGHT,
        Direction.WEST: WALL_LEFT,
    }
    ARROW_BIT = {
        Direction.NORTH: ARROW_UP,
        Direction.SOUTH: ARROW_DOWN,
        Direction.EAST: ARROW_RIGHT,
        Direction.WEST: ARROW_LEFT,
    }

    __slots__ = ('board_size', 'cells', 'path', 'mask')

    def __init__(self, board_size: int):
        if board_size < 2:
            raise ValueError(f"Board size must be at least 2, got {board_size}")
        self.board_size = board_size
        self.cells: List[Cell] = [Cell(x, y) for y in range(board_size) for x in range(board_size)]
        # Scratch stack, used as the cursor stack by the recursive backtracker
        self.path: List[int] = [0]
        self.mask = array('I', [self.ALL_WALLS] * (board_size * board_size))

        self.cells[0].walls.left = False
        self.mask[0] = (self.mask[0] & ~self.WALL_LEFT) | self.START_LEFT

        last = len(self.cells) - 1
        self.cells[last].walls.right = False
        self.mask[last] = (self.mask[last] & ~self.WALL_RIGHT) | self.END_RIGHT

    @property
    def entrance_index(self) -> int:
        return 0

    @property
    def exit_index(self) -> int:
        return len(self.cells) - 1

    def __len__(self):
        return len(self.cells)

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.board_size and 0 <= y < self.board_size:
            index = y * self.board_size + x
            cell = self.cells[index]
            if cell.x != x or cell.y != y:
                raise IndexError(f"Cell at index {index} is ({cell.x}, {cell.y}), expected ({x}, {y})")
            return index
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def neighbors(self, index: int) -> Tuple[Optional[int], Optional[int], Optional[int], Optional[int]]:
        """
        Returns (north, south, east, west) neighbor indices, None at the edges.
        Walls are NOT checked.
        """
        cell = self.cells[index]
        size = self.board_size
        return (
            index - size if cell.y > 0 else None,
            index + size if cell.y < size - 1 else None,
            index + 1 if cell.x < size - 1 else None,
            index - 1 if cell.x > 0 else None,
        )

    def neighbor(self, index: int, direction: Direction) -> Optional[int]:
        return self.neighbors(index)[direction.value]

    def is_open(self, index: int, direction: Direction) -> bool:
        """True if there is a passage to an in-board neighbor in `direction`."""
        return (not self.cells[index].walls.get(direction)
                and self.neighbors(index)[direction.value] is not None)

    def open_neighbors(self, index: int) -> List[int]:
        walls = self.cells[index].walls
        return [n for d, n in zip(Direction, self.neighbors(index))
                if n is not None and not walls.get(d)]

    def remove_wall(self, cell: int, neighbor: int):
        """
        Removes the wall between two adjacent cells on both sides and marks
        both cells visited. This is the only way walls get cleared.
        """
        direction = self.cells[cell].direction(self.cells[neighbor])
        self.cells[cell].walls.set(direction, False)
        self.cells[neighbor].walls.set(direction.opposite, False)
        self.mask[cell] &= ~self.WALL_BIT[direction]
        self.mask[neighbor] &= ~self.WALL_BIT[direction.opposite]
        self.set_visited(cell)
        self.set_visited(neighbor)

    def add_wall(self, cell: int, neighbor: int):
        direction = self.cells[cell].direction(self.cells[neighbor])
        self.cells[cell].walls.set(direction, True)
        self.cells[neighbor].walls.set(direction.opposite, True)
        self.mask[cell] |= self.WALL_BIT[direction]
        self.mask[neighbor] |= self.WALL_BIT[direction.opposite]

    def set_visited(self, index: int):
        self.cells[index].visited = True
        self.mask[index] |= self.CELL_VISITED

    def mark(self, index: int, bits: int):
        self.mask[index] |= bits

    def unmark(self, index: int, bits: int):
        self.mask[index] &= ~bits

    def clear_marks(self, bits: int):
        keep = ~bits
        for i in range(len(self.mask)):
            self.mask[i] &= keep

    def reset_presentation(self):
        """Drops every presentation bit except walls and visited, before a new solve."""
        self.clear_marks(~(self.ALL_WALLS | self.CELL_VISITED) & 0xFFFFFFFF)
        self.mask[0] |= self.START_LEFT
        self.mask[self.exit_index] |= self.END_RIGHT
