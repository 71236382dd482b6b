import logging
from typing import List, Optional, Set, Tuple

from maze_lab.core.board import Board, Direction, MazeInvariantError, MazeState
from maze_lab.core.path import clear_direction, draw_path, update_path
from maze_lab.algo.base import Solver

logger = logging.getLogger(__name__)


class Dijkstra(Solver):
    """
    Two phases.
    Search: one breadth layer per step, weight[entrance] = 1, +1 per layer.
    Path: walk back from the exit, always to an open neighbor one weight lower.
    The finished path is reversed so it runs entrance -> exit.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        self.weights: List[Optional[int]] = [None] * len(board)
        self.weights[board.entrance_index] = 1
        board.mark(board.entrance_index, Board.CELL_WEIGHT)
        self.positions = [board.entrance_index]
        self.reached_end = False
        self.solved = False

    def step(self, board: Board) -> MazeState:
        if self.solved:
            return MazeState.DONE
        if not self.reached_end:
            return self.search(board)
        return self.walk_back(board)

    def search(self, board: Board) -> MazeState:
        layer = []
        for index in self.positions:
            weight = self.weights[index]
            for n in board.open_neighbors(index):
                if self.weights[n] is None:
                    self.weights[n] = weight + 1
                    board.mark(n, Board.CELL_WEIGHT)
                    layer.append(n)
                    if n == board.exit_index:
                        self.reached_end = True
                        self.path = [n]

        if not layer and not self.reached_end:
            raise MazeInvariantError("Dijkstra: exit is not reachable from the entrance")
        self.positions = layer
        return MazeState.SOLVE

    def walk_back(self, board: Board) -> MazeState:
        index = self.path[-1]
        target = self.weights[index] - 1
        lower = [n for n in board.open_neighbors(index) if self.weights[n] == target]
        if not lower:
            raise MazeInvariantError(f"Dijkstra: no lower weighted neighbor at cell {index}")

        self.path.append(lower[0])
        update_path(board, self.path)

        if lower[0] == board.entrance_index:
            self.path.reverse()
            draw_path(board, self.path)
            self.solved = True
            return MazeState.DONE
        return MazeState.SOLVE


class Backtracker(Solver):
    """Randomized depth-first search with an explicit path stack."""

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        self.path = [board.entrance_index]
        self.positions: Set[int] = {board.entrance_index}

    def choose(self, board: Board, candidates: List[int]) -> int:
        return self.rng.choice(candidates)

    def step(self, board: Board) -> MazeState:
        if self.path and self.path[-1] == board.exit_index:
            return MazeState.DONE
        if not self.path:
            raise MazeInvariantError(f"{type(self).__name__}: exit is not reachable from the entrance")

        current = self.path[-1]
        free = [n for n in board.open_neighbors(current) if n not in self.positions]

        if free:
            cell = self.choose(board, free)
            self.path.append(cell)
            self.positions.add(cell)
            update_path(board, self.path)
            if cell == board.exit_index:
                return MazeState.DONE
            return MazeState.SOLVE

        clear_direction(board, self.path.pop())
        if not self.path:
            raise MazeInvariantError(f"{type(self).__name__}: exit is not reachable from the entrance")
        update_path(board, self.path)
        return MazeState.SOLVE


class AStar(Backtracker):
    """
    Greedy best-first: always the unvisited open neighbor closest to the exit
    by Manhattan distance, backtracking when stuck. There is no cost term.
    """

    def choose(self, board: Board, candidates: List[int]) -> int:
        # min() keeps the first of equally close cells (neighbor order)
        return min(candidates, key=lambda n: self.heuristic(board, n))

    @staticmethod
    def heuristic(board: Board, index: int) -> int:
        cell = board.cells[index]
        last = board.board_size - 1
        return (last - cell.x) + (last - cell.y)


class DeadEndFilling(Solver):
    """
    Fills every dead end (entrance and exit excepted) and keeps filling while
    the fill creates new dead ends. The unfilled cells left over are the
    solution corridor, which is then walked from the entrance.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        ends = (board.entrance_index, board.exit_index)
        self.dead_ends = [i for i, cell in enumerate(board.cells)
                          if i not in ends and cell.is_dead_end()]
        self.filled: Set[int] = set()
        self.on_path: Set[int] = set()
        self.current: Optional[int] = None
        logger.debug("DeadEndFilling: %d dead ends on a %dx%d board",
                     len(self.dead_ends), board.board_size, board.board_size)

    def unfilled_neighbors(self, board: Board, index: int) -> List[int]:
        return [n for n in board.open_neighbors(index)
                if n not in self.filled and n not in self.on_path]

    def step(self, board: Board) -> MazeState:
        if self.path and self.path[-1] == board.exit_index:
            return MazeState.DONE
        if self.dead_ends:
            self.fill(board)
            return MazeState.SOLVE
        return self.walk(board)

    def fill(self, board: Board):
        cell = self.dead_ends.pop()
        self.current = cell
        if cell in self.filled:
            return
        remaining = self.unfilled_neighbors(board, cell)
        if len(remaining) != 1:
            # Still a junction; a later fill pushes it again
            return

        nxt = remaining[0]
        if nxt != board.entrance_index and nxt != board.exit_index:
            self.dead_ends.append(nxt)
        self.filled.add(cell)
        board.mark(cell, Board.CROSSED)

    def walk(self, board: Board) -> MazeState:
        if not self.path:
            self.path.append(board.entrance_index)
            self.on_path.add(board.entrance_index)

        current = self.path[-1]
        candidates = self.unfilled_neighbors(board, current)
        if len(candidates) != 1:
            raise MazeInvariantError(
                f"DeadEndFilling: expected exactly one open corridor at cell {current}, "
                f"found {candidates}; the maze is not simply connected")

        nxt = candidates[0]
        self.path.append(nxt)
        self.on_path.add(nxt)
        update_path(board, self.path)
        if nxt == board.exit_index:
            board.clear_marks(Board.CROSSED)
            return MazeState.DONE
        return MazeState.SOLVE


class WallFollower(Solver):
    """
    Left-hand rule. Turn left whenever the left side is open, otherwise
    rotate clockwise until the way ahead is open. The raw walk is collapsed
    into a simple path once the exit is reached.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        super().__init__(board, seed)
        self.facing = Direction.EAST
        self.walk: List[int] = [board.entrance_index]
        self.path = self.walk
        self.seen: Set[Tuple[int, Direction]] = set()
        self.solved = False

    def step(self, board: Board) -> MazeState:
        if self.solved:
            return MazeState.DONE

        index = self.walk[-1]
        left = self.facing.rotate_ccw()
        if board.is_open(index, left):
            self.facing = left
        else:
            for _ in range(3):
                if board.is_open(index, self.facing):
                    break
                self.facing = self.facing.rotate_cw()
            else:
                raise MazeInvariantError(f"WallFollower: cell {index} has no open side")

        state = (index, self.facing)
        if state in self.seen:
            raise MazeInvariantError(
                f"WallFollower: walking in circles at cell {index}; exit is not reachable")
        self.seen.add(state)

        self.walk.append(board.neighbor(index, self.facing))
        update_path(board, self.walk)

        if self.walk[-1] == board.exit_index:
            self.path = self.collapse(self.walk)
            board.mark(board.entrance_index, Board.USE_WALL_FOLLOWER_PATH)
            draw_path(board, self.path)
            self.solved = True
            return MazeState.DONE
        return MazeState.SOLVE

    @staticmethod
    def collapse(walk: List[int]) -> List[int]:
        """Drops every there-and-back excursion of the walk."""
        clean: List[int] = []
        for index in walk:
            if len(clean) >= 2 and clean[-2] == index:
                clean.pop()
            elif not clean or clean[-1] != index:
                clean.append(index)
        return clean
