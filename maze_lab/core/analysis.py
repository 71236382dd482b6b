from collections import deque
from typing import Dict, Sequence

from maze_lab.core.board import Board, Direction


class MazeAnalyzer:
    @staticmethod
    def reachable(board: Board, start: int = None) -> int:
        """Number of cells a flood fill from `start` (default: entrance) reaches through open walls."""
        if start is None:
            start = board.entrance_index
        seen = {start}
        queue = deque([start])
        while queue:
            index = queue.popleft()
            for n in board.open_neighbors(index):
                if n not in seen:
                    seen.add(n)
                    queue.append(n)
        return len(seen)

    @staticmethod
    def passages(board: Board) -> int:
        """Open interior walls, each counted once (east and south of every cell)."""
        count = 0
        for index in range(len(board)):
            if board.is_open(index, Direction.EAST):
                count += 1
            if board.is_open(index, Direction.SOUTH):
                count += 1
        return count

    @staticmethod
    def is_symmetric(board: Board) -> bool:
        """Every wall flag agrees with its neighbor's facing flag and with the bitmask mirror."""
        for index, cell in enumerate(board.cells):
            for direction, n in zip(Direction, board.neighbors(index)):
                present = cell.walls.get(direction)
                if bool(board.mask[index] & Board.WALL_BIT[direction]) != present:
                    return False
                if n is not None and board.cells[n].walls.get(direction.opposite) != present:
                    return False
        return True

    @staticmethod
    def verify(board: Board) -> Dict:
        total = len(board)
        reached = MazeAnalyzer.reachable(board)
        passages = MazeAnalyzer.passages(board)
        connected = reached == total
        return {
            "cells": total,
            "reachable": reached,
            "connected": connected,
            "passages": passages,
            "symmetric": MazeAnalyzer.is_symmetric(board),
            # A connected graph with n - 1 edges is a tree
            "is_perfect": connected and passages == total - 1,
        }

    @staticmethod
    def calculate_stats(board: Board) -> Dict:
        dead_ends = 0
        intersections = 0  # 0, 1 walls
        corridors = 0  # 2 walls

        for cell in board.cells:
            walls = cell.count_walls()
            if walls == 3:
                dead_ends += 1
            elif walls == 2:
                corridors += 1
            elif walls <= 1:
                intersections += 1

        total = len(board)
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }

    @staticmethod
    def is_valid_path(board: Board, path: Sequence[int]) -> bool:
        """Starts at the entrance, ends at the exit, and every step crosses an open wall."""
        if not path or path[0] != board.entrance_index or path[-1] != board.exit_index:
            return False
        for a, b in zip(path, path[1:]):
            if b not in board.open_neighbors(a):
                return False
        return True
