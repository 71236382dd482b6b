import random
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from maze_lab.core.board import Board, MazeState


class Generator(ABC):
    """
    Carves a maze into a fully walled Board, one bounded step at a time.
    Subclasses may prepare the board in __init__ (e.g. mark a start cell).
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        self.seed = seed
        self.rng = random.Random(seed)
        self.step_count = 0

    @abstractmethod
    def step(self, board: Board) -> MazeState:
        """Returns GENERATE while work remains and GENERATION_DONE once the maze is complete."""
        pass

    def run(self, board: Board) -> Iterator[MazeState]:
        state = MazeState.GENERATE
        while state != MazeState.GENERATION_DONE:
            state = self.step(board)
            self.step_count += 1
            yield state

    def run_all(self, board: Board, max_steps: Optional[int] = None) -> int:
        """Helper to run the generator to completion (or max_steps). Returns the number of steps."""
        for _ in self.run(board):
            if max_steps is not None and self.step_count >= max_steps:
                break
        return self.step_count


class Solver(ABC):
    """
    Finds an entrance -> exit path over a generated Board, one step at a time.
    step() raises MazeInvariantError when the board breaks its assumptions.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        self.seed = seed
        self.rng = random.Random(seed)
        self.path: List[int] = []
        self.step_count = 0

    @abstractmethod
    def step(self, board: Board) -> MazeState:
        pass

    def get_path(self) -> List[int]:
        return self.path

    def run(self, board: Board) -> Iterator[MazeState]:
        state = MazeState.SOLVE
        while state != MazeState.DONE:
            state = self.step(board)
            self.step_count += 1
            yield state

    def run_all(self, board: Board, max_steps: Optional[int] = None) -> MazeState:
        """Steps until DONE, or until max_steps have been taken. Returns the last state."""
        state = MazeState.SOLVE
        for state in self.run(board):
            if max_steps is not None and self.step_count >= max_steps:
                break
        return state
