import logging
from enum import Enum
from typing import List, Optional

from maze_lab.core.board import Board, MazeState
from maze_lab.algo.base import Generator, Solver

logger = logging.getLogger(__name__)

STEPS_PER_FRAME = 5
DEFAULT_BOARD_SIZE = 20


class GeneratorKind(Enum):
    RECURSIVE_BACKTRACKER = ("Recursive Backtracker", "dfs")
    KRUSKAL = ("Kruskal", "kruskal")
    ELLER = ("Eller", "eller")
    PRIM = ("Prim", "prim")
    RECURSIVE_DIVISION = ("Recursive Division", "division")
    ALDOUS_BRODER = ("Aldous-Broder", "aldous-broder")
    WILSON = ("Wilson", "wilson")
    HUNT_AND_KILL = ("Hunt and Kill", "hunt-and-kill")
    GROWING_TREE = ("Growing Tree", "growing-tree")
    BINARY_TREE = ("Binary Tree", "binary-tree")
    SIDEWINDER = ("Sidewinder", "sidewinder")

    def __init__(self, label: str, slug: str):
        self.label = label
        self.slug = slug

    def __str__(self):
        return self.label

    @classmethod
    def from_slug(cls, slug: str) -> "GeneratorKind":
        for kind in cls:
            if kind.slug == slug:
                return kind
        raise ValueError(f"Unknown generator {slug!r}")


class SolverKind(Enum):
    DIJKSTRA = ("Dijkstra", "dijkstra")
    BACKTRACKER = ("Backtracker", "backtracker")
    A_STAR = ("A*", "astar")
    DEAD_END_FILLING = ("Dead-End Filling", "deadend")
    WALL_FOLLOWER = ("Wall Follower", "wall-follower")
    GENETIC = ("Genetic", "genetic")

    def __init__(self, label: str, slug: str):
        self.label = label
        self.slug = slug

    def __str__(self):
        return self.label

    @classmethod
    def from_slug(cls, slug: str) -> "SolverKind":
        for kind in cls:
            if kind.slug == slug:
                return kind
        raise ValueError(f"Unknown solver {slug!r}")


def create_generator(kind: GeneratorKind, board: Board, seed: Optional[int] = None) -> Generator:
    if kind is GeneratorKind.RECURSIVE_BACKTRACKER:
        from maze_lab.algo.dfs import RecursiveBacktracker
        return RecursiveBacktracker(board, seed=seed)
    if kind is GeneratorKind.KRUSKAL:
        from maze_lab.algo.kruskal import Kruskal
        return Kruskal(board, seed=seed)
    if kind is GeneratorKind.ELLER:
        from maze_lab.algo.eller import Eller
        return Eller(board, seed=seed)
    if kind is GeneratorKind.PRIM:
        from maze_lab.algo.prim import PrimsAlgorithm
        return PrimsAlgorithm(board, seed=seed)
    if kind is GeneratorKind.RECURSIVE_DIVISION:
        from maze_lab.algo.recursive_division import RecursiveDivision
        return RecursiveDivision(board, seed=seed)
    if kind is GeneratorKind.ALDOUS_BRODER:
        from maze_lab.algo.aldous_broder import AldousBroder
        return AldousBroder(board, seed=seed)
    if kind is GeneratorKind.WILSON:
        from maze_lab.algo.wilson import Wilson
        return Wilson(board, seed=seed)
    if kind is GeneratorKind.HUNT_AND_KILL:
        from maze_lab.algo.hunt_and_kill import HuntAndKill
        return HuntAndKill(board, seed=seed)
    if kind is GeneratorKind.GROWING_TREE:
        from maze_lab.algo.growing_tree import GrowingTree
        return GrowingTree(board, seed=seed)
    if kind is GeneratorKind.BINARY_TREE:
        from maze_lab.algo.binary_tree import BinaryTree
        return BinaryTree(board, seed=seed)
    if kind is GeneratorKind.SIDEWINDER:
        from maze_lab.algo.sidewinder import Sidewinder
        return Sidewinder(board, seed=seed)
    raise ValueError(f"Unknown generator kind {kind!r}")


def create_solver(kind: SolverKind, board: Board, seed: Optional[int] = None) -> Solver:
    from maze_lab.algo import solvers
    if kind is SolverKind.DIJKSTRA:
        return solvers.Dijkstra(board, seed=seed)
    if kind is SolverKind.BACKTRACKER:
        return solvers.Backtracker(board, seed=seed)
    if kind is SolverKind.A_STAR:
        return solvers.AStar(board, seed=seed)
    if kind is SolverKind.DEAD_END_FILLING:
        return solvers.DeadEndFilling(board, seed=seed)
    if kind is SolverKind.WALL_FOLLOWER:
        return solvers.WallFollower(board, seed=seed)
    if kind is SolverKind.GENETIC:
        from maze_lab.algo.genetic import GeneticSolver
        return GeneticSolver(board, seed=seed)
    raise ValueError(f"Unknown solver kind {kind!r}")


class MazeSession:
    """
    Owns one board and the generator/solver currently working on it.
    A host (window loop, CLI, test) calls tick() repeatedly; each tick runs up
    to steps_per_frame steps of whichever algorithm is active.
    """

    def __init__(self, board_size: int = DEFAULT_BOARD_SIZE,
                 generator_kind: GeneratorKind = GeneratorKind.RECURSIVE_BACKTRACKER,
                 solver_kind: SolverKind = SolverKind.DIJKSTRA,
                 steps_per_frame: int = STEPS_PER_FRAME,
                 seed: Optional[int] = None):
        if steps_per_frame < 1:
            raise ValueError(f"steps_per_frame must be at least 1, got {steps_per_frame}")
        self.board_size = board_size
        self.generator_kind = generator_kind
        self.solver_kind = solver_kind
        self.steps_per_frame = steps_per_frame
        self.seed = seed
        self.board: Board = None
        self.generator: Generator = None
        self.solver: Optional[Solver] = None
        self.state = MazeState.WAIT
        self.init_maze()

    def init_maze(self):
        """Fresh fully walled board with a new generator; back to WAIT. The solver is built by start_solving()."""
        self.board = Board(self.board_size)
        self.generator = create_generator(self.generator_kind, self.board, self.seed)
        self.solver = None
        self.state = MazeState.WAIT
        logger.debug(f"New {self.board_size}x{self.board_size} maze: {self.generator_kind} / {self.solver_kind}")

    def start_generation(self):
        if self.state != MazeState.WAIT:
            self.init_maze()
        self.state = MazeState.GENERATE

    def start_solving(self):
        """Solves the current board again from scratch. The board must be generated."""
        if self.state not in (MazeState.GENERATION_DONE, MazeState.DONE, MazeState.SOLVE):
            raise RuntimeError(f"Cannot start solving in state {self.state}")
        self.board.reset_presentation()
        self.solver = create_solver(self.solver_kind, self.board, self.seed)
        self.state = MazeState.SOLVE

    def tick(self) -> MazeState:
        """
        One frame of work. Stops early when the active algorithm finishes.
        A tick after DONE returns the session to WAIT.
        """
        if self.state == MazeState.GENERATE:
            for _ in range(self.steps_per_frame):
                self.state = self.generator.step(self.board)
                if self.state == MazeState.GENERATION_DONE:
                    logger.info(f"{self.generator_kind} finished")
                    break
        elif self.state == MazeState.SOLVE:
            for _ in range(self.steps_per_frame):
                self.state = self.solver.step(self.board)
                if self.state == MazeState.DONE:
                    logger.info(f"{self.solver_kind} finished, path length {len(self.path)}")
                    break
        elif self.state == MazeState.DONE:
            self.state = MazeState.WAIT
        return self.state

    def run_generation(self) -> int:
        """Drives generation to completion. Returns the number of generator steps."""
        if self.state == MazeState.WAIT:
            self.start_generation()
        if self.state != MazeState.GENERATE:
            return 0
        steps = self.generator.run_all(self.board)
        self.state = MazeState.GENERATION_DONE
        logger.info(f"{self.generator_kind} finished in {steps} steps")
        return steps

    def run_solver(self, max_steps: Optional[int] = None) -> MazeState:
        """Drives the solver until DONE (or max_steps). MazeInvariantError propagates."""
        if self.state != MazeState.SOLVE:
            self.start_solving()
        self.state = self.solver.run_all(self.board, max_steps=max_steps)
        if self.state == MazeState.DONE:
            logger.info(f"{self.solver_kind} finished in {self.solver.step_count} steps, "
                        f"path length {len(self.path)}")
        return self.state

    @property
    def path(self) -> List[int]:
        return self.solver.get_path() if self.solver else []
