import logging
from enum import IntEnum
from typing import List, Optional, Set

import numpy as np

from maze_lab.core.board import Board, Direction, MazeState
from maze_lab.core.path import draw_path
from maze_lab.evolve.crossover import double_split
from maze_lab.evolve.population import GenotypeInitializer, Phenotype, Population
from maze_lab.algo.base import Solver

logger = logging.getLogger(__name__)

POPULATION_SIZE = 1000
MUTATION_RATE = 0.02

# Fitness weights
DISTANCE = 100.0
MISSED_STEPS = 0.3
DEAD_ENDS = 10.0
BACKWALK_PENALTY = 0.5
LENGTH_PENALTY = 0.01
REACHED_END_BONUS = 1000.0


class Move(IntEnum):
    """One gene: a turn relative to the current facing."""
    FORWARD = 0
    LEFT = 1
    RIGHT = 2

    def turn(self, facing: Direction) -> Direction:
        if self is Move.LEFT:
            return facing.rotate_ccw()
        if self is Move.RIGHT:
            return facing.rotate_cw()
        return facing


class MoveInitializer(GenotypeInitializer):
    def initial_genotypes(self, genotype: np.ndarray, rng: np.random.Generator):
        genotype[:] = rng.integers(0, len(Move), size=len(genotype))


class MazeParam:
    """Fitness parameter handed to every PathEvolver."""

    def __init__(self, board_size: int):
        self.board_size = board_size


class PathEvolver(Phenotype):
    gene_dtype = np.uint8
    initializer = MoveInitializer()

    def __init__(self, index: int):
        super().__init__(index)
        self.reset()

    def reset(self):
        self.calc_fitness = 0.0
        self.cell = 0
        self.x = 0
        self.y = 0
        self.facing = Direction.EAST
        self.path: List[int] = [0]
        self.seen: Set[int] = {0}
        self.backwalks = 0
        self.dead_ends = 0
        self.missed_steps = 0
        self.reached_end = False

    def replay(self, board: Board, genotype: np.ndarray):
        """Walks the board from the entrance, one gene at a time, until the genes run out or the exit is reached."""
        self.reset()
        for gene in genotype:
            if self.reached_end:
                break
            self.move(board, Move(int(gene)))

    def move(self, board: Board, gene: Move):
        direction = gene.turn(self.facing)

        if board.is_open(self.cell, direction):
            backwalk_logged = False
            # One gene runs down the whole corridor
            while board.is_open(self.cell, direction):
                nxt = board.neighbor(self.cell, direction)
                if not backwalk_logged and nxt in self.seen:
                    self.backwalks += 1
                    backwalk_logged = True

                cell = board.cells[nxt]
                self.cell, self.x, self.y = nxt, cell.x, cell.y
                self.facing = direction
                self.path.append(nxt)
                self.seen.add(nxt)

                # stop at junctions
                if cell.count_walls() <= 1:
                    break
        else:
            self.missed_steps += 1

        if board.cells[self.cell].is_dead_end():
            self.dead_ends += 1
        if self.cell == board.exit_index:
            self.reached_end = True

    def fitness(self, genotype: np.ndarray, maze: MazeParam):
        dx = abs(maze.board_size - 1 - self.x)
        dy = abs(maze.board_size - 1 - self.y)
        score = (maze.board_size * 2.0 - (dx + dy)) * DISTANCE

        score += len(self.path) * 2.0
        score -= self.missed_steps * MISSED_STEPS
        score -= self.dead_ends * DEAD_ENDS
        score -= self.backwalks * BACKWALK_PENALTY
        score -= len(self.path) * LENGTH_PENALTY

        if self.reached_end:
            score += REACHED_END_BONUS
        self.calc_fitness = max(score, 0.0)

    @staticmethod
    def mutate(genotype: np.ndarray, rng: np.random.Generator):
        hit = rng.random(len(genotype)) < MUTATION_RATE
        count = int(hit.sum())
        if count:
            genotype[hit] = rng.integers(0, len(Move), size=count)

    @staticmethod
    def crossover(parent1, parent2, child1, child2, size, rng):
        double_split(parent1, parent2, child1, child2, size, rng)


class GeneticSolver(Solver):
    """
    Evolves move sequences of board_size**2 genes. Each step replays every
    individual against the board and breeds one generation. Done as soon as
    the fittest individual reaches the exit.
    """

    def __init__(self, board: Board, seed: Optional[int] = None,
                 population_size: int = POPULATION_SIZE):
        super().__init__(board, seed)
        self.population = Population(PathEvolver, population_size, board.board_size ** 2, seed)
        self.maze = MazeParam(board.board_size)
        self.winner: Optional[PathEvolver] = None
        self.path = [board.entrance_index]

    @property
    def generation(self) -> int:
        return self.population.generation

    def step(self, board: Board) -> MazeState:
        if self.winner is not None and self.winner.reached_end:
            return MazeState.DONE

        self.population.for_each_phenotype_mut(lambda p, genotype: p.replay(board, genotype))
        self.population.evolve(self.maze)

        phenotypes = self.population.get_phenotypes()
        self.winner = phenotypes[self.population.fittest_index()]
        self.path = self.winner.path
        draw_path(board, self.path)

        if self.winner.reached_end:
            logger.info("Genetic solver reached the exit after %d generations", self.generation)
            return MazeState.DONE
        return MazeState.SOLVE
