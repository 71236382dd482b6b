import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Tuple, Type

import numpy as np

logger = logging.getLogger(__name__)

TOURNAMENT_SIZE = 3


class GenotypeInitializer(ABC):
    """Fills a fresh genotype slice in place."""

    @abstractmethod
    def initial_genotypes(self, genotype: np.ndarray, rng: np.random.Generator):
        pass


class PrintableAsciiInitializer(GenotypeInitializer):
    """Byte genes, uniform over the printable ASCII range 32..126."""

    def initial_genotypes(self, genotype: np.ndarray, rng: np.random.Generator):
        genotype[:] = rng.integers(32, 127, size=len(genotype))


class Phenotype(ABC):
    """
    Decoded individual. Holds only its slot index and whatever state fitness()
    derives; the genes live in the Population's arena.

    Subclasses set `gene_dtype` (numpy dtype of one gene) and `initializer`
    (a GenotypeInitializer for that gene type).
    """
    gene_dtype: Any = np.uint8
    initializer: GenotypeInitializer = PrintableAsciiInitializer()

    def __init__(self, index: int):
        self._index = index
        self.calc_fitness = 0.0

    def index(self) -> int:
        return self._index

    def get_fitness(self) -> float:
        return self.calc_fitness

    @abstractmethod
    def fitness(self, genotype: np.ndarray, param: Any):
        """Evaluates `genotype` and stores the score for get_fitness()."""
        pass

    @staticmethod
    @abstractmethod
    def mutate(genotype: np.ndarray, rng: np.random.Generator):
        pass

    @staticmethod
    @abstractmethod
    def crossover(parent1: np.ndarray, parent2: np.ndarray,
                  child1: np.ndarray, child2: np.ndarray,
                  size: int, rng: np.random.Generator):
        pass

    @abstractmethod
    def reset(self):
        pass


class Population:
    """
    Fixed-size population over a flat genotype arena.

    Individual i owns arena[i * genome_length:(i + 1) * genome_length].
    evolve() writes the next generation into a second arena and swaps the two,
    so parents are never overwritten while children are being bred.
    """

    def __init__(self, phenotype_cls: Type[Phenotype], population_size: int,
                 genome_length: int, seed: Optional[int] = None):
        if population_size < 1:
            raise ValueError(f"Population size must be at least 1, got {population_size}")
        if genome_length < 1:
            raise ValueError(f"Genome length must be at least 1, got {genome_length}")

        self.phenotype_cls = phenotype_cls
        self.population_size = population_size
        self.genome_length = genome_length
        self.rng = np.random.default_rng(seed)

        arena_size = population_size * genome_length
        self.genotype_arena = np.zeros(arena_size, dtype=phenotype_cls.gene_dtype)
        self.next_gen_arena = np.zeros(arena_size, dtype=phenotype_cls.gene_dtype)
        for start in range(0, arena_size, genome_length):
            phenotype_cls.initializer.initial_genotypes(
                self.genotype_arena[start:start + genome_length], self.rng)

        self.phenotypes: List[Phenotype] = [phenotype_cls(i) for i in range(population_size)]
        self.generation = 0
        self._stale = False

    def __len__(self):
        return self.population_size

    def _slice(self, arena: np.ndarray, index: int) -> np.ndarray:
        start = index * self.genome_length
        return arena[start:start + self.genome_length]

    def get_genotype(self, phenotype: Phenotype) -> np.ndarray:
        """Read-only view of the phenotype's genes in the current arena."""
        view = self._slice(self.genotype_arena, phenotype.index())
        view.flags.writeable = False
        return view

    def get_phenotypes(self) -> List[Phenotype]:
        return self.phenotypes

    def for_each_phenotype_mut(self, func: Callable[[Phenotype, np.ndarray], None]):
        """Calls func(phenotype, genotype) for every individual; the genotype is read-only."""
        for p in self.phenotypes:
            func(p, self.get_genotype(p))

    def evolve(self, param: Any):
        self.calculate_fitness(param)
        self.create_next_generation()
        self.genotype_arena, self.next_gen_arena = self.next_gen_arena, self.genotype_arena
        self._stale = True
        self.generation += 1
        logger.debug("Generation %d: max fitness %.2f", self.generation, self.max_fitness())

    def calculate_fitness(self, param: Any):
        for p in self.phenotypes:
            p.fitness(self.get_genotype(p), param)
        self._stale = False

    def select_parent_by_tournament(self) -> int:
        best = int(self.rng.integers(self.population_size))
        best_fitness = self.phenotypes[best].get_fitness()
        for _ in range(1, TOURNAMENT_SIZE):
            contender = int(self.rng.integers(self.population_size))
            fitness = self.phenotypes[contender].get_fitness()
            # Strict: ties keep the earlier draw
            if fitness > best_fitness:
                best, best_fitness = contender, fitness
        return best

    def create_next_generation(self):
        cls = self.phenotype_cls
        size = self.genome_length

        # Elitism: the fittest genotype survives unmodified in slot 0
        self._slice(self.next_gen_arena, 0)[:] = self._slice(self.genotype_arena, self.fittest_index())

        slot = 1
        while slot < self.population_size:
            parent1 = self._slice(self.genotype_arena, self.select_parent_by_tournament())
            parent2 = self._slice(self.genotype_arena, self.select_parent_by_tournament())

            child1 = self._slice(self.next_gen_arena, slot)
            if slot + 1 < self.population_size:
                child2 = self._slice(self.next_gen_arena, slot + 1)
            else:
                # Odd leftover slot: breed a pair, keep the first child
                child2 = np.empty(size, dtype=cls.gene_dtype)

            cls.crossover(parent1, parent2, child1, child2, size, self.rng)
            cls.mutate(child1, self.rng)
            cls.mutate(child2, self.rng)
            slot += 2

    def fittest_index(self) -> int:
        # argmax keeps the lowest index among equal scores
        return int(np.argmax([p.get_fitness() for p in self.phenotypes]))

    def fittest(self) -> Tuple[float, np.ndarray]:
        """
        (fitness, copy of genotype) of the best evaluated individual.
        After evolve() the scores describe the previous arena, whose best
        genotype now sits in slot 0.
        """
        index = self.fittest_index()
        slot = 0 if self._stale else index
        return self.phenotypes[index].get_fitness(), self._slice(self.genotype_arena, slot).copy()

    def max_fitness(self) -> float:
        return max(p.get_fitness() for p in self.phenotypes)
