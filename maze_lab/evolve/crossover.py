import numpy as np


def single_split(parent1: np.ndarray, parent2: np.ndarray,
                 child1: np.ndarray, child2: np.ndarray,
                 size: int, rng: np.random.Generator):
    """One cut point in [1, size); the children swap tails."""
    if size < 2:
        child1[:] = parent1
        child2[:] = parent2
        return

    point = int(rng.integers(1, size))
    child1[:point] = parent1[:point]
    child1[point:] = parent2[point:]
    child2[:point] = parent2[:point]
    child2[point:] = parent1[point:]


def double_split(parent1: np.ndarray, parent2: np.ndarray,
                 child1: np.ndarray, child2: np.ndarray,
                 size: int, rng: np.random.Generator):
    """
    Two distinct cut points; the children swap the middle segment:
        child1 = p1 head + p2 middle + p1 tail
        child2 = p2 head + p1 middle + p2 tail
    Below three genes there are no two distinct inner points, so the
    parents are copied unchanged.
    """
    if size < 3:
        child1[:] = parent1
        child2[:] = parent2
        return

    point1 = int(rng.integers(1, size))
    point2 = int(rng.integers(1, size))
    while point1 == point2:
        point2 = int(rng.integers(1, size))
    if point1 > point2:
        point1, point2 = point2, point1

    child1[:point1] = parent1[:point1]
    child1[point1:point2] = parent2[point1:point2]
    child1[point2:] = parent1[point2:]

    child2[:point1] = parent2[:point1]
    child2[point1:point2] = parent1[point1:point2]
    child2[point2:] = parent2[point2:]
