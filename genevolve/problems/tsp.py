"""
Traveling salesman problem.

A genome is a permutation of city indices; fitness is the length of the
closed tour and is minimized. The distance table is shared read-only data:
it is passed into ``fitness`` rather than stored in every genome.
"""

import random
from typing import Any, List, Optional

import numpy as np

from ..evolutionary.individual import Genotype
from ..exceptions import MissingContextError

GRID_SIZE = 500


def create_random_cities(n: int, rng: Optional[random.Random] = None) -> np.ndarray:
    """
    Place ``n`` cities at random integer points and tabulate their distances.

    Args:
        n: Number of cities
        rng: Optional random number generator

    Returns:
        n x n matrix of euclidean distances
    """
    if rng is None:
        rng = random

    cities = np.array(
        [(rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE)) for _ in range(n)],
        dtype=float,
    ).reshape(n, 2)
    deltas = cities[:, np.newaxis, :] - cities[np.newaxis, :, :]

    return np.sqrt((deltas ** 2).sum(axis=-1))


def shift_elements(genome: List[int], start: int, end: int, shift: int) -> None:
    """
    Shift the elements in ``[start, end)`` by ``shift`` positions, in place.

    Positions wrap around the length of the genome.

    Raises:
        ValueError: If ``start >= end``
    """
    if start >= end:
        raise ValueError(f"start >= end, start={start}, end={end}")

    length = len(genome)
    for i in reversed(range(start, end)):
        pos = (i + shift) % length
        genome[i], genome[pos] = genome[pos], genome[i]


def create_random_path(length: int, rng: random.Random) -> List[int]:
    path = list(range(length))
    rng.shuffle(path)
    return path


class TravelingSalesman(Genotype):
    """
    Round trip through every city.

    Attributes:
        genome: Order in which the cities are visited
    """

    def __init__(self, genome: List[int]):
        self.genome = list(genome)

    @classmethod
    def create(cls, rng: random.Random, config: Any) -> 'TravelingSalesman':
        return cls(create_random_path(config.problem_size, rng))

    @classmethod
    def create_context(cls, rng: random.Random, config: Any) -> np.ndarray:
        return create_random_cities(config.problem_size, rng)

    def mutate(self, rng: random.Random) -> None:
        """
        Swap two cities, reshuffle the tour or rotate a stretch of it.

        Tours with fewer than three cities are left untouched.
        """
        length = len(self.genome)
        if length < 3:
            return

        if rng.random() < 0.5:
            if rng.random() < 0.8:
                a = rng.randrange(length)
                b = rng.randrange(length)
                while a == b:
                    b = rng.randrange(length)
                self.genome[a], self.genome[b] = self.genome[b], self.genome[a]
            else:
                self.genome = create_random_path(length, rng)
        else:
            start = rng.randrange(length - 2)
            end = rng.randrange(start + 1, length)
            shift = rng.randrange(length)
            shift_elements(self.genome, start, end, shift)

    def crossover(self, other: 'TravelingSalesman', rng: random.Random) -> 'TravelingSalesman':
        index = rng.randrange(len(self.genome))
        return self.crossover_at(other, index)

    def crossover_at(self, other: 'TravelingSalesman', index: int) -> 'TravelingSalesman':
        """
        Keep this tour up to ``index``, then visit the remaining cities in ``other``'s order.

        The offspring is always a valid permutation.
        """
        prefix = self.genome[:index]
        visited = set(prefix)
        return TravelingSalesman(prefix + [city for city in other.genome if city not in visited])

    def fitness(self, context: Optional[Any] = None) -> float:
        """
        Length of the closed tour.

        Args:
            context: n x n distance matrix

        Raises:
            MissingContextError: If no distance matrix is supplied
        """
        if context is None:
            raise MissingContextError("Traveling salesman fitness requires a distance table")

        distances = np.asarray(context)
        tour = np.asarray(self.genome)
        return float(distances[tour, np.roll(tour, -1)].sum())

    def display(self) -> str:
        return str(self.genome)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TravelingSalesman) and self.genome == other.genome

    def __repr__(self) -> str:
        return f"TravelingSalesman({self.genome})"
