"""
N-queens problem.

A genome holds one row index per column, so two queens never share a column.
Fitness is ``C / (C + clashes)`` where ``C = n choose 2`` is the number of
queen pairs: 1.0 means no two queens attack each other.
"""

import math
import random
from typing import Any, List, Optional

from ..evolutionary.individual import Genotype


def max_pairs(n: int) -> int:
    """Number of queen pairs on an n x n board (n choose 2)."""
    return math.comb(n, 2)


def count_clashes(genome: List[int]) -> int:
    """Count queen pairs sharing a row or a diagonal."""
    clashes = 0
    for x, y in enumerate(genome):
        for i in range(x):
            other = genome[i]
            if other == y or abs(other - y) == abs(x - i):
                clashes += 1
    return clashes


class NQueens(Genotype):
    """
    Queen placement on an n x n board.

    Attributes:
        genome: Row of the queen in each column
    """

    def __init__(self, genome: List[int]):
        self.genome = list(genome)
        self.problem_size = len(self.genome)
        self.max_clashes = max_pairs(self.problem_size)

    @classmethod
    def create(cls, rng: random.Random, config: Any) -> 'NQueens':
        n = config.problem_size
        return cls([rng.randrange(n) for _ in range(n)])

    def mutate(self, rng: random.Random) -> None:
        """Either move one queen to a random row or swap two queens."""
        a = rng.randrange(self.problem_size)
        b = rng.randrange(self.problem_size)

        if rng.random() < 0.5:
            self.genome[a] = b
        else:
            self.genome[a], self.genome[b] = self.genome[b], self.genome[a]

    def crossover(self, other: 'NQueens', rng: random.Random) -> 'NQueens':
        """One-point crossover at a random index."""
        index = rng.randrange(self.problem_size)
        return self.crossover_at(other, index)

    def crossover_at(self, other: 'NQueens', index: int) -> 'NQueens':
        """Offspring with this genome before ``index`` and ``other``'s from ``index`` on."""
        return NQueens(self.genome[:index] + other.genome[index:])

    def fitness(self, context: Optional[Any] = None) -> float:
        if self.max_clashes == 0:
            return 1.0
        clashes = count_clashes(self.genome)
        return self.max_clashes / (self.max_clashes + clashes)

    def to_grid(self) -> List[List[int]]:
        grid = [[0] * self.problem_size for _ in range(self.problem_size)]
        for x, y in enumerate(self.genome):
            grid[y][x] = 1
        return grid

    def display(self) -> str:
        return '\n'.join(str(row) for row in self.to_grid())

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NQueens) and self.genome == other.genome

    def __repr__(self) -> str:
        return f"NQueens({self.genome})"
