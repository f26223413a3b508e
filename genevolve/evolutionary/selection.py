"""
Parent selection mechanisms for the GenEvolve engine.

This module implements:
- Transformed fitness: raw fitness when maximizing, 1/fitness when minimizing
- Roulette wheel selection (fitness proportionate, one spin per parent)
- Stochastic universal sampling (equally spaced pointers, one spin per batch)
- Tournament selection
- Rank selection

All selectors assume the population is sorted best-first.
"""

import math
import random
from abc import ABC, abstractmethod
from enum import Enum
from logging import getLogger
from typing import List, Optional

import numpy as np

from .individual import Individual

logger = getLogger(__name__)


class ParentSelection(str, Enum):
    """Available parent selection strategies."""
    ROULETTE_WHEEL = 'RouletteWheel'
    STOCHASTIC_UNIVERSAL_SAMPLING = 'StochasticUniversalSampling'
    TOURNAMENT_SELECTION = 'TournamentSelection'
    RANK_SELECTION = 'RankSelection'


def transformed_fitness(fitness: float, minimize: bool) -> float:
    """
    Selection weight of a raw fitness value.

    Under minimize a raw fitness of exactly 0.0 has infinite weight: such an
    individual cannot be beaten and is always preferred.
    """
    if not minimize:
        return fitness
    if fitness == 0.0:
        return math.inf
    return 1.0 / fitness


def total_fitness(population: List[Individual], minimize: bool) -> float:
    """Sum of transformed fitness across the population."""
    total = 0.0
    for individual in population:
        total += transformed_fitness(individual.fitness, minimize)
    return total


def selection_weights(population: List[Individual], minimize: bool) -> np.ndarray:
    """
    Transformed fitness of every individual as an array.

    If any weight is infinite only the infinite-weight individuals keep a
    (unit) weight, everyone else drops to zero.
    """
    weights = np.array(
        [transformed_fitness(individual.fitness, minimize) for individual in population],
        dtype=float,
    )
    infinite = np.isinf(weights)
    if infinite.any():
        return infinite.astype(float)
    return weights


def roulette_wheel_index(
    population: List[Individual],
    threshold: float,
    minimize: bool
) -> int:
    """
    Walk the population accumulating transformed fitness.

    Args:
        population: Population sorted best-first
        threshold: Point on the wheel, in [0, total_fitness]
        minimize: Optimization direction

    Returns:
        First index whose running sum reaches ``threshold`` (0 if none does)
    """
    p = 0.0
    for i, individual in enumerate(population):
        p += transformed_fitness(individual.fitness, minimize)
        if p >= threshold:
            return i
    return 0


def roulette_wheel_select(
    population: List[Individual],
    total: float,
    minimize: bool,
    rng: Optional[random.Random] = None
) -> int:
    """
    Select a parent index using roulette wheel selection.

    Args:
        population: Population sorted best-first
        total: Total transformed fitness of ``population``
        minimize: Optimization direction
        rng: Optional random number generator for reproducibility

    Returns:
        Index of the selected parent
    """
    if rng is None:
        rng = random

    if not population or not total > 0:
        logger.debug(f"Degenerate roulette wheel (total={total}), defaulting to index 0")
        return 0

    if math.isinf(total):
        # Lands on the first infinite-weight individual
        return roulette_wheel_index(population, math.inf, minimize)

    threshold = rng.uniform(0.0, total)
    return roulette_wheel_index(population, threshold, minimize)


def stochastic_universal_sampling(
    population: List[Individual],
    count: int,
    minimize: bool,
    rng: Optional[random.Random] = None
) -> List[int]:
    """
    Select ``count`` parent indices with a single spin of ``count`` equally spaced pointers.

    Args:
        population: Population sorted best-first
        count: Number of indices to select
        minimize: Optimization direction
        rng: Optional random number generator

    Returns:
        Selected indices in pointer order
    """
    if rng is None:
        rng = random

    if not population or count < 1:
        return []

    weights = selection_weights(population, minimize)
    cumulative = np.cumsum(weights)
    total = float(cumulative[-1])

    if not total > 0:
        logger.debug(f"Degenerate SUS wheel (total={total}), defaulting to index 0")
        return [0] * count

    step = total / count
    start = rng.uniform(0.0, step)
    pointers = start + step * np.arange(count)
    indices = np.searchsorted(cumulative, pointers, side='left')
    indices = np.minimum(indices, len(population) - 1)

    return [int(i) for i in indices]


def tournament_selection(
    population: List[Individual],
    tournament_size: int = 3,
    rng: Optional[random.Random] = None
) -> int:
    """
    Select a parent index using tournament selection.

    Args:
        population: Population sorted best-first
        tournament_size: Number of individuals competing in the tournament
        rng: Optional random number generator

    Returns:
        Index of the tournament winner
    """
    if rng is None:
        rng = random

    if not population:
        raise ValueError("Cannot perform tournament selection on empty population")

    tournament_size = max(1, min(tournament_size, len(population)))
    competitors = rng.sample(range(len(population)), tournament_size)

    # Best-first ordering makes the lowest index the fittest competitor
    winner = min(competitors)
    logger.debug(f"Tournament selection: {tournament_size} competitors, winner index {winner}")

    return winner


def rank_selection(
    population: List[Individual],
    rng: Optional[random.Random] = None
) -> int:
    """
    Select a parent index with probability proportional to rank.

    The best of ``N`` individuals has weight ``N``, the worst has weight 1.
    """
    if rng is None:
        rng = random

    if not population:
        return 0

    n = len(population)
    cumulative = np.cumsum(np.arange(n, 0, -1, dtype=float))
    threshold = rng.uniform(0.0, float(cumulative[-1]))
    index = int(np.searchsorted(cumulative, threshold, side='left'))

    return min(index, n - 1)


class ParentSelector(ABC):
    """
    Parent selection strategy used by the population engine.

    ``prepare`` is called once per generation on the sorted population,
    ``select`` once per parent draw.
    """

    def __init__(self):
        self.population: List[Individual] = []
        self.total_fitness = 0.0
        self.minimize = False

    def prepare(
        self,
        population: List[Individual],
        total: float,
        minimize: bool,
        rng: random.Random
    ) -> None:
        self.population = population
        self.total_fitness = total
        self.minimize = minimize

    @abstractmethod
    def select(self, rng: random.Random) -> int:
        """Return the index of the next selected parent."""


class RouletteWheelSelector(ParentSelector):

    def select(self, rng: random.Random) -> int:
        return roulette_wheel_select(self.population, self.total_fitness, self.minimize, rng)


class StochasticUniversalSelector(ParentSelector):
    """Draws a shuffled batch of one population's worth of SUS pointers at a time."""

    def __init__(self):
        super().__init__()
        self._batch: List[int] = []

    def prepare(self, population, total, minimize, rng):
        super().prepare(population, total, minimize, rng)
        self._batch = []

    def select(self, rng: random.Random) -> int:
        if not self._batch:
            self._batch = stochastic_universal_sampling(
                self.population, len(self.population), self.minimize, rng
            )
            rng.shuffle(self._batch)
            if not self._batch:
                return 0
        return self._batch.pop()


class TournamentSelector(ParentSelector):

    def __init__(self, tournament_size: int = 3):
        super().__init__()
        self.tournament_size = tournament_size

    def select(self, rng: random.Random) -> int:
        return tournament_selection(self.population, self.tournament_size, rng)


class RankSelector(ParentSelector):

    def select(self, rng: random.Random) -> int:
        return rank_selection(self.population, rng)


def create_parent_selector(strategy: ParentSelection, tournament_size: int = 3) -> ParentSelector:
    """
    Build the selector for a parent selection strategy.

    Raises:
        NotImplementedError: If the strategy has no selector
    """
    if strategy == ParentSelection.ROULETTE_WHEEL:
        return RouletteWheelSelector()
    elif strategy == ParentSelection.STOCHASTIC_UNIVERSAL_SAMPLING:
        return StochasticUniversalSelector()
    elif strategy == ParentSelection.TOURNAMENT_SELECTION:
        return TournamentSelector(tournament_size=tournament_size)
    elif strategy == ParentSelection.RANK_SELECTION:
        return RankSelector()
    raise NotImplementedError(f"Parent selection strategy not supported: {strategy}")
