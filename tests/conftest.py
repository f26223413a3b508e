"""
Shared fixtures for the GenEvolve test suite.

Provides a controllable clock, a seeded random number generator and two
tiny genotypes whose fitness is easy to reason about.
"""

import logging
import random
import sys
from pathlib import Path
from typing import Callable, List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from genevolve.config import EvolutionConfig
from genevolve.evolutionary.individual import Genotype, Individual


class FakeClock:
    """Clock that advances by ``step`` seconds on every reading."""

    def __init__(self, step: float = 0.0, start: float = 0.0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


class ValueGenotype(Genotype):
    """Genotype whose fitness is simply its stored value."""

    def __init__(self, value: float):
        self.value = value

    @classmethod
    def create(cls, rng, config):
        return cls(rng.random())

    def mutate(self, rng):
        self.value = rng.random()

    def crossover(self, other, rng):
        return ValueGenotype((self.value + other.value) / 2)

    def fitness(self, context=None):
        return self.value


class OneMax(Genotype):
    """Bit string scored by its fraction of ones."""

    def __init__(self, bits: List[int]):
        self.bits = list(bits)

    @classmethod
    def create(cls, rng, config):
        return cls([rng.randrange(2) for _ in range(config.problem_size)])

    def mutate(self, rng):
        i = rng.randrange(len(self.bits))
        self.bits[i] = 1 - self.bits[i]

    def crossover(self, other, rng):
        index = rng.randrange(len(self.bits))
        return OneMax(self.bits[:index] + other.bits[index:])

    def fitness(self, context=None):
        return sum(self.bits) / len(self.bits)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Detach handlers added by setup_logging once a test finishes."""
    yield
    logger = logging.getLogger('genevolve')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def clock_factory() -> Callable[..., FakeClock]:
    return FakeClock


@pytest.fixture
def value_genotype():
    return ValueGenotype


@pytest.fixture
def onemax():
    return OneMax


@pytest.fixture
def make_population() -> Callable[..., List[Individual]]:
    """Factory for evaluated populations with the given fitness values."""

    def _make(fitnesses, generations=None) -> List[Individual]:
        generations = generations or [0] * len(fitnesses)
        return [
            Individual(fitness=f, generation=g, genotype=ValueGenotype(f), evaluated=True)
            for f, g in zip(fitnesses, generations)
        ]

    return _make


@pytest.fixture
def small_config() -> EvolutionConfig:
    """Bounded OneMax-sized configuration that finishes quickly."""
    return EvolutionConfig(
        problem='nqueens',
        problem_size=16,
        population_size=20,
        max_generations=30,
        target_fitness=2.0,
        mutation_rate=0.2,
        crossover_rate=0.5,
        seed=7,
    )
