"""
Individuals and the genotype capability set.

A problem representation plugs into the engine by subclassing ``Genotype``.
The engine never looks inside a genotype: it only creates, mutates, crosses
over, evaluates and displays it. ``Individual`` wraps one genotype with the
fitness the engine computed for it and the generation it was born in.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional


class Genotype(ABC):
    """
    Encoded representation of one candidate solution.

    Subclasses must keep ``crossover`` free of aliasing: the returned genotype
    owns all of its state and shares nothing mutable with either parent.
    """

    @classmethod
    @abstractmethod
    def create(cls, rng: random.Random, config: Any) -> 'Genotype':
        """
        Construct a random genotype.

        Args:
            rng: Random number generator owned by the engine
            config: Run configuration (problem size etc.)

        Returns:
            A new genotype
        """

    @classmethod
    def create_context(cls, rng: random.Random, config: Any) -> Optional[Any]:
        """
        Build the shared read-only data the fitness function needs.

        Representations whose fitness is self-contained return None.
        """
        return None

    @abstractmethod
    def mutate(self, rng: random.Random) -> None:
        """Mutate this genotype in place."""

    @abstractmethod
    def crossover(self, other: 'Genotype', rng: random.Random) -> 'Genotype':
        """Produce a new, independent offspring from this genotype and ``other``."""

    @abstractmethod
    def fitness(self, context: Optional[Any] = None) -> float:
        """
        Evaluate the fitness of this genotype.

        Args:
            context: Optional shared data (e.g. a distance table)

        Returns:
            Scalar fitness score
        """

    def display(self) -> str:
        """Human readable form used for diagnostic reporting."""
        return str(self)


@dataclass
class Individual:
    """
    One member of the population.

    Attributes:
        fitness: Last evaluated fitness (0.0 until evaluated)
        generation: Generation in which this individual was produced
        genotype: The wrapped genotype
        evaluated: Whether ``fitness`` reflects the current genotype
    """
    fitness: float
    generation: int
    genotype: Genotype
    evaluated: bool = False

    def evaluate(self, context: Optional[Any] = None) -> None:
        """Set ``fitness`` from the genotype's fitness function."""
        self.fitness = float(self.genotype.fitness(context))
        self.evaluated = True

    def mutate(self, rng: random.Random) -> None:
        """Mutate the genotype in place; the stored fitness becomes stale."""
        self.genotype.mutate(rng)
        self.evaluated = False

    def crossover(self, other: 'Individual', generation_tag: int, rng: random.Random) -> 'Individual':
        """
        Cross this individual with ``other``.

        Args:
            other: Second parent (may be ``self`` to produce a copy)
            generation_tag: Generation stamped on the offspring
            rng: Random number generator

        Returns:
            Unevaluated offspring with fitness 0.0
        """
        return Individual(
            fitness=0.0,
            generation=generation_tag,
            genotype=self.genotype.crossover(other.genotype, rng),
        )

    def __str__(self) -> str:
        return f"Individual {{ F: {self.fitness:.3f}, G: {self.generation} }}"


def is_better_or_equal(a: Individual, b: Individual, minimize: bool) -> bool:
    """Minimize-aware comparison of two evaluated individuals."""
    if minimize:
        return a.fitness <= b.fitness
    return a.fitness >= b.fitness


def is_target_reached(fitness: float, target: float, minimize: bool) -> bool:
    if minimize:
        return fitness <= target
    return fitness >= target


def evaluate_population(population: List[Individual], context: Optional[Any] = None) -> int:
    """
    Evaluate every individual whose fitness is stale.

    Returns:
        Number of fitness evaluations performed
    """
    count = 0
    for individual in population:
        if not individual.evaluated:
            individual.evaluate(context)
            count += 1
    return count


def sort_population(population: List[Individual], minimize: bool) -> None:
    """Sort in place, best individual first."""
    population.sort(key=lambda individual: individual.fitness, reverse=not minimize)
