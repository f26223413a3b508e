"""
Survivor selection for the GenEvolve engine.

The population model decides how much of the old population the new pool
replaces each generation:
- Generational: the new pool replaces everything
- Steady state: the best part of the new pool replaces either the worst
  (fitness based) or the oldest (age based) members of the old population
"""

from enum import Enum
from logging import getLogger
from typing import List

from .individual import Individual, sort_population

logger = getLogger(__name__)


class PopulationModel(str, Enum):
    """Available population models."""
    STEADY_STATE = 'SteadyState'
    GENERATIONAL = 'Generational'


class SurvivorSelection(str, Enum):
    """Available survivor selection strategies (steady-state model only)."""
    AGE_BASED = 'AgeBased'
    FITNESS_BASED = 'FitnessBased'


def replace_generational(
    population: List[Individual],
    new_generation: List[Individual]
) -> List[Individual]:
    """The new generation becomes the population verbatim."""
    return new_generation


def replace_steady_state(
    population: List[Individual],
    new_generation: List[Individual],
    replacement_count: int,
    strategy: SurvivorSelection,
    minimize: bool
) -> List[Individual]:
    """
    Merge the best of ``new_generation`` into ``population``.

    Args:
        population: Current population, sorted best-first
        new_generation: Evaluated offspring pool, sorted best-first
        replacement_count: Number of old members to replace
        strategy: Which old members are displaced
        minimize: Optimization direction

    Returns:
        Merged population of the original size, sorted best-first

    Raises:
        NotImplementedError: If the survivor strategy is unknown
    """
    count = max(0, min(replacement_count, len(population), len(new_generation)))
    newcomers = new_generation[:count]

    if strategy == SurvivorSelection.FITNESS_BASED:
        # Sorted best-first, so the worst members sit at the tail
        survivors = population[:len(population) - count]
    elif strategy == SurvivorSelection.AGE_BASED:
        # Oldest first, the worse of two equally old members goes first
        sign = -1.0 if minimize else 1.0
        by_age = sorted(population, key=lambda ind: (ind.generation, sign * ind.fitness))
        oldest = set(id(ind) for ind in by_age[:count])
        survivors = [ind for ind in population if id(ind) not in oldest]
    else:
        raise NotImplementedError(f"Survivor selection strategy not supported: {strategy}")

    merged = survivors + newcomers
    sort_population(merged, minimize)

    logger.debug(f"Steady-state replacement ({strategy.value}): {count} of {len(population)} replaced")
    return merged


def select_survivors(
    population: List[Individual],
    new_generation: List[Individual],
    model: PopulationModel,
    strategy: SurvivorSelection,
    replacement_count: int,
    minimize: bool
) -> List[Individual]:
    """
    Dispatch on the population model.

    Raises:
        NotImplementedError: If the population model is unknown
    """
    if model == PopulationModel.GENERATIONAL:
        return replace_generational(population, new_generation)
    elif model == PopulationModel.STEADY_STATE:
        return replace_steady_state(population, new_generation, replacement_count, strategy, minimize)
    raise NotImplementedError(f"Population model not supported: {model}")
