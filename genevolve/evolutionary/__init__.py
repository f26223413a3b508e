"""
Evolutionary Algorithm Module for GenEvolve.

This module implements the core evolutionary loop, including the genotype
capability set, parent and survivor selection strategies, and per-run
statistics.
"""

from .individual import Genotype, Individual, evaluate_population, sort_population, is_target_reached
from .selection import (
    ParentSelection,
    ParentSelector,
    roulette_wheel_index,
    roulette_wheel_select,
    stochastic_universal_sampling,
    tournament_selection,
    rank_selection,
    total_fitness,
    create_parent_selector,
)
from .survivor import PopulationModel, SurvivorSelection, select_survivors
from .statistics import EvolutionStats
from .population import PopulationEngine, EvolutionResult, create_engine_from_config, run_evolution

__all__ = [
    # Individual
    'Genotype',
    'Individual',
    'evaluate_population',
    'sort_population',
    'is_target_reached',

    # Parent selection
    'ParentSelection',
    'ParentSelector',
    'roulette_wheel_index',
    'roulette_wheel_select',
    'stochastic_universal_sampling',
    'tournament_selection',
    'rank_selection',
    'total_fitness',
    'create_parent_selector',

    # Survivor selection
    'PopulationModel',
    'SurvivorSelection',
    'select_survivors',

    # Statistics
    'EvolutionStats',

    # Engine
    'PopulationEngine',
    'EvolutionResult',
    'create_engine_from_config',
    'run_evolution',
]
