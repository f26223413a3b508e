"""
GenEvolve: Population Engine

This module implements the main evolutionary loop. Each generation runs
evaluate -> select parents/reproduce -> mutate -> elitism -> evaluate ->
select survivors, then updates the statistics and checks termination.

The loop is a pure function of (population, RNG state, configuration):
wall-clock time is only sampled for statistics and status reporting, so
a seeded run is reproducible regardless of how long it takes.
"""

import copy
import logging
import random
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Type

import numpy as np

from .individual import (
    Genotype,
    Individual,
    evaluate_population,
    is_target_reached,
    sort_population,
)
from .selection import create_parent_selector, total_fitness
from .statistics import EvolutionStats
from .survivor import select_survivors
from ..exceptions import ConfigurationError
from ..utils.logging import EvolutionLogger, GenerationLog

if TYPE_CHECKING:
    from ..config import EvolutionConfig

logger = logging.getLogger(__name__)


@dataclass
class EvolutionResult:
    """
    Outcome of a run.

    Attributes:
        best: Best individual of the final population
        stats: Final statistics, including the per-generation history
        target_reached: Whether the run stopped on the target fitness
    """
    best: Individual
    stats: EvolutionStats
    target_reached: bool


class PopulationEngine:
    """
    Evolves a population of one genotype type.

    Attributes:
        config: Run configuration
        genotype_cls: Genotype subclass being evolved
        context: Shared fitness context handed to every evaluation
        rng: Random number generator, the single source of randomness
        stats: Statistics of the run
        population: Current population, sorted best-first between generations
    """

    def __init__(
        self,
        config: 'EvolutionConfig',
        genotype_cls: Type[Genotype],
        context: Optional[Any] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
        evolution_logger: Optional[EvolutionLogger] = None
    ):
        """
        Create the initial population.

        Args:
            config: Run configuration
            genotype_cls: Genotype subclass to instantiate
            context: Optional shared data for the fitness function
            rng: Random number generator (default: seeded from ``config.seed``)
            clock: Wall-clock source in seconds
            evolution_logger: Progress logger (default: console-only)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if config.population_size == 0:
            raise ConfigurationError("Cannot create a population of size 0")
        self.config = config.validate()

        self.genotype_cls = genotype_cls
        self.context = context
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.clock = clock
        self.evolution_logger = evolution_logger or EvolutionLogger(
            report_interval=config.report_interval,
            debug=config.debug,
        )

        self.parent_selector = create_parent_selector(
            config.parent_selection,
            tournament_size=config.tournament_size,
        )
        self.stats = EvolutionStats(max_generations=config.max_generations)
        self.started = self.clock()

        self.population: List[Individual] = [
            Individual(fitness=0.0, generation=0, genotype=genotype_cls.create(self.rng, config))
            for _ in range(config.population_size)
        ]

        logger.debug(f"Created population of {len(self.population)} {genotype_cls.__name__} individuals")

    @property
    def best(self) -> Individual:
        return self.population[0]

    def evaluate(self) -> None:
        """Evaluate stale individuals and sort the population best-first."""
        evaluate_population(self.population, self.context)
        sort_population(self.population, self.config.minimize)

    def select_parents(self, total: float) -> List[Individual]:
        """
        Fill a new pool of offspring, mutate them and apply elitism.

        Args:
            total: Total transformed fitness of the current population

        Returns:
            Unevaluated pool of ``population_size`` individuals
        """
        config = self.config
        generation = self.stats.generation
        self.parent_selector.prepare(self.population, total, config.minimize, self.rng)

        new_population: List[Individual] = []
        while len(new_population) < config.population_size:
            individual_a = self.population[self.parent_selector.select(self.rng)]

            if self.rng.random() < config.crossover_rate:
                self.stats.crossovers_this_gen += 1
                individual_b = self.population[self.parent_selector.select(self.rng)]
                offspring = individual_a.crossover(individual_b, generation, self.rng)
            else:
                offspring = individual_a.crossover(individual_a, generation, self.rng)

            new_population.append(offspring)

        self.stats.mutations_this_gen = self.mutate(new_population)

        if not config.no_elitism:
            new_population.pop()
            new_population.append(copy.deepcopy(self.population[0]))

        return new_population

    def mutate(self, population: List[Individual]) -> int:
        """
        Mutate each individual with probability ``mutation_rate``.

        Returns:
            Number of mutations performed
        """
        count = 0
        for individual in population:
            if self.rng.random() < self.config.mutation_rate:
                individual.mutate(self.rng)
                count += 1
        return count

    def step(self) -> EvolutionStats:
        """
        Advance the population by one generation.

        Returns:
            Statistics after the generation
        """
        config = self.config
        self.stats.begin_generation()

        self.evaluate()
        total = total_fitness(self.population, config.minimize)

        new_generation = self.select_parents(total)
        evaluate_population(new_generation, self.context)
        sort_population(new_generation, config.minimize)

        self.population = select_survivors(
            self.population,
            new_generation,
            config.population_model,
            config.survivor_selection,
            config.effective_replacement_count,
            config.minimize,
        )

        best = self.population[0]
        mean = float(np.mean([individual.fitness for individual in self.population]))
        self.stats.end_generation(best.fitness, mean, self.clock() - self.started)

        self.evolution_logger.log_generation(GenerationLog(
            generation=self.stats.generation,
            best_fitness=best.fitness,
            mean_fitness=mean,
            elapsed_seconds=self.stats.elapsed_seconds,
            mutations=self.stats.mutations_this_gen,
            crossovers=self.stats.crossovers_this_gen,
            best_generation=best.generation,
        ))
        self.evolution_logger.report_if_due(self.stats, self.population)

        return self.stats

    def target_reached(self) -> bool:
        return is_target_reached(self.stats.best_fitness, self.config.target_fitness, self.config.minimize)

    def should_stop(self) -> bool:
        """Termination check, evaluated after each generation."""
        max_generations = self.config.max_generations
        if max_generations > 0 and self.stats.generation >= max_generations:
            return True
        return self.target_reached()

    def run(self) -> EvolutionResult:
        """
        Evolve until the generation budget is spent or the target fitness is met.

        Returns:
            EvolutionResult with the best individual and final statistics
        """
        self.started = self.clock()

        self.evaluate()
        self.evolution_logger.log_run_start(self.config)

        while True:
            self.step()
            if self.should_stop():
                break

        best = self.population[0]
        self.evolution_logger.log_run_complete(self.stats, best, self.clock() - self.started)

        return EvolutionResult(best=best, stats=self.stats, target_reached=self.target_reached())


def create_engine_from_config(
    config: 'EvolutionConfig',
    rng: Optional[random.Random] = None,
    evolution_logger: Optional[EvolutionLogger] = None,
    clock: Callable[[], float] = time.time
) -> PopulationEngine:
    """
    Factory function to create an engine for the configured problem.

    The problem's fitness context (if any) is built from the same RNG
    before the population, so a seed fixes both.

    Args:
        config: Run configuration naming a registered problem
        rng: Optional random number generator
        evolution_logger: Optional progress logger
        clock: Wall-clock source

    Returns:
        PopulationEngine: Initialized engine
    """
    from ..problems import get_problem

    config.validate()
    genotype_cls = get_problem(config.problem)
    rng = rng if rng is not None else random.Random(config.seed)
    context = genotype_cls.create_context(rng, config)

    return PopulationEngine(
        config,
        genotype_cls,
        context=context,
        rng=rng,
        clock=clock,
        evolution_logger=evolution_logger,
    )


def run_evolution(config: 'EvolutionConfig', **kwargs: Any) -> EvolutionResult:
    """
    Convenience function to run a complete evolution for a configuration.

    Returns:
        EvolutionResult of the run
    """
    return create_engine_from_config(config, **kwargs).run()
