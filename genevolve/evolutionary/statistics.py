"""
Per-run evolution statistics.

The engine mutates an ``EvolutionStats`` once per generation; everything else
(loggers, the CLI, plots) only reads it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd


@dataclass
class EvolutionStats:
    """
    Counters for one evolution run.

    Attributes:
        generation: Number of the current (last completed) generation
        max_generations: Generation budget, 0 when unbounded
        best_fitness: Best fitness in the population after this generation
        mean_fitness: Mean fitness of the population after this generation
        elapsed_seconds: Wall-clock seconds since the run started
        mutations_this_gen: Mutations performed this generation
        crossovers_this_gen: Crossovers performed this generation
        total_mutations: Mutations over the whole run
        total_crossovers: Crossovers over the whole run
        history: One record per completed generation
    """
    generation: int = 0
    max_generations: int = 0
    best_fitness: float = 0.0
    mean_fitness: float = 0.0
    elapsed_seconds: float = 0.0
    mutations_this_gen: int = 0
    crossovers_this_gen: int = 0
    total_mutations: int = 0
    total_crossovers: int = 0
    history: List[Dict[str, Any]] = field(default_factory=list)

    def begin_generation(self) -> None:
        """Advance the generation counter and reset the per-generation counters."""
        self.generation += 1
        self.mutations_this_gen = 0
        self.crossovers_this_gen = 0

    def end_generation(self, best_fitness: float, mean_fitness: float, elapsed_seconds: float) -> None:
        """Record the outcome of the generation and accumulate the totals."""
        self.best_fitness = best_fitness
        self.mean_fitness = mean_fitness
        self.elapsed_seconds = elapsed_seconds
        self.total_mutations += self.mutations_this_gen
        self.total_crossovers += self.crossovers_this_gen
        self.history.append(self.snapshot())

    def snapshot(self) -> Dict[str, Any]:
        return {
            'generation': self.generation,
            'best_fitness': self.best_fitness,
            'mean_fitness': self.mean_fitness,
            'elapsed_seconds': self.elapsed_seconds,
            'mutations': self.mutations_this_gen,
            'crossovers': self.crossovers_this_gen,
            'total_mutations': self.total_mutations,
            'total_crossovers': self.total_crossovers,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Per-generation history as a DataFrame indexed by generation."""
        if not self.history:
            return pd.DataFrame(columns=list(self.snapshot().keys())).set_index('generation')
        return pd.DataFrame(self.history).set_index('generation')

    def __str__(self) -> str:
        if self.max_generations == 0:
            progress = f"[{self.generation}]"
        else:
            progress = f"[{self.generation}/{self.max_generations}]"
        return (
            f"{progress} ({self.elapsed_seconds:.3f}s) F: {self.best_fitness:.3f} "
            f"C: {self.crossovers_this_gen} M: {self.mutations_this_gen}"
        )
