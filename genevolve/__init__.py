"""
GenEvolve: A Generic Evolutionary Algorithm Engine

This package evolves populations of user-defined genotypes toward a target
fitness. A problem plugs in by subclassing ``Genotype``; the engine takes
care of selection, reproduction, mutation, elitism and replacement.

Main Components:
- evolutionary: Individuals, parent/survivor selection, statistics, population engine
- problems: Built-in problem representations (N-queens, traveling salesman)
- utils: Logging and visualization utilities
- config: YAML configuration loading and the run configuration dataclass

Usage:
    from genevolve.config import EvolutionConfig
    from genevolve.evolutionary import run_evolution

Version: 1.0.0
"""

__version__ = "1.0.0"

# Package structure
__all__ = [
    "evolutionary",
    "problems",
    "utils",
    "config",
    "exceptions",
]
