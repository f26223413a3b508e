"""
Utilities module for GenEvolve.

This module provides logging and visualization helpers used by the engine
and the command-line interface.
"""

from .logging import setup_logging, EvolutionLogger, GenerationLog, get_logger
from .visualization import plot_fitness_history

__all__ = [
    # Logging
    'setup_logging',
    'EvolutionLogger',
    'GenerationLog',
    'get_logger',

    # Visualization
    'plot_fitness_history',
]
