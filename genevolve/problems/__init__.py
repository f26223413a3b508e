"""
Built-in problem representations.

Problems are looked up by name so the command line and YAML configuration
can choose one at runtime.
"""

from typing import Dict, Type

from ..evolutionary.individual import Genotype
from ..exceptions import ConfigurationError
from .nqueens import NQueens
from .tsp import TravelingSalesman, create_random_cities, shift_elements

PROBLEMS: Dict[str, Type[Genotype]] = {
    'nqueens': NQueens,
    'tsp': TravelingSalesman,
}


def get_problem(name: str) -> Type[Genotype]:
    """
    Look up a genotype class by problem name.

    Raises:
        ConfigurationError: If no problem is registered under ``name``
    """
    try:
        return PROBLEMS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown problem '{name}'. Options: {', '.join(sorted(PROBLEMS))}"
        ) from None


__all__ = [
    'PROBLEMS',
    'get_problem',
    'NQueens',
    'TravelingSalesman',
    'create_random_cities',
    'shift_elements',
]
