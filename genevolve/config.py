"""
Run configuration for GenEvolve.

Configuration arrives as a nested dictionary (usually loaded from YAML) with
the sections ``problem``, ``evolution``, ``selection`` and ``logging``.
``EvolutionConfig.from_dict`` maps it onto a flat dataclass that the engine
treats as immutable for the duration of a run.
"""

import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar, Union

import yaml

from .evolutionary.selection import ParentSelection
from .evolutionary.survivor import PopulationModel, SurvivorSelection
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent.parent / "config"

E = TypeVar('E', bound=Enum)


def parse_enum(enum_cls: Type[E], value: Union[str, E]) -> E:
    """
    Parse a strategy name case-insensitively.

    Accepts the enum member itself, its value (``"RouletteWheel"``) or its
    name in any case with or without separators (``"roulette_wheel"``).

    Raises:
        ConfigurationError: If the name matches no member
    """
    if isinstance(value, enum_cls):
        return value

    key = str(value).replace('_', '').replace('-', '').lower()
    for member in enum_cls:
        if key in (member.value.lower(), member.name.replace('_', '').lower()):
            return member

    choices = ', '.join(member.value for member in enum_cls)
    raise ConfigurationError(f"Unknown {enum_cls.__name__} '{value}'. Options: {choices}")


@dataclass(frozen=True)
class EvolutionConfig:
    """
    Parameters of one evolution run.

    Attributes:
        problem: Registered problem name
        problem_size: Size of the problem instance (queens, cities)
        population_size: Number of individuals, must be positive
        max_generations: Generation budget, 0 runs until target fitness
        target_fitness: Fitness at which the run stops
        mutation_rate: Probability of mutating each offspring
        crossover_rate: Probability of two-parent crossover per offspring
        minimize: Whether lower fitness is better
        no_elitism: Disable carrying the best individual over
        parent_selection: Parent selection strategy
        survivor_selection: Survivor strategy for the steady-state model
        population_model: Generational or steady-state replacement
        tournament_size: Competitors per tournament
        replacement_count: Members replaced per steady-state generation
        seed: Seed for the random number generator
        report_interval: Minimum wall-clock seconds between status lines
        debug: Log population details with every status line
    """
    problem: str = 'nqueens'
    problem_size: int = 8
    population_size: int = 50
    max_generations: int = 0
    target_fitness: float = 1.0
    mutation_rate: float = 0.1
    crossover_rate: float = 0.5
    minimize: bool = False
    no_elitism: bool = False
    parent_selection: ParentSelection = ParentSelection.ROULETTE_WHEEL
    survivor_selection: SurvivorSelection = SurvivorSelection.FITNESS_BASED
    population_model: PopulationModel = PopulationModel.GENERATIONAL
    tournament_size: int = 3
    replacement_count: Optional[int] = None
    seed: Optional[int] = None
    report_interval: float = 1.0
    debug: bool = False

    def __post_init__(self):
        # Accept strategy names wherever the enums are expected
        object.__setattr__(self, 'parent_selection', parse_enum(ParentSelection, self.parent_selection))
        object.__setattr__(self, 'survivor_selection', parse_enum(SurvivorSelection, self.survivor_selection))
        object.__setattr__(self, 'population_model', parse_enum(PopulationModel, self.population_model))

    @property
    def effective_replacement_count(self) -> int:
        """Steady-state replacement count, half the population by default."""
        if self.replacement_count is None:
            return max(1, self.population_size // 2)
        return self.replacement_count

    def validate(self) -> 'EvolutionConfig':
        """
        Check every parameter.

        Returns:
            self, to allow chaining

        Raises:
            ConfigurationError: On the first invalid parameter
        """
        if self.population_size <= 0:
            raise ConfigurationError(f"population_size must be positive, got {self.population_size}")
        if self.max_generations < 0:
            raise ConfigurationError(f"max_generations must be >= 0, got {self.max_generations}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ConfigurationError(f"mutation_rate must be within [0, 1], got {self.mutation_rate}")
        if not 0.0 <= self.crossover_rate <= 1.0:
            raise ConfigurationError(f"crossover_rate must be within [0, 1], got {self.crossover_rate}")
        if self.problem_size < 1:
            raise ConfigurationError(f"problem_size must be positive, got {self.problem_size}")
        if self.tournament_size < 1:
            raise ConfigurationError(f"tournament_size must be positive, got {self.tournament_size}")
        if not 1 <= self.effective_replacement_count <= self.population_size:
            raise ConfigurationError(
                f"replacement_count must be within [1, {self.population_size}], "
                f"got {self.replacement_count}"
            )
        if self.report_interval < 0:
            raise ConfigurationError(f"report_interval must be >= 0, got {self.report_interval}")
        return self

    def with_overrides(self, **overrides: Any) -> 'EvolutionConfig':
        """Copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]]) -> 'EvolutionConfig':
        """
        Build a configuration from a (YAML) dictionary.

        Section keys are flattened; top-level keys that name a field directly
        take precedence. ``evolution.elitism: false`` maps to ``no_elitism``.

        Args:
            config: Nested configuration dictionary

        Returns:
            EvolutionConfig (not yet validated)
        """
        cfg = dict(config or {})
        flat: Dict[str, Any] = {}

        problem_cfg = cfg.get('problem', {}) or {}
        if not isinstance(problem_cfg, dict):
            # Plain ``problem: tsp`` is picked up as a top-level field below
            problem_cfg = {}
        if 'name' in problem_cfg:
            flat['problem'] = problem_cfg['name']
        if 'size' in problem_cfg:
            flat['problem_size'] = problem_cfg['size']

        for section in ('evolution', 'selection', 'logging'):
            section_cfg = cfg.get(section, {}) or {}
            if isinstance(section_cfg, dict):
                flat.update(section_cfg)

        elitism = flat.pop('elitism', None)
        if elitism is not None and 'no_elitism' not in flat:
            flat['no_elitism'] = not bool(elitism)

        names = {f.name for f in fields(cls)}
        flat.update({k: v for k, v in cfg.items() if k in names and not isinstance(v, dict)})

        unknown = sorted(k for k in flat if k not in names)
        if unknown:
            logger.debug(f"Ignoring configuration keys without a run parameter: {unknown}")

        return cls(**{k: v for k, v in flat.items() if k in names})


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    A bare name (``"default"``) is looked up in the ``config`` directory.
    If the file carries a ``defaults`` key it is merged over
    ``default_config.yaml``.

    Args:
        config_path: Path to configuration YAML file or configuration name

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If the file cannot be found or parsed
    """
    config_file = Path(config_path)

    if not config_file.exists():
        possible_paths = [
            CONFIG_DIR / f"{config_path}_config.yaml",
            CONFIG_DIR / f"{config_path}.yaml",
            Path("config") / f"{config_path}_config.yaml",
        ]

        for path in possible_paths:
            if path.exists():
                config_file = path
                break
        else:
            raise ConfigurationError(
                f"Configuration file not found: {config_path}. "
                f"Tried: {[str(p) for p in possible_paths]}"
            )

    logger.info(f"Loading configuration from: {config_file}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration in {config_file} must be a mapping")

    if 'defaults' in config:
        default_config_path = CONFIG_DIR / "default_config.yaml"
        if default_config_path.exists():
            with open(default_config_path, 'r') as f:
                default_config = yaml.safe_load(f) or {}
            config = _deep_merge(default_config, config)
        del config['defaults']

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with override values

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
