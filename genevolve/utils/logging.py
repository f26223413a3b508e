"""
Logging utilities for the GenEvolve framework.

This module provides logging infrastructure including:
- Standard logging setup with file and console handlers
- Custom EvolutionLogger class for tracking evolutionary progress
- Structured per-generation logs written as JSON lines
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

PACKAGE_LOGGER = 'genevolve'


@dataclass
class GenerationLog:
    """Data class for logging generation-level information."""
    generation: int
    best_fitness: float
    mean_fitness: float
    elapsed_seconds: float
    mutations: int
    crossovers: int
    best_generation: int
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class EvolutionLogger:
    """
    Logger for tracking evolutionary algorithm progress.

    Provides:
    - The run start line and the final summary line
    - Status lines, emitted at most once per ``report_interval`` seconds
    - Per-generation metrics, optionally appended to ``generations.jsonl``

    Status reporting only reads the statistics it is given, it never touches
    the engine's random number generator.
    """

    def __init__(
        self,
        log_dir: Optional[Union[str, Path]] = None,
        report_interval: float = 1.0,
        debug: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the evolution logger.

        Args:
            log_dir: Directory for structured log files, None disables them
            report_interval: Minimum seconds between two status lines
            debug: Include population fitness and best genotype in status reports
            logger: Logger to write to (default: the package logger)
        """
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.report_interval = report_interval
        self.debug = debug
        self.logger = logger or logging.getLogger(PACKAGE_LOGGER)

        self.generation_log_file: Optional[Path] = None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.generation_log_file = self.log_dir / 'generations.jsonl'

        self.last_report = 0.0
        self.reports = 0
        self.total_generations = 0
        self.best_fitness_per_generation: List[float] = []

    def log_run_start(self, config: Any) -> None:
        """Log what the run is attempting."""
        self.last_report = 0.0
        if self.debug:
            self.logger.debug(f"{config}")

        if config.max_generations == 0:
            self.logger.info(
                f"Attempting to evolve {config.problem} ({config.problem_size}) "
                f"until target fitness {config.target_fitness:.3f} is met"
            )
        else:
            self.logger.info(
                f"Attempting to evolve {config.problem} ({config.problem_size}) "
                f"to target fitness {config.target_fitness:.3f} "
                f"in maximum {config.max_generations} generations"
            )

    def report_if_due(self, stats: Any, population: List[Any]) -> bool:
        """
        Emit a status line if ``report_interval`` seconds passed since the last one.

        Args:
            stats: EvolutionStats after the generation
            population: Population sorted best-first

        Returns:
            True if a status line was emitted
        """
        if stats.elapsed_seconds - self.last_report <= self.report_interval:
            return False

        best = population[0]
        self.logger.info(f"{stats} Best: {best}")
        if self.debug:
            self.logger.debug(f"{[individual.fitness for individual in population]}")
            self.logger.debug(f"\n{best.genotype.display()}")

        self.last_report = stats.elapsed_seconds
        self.reports += 1
        return True

    def log_generation(self, generation_log: GenerationLog) -> None:
        """
        Record a generation's metrics.

        Args:
            generation_log: GenerationLog dataclass instance
        """
        self.total_generations = generation_log.generation
        self.best_fitness_per_generation.append(generation_log.best_fitness)

        if self.generation_log_file is not None:
            with open(self.generation_log_file, 'a') as f:
                f.write(json.dumps(generation_log.to_dict()) + '\n')

        self.logger.debug(
            f"Gen {generation_log.generation}: Best={generation_log.best_fitness:.3f} "
            f"Mean={generation_log.mean_fitness:.3f} "
            f"C={generation_log.crossovers} M={generation_log.mutations}"
        )

    def log_run_complete(self, stats: Any, best: Any, elapsed_seconds: float) -> None:
        """Log the final summary line and the best genotype."""
        self.logger.info(
            f"Reached {stats.best_fitness:.3f} fitness in {stats.generation} generations "
            f"after {elapsed_seconds:.3f}s with {stats.total_mutations} mutations "
            f"and {stats.total_crossovers} crossovers"
        )
        self.logger.info(f"\n{best.genotype.display()}")

    def log_error(self, error: Exception, context: str = ""):
        """
        Log an error with context.

        Args:
            error: Exception instance
            context: Additional context about where the error occurred
        """
        self.logger.error(f"Error in {context}: {str(error)}", exc_info=True)

    def get_evolution_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the evolution run.

        Returns:
            Dictionary with overall statistics
        """
        history = self.best_fitness_per_generation
        return {
            'total_generations': self.total_generations,
            'status_reports': self.reports,
            'initial_best_fitness': history[0] if history else 0,
            'final_best_fitness': history[-1] if history else 0,
            'fitness_change': history[-1] - history[0] if len(history) > 1 else 0,
        }


def setup_logging(
    log_dir: Optional[str] = None,
    log_level: Union[str, int] = "INFO",
    log_to_file: bool = True,
    log_to_console: bool = True
) -> logging.Logger:
    """
    Set up standard logging configuration for the GenEvolve framework.

    Args:
        log_dir: Directory to store log files, None disables file logging
        log_level: Logging level as string ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL') or int
        log_to_file: Whether to log to file
        log_to_console: Whether to log to console

    Returns:
        Configured package logger
    """
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    if isinstance(log_level, int):
        log_level_int = log_level
    else:
        log_level_int = level_map.get(str(log_level).upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level_int)

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level_int)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_to_file and log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / 'genevolve.log', mode='a')
        file_handler.setLevel(log_level_int)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        # Errors only
        error_handler = logging.FileHandler(log_path / 'errors.log', mode='a')
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    logger.info(f"Logging initialized at level {logging.getLevelName(log_level_int)}"
                + (f" to {log_dir}" if log_to_file and log_dir is not None else ""))

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Get a logger instance by name.

    Args:
        name: Logger name (default: 'genevolve')

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
