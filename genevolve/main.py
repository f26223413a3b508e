#!/usr/bin/env python3
"""
GenEvolve: Generic Evolutionary Algorithm Engine

Main entry point for evolving one of the built-in problems.

Usage:
    python -m genevolve.main --problem nqueens --size 20 -p 100
    python -m genevolve.main --problem tsp --size 30 --minimize -t 0 -g 500
    python -m genevolve.main --config tsp --seed 7 --history-csv results/history.csv
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import EvolutionConfig, load_config
from .evolutionary.population import EvolutionResult, run_evolution
from .exceptions import GenEvolveError
from .problems import PROBLEMS
from .utils.logging import EvolutionLogger, setup_logging
from .utils.visualization import plot_fitness_history

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list (default: ``sys.argv[1:]``)

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="GenEvolve: evolve a population toward a target fitness",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve 20-queens with 100 individuals
  genevolve --problem nqueens --size 20 -p 100

  # Shorten a 30 city tour for at most 500 generations
  genevolve --problem tsp --size 30 --minimize -t 0 -g 500

  # Reproducible run from a configuration file, exporting the history
  genevolve --config tsp --seed 7 --history-csv results/history.csv --plot results/fitness.png
        """
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Configuration file path or name in the config directory (e.g. default, tsp)"
    )

    parser.add_argument(
        "--problem",
        type=str,
        default=None,
        choices=sorted(PROBLEMS),
        help="Problem to evolve (default: nqueens)"
    )

    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help="Problem size: queens or cities (default: 8)"
    )

    parser.add_argument(
        "--population", "-p",
        type=int,
        default=None,
        help="Population size (default: 50)"
    )

    parser.add_argument(
        "--generations", "-g",
        type=int,
        default=None,
        help="Maximum generations, 0 runs until the target is met (default: 0)"
    )

    parser.add_argument(
        "--target", "-t",
        type=float,
        default=None,
        help="Target fitness (default: 1.0)"
    )

    parser.add_argument(
        "--mutation", "-m",
        type=float,
        default=None,
        help="Mutation rate (default: 0.1)"
    )

    parser.add_argument(
        "--crossover", "-c",
        type=float,
        default=None,
        help="Crossover rate (default: 0.5)"
    )

    parser.add_argument(
        "--no-elitism",
        action="store_true",
        default=None,
        help="Do not carry the best individual over to the next generation"
    )

    parser.add_argument(
        "--minimize",
        action="store_true",
        default=None,
        help="Treat lower fitness as better"
    )

    parser.add_argument(
        "--parent-selection",
        type=str,
        default=None,
        help="RouletteWheel, StochasticUniversalSampling, TournamentSelection or RankSelection"
    )

    parser.add_argument(
        "--survivor-selection",
        type=str,
        default=None,
        help="FitnessBased or AgeBased (steady-state model only)"
    )

    parser.add_argument(
        "--population-model",
        type=str,
        default=None,
        help="Generational or SteadyState"
    )

    parser.add_argument(
        "--tournament-size",
        type=int,
        default=None,
        help="Competitors per tournament (default: 3)"
    )

    parser.add_argument(
        "--replacement-count",
        type=int,
        default=None,
        help="Members replaced per steady-state generation (default: half the population)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible run"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, DEBUG with --debug)"
    )

    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Directory for log files and generations.jsonl"
    )

    parser.add_argument(
        "--history-csv",
        type=str,
        default=None,
        help="Write the per-generation history to this CSV file"
    )

    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Write a fitness-per-generation plot to this image file"
    )

    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        default=None,
        help="Log population fitness and the best genotype with each status line"
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, file_config: Optional[Dict[str, Any]] = None) -> EvolutionConfig:
    """
    Combine the configuration file with command-line overrides.

    Args:
        args: Parsed command-line arguments
        file_config: Configuration dictionary loaded from YAML

    Returns:
        Validated EvolutionConfig
    """
    config = EvolutionConfig.from_dict(file_config)
    config = config.with_overrides(
        problem=args.problem,
        problem_size=args.size,
        population_size=args.population,
        max_generations=args.generations,
        target_fitness=args.target,
        mutation_rate=args.mutation,
        crossover_rate=args.crossover,
        no_elitism=args.no_elitism,
        minimize=args.minimize,
        parent_selection=args.parent_selection,
        survivor_selection=args.survivor_selection,
        population_model=args.population_model,
        tournament_size=args.tournament_size,
        replacement_count=args.replacement_count,
        seed=args.seed,
        debug=args.debug,
    )
    return config.validate()


def export_results(result: EvolutionResult, args: argparse.Namespace) -> None:
    """Write the optional history CSV and fitness plot."""
    if args.history_csv:
        csv_path = Path(args.history_csv)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        result.stats.to_dataframe().to_csv(csv_path)
        logger.info(f"History saved to: {csv_path}")

    if args.plot:
        plot_fitness_history(result.stats.history, args.plot)
        logger.info(f"Fitness plot saved to: {args.plot}")


def run_genevolve(args: argparse.Namespace) -> int:
    """
    Main execution function for GenEvolve.

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit code
    """
    file_config: Dict[str, Any] = {}
    logging_cfg: Dict[str, Any] = {}

    try:
        if args.config:
            file_config = load_config(args.config)
            logging_cfg = file_config.get('logging', {}) or {}
    except GenEvolveError as e:
        setup_logging(log_to_file=False)
        logger.error(f"Configuration error: {e}")
        return 1

    log_dir = args.log_dir or logging_cfg.get('log_dir')
    log_level = args.log_level or ('DEBUG' if args.debug else logging_cfg.get('level', 'INFO'))
    setup_logging(log_dir=log_dir, log_level=log_level)

    try:
        config = build_config(args, file_config)
    except GenEvolveError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    evolution_logger = EvolutionLogger(
        log_dir=log_dir,
        report_interval=config.report_interval,
        debug=config.debug,
    )

    try:
        result = run_evolution(config, evolution_logger=evolution_logger)
    except GenEvolveError as e:
        evolution_logger.log_error(e, "evolution run")
        return 1

    export_results(result, args)
    return 0


def main(argv: Optional[List[str]] = None):
    """
    Main entry point.
    """
    args = parse_arguments(argv)
    sys.exit(run_genevolve(args))


if __name__ == "__main__":
    main()
