"""
Test suite for parent selection.

Tests cover:
- Transformed fitness under both optimization directions
- Roulette wheel walk boundaries and degenerate wheels
- Stochastic universal sampling spread
- Tournament and rank selection bias toward fitter individuals
- Strategy dispatch
"""

import math
import random
from collections import Counter

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from genevolve.evolutionary.selection import (
    ParentSelection,
    RankSelector,
    RouletteWheelSelector,
    StochasticUniversalSelector,
    TournamentSelector,
    create_parent_selector,
    rank_selection,
    roulette_wheel_index,
    roulette_wheel_select,
    selection_weights,
    stochastic_universal_sampling,
    total_fitness,
    tournament_selection,
    transformed_fitness,
)


class TestTransformedFitness:
    """Test the selection weight of raw fitness values."""

    def test_maximize_is_identity(self):
        """Test raw fitness is the weight when maximizing."""
        assert transformed_fitness(0.75, minimize=False) == 0.75

    def test_minimize_is_reciprocal(self):
        """Test the weight is 1/fitness when minimizing."""
        assert transformed_fitness(4.0, minimize=True) == pytest.approx(0.25)

    def test_minimize_zero_is_infinite(self):
        """Test a zero fitness under minimize gets infinite weight."""
        assert math.isinf(transformed_fitness(0.0, minimize=True))

    def test_total_fitness(self, make_population):
        """Test total is the sum of transformed fitness."""
        population = make_population([2.0, 4.0])
        assert total_fitness(population, minimize=False) == pytest.approx(6.0)
        assert total_fitness(population, minimize=True) == pytest.approx(0.75)

    def test_weights_with_infinite_member(self, make_population):
        """Test only infinite-weight individuals keep weight."""
        population = make_population([0.0, 1.0, 0.0])
        weights = selection_weights(population, minimize=True)
        assert list(weights) == [1.0, 0.0, 1.0]


class TestRouletteWheel:
    """Test roulette wheel selection."""

    def test_threshold_zero_returns_first(self, make_population):
        """Test threshold 0 selects index 0."""
        population = make_population([0.5, 0.3, 0.2])
        assert roulette_wheel_index(population, 0.0, minimize=False) == 0

    def test_threshold_total_returns_last(self, make_population):
        """Test threshold equal to the full sum selects the last index."""
        population = make_population([0.5, 0.3, 0.2])
        total = total_fitness(population, minimize=False)
        assert roulette_wheel_index(population, total, minimize=False) == 2

    def test_threshold_intermediate(self, make_population):
        """Test the first index whose running sum reaches the threshold wins."""
        population = make_population([0.5, 0.3, 0.2])
        assert roulette_wheel_index(population, 0.5, minimize=False) == 0
        assert roulette_wheel_index(population, 0.6, minimize=False) == 1

    def test_threshold_beyond_total_falls_back(self, make_population):
        """Test an unreachable threshold falls back to index 0."""
        population = make_population([0.5, 0.3])
        assert roulette_wheel_index(population, 5.0, minimize=False) == 0

    def test_degenerate_total_returns_zero(self, make_population):
        """Test a zero total wheel returns index 0."""
        population = make_population([0.0, 0.0, 0.0])
        assert roulette_wheel_select(population, 0.0, minimize=False, rng=random.Random(1)) == 0

    def test_empty_population_returns_zero(self):
        """Test an empty population returns index 0."""
        assert roulette_wheel_select([], 1.0, minimize=False, rng=random.Random(1)) == 0

    def test_infinite_total_selects_first_infinite(self, make_population):
        """Test a zero-fitness individual under minimize is always selected."""
        population = make_population([0.0, 3.0, 5.0])
        population.reverse()
        total = total_fitness(population, minimize=True)
        rng = random.Random(2)

        for _ in range(20):
            assert roulette_wheel_select(population, total, minimize=True, rng=rng) == 2

    def test_favors_fitter(self, make_population):
        """Test selection frequency follows fitness."""
        population = make_population([0.8, 0.15, 0.05])
        total = total_fitness(population, minimize=False)
        rng = random.Random(42)

        counts = Counter(roulette_wheel_select(population, total, False, rng) for _ in range(2000))

        assert counts[0] > counts[1] > counts[2]


class TestStochasticUniversalSampling:
    """Test stochastic universal sampling."""

    def test_returns_requested_count(self, make_population):
        """Test the number and range of selected indices."""
        population = make_population([0.4, 0.3, 0.2, 0.1])
        indices = stochastic_universal_sampling(population, 10, minimize=False, rng=random.Random(5))

        assert len(indices) == 10
        assert all(0 <= i < 4 for i in indices)

    def test_spread_matches_expectation(self, make_population):
        """Test an individual with 3/4 of the wheel gets at least 3 of 4 pointers."""
        population = make_population([3.0, 1.0])
        indices = stochastic_universal_sampling(population, 4, minimize=False, rng=random.Random(9))

        assert indices.count(0) >= 3

    def test_degenerate_total(self, make_population):
        """Test an all-zero wheel selects index 0."""
        population = make_population([0.0, 0.0])
        assert stochastic_universal_sampling(population, 3, False, random.Random(1)) == [0, 0, 0]

    def test_empty_population(self):
        """Test an empty population yields no indices."""
        assert stochastic_universal_sampling([], 3, False, random.Random(1)) == []


class TestTournamentSelection:
    """Test tournament selection."""

    def test_empty_population_raises(self):
        """Test an empty population is rejected."""
        with pytest.raises(ValueError):
            tournament_selection([], tournament_size=3, rng=random.Random(1))

    def test_full_tournament_selects_best(self, make_population):
        """Test a tournament over everyone selects the best."""
        population = make_population([0.9, 0.5, 0.1])
        assert tournament_selection(population, tournament_size=3, rng=random.Random(1)) == 0

    def test_oversized_tournament_is_clamped(self, make_population):
        """Test a tournament larger than the population still works."""
        population = make_population([0.9, 0.5])
        assert tournament_selection(population, tournament_size=10, rng=random.Random(1)) == 0

    def test_favors_fitter(self, make_population):
        """Test the best individual wins more often than the worst."""
        population = make_population([0.9, 0.7, 0.5, 0.3, 0.1])
        rng = random.Random(8)

        counts = Counter(tournament_selection(population, 2, rng) for _ in range(1000))

        assert counts[0] > counts[4]
        assert counts[4] == 0


class TestRankSelection:
    """Test rank selection."""

    def test_valid_indices(self, make_population):
        """Test selected indices stay within the population."""
        population = make_population([0.9, 0.5, 0.1])
        rng = random.Random(4)
        assert all(0 <= rank_selection(population, rng) < 3 for _ in range(200))

    def test_favors_fitter(self, make_population):
        """Test the best rank is selected most often."""
        population = make_population([0.9, 0.7, 0.5, 0.3, 0.1])
        rng = random.Random(6)

        counts = Counter(rank_selection(population, rng) for _ in range(3000))

        assert counts[0] > counts[2] > counts[4]


class TestParentSelectors:
    """Test strategy dispatch and the selector protocol."""

    @pytest.mark.parametrize("strategy,selector_cls", [
        (ParentSelection.ROULETTE_WHEEL, RouletteWheelSelector),
        (ParentSelection.STOCHASTIC_UNIVERSAL_SAMPLING, StochasticUniversalSelector),
        (ParentSelection.TOURNAMENT_SELECTION, TournamentSelector),
        (ParentSelection.RANK_SELECTION, RankSelector),
    ])
    def test_create_parent_selector(self, strategy, selector_cls):
        """Test every strategy maps to its selector."""
        assert isinstance(create_parent_selector(strategy), selector_cls)

    def test_unknown_strategy_raises(self):
        """Test an unsupported strategy is rejected instead of ignored."""
        with pytest.raises(NotImplementedError):
            create_parent_selector("Lottery")

    @pytest.mark.parametrize("strategy", list(ParentSelection))
    def test_selectors_return_valid_indices(self, strategy, make_population):
        """Test every selector draws indices within the population."""
        population = make_population([0.6, 0.5, 0.4, 0.3, 0.2])
        rng = random.Random(10)
        selector = create_parent_selector(strategy, tournament_size=2)
        selector.prepare(population, total_fitness(population, False), False, rng)

        indices = [selector.select(rng) for _ in range(50)]

        assert all(0 <= i < len(population) for i in indices)

    def test_sus_selector_refills_batch(self, make_population):
        """Test the SUS selector keeps drawing past one batch."""
        population = make_population([0.5, 0.5])
        rng = random.Random(3)
        selector = StochasticUniversalSelector()
        selector.prepare(population, 1.0, False, rng)

        indices = [selector.select(rng) for _ in range(5)]

        assert len(indices) == 5
        assert sorted(indices[:2]) == [0, 1]
