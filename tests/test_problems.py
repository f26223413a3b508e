"""
Test suite for the built-in problems.

Tests cover:
- N-queens clash counting, fitness, crossover and mutation
- Traveling salesman distance tables, tour length and permutation safety
- Sub-range rotation used by the traveling salesman mutation
- The problem registry
"""

import random
from types import SimpleNamespace

import numpy as np
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from genevolve.exceptions import ConfigurationError, MissingContextError
from genevolve.problems import PROBLEMS, get_problem
from genevolve.problems.nqueens import NQueens, count_clashes, max_pairs
from genevolve.problems.tsp import (
    TravelingSalesman,
    create_random_cities,
    create_random_path,
    shift_elements,
)


class TestNQueens:
    """Test the N-queens genotype."""

    def test_max_pairs(self):
        """Test the pair count is n choose 2."""
        assert max_pairs(8) == 28
        assert max_pairs(20) == 190
        assert max_pairs(1) == 0

    def test_solution_has_full_fitness(self):
        """Test a known 8-queens solution scores 1.0."""
        queens = NQueens([0, 4, 7, 5, 2, 6, 1, 3])
        assert count_clashes(queens.genome) == 0
        assert queens.fitness() == pytest.approx(1.0)

    def test_all_same_row(self):
        """Test every pair clashes when all queens share a row."""
        queens = NQueens([0, 0, 0, 0])
        assert count_clashes(queens.genome) == 6
        assert queens.fitness() == pytest.approx(0.5)

    def test_diagonal_clash(self):
        """Test queens on one diagonal clash."""
        assert count_clashes([0, 1]) == 1
        assert count_clashes([1, 0]) == 1
        assert count_clashes([0, 2]) == 0

    def test_create(self):
        """Test construction draws one row per column within the board."""
        config = SimpleNamespace(problem_size=12)
        queens = NQueens.create(random.Random(1), config)
        assert len(queens.genome) == 12
        assert all(0 <= row < 12 for row in queens.genome)

    def test_crossover_at_fixed_index(self):
        """Test the offspring takes A before the index and B from the index on."""
        a = NQueens([0, 1, 2, 3, 4, 5])
        b = NQueens([5, 4, 3, 2, 1, 0])

        child = a.crossover_at(b, 2)

        assert child.genome == [0, 1, 3, 2, 1, 0]
        assert a.genome == [0, 1, 2, 3, 4, 5]

    def test_crossover_point_property(self):
        """Test random crossover always splits at a single point."""
        rng = random.Random(12)
        a = NQueens([0] * 10)
        b = NQueens([1] * 10)

        for _ in range(50):
            genome = a.crossover(b, rng).genome
            index = genome.index(1) if 1 in genome else len(genome)
            assert genome[:index] == [0] * index
            assert genome[index:] == [1] * (10 - index)

    def test_mutate_keeps_board(self):
        """Test mutation keeps the board size and row range."""
        rng = random.Random(5)
        queens = NQueens([0, 1, 2, 3, 4, 5, 6, 7])
        for _ in range(100):
            queens.mutate(rng)
            assert len(queens.genome) == 8
            assert all(0 <= row < 8 for row in queens.genome)

    def test_display_grid(self):
        """Test the display renders one grid row per board row."""
        queens = NQueens([1, 0])
        assert queens.display() == "[0, 1]\n[1, 0]"


class TestShiftElements:
    """Test in-place sub-range rotation."""

    @pytest.mark.parametrize("start,end,shift,expected", [
        (0, 2, 1, [3, 1, 2, 4, 5]),
        (3, 5, 2, [4, 5, 3, 1, 2]),
        (0, 3, 1, [4, 1, 2, 3, 5]),
        (0, 5, 5, [1, 2, 3, 4, 5]),
    ])
    def test_shift(self, start, end, shift, expected):
        """Test known rotations of a five element genome."""
        genome = [1, 2, 3, 4, 5]
        shift_elements(genome, start, end, shift)
        assert genome == expected

    def test_invalid_range(self):
        """Test an empty range is rejected."""
        with pytest.raises(ValueError):
            shift_elements([1, 2, 3], 2, 2, 1)

    def test_preserves_permutation(self):
        """Test shifting never loses or duplicates elements."""
        rng = random.Random(21)
        genome = list(range(12))
        for _ in range(100):
            start = rng.randrange(11)
            end = rng.randrange(start + 1, 12)
            shift_elements(genome, start, end, rng.randrange(12))
            assert sorted(genome) == list(range(12))


class TestTravelingSalesman:
    """Test the traveling salesman genotype."""

    @pytest.fixture
    def square(self):
        """Distance table for the corners of a unit square."""
        points = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
        return np.sqrt(((points[:, None, :] - points[None, :, :]) ** 2).sum(axis=-1))

    def test_random_cities(self):
        """Test the distance table is square, symmetric and zero on the diagonal."""
        distances = create_random_cities(10, random.Random(3))

        assert distances.shape == (10, 10)
        assert np.allclose(distances, distances.T)
        assert np.allclose(np.diag(distances), 0.0)
        assert distances.max() <= np.sqrt(2) * 500

    def test_tour_length(self, square):
        """Test fitness is the closed tour length."""
        assert TravelingSalesman([0, 1, 2, 3]).fitness(square) == pytest.approx(4.0)
        assert TravelingSalesman([0, 2, 1, 3]).fitness(square) == pytest.approx(2 + 2 * np.sqrt(2))

    def test_missing_context(self):
        """Test fitness without a distance table raises."""
        with pytest.raises(MissingContextError):
            TravelingSalesman([0, 1, 2]).fitness()

    def test_create_and_context(self):
        """Test construction yields a permutation and a matching context."""
        config = SimpleNamespace(problem_size=15)
        rng = random.Random(4)

        context = TravelingSalesman.create_context(rng, config)
        tour = TravelingSalesman.create(rng, config)

        assert context.shape == (15, 15)
        assert sorted(tour.genome) == list(range(15))

    def test_crossover_at_keeps_permutation(self):
        """Test the offspring keeps A's prefix and follows B's order afterwards."""
        a = TravelingSalesman([0, 1, 2, 3, 4, 5])
        b = TravelingSalesman([5, 3, 1, 4, 2, 0])

        child = a.crossover_at(b, 3)

        assert child.genome == [0, 1, 2, 5, 3, 4]

    def test_mutate_keeps_permutation(self):
        """Test every mutation leaves a valid tour."""
        rng = random.Random(17)
        tour = TravelingSalesman(create_random_path(10, rng))
        for _ in range(200):
            tour.mutate(rng)
            assert sorted(tour.genome) == list(range(10))

    def test_crossover_keeps_permutation(self):
        """Test random crossover always yields a valid tour."""
        rng = random.Random(19)
        for _ in range(50):
            a = TravelingSalesman(create_random_path(9, rng))
            b = TravelingSalesman(create_random_path(9, rng))
            assert sorted(a.crossover(b, rng).genome) == list(range(9))


class TestRegistry:
    """Test the problem registry."""

    def test_known_problems(self):
        """Test both built-in problems are registered."""
        assert PROBLEMS['nqueens'] is NQueens
        assert get_problem('TSP') is TravelingSalesman

    def test_unknown_problem(self):
        """Test an unknown problem name raises."""
        with pytest.raises(ConfigurationError):
            get_problem('knapsack')
