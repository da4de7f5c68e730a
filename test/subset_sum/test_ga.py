"""
Tests for the generational genetic algorithm and its bit-string operators.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from Core.config import GAConfig
from Core.errors import InvalidConfiguration
from Core.problem import Solution
from GA.GA import GeneticAlgorithm
from GA.operators import BitStringOperator, one_point_crossover
from problems.SubsetSum import SubsetSumProblem, demo_problem


class _ScriptedRng:
    """Returns fixed draws so operator decisions can be asserted exactly."""

    def __init__(self, integers=None, random=None):
        self._integers = list(integers or [])
        self._random = list(random or [])

    def integers(self, low, high=None, size=None):
        return self._integers.pop(0)

    def random(self, size=None):
        return self._random.pop(0)


def _solution(bits, problem, fitness):
    sol = Solution(np.array(bits, dtype=np.int8), problem)
    sol.fitness = fitness
    return sol


@pytest.fixture
def problem():
    return SubsetSumProblem([1, 2, 3, 4, 5, 6], target=10)


# =============================================================================
# Operators
# =============================================================================

class TestOperators:
    def test_one_point_crossover_swaps_suffix(self):
        a = np.array([1, 1, 1, 1, 1, 1])
        b = np.array([0, 0, 0, 0, 0, 0])
        child1, child2 = one_point_crossover(a, b, 2)
        np.testing.assert_array_equal(child1, [1, 1, 0, 0, 0, 0])
        np.testing.assert_array_equal(child2, [0, 0, 1, 1, 1, 1])

    def test_crossover_point_zero_swaps_whole_parents(self):
        a = np.array([1, 0, 1])
        b = np.array([0, 1, 1])
        child1, child2 = one_point_crossover(a, b, 0)
        np.testing.assert_array_equal(child1, b)
        np.testing.assert_array_equal(child2, a)

    def test_crossover_preserves_bits_outside_swap(self, problem):
        rng = np.random.default_rng(21)
        operator = BitStringOperator(mutation_rate=0.0)
        # Every split index from 0 to len - 1, several parent pairs each.
        for point in list(range(6)) * 5:
            parents = [_solution(rng.integers(0, 2, size=6), problem, 0) for _ in range(2)]
            child1, child2 = operator.crossover(parents, _ScriptedRng(integers=[point]))
            p1, p2 = parents[0].representation, parents[1].representation
            np.testing.assert_array_equal(child1[:point], p1[:point])
            np.testing.assert_array_equal(child1[point:], p2[point:])
            np.testing.assert_array_equal(child2[:point], p2[:point])
            np.testing.assert_array_equal(child2[point:], p1[point:])
            # Per position, the pair still holds the same two bit values.
            np.testing.assert_array_equal(np.sort([child1, child2], axis=0), np.sort([p1, p2], axis=0))

    def test_crossover_points_drawn_from_whole_range(self, problem):
        operator = BitStringOperator(mutation_rate=0.0)
        parents = [_solution([1] * 6, problem, 0), _solution([0] * 6, problem, 0)]
        points = set()
        for seed in range(200):
            child1, _ = operator.crossover(parents, np.random.default_rng(seed))
            points.add(int(child1.sum()))
        assert points == set(range(6))

    def test_crossover_does_not_alias_parents(self, problem):
        parents = [_solution([1] * 6, problem, 0), _solution([0] * 6, problem, 0)]
        offspring = BitStringOperator(0.0).crossover(parents, np.random.default_rng(0))
        offspring[0][:] = 1
        offspring[1][:] = 1
        np.testing.assert_array_equal(parents[1].representation, [0] * 6)

    def test_crossover_rejects_odd_parent_count(self, problem):
        parents = [_solution([0] * 6, problem, 0) for _ in range(3)]
        with pytest.raises(InvalidConfiguration):
            BitStringOperator(0.0).crossover(parents, np.random.default_rng(0))

    def test_tournament_picks_strictly_lower_fitness(self, problem):
        population = [_solution([0] * 6, problem, 5), _solution([1] * 6, problem, 2)]
        rng = _ScriptedRng(integers=[np.array([[0, 1], [1, 0]])])
        selected = BitStringOperator(0.0).select(population, rng)
        assert selected == [population[1], population[1]]

    def test_tournament_tie_emits_second_draw(self, problem):
        population = [_solution([0] * 6, problem, 3), _solution([1] * 6, problem, 3)]
        rng = _ScriptedRng(integers=[np.array([[0, 1], [1, 0]])])
        selected = BitStringOperator(0.0).select(population, rng)
        assert selected[0] is population[1]
        assert selected[1] is population[0]

    def test_selection_keeps_population_size(self, problem):
        population = problem.get_initial_population(8, np.random.default_rng(1))
        for sol in population:
            sol.evaluate()
        selected = BitStringOperator(0.0).select(population, np.random.default_rng(2))
        assert len(selected) == 8
        assert all(any(s is p for p in population) for s in selected)

    def test_mutation_rate_extremes(self):
        offspring = [np.array([0, 1, 0, 1], dtype=np.int8)]
        BitStringOperator(0.0).mutate(offspring, np.random.default_rng(0))
        np.testing.assert_array_equal(offspring[0], [0, 1, 0, 1])
        BitStringOperator(1.0).mutate(offspring, np.random.default_rng(0))
        np.testing.assert_array_equal(offspring[0], [1, 0, 1, 0])

    def test_mutation_flips_only_drawn_bits(self):
        offspring = [np.array([0, 0, 1, 1], dtype=np.int8)]
        rng = _ScriptedRng(random=[np.array([0.004, 0.5, 0.009, 0.99])])
        BitStringOperator(0.01).mutate(offspring, rng)
        np.testing.assert_array_equal(offspring[0], [1, 0, 0, 1])


# =============================================================================
# Configuration
# =============================================================================

class TestConfiguration:
    @pytest.mark.parametrize("kwargs", [
        {"population_size": 0},
        {"population_size": -4},
        {"population_size": 7},
        {"population_size": 4.0},
        {"mutation_rate": -0.1},
        {"mutation_rate": 1.5},
        {"mutation_rate": float("nan")},
        {"max_iterations": 0},
    ])
    def test_invalid_parameters(self, problem, kwargs):
        with pytest.raises(InvalidConfiguration):
            GeneticAlgorithm(problem, **kwargs)

    def test_empty_items_fail_before_search(self):
        with pytest.raises(InvalidConfiguration):
            GeneticAlgorithm(SubsetSumProblem([], 3), population_size=4)

    def test_defaults(self, problem):
        ga = GeneticAlgorithm(problem)
        assert ga.population_size == 100
        assert ga.mutation_rate == 0.01
        assert ga.max_iterations == 1000

    def test_from_config(self, problem):
        ga = GeneticAlgorithm.from_config(problem, GAConfig(population_size=10, mutation_rate=0.2,
                                                           max_generations=5, seed=3))
        assert (ga.population_size, ga.mutation_rate, ga.max_iterations, ga.seed) == (10, 0.2, 5, 3)

    def test_config_validation_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            GAConfig(population_size=3).validate()


# =============================================================================
# Search behaviour
# =============================================================================

class TestSearch:
    def test_population_size_constant(self, problem):
        ga = GeneticAlgorithm(problem, population_size=12, max_iterations=20, seed=4)
        ga.initialize()
        assert len(ga.population) == 12
        for _ in range(20):
            ga.step()
            assert len(ga.population) == 12
            assert all(len(sol.representation) == problem.dimension for sol in ga.population)

    def test_fitness_never_negative(self):
        problem = demo_problem()
        ga = GeneticAlgorithm(problem, population_size=20, max_iterations=30, seed=8)
        ga.initialize()
        for _ in range(30):
            ga.step()
            for sol in ga.population:
                assert sol.fitness >= 0
                assert (sol.fitness == 0) == (problem.subset_sum(sol.representation) == problem.target)

    def test_best_is_from_current_population(self, problem):
        ga = GeneticAlgorithm(problem, population_size=10, max_iterations=15, seed=12)
        result = ga.solve()
        assert result.fitness == min(sol.fitness for sol in ga.population)
        assert ga.best_solution is ga.population[ga.best_index]

    def test_history_tracks_each_generation(self, problem):
        ga = GeneticAlgorithm(problem, population_size=10, max_iterations=25, seed=2)
        result = ga.solve()
        assert len(result.history) == result.iterations
        assert result.history[-1] == result.fitness
        if result.fitness != 0:
            assert result.iterations == 25
        else:
            assert result.history.index(0) == result.iterations - 1

    def test_scenario_exact_match_terminates_early(self):
        problem = SubsetSumProblem([1, 2, 3], 6)
        ga = GeneticAlgorithm(problem, population_size=20, mutation_rate=0.05, max_iterations=1000, seed=0)
        result = ga.solve()
        assert result.fitness == 0
        assert result.solved
        assert sum(result.subset) == 6
        assert result.subset == [1, 2, 3]
        assert result.iterations <= 1000

    def test_scenario_no_exact_subset_prefers_empty_set(self):
        problem = SubsetSumProblem([5, 10], 1)
        ga = GeneticAlgorithm(problem, population_size=20, mutation_rate=0.01, max_iterations=200, seed=1)
        result = ga.solve()
        assert result.fitness == 1
        assert result.subset == []
        assert result.subset_sum == 0
        assert not result.solved
        assert result.iterations == 200

    def test_same_seed_same_run(self):
        problem = demo_problem()
        first = GeneticAlgorithm(problem, population_size=16, max_iterations=40, seed=123).solve()
        second = GeneticAlgorithm(problem, population_size=16, max_iterations=40, seed=123).solve()
        assert first.fitness == second.fitness
        assert first.subset == second.subset
        assert first.history == second.history

    def test_repeated_solve_is_reproducible(self):
        ga = GeneticAlgorithm(demo_problem(), population_size=16, max_iterations=40, seed=9)
        assert ga.solve() == ga.solve()


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
