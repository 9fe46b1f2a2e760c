"""
Tests for goals, benchmark objectives and the search space.

Covers evaluation counting (including concurrent evaluation), dimension
checks, caller-array immutability and the benchmark registry.
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from evoswarm.exceptions import ConfigurationError, DimensionMismatch, InvalidDimension
from evoswarm.optimisation.objectives import BENCHMARKS, GoalFromFunction, create_benchmark_goal, get_benchmark
from evoswarm.optimisation.problems import SearchSpace


class TestGoalEvaluation:
    """Evaluation counter and input validation."""

    def test_counter_increments_per_evaluation(self, bowl_goal):
        """Each successful evaluation increments the counter by one."""
        assert bowl_goal.evaluation_count == 0
        assert bowl_goal.evaluate([3.0, 4.0]) == 25.0
        bowl_goal.evaluate(np.array([1.0, 1.0]))
        assert bowl_goal.evaluation_count == 2

        print("✅ Evaluation counter increments")

    def test_dimension_mismatch_leaves_counter_unchanged(self):
        """A 2-vector passed to a 3-dimensional goal is rejected before evaluation."""
        goal = GoalFromFunction(lambda x: float(np.sum(x**2)), dimension=3)
        goal.evaluate([0.0, 0.0, 0.0])

        with pytest.raises(DimensionMismatch, match="length 3"):
            goal.evaluate([1.0, 2.0])

        assert goal.evaluation_count == 1
        print("✅ Dimension mismatch rejected, counter unchanged")

    def test_dimension_mismatch_is_value_error(self, bowl_goal):
        with pytest.raises(ValueError):
            bowl_goal.evaluate([1.0])

    def test_caller_array_not_mutated(self):
        """The objective receives a read-only copy of the caller's vector."""

        def mutating(x):
            x[0] = 99.0
            return 0.0

        goal = GoalFromFunction(mutating, dimension=2)
        solution = np.array([1.0, 2.0])

        with pytest.raises(ValueError):
            goal.evaluate(solution)

        np.testing.assert_array_equal(solution, [1.0, 2.0])
        print("✅ Caller array protected")

    @pytest.mark.parametrize("dimension", [0, -3])
    def test_invalid_dimension(self, dimension):
        with pytest.raises(InvalidDimension):
            GoalFromFunction(lambda x: 0.0, dimension=dimension)

    def test_reset_count(self, bowl_goal):
        bowl_goal.evaluate([1.0, 1.0])
        bowl_goal.reset_count()
        assert bowl_goal.evaluation_count == 0

    def test_concurrent_evaluations_are_counted_exactly(self, bowl_goal):
        """Evaluations from several threads are all counted."""
        points = [np.array([float(i), 1.0]) for i in range(2000)]

        with ThreadPoolExecutor(max_workers=8) as executor:
            values = list(executor.map(bowl_goal.evaluate, points))

        assert bowl_goal.evaluation_count == 2000
        assert values[10] == 101.0
        print(f"✅ Concurrent evaluations counted: {bowl_goal.evaluation_count}")


class TestBenchmarks:
    """Benchmark registry and known optima."""

    @pytest.mark.parametrize("name", sorted(BENCHMARKS))
    def test_optimum_is_near_zero(self, name):
        """Every benchmark evaluates to (almost) zero at its documented optimum."""
        benchmark = get_benchmark(name)
        goal = create_benchmark_goal(name, 4)
        value = goal.evaluate(benchmark.optimum(4))

        assert value == pytest.approx(0.0, abs=1e-3)
        print(f"✅ {name} optimum value: {value:.2e}")

    def test_paraboloid_minimum_is_shifted(self):
        goal = create_benchmark_goal("paraboloid", 3)
        assert goal.evaluate([1.0, 2.0, 3.0]) == 0.0
        assert goal.evaluate([0.0, 0.0, 0.0]) == 14.0

    def test_unknown_benchmark(self):
        with pytest.raises(ConfigurationError, match="Unknown objective type"):
            get_benchmark("does_not_exist")

    def test_each_goal_has_its_own_counter(self):
        first = create_benchmark_goal("sphere", 2)
        second = create_benchmark_goal("sphere", 2)
        first.evaluate([1.0, 1.0])
        assert second.evaluation_count == 0


class TestSearchSpace:
    """Bounds validation, sampling and clipping."""

    def test_uniform_space(self):
        space = SearchSpace.uniform(3, -5.0, 5.0)
        assert space.dimension == 3
        assert space.intervals == [(-5.0, 5.0)] * 3
        np.testing.assert_array_equal(space.width, [10.0, 10.0, 10.0])

    def test_samples_within_bounds(self):
        space = SearchSpace([(-1.0, 1.0), (10.0, 20.0)])
        points = space.sample(np.random.default_rng(0), 500)

        assert points.shape == (500, 2)
        assert all(space.contains(p) for p in points)

    def test_clip(self):
        space = SearchSpace([(-1.0, 1.0), (0.0, 2.0)])
        np.testing.assert_array_equal(space.clip(np.array([5.0, -3.0])), [1.0, 0.0])

    def test_invalid_intervals(self):
        with pytest.raises(ConfigurationError, match="lower bound exceeds"):
            SearchSpace([(1.0, -1.0)])
        with pytest.raises(ConfigurationError, match="finite"):
            SearchSpace([(0.0, np.inf)])
        with pytest.raises(InvalidDimension):
            SearchSpace([])
