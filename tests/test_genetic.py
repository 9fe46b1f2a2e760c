"""
Tests for the genetic algorithm.

Includes the convergence scenario on a convex bowl: population 50,
crossover 0.8, mutation 0.05, two dimensions in [-500, 500], 200
iterations, repeated over 30 independently seeded runs.
"""

import numpy as np
import pytest

from evoswarm.optimisation.algorithms import Candidate, GeneticOptimizer
from evoswarm.optimisation.config import GAConfig, StatisticsConfig, TerminationConfig
from evoswarm.optimisation.objectives import GoalFromFunction, create_benchmark_goal
from evoswarm.optimisation.problems import SearchSpace
from evoswarm.optimisation.runners import StatisticsCollector


def bowl(x: np.ndarray) -> float:
    return float(np.sum(x**2))


class TestPopulation:
    """Population invariants."""

    @pytest.mark.parametrize("crossover", ["blend", "arithmetic", "uniform", "single_point"])
    @pytest.mark.parametrize("selection", ["tournament", "roulette"])
    def test_cardinality_is_constant(self, bowl_goal, sphere_space, crossover, selection):
        """Every generation has exactly population_size candidates, all inside the bounds."""
        config = GAConfig(population_size=13, crossover=crossover, selection=selection, elitism=False)
        optimizer = GeneticOptimizer(bowl_goal, sphere_space, config, TerminationConfig(max_iterations=10), rng=3)

        optimizer.initialize()
        assert len(optimizer.population) == 13
        for _ in range(10):
            optimizer.step()
            assert len(optimizer.population) == 13
            assert all(c.is_evaluated for c in optimizer.population)

        # recombination stays within the parents' box or is clipped, mutation is clipped
        assert all(sphere_space.contains(c.solution) for c in optimizer.population)

    def test_elitism_keeps_best(self, bowl_goal, sphere_space):
        config = GAConfig(population_size=10, mutation_probability=1.0, elitism=True)
        optimizer = GeneticOptimizer(bowl_goal, sphere_space, config, TerminationConfig(max_iterations=5), rng=8)
        optimizer.initialize()

        for _ in range(5):
            best_before = min(c.fitness for c in optimizer.population)
            optimizer.step()
            assert min(c.fitness for c in optimizer.population) <= best_before

    def test_unchanged_clones_are_not_reevaluated(self, sphere_space):
        """With no crossover and no mutation the population is cloned without new evaluations."""
        goal = GoalFromFunction(bowl, dimension=2)
        config = GAConfig(population_size=10, crossover_probability=0.0, mutation_probability=0.0)
        optimizer = GeneticOptimizer(goal, sphere_space, config, TerminationConfig(max_iterations=5), rng=1)

        result = optimizer.run()
        assert result.evaluation_count == 10
        assert goal.evaluation_count == 10

    def test_candidates_are_immutable(self):
        candidate = Candidate(np.array([1.0, 2.0]))
        assert not candidate.is_evaluated
        with pytest.raises(ValueError):
            candidate.solution[0] = 5.0

        evaluated = candidate.evaluated(bowl)
        assert evaluated.fitness == 5.0
        assert candidate.fitness is None

    def test_mutation_respects_bounds(self, bowl_goal):
        space = SearchSpace.uniform(2, -1.0, 1.0)
        config = GAConfig(population_size=20, mutation_probability=1.0, mutation_scale=5.0)
        optimizer = GeneticOptimizer(bowl_goal, space, config, TerminationConfig(max_iterations=5), rng=0)
        optimizer.run()
        assert all(space.contains(c.solution) for c in optimizer.population)

    def test_same_seed_same_result(self, sphere_space, ga_config, short_termination):
        first = GeneticOptimizer(GoalFromFunction(bowl, 2), sphere_space, ga_config, short_termination, rng=21).run()
        second = GeneticOptimizer(GoalFromFunction(bowl, 2), sphere_space, ga_config, short_termination, rng=21).run()

        assert first.best_fitness == second.best_fitness
        assert first.convergence == second.convergence


class TestConvergence:
    """The GA reliably approaches the optimum of convex problems."""

    def test_bowl_scenario(self):
        """At least 90% of 30 runs get within 1e-2 of the minimum."""
        space = SearchSpace.uniform(2, -500.0, 500.0)
        config = GAConfig(population_size=50, crossover_probability=0.8, mutation_probability=0.05)
        termination = TerminationConfig(max_iterations=200)

        def make_optimizer(rng):
            return GeneticOptimizer(GoalFromFunction(bowl, 2), space, config, termination, rng=rng)

        statistics = StatisticsCollector(
            make_optimizer,
            StatisticsConfig(run_count=30, base_seed=12345, fitness_threshold=1e-2),
        ).collect()

        success_rate = statistics.success_rate_by_fitness()
        assert success_rate >= 0.9
        print(f"✅ GA bowl success rate: {success_rate:.0%}, mean best {statistics.fitness_mean():.2e}")

    def test_paraboloid_solution(self, paraboloid_goal):
        """The best solution of a shifted paraboloid is close to (1, 2, 3)."""
        space = SearchSpace.uniform(3, -100.0, 100.0)
        config = GAConfig(population_size=60)
        result = GeneticOptimizer(paraboloid_goal, space, config, TerminationConfig(max_iterations=300), rng=5).run()

        np.testing.assert_allclose(result.best_solution, [1.0, 2.0, 3.0], atol=0.05)

    def test_rastrigin_improves(self):
        goal = create_benchmark_goal("rastrigin", 2)
        space = SearchSpace.uniform(2, -5.12, 5.12)
        result = GeneticOptimizer(goal, space, GAConfig(population_size=40),
                                  TerminationConfig(max_iterations=100), rng=0).run()

        assert result.convergence[-1] <= result.convergence[0]
        assert result.best_fitness < 5.0
