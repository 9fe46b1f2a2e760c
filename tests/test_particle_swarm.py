"""
Tests for particle swarm optimization.

Includes the velocity-limit scenario: swarm of 30, w = 0.7, c1 = c2 = 1.5,
modulus limit 10, no teleport, 100 iterations. Every corrected velocity must
respect the limit and the personal/global best invariants must hold.
"""

from unittest.mock import patch

import numpy as np
import pytest

from evoswarm.optimisation.algorithms import (
    MoveToBoundary,
    OptimizerState,
    Particle,
    ParticleSwarmOptimizer,
    RandomTeleport,
)
from evoswarm.optimisation.config import PSOConfig, StatisticsConfig, TerminationConfig
from evoswarm.optimisation.objectives import GoalFromFunction, create_benchmark_goal
from evoswarm.optimisation.problems import SearchSpace
from evoswarm.optimisation.runners import StatisticsCollector


def bowl(x: np.ndarray) -> float:
    return float(np.sum(x**2))


class InvariantRecorder:
    """Callback checking swarm invariants after every iteration."""

    def __init__(self):
        self.max_speed = 0.0
        self.max_component_speed = np.zeros(0)
        self.previous_personal_bests = None
        self.iterations = 0

    def __call__(self, optimizer, state):
        speeds = [np.linalg.norm(p.velocity) for p in optimizer.particles]
        self.max_speed = max(self.max_speed, *speeds)
        component = np.max(np.abs([p.velocity for p in optimizer.particles]), axis=0)
        self.max_component_speed = (
            component if self.max_component_speed.size == 0 else np.maximum(self.max_component_speed, component)
        )

        personal_bests = np.array([p.best_fitness for p in optimizer.particles])
        assert optimizer.global_best_fitness <= personal_bests.min()
        assert optimizer.global_best_fitness == state.best_fitness
        if self.previous_personal_bests is not None:
            assert np.all(personal_bests <= self.previous_personal_bests)
        self.previous_personal_bests = personal_bests
        self.iterations += 1


class TestVelocityLimits:
    """Corrected velocities never exceed their limits."""

    def test_modulus_limit_scenario(self):
        """Swarm 30, w 0.7, c1 = c2 = 1.5, |v| <= 10 for 100 iterations."""
        config = PSOConfig(
            population_size=30,
            inertia_weight=0.7,
            cognitive_coefficient=1.5,
            social_coefficient=1.5,
            velocity_limit={"policy": "modulus", "max_velocity": 10.0},
            teleport_probability=0.0,
        )
        recorder = InvariantRecorder()
        optimizer = ParticleSwarmOptimizer(
            GoalFromFunction(bowl, 3),
            SearchSpace.uniform(3, -500.0, 500.0),
            config,
            TerminationConfig(max_iterations=100),
            rng=7,
            callbacks=[recorder],
        )
        result = optimizer.run()

        assert result.iterations == 100
        assert recorder.iterations == 100
        assert recorder.max_speed <= 10.0
        assert len(optimizer.particles) == 30
        print(f"✅ Max speed {recorder.max_speed:.6f} <= 10, best {result.best_fitness:.4g}")

    def test_per_direction_limit(self):
        limits = [0.5, 2.0, 8.0]
        config = PSOConfig(
            population_size=20,
            velocity_limit={"policy": "per_direction", "max_velocity": limits},
            initial_velocity="random",
            initial_velocity_scale=0.5,
        )
        recorder = InvariantRecorder()
        ParticleSwarmOptimizer(
            GoalFromFunction(bowl, 3),
            SearchSpace.uniform(3, -100.0, 100.0),
            config,
            TerminationConfig(max_iterations=50),
            rng=3,
            callbacks=[recorder],
        ).run()

        assert np.all(recorder.max_component_speed <= limits)

    def test_initial_random_velocity_is_corrected(self):
        config = PSOConfig(
            population_size=25,
            initial_velocity="random",
            initial_velocity_scale=1.0,
            velocity_limit={"policy": "modulus", "max_velocity": 1.0},
        )
        optimizer = ParticleSwarmOptimizer(
            GoalFromFunction(bowl, 2), SearchSpace.uniform(2, -50.0, 50.0), config,
            TerminationConfig(max_iterations=5), rng=0,
        )
        optimizer.initialize()
        assert all(np.linalg.norm(p.velocity) <= 1.0 for p in optimizer.particles)


class TestSwarmUpdates:
    """Personal/global best bookkeeping and post-move policies."""

    def test_personal_best_only_on_strict_improvement(self):
        particle = Particle(np.array([1.0]), np.zeros(1), 1.0, np.array([1.0]), 1.0)

        particle.position, particle.fitness = np.array([2.0]), 1.0
        assert not particle.update_best()
        np.testing.assert_array_equal(particle.best_position, [1.0])

        particle.position, particle.fitness = np.array([3.0]), 0.5
        assert particle.update_best()
        assert particle.best_fitness == 0.5

    def test_global_best_committed_after_all_particles(self, bowl_goal, sphere_space, pso_config):
        """Every particle in an iteration sees the global best from the start of that iteration."""
        optimizer = ParticleSwarmOptimizer(bowl_goal, sphere_space, pso_config, TerminationConfig(max_iterations=3),
                                           rng=11)
        optimizer.initialize()
        seen = []
        original = optimizer.velocity_calculator.calculate

        def spy(velocity, position, personal_best, global_best, iteration, rng):
            seen.append(global_best.copy())
            return original(velocity, position, personal_best, global_best, iteration, rng)

        with patch.object(optimizer.velocity_calculator, "calculate", side_effect=spy):
            snapshot = optimizer.global_best_position.copy()
            optimizer.step()

        assert len(seen) == pso_config.population_size
        for global_best in seen:
            np.testing.assert_array_equal(global_best, snapshot)

    def test_teleport_keeps_personal_best(self, sphere_space):
        """With probability 1 every particle teleports, yet personal bests never get worse."""
        config = PSOConfig(population_size=10, teleport_probability=1.0, teleport_velocity="random")
        recorder = InvariantRecorder()
        optimizer = ParticleSwarmOptimizer(
            GoalFromFunction(bowl, 2), sphere_space, config, TerminationConfig(max_iterations=20), rng=2,
            callbacks=[recorder],
        )
        optimizer.run()

        teleport = next(m for m in optimizer.post_moves if isinstance(m, RandomTeleport))
        assert teleport.teleport_count == 10 * 20
        assert recorder.iterations == 20

    def test_teleport_zero_velocity(self, sphere_space):
        teleport = RandomTeleport(1.0, velocity_mode="zero")
        particle = Particle(np.array([1.0, 1.0]), np.array([3.0, 3.0]), 2.0, np.array([1.0, 1.0]), 2.0)
        teleport.apply(particle, sphere_space, np.random.default_rng(0))

        np.testing.assert_array_equal(particle.velocity, [0.0, 0.0])
        assert sphere_space.contains(particle.position)
        np.testing.assert_array_equal(particle.best_position, [1.0, 1.0])

    def test_teleport_disabled(self, sphere_space):
        teleport = RandomTeleport(0.0)
        particle = Particle(np.array([1.0, 1.0]), np.zeros(2), 2.0, np.array([1.0, 1.0]), 2.0)
        teleport.apply(particle, sphere_space, np.random.default_rng(0))
        np.testing.assert_array_equal(particle.position, [1.0, 1.0])

    def test_move_to_boundary(self):
        space = SearchSpace.uniform(2, -1.0, 1.0)
        particle = Particle(np.array([3.0, -0.5]), np.zeros(2), 0.0, np.zeros(2), 0.0)
        MoveToBoundary().apply(particle, space, np.random.default_rng(0))
        np.testing.assert_array_equal(particle.position, [1.0, -0.5])

    def test_positions_stay_in_bounds(self, bowl_goal):
        space = SearchSpace.uniform(2, 10.0, 20.0)
        config = PSOConfig(population_size=10, inertia_weight=1.2)
        optimizer = ParticleSwarmOptimizer(bowl_goal, space, config, TerminationConfig(max_iterations=30), rng=0)
        optimizer.run()
        assert all(space.contains(p.position) for p in optimizer.particles)

    def test_dimension_mismatch_rejected(self, bowl_goal, pso_config):
        from evoswarm.exceptions import DimensionMismatch

        with pytest.raises(DimensionMismatch):
            ParticleSwarmOptimizer(bowl_goal, SearchSpace.uniform(3, -1.0, 1.0), pso_config,
                                   TerminationConfig(max_iterations=5))


class TestConvergence:
    """PSO finds the optimum of standard benchmarks."""

    def test_paraboloid(self, paraboloid_goal):
        config = PSOConfig(population_size=30, inertia_weight=0.9, inertia_weight_final=0.4)
        result = ParticleSwarmOptimizer(
            paraboloid_goal, SearchSpace.uniform(3, -100.0, 100.0), config,
            TerminationConfig(max_iterations=300), rng=1,
        ).run()

        np.testing.assert_allclose(result.best_solution, [1.0, 2.0, 3.0], atol=1e-2)
        print(f"✅ Paraboloid best solution: {result.best_solution}")

    def test_canonical_converges_to_target(self):
        config = PSOConfig(population_size=20, velocity_update="canonical",
                           cognitive_coefficient=2.05, social_coefficient=2.05, constriction_k=1.0)
        termination = TerminationConfig(max_iterations=1000, target_fitness=0.0, tolerance=1e-8)
        result = ParticleSwarmOptimizer(
            create_benchmark_goal("sphere", 2), SearchSpace.uniform(2, -100.0, 100.0), config, termination, rng=3,
        ).run()

        assert result.state is OptimizerState.CONVERGED
        assert result.best_fitness <= 1e-8

    def test_schwefel_with_teleport(self):
        """Teleport lets most runs escape local minima of the Schwefel function."""
        config = PSOConfig(
            population_size=30,
            inertia_weight=0.9,
            inertia_weight_final=0.4,
            velocity_limit={"policy": "modulus", "max_velocity": 700.0},
            teleport_probability=0.05,
        )
        space = SearchSpace.uniform(2, -500.0, 500.0)
        termination = TerminationConfig(max_iterations=1000, target_fitness=0.0, tolerance=1e-3)

        def make_optimizer(rng):
            return ParticleSwarmOptimizer(create_benchmark_goal("schwefel", 2), space, config, termination, rng=rng)

        statistics = StatisticsCollector(
            make_optimizer,
            StatisticsConfig(run_count=10, base_seed=99, reference_solution=[420.9687, 420.9687],
                             solution_tolerance=1.0, distance_metric="component"),
        ).collect()

        assert statistics.success_rate_by_solution() >= 0.5
        print(f"✅ Schwefel solution success rate: {statistics.success_rate_by_solution():.0%}")
