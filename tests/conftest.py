"""
Shared fixtures for evoswarm tests.

Provides small search spaces, goals and configurations that keep individual
optimizer runs fast enough to repeat many times inside one test.
"""

import numpy as np
import pytest

from evoswarm.optimisation.config import GAConfig, PSOConfig, StatisticsConfig, TerminationConfig
from evoswarm.optimisation.objectives import GoalFromFunction, create_benchmark_goal
from evoswarm.optimisation.problems import SearchSpace


def bowl(x: np.ndarray) -> float:
    """Convex bowl with its minimum (0) at the origin."""
    return float(np.sum(x**2))


@pytest.fixture
def bowl_goal():
    return GoalFromFunction(bowl, dimension=2, name="bowl")


@pytest.fixture
def sphere_space():
    return SearchSpace.uniform(2, -500.0, 500.0)


@pytest.fixture
def ga_config():
    return GAConfig(population_size=20, crossover_probability=0.8, mutation_probability=0.05)


@pytest.fixture
def pso_config():
    return PSOConfig(
        population_size=15,
        inertia_weight=0.7,
        cognitive_coefficient=1.5,
        social_coefficient=1.5,
        velocity_limit={"policy": "modulus", "max_velocity": 10.0},
    )


@pytest.fixture
def short_termination():
    return TerminationConfig(max_iterations=25)


@pytest.fixture
def statistics_config():
    return StatisticsConfig(run_count=6, random_seed_strategy="sequential", base_seed=11)


@pytest.fixture
def basic_config_dict():
    """Minimal valid configuration dictionary for the config manager."""
    return {
        "problem": {
            "objective": {"type": "sphere"},
            "dimension": 3,
            "bounds": [-10.0, 10.0],
        },
        "optimization": {
            "algorithm": {"type": "PSO", "population_size": 12},
            "termination": {"max_iterations": 20},
            "monitoring": {"progress_frequency": 5},
            "statistics": {"run_count": 4, "random_seed_strategy": "sequential", "base_seed": 3},
        },
    }


@pytest.fixture
def paraboloid_goal():
    return create_benchmark_goal("paraboloid", 3)
