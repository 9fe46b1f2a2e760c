"""
Benchmark objective functions.

Classic test functions used to exercise the optimizers and the statistics
harness. Each entry of ``BENCHMARKS`` records the function, the usual search
interval and the known global minimum so configs can refer to a benchmark by
name.

| name       | interval         | minimum at                    | f(min) |
|------------|------------------|-------------------------------|--------|
| sphere     | [-100, 100]      | 0                             | 0      |
| paraboloid | [-100, 100]      | x_i = i + 1                   | 0      |
| rastrigin  | [-5.12, 5.12]    | 0                             | 0      |
| rosenbrock | [-5, 10]         | 1                             | 0      |
| schwefel   | [-500, 500]      | x_i = 420.9687                | ~0     |
"""

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

from evoswarm.exceptions import ConfigurationError

from .base import GoalFromFunction

logger = logging.getLogger(__name__)


def sphere(x: np.ndarray) -> float:
    return float(np.sum(x**2))


def paraboloid(x: np.ndarray) -> float:
    """Shifted bowl with its minimum at (1, 2, ..., n)."""
    shift = np.arange(1, x.shape[0] + 1, dtype=float)
    return float(np.sum((x - shift) ** 2))


def rastrigin(x: np.ndarray) -> float:
    return float(10.0 * x.shape[0] + np.sum(x**2 - 10.0 * np.cos(2.0 * np.pi * x)))


def rosenbrock(x: np.ndarray) -> float:
    return float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2))


def schwefel(x: np.ndarray) -> float:
    return float(418.9829 * x.shape[0] - np.sum(x * np.sin(np.sqrt(np.abs(x)))))


@dataclass(frozen=True)
class Benchmark:
    """Benchmark function with its default interval and known optimum."""

    function: Callable[[np.ndarray], float]
    bounds: tuple[float, float]
    optimum: Callable[[int], np.ndarray]


BENCHMARKS: dict[str, Benchmark] = {
    "sphere": Benchmark(sphere, (-100.0, 100.0), lambda n: np.zeros(n)),
    "paraboloid": Benchmark(paraboloid, (-100.0, 100.0), lambda n: np.arange(1, n + 1, dtype=float)),
    "rastrigin": Benchmark(rastrigin, (-5.12, 5.12), lambda n: np.zeros(n)),
    "rosenbrock": Benchmark(rosenbrock, (-5.0, 10.0), lambda n: np.ones(n)),
    "schwefel": Benchmark(schwefel, (-500.0, 500.0), lambda n: np.full(n, 420.9687)),
}


def get_benchmark(name: str) -> Benchmark:
    """Look up a benchmark by (case-insensitive) name."""
    key = name.lower()
    if key not in BENCHMARKS:
        raise ConfigurationError(f"Unknown objective type '{name}'. Available: {sorted(BENCHMARKS)}")
    return BENCHMARKS[key]


def create_benchmark_goal(name: str, dimension: int) -> GoalFromFunction:
    """Create a fresh goal (with its own evaluation counter) for a benchmark."""
    benchmark = get_benchmark(name)
    return GoalFromFunction(benchmark.function, dimension, name=name.lower())
