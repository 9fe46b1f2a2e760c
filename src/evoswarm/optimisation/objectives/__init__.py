from .base import Goal, GoalFromFunction
from .benchmarks import BENCHMARKS, Benchmark, create_benchmark_goal, get_benchmark

__all__ = ["Goal",
           "GoalFromFunction",
           "BENCHMARKS",
           "Benchmark",
           "create_benchmark_goal",
           "get_benchmark"]
