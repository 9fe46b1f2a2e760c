"""
Configuration data classes and management for optimization.

This module defines structured configuration classes for the genetic and
particle swarm optimizers, the stopping criteria and the statistics
harness, and provides validation and loading capabilities.

Every dataclass validates itself in ``__post_init__``: an invalid value
raises a ``ConfigurationError`` and no configuration object is created, so a
configuration is either fully valid or rejected as a whole. Values are never
silently clamped.

Example YAML Configuration:
```yaml
problem:
  objective:
    type: "schwefel"
  dimension: 3
  bounds: [-500.0, 500.0]

optimization:
  algorithm:
    type: "PSO"
    population_size: 30
    inertia_weight: 0.7
    cognitive_coefficient: 1.5
    social_coefficient: 1.5
    velocity_limit:
      policy: "modulus"
      max_velocity: 700.0
    teleport_probability: 0.05
  termination:
    max_iterations: 3000
    target_fitness: 0.0
    tolerance: 1.0e-8
  monitoring:
    progress_frequency: 100
  statistics:
    run_count: 100
    random_seed_strategy: "spawn"
    base_seed: 42
    parallel: true
    reference_solution: [420.9687, 420.9687, 420.9687]
    solution_tolerance: 1.0
    distance_metric: "component"
```

Usage:
```python
config_manager = OptimizationConfigManager('config.yaml')
collector = config_manager.create_statistics_collector()
statistics = collector.collect()
```
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from evoswarm.exceptions import (
    ConfigurationError,
    InvalidPopulationSize,
    InvalidProbability,
    InvalidVelocityLimit,
)

logger = logging.getLogger(__name__)

SELECTION_METHODS = ["tournament", "roulette"]
CROSSOVER_METHODS = ["blend", "arithmetic", "uniform", "single_point"]
VELOCITY_UPDATES = ["inertia", "canonical"]
VELOCITY_LIMIT_POLICIES = ["modulus", "per_direction"]
VELOCITY_MODES = ["zero", "random"]
SEED_STRATEGIES = ["spawn", "sequential", "fixed"]
ALIGNMENT_POLICIES = ["pad", "truncate"]
DISTANCE_METRICS = ["euclidean", "component"]


def _check_population_size(value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise InvalidPopulationSize(value)


def _check_probability(name: str, value) -> None:
    if not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
        raise InvalidProbability(name, value)


def _check_choice(name: str, value, choices: list[str]) -> None:
    if value not in choices:
        raise ConfigurationError(f"{name} must be one of {choices}, got '{value}'")


def _check_finite(name: str, value) -> None:
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number, got {value}")


@dataclass
class GAConfig:
    """
    Genetic algorithm configuration.

    Attributes:
        population_size: Number of candidates in every generation (>= 1).
        crossover_probability: Chance a pair of parents is recombined rather
            than cloned. In [0, 1].
        mutation_probability: Per-gene chance of a Gaussian perturbation.
            In [0, 1].
        selection: 'tournament' or 'roulette' (fitness-proportional).
        tournament_size: Contestants per tournament.
        crossover: 'blend' (BLX-alpha), 'arithmetic', 'uniform' or
            'single_point'.
        blend_alpha: Extension factor of the blend crossover interval.
        mutation_scale: Standard deviation of the mutation noise as a
            fraction of each interval's width.
        elitism: Keep the best candidate unchanged in the next generation.

    Example:
        ```python
        config = GAConfig(population_size=50, crossover_probability=0.8,
                          mutation_probability=0.05)
        ```
    """

    population_size: int  # REQUIRED - no default
    crossover_probability: float = 0.8
    mutation_probability: float = 0.05
    selection: str = "tournament"
    tournament_size: int = 3
    crossover: str = "blend"
    blend_alpha: float = 0.5
    mutation_scale: float = 0.1
    elitism: bool = True

    def __post_init__(self):
        """Validate GA configuration parameters."""
        _check_population_size(self.population_size)
        _check_probability("crossover_probability", self.crossover_probability)
        _check_probability("mutation_probability", self.mutation_probability)
        _check_choice("selection", self.selection, SELECTION_METHODS)
        _check_choice("crossover", self.crossover, CROSSOVER_METHODS)

        if not isinstance(self.tournament_size, int) or self.tournament_size < 1:
            raise ConfigurationError("tournament_size must be a positive integer")

        _check_finite("blend_alpha", self.blend_alpha)
        if self.blend_alpha < 0:
            raise ConfigurationError("blend_alpha cannot be negative")

        _check_finite("mutation_scale", self.mutation_scale)
        if self.mutation_scale <= 0:
            raise ConfigurationError("mutation_scale must be positive")


@dataclass
class VelocityLimitConfig:
    """
    Velocity correction policy for PSO.

    Attributes:
        policy: 'modulus' rescales the whole velocity vector when its norm
            exceeds ``max_velocity``; 'per_direction' clamps every component
            to its own bound.
        max_velocity: A single positive bound, or (per_direction only) one
            positive bound per dimension.
    """

    policy: str = "modulus"
    max_velocity: float | list[float] = 1.0

    def __post_init__(self):
        _check_choice("velocity_limit.policy", self.policy, VELOCITY_LIMIT_POLICIES)

        limits = self.max_velocity if isinstance(self.max_velocity, (list, tuple)) else [self.max_velocity]
        if self.policy == "modulus" and len(limits) != 1:
            raise ConfigurationError("Modulus velocity limit takes a single max_velocity")
        if not limits:
            raise InvalidVelocityLimit(self.max_velocity)
        for limit in limits:
            if isinstance(limit, bool) or not isinstance(limit, (int, float)) or not limit > 0:
                raise InvalidVelocityLimit(limit)
            if not math.isfinite(limit):
                raise InvalidVelocityLimit(limit)


@dataclass
class PSOConfig:
    """
    Particle Swarm Optimization configuration.

    VELOCITY UPDATE MODES:
    =====================

    **Inertia mode** (``velocity_update='inertia'``):
        v = w(t)*v + c1*r1*(pbest - x) + c2*r2*(gbest - x)
        ``w`` is constant when ``inertia_weight_final`` is None, otherwise it
        decreases linearly from ``inertia_weight`` to ``inertia_weight_final``
        over ``max_iterations``.

    **Canonical mode** (``velocity_update='canonical'``):
        v = chi*(v + c1*r1*(pbest - x) + c2*r2*(gbest - x))
        with the constriction factor chi derived from ``constriction_k`` and
        phi = c1 + c2, which must exceed 4.

    Attributes:
        population_size: Number of particles (>= 1).
        inertia_weight: Constant or initial inertia weight, in [0, 2].
        inertia_weight_final: Final inertia weight of the linear schedule.
        cognitive_coefficient: Pull toward the personal best (c1 >= 0).
        social_coefficient: Pull toward the global best (c2 >= 0).
        velocity_update: 'inertia' or 'canonical'.
        constriction_k: k of the canonical constriction factor, in (0, 1].
        velocity_limit: Velocity correction; None disables it. A mapping is
            converted to VelocityLimitConfig.
        teleport_probability: Per-particle, per-iteration chance of being
            moved to a uniform random point. In [0, 1]; 0 disables teleport.
        teleport_velocity: Velocity after teleport, 'zero' or 'random'.
        initial_velocity: 'zero' or 'random'.
        initial_velocity_scale: Random velocity range as a fraction of each
            interval's width.
        clamp_to_bounds: Clip positions back into the search space after
            every move.
    """

    population_size: int  # REQUIRED - no default
    inertia_weight: float = 0.7
    inertia_weight_final: float | None = None
    cognitive_coefficient: float = 1.5
    social_coefficient: float = 1.5
    velocity_update: str = "inertia"
    constriction_k: float = 0.9
    velocity_limit: VelocityLimitConfig | None = None
    teleport_probability: float = 0.0
    teleport_velocity: str = "zero"
    initial_velocity: str = "zero"
    initial_velocity_scale: float = 0.1
    clamp_to_bounds: bool = True

    def __post_init__(self):
        """Validate PSO configuration parameters."""
        _check_population_size(self.population_size)

        _check_finite("inertia_weight", self.inertia_weight)
        if not 0.0 <= self.inertia_weight <= 2.0:
            raise ConfigurationError("Inertia weight should be in range [0.0, 2.0]")
        if self.inertia_weight_final is not None:
            _check_finite("inertia_weight_final", self.inertia_weight_final)
            if not 0.0 <= self.inertia_weight_final <= 2.0:
                raise ConfigurationError("Final inertia weight should be in range [0.0, 2.0]")

        for name in ("cognitive_coefficient", "social_coefficient"):
            value = getattr(self, name)
            _check_finite(name, value)
            if value < 0:
                raise ConfigurationError(f"{name} cannot be negative")

        _check_choice("velocity_update", self.velocity_update, VELOCITY_UPDATES)
        if self.velocity_update == "canonical":
            if not 0.0 < self.constriction_k <= 1.0:
                raise ConfigurationError("constriction_k must be in (0, 1]")
            if self.cognitive_coefficient + self.social_coefficient <= 4.0:
                raise ConfigurationError(
                    "Canonical velocity update needs cognitive_coefficient + social_coefficient > 4"
                )

        if isinstance(self.velocity_limit, dict):
            self.velocity_limit = VelocityLimitConfig(**self.velocity_limit)
        elif self.velocity_limit is not None and not isinstance(self.velocity_limit, VelocityLimitConfig):
            raise ConfigurationError(f"velocity_limit must be a mapping, got {type(self.velocity_limit)}")

        _check_probability("teleport_probability", self.teleport_probability)
        _check_choice("teleport_velocity", self.teleport_velocity, VELOCITY_MODES)
        _check_choice("initial_velocity", self.initial_velocity, VELOCITY_MODES)

        _check_finite("initial_velocity_scale", self.initial_velocity_scale)
        if self.initial_velocity_scale <= 0:
            raise ConfigurationError("initial_velocity_scale must be positive")


@dataclass
class TerminationConfig:
    """
    Stopping criteria shared by all optimizers.

    The optimizer stops when the FIRST of these conditions is met:
        1. ``max_iterations`` iterations have run
        2. best fitness <= ``target_fitness + tolerance`` (if a target is set)
        3. best fitness has not improved by more than ``improvement_tolerance``
           for ``no_improvement_limit`` consecutive iterations (if set)

    Example Configurations:
        ```python
        # Fixed budget
        config = TerminationConfig(max_iterations=200)

        # Known optimum
        config = TerminationConfig(max_iterations=3000, target_fitness=0.0, tolerance=1e-8)

        # Stagnation detection
        config = TerminationConfig(max_iterations=3000, no_improvement_limit=150,
                                   improvement_tolerance=1e-7)
        ```
    """

    max_iterations: int  # REQUIRED - no default
    target_fitness: float | None = None
    tolerance: float = 0.0
    no_improvement_limit: int | None = None
    improvement_tolerance: float = 0.0

    def __post_init__(self):
        """Validate termination configuration."""
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int) or self.max_iterations < 1:
            raise ConfigurationError("max_iterations must be a positive integer")

        if self.target_fitness is not None:
            _check_finite("target_fitness", self.target_fitness)

        _check_finite("tolerance", self.tolerance)
        if self.tolerance < 0:
            raise ConfigurationError("tolerance cannot be negative")

        if self.no_improvement_limit is not None:
            if not isinstance(self.no_improvement_limit, int) or self.no_improvement_limit < 1:
                raise ConfigurationError("no_improvement_limit must be a positive integer")

        _check_finite("improvement_tolerance", self.improvement_tolerance)
        if self.improvement_tolerance < 0:
            raise ConfigurationError("improvement_tolerance cannot be negative")


@dataclass
class MonitoringConfig:
    """
    Progress monitoring and logging configuration.

    Attributes:
        progress_frequency: Log progress every N iterations.
        log_level: Level of the per-run progress messages.
    """

    progress_frequency: int = 10
    log_level: str = "DEBUG"

    def __post_init__(self):
        """Validate monitoring configuration."""
        if self.progress_frequency < 1:
            raise ConfigurationError("Progress frequency must be positive")

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level not in valid_log_levels:
            raise ConfigurationError(f"Log level must be one of {valid_log_levels}")


@dataclass
class StatisticsConfig:
    """
    Multi-run statistics configuration.

    Attributes:
        run_count: Number of independent runs.
        random_seed_strategy: How each run's generator is seeded:
            - 'spawn': independent child streams of ``base_seed`` (default)
            - 'sequential': ``base_seed + run_index``
            - 'fixed': every run uses ``base_seed`` (requires base_seed)
        base_seed: Root seed; None draws fresh OS entropy ('spawn' only).
        parallel: Execute runs on a thread pool.
        max_workers: Thread pool size (None lets the executor decide).
        alignment: Convergence curve alignment, 'pad' (repeat final value up
            to the longest run) or 'truncate' (cut to the shortest run).
        fitness_threshold: Success threshold for the final fitness.
        reference_solution: Known optimum for the solution success rate.
        solution_tolerance: Allowed distance from ``reference_solution``; a
            scalar, or one value per component with the 'component' metric.
        distance_metric: 'euclidean' or 'component'.
        maximize: Success by fitness means >= threshold instead of <=.

    Example:
        ```yaml
        statistics:
          run_count: 30
          random_seed_strategy: sequential
          base_seed: 1000
          parallel: true
          fitness_threshold: 1.0e-3
        ```
    """

    run_count: int = 10
    random_seed_strategy: str = "spawn"
    base_seed: int | None = None
    parallel: bool = False
    max_workers: int | None = None
    alignment: str = "pad"
    fitness_threshold: float | None = None
    reference_solution: list[float] | None = None
    solution_tolerance: float | list[float] | None = None
    distance_metric: str = "euclidean"
    maximize: bool = False

    def __post_init__(self):
        """Validate statistics configuration."""
        if isinstance(self.run_count, bool) or not isinstance(self.run_count, int) or self.run_count < 1:
            raise ConfigurationError("run_count must be a positive integer")

        _check_choice("random_seed_strategy", self.random_seed_strategy, SEED_STRATEGIES)
        if self.base_seed is not None and (not isinstance(self.base_seed, int) or self.base_seed < 0):
            raise ConfigurationError("base_seed must be a non-negative integer")
        if self.random_seed_strategy in ("fixed", "sequential") and self.base_seed is None:
            raise ConfigurationError(f"random_seed_strategy '{self.random_seed_strategy}' requires base_seed")

        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigurationError("max_workers must be positive")

        _check_choice("alignment", self.alignment, ALIGNMENT_POLICIES)
        _check_choice("distance_metric", self.distance_metric, DISTANCE_METRICS)

        if self.fitness_threshold is not None:
            _check_finite("fitness_threshold", self.fitness_threshold)

        if (self.reference_solution is None) != (self.solution_tolerance is None):
            raise ConfigurationError("reference_solution and solution_tolerance must be given together")
        if self.solution_tolerance is not None:
            tolerances = np.atleast_1d(np.asarray(self.solution_tolerance, dtype=float))
            if np.any(tolerances < 0) or not np.all(np.isfinite(tolerances)):
                raise ConfigurationError("solution_tolerance must be finite and non-negative")
            if tolerances.size > 1:
                if self.distance_metric != "component":
                    raise ConfigurationError("Per-component solution_tolerance needs distance_metric 'component'")
                if tolerances.size != len(self.reference_solution):
                    raise ConfigurationError("solution_tolerance and reference_solution lengths differ")


class OptimizationConfigManager:
    """
    Configuration manager for evoswarm optimization.

    This class handles loading, validation, and management of optimization
    configurations from YAML files or dictionaries, and builds the objects
    they describe (search space, goal, optimizer, statistics collector).

    Configuration Structure:
        ```yaml
        problem:
          objective: {...}      # Benchmark objective ('type' key)
          dimension: 3          # Problem dimension
          bounds: [...]         # [low, high] or one pair per dimension

        optimization:
          algorithm: {...}      # GA or PSO parameters
          termination: {...}    # Stopping criteria
          monitoring: {...}     # Progress reporting
          statistics: {...}     # Multi-run analysis
        ```

    Usage Pattern:
        ```python
        config_manager = OptimizationConfigManager('optimization_config.yaml')
        optimizer = config_manager.create_optimizer(rng=np.random.default_rng(7))
        result = optimizer.run()
        ```
    """

    def __init__(self, config_path: str | None = None, config_dict: dict | None = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to YAML configuration file
            config_dict: Configuration dictionary (alternative to file)

        Raises:
            FileNotFoundError: If config_path doesn't exist
            ConfigurationError: If both, neither, or invalid config sources
                provided, or if validation fails
        """
        if config_path and config_dict:
            raise ConfigurationError("Provide either config_path or config_dict, not both")

        if not config_path and not config_dict:
            raise ConfigurationError(
                "Configuration is required. Provide either:\n"
                "  - config_path: Path to YAML configuration file\n"
                "  - config_dict: Configuration dictionary\n"
                "Example: OptimizationConfigManager('my_config.yaml')"
            )

        if config_path:
            self.config = self._load_yaml_config(config_path)
        else:
            self.config = config_dict
            logger.debug("Using provided configuration dictionary")

        # Validate and setup structured configs
        self._validate_config()
        self._setup_structured_configs()

    def _load_yaml_config(self, config_path: str) -> dict[str, Any]:
        """Load configuration from YAML file with error handling."""
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Configuration must be a dictionary, got {type(config)}")

        logger.info("📂 Loaded configuration from %s", config_path)
        return config

    def _validate_config(self):
        """Validate configuration structure and required fields."""
        required_sections = ["problem", "optimization"]
        for section in required_sections:
            if section not in self.config:
                raise ConfigurationError(f"Missing required configuration section: '{section}'")

        problem_config = self.config["problem"]
        if "objective" not in problem_config:
            raise ConfigurationError("Missing 'objective' in problem configuration")
        if "dimension" not in problem_config:
            raise ConfigurationError("Missing 'dimension' in problem configuration")

        opt_config = self.config["optimization"]
        if "algorithm" not in opt_config:
            raise ConfigurationError("Missing required optimization section: 'algorithm'")

        algorithm_type = opt_config["algorithm"].get("type", "PSO")
        if algorithm_type not in ("PSO", "GA"):
            raise ConfigurationError(f"Unknown algorithm type '{algorithm_type}', expected 'PSO' or 'GA'")

    def _setup_structured_configs(self):
        """Setup structured configuration objects with validation."""
        opt_config = self.config["optimization"]

        alg_config = dict(opt_config["algorithm"])
        self.algorithm_type = alg_config.pop("type", "PSO")

        if "population_size" not in alg_config:
            raise ConfigurationError(
                "Missing required parameter 'population_size' in algorithm configuration.\n"
                "Example:\n"
                "optimization:\n"
                "  algorithm:\n"
                "    population_size: 50"
            )

        try:
            if self.algorithm_type == "GA":
                self.algorithm_config = GAConfig(**alg_config)
            else:
                self.algorithm_config = PSOConfig(**alg_config)
        except TypeError as e:
            raise ConfigurationError(f"Invalid {self.algorithm_type} algorithm parameter: {e}") from e

        term_config = opt_config.get("termination", {})
        if "max_iterations" not in term_config:
            raise ConfigurationError(
                "Missing required parameter 'max_iterations' in termination configuration.\n"
                "Example:\n"
                "optimization:\n"
                "  termination:\n"
                "    max_iterations: 100"
            )
        try:
            self.termination_config = TerminationConfig(**term_config)
            self.monitoring_config = MonitoringConfig(**opt_config.get("monitoring", {}))
            self.statistics_config = StatisticsConfig(**opt_config.get("statistics", {}))
        except TypeError as e:
            raise ConfigurationError(f"Invalid optimization parameter: {e}") from e

    def get_algorithm_type(self) -> str:
        """'GA' or 'PSO'."""
        return self.algorithm_type

    def get_algorithm_config(self) -> GAConfig | PSOConfig:
        """Get the configuration of the selected algorithm."""
        return self.algorithm_config

    def get_termination_config(self) -> TerminationConfig:
        """Get termination criteria configuration."""
        return self.termination_config

    def get_monitoring_config(self) -> MonitoringConfig:
        """Get monitoring and logging configuration."""
        return self.monitoring_config

    def get_statistics_config(self) -> StatisticsConfig:
        """Get multi-run statistics configuration."""
        return self.statistics_config

    def get_problem_config(self) -> dict[str, Any]:
        """Get problem configuration (objective, dimension, bounds)."""
        return self.config["problem"]

    def get_full_config(self) -> dict[str, Any]:
        """Get complete configuration dictionary."""
        return self.config.copy()

    def create_search_space(self):
        """Build the search space from ``problem.bounds`` (or the benchmark's default interval)."""
        from ..objectives.benchmarks import get_benchmark
        from ..problems.base import SearchSpace

        problem_config = self.get_problem_config()
        dimension = problem_config["dimension"]
        bounds = problem_config.get("bounds")

        if bounds is None:
            low, high = get_benchmark(problem_config["objective"]["type"]).bounds
            return SearchSpace.uniform(dimension, low, high)

        bounds_array = np.asarray(bounds, dtype=float)
        if bounds_array.shape == (2,):
            return SearchSpace.uniform(dimension, bounds_array[0], bounds_array[1])
        space = SearchSpace(bounds_array)
        if space.dimension != dimension:
            raise ConfigurationError(f"{space.dimension} intervals given for dimension {dimension}")
        return space

    def create_goal(self):
        """Create a fresh benchmark goal; every call returns a goal with its own counter."""
        from ..objectives.benchmarks import create_benchmark_goal

        problem_config = self.get_problem_config()
        return create_benchmark_goal(problem_config["objective"]["type"], problem_config["dimension"])

    def create_optimizer(self, rng=None, goal=None, callbacks=None):
        """
        Build the configured optimizer.

        Args:
            rng: ``numpy.random.Generator`` or seed for this run.
            goal: Goal to optimize; a fresh benchmark goal when None.
            callbacks: Extra iteration callbacks. A progress logger built
                from the monitoring configuration is always attached.
        """
        from ..algorithms.base import ProgressLogger
        from ..algorithms.genetic import GeneticOptimizer
        from ..algorithms.particle_swarm import ParticleSwarmOptimizer

        goal = goal if goal is not None else self.create_goal()
        space = self.create_search_space()
        all_callbacks = [ProgressLogger(self.monitoring_config.progress_frequency,
                                        level=self.monitoring_config.log_level)]
        all_callbacks.extend(callbacks or [])

        if self.algorithm_type == "GA":
            optimizer_class = GeneticOptimizer
        else:
            optimizer_class = ParticleSwarmOptimizer
        return optimizer_class(
            goal,
            space,
            self.algorithm_config,
            self.termination_config,
            rng=rng,
            callbacks=all_callbacks,
        )

    def create_statistics_collector(self, goal_factory=None):
        """
        Build a statistics collector running the configured optimizer.

        Args:
            goal_factory: Zero-argument callable returning a fresh goal for
                every run. Defaults to the configured benchmark.
        """
        from ..runners.statistics_runner import StatisticsCollector

        factory = goal_factory or self.create_goal

        def optimizer_factory(rng):
            return self.create_optimizer(rng=rng, goal=factory())

        return StatisticsCollector(optimizer_factory, self.statistics_config)

    def print_summary(self):
        """Print configuration summary for verification."""
        problem_config = self.get_problem_config()
        print("\n📋 OPTIMIZATION CONFIGURATION SUMMARY:")

        print("   🎯 Problem Configuration:")
        print(f"      Objective: {problem_config['objective']['type']}")
        print(f"      Dimension: {problem_config['dimension']}")
        print(f"      Bounds: {problem_config.get('bounds', 'benchmark default')}")

        print("   🔄 Algorithm Configuration:")
        print(f"      Type: {self.algorithm_type}")
        print(f"      Population size: {self.algorithm_config.population_size}")
        if self.algorithm_type == "GA":
            print(f"      Crossover/Mutation: {self.algorithm_config.crossover_probability}"
                  f"/{self.algorithm_config.mutation_probability}")
            print(f"      Selection: {self.algorithm_config.selection}")
            print(f"      Elitism: {'Enabled' if self.algorithm_config.elitism else 'Disabled'}")
        else:
            schedule = ("fixed" if self.algorithm_config.inertia_weight_final is None
                        else f"-> {self.algorithm_config.inertia_weight_final}")
            print(f"      Inertia weight: {self.algorithm_config.inertia_weight} ({schedule})")
            print(f"      Cognitive/Social coeffs: {self.algorithm_config.cognitive_coefficient}"
                  f"/{self.algorithm_config.social_coefficient}")
            print(f"      Velocity update: {self.algorithm_config.velocity_update}")
            if self.algorithm_config.velocity_limit is not None:
                limit = self.algorithm_config.velocity_limit
                print(f"      Velocity limit: {limit.policy} {limit.max_velocity}")
            print(f"      Teleport probability: {self.algorithm_config.teleport_probability}")

        print("   ⏰ Termination Configuration:")
        print(f"      Max iterations: {self.termination_config.max_iterations}")
        if self.termination_config.target_fitness is not None:
            print(f"      Target fitness: {self.termination_config.target_fitness} "
                  f"(± {self.termination_config.tolerance})")
        if self.termination_config.no_improvement_limit:
            print(f"      No-improvement limit: {self.termination_config.no_improvement_limit}")

        print("   🔢 Statistics Configuration:")
        print(f"      Runs: {self.statistics_config.run_count}")
        print(f"      Seed strategy: {self.statistics_config.random_seed_strategy}")
        print(f"      Parallel: {self.statistics_config.parallel}")
