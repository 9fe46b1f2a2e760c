"""
Iteration-control abstraction shared by every optimizer strategy.

An optimizer moves through a small state machine::

    INITIALIZED -> RUNNING -> CONVERGED
                           -> MAX_ITERATIONS_REACHED
                           -> STOPPED_EXTERNALLY
                           -> FAILED

Strategies implement ``_initialize`` (build and evaluate the first
population) and ``_iterate`` (one generation / swarm update). The driver in
``IterativeOptimizer`` owns everything else: lazy initialization, the
best-so-far trace, the stopping predicate, callbacks and building the
``RunResult``.

Usage:
```python
optimizer = GeneticOptimizer(goal, space, GAConfig(population_size=50),
                             TerminationConfig(max_iterations=200), rng=42)
result = optimizer.run()
print(result.best_fitness, result.iterations)
```
"""

import logging
import math
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np

from evoswarm.exceptions import AlreadyFinished, DimensionMismatch, NumericFailure

from ..config.config_manager import TerminationConfig
from ..objectives.base import Goal
from ..problems.base import SearchSpace

logger = logging.getLogger(__name__)


class OptimizerState(Enum):
    INITIALIZED = "initialized"
    RUNNING = "running"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"
    STOPPED_EXTERNALLY = "stopped_externally"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self not in (OptimizerState.INITIALIZED, OptimizerState.RUNNING)


def _frozen_array(values) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class Candidate:
    """Solution vector with its cached fitness (None until evaluated)."""

    solution: np.ndarray
    fitness: float | None = None

    def __post_init__(self):
        object.__setattr__(self, "solution", _frozen_array(self.solution))

    @property
    def is_evaluated(self) -> bool:
        return self.fitness is not None

    def evaluated(self, evaluate: Callable[[np.ndarray], float]) -> "Candidate":
        """Return a new candidate carrying ``evaluate(solution)``."""
        return Candidate(self.solution, evaluate(self.solution))


@dataclass(frozen=True)
class IterationState:
    """Snapshot reported after every step."""

    iteration: int
    best_fitness: float
    evaluation_count: int
    iterations_without_improvement: int = 0


@dataclass(frozen=True)
class RunResult:
    """
    Outcome of a single optimization run.

    Instances are immutable: the solution array and the convergence trace are
    read-only, so aggregates computed from them can never be corrupted.

    Attributes:
        best_solution: Best vector found (None if nothing was evaluated).
        best_fitness: Its fitness (NaN if nothing was evaluated).
        convergence: Best-so-far fitness after every iteration.
        evaluation_count: Goal evaluations performed by this run.
        iterations: Iterations completed at termination.
        state: Terminal optimizer state.
        seed: Seed of the run's random generator, when known.
        run_index: Position of the run inside a statistics batch.
        failed: True when the run aborted (numeric failure or an error
            raised by the objective).
        error: Failure message for failed runs.
        elapsed_seconds: Wall-clock time spent inside ``run``.
    """

    best_solution: np.ndarray | None
    best_fitness: float
    convergence: tuple[float, ...]
    evaluation_count: int
    iterations: int
    state: OptimizerState
    seed: int | None = None
    run_index: int | None = None
    failed: bool = False
    error: str | None = None
    elapsed_seconds: float = 0.0

    def __post_init__(self):
        if self.best_solution is not None:
            object.__setattr__(self, "best_solution", _frozen_array(self.best_solution))
        object.__setattr__(self, "convergence", tuple(float(v) for v in self.convergence))

    def with_run_info(self, run_index: int, seed: int | None) -> "RunResult":
        return replace(self, run_index=run_index, seed=seed)


IterationCallback = Callable[["IterativeOptimizer", IterationState], None]


class IterativeOptimizer(ABC):
    """
    Base class for population-based optimizers.

    Args:
        goal: Objective to minimize.
        space: Search space; its dimension must match the goal's.
        termination: Stopping criteria.
        rng: ``numpy.random.Generator``, an integer seed, or None for fresh
            entropy. The global numpy random state is never used.
        callbacks: Callables invoked as ``callback(optimizer, state)`` after
            every step. A callback may call ``request_stop()``.

    Raises:
        DimensionMismatch: If goal and search space dimensions differ.
    """

    name = "optimizer"

    def __init__(
        self,
        goal: Goal,
        space: SearchSpace,
        termination: TerminationConfig,
        rng: np.random.Generator | int | None = None,
        callbacks: Sequence[IterationCallback] | None = None,
    ):
        if goal.dimension != space.dimension:
            raise DimensionMismatch(space.dimension, goal.dimension)

        from .termination import build_stop_checker

        self.goal = goal
        self.space = space
        self.termination = termination
        self.rng = np.random.default_rng(rng)
        self.stop_checker = build_stop_checker(termination)
        self.callbacks = list(callbacks or [])

        self.state = OptimizerState.INITIALIZED
        self.iteration = 0
        self.evaluation_count = 0
        self._initialized = False
        self._best: Candidate | None = None
        self._trace: list[float] = []
        self._iterations_without_improvement = 0
        self._failure: Exception | None = None
        self._elapsed = 0.0

    # ------------------------------------------------------------------
    # Strategy hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _initialize(self) -> None:
        """Sample and evaluate the initial population."""

    @abstractmethod
    def _iterate(self) -> None:
        """Advance the population by one iteration."""

    # ------------------------------------------------------------------
    # Public contract
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """
        Build and evaluate the initial population.

        Any error raised while building the population leaves the optimizer
        FAILED before it propagates.

        Raises:
            AlreadyFinished: If the optimizer was already initialized.
        """
        if self._initialized:
            raise AlreadyFinished(f"{self.name} optimizer is already initialized")
        self._initialized = True
        self.state = OptimizerState.RUNNING
        logger.debug("🚀 Initializing %s (dimension=%d)", self.name, self.space.dimension)
        with self._failing_on_error():
            self._initialize()

    def step(self) -> IterationState:
        """
        Run one iteration and return the resulting state.

        Initializes lazily on the first call. After every step the stopping
        predicate is evaluated and, if it fires, the optimizer enters the
        matching terminal state.

        Raises:
            AlreadyFinished: If the optimizer is in a terminal state.
            NumericFailure: If a fitness evaluation is not finite.
        """
        if self.state.is_terminal:
            raise AlreadyFinished(f"{self.name} optimizer is {self.state.value}; create a new optimizer to run again")
        if not self._initialized:
            self.initialize()

        previous_best = self._best.fitness
        self.iteration += 1
        with self._failing_on_error():
            self._iterate()

        if previous_best - self._best.fitness > self.termination.improvement_tolerance:
            self._iterations_without_improvement = 0
        else:
            self._iterations_without_improvement += 1
        self._trace.append(self._best.fitness)

        state = self.iteration_state()
        terminal_state = self.stop_checker.check(state)
        if terminal_state is not None:
            self.state = terminal_state

        for callback in self.callbacks:
            callback(self, state)
        return state

    def is_finished(self) -> bool:
        return self.state.is_terminal

    def best_solution(self) -> Candidate | None:
        """Best candidate found so far (None before initialization)."""
        return self._best

    def request_stop(self) -> None:
        """Stop a running optimizer; the next ``run`` loop check ends the run."""
        if not self.state.is_terminal:
            logger.info("⏹️ Stop requested for %s at iteration %d", self.name, self.iteration)
            self.state = OptimizerState.STOPPED_EXTERNALLY

    def run(self) -> RunResult:
        """
        Drive ``step`` until the optimizer finishes and return the result.

        Raises:
            NumericFailure: If a fitness evaluation is not finite. The
                optimizer is left in the FAILED state and ``result()`` still
                describes the partial run. Errors raised by the objective
                propagate the same way.
        """
        start_time = time.time()
        try:
            while not self.is_finished():
                self.step()
        finally:
            self._elapsed += time.time() - start_time

        result = self.result()
        logger.info(
            "🏁 %s finished (%s) after %d iterations: best fitness %.6g, %d evaluations",
            self.name,
            self.state.value,
            self.iteration,
            result.best_fitness,
            self.evaluation_count,
        )
        return result

    def iteration_state(self) -> IterationState:
        return IterationState(
            iteration=self.iteration,
            best_fitness=self._best.fitness if self._best is not None else math.inf,
            evaluation_count=self.evaluation_count,
            iterations_without_improvement=self._iterations_without_improvement,
        )

    def result(self) -> RunResult:
        """Build the RunResult describing the run so far."""
        best = self._best
        return RunResult(
            best_solution=None if best is None else best.solution,
            best_fitness=math.nan if best is None else best.fitness,
            convergence=tuple(self._trace),
            evaluation_count=self.evaluation_count,
            iterations=self.iteration,
            state=self.state,
            failed=self.state is OptimizerState.FAILED,
            error=None if self._failure is None else str(self._failure),
            elapsed_seconds=self._elapsed,
        )

    # ------------------------------------------------------------------
    # Helpers for strategies
    # ------------------------------------------------------------------

    def _evaluate(self, solution: np.ndarray) -> float:
        """Evaluate through the goal, counting the call and checking finiteness."""
        value = self.goal.evaluate(solution)
        self.evaluation_count += 1
        if not math.isfinite(value):
            self._failure = NumericFailure(value, self.iteration)
            self.state = OptimizerState.FAILED
            logger.error("❌ %s: %s", self.name, self._failure)
            raise self._failure
        return value

    @contextmanager
    def _failing_on_error(self):
        """Enter FAILED when the wrapped strategy code raises, then re-raise."""
        try:
            yield
        except Exception as e:
            if self.state is not OptimizerState.FAILED:
                self._failure = e
                self.state = OptimizerState.FAILED
                logger.error("❌ %s failed at iteration %d: %r", self.name, self.iteration, e)
            raise

    def _record_best(self, candidate: Candidate) -> None:
        """Commit ``candidate`` as best-so-far if it strictly improves it."""
        if self._best is None or candidate.fitness < self._best.fitness:
            self._best = candidate


class ProgressLogger:
    """
    Callback logging optimizer progress every ``frequency`` iterations.

    Example:
        ```python
        optimizer = ParticleSwarmOptimizer(..., callbacks=[ProgressLogger(50)])
        ```
    """

    def __init__(self, frequency: int = 10, level: int | str = logging.DEBUG):
        if frequency < 1:
            raise ValueError("Progress frequency must be positive")
        self.frequency = frequency
        self.level = logging.getLevelName(level) if isinstance(level, str) else level

    def __call__(self, optimizer: IterativeOptimizer, state: IterationState) -> None:
        if state.iteration % self.frequency == 0 or optimizer.is_finished():
            logger.log(
                self.level,
                "   %s iter %4d: best=%.6g, evaluations=%d, stall=%d",
                optimizer.name,
                state.iteration,
                state.best_fitness,
                state.evaluation_count,
                state.iterations_without_improvement,
            )


@dataclass
class StopWhen:
    """Callback requesting a stop once ``predicate(state)`` holds."""

    predicate: Callable[[IterationState], bool]
    triggered_at: list[int] = field(default_factory=list)

    def __call__(self, optimizer: IterativeOptimizer, state: IterationState) -> None:
        if not optimizer.is_finished() and self.predicate(state):
            self.triggered_at.append(state.iteration)
            optimizer.request_stop()
