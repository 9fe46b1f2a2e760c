"""
Stopping predicates.

A stop checker inspects the ``IterationState`` produced by a step and either
returns the terminal state to enter or None to keep going. ``CompositeAny``
combines checkers; the first one that fires decides the terminal state.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..config.config_manager import TerminationConfig
from .base import IterationState, OptimizerState

logger = logging.getLogger(__name__)


class StopChecker(ABC):
    @abstractmethod
    def check(self, state: IterationState) -> OptimizerState | None:
        """Terminal state to enter, or None to continue."""


class MaxIterations(StopChecker):
    def __init__(self, max_iterations: int):
        self.max_iterations = max_iterations

    def check(self, state: IterationState) -> OptimizerState | None:
        if state.iteration >= self.max_iterations:
            return OptimizerState.MAX_ITERATIONS_REACHED
        return None


class Threshold(StopChecker):
    """Converged once best fitness <= target + tolerance."""

    def __init__(self, target: float, tolerance: float = 0.0):
        self.target = target
        self.tolerance = tolerance

    def check(self, state: IterationState) -> OptimizerState | None:
        if state.best_fitness <= self.target + self.tolerance:
            logger.debug("🎯 Target %.6g reached at iteration %d", self.target, state.iteration)
            return OptimizerState.CONVERGED
        return None


class GoalNotChange(StopChecker):
    """Converged after ``limit`` consecutive iterations without improvement."""

    def __init__(self, limit: int):
        self.limit = limit

    def check(self, state: IterationState) -> OptimizerState | None:
        if state.iterations_without_improvement >= self.limit:
            logger.debug("📉 No improvement for %d iterations", state.iterations_without_improvement)
            return OptimizerState.CONVERGED
        return None


class CompositeAny(StopChecker):
    def __init__(self, checkers: Sequence[StopChecker]):
        self.checkers = list(checkers)

    def check(self, state: IterationState) -> OptimizerState | None:
        for checker in self.checkers:
            terminal_state = checker.check(state)
            if terminal_state is not None:
                return terminal_state
        return None


def build_stop_checker(config: TerminationConfig) -> CompositeAny:
    """
    Build the composite stopping predicate described by ``config``.

    Convergence criteria are checked before the iteration limit so a run
    that reaches its target on the last allowed iteration reports CONVERGED.
    """
    checkers: list[StopChecker] = []
    if config.target_fitness is not None:
        checkers.append(Threshold(config.target_fitness, config.tolerance))
    if config.no_improvement_limit is not None:
        checkers.append(GoalNotChange(config.no_improvement_limit))
    checkers.append(MaxIterations(config.max_iterations))
    return CompositeAny(checkers)
