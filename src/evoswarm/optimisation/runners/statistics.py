"""
Aggregate statistics over independent optimization runs.

``AggregateStatistics`` is a read-only view over a tuple of immutable
``RunResult`` objects. Every statistic is recomputed on access, so nothing
can go stale and two views over the same runs always agree.

FAILED RUNS:
===========
Runs that aborted with a numeric failure carry no meaningful fitness. They
are excluded from every average, standard deviation and convergence curve,
but they stay in the run total: both success rates divide by *all* runs, so
a failed run counts as unsuccessful.

CONVERGENCE ALIGNMENT:
=====================
Runs may stop after different numbers of iterations.

- ``pad`` (default): each curve is extended with its final value up to the
  longest run. A run that converged early keeps contributing its final best.
- ``truncate``: every curve is cut to the shortest run.

Usage:
```python
statistics = AggregateStatistics(results, config)
curve = statistics.average_convergence()
print(statistics.success_rate_by_fitness(1e-3))
print(statistics.summary())
```
"""

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np

from evoswarm.exceptions import StatisticsError

from ..algorithms.base import RunResult
from ..config.config_manager import ALIGNMENT_POLICIES, DISTANCE_METRICS, StatisticsConfig

logger = logging.getLogger(__name__)


class AggregateStatistics:
    """
    Statistics over a set of run results.

    Args:
        results: Run results, ordered by run index.
        config: Supplies the default alignment, success thresholds,
            reference solution and distance metric. Explicit method
            arguments take precedence.
    """

    def __init__(self, results: Sequence[RunResult], config: StatisticsConfig | None = None):
        self._results = tuple(results)
        self.config = config if config is not None else StatisticsConfig()

    # ------------------------------------------------------------------
    # Run bookkeeping
    # ------------------------------------------------------------------

    @property
    def results(self) -> tuple[RunResult, ...]:
        return self._results

    @property
    def run_count(self) -> int:
        return len(self._results)

    @property
    def completed_runs(self) -> list[RunResult]:
        return [result for result in self._results if not result.failed and result.best_solution is not None]

    @property
    def failed_runs(self) -> list[RunResult]:
        """Runs without a usable result (numeric failure, or stopped before any evaluation)."""
        return [result for result in self._results if result.failed or result.best_solution is None]

    def _completed_or_raise(self) -> list[RunResult]:
        completed = self.completed_runs
        if not completed:
            raise StatisticsError(f"No completed runs among {self.run_count} run(s)")
        return completed

    def final_fitness(self) -> np.ndarray:
        """Final best fitness of every completed run."""
        return np.array([result.best_fitness for result in self._completed_or_raise()])

    # ------------------------------------------------------------------
    # Convergence
    # ------------------------------------------------------------------

    def average_convergence(self, alignment: str | None = None) -> np.ndarray:
        """
        Mean best-so-far fitness per iteration across completed runs.

        Args:
            alignment: 'pad' or 'truncate'; defaults to the configured policy.

        Raises:
            StatisticsError: If no completed run recorded any iteration.
        """
        alignment = alignment or self.config.alignment
        if alignment not in ALIGNMENT_POLICIES:
            raise StatisticsError(f"Unknown alignment '{alignment}', expected one of {ALIGNMENT_POLICIES}")

        curves = [np.asarray(result.convergence) for result in self._completed_or_raise() if result.convergence]
        if not curves:
            raise StatisticsError("No completed run recorded a convergence trace")

        if alignment == "truncate":
            length = min(curve.shape[0] for curve in curves)
            aligned = np.array([curve[:length] for curve in curves])
        else:
            length = max(curve.shape[0] for curve in curves)
            aligned = np.array(
                [np.pad(curve, (0, length - curve.shape[0]), mode="edge") for curve in curves]
            )
        return aligned.mean(axis=0)

    # ------------------------------------------------------------------
    # Fitness statistics
    # ------------------------------------------------------------------

    def fitness_mean(self) -> float:
        return float(np.mean(self.final_fitness()))

    def fitness_std(self) -> float:
        """Population standard deviation (ddof=0) of the final fitness."""
        return float(np.std(self.final_fitness()))

    def fitness_min(self) -> float:
        return float(np.min(self.final_fitness()))

    def fitness_max(self) -> float:
        return float(np.max(self.final_fitness()))

    def fitness_median(self) -> float:
        return float(np.median(self.final_fitness()))

    # ------------------------------------------------------------------
    # Solution statistics
    # ------------------------------------------------------------------

    def _solutions(self) -> np.ndarray:
        solutions = [result.best_solution for result in self._completed_or_raise()]
        dimensions = {solution.shape[0] for solution in solutions}
        if len(dimensions) != 1:
            raise StatisticsError(f"Runs disagree on solution dimension: {sorted(dimensions)}")
        return np.array(solutions)

    def solution_mean(self) -> np.ndarray:
        """Component-wise mean of the final best solutions."""
        return self._solutions().mean(axis=0)

    def solution_std(self) -> np.ndarray:
        """Component-wise population standard deviation of the final best solutions."""
        return self._solutions().std(axis=0)

    # ------------------------------------------------------------------
    # Success rates
    # ------------------------------------------------------------------

    def success_rate_by_fitness(self, threshold: float | None = None, maximize: bool | None = None) -> float:
        """
        Fraction of all runs whose final fitness is <= threshold
        (>= when maximizing). Failed runs count as unsuccessful.
        """
        threshold = threshold if threshold is not None else self.config.fitness_threshold
        if threshold is None:
            raise StatisticsError("No fitness threshold configured")
        maximize = self.config.maximize if maximize is None else maximize
        if self.run_count == 0:
            raise StatisticsError("No runs collected")

        if maximize:
            successes = sum(1 for r in self.completed_runs if r.best_fitness >= threshold)
        else:
            successes = sum(1 for r in self.completed_runs if r.best_fitness <= threshold)
        return successes / self.run_count

    def success_rate_by_solution(
        self,
        reference: Sequence[float] | np.ndarray | None = None,
        tolerance: float | Sequence[float] | None = None,
        metric: str | None = None,
    ) -> float:
        """
        Fraction of all runs whose final solution lies within ``tolerance``
        of ``reference``.

        Metrics:
            - 'euclidean': ||x - a|| <= tolerance (scalar tolerance)
            - 'component': |x_i - a_i| <= tolerance_i for every i; the
              tolerance is a scalar or one value per component
        """
        reference = reference if reference is not None else self.config.reference_solution
        tolerance = tolerance if tolerance is not None else self.config.solution_tolerance
        metric = metric or self.config.distance_metric
        if reference is None or tolerance is None:
            raise StatisticsError("No reference solution and tolerance configured")
        if metric not in DISTANCE_METRICS:
            raise StatisticsError(f"Unknown distance metric '{metric}', expected one of {DISTANCE_METRICS}")
        if self.run_count == 0:
            raise StatisticsError("No runs collected")

        reference = np.asarray(reference, dtype=float)
        tolerance = np.asarray(tolerance, dtype=float)
        if metric == "euclidean" and tolerance.ndim != 0:
            raise StatisticsError("Euclidean distance needs a scalar tolerance")

        successes = 0
        for result in self.completed_runs:
            if result.best_solution.shape != reference.shape:
                raise StatisticsError(
                    f"Solution dimension {result.best_solution.shape[0]} differs from reference {reference.shape[0]}"
                )
            difference = result.best_solution - reference
            if metric == "euclidean":
                within = np.linalg.norm(difference) <= tolerance
            else:
                within = np.all(np.abs(difference) <= tolerance)
            successes += int(within)
        return successes / self.run_count

    # ------------------------------------------------------------------
    # Effort
    # ------------------------------------------------------------------

    def average_evaluations(self) -> float:
        return float(np.mean([result.evaluation_count for result in self._completed_or_raise()]))

    def average_iterations(self) -> float:
        return float(np.mean([result.iterations for result in self._completed_or_raise()]))

    def average_elapsed(self) -> float:
        """Mean wall-clock seconds per completed run."""
        return float(np.mean([result.elapsed_seconds for result in self._completed_or_raise()]))

    def best_run(self) -> RunResult:
        completed = self._completed_or_raise()
        return min(completed, key=lambda result: result.best_fitness)

    # ------------------------------------------------------------------
    # Summary / merge
    # ------------------------------------------------------------------

    def summary(self) -> dict[str, Any]:
        """
        Scalar statistics as a dictionary.

        Success rates are included only when a threshold / reference is
        configured. Without completed runs only the run counts and success
        rates (all zero) are reported.
        """
        summary: dict[str, Any] = {
            "run_count": self.run_count,
            "failed_runs": len(self.failed_runs),
        }
        if self.completed_runs:
            summary.update(
                fitness_mean=self.fitness_mean(),
                fitness_std=self.fitness_std(),
                fitness_min=self.fitness_min(),
                fitness_max=self.fitness_max(),
                fitness_median=self.fitness_median(),
                average_evaluations=self.average_evaluations(),
                average_iterations=self.average_iterations(),
                average_elapsed_seconds=self.average_elapsed(),
                best_run_index=self.best_run().run_index,
            )
        else:
            logger.warning("⚠️ No completed runs among %d run(s)", self.run_count)
        if self.config.fitness_threshold is not None:
            summary["success_rate_fitness"] = self.success_rate_by_fitness()
        if self.config.reference_solution is not None:
            summary["success_rate_solution"] = self.success_rate_by_solution()
        return summary

    def merge(self, other: "AggregateStatistics") -> "AggregateStatistics":
        """Statistics over the runs of both views, using this view's configuration."""
        return AggregateStatistics(self._results + other.results, self.config)

    def __len__(self) -> int:
        return self.run_count

    def __repr__(self) -> str:
        return f"AggregateStatistics(runs={self.run_count}, failed={len(self.failed_runs)})"
