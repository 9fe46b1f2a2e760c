"""
Multi-run statistics collection.

The collector builds a fresh optimizer for every run from a factory, seeds
it with its own generator, runs it to completion and aggregates the
results. Runs share no mutable state, so they can execute on a thread pool;
results are always ordered by run index, whatever the completion order.

A run aborted by ``NumericFailure`` is recorded as a failed ``RunResult``.
Any other exception is a bug or a misconfiguration and propagates.

Usage:
```python
def make_optimizer(rng):
    return ParticleSwarmOptimizer(create_benchmark_goal("sphere", 3), space,
                                  pso_config, termination, rng=rng)

collector = StatisticsCollector(make_optimizer,
                                StatisticsConfig(run_count=30, base_seed=7, parallel=True))
statistics = collector.collect()
print(statistics.summary())
```
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np

from evoswarm.exceptions import NumericFailure

from ..algorithms.base import IterativeOptimizer, RunResult
from ..config.config_manager import StatisticsConfig
from ..utils.seeding import derive_seeds
from .statistics import AggregateStatistics

logger = logging.getLogger(__name__)

OptimizerFactory = Callable[[np.random.Generator], IterativeOptimizer]


class StatisticsCollector:
    """
    Run an optimizer many times and aggregate the results.

    Args:
        optimizer_factory: Called with a fresh ``numpy.random.Generator`` for
            every run; must return a new optimizer with its own goal.
        config: Run count, seeding, parallelism and the success criteria
            handed to the resulting ``AggregateStatistics``.
    """

    def __init__(self, optimizer_factory: OptimizerFactory, config: StatisticsConfig | None = None):
        self.optimizer_factory = optimizer_factory
        self.config = config if config is not None else StatisticsConfig()

    def seeds(self) -> list[int]:
        """Seeds for every run, derived from the configured strategy."""
        return derive_seeds(self.config.random_seed_strategy, self.config.run_count, self.config.base_seed)

    def run_single(self, run_index: int, seed: int) -> RunResult:
        """Execute one independently seeded run."""
        optimizer = self.optimizer_factory(np.random.default_rng(seed))
        try:
            result = optimizer.run()
        except NumericFailure as e:
            logger.warning("❌ Run %d (seed %d) failed: %s", run_index, seed, e)
            result = optimizer.result()
        return result.with_run_info(run_index, seed)

    def collect(self, sink=None, precision: int | None = None) -> AggregateStatistics:
        """
        Execute all runs and aggregate them.

        Args:
            sink: Optional ``ResultSink``; when given the statistics report is
                written through it (and the sink flushed and closed).
            precision: Digits after the decimal point (scientific notation)
                in the report; None writes lossless values.

        Returns:
            AggregateStatistics over every run, ordered by run index.
        """
        seeds = self.seeds()
        run_count = len(seeds)
        mode = "parallel" if self.config.parallel else "sequential"
        logger.info("🔄 Starting %d %s runs (seed strategy: %s)", run_count, mode,
                    self.config.random_seed_strategy)

        start_time = time.time()
        if self.config.parallel:
            results = self._collect_parallel(seeds)
        else:
            results = self._collect_sequential(seeds)
        elapsed = time.time() - start_time

        statistics = AggregateStatistics(results, self.config)
        logger.info(
            "✅ Completed %d runs in %.2fs (%d failed)",
            run_count,
            elapsed,
            len(statistics.failed_runs),
        )

        if sink is not None:
            from evoswarm.reporting import StatisticsReporter

            StatisticsReporter(precision=precision).write(statistics, sink)
        return statistics

    def _collect_sequential(self, seeds: list[int]) -> list[RunResult]:
        results = []
        for run_index, seed in enumerate(seeds):
            result = self.run_single(run_index, seed)
            self._log_run(result, run_index + 1, len(seeds))
            results.append(result)
        return results

    def _collect_parallel(self, seeds: list[int]) -> list[RunResult]:
        results: list[RunResult | None] = [None] * len(seeds)
        completed_runs = 0

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            future_to_run = {
                executor.submit(self.run_single, run_index, seed): run_index
                for run_index, seed in enumerate(seeds)
            }
            for future in as_completed(future_to_run):
                run_index = future_to_run[future]
                results[run_index] = future.result()
                completed_runs += 1
                self._log_run(results[run_index], completed_runs, len(seeds))

        return results

    @staticmethod
    def _log_run(result: RunResult, completed: int, total: int) -> None:
        if result.failed:
            return
        logger.info(
            "[%2d/%d] Run %2d: best=%.6g, iterations=%d, evaluations=%d, %.2fs, %s",
            completed,
            total,
            result.run_index,
            result.best_fitness,
            result.iterations,
            result.evaluation_count,
            result.elapsed_seconds,
            result.state.value,
        )
