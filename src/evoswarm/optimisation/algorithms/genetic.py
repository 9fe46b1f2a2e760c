"""
Real-coded genetic algorithm.

One generation:

1. select parents (tournament or fitness-proportional roulette)
2. recombine a pair with ``crossover_probability``, otherwise clone it
3. mutate each gene with ``mutation_probability`` (Gaussian noise scaled to
   the interval width, clipped to bounds)
4. keep the best candidate unchanged when elitism is on
5. evaluate candidates without a cached fitness and replace the population

The population size never changes. An unchanged clone keeps its parent's
cached fitness and is not re-evaluated.
"""

import logging
from collections.abc import Sequence

import numpy as np

from ..config.config_manager import GAConfig, TerminationConfig
from ..objectives.base import Goal
from ..problems.base import SearchSpace
from .base import Candidate, IterationCallback, IterativeOptimizer

logger = logging.getLogger(__name__)


class GeneticOptimizer(IterativeOptimizer):
    """
    Genetic algorithm over a box-bounded real search space.

    Args:
        goal: Objective to minimize.
        space: Search space.
        config: GA parameters.
        termination: Stopping criteria.
        rng: Generator or seed.
        callbacks: Iteration callbacks.
    """

    name = "GA"

    def __init__(
        self,
        goal: Goal,
        space: SearchSpace,
        config: GAConfig,
        termination: TerminationConfig,
        rng: np.random.Generator | int | None = None,
        callbacks: Sequence[IterationCallback] | None = None,
    ):
        super().__init__(goal, space, termination, rng=rng, callbacks=callbacks)
        self.config = config
        self.population: list[Candidate] = []
        self._mutation_sigma = config.mutation_scale * space.width

    def _initialize(self) -> None:
        candidates = [Candidate(point) for point in self.space.sample(self.rng, self.config.population_size)]
        self.population = self._evaluate_all(candidates)
        self._record_best(min(self.population, key=lambda c: c.fitness))

    def _iterate(self) -> None:
        size = self.config.population_size
        fitness = np.array([candidate.fitness for candidate in self.population])
        probabilities = self._roulette_probabilities(fitness) if self.config.selection == "roulette" else None

        offspring: list[Candidate] = []
        if self.config.elitism:
            offspring.append(self.population[int(np.argmin(fitness))])

        while len(offspring) < size:
            parents = (self._select(fitness, probabilities), self._select(fitness, probabilities))
            if self.rng.random() < self.config.crossover_probability:
                children = [Candidate(child) for child in self._crossover(parents[0].solution, parents[1].solution)]
            else:
                children = list(parents)

            for child in children:
                if len(offspring) < size:
                    offspring.append(self._mutate(child))

        self.population = self._evaluate_all(offspring)
        self._record_best(min(self.population, key=lambda c: c.fitness))

    def _evaluate_all(self, candidates: list[Candidate]) -> list[Candidate]:
        return [candidate if candidate.is_evaluated else candidate.evaluated(self._evaluate) for candidate in candidates]

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @staticmethod
    def _roulette_probabilities(fitness: np.ndarray) -> np.ndarray:
        """Selection weights for minimization: distance below the worst fitness."""
        weights = fitness.max() - fitness
        total = weights.sum()
        if total <= 0 or not np.isfinite(total):
            return np.full(fitness.shape[0], 1.0 / fitness.shape[0])
        return weights / total

    def _select(self, fitness: np.ndarray, probabilities: np.ndarray | None) -> Candidate:
        if probabilities is not None:
            return self.population[int(self.rng.choice(fitness.shape[0], p=probabilities))]

        contestants = self.rng.integers(0, fitness.shape[0], size=self.config.tournament_size)
        winner = contestants[int(np.argmin(fitness[contestants]))]
        return self.population[int(winner)]

    # ------------------------------------------------------------------
    # Variation
    # ------------------------------------------------------------------

    def _crossover(self, first: np.ndarray, second: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        method = self.config.crossover
        dimension = first.shape[0]

        if method == "blend":
            low = np.minimum(first, second)
            high = np.maximum(first, second)
            spread = self.config.blend_alpha * (high - low)
            children = self.rng.uniform(low - spread, high + spread, size=(2, dimension))
            return self.space.clip(children[0]), self.space.clip(children[1])

        if method == "arithmetic":
            weights = self.rng.random(dimension)
            return weights * first + (1 - weights) * second, (1 - weights) * first + weights * second

        if method == "uniform":
            mask = self.rng.random(dimension) < 0.5
            return np.where(mask, first, second), np.where(mask, second, first)

        # single_point
        if dimension == 1:
            return first.copy(), second.copy()
        point = int(self.rng.integers(1, dimension))
        return (
            np.concatenate([first[:point], second[point:]]),
            np.concatenate([second[:point], first[point:]]),
        )

    def _mutate(self, candidate: Candidate) -> Candidate:
        mask = self.rng.random(candidate.solution.shape[0]) < self.config.mutation_probability
        if not mask.any():
            return candidate

        noise = self.rng.normal(0.0, 1.0, size=mask.shape[0]) * self._mutation_sigma
        return Candidate(self.space.clip(candidate.solution + np.where(mask, noise, 0.0)))
