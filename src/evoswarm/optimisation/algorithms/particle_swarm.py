"""
Particle Swarm Optimization.

Each iteration, for every particle and against the global best snapshot
taken at the start of the iteration:

1. compute the new velocity (``VelocityCalculator``)
2. correct it (``VelocityCorrection`` list)
3. move, then run the post-move policies (teleport, boundary clipping)
4. evaluate; update the personal best on strict improvement

Once every particle has been evaluated the global best is recomputed from
the personal bests and committed. No particle ever sees a global best
written during the same iteration.

Usage:
```python
config = PSOConfig(population_size=30, inertia_weight=0.7,
                   cognitive_coefficient=1.5, social_coefficient=1.5,
                   velocity_limit={"policy": "modulus", "max_velocity": 10.0})
optimizer = ParticleSwarmOptimizer(goal, space, config,
                                   TerminationConfig(max_iterations=100), rng=1)
result = optimizer.run()
```
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from ..config.config_manager import PSOConfig, TerminationConfig
from ..objectives.base import Goal
from ..problems.base import SearchSpace
from .base import Candidate, IterationCallback, IterativeOptimizer
from .post_move import PostMove, build_post_moves
from .velocity import (
    VelocityCalculator,
    VelocityCorrection,
    apply_corrections,
    build_velocity_calculator,
    build_velocity_corrections,
)

logger = logging.getLogger(__name__)


@dataclass
class Particle:
    position: np.ndarray
    velocity: np.ndarray
    fitness: float
    best_position: np.ndarray
    best_fitness: float

    def update_best(self) -> bool:
        """Adopt the current position as personal best if strictly better."""
        if self.fitness < self.best_fitness:
            self.best_position = self.position.copy()
            self.best_fitness = self.fitness
            return True
        return False


class ParticleSwarmOptimizer(IterativeOptimizer):
    """
    Particle swarm optimizer.

    The velocity calculator, corrections and post-move policies are built
    from ``config`` unless given explicitly.

    Args:
        goal: Objective to minimize.
        space: Search space.
        config: Swarm parameters.
        termination: Stopping criteria.
        rng: Generator or seed.
        callbacks: Iteration callbacks.
        velocity_calculator: Override for the configured update rule.
        corrections: Override for the configured velocity corrections.
        post_moves: Override for the configured post-move policies.
    """

    name = "PSO"

    def __init__(
        self,
        goal: Goal,
        space: SearchSpace,
        config: PSOConfig,
        termination: TerminationConfig,
        rng: np.random.Generator | int | None = None,
        callbacks: Sequence[IterationCallback] | None = None,
        velocity_calculator: VelocityCalculator | None = None,
        corrections: Sequence[VelocityCorrection] | None = None,
        post_moves: Sequence[PostMove] | None = None,
    ):
        super().__init__(goal, space, termination, rng=rng, callbacks=callbacks)
        self.config = config
        self.velocity_calculator = velocity_calculator or build_velocity_calculator(config, termination)
        self.corrections = (
            list(corrections) if corrections is not None else build_velocity_corrections(config, space.dimension)
        )
        self.post_moves = list(post_moves) if post_moves is not None else build_post_moves(config, self.corrections)

        self.particles: list[Particle] = []
        self.global_best_position: np.ndarray | None = None
        self.global_best_fitness = np.inf

    def _initial_velocities(self) -> np.ndarray:
        count = self.config.population_size
        if self.config.initial_velocity == "zero":
            return np.zeros((count, self.space.dimension))
        span = self.config.initial_velocity_scale * self.space.width
        velocities = self.rng.uniform(-span, span, size=(count, self.space.dimension))
        return np.array([apply_corrections(v, self.corrections) for v in velocities])

    def _initialize(self) -> None:
        positions = self.space.sample(self.rng, self.config.population_size)
        velocities = self._initial_velocities()

        particles = []
        for position, velocity in zip(positions, velocities):
            fitness = self._evaluate(position)
            particles.append(Particle(position, velocity, fitness, position.copy(), fitness))
        self.particles = particles
        self._commit_global_best()

        logger.debug(
            "Swarm of %d particles initialized, global best %.6g",
            len(self.particles),
            self.global_best_fitness,
        )

    def _iterate(self) -> None:
        global_best = self.global_best_position.copy()

        for particle in self.particles:
            velocity = self.velocity_calculator.calculate(
                particle.velocity,
                particle.position,
                particle.best_position,
                global_best,
                self.iteration,
                self.rng,
            )
            particle.velocity = apply_corrections(velocity, self.corrections)
            particle.position = particle.position + particle.velocity

            for post_move in self.post_moves:
                post_move.apply(particle, self.space, self.rng)

            particle.fitness = self._evaluate(particle.position)
            particle.update_best()

        self._commit_global_best()

    def _commit_global_best(self) -> None:
        best_index = int(np.argmin([particle.best_fitness for particle in self.particles]))
        best = self.particles[best_index]
        if best.best_fitness < self.global_best_fitness:
            self.global_best_position = best.best_position.copy()
            self.global_best_fitness = best.best_fitness
        self._record_best(Candidate(self.global_best_position, self.global_best_fitness))
