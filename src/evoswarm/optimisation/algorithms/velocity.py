"""
Velocity dynamics for particle swarm optimization.

Three pluggable pieces:

- **Inertia schedules** give the inertia weight ``w(t)`` for an iteration.
- **Velocity calculators** produce a particle's new velocity from its
  current velocity, its personal best and the swarm's global best.
- **Velocity corrections** bound the calculated velocity.

INERTIA WEIGHT STRATEGIES:
=========================

**Fixed Inertia** (``ConstantInertia``):
    w stays constant. Typical values 0.4-0.9.

**Linear decrease** (``LinearDecreasingInertia``):
    w(t) = w_start + (w_end - w_start) * (t - 1) / (T - 1)
    High inertia early (exploration), low inertia late (exploitation).

CONSTRICTION FACTOR:
===================

``CanonicalVelocityCalculator`` uses Clerc's constriction factor

    chi = 2k / |2 - phi - sqrt(phi^2 - 4 phi)|,  phi = phi_p + phi_g > 4

which guarantees convergence of the swarm without explicit velocity clamping.
"""

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from evoswarm.exceptions import ConfigurationError, InvalidVelocityLimit

from ..config.config_manager import PSOConfig, TerminationConfig

logger = logging.getLogger(__name__)


class InertiaSchedule(ABC):
    @abstractmethod
    def weight(self, iteration: int) -> float:
        """Inertia weight for a 1-based iteration."""


class ConstantInertia(InertiaSchedule):
    def __init__(self, weight: float):
        self._weight = weight

    def weight(self, iteration: int) -> float:
        return self._weight


class LinearDecreasingInertia(InertiaSchedule):
    """Linear schedule from ``start`` (first iteration) to ``end`` (last)."""

    def __init__(self, start: float, end: float, max_iterations: int):
        if max_iterations < 1:
            raise ConfigurationError("max_iterations must be positive")
        self.start = start
        self.end = end
        self.max_iterations = max_iterations

    def weight(self, iteration: int) -> float:
        if self.max_iterations == 1:
            return self.end
        progress = min(max(iteration - 1, 0) / (self.max_iterations - 1), 1.0)
        return self.start + (self.end - self.start) * progress


class VelocityCalculator(ABC):
    @abstractmethod
    def calculate(
        self,
        velocity: np.ndarray,
        position: np.ndarray,
        personal_best: np.ndarray,
        global_best: np.ndarray,
        iteration: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Return the particle's new (uncorrected) velocity."""


class InertiaVelocityCalculator(VelocityCalculator):
    """
    Standard PSO update with an inertia schedule.

        v = w(t)*v + c1*r1*(pbest - x) + c2*r2*(gbest - x)

    ``r1`` and ``r2`` are drawn independently for every component.
    """

    def __init__(self, inertia: InertiaSchedule, cognitive: float, social: float):
        self.inertia = inertia
        self.cognitive = cognitive
        self.social = social

    def calculate(self, velocity, position, personal_best, global_best, iteration, rng):
        r1 = rng.random(position.shape[0])
        r2 = rng.random(position.shape[0])
        return (
            self.inertia.weight(iteration) * velocity
            + self.cognitive * r1 * (personal_best - position)
            + self.social * r2 * (global_best - position)
        )


class CanonicalVelocityCalculator(VelocityCalculator):
    """
    Constriction-factor PSO update.

        v = chi * (v + phi_p*r1*(pbest - x) + phi_g*r2*(gbest - x))

    Raises:
        ConfigurationError: If phi_p + phi_g <= 4 or k is outside (0, 1].
    """

    def __init__(self, phi_personal: float, phi_global: float, k: float = 1.0):
        phi = phi_personal + phi_global
        if phi <= 4.0:
            raise ConfigurationError(f"phi_personal + phi_global must exceed 4, got {phi}")
        if not 0.0 < k <= 1.0:
            raise ConfigurationError(f"k must be in (0, 1], got {k}")

        self.phi_personal = phi_personal
        self.phi_global = phi_global
        self.k = k
        self.chi = 2.0 * k / abs(2.0 - phi - math.sqrt(phi * phi - 4.0 * phi))

    def calculate(self, velocity, position, personal_best, global_best, iteration, rng):
        r1 = rng.random(position.shape[0])
        r2 = rng.random(position.shape[0])
        return self.chi * (
            velocity
            + self.phi_personal * r1 * (personal_best - position)
            + self.phi_global * r2 * (global_best - position)
        )


class VelocityCorrection(ABC):
    @abstractmethod
    def correct(self, velocity: np.ndarray) -> np.ndarray:
        """Return a bounded copy of ``velocity``."""


class ModulusVelocityLimit(VelocityCorrection):
    """
    Rescale the velocity to ``max_velocity`` when its Euclidean norm exceeds
    it, keeping the direction. The result never exceeds the limit in floating
    point.
    """

    def __init__(self, max_velocity: float):
        if not max_velocity > 0 or not math.isfinite(max_velocity):
            raise InvalidVelocityLimit(max_velocity)
        self.max_velocity = float(max_velocity)

    def correct(self, velocity: np.ndarray) -> np.ndarray:
        norm = np.linalg.norm(velocity)
        if norm <= self.max_velocity:
            return velocity
        scaled = velocity * (self.max_velocity / norm)
        # rounding can leave the rescaled norm one ulp above the limit
        while np.linalg.norm(scaled) > self.max_velocity:
            scaled = scaled * (1.0 - np.finfo(float).eps)
        return scaled


class PerDirectionVelocityLimit(VelocityCorrection):
    """Clamp every component to ``[-limit_i, limit_i]``."""

    def __init__(self, limits: float | Sequence[float]):
        limits_array = np.atleast_1d(np.asarray(limits, dtype=float))
        for limit in limits_array:
            if not limit > 0 or not math.isfinite(limit):
                raise InvalidVelocityLimit(float(limit))
        self.limits = limits_array

    def correct(self, velocity: np.ndarray) -> np.ndarray:
        return np.clip(velocity, -self.limits, self.limits)


def apply_corrections(velocity: np.ndarray, corrections: Sequence[VelocityCorrection]) -> np.ndarray:
    for correction in corrections:
        velocity = correction.correct(velocity)
    return velocity


def build_velocity_calculator(config: PSOConfig, termination: TerminationConfig) -> VelocityCalculator:
    """Create the velocity calculator described by a PSO configuration."""
    if config.velocity_update == "canonical":
        return CanonicalVelocityCalculator(
            config.cognitive_coefficient,
            config.social_coefficient,
            config.constriction_k,
        )

    if config.inertia_weight_final is None:
        inertia: InertiaSchedule = ConstantInertia(config.inertia_weight)
    else:
        inertia = LinearDecreasingInertia(
            config.inertia_weight,
            config.inertia_weight_final,
            termination.max_iterations,
        )
        logger.debug(
            "Inertia weight decreases %.3f -> %.3f over %d iterations",
            config.inertia_weight,
            config.inertia_weight_final,
            termination.max_iterations,
        )
    return InertiaVelocityCalculator(inertia, config.cognitive_coefficient, config.social_coefficient)


def build_velocity_corrections(config: PSOConfig, dimension: int) -> list[VelocityCorrection]:
    """Create the velocity corrections described by a PSO configuration."""
    limit = config.velocity_limit
    if limit is None:
        return []

    if limit.policy == "modulus":
        max_velocity = limit.max_velocity[0] if isinstance(limit.max_velocity, (list, tuple)) else limit.max_velocity
        return [ModulusVelocityLimit(max_velocity)]

    correction = PerDirectionVelocityLimit(limit.max_velocity)
    if correction.limits.shape[0] not in (1, dimension):
        raise ConfigurationError(
            f"Per-direction velocity limit has {correction.limits.shape[0]} values for dimension {dimension}"
        )
    return [correction]
