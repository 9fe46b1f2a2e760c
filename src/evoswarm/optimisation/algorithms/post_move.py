"""
Post-move policies applied to a particle after its position update.

Policies run in order after ``position += velocity`` and before the particle
is evaluated. They may change the position and velocity but never the
personal best.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from evoswarm.exceptions import ConfigurationError, InvalidProbability

from ..config.config_manager import PSOConfig
from ..problems.base import SearchSpace
from .velocity import VelocityCorrection, apply_corrections

logger = logging.getLogger(__name__)


class PostMove(ABC):
    @abstractmethod
    def apply(self, particle, space: SearchSpace, rng: np.random.Generator) -> None:
        """Adjust ``particle`` in place."""


class RandomTeleport(PostMove):
    """
    Move a particle to a uniform random point with a fixed probability.

    Escapes local minima by occasionally restarting a particle elsewhere.
    After a teleport the velocity is set to zero or re-randomized (and then
    corrected again); the personal best is kept.

    Args:
        probability: Per-particle, per-iteration teleport probability.
        velocity_mode: 'zero' or 'random'.
        velocity_scale: Random velocity range as a fraction of interval width.
        corrections: Velocity corrections re-applied to a random velocity.
    """

    def __init__(
        self,
        probability: float,
        velocity_mode: str = "zero",
        velocity_scale: float = 0.1,
        corrections: Sequence[VelocityCorrection] = (),
    ):
        if not 0.0 <= probability <= 1.0:
            raise InvalidProbability("teleport_probability", probability)
        if velocity_mode not in ("zero", "random"):
            raise ConfigurationError(f"velocity_mode must be 'zero' or 'random', got '{velocity_mode}'")
        self.probability = probability
        self.velocity_mode = velocity_mode
        self.velocity_scale = velocity_scale
        self.corrections = list(corrections)
        self.teleport_count = 0

    def apply(self, particle, space: SearchSpace, rng: np.random.Generator) -> None:
        if self.probability == 0.0 or rng.random() >= self.probability:
            return

        particle.position = space.sample(rng)
        if self.velocity_mode == "zero":
            particle.velocity = np.zeros(space.dimension)
        else:
            span = self.velocity_scale * space.width
            particle.velocity = apply_corrections(rng.uniform(-span, span), self.corrections)
        self.teleport_count += 1


class MoveToBoundary(PostMove):
    """Clip positions that left the search space back onto its boundary."""

    def apply(self, particle, space: SearchSpace, rng: np.random.Generator) -> None:
        particle.position = space.clip(particle.position)


def build_post_moves(config: PSOConfig, corrections: Sequence[VelocityCorrection]) -> list[PostMove]:
    post_moves: list[PostMove] = []
    if config.teleport_probability > 0:
        post_moves.append(
            RandomTeleport(
                config.teleport_probability,
                velocity_mode=config.teleport_velocity,
                velocity_scale=config.initial_velocity_scale,
                corrections=corrections,
            )
        )
    if config.clamp_to_bounds:
        post_moves.append(MoveToBoundary())
    return post_moves
