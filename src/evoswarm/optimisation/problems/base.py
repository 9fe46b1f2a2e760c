"""
Search space definition shared by all optimizers.

A search space is a box: one closed interval ``[low, high]`` per dimension.
Optimizers sample their initial population from it, mutation and teleport
draw fresh points from it, and post-move policies clip positions back into
it.
"""

import logging
from collections.abc import Sequence

import numpy as np

from evoswarm.exceptions import ConfigurationError, InvalidDimension

logger = logging.getLogger(__name__)


class SearchSpace:
    """
    Axis-aligned box of real intervals.

    Args:
        intervals: One ``(low, high)`` pair per dimension.

    Raises:
        InvalidDimension: If no intervals are given.
        ConfigurationError: If an interval is not finite or has low > high.

    Example:
        ```python
        space = SearchSpace.uniform(dimension=3, low=-500.0, high=500.0)
        points = space.sample(rng, 30)      # shape (30, 3)
        ```
    """

    def __init__(self, intervals: Sequence[Sequence[float]]):
        bounds = np.asarray(intervals, dtype=float)
        if bounds.ndim != 2 or bounds.shape[0] == 0:
            raise InvalidDimension(0 if bounds.ndim != 2 else bounds.shape[0])
        if bounds.shape[1] != 2:
            raise ConfigurationError(f"Each interval must be a (low, high) pair, got shape {bounds.shape}")
        if not np.all(np.isfinite(bounds)):
            raise ConfigurationError("Search space bounds must be finite")
        if np.any(bounds[:, 0] > bounds[:, 1]):
            raise ConfigurationError(f"Interval lower bound exceeds upper bound: {bounds.tolist()}")

        self.lower = bounds[:, 0].copy()
        self.upper = bounds[:, 1].copy()
        self.lower.setflags(write=False)
        self.upper.setflags(write=False)

    @classmethod
    def uniform(cls, dimension: int, low: float, high: float) -> "SearchSpace":
        """Same interval on every axis."""
        if isinstance(dimension, bool) or not isinstance(dimension, (int, np.integer)) or dimension < 1:
            raise InvalidDimension(dimension)
        return cls([(low, high)] * int(dimension))

    @property
    def dimension(self) -> int:
        return self.lower.shape[0]

    @property
    def width(self) -> np.ndarray:
        return self.upper - self.lower

    @property
    def intervals(self) -> list[tuple[float, float]]:
        return [(float(lo), float(hi)) for lo, hi in zip(self.lower, self.upper)]

    def sample(self, rng: np.random.Generator, count: int | None = None) -> np.ndarray:
        """Draw uniform points; a single vector when count is None."""
        size = self.dimension if count is None else (count, self.dimension)
        return rng.uniform(self.lower, self.upper, size=size)

    def clip(self, points: np.ndarray) -> np.ndarray:
        return np.clip(points, self.lower, self.upper)

    def contains(self, point: np.ndarray) -> bool:
        point = np.asarray(point, dtype=float)
        return bool(np.all(point >= self.lower) and np.all(point <= self.upper))

    def __repr__(self) -> str:
        return f"SearchSpace(dimension={self.dimension}, intervals={self.intervals})"
