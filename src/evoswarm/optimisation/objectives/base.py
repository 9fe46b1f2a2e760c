import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

import numpy as np

from evoswarm.exceptions import DimensionMismatch, InvalidDimension

logger = logging.getLogger(__name__)


class Goal(ABC):
    """
    Objective function over a fixed-dimension real vector.

    A goal counts how many times it has been evaluated. The counter only
    moves forward and its increment is guarded by a lock, so a goal shared
    between threads still reports an exact count (sharing one goal between
    parallel runs is possible but each run should normally own its goal).

    Subclasses implement ``_compute``; callers use ``evaluate``.

    Args:
        dimension: Length of the solution vectors this goal accepts.

    Raises:
        InvalidDimension: If dimension is not a positive integer.
    """

    def __init__(self, dimension: int):
        if isinstance(dimension, bool) or not isinstance(dimension, (int, np.integer)) or dimension < 1:
            raise InvalidDimension(dimension)
        self.dimension = int(dimension)
        self._evaluation_count = 0
        self._lock = threading.Lock()

    @property
    def evaluation_count(self) -> int:
        """Number of successful calls to ``evaluate``."""
        return self._evaluation_count

    def evaluate(self, solution: Sequence[float] | np.ndarray) -> float:
        """
        Evaluate the objective at ``solution``.

        The objective receives a read-only copy, so the caller's array is
        never modified. A vector of the wrong length is rejected before the
        objective runs and the counter stays unchanged.

        Raises:
            DimensionMismatch: If the vector length differs from ``dimension``.
        """
        vector = np.array(solution, dtype=float)
        if vector.ndim != 1 or vector.shape[0] != self.dimension:
            raise DimensionMismatch(self.dimension, vector.shape[0] if vector.ndim == 1 else vector.shape)
        vector.setflags(write=False)

        value = float(self._compute(vector))

        with self._lock:
            self._evaluation_count += 1
        return value

    def reset_count(self) -> None:
        """Reset the evaluation counter (start of a new run)."""
        with self._lock:
            self._evaluation_count = 0

    @abstractmethod
    def _compute(self, solution: np.ndarray) -> float:
        """Compute the fitness of an already validated vector."""
        pass


class GoalFromFunction(Goal):
    """
    Goal backed by a plain callable.

    Example:
        ```python
        goal = GoalFromFunction(lambda x: float(np.sum(x ** 2)), dimension=3)
        goal.evaluate([1.0, 2.0, 3.0])   # 14.0
        goal.evaluation_count            # 1
        ```
    """

    def __init__(self, function: Callable[[np.ndarray], float], dimension: int, name: str | None = None):
        super().__init__(dimension)
        self.function = function
        self.name = name or getattr(function, "__name__", "goal")

    def _compute(self, solution: np.ndarray) -> float:
        return self.function(solution)

    def __repr__(self) -> str:
        return f"GoalFromFunction({self.name!r}, dimension={self.dimension})"
