"""
Error taxonomy for evoswarm.

Every error raised by the package derives from ``EvoswarmError``. Most also
derive from the closest built-in exception so callers that already catch
``ValueError`` or ``RuntimeError`` keep working.
"""


class EvoswarmError(Exception):
    """Base class for all evoswarm errors."""


class ConfigurationError(EvoswarmError, ValueError):
    """Invalid configuration detected before any run starts."""


class InvalidProbability(ConfigurationError):
    """A probability parameter lies outside [0, 1]."""

    def __init__(self, name: str, value: float):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be in [0, 1], got {value}")


class InvalidPopulationSize(ConfigurationError):
    """Population or swarm size is not a positive integer."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"population_size must be a positive integer, got {value}")


class InvalidVelocityLimit(ConfigurationError):
    """A velocity limit is zero or negative."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Velocity limits must be positive, got {value}")


class InvalidDimension(ConfigurationError):
    """Problem dimension is zero or negative."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Dimension must be a positive integer, got {value}")


class DimensionMismatch(EvoswarmError, ValueError):
    """A goal was evaluated with a vector of the wrong length."""

    def __init__(self, expected: int, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a vector of length {expected}, got {actual}")


class NumericFailure(EvoswarmError, ArithmeticError):
    """Fitness evaluation produced a non-finite value."""

    def __init__(self, value: float, iteration: int):
        self.value = value
        self.iteration = iteration
        super().__init__(f"Non-finite fitness {value} at iteration {iteration}")


class AlreadyFinished(EvoswarmError, RuntimeError):
    """``step()`` was called on an optimizer in a terminal state."""


class SinkFailure(EvoswarmError, OSError):
    """Writing to, flushing or closing a result sink failed."""


class StatisticsError(EvoswarmError, ValueError):
    """An aggregate statistic is undefined for the collected runs."""
