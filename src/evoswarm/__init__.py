"""Population-based metaheuristic optimization with multi-run statistics."""

__version__ = "0.1.0"
