"""Problem definitions"""

from .base import SearchSpace

__all__ = ["SearchSpace"]
