"""Optimisation utilities"""

from .seeding import derive_seeds

__all__ = ["derive_seeds"]
