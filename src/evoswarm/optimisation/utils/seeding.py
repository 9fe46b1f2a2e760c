"""
Per-run seed derivation for multi-run statistics.

Strategies:
    - 'spawn': independent child streams of one root ``SeedSequence``; runs
      are statistically independent and reproducible when ``base_seed`` is set
    - 'sequential': ``base_seed + run_index``
    - 'fixed': every run uses ``base_seed`` (identical runs, useful to check
      determinism)

Seeds are plain integers so every ``RunResult`` can record the seed that
reproduces it with ``numpy.random.default_rng(seed)``.
"""

import logging

import numpy as np

from evoswarm.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def derive_seeds(strategy: str, run_count: int, base_seed: int | None = None) -> list[int]:
    """
    Derive one integer seed per run.

    Raises:
        ConfigurationError: For an unknown strategy, or a 'sequential' /
            'fixed' strategy without a base seed.
    """
    if strategy == "spawn":
        root = np.random.SeedSequence(base_seed)
        if base_seed is None:
            logger.info("🎲 No base seed given, root entropy %d", root.entropy)
        return [int(child.generate_state(1, dtype=np.uint64)[0]) for child in root.spawn(run_count)]

    if base_seed is None:
        raise ConfigurationError(f"random_seed_strategy '{strategy}' requires base_seed")
    if strategy == "sequential":
        return [base_seed + run_index for run_index in range(run_count)]
    if strategy == "fixed":
        return [base_seed] * run_count

    raise ConfigurationError(f"Unknown random_seed_strategy '{strategy}'")
