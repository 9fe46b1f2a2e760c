"""
Configuration management for evoswarm optimization.

Validated dataclasses for the genetic and particle swarm optimizers, the
stopping criteria, progress monitoring and multi-run statistics, plus the
YAML-backed manager that builds optimizers from them.
"""

from .config_manager import (
    GAConfig,
    MonitoringConfig,
    OptimizationConfigManager,
    PSOConfig,
    StatisticsConfig,
    TerminationConfig,
    VelocityLimitConfig,
)

__all__ = [
    "GAConfig",
    "PSOConfig",
    "VelocityLimitConfig",
    "TerminationConfig",
    "MonitoringConfig",
    "StatisticsConfig",
    "OptimizationConfigManager",
]
