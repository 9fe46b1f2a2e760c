"""Optimizer strategies and the iteration-control contract they share."""

from .base import (
    Candidate,
    IterationState,
    IterativeOptimizer,
    OptimizerState,
    ProgressLogger,
    RunResult,
    StopWhen,
)
from .genetic import GeneticOptimizer
from .particle_swarm import Particle, ParticleSwarmOptimizer
from .post_move import MoveToBoundary, PostMove, RandomTeleport
from .termination import CompositeAny, GoalNotChange, MaxIterations, StopChecker, Threshold, build_stop_checker
from .velocity import (
    CanonicalVelocityCalculator,
    ConstantInertia,
    InertiaVelocityCalculator,
    LinearDecreasingInertia,
    ModulusVelocityLimit,
    PerDirectionVelocityLimit,
    VelocityCalculator,
    VelocityCorrection,
)

__all__ = [
    "Candidate",
    "IterationState",
    "IterativeOptimizer",
    "OptimizerState",
    "ProgressLogger",
    "RunResult",
    "StopWhen",
    "GeneticOptimizer",
    "Particle",
    "ParticleSwarmOptimizer",
    "MoveToBoundary",
    "PostMove",
    "RandomTeleport",
    "CompositeAny",
    "GoalNotChange",
    "MaxIterations",
    "StopChecker",
    "Threshold",
    "build_stop_checker",
    "CanonicalVelocityCalculator",
    "ConstantInertia",
    "InertiaVelocityCalculator",
    "LinearDecreasingInertia",
    "ModulusVelocityLimit",
    "PerDirectionVelocityLimit",
    "VelocityCalculator",
    "VelocityCorrection",
]
