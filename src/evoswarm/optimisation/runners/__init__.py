"""
Multi-run optimization runners.

This module runs an optimizer many times with independent seeds and
aggregates the results into convergence curves, variances and success rates.
"""

from .statistics import AggregateStatistics
from .statistics_runner import StatisticsCollector

__all__ = [
    'AggregateStatistics',
    'StatisticsCollector'
]
