"""Evaluation module for candidate pool diagnostics."""

from .metrics import (
    FAILURE_COLUMNS,
    ScoreDistributionStats,
    PoolReport,
    compute_score_distribution_stats,
    compute_failure_counts,
    create_pool_report
)

__all__ = [
    "FAILURE_COLUMNS",
    "ScoreDistributionStats",
    "PoolReport",
    "compute_score_distribution_stats",
    "compute_failure_counts",
    "create_pool_report"
]
