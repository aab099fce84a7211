"""
Pool diagnostics for a seeker.

Explains why a seeker sees the matches they see:
1. Pool composition (size, opposite-gender eligible candidates)
2. Mutual and near-match counts
3. Distribution of one-directional match scores over eligible candidates
4. Per-dimension failure counts in both directions

This module is diagnostic only; it does not change matching behavior.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..configs.loader import EngineConfig
from ..criteria.evaluator import CriterionEvaluator
from ..near_match.finder import NearMatchFinder
from ..profiles.schema import Profile
from ..scoring.match_score import calculate_match_score
from ..scoring.mutual import is_mutual_match

logger = logging.getLogger(__name__)

FAILURE_COLUMNS = ["dimension", "seeker_failures", "seeker_dealbreaker_failures", "candidate_dealbreaker_failures"]


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 20.0, "p50": 50.0, "p90": 80.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class PoolReport:
    """
    Diagnostics for one seeker over a candidate pool.

    Attributes:
        seeker_id: The seeker's user id
        pool_size: Candidates considered (excluding the seeker)
        eligible_count: Opposite-gender candidates
        mutual_count: Mutual matches
        near_match_count: Near matches within the budget
        distribution_stats: Seeker-side score distribution over eligible candidates
        failure_counts: Per-dimension failure counts
    """
    seeker_id: str
    pool_size: int
    eligible_count: int
    mutual_count: int
    near_match_count: int
    distribution_stats: Optional[ScoreDistributionStats] = None
    failure_counts: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=FAILURE_COLUMNS))

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "seeker_id": self.seeker_id,
            "pool_size": int(self.pool_size),
            "eligible_count": int(self.eligible_count),
            "mutual_count": int(self.mutual_count),
            "near_match_count": int(self.near_match_count),
            "failure_counts": [
                {k: (int(v) if k != "dimension" else v) for k, v in row.items()}
                for row in self.failure_counts.to_dict(orient="records")
            ],
        }
        if self.distribution_stats:
            result["distribution_stats"] = self.distribution_stats.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved pool report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Pool Report: {self.seeker_id}",
            "=" * 50,
            "",
            f"Pool size:       {self.pool_size}",
            f"Eligible:        {self.eligible_count}",
            f"Mutual matches:  {self.mutual_count}",
            f"Near matches:    {self.near_match_count}",
        ]

        if self.distribution_stats:
            lines.extend([
                "",
                "Match Score Distribution:",
                f"  Mean: {self.distribution_stats.mean:.1f}",
                f"  Std:  {self.distribution_stats.std:.1f}",
                f"  Min:  {self.distribution_stats.min:.1f}",
                f"  Max:  {self.distribution_stats.max:.1f}",
            ])
            for q_name, q_value in self.distribution_stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.1f}")

        if not self.failure_counts.empty:
            lines.extend(["", "Failures by dimension:"])
            for row in self.failure_counts.itertuples(index=False):
                lines.append(
                    f"  {row.dimension}: {row.seeker_failures} seeker-side "
                    f"({row.seeker_dealbreaker_failures} dealbreakers), "
                    f"{row.candidate_dealbreaker_failures} candidate dealbreakers"
                )

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9)
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of match score percentages
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance

    Raises:
        ValueError: If scores is empty
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution stats of an empty score array")

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def compute_failure_counts(
    seeker: Profile,
    candidates: List[Profile],
    evaluator: CriterionEvaluator,
) -> pd.DataFrame:
    """
    Count failures per dimension across eligible candidates.

    Args:
        seeker: The seeker
        candidates: Eligible candidates
        evaluator: CriterionEvaluator to use

    Returns:
        DataFrame with columns FAILURE_COLUMNS, one row per dimension with
        at least one failure, sorted by total failures descending
    """
    rows = []
    for candidate in candidates:
        for dimension in evaluator.rules:
            seeker_side = evaluator.evaluate(dimension, seeker, candidate)
            candidate_failed = (candidate.is_dealbreaker(dimension)
                                and not evaluator.evaluate(dimension, candidate, seeker).matched)
            rows.append({
                "dimension": dimension.value,
                "seeker_failures": int(not seeker_side.matched),
                "seeker_dealbreaker_failures": int(not seeker_side.matched and seeker_side.is_dealbreaker),
                "candidate_dealbreaker_failures": int(candidate_failed),
            })

    if not rows:
        return pd.DataFrame(columns=FAILURE_COLUMNS)

    df = pd.DataFrame(rows).groupby("dimension", sort=False).sum().reset_index()
    total = df["seeker_failures"] + df["candidate_dealbreaker_failures"]
    df = df[total > 0]
    order = (df["seeker_failures"] + df["candidate_dealbreaker_failures"]).sort_values(
        ascending=False, kind="stable"
    ).index
    return df.loc[order].reset_index(drop=True)[FAILURE_COLUMNS]


def create_pool_report(
    seeker: Profile,
    candidates: List[Profile],
    config: Optional[EngineConfig] = None,
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9),
) -> PoolReport:
    """
    Create a diagnostics report for one seeker.

    Args:
        seeker: The seeker
        candidates: Candidate pool (the seeker is skipped if present)
        config: EngineConfig for the near-match search
        quantiles: Score quantiles to report

    Returns:
        PoolReport instance
    """
    finder = NearMatchFinder(config)
    pool = [c for c in candidates if c.user_id != seeker.user_id]
    eligible = [c for c in pool if c.gender != seeker.gender]

    mutual_count = sum(1 for c in eligible if is_mutual_match(seeker, c, finder.evaluator))
    near_matches = finder.find(seeker, eligible)

    stats = None
    if eligible:
        scores = np.array([
            calculate_match_score(seeker, c, finder.evaluator).percentage for c in eligible
        ])
        stats = compute_score_distribution_stats(scores, quantiles)
    else:
        logger.warning(f"No eligible candidates for {seeker.user_id} in a pool of {len(pool)}")

    report = PoolReport(
        seeker_id=seeker.user_id,
        pool_size=len(pool),
        eligible_count=len(eligible),
        mutual_count=mutual_count,
        near_match_count=len(near_matches),
        distribution_stats=stats,
        failure_counts=compute_failure_counts(seeker, eligible, finder.evaluator),
    )
    logger.info(
        f"Pool report for {seeker.user_id}: {report.mutual_count} mutual, "
        f"{report.near_match_count} near of {report.eligible_count} eligible"
    )
    return report
