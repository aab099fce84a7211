"""Tests for pool diagnostics."""

import json

import numpy as np
import pytest

from compatibility.criteria import CriterionEvaluator
from compatibility.evaluation import (
    FAILURE_COLUMNS,
    compute_failure_counts,
    compute_score_distribution_stats,
    create_pool_report,
)


@pytest.fixture
def pool(make_profile):
    seeker = make_profile(userId="s", prefIncome="200k+", prefIncomeIsDealbreaker=True)
    mutual = make_profile(userId="m", gender="male", annualIncome=">200k")
    near = make_profile(userId="n", gender="male", annualIncome="100k-150k")
    same_gender = make_profile(userId="f")
    return seeker, [seeker, mutual, near, same_gender]


class TestScoreDistributionStats:
    """Test score distribution statistics."""

    def test_basic_stats(self):
        stats = compute_score_distribution_stats(np.array([0, 50, 100]), quantiles=(0.5,))

        assert stats.mean == pytest.approx(50.0)
        assert stats.min == 0.0
        assert stats.max == 100.0
        assert stats.quantiles == {"p50": 50.0}

    def test_empty_scores(self):
        with pytest.raises(ValueError):
            compute_score_distribution_stats(np.array([]))


class TestFailureCounts:
    """Test per-dimension failure counting."""

    def test_counts(self, pool):
        seeker, candidates = pool
        df = compute_failure_counts(seeker, candidates[1:3], CriterionEvaluator())

        assert list(df.columns) == FAILURE_COLUMNS
        assert df["dimension"].tolist() == ["Income"]
        assert df.loc[0, "seeker_failures"] == 1
        assert df.loc[0, "seeker_dealbreaker_failures"] == 1
        assert df.loc[0, "candidate_dealbreaker_failures"] == 0

    def test_no_candidates(self, seeker):
        df = compute_failure_counts(seeker, [], CriterionEvaluator())
        assert df.empty
        assert list(df.columns) == FAILURE_COLUMNS


class TestPoolReport:
    """Test the pool report."""

    def test_counts(self, pool):
        seeker, candidates = pool
        report = create_pool_report(seeker, candidates)

        assert report.pool_size == 3
        assert report.eligible_count == 2
        assert report.mutual_count == 1
        assert report.near_match_count == 1
        assert report.distribution_stats.max == 100.0
        assert report.distribution_stats.min == 0.0

    def test_summary_and_save(self, pool, tmp_path):
        seeker, candidates = pool
        report = create_pool_report(seeker, candidates)

        summary = report.summary()
        assert "Mutual matches:  1" in summary
        assert "Income: 1 seeker-side" in summary

        path = tmp_path / "report.json"
        report.save(str(path))
        with open(path) as f:
            saved = json.load(f)
        assert saved["near_match_count"] == 1
        assert saved["failure_counts"][0]["dimension"] == "Income"

    def test_no_eligible_candidates(self, seeker, make_profile):
        report = create_pool_report(seeker, [make_profile(userId="f")])

        assert report.eligible_count == 0
        assert report.distribution_stats is None
        assert "distribution_stats" not in report.to_dict()
