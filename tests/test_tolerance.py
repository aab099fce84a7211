"""Tests for tolerance bands and dealbreaker classification."""

import pytest

from compatibility.criteria import (
    CRITICALITY,
    Criticality,
    DealbreakerClassifier,
    RelocationResolver,
    ToleranceResolver,
)
from compatibility.near_match import find_near_matches
from compatibility.profiles import Criterion, Dimension, Direction
from compatibility.scoring import calculate_match_score, is_mutual_match


@pytest.fixture
def classifier():
    return DealbreakerClassifier(ToleranceResolver(), RelocationResolver())


def _failed(dimension, is_dealbreaker=True):
    return Criterion(dimension=dimension, matched=False, is_dealbreaker=is_dealbreaker)


class TestToleranceResolver:
    """Test the ordinal tolerance bands."""

    def test_negative_bands_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            ToleranceResolver(age_years=-1)

    def test_age_band(self, make_profile):
        """Ages one year outside the range are within tolerance."""
        owner = make_profile(prefAgeMin="25", prefAgeMax="30", prefAgeIsDealbreaker=True)
        resolver = ToleranceResolver()

        assert resolver.age_within_tolerance(owner, make_profile(userId="c", gender="male", age=31)) is True
        assert resolver.age_within_tolerance(owner, make_profile(userId="c", gender="male", age=24)) is True
        assert resolver.age_within_tolerance(owner, make_profile(userId="c", gender="male", age=32)) is False

    def test_height_band(self, make_profile):
        """Heights two ladder steps outside the range are within tolerance."""
        owner = make_profile(prefHeightMin="5'6\"", prefHeightMax="5'10\"")
        resolver = ToleranceResolver()

        assert resolver.height_within_tolerance(owner, make_profile(userId="c", gender="male", height="6'0\"")) is True
        assert resolver.height_within_tolerance(owner, make_profile(userId="c", gender="male", height="6'1\"")) is False

    def test_wider_band(self, make_profile):
        owner = make_profile(prefAgeMin="25", prefAgeMax="30")
        judged = make_profile(userId="c", gender="male", age=33)
        assert ToleranceResolver(age_years=3).is_within_tolerance(Dimension.AGE, owner, judged) is True

    def test_unknown_values_are_outside(self, make_profile):
        """Unparseable values or bounds never qualify."""
        resolver = ToleranceResolver()
        owner = make_profile(prefHeightMin="tall")
        judged = make_profile(userId="c", gender="male")
        assert resolver.is_within_tolerance(Dimension.HEIGHT, owner, judged) is False

        owner = make_profile(prefAgeMin="25", prefAgeMax="30")
        assert resolver.is_within_tolerance(Dimension.AGE, owner, make_profile(userId="c", gender="male", age=None)) is False

    def test_non_ordinal_dimensions_have_zero_tolerance(self, make_profile):
        owner = make_profile(prefReligion="Christian")
        judged = make_profile(userId="c", gender="male")
        assert ToleranceResolver().is_within_tolerance(Dimension.RELIGION, owner, judged) is False


class TestCriticalityTable:
    """Test the criticality assignments."""

    def test_every_dimension_is_classified(self):
        assert set(CRITICALITY) == set(Dimension)

    def test_assignments(self):
        assert CRITICALITY[Dimension.AGE] is Criticality.ORDINAL
        assert CRITICALITY[Dimension.HEIGHT] is Criticality.ORDINAL
        assert CRITICALITY[Dimension.LOCATION] is Criticality.RELOCATABLE
        for dimension in (Dimension.EDUCATION, Dimension.INCOME, Dimension.SMOKING, Dimension.DRINKING):
            assert CRITICALITY[dimension] is Criticality.SOFT
        for dimension in (Dimension.RELIGION, Dimension.MARITAL_STATUS, Dimension.COMMUNITY, Dimension.GOTRA):
            assert CRITICALITY[dimension] is Criticality.CRITICAL


class TestDealbreakerClassifier:
    """Test seeker-side and candidate-side relaxability."""

    def test_non_dealbreaker_always_relaxable(self, classifier, seeker, candidate):
        criterion = _failed(Dimension.RELIGION, is_dealbreaker=False)
        assert classifier.is_relaxable(criterion, Direction.SEEKER, seeker, candidate) is True

    def test_soft_dealbreaker_relaxable(self, classifier, seeker, candidate):
        assert classifier.is_relaxable(_failed(Dimension.INCOME), Direction.SEEKER, seeker, candidate) is True

    def test_critical_dealbreaker_blocks(self, classifier, seeker, candidate):
        assert classifier.is_relaxable(_failed(Dimension.RELIGION), Direction.SEEKER, seeker, candidate) is False

    def test_seeker_location_dealbreaker_relaxable(self, classifier, seeker, candidate):
        """The seeker can widen their own location preference."""
        assert classifier.is_relaxable(_failed(Dimension.LOCATION), Direction.SEEKER, seeker, candidate) is True

    def test_ordinal_uses_tolerance(self, classifier, make_profile):
        seeker = make_profile(userId="s", prefAgeMin="25", prefAgeMax="30", prefAgeIsDealbreaker=True)
        close = make_profile(userId="c1", gender="male", age=31)
        far = make_profile(userId="c2", gender="male", age=33)

        assert classifier.is_relaxable(_failed(Dimension.AGE), Direction.SEEKER, seeker, close) is True
        assert classifier.is_relaxable(_failed(Dimension.AGE), Direction.SEEKER, seeker, far) is False

    def test_candidate_side_is_strict(self, classifier, seeker, candidate):
        """Even soft dimensions cannot be relaxed on the candidate's side."""
        for dimension in (Dimension.INCOME, Dimension.AGE, Dimension.RELIGION):
            assert classifier.is_relaxable(_failed(dimension), Direction.CANDIDATE, seeker, candidate) is False

    def test_candidate_location_relaxed_by_seeker_relocation(self, classifier, make_profile):
        candidate = make_profile(userId="c", gender="male", openToRelocation="no")
        mover = make_profile(userId="s1", openToRelocation="yes")
        stayer = make_profile(userId="s2", openToRelocation="no")

        criterion = _failed(Dimension.LOCATION)
        assert classifier.is_relaxable(criterion, Direction.CANDIDATE, mover, candidate) is True
        assert classifier.is_relaxable(criterion, Direction.CANDIDATE, stayer, candidate) is False


class TestNonFiniteBounds:
    """Test that infinite bounds are ignored rather than raising."""

    @pytest.fixture
    def owner(self, make_profile):
        return make_profile(userId="s", prefAgeMin="25", prefAgeMax="inf", prefAgeIsDealbreaker=True)

    def test_score_ignores_infinite_bound(self, owner, make_profile):
        """Only the finite lower bound applies."""
        judged = make_profile(userId="c", gender="male", age=40)

        score = calculate_match_score(owner, judged)

        assert score.percentage == 100
        assert score.max_score == 1

    def test_mutual_and_near_matches(self, owner, make_profile):
        older = make_profile(userId="c1", gender="male", age=40)
        younger = make_profile(userId="c2", gender="male", age=24)

        assert is_mutual_match(owner, older) is True
        assert is_mutual_match(owner, younger) is False
        assert [r.profile.user_id for r in find_near_matches(owner, [older, younger])] == ["c2"]

    def test_non_finite_height_bounds_never_within_tolerance(self, make_profile):
        owner = make_profile(prefHeightMin=float("inf"), prefHeightMax="1e999", prefHeightIsDealbreaker=True)
        judged = make_profile(userId="c", gender="male", height="5'10\"")

        assert ToleranceResolver().is_within_tolerance(Dimension.HEIGHT, owner, judged) is False
        assert calculate_match_score(owner, judged).percentage == 100
