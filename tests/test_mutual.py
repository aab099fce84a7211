"""Tests for mutual match evaluation."""

from compatibility.scoring import find_mutual_matches, is_mutual_match, matches_seeker_preferences


class TestMatchesSeekerPreferences:
    """Test the one-directional dealbreaker check."""

    def test_same_gender_never_matches(self, make_profile):
        a = make_profile(userId="a")
        b = make_profile(userId="b")
        assert matches_seeker_preferences(a, b) is False

    def test_no_dealbreakers(self, seeker, candidate):
        assert matches_seeker_preferences(seeker, candidate) is True

    def test_failed_dealbreaker(self, make_profile, candidate):
        seeker = make_profile(userId="s", prefReligion="Christian", prefReligionIsDealbreaker=True)
        assert matches_seeker_preferences(seeker, candidate) is False

    def test_failed_soft_preference_still_matches(self, make_profile, candidate):
        """Non-dealbreaker preferences only affect the score."""
        seeker = make_profile(userId="s", prefReligion="Christian")
        assert matches_seeker_preferences(seeker, candidate) is True

    def test_range_bounds_are_inclusive(self, make_profile):
        seeker = make_profile(userId="s", prefAgeMin="25", prefAgeMax="31", prefAgeIsDealbreaker=True)
        assert matches_seeker_preferences(seeker, make_profile(userId="c", gender="male", age=31)) is True
        assert matches_seeker_preferences(seeker, make_profile(userId="c", gender="male", age=32)) is False


class TestIsMutualMatch:
    """Test the bidirectional check."""

    def test_both_directions_pass(self, seeker, candidate):
        assert is_mutual_match(seeker, candidate) is True
        assert is_mutual_match(candidate, seeker) is True

    def test_reverse_direction_fails(self, make_profile, seeker):
        """The candidate's dealbreakers are checked against the seeker."""
        candidate = make_profile(userId="c", gender="male", prefIncome="200k+", prefIncomeIsDealbreaker=True)
        assert matches_seeker_preferences(seeker, candidate) is True
        assert is_mutual_match(seeker, candidate) is False

    def test_same_gender(self, make_profile):
        assert is_mutual_match(make_profile(userId="a"), make_profile(userId="b")) is False


class TestFindMutualMatches:
    """Test pool filtering."""

    def test_filters_pool(self, make_profile, seeker):
        match = make_profile(userId="m1", gender="male")
        blocked = make_profile(userId="m2", gender="male", prefDiet="vegan", prefDietIsDealbreaker=True)
        same_gender = make_profile(userId="f1")

        result = find_mutual_matches(seeker, [seeker, match, blocked, same_gender])

        assert [p.user_id for p in result] == ["m1"]

    def test_empty_pool(self, seeker):
        assert find_mutual_matches(seeker, []) == []
