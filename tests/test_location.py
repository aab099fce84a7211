"""Tests for location matching and relocation handling."""

import pytest

from compatibility.criteria import RelocationResolver, extract_us_state, is_location_match
from compatibility.profiles import Dimension, Profile


class TestExtractUsState:
    """Test state extraction."""

    @pytest.mark.parametrize("location,state", [
        ("San Jose, CA", "california"),
        ("Chicago, IL", "illinois"),
        ("Austin, TX 78701", "texas"),
        ("New York, NY", "new york"),
        ("West Virginia", "west virginia"),
        ("Fort Wayne, IN", "indiana"),
        ("california", "california"),
        ("CA", "california"),
        ("Dallas, TX, USA", "texas"),
        ("Kansas City, MO", "missouri"),
        ("Kansas City, KS", "kansas"),
        ("Washington, DC", "district of columbia"),
        ("Washington, D.C.", "district of columbia"),
        ("Virginia Beach, VA", "virginia"),
    ])
    def test_states(self, location, state):
        assert extract_us_state(location) == state

    @pytest.mark.parametrize("location", ["Mumbai, India", "Portland", "", None])
    def test_no_state(self, location):
        assert extract_us_state(location) is None


class TestIsLocationMatch:
    """Test single location preference entries."""

    @pytest.mark.parametrize("pref,location,expected", [
        ("california", "San Jose, CA", True),
        ("texas", "San Jose, CA", False),
        ("new_jersey", "Edison, NJ", True),
        ("prefer New Jersey", "Edison, NJ", True),
        ("bay_area", "Fremont, CA", True),
        ("bay_area", "Los Angeles, CA", False),
        ("southern_california", "Irvine, CA", True),
        ("southern_california", "Fremont, CA", False),
        ("usa", "Chicago, IL", True),
        ("usa", "Mumbai, India", False),
        ("Mumbai", "Mumbai, India", True),
        ("open_to_relocation", "Mumbai, India", True),
        ("missouri", "Kansas City, MO", True),
        ("kansas", "Kansas City, MO", False),
    ])
    def test_preference_codes(self, pref, location, expected):
        assert is_location_match(pref, location) is expected

    def test_same_state(self):
        assert is_location_match("same_state", "Los Angeles, CA", "San Jose, CA") is True
        assert is_location_match("same_state", "Chicago, IL", "San Jose, CA") is False
        assert is_location_match("same_state", "St. Louis, MO", "Kansas City, MO") is True
        assert is_location_match("same_state", "Seattle, WA", "Washington, DC") is False

    def test_unset_or_unknown(self):
        assert is_location_match(None, "Chicago, IL") is True
        assert is_location_match("texas", None) is True


class TestLocationDimension:
    """Test location lists through the evaluator."""

    def test_location_list_with_same_state(self, evaluator, make_profile):
        owner = make_profile(currentLocation="San Jose, CA", prefLocationList='["same_state"]')

        nearby = make_profile(userId="c1", gender="male", currentLocation="Sunnyvale, CA")
        far = make_profile(userId="c2", gender="male", currentLocation="Dallas, TX")

        assert evaluator.evaluate(Dimension.LOCATION, owner, nearby).matched is True
        assert evaluator.evaluate(Dimension.LOCATION, owner, far).matched is False

    def test_any_list_entry_matches(self, evaluator, make_profile):
        owner = make_profile(prefLocationList=["texas", "illinois"])
        judged = make_profile(userId="c", gender="male", currentLocation="Chicago, IL")
        assert evaluator.evaluate(Dimension.LOCATION, owner, judged).matched is True

    def test_judged_party_relocation_excuses_mismatch(self, evaluator, make_profile):
        owner = make_profile(prefLocation="texas", openToRelocation="no")
        mover = make_profile(userId="c1", gender="male", currentLocation="Chicago, IL", openToRelocation="yes")
        stayer = make_profile(userId="c2", gender="male", currentLocation="Chicago, IL", openToRelocation="no")

        assert evaluator.evaluate(Dimension.LOCATION, owner, mover).matched is True
        assert evaluator.evaluate(Dimension.LOCATION, owner, stayer).matched is False

    def test_owner_relocation_does_not_excuse(self, evaluator, make_profile):
        """The owner's own flag is irrelevant to their preference."""
        owner = make_profile(prefLocation="texas", openToRelocation="yes")
        judged = make_profile(userId="c", gender="male", currentLocation="Chicago, IL", openToRelocation="no")
        assert evaluator.evaluate(Dimension.LOCATION, owner, judged).matched is False


class TestRelocationResolver:
    """Test relocation directionality."""

    def test_flag_of_other_party_matters(self):
        resolver = RelocationResolver()
        seeker = Profile(user_id="s", gender="female", open_to_relocation="no")
        candidate = Profile(user_id="c", gender="male", open_to_relocation="yes")

        # seeker's preference fails: the candidate would move
        assert resolver.can_excuse_location_mismatch(seeker, candidate, pref_owner=seeker) is True
        # candidate's preference fails: the seeker would move
        assert resolver.can_excuse_location_mismatch(seeker, candidate, pref_owner=candidate) is False

    def test_explicit_flag_holder(self):
        resolver = RelocationResolver()
        assert resolver.excuses_mismatch(Profile(user_id="x", gender="male", open_to_relocation="Yes")) is True
        assert resolver.excuses_mismatch(Profile(user_id="x", gender="male", open_to_relocation=True)) is True
        assert resolver.excuses_mismatch(Profile(user_id="x", gender="male", open_to_relocation="maybe")) is False
        assert resolver.excuses_mismatch(Profile(user_id="x", gender="male")) is False

    def test_pref_owner_must_be_a_party(self):
        resolver = RelocationResolver()
        seeker = Profile(user_id="s", gender="female")
        candidate = Profile(user_id="c", gender="male")
        stranger = Profile(user_id="x", gender="male")

        with pytest.raises(ValueError, match="neither"):
            resolver.can_excuse_location_mismatch(seeker, candidate, pref_owner=stranger)
