"""Tests for profile export loading."""

import json

import pytest

from compatibility.criteria import RelocationResolver
from compatibility.data_loading import find_profile, load_profiles, read_profiles_frame
from compatibility.profiles import Dimension, Gender

CSV_TEXT = (
    "userId,gender,age,currentLocation,annualIncome,prefIncome,prefIncomeIsDealbreaker,openToRelocation\n"
    "s1,female,29,\"San Jose, CA\",100k-150k,200k+,true,no\n"
    "c1,male,31,\"Austin, TX\",>200k,,,yes\n"
)


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "profiles.csv"
    path.write_text(CSV_TEXT)
    return path


class TestReadProfilesFrame:
    """Test reading raw exports."""

    def test_empty_cells_become_none(self, csv_file):
        df = read_profiles_frame(str(csv_file))

        assert len(df) == 2
        assert df.loc[1, "prefIncome"] is None
        assert df.loc[0, "age"] == "29"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="not found"):
            read_profiles_frame(str(tmp_path / "missing.csv"))

    def test_header_only_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("userId,gender\n")
        with pytest.raises(ValueError, match="empty"):
            read_profiles_frame(str(path))

    def test_custom_delimiter(self, tmp_path):
        path = tmp_path / "profiles.tsv"
        path.write_text("userId\tgender\nu1\tmale\n")
        df = read_profiles_frame(str(path), delimiter="\t")
        assert list(df.columns) == ["userId", "gender"]


class TestLoadProfiles:
    """Test building profiles from exports."""

    def test_csv(self, csv_file):
        seeker, candidate = load_profiles(str(csv_file))

        assert seeker.user_id == "s1"
        assert seeker.gender is Gender.FEMALE
        assert seeker.age == 29
        assert seeker.current_location == "San Jose, CA"
        assert seeker.is_dealbreaker(Dimension.INCOME) is True
        assert candidate.has_preference(Dimension.INCOME) is False
        assert candidate.open_to_relocation == "yes"

    def test_json(self, tmp_path):
        path = tmp_path / "profiles.json"
        path.write_text(json.dumps([
            {"userId": "s1", "gender": "female", "prefLocationList": ["texas", "ohio"],
             "prefLocationIsDealbreaker": True},
            {"userId": "c1", "gender": "male", "openToRelocation": True},
        ]))

        seeker, candidate = load_profiles(str(path))

        assert seeker.preference(Dimension.LOCATION).values == ["texas", "ohio"]
        assert seeker.is_dealbreaker(Dimension.LOCATION) is True
        assert RelocationResolver.is_open_to_relocation(candidate) is True

    def test_invalid_row_reports_row_number(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("userId,gender\nu1,male\nu2,unknown\n")

        with pytest.raises(ValueError, match="row 2"):
            load_profiles(str(path))


class TestFindProfile:
    """Test profile lookup."""

    def test_found(self, csv_file):
        profiles = load_profiles(str(csv_file))
        assert find_profile(profiles, "c1").user_id == "c1"

    def test_missing(self, csv_file):
        profiles = load_profiles(str(csv_file))
        with pytest.raises(KeyError):
            find_profile(profiles, "nobody")
