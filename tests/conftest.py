"""
Pytest configuration and shared fixtures.
"""

from typing import Any, Callable, Dict

import pytest

from compatibility.criteria import CriterionEvaluator
from compatibility.profiles import Profile


@pytest.fixture
def base_record() -> Dict[str, Any]:
    """A complete flat profile record, as exported by the platform."""
    return {
        "userId": "u1",
        "gender": "female",
        "age": 30,
        "currentLocation": "San Jose, CA",
        "caste": None,
        "community": "Iyer",
        "subCommunity": "Smartha",
        "dietaryPreference": "Vegetarian",
        "qualification": "bachelors_cs",
        "height": "5'6\"",
        "gotra": "Kashyap",
        "smoking": "no",
        "drinking": "no",
        "motherTongue": "Telugu",
        "familyValues": "traditional",
        "maritalStatus": "never_married",
        "hasChildren": None,
        "annualIncome": "100k-150k",
        "religion": "Hindu",
        "citizenship": "US Citizen",
        "grewUpIn": "USA",
        "openToRelocation": "no",
    }


@pytest.fixture
def make_profile(base_record) -> Callable[..., Profile]:
    """Factory building a Profile from the base record plus overrides."""
    def _make(**overrides: Any) -> Profile:
        record = dict(base_record)
        record.update(overrides)
        return Profile.from_dict(record)
    return _make


@pytest.fixture
def seeker(make_profile) -> Profile:
    """A female seeker with no preferences."""
    return make_profile(userId="seeker", gender="female")


@pytest.fixture
def candidate(make_profile) -> Profile:
    """A male candidate with no preferences."""
    return make_profile(userId="candidate", gender="male", age=31, height="5'10\"")


@pytest.fixture
def evaluator() -> CriterionEvaluator:
    """Default criterion evaluator."""
    return CriterionEvaluator()
