"""Profile schema and raw value parsing."""

from .schema import (
    Gender,
    Dimension,
    Direction,
    Preference,
    NO_PREFERENCE,
    Profile,
    Criterion,
    FailedCriterion,
    MatchScore,
    NearMatchResult,
)
from .parsing import (
    HEIGHT_LADDER,
    calculate_age_from_dob,
    height_position,
    is_pref_set,
    parse_age_preference,
    parse_string_list,
    resolve_same_as_mine,
)

__all__ = [
    "Gender",
    "Dimension",
    "Direction",
    "Preference",
    "NO_PREFERENCE",
    "Profile",
    "Criterion",
    "FailedCriterion",
    "MatchScore",
    "NearMatchResult",
    "HEIGHT_LADDER",
    "calculate_age_from_dob",
    "height_position",
    "is_pref_set",
    "parse_age_preference",
    "parse_string_list",
    "resolve_same_as_mine",
]
