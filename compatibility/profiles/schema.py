"""
Profile and result schema for the compatibility engine.

Defines the read-only Profile input (demographic attributes plus a
per-dimension Preference structure) and the transient result types
produced by evaluation: Criterion, FailedCriterion, MatchScore and
NearMatchResult.

Profiles are accepted in the flat record shape stored by the platform
(camelCase keys such as prefAgeMin / prefAgeIsDealbreaker) or in
snake_case; see Profile.from_dict.
"""

import re
from dataclasses import dataclass, field, fields
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .parsing import (
    calculate_age_from_dob,
    is_pref_set,
    normalize,
    parse_string_list,
)


class Gender(Enum):
    """Declared gender. Pairing is across the two categories only."""
    MALE = "male"
    FEMALE = "female"


_GENDER_ALIASES = {
    "male": Gender.MALE,
    "m": Gender.MALE,
    "man": Gender.MALE,
    "female": Gender.FEMALE,
    "f": Gender.FEMALE,
    "woman": Gender.FEMALE,
}


class Dimension(Enum):
    """Matchable dimensions, in evaluation order. Values are display names."""
    AGE = "Age"
    HEIGHT = "Height"
    RELIGION = "Religion"
    MARITAL_STATUS = "Marital Status"
    DIET = "Diet"
    COMMUNITY = "Community"
    GOTRA = "Gotra"
    EDUCATION = "Education"
    INCOME = "Income"
    SMOKING = "Smoking"
    DRINKING = "Drinking"
    LOCATION = "Location"
    HAS_CHILDREN = "Has Children"
    MOTHER_TONGUE = "Mother Tongue"
    SUB_COMMUNITY = "Sub-Community"
    CITIZENSHIP = "Citizenship"
    GREW_UP_IN = "Grew Up In"
    FAMILY_VALUES = "Family Values"


class Direction(Enum):
    """Which side's preference a failed criterion belongs to."""
    SEEKER = "seeker"        # seeker's preference, judged against the candidate
    CANDIDATE = "candidate"  # candidate's preference, judged against the seeker
    BOTH = "both"


# Flat record keys (snake_case) feeding each dimension's preference.
# value keys are tried in order; min/max/dealbreaker keys derive from the prefix.
_PREFERENCE_SOURCES: Dict[Dimension, Tuple[str, Tuple[str, ...]]] = {
    Dimension.AGE: ("pref_age", ("pref_age_diff", "pref_age")),
    Dimension.HEIGHT: ("pref_height", ("pref_height",)),
    Dimension.RELIGION: ("pref_religion", ("pref_religion",)),
    Dimension.MARITAL_STATUS: ("pref_marital_status", ("pref_marital_status",)),
    Dimension.DIET: ("pref_diet", ("pref_diet",)),
    Dimension.COMMUNITY: ("pref_community", ("pref_community",)),
    Dimension.GOTRA: ("pref_gotra", ("pref_gotra",)),
    Dimension.EDUCATION: ("pref_education", ("pref_education_level", "pref_education", "pref_qualification")),
    Dimension.INCOME: ("pref_income", ("pref_income",)),
    Dimension.SMOKING: ("pref_smoking", ("pref_smoking",)),
    Dimension.DRINKING: ("pref_drinking", ("pref_drinking",)),
    Dimension.LOCATION: ("pref_location", ("pref_location_list", "pref_location")),
    Dimension.HAS_CHILDREN: ("pref_has_children", ("pref_has_children",)),
    Dimension.MOTHER_TONGUE: ("pref_mother_tongue", ("pref_mother_tongue",)),
    Dimension.SUB_COMMUNITY: ("pref_sub_community", ("pref_sub_community",)),
    Dimension.CITIZENSHIP: ("pref_citizenship", ("pref_citizenship",)),
    Dimension.GREW_UP_IN: ("pref_grew_up_in", ("pref_grew_up_in",)),
    Dimension.FAMILY_VALUES: ("pref_family_values", ("pref_family_values",)),
}


def _to_snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _as_bool(value: Any) -> bool:
    """Dealbreaker flags arrive as booleans or as "true"/"false" strings."""
    if isinstance(value, bool):
        return value
    return normalize(value) in ("true", "yes", "1")


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class Preference:
    """
    One dimension's preference.

    Attributes:
        value: Target value or list of values (comma-separated strings and
            JSON arrays are accepted)
        min: Lower bound for ranged dimensions (age, height)
        max: Upper bound for ranged dimensions
        is_dealbreaker: Whether failing this preference rules a match out
    """
    value: Any = None
    min: Any = None
    max: Any = None
    is_dealbreaker: bool = False

    @property
    def is_set(self) -> bool:
        """True if the preference constrains anything at all."""
        return is_pref_set(self.value) or is_pref_set(self.min) or is_pref_set(self.max)

    @property
    def values(self) -> List[str]:
        """Preference value as a list of strings."""
        return parse_string_list(self.value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "value": self.value,
            "min": self.min,
            "max": self.max,
            "is_dealbreaker": self.is_dealbreaker,
        }


NO_PREFERENCE = Preference()


@dataclass(frozen=True)
class Profile:
    """
    A member profile as seen by the compatibility engine.

    Attributes are the raw stored values; the engine never mutates them.
    Only user_id and gender are required.

    Attributes:
        user_id: Unique member identifier
        gender: Gender (strings are coerced)
        preferences: Per-dimension Preference, missing dimensions are unset
        pref_field_of_study: Optional refinement of the education preference
    """
    user_id: str
    gender: Gender
    age: Optional[int] = None
    date_of_birth: Optional[str] = None
    height: Optional[str] = None
    current_location: Optional[str] = None
    marital_status: Optional[str] = None
    has_children: Optional[str] = None
    religion: Optional[str] = None
    community: Optional[str] = None
    sub_community: Optional[str] = None
    caste: Optional[str] = None
    gotra: Optional[str] = None
    mother_tongue: Optional[str] = None
    dietary_preference: Optional[str] = None
    smoking: Optional[str] = None
    drinking: Optional[str] = None
    qualification: Optional[str] = None
    education_level: Optional[str] = None
    field_of_study: Optional[str] = None
    annual_income: Optional[str] = None
    citizenship: Optional[str] = None
    grew_up_in: Optional[str] = None
    family_values: Optional[str] = None
    open_to_relocation: Any = field(default=None, hash=False)
    preferences: Dict[Dimension, Preference] = field(default_factory=dict, hash=False)
    pref_field_of_study: Any = field(default=None, hash=False)

    def __post_init__(self):
        """Validate identity fields and coerce gender."""
        if self.user_id is None or str(self.user_id).strip() == "":
            raise ValueError("user_id is required")
        if not isinstance(self.gender, Gender):
            gender = _GENDER_ALIASES.get(normalize(self.gender))
            if gender is None:
                raise ValueError(f"Invalid gender for profile {self.user_id}: {self.gender!r}")
            object.__setattr__(self, "gender", gender)

    def preference(self, dimension: Dimension) -> Preference:
        """Get the preference for a dimension (unset if absent)."""
        return self.preferences.get(dimension, NO_PREFERENCE)

    def has_preference(self, dimension: Dimension) -> bool:
        """True if this profile constrains the given dimension."""
        if dimension is Dimension.EDUCATION and is_pref_set(self.pref_field_of_study):
            return True
        return self.preference(dimension).is_set

    def is_dealbreaker(self, dimension: Dimension) -> bool:
        """Effective dealbreaker flag: only meaningful when a preference is set."""
        return self.has_preference(dimension) and self.preference(dimension).is_dealbreaker

    def current_age(self, today: Optional[date] = None) -> Optional[int]:
        """Age from the explicit field, else derived from date of birth."""
        if self.age is not None:
            return self.age
        return calculate_age_from_dob(self.date_of_birth, today=today)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """
        Create a Profile from a flat record.

        Keys may be camelCase (userId, prefAgeMin, prefDietIsDealbreaker)
        or snake_case. Unknown keys are ignored.

        Args:
            data: Flat profile record

        Returns:
            Profile instance

        Raises:
            ValueError: If user_id or gender is missing or invalid
        """
        record = {_to_snake_case(str(k)): v for k, v in data.items()}

        preferences = {}
        for dimension, (prefix, value_keys) in _PREFERENCE_SOURCES.items():
            value = None
            for key in value_keys:
                if is_pref_set(record.get(key)):
                    value = record[key]
                    break
            pref = Preference(
                value=value,
                min=record.get(f"{prefix}_min"),
                max=record.get(f"{prefix}_max"),
                is_dealbreaker=_as_bool(record.get(f"{prefix}_is_dealbreaker")),
            )
            if pref.is_set or pref.is_dealbreaker:
                preferences[dimension] = pref

        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name in ("preferences", "user_id", "gender") or f.name not in record:
                continue
            raw = record[f.name]
            if f.name == "age":
                kwargs[f.name] = _as_int(raw)
            elif f.name in ("open_to_relocation", "pref_field_of_study"):
                kwargs[f.name] = raw
            else:
                kwargs[f.name] = _as_text(raw)

        user_id = record.get("user_id", record.get("id"))
        return cls(
            user_id=_as_text(user_id),
            gender=record.get("gender"),
            preferences=preferences,
            **kwargs,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with string enum values."""
        result = {}
        for f in fields(self):
            if f.name == "preferences":
                result[f.name] = {d.value: p.to_dict() for d, p in self.preferences.items()}
            elif f.name == "gender":
                result[f.name] = self.gender.value
            else:
                result[f.name] = getattr(self, f.name)
        return result


@dataclass
class Criterion:
    """
    Outcome of evaluating one dimension in one direction.

    Attributes:
        dimension: The evaluated dimension
        matched: Whether the judged party satisfies the owner's preference
        is_dealbreaker: Effective dealbreaker flag of the preference owner
        evaluated: Whether the owner had a preference set (unset preferences
            are vacuously matched and excluded from score totals)
        seeker_pref: Display string for the preference
        candidate_value: Display string for the judged value
    """
    dimension: Dimension
    matched: bool
    is_dealbreaker: bool = False
    evaluated: bool = True
    seeker_pref: Optional[str] = None
    candidate_value: Optional[str] = None

    @property
    def name(self) -> str:
        return self.dimension.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "matched": self.matched,
            "is_dealbreaker": self.is_dealbreaker,
            "seeker_pref": self.seeker_pref,
            "candidate_value": self.candidate_value,
        }


@dataclass
class FailedCriterion(Criterion):
    """
    A failing criterion collected for near-match analysis.

    Attributes:
        direction: Whose preference failed (seeker, candidate or both)
        relaxable: Whether the seeker could plausibly fix this failure
    """
    direction: Direction = Direction.SEEKER
    relaxable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = super().to_dict()
        result["direction"] = self.direction.value
        result["relaxable"] = self.relaxable
        return result


@dataclass
class MatchScore:
    """
    One-directional compatibility score.

    Attributes:
        percentage: Matched share of evaluated criteria, 0-100
        criteria: Every dimension's outcome, in evaluation order
        total_score: Number of evaluated criteria that matched
        max_score: Number of evaluated criteria
    """
    percentage: int
    criteria: List[Criterion]
    total_score: int
    max_score: int

    def criterion(self, name: str) -> Optional[Criterion]:
        """Look up a criterion by display name."""
        for c in self.criteria:
            if c.name == name:
                return c
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "percentage": self.percentage,
            "total_score": self.total_score,
            "max_score": self.max_score,
            "criteria": [c.to_dict() for c in self.criteria],
        }


@dataclass
class NearMatchResult:
    """
    A candidate who is not a mutual match but could become one.

    Attributes:
        profile: The candidate
        failed_criteria: Deduplicated failures, one per dimension
        match_score: Seeker-side score percentage for the candidate
        failed_direction: seeker, candidate or both
    """
    profile: Profile
    failed_criteria: List[FailedCriterion]
    match_score: int = 0
    failed_direction: Direction = Direction.SEEKER

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "user_id": self.profile.user_id,
            "match_score": self.match_score,
            "failed_direction": self.failed_direction.value,
            "failed_criteria": [c.to_dict() for c in self.failed_criteria],
        }
