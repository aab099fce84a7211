"""
Per-dimension evaluation rules.

Every rule has the signature rule(pref, owner, judged) -> bool and answers
whether `judged` satisfies `owner`'s preference `pref`. Rules are only
invoked for preferences that are set; a missing value on the judged side
always passes.

Display helpers (describe_*) render the preference and the judged value
for itemized score output.
"""

import logging
import re
from typing import Any, Callable, List, Optional, Tuple

from ..profiles.parsing import (
    HEIGHT_LADDER,
    height_position,
    is_pref_set,
    normalize,
    parse_age_preference,
    parse_bound,
    resolve_same_as_mine,
)
from ..profiles.schema import Preference, Profile
from .education import is_education_match, resolve_education
from .location import matches_any_location

logger = logging.getLogger(__name__)

Rule = Callable[[Preference, Profile, Profile], bool]

DIET_ALIASES = {
    "veg": "vegetarian",
    "pure_veg": "vegetarian",
    "vegetarian": "vegetarian",
    "non_veg": "non_vegetarian",
    "nonveg": "non_vegetarian",
    "non_vegetarian": "non_vegetarian",
    "nonvegetarian": "non_vegetarian",
    "egg": "eggetarian",
    "eggetarian": "eggetarian",
    "vegan": "vegan",
    "jain": "jain",
    "veg_eggetarian": "veg_eggetarian",
}
VEG_EGGETARIAN_ACCEPTS = {"vegetarian", "eggetarian", "vegan"}

INCOME_BRACKET_VALUES = {
    "student": 0,
    "homemaker": 0,
    "<50k": 25,
    "50k-75k": 62,
    "75k-100k": 87,
    "100k-150k": 125,
    "150k-200k": 175,
    ">200k": 250,
}
INCOME_PREF_MINIMUMS = {
    "50k+": 50,
    "75k+": 75,
    "100k+": 100,
    "150k+": 150,
    "200k+": 200,
}
# A bracket used as a preference means "this bracket or higher"
INCOME_BRACKET_LOWER_BOUNDS = {
    "student": 0,
    "homemaker": 0,
    "<50k": 0,
    "50k-75k": 50,
    "75k-100k": 75,
    "100k-150k": 100,
    "150k-200k": 150,
    ">200k": 200,
}

HEAVY_HABIT_VALUES = {"yes", "regular", "regularly"}
NON_SMOKER_VALUES = {"no", "never", "non_smoker"}
OCCASIONAL_SMOKING_PREFS = {"occasional", "occasionally", "occasionally_ok", "socially"}
NON_DRINKER_VALUES = {"no", "never", "non_drinker"}
SOCIAL_DRINKING_PREFS = {"occasional", "occasionally", "occasionally_ok", "social", "socially", "social_ok"}

NO_CHILDREN_PREFS = {"no", "no_children"}


def canonical_code(value: Any) -> str:
    """Lowercase value with spaces and hyphens folded to underscores."""
    return normalize(value).replace("-", "_").replace(" ", "_")


def _blank(value: Any) -> bool:
    return not is_pref_set(value)


# Ranged dimensions

def age_bounds(pref: Preference, owner: Profile) -> Tuple[Optional[int], Optional[int]]:
    """
    Resolve an age preference to inclusive (min, max) bounds.

    Explicit min/max win; a legacy free-text value is parsed relative to the
    owner's age only when neither bound is usable. Malformed bounds are
    ignored.
    """
    low, high = parse_bound(pref.min), parse_bound(pref.max)
    if low is None and high is None and is_pref_set(pref.value):
        parsed = parse_age_preference(pref.value, owner.current_age())
        if parsed is not None:
            low, high = parsed
    return low, high


def height_bounds(pref: Preference) -> Tuple[Optional[int], Optional[int]]:
    """Resolve a height preference to inclusive ladder positions."""
    return height_position(pref.min), height_position(pref.max)


def distance_outside(value: int, low: Optional[int], high: Optional[int]) -> int:
    """How far a value lies outside [low, high]; 0 when inside."""
    if low is not None and value < low:
        return low - value
    if high is not None and value > high:
        return value - high
    return 0


def evaluate_age(pref: Preference, owner: Profile, judged: Profile) -> bool:
    age = judged.current_age()
    if age is None:
        return True
    low, high = age_bounds(pref, owner)
    return distance_outside(age, low, high) == 0


def evaluate_height(pref: Preference, owner: Profile, judged: Profile) -> bool:
    position = height_position(judged.height)
    if position is None:
        return True
    low, high = height_bounds(pref)
    return distance_outside(position, low, high) == 0


# Categorical dimensions

def attribute_membership(attribute: str, canonical: Callable[[Any], str] = normalize) -> Rule:
    """
    Build a rule checking that judged.<attribute> is one of the preferred values.

    "same_as_mine" resolves to owner.<attribute>.
    """
    def evaluate(pref: Preference, owner: Profile, judged: Profile) -> bool:
        candidate = getattr(judged, attribute)
        if _blank(candidate):
            return True
        accepted = resolve_same_as_mine(pref.values, getattr(owner, attribute))
        if accepted is None:
            return True
        return canonical(candidate) in {canonical(item) for item in accepted}

    evaluate.__name__ = f"evaluate_{attribute}"
    return evaluate


def canonical_diet(value: Any) -> str:
    code = canonical_code(value)
    return DIET_ALIASES.get(code, code)


def evaluate_diet(pref: Preference, owner: Profile, judged: Profile) -> bool:
    if _blank(judged.dietary_preference):
        return True
    accepted = resolve_same_as_mine(pref.values, owner.dietary_preference)
    if accepted is None:
        return True

    candidate = canonical_diet(judged.dietary_preference)
    for item in accepted:
        wanted = canonical_diet(item)
        if wanted == "non_vegetarian":
            return True
        if wanted == "veg_eggetarian" and candidate in VEG_EGGETARIAN_ACCEPTS:
            return True
        if wanted == candidate:
            return True
    return False


# Brahmin sub-castes and groups; any two are treated as one caste family
BRAHMIN_CASTES = [
    "brahmin", "brahman", "bramin",
    "iyengar", "iyer", "iyyengar", "aiyengar", "aiyer",
    "smartha", "smarta", "madhwa", "madhva", "vaishnava", "sri vaishnava",
    "niyogi", "aruvela", "dravida", "vaidiki", "namboodiri", "namboothiri", "nambuthiri",
    "deshastha", "chitpavan", "karhade", "saraswat", "gaud", "gaur", "goud",
    "havyaka", "hoysala", "shivalli", "sthanika", "koteshwara", "kandavara",
    "hebbar", "mandyam", "badaganadu", "sholayur",
    "telaganya", "velanadu", "mulukanadu", "veginadu", "kammanadu", "kokanastha",
    "maithil", "tyagi", "bhumihar", "mohyal", "kashmiri", "pandit",
    "saryupareen", "kanyakubja", "utkala", "jijhotia", "sakaldwipi", "sankethi",
    "pushkarna", "pareek", "dadhich", "modh", "shrimali", "srimali", "nagar", "audichya",
]

SAME_CASTE_TOKENS = ("same caste", "same_caste")


def is_brahmin(caste: Any) -> bool:
    text = normalize(caste)
    return bool(text) and any(name in text for name in BRAHMIN_CASTES)


def _caste_words(text: str) -> List[str]:
    return [word for word in re.split(r"[\s,\-/]+", text) if len(word) > 2]


def is_caste_match(wanted: Any, candidate: Any, own: Any = None) -> bool:
    """
    Match one community preference entry against a candidate's community.

    "same caste" accepts the owner's own caste family: both Brahmin, or any
    shared word between the two community names. A named community accepts
    a substring match either way, or any Brahmin candidate for a Brahmin
    preference.
    """
    pref = normalize(wanted)
    caste = normalize(candidate)

    if any(token in pref for token in SAME_CASTE_TOKENS):
        own_caste = normalize(own)
        if not own_caste:
            return True
        if is_brahmin(own_caste) and is_brahmin(caste):
            return True
        return any(
            mine in theirs or theirs in mine
            for mine in _caste_words(own_caste)
            for theirs in _caste_words(caste)
        )

    if pref in caste or caste in pref:
        return True
    return is_brahmin(pref) and is_brahmin(caste)


def evaluate_community(pref: Preference, owner: Profile, judged: Profile) -> bool:
    candidate = judged.community or judged.caste
    if _blank(candidate):
        return True
    own = owner.community or owner.caste
    accepted = resolve_same_as_mine(pref.values, own)
    if accepted is None:
        return True
    return any(is_caste_match(item, candidate, own) for item in accepted)


def evaluate_gotra(pref: Preference, owner: Profile, judged: Profile) -> bool:
    """
    Gotra preferences are usually relational: "different" (must differ
    from the owner's gotra) or "same". Anything else is a literal gotra.
    """
    if _blank(judged.gotra):
        return True
    candidate = normalize(judged.gotra)
    own = normalize(owner.gotra)

    for item in pref.values:
        wanted = normalize(item)
        if "different" in wanted:
            if not own or own != candidate:
                return True
        elif "same" in wanted:
            if not own or own == candidate:
                return True
        elif wanted == candidate:
            return True
    return False


def evaluate_has_children(pref: Preference, owner: Profile, judged: Profile) -> bool:
    if _blank(judged.has_children):
        return True
    candidate = canonical_code(judged.has_children)

    for item in pref.values:
        wanted = canonical_code(item)
        if wanted in NO_CHILDREN_PREFS:
            if not candidate.startswith("yes"):
                return True
        elif "ok" in wanted or wanted.startswith("yes"):
            return True
        elif wanted == candidate:
            return True
    return False


def income_minimum(preference: Any) -> Optional[int]:
    """Minimum bracket value implied by an income preference, or None."""
    key = normalize(preference).replace(" ", "")
    if key in INCOME_PREF_MINIMUMS:
        return INCOME_PREF_MINIMUMS[key]
    return INCOME_BRACKET_LOWER_BOUNDS.get(key)


def evaluate_income(pref: Preference, owner: Profile, judged: Profile) -> bool:
    candidate = INCOME_BRACKET_VALUES.get(normalize(judged.annual_income).replace(" ", ""))
    if candidate is None:
        return True
    minimum = income_minimum(pref.value)
    if minimum is None:
        return True
    return candidate >= minimum


def habit_rule(attribute: str, abstinent: set, moderate_prefs: set) -> Rule:
    """
    Build a smoking/drinking style rule.

    An abstinent preference accepts only abstinent candidates; a moderate
    preference rejects heavy habits; any other preference accepts everyone.
    """
    def evaluate(pref: Preference, owner: Profile, judged: Profile) -> bool:
        if _blank(getattr(judged, attribute)):
            return True
        wanted = canonical_code(pref.value)
        candidate = canonical_code(getattr(judged, attribute))
        if wanted in abstinent:
            return candidate in abstinent
        if wanted in moderate_prefs:
            return candidate not in HEAVY_HABIT_VALUES
        return True

    evaluate.__name__ = f"evaluate_{attribute}"
    return evaluate


evaluate_smoking = habit_rule("smoking", NON_SMOKER_VALUES, OCCASIONAL_SMOKING_PREFS)
evaluate_drinking = habit_rule("drinking", NON_DRINKER_VALUES, SOCIAL_DRINKING_PREFS)


def evaluate_education(pref: Preference, owner: Profile, judged: Profile) -> bool:
    level, field = resolve_education(judged.education_level, judged.field_of_study, judged.qualification)
    return any(
        is_education_match(item, level, owner.pref_field_of_study, field)
        for item in pref.values or [None]
    )


def evaluate_location(pref: Preference, owner: Profile, judged: Profile) -> bool:
    if _blank(judged.current_location):
        return True
    return matches_any_location(pref.values, judged.current_location, owner.current_location)


# Display

def describe_listed_preference(pref: Preference, owner: Profile) -> Optional[str]:
    values = pref.values
    return ", ".join(values) if values else None


def describe_age_preference(pref: Preference, owner: Profile) -> Optional[str]:
    if is_pref_set(pref.min) or is_pref_set(pref.max):
        low = pref.min if is_pref_set(pref.min) else "18"
        high = pref.max if is_pref_set(pref.max) else "99"
        return f"{low} - {high} years"
    return describe_listed_preference(pref, owner)


def describe_height_preference(pref: Preference, owner: Profile) -> Optional[str]:
    if is_pref_set(pref.min) or is_pref_set(pref.max):
        low = pref.min if is_pref_set(pref.min) else HEIGHT_LADDER[0]
        high = pref.max if is_pref_set(pref.max) else HEIGHT_LADDER[-1]
        return f"{low} - {high}"
    return describe_listed_preference(pref, owner)


def describe_education_preference(pref: Preference, owner: Profile) -> Optional[str]:
    level = describe_listed_preference(pref, owner)
    if is_pref_set(owner.pref_field_of_study):
        field = str(owner.pref_field_of_study)
        return f"{level} in {field}" if level else field
    return level


def describe_attribute(attribute: str) -> Callable[[Profile], Optional[str]]:
    def describe(profile: Profile) -> Optional[str]:
        value = getattr(profile, attribute)
        return str(value) if is_pref_set(value) else None
    return describe


def describe_age(profile: Profile) -> Optional[str]:
    age = profile.current_age()
    return str(age) if age is not None else None


def describe_education(profile: Profile) -> Optional[str]:
    level, field = resolve_education(profile.education_level, profile.field_of_study, profile.qualification)
    if level and field:
        return f"{level} ({field})"
    return level or field
