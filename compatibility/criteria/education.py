"""
Education hierarchy and matching.

Levels:
    1: high_school, associates
    2: bachelors
    3: masters, mba
    4: medical, law, doctorate

Preference kinds:
- "X or higher" (high_school, associates, bachelors, masters and the
  legacy codes undergrad, graduate, post_graduate): candidate level >= X
- doctor_or_lawyer: candidate is medical or law. A doctorate (PhD) is
  not a doctor-or-lawyer
- exact categories (medical, law, mba, doctorate): same category only
- doesnt_matter / any: always satisfied

Legacy qualification codes (masters_cs, md, phd, ...) are mapped to an
education level and field of study for profiles that predate the split
education_level / field_of_study fields.
"""

from typing import Any, Dict, Optional, Tuple

from ..profiles.parsing import is_pref_set, normalize, parse_string_list

EDUCATION_LEVELS: Dict[str, int] = {
    "high_school": 1,
    "associates": 1,
    "bachelors": 2,
    "masters": 3,
    "mba": 3,
    "medical": 4,
    "law": 4,
    "doctorate": 4,
}

LEVEL_OR_HIGHER_PREFS: Dict[str, int] = {
    "high_school": 1,
    "associates": 1,
    "undergrad": 2,
    "graduate": 2,
    "bachelors": 2,
    "masters": 3,
    "post_graduate": 3,
}

EXACT_CATEGORY_PREFS = {"medical", "law", "mba", "doctorate"}

DOCTOR_OR_LAWYER = "doctor_or_lawyer"
DOCTOR_OR_LAWYER_LEVELS = {"medical", "law"}

# Legacy qualification code -> (education_level, field_of_study)
QUALIFICATION_TO_EDUCATION: Dict[str, Tuple[str, Optional[str]]] = {
    "high_school": ("high_school", None),
    "diploma": ("associates", None),
    "undergrad": ("bachelors", None),
    "undergrad_eng": ("bachelors", "engineering"),
    "undergrad_cs": ("bachelors", "cs_it"),
    "bachelors": ("bachelors", None),
    "bachelors_eng": ("bachelors", "engineering"),
    "bachelors_cs": ("bachelors", "cs_it"),
    "mbbs": ("medical", "medical_health"),
    "bds": ("medical", "medical_health"),
    "llb": ("law", "law_legal"),
    "masters": ("masters", None),
    "masters_eng": ("masters", "engineering"),
    "masters_cs": ("masters", "cs_it"),
    "md": ("medical", "medical_health"),
    "dds": ("medical", "medical_health"),
    "pharmd": ("medical", "medical_health"),
    "ms_medical": ("medical", "medical_health"),
    "dm_mch": ("medical", "medical_health"),
    "llm": ("law", "law_legal"),
    "jd": ("law", "law_legal"),
    "mba": ("mba", "business"),
    "ca_cpa": ("masters", "business"),
    "phd": ("doctorate", None),
    "edd": ("doctorate", "education_field"),
    "psyd": ("doctorate", "social_sciences"),
    "doctorate": ("doctorate", None),
}

# Free-form level spellings (punctuation already stripped) -> level
EDUCATION_LEVEL_ALIASES: Dict[str, str] = {
    "high_school_diploma": "high_school",
    "associate": "associates",
    "associates_degree": "associates",
    "bachelor": "bachelors",
    "bachelors_degree": "bachelors",
    "undergraduate": "bachelors",
    "be": "bachelors",
    "btech": "bachelors",
    "bsc": "bachelors",
    "bcom": "bachelors",
    "ba": "bachelors",
    "bca": "bachelors",
    "bba": "bachelors",
    "master": "masters",
    "masters_degree": "masters",
    "graduate": "masters",
    "post_graduate": "masters",
    "postgraduate": "masters",
    "me": "masters",
    "mtech": "masters",
    "ms": "masters",
    "msc": "masters",
    "mcom": "masters",
    "ma": "masters",
    "mca": "masters",
    "ca": "masters",
    "cpa": "masters",
    "medical_degree": "medical",
    "dm": "medical",
    "mch": "medical",
    "law_degree": "law",
    "doctor_of_philosophy": "doctorate",
}


def _code(value: Any) -> str:
    return normalize(value).replace(" ", "_").replace("-", "_").replace(".", "").replace("'", "")


def canonical_education_level(value: Any) -> Optional[str]:
    """
    Map a recorded education level or qualification onto EDUCATION_LEVELS.

    Spellings such as "PhD", "Ph.D.", "MD" or "Master's" resolve to their
    level; anything unrecognised is returned as its code.
    """
    code = _code(value)
    if not code:
        return None
    if code in EDUCATION_LEVELS:
        return code
    if code in QUALIFICATION_TO_EDUCATION:
        return QUALIFICATION_TO_EDUCATION[code][0]
    return EDUCATION_LEVEL_ALIASES.get(code, code)


def resolve_education(
    education_level: Any,
    field_of_study: Any,
    qualification: Any = None,
) -> Tuple[Optional[str], Optional[str]]:
    """
    Resolve a profile's education level and field of study.

    The explicit education_level / field_of_study fields win; the legacy
    qualification code fills whatever is missing. Both are canonicalised
    through the qualification and alias tables.

    Returns:
        (level, field) with None for unknown parts
    """
    level = canonical_education_level(education_level)
    field = normalize(field_of_study) or None
    if field is None:
        field = QUALIFICATION_TO_EDUCATION.get(_code(education_level), (None, None))[1]

    if qualification is not None and (level is None or field is None):
        code = _code(qualification)
        legacy_field = QUALIFICATION_TO_EDUCATION.get(code, (None, None))[1]
        level = level or canonical_education_level(qualification)
        field = field or legacy_field

    return level, field


def is_education_level_match(preference: Any, candidate_level: Optional[str]) -> bool:
    """
    Check a candidate's education level against a level preference.

    Unknown candidate levels and unrecognised preferences never block.
    """
    if not is_pref_set(preference):
        return True
    pref = _code(preference)
    if candidate_level is None:
        return True
    candidate = canonical_education_level(candidate_level)
    if candidate not in EDUCATION_LEVELS:
        return True

    if pref == DOCTOR_OR_LAWYER:
        return candidate in DOCTOR_OR_LAWYER_LEVELS
    if pref in EXACT_CATEGORY_PREFS:
        return candidate == pref
    if pref in LEVEL_OR_HIGHER_PREFS:
        return EDUCATION_LEVELS[candidate] >= LEVEL_OR_HIGHER_PREFS[pref]
    return True


def is_field_of_study_match(preference: Any, candidate_field: Optional[str]) -> bool:
    """Field-of-study preference must equal the candidate's field when both are known."""
    if not is_pref_set(preference) or not candidate_field:
        return True
    accepted = {normalize(item) for item in parse_string_list(preference)}
    return normalize(candidate_field) in accepted


def is_education_match(
    preference: Any,
    candidate_level: Optional[str],
    field_preference: Any = None,
    candidate_field: Optional[str] = None,
) -> bool:
    """Combined level and field-of-study check."""
    return (is_education_level_match(preference, candidate_level)
            and is_field_of_study_match(field_preference, candidate_field))
