"""
Parsing helpers for raw profile values.

Profile records arrive as loosely-typed strings from the persistence layer
(dropdown codes, free-text legacy preferences, foot-inch heights, several
date formats). This module turns them into comparable values.

Key Design Decisions:
- Unparseable input yields None, never an exception; callers treat None
  as "unknown" and unknown data never blocks a match
- Heights map onto a ladder of one-inch positions starting at 4'6"
- A preference is "set" only when it carries a real value; placeholder
  tokens such as "doesnt_matter" count as unset
"""

import json
import logging
import math
import re
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

logger = logging.getLogger(__name__)

NO_PREFERENCE_TOKENS = {
    "",
    "any",
    "doesnt_matter",
    "doesn't matter",
    "doesnt matter",
    "no preference",
    "no_preference",
}

SAME_AS_MINE_TOKENS = {"same_as_mine", "same as mine"}

# Ladder runs 4'6" to 6'6" in one-inch steps
HEIGHT_LADDER_BASE_INCHES = 54
HEIGHT_LADDER: List[str] = [
    f"{inches // 12}'{inches % 12}\""
    for inches in range(HEIGHT_LADDER_BASE_INCHES, 6 * 12 + 7)
]

_HEIGHT_PATTERN = re.compile(
    r"^\s*(\d)\s*(?:'|ft|feet)\s*(?:(\d{1,2})\s*(?:\"|''|in|inches)?)?\s*$"
)


def normalize(value: Any) -> str:
    """Lowercase and strip a raw value for comparison."""
    if value is None:
        return ""
    return str(value).strip().lower()


def is_pref_set(value: Any) -> bool:
    """
    Check whether a preference value carries a real constraint.

    Args:
        value: Raw preference value (string, list or scalar)

    Returns:
        False for None, empty values, empty lists and placeholder tokens
    """
    if value is None:
        return False
    if isinstance(value, (list, tuple, set)):
        return any(is_pref_set(item) for item in value)
    if isinstance(value, str):
        return normalize(value) not in NO_PREFERENCE_TOKENS
    return True


def parse_string_list(value: Any) -> List[str]:
    """
    Parse a list-valued field.

    Accepts a Python list, a JSON array string or a comma-separated string.

    Args:
        value: Raw field value

    Returns:
        List of non-empty stripped strings
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        text = str(value).strip()
        if not text:
            return []
        items = None
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                logger.debug(f"Value looks like JSON but is not: {text!r}")
                parsed = None
            if isinstance(parsed, list):
                items = parsed
        if items is None:
            items = text.split(",")
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def resolve_same_as_mine(values: List[str], own_value: Any) -> Optional[List[str]]:
    """
    Replace "same_as_mine" entries with the preference owner's own value.

    Args:
        values: Preference values
        own_value: The owner's own attribute value

    Returns:
        Resolved list, or None when the preference imposes no constraint
        (a placeholder token is present, or nothing is left after dropping
        a "same_as_mine" the owner cannot back with a value)
    """
    resolved = []
    for item in values:
        token = normalize(item)
        if token in NO_PREFERENCE_TOKENS:
            return None
        if token in SAME_AS_MINE_TOKENS:
            if is_pref_set(own_value):
                resolved.append(str(own_value).strip())
            continue
        resolved.append(item)
    return resolved or None


def parse_bound(value: Any) -> Optional[int]:
    """Parse a numeric range bound, returning None when malformed."""
    if not is_pref_set(value) or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


def calculate_age_from_dob(dob: Any, today: Optional[date] = None) -> Optional[int]:
    """
    Compute age in whole years from a date of birth.

    Supported formats: MM/DD/YYYY, MM/YYYY and ISO dates (YYYY-MM-DD,
    optionally with a time part).

    Args:
        dob: Date of birth string or date
        today: Reference date (default: today)

    Returns:
        Age in years, or None if the date cannot be parsed
    """
    if dob is None:
        return None
    today = today or date.today()

    if isinstance(dob, datetime):
        born = dob.date()
    elif isinstance(dob, date):
        born = dob
    else:
        text = str(dob).strip()
        if not text:
            return None

        full = re.match(r"^(\d{1,2})/(\d{1,2})/(\d{4})$", text)
        month_year = re.match(r"^(\d{1,2})/(\d{4})$", text)
        if full:
            try:
                born = date(int(full.group(3)), int(full.group(1)), int(full.group(2)))
            except ValueError:
                return None
        elif month_year:
            year, month = int(month_year.group(2)), int(month_year.group(1))
            if not 1 <= month <= 12:
                return None
            age = today.year - year
            if today.month < month:
                age -= 1
            return age
        else:
            try:
                born = date.fromisoformat(text[:10])
            except ValueError:
                return None

    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


def parse_age_preference(text: Any, owner_age: Optional[int]) -> Optional[Tuple[int, int]]:
    """
    Parse a legacy free-text age preference into an absolute range.

    Recognised forms:
    - "25-35" / "25 to 35": absolute ages
    - "between 3 to 5 years": relative, widened by 2 years either side
    - "< 5 years" / "less than 5 years": within N years either way
    - "3 years younger" / "3 years older": one-sided, widened by 2 years
    - "5": within N years either way

    Args:
        text: Free-text preference
        owner_age: Age of the preference owner (needed for relative forms)

    Returns:
        (min_age, max_age) tuple, or None if unparseable
    """
    if not is_pref_set(text):
        return None
    pref = normalize(text)

    absolute = re.search(r"(\d{2,})\s*(?:-|–|to)+\s*(\d{2,})", pref)
    if absolute:
        return int(absolute.group(1)), int(absolute.group(2))

    if owner_age is None:
        return None

    relative = re.search(r"(?:between\s+)?(\d+)\s*(?:to|-|–)\s*(\d+)\s*years?", pref)
    if relative:
        return owner_age + int(relative.group(1)) - 2, owner_age + int(relative.group(2)) + 2

    less_than = re.search(r"(?:<|less\s*than)\s*(\d+)\s*years?", pref)
    if less_than:
        diff = int(less_than.group(1))
        return owner_age - diff, owner_age + diff

    younger_older = re.search(r"(\d+)\s*years?\s*(younger|older)", pref)
    if younger_older:
        diff = int(younger_older.group(1))
        if younger_older.group(2) == "younger":
            return owner_age - diff - 2, owner_age
        return owner_age, owner_age + diff + 2

    if re.fullmatch(r"\d+", pref):
        diff = int(pref)
        return owner_age - diff, owner_age + diff

    return None


def parse_height_inches(height: Any) -> Optional[int]:
    """
    Parse a height into total inches.

    Accepts foot-inch strings (5'4", 5' 4'', 5 ft 4 in) or a plain number
    of inches.
    """
    if height is None or isinstance(height, bool):
        return None
    if isinstance(height, float) and not math.isfinite(height):
        return None
    if isinstance(height, (int, float)):
        return int(height)

    text = str(height).strip().lower()
    if not text:
        return None
    if text.isdecimal():
        try:
            return int(text)
        except ValueError:
            return None

    match = _HEIGHT_PATTERN.match(text)
    if not match:
        return None
    feet = int(match.group(1))
    inches = int(match.group(2) or 0)
    if inches >= 12:
        return None
    return feet * 12 + inches


def height_position(height: Any) -> Optional[int]:
    """
    Map a height onto its ladder position.

    Ladder strings map to their index in HEIGHT_LADDER; heights off the
    ladder extend the scale linearly (one position per inch).
    """
    inches = parse_height_inches(height)
    if inches is None:
        return None
    return inches - HEIGHT_LADDER_BASE_INCHES
