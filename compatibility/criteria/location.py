"""
Location matching and relocation handling.

Location preferences are dropdown codes (usa, bay_area, texas, same_state,
...) or free text ("prefer New Jersey", "Chicago"). Matching is state-aware
and strict: a preference naming a state only accepts candidates in that
state.

RelocationResolver encodes which party's openness to relocation can
excuse a location mismatch. The party whose location is being judged is
the one whose flag counts, and it is always passed explicitly.
"""

import logging
import re
from typing import Any, Iterable, Optional

from ..profiles.parsing import is_pref_set, normalize
from ..profiles.schema import Profile

logger = logging.getLogger(__name__)

US_STATE_ABBREVIATIONS = {
    "al": "alabama", "ak": "alaska", "az": "arizona", "ar": "arkansas", "ca": "california",
    "co": "colorado", "ct": "connecticut", "de": "delaware", "fl": "florida", "ga": "georgia",
    "hi": "hawaii", "id": "idaho", "il": "illinois", "in": "indiana", "ia": "iowa",
    "ks": "kansas", "ky": "kentucky", "la": "louisiana", "me": "maine", "md": "maryland",
    "ma": "massachusetts", "mi": "michigan", "mn": "minnesota", "ms": "mississippi", "mo": "missouri",
    "mt": "montana", "ne": "nebraska", "nv": "nevada", "nh": "new hampshire", "nj": "new jersey",
    "nm": "new mexico", "ny": "new york", "nc": "north carolina", "nd": "north dakota", "oh": "ohio",
    "ok": "oklahoma", "or": "oregon", "pa": "pennsylvania", "ri": "rhode island", "sc": "south carolina",
    "sd": "south dakota", "tn": "tennessee", "tx": "texas", "ut": "utah", "vt": "vermont",
    "va": "virginia", "wa": "washington", "wv": "west virginia", "wi": "wisconsin", "wy": "wyoming",
    "dc": "district of columbia",
}

# Longest first so "west virginia" wins over "virginia"
US_STATE_NAMES = sorted(set(US_STATE_ABBREVIATIONS.values()), key=len, reverse=True)

BAY_AREA_CITIES = [
    "san francisco", "san jose", "oakland", "fremont", "sunnyvale", "santa clara",
    "hayward", "berkeley", "palo alto", "mountain view", "redwood city", "milpitas",
    "pleasanton", "livermore", "dublin", "union city", "newark", "cupertino",
    "san mateo", "daly city", "san leandro", "walnut creek", "concord", "alameda",
    "menlo park", "burlingame", "foster city", "san ramon", "santa rosa", "vallejo",
    "pittsburg", "antioch", "richmond", "napa", "petaluma", "sfo",
]

SOUTHERN_CALIFORNIA_CITIES = [
    "los angeles", "san diego", "la", "orange county", "irvine", "anaheim",
    "long beach", "pasadena", "riverside", "san bernardino",
]

USA_TOKENS = {"usa", "us", "united_states", "united states", "america"}
ANYWHERE_TOKENS = {"open_to_relocation", "other_state", "anywhere"}


def _contains_phrase(text: str, phrase: str) -> bool:
    return re.search(rf"\b{re.escape(phrase)}\b", text) is not None


def _segment_state(segment: str) -> Optional[str]:
    for name in US_STATE_NAMES:
        if _contains_phrase(segment, name):
            return name
    tokens = re.split(r"[\s/\-]+", segment.replace(".", ""))
    if tokens and tokens[0] in US_STATE_ABBREVIATIONS:
        return US_STATE_ABBREVIATIONS[tokens[0]]
    return None


def extract_us_state(location: Any) -> Optional[str]:
    """
    Extract the US state named in a location string.

    When the location has comma-separated parts, the trailing parts are
    read first ("Kansas City, MO" is Missouri, "Austin, TX 78701" is
    Texas). Otherwise full state names are matched anywhere, and a bare
    string of at most two words may be an abbreviation, so words such as
    "in" or "or" inside a city name are not mistaken for states.

    Returns:
        Lowercase full state name, or None
    """
    text = normalize(location).replace("_", " ")
    if not text:
        return None

    segments = [s.strip() for s in text.split(",") if s.strip()]
    for segment in reversed(segments[1:]):
        state = _segment_state(segment)
        if state is not None:
            return state

    for name in US_STATE_NAMES:
        if _contains_phrase(text, name):
            return name

    if len(segments) == 1:
        tokens = re.split(r"[\s/\-]+", segments[0])
        if len(tokens) <= 2 and tokens[0] in US_STATE_ABBREVIATIONS:
            return US_STATE_ABBREVIATIONS[tokens[0]]
    return None


def is_us_location(location: Any) -> bool:
    """True if the location is recognisably in the USA."""
    text = normalize(location)
    if re.search(r"\busa\b|united states|\bu\.s\.", text):
        return True
    return extract_us_state(text) is not None


def is_location_match(
    preference: Any,
    candidate_location: Any,
    owner_location: Any = None,
) -> bool:
    """
    Check one location preference entry against a candidate's location.

    Args:
        preference: A single preference entry (code or free text)
        candidate_location: Location being judged
        owner_location: Preference owner's own location (for same_state)

    Returns:
        True if the candidate's location satisfies the entry. Unset
        preferences and unknown candidate locations always match.
    """
    if not is_pref_set(preference) or not is_pref_set(candidate_location):
        return True

    pref = normalize(preference)
    for prefix in ("prefer ", "preferred "):
        if pref.startswith(prefix):
            pref = pref[len(prefix):].strip()
    code = pref.replace(" ", "_")
    candidate = normalize(candidate_location)

    if code in ANYWHERE_TOKENS:
        return True

    if code in USA_TOKENS or pref in USA_TOKENS:
        return is_us_location(candidate)

    if code == "same_state":
        owner_state = extract_us_state(owner_location)
        if owner_state is None:
            return True
        return extract_us_state(candidate) == owner_state

    if code == "bay_area":
        if extract_us_state(candidate) != "california":
            return False
        if candidate in ("california", "ca") or "bay area" in candidate:
            return True
        return any(_contains_phrase(candidate, city) for city in BAY_AREA_CITIES)

    if code == "southern_california":
        if extract_us_state(candidate) != "california":
            return False
        return any(_contains_phrase(candidate, city) for city in SOUTHERN_CALIFORNIA_CITIES)

    pref_state = extract_us_state(pref)
    if pref_state is not None:
        return extract_us_state(candidate) == pref_state

    return pref in candidate or candidate in pref


def matches_any_location(
    preferences: Iterable[str],
    candidate_location: Any,
    owner_location: Any = None,
) -> bool:
    """True if any entry of a location preference list matches."""
    return any(
        is_location_match(item, candidate_location, owner_location)
        for item in preferences
    )


class RelocationResolver:
    """
    Decides whether a location mismatch is excused by openness to relocate.

    When a preference owner's location preference is judged against the
    other party, the mismatch is excused if the judged party (the one who
    would move) declared open_to_relocation = 'yes'.
    """

    @staticmethod
    def is_open_to_relocation(profile: Profile) -> bool:
        """True if the profile declared openness to relocating."""
        flag = profile.open_to_relocation
        if isinstance(flag, bool):
            return flag
        return normalize(flag) in ("yes", "true")

    def excuses_mismatch(self, whose_flag_matters: Profile) -> bool:
        """
        Check the relocation flag of the party whose location is judged.

        Args:
            whose_flag_matters: The party who would have to relocate
        """
        return self.is_open_to_relocation(whose_flag_matters)

    def can_excuse_location_mismatch(
        self,
        seeker: Profile,
        candidate: Profile,
        pref_owner: Profile,
    ) -> bool:
        """
        Decide whether pref_owner's failed location preference is excused.

        Args:
            seeker: The seeker
            candidate: The candidate
            pref_owner: Whose location preference failed (seeker or candidate)

        Returns:
            True if the other party is open to relocation

        Raises:
            ValueError: If pref_owner is neither the seeker nor the candidate
        """
        if pref_owner is seeker:
            whose_flag_matters = candidate
        elif pref_owner is candidate:
            whose_flag_matters = seeker
        else:
            raise ValueError(
                f"pref_owner {pref_owner.user_id} is neither seeker {seeker.user_id} "
                f"nor candidate {candidate.user_id}"
            )
        excused = self.excuses_mismatch(whose_flag_matters)
        if excused:
            logger.debug(
                f"Location mismatch for {pref_owner.user_id} excused: "
                f"{whose_flag_matters.user_id} is open to relocation"
            )
        return excused
