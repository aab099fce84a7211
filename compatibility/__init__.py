"""
Matrimony Compatibility Engine

Deterministic, rule-based matching between member profiles: mutual match
gating, one-directional match scores and near-match search.

Key Design Decisions:
- Matching is bidirectional: a mutual match needs every dealbreaker on both
  sides to pass
- Near matches are asymmetric: they show what the seeker could fix by
  loosening their own preferences, never what the candidate would have to
  give up
- Ordinal dimensions (age, height) get small tolerance bands; location
  mismatches can be excused by openness to relocation
- Per-dimension rules live in a single table keyed by dimension
"""

__version__ = "1.0.0"

from .profiles import Profile, Preference, Gender, Dimension
from .scoring import calculate_match_score, is_mutual_match, matches_seeker_preferences, find_mutual_matches
from .near_match import find_near_matches

__all__ = [
    "Profile",
    "Preference",
    "Gender",
    "Dimension",
    "calculate_match_score",
    "is_mutual_match",
    "matches_seeker_preferences",
    "find_mutual_matches",
    "find_near_matches",
]
