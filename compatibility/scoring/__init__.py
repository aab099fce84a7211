"""Match scoring and mutual match evaluation."""

from .match_score import calculate_match_score, score_percentage
from .mutual import matches_seeker_preferences, is_mutual_match, find_mutual_matches

__all__ = [
    "calculate_match_score",
    "score_percentage",
    "matches_seeker_preferences",
    "is_mutual_match",
    "find_mutual_matches",
]
