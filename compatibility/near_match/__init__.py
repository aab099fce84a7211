"""Near-match search over a candidate pool."""

from .finder import NearMatchFinder, find_near_matches

__all__ = ["NearMatchFinder", "find_near_matches"]
