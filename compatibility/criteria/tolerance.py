"""
Tolerance bands for ordinal dimensions.

A failed age or height dealbreaker that misses the preferred range by only a
small margin is treated as relaxable in near-match search. Every other
dimension has zero tolerance.
"""

import logging

from ..profiles.parsing import height_position
from ..profiles.schema import Dimension, Profile
from .rules import age_bounds, distance_outside, height_bounds

logger = logging.getLogger(__name__)


class ToleranceResolver:
    """
    Decides whether an out-of-range ordinal value is close enough.

    Attributes:
        age_years: Allowed distance outside an age range, in years
        height_positions: Allowed distance outside a height range, in ladder positions
    """

    def __init__(self, age_years: int = 1, height_positions: int = 2):
        """
        Initialize the resolver.

        Args:
            age_years: Age tolerance band (default: 1 year)
            height_positions: Height tolerance band (default: 2 ladder positions)
        """
        if age_years < 0 or height_positions < 0:
            raise ValueError(
                f"Tolerance bands must be non-negative, got age_years={age_years}, "
                f"height_positions={height_positions}"
            )
        self.age_years = age_years
        self.height_positions = height_positions

    def age_within_tolerance(self, owner: Profile, judged: Profile) -> bool:
        """Check judged's age against owner's age preference, with the band."""
        age = judged.current_age()
        low, high = age_bounds(owner.preference(Dimension.AGE), owner)
        if age is None or (low is None and high is None):
            return False
        return distance_outside(age, low, high) <= self.age_years

    def height_within_tolerance(self, owner: Profile, judged: Profile) -> bool:
        """Check judged's height against owner's height preference, with the band."""
        position = height_position(judged.height)
        low, high = height_bounds(owner.preference(Dimension.HEIGHT))
        if position is None or (low is None and high is None):
            return False
        return distance_outside(position, low, high) <= self.height_positions

    def is_within_tolerance(self, dimension: Dimension, owner: Profile, judged: Profile) -> bool:
        """
        Check whether owner's failed preference is within the tolerance band.

        Args:
            dimension: The failed dimension
            owner: Preference owner
            judged: Party whose value is being judged

        Returns:
            True if the miss is small enough to relax. Always False for
            non-ordinal dimensions and for unparseable values or bounds.
        """
        if dimension is Dimension.AGE:
            within = self.age_within_tolerance(owner, judged)
        elif dimension is Dimension.HEIGHT:
            within = self.height_within_tolerance(owner, judged)
        else:
            return False
        logger.debug(
            f"{dimension.value} tolerance for {owner.user_id} vs {judged.user_id}: "
            f"{'within' if within else 'outside'} band"
        )
        return within
