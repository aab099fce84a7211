"""
Dealbreaker classification for near-match search.

Every dimension has a static criticality:
- SOFT: failures are always fixable by the seeker loosening a preference,
  even when the seeker marked them as dealbreakers
- ORDINAL: fixable when not a dealbreaker, or within the tolerance band
- RELOCATABLE: location, fixable by the seeker widening their own
  preference or by the judged party relocating
- CRITICAL: a dealbreaker here is never relaxed

Failures on the candidate's side are judged more strictly: the seeker
cannot change who they are, so only a relocation-excusable location
failure can be relaxed there.
"""

from enum import Enum
from typing import Dict

from ..profiles.schema import Criterion, Dimension, Direction, Profile
from .location import RelocationResolver
from .tolerance import ToleranceResolver


class Criticality(Enum):
    """How a failing dealbreaker on a dimension may be relaxed."""
    SOFT = "soft"
    ORDINAL = "ordinal"
    RELOCATABLE = "relocatable"
    CRITICAL = "critical"


CRITICALITY: Dict[Dimension, Criticality] = {
    Dimension.AGE: Criticality.ORDINAL,
    Dimension.HEIGHT: Criticality.ORDINAL,
    Dimension.RELIGION: Criticality.CRITICAL,
    Dimension.MARITAL_STATUS: Criticality.CRITICAL,
    Dimension.DIET: Criticality.CRITICAL,
    Dimension.COMMUNITY: Criticality.CRITICAL,
    Dimension.GOTRA: Criticality.CRITICAL,
    Dimension.EDUCATION: Criticality.SOFT,
    Dimension.INCOME: Criticality.SOFT,
    Dimension.SMOKING: Criticality.SOFT,
    Dimension.DRINKING: Criticality.SOFT,
    Dimension.LOCATION: Criticality.RELOCATABLE,
    Dimension.HAS_CHILDREN: Criticality.CRITICAL,
    Dimension.MOTHER_TONGUE: Criticality.CRITICAL,
    Dimension.SUB_COMMUNITY: Criticality.CRITICAL,
    Dimension.CITIZENSHIP: Criticality.CRITICAL,
    Dimension.GREW_UP_IN: Criticality.CRITICAL,
    Dimension.FAMILY_VALUES: Criticality.CRITICAL,
}


class DealbreakerClassifier:
    """
    Decides whether a failed criterion is relaxable from the seeker's side.

    Attributes:
        tolerance: ToleranceResolver for ordinal dimensions
        relocation: RelocationResolver for location
    """

    def __init__(self, tolerance: ToleranceResolver, relocation: RelocationResolver):
        self.tolerance = tolerance
        self.relocation = relocation

    @staticmethod
    def criticality(dimension: Dimension) -> Criticality:
        return CRITICALITY.get(dimension, Criticality.CRITICAL)

    def is_relaxable(
        self,
        criterion: Criterion,
        direction: Direction,
        seeker: Profile,
        candidate: Profile,
    ) -> bool:
        """
        Classify one failed criterion.

        Args:
            criterion: The failed criterion
            direction: SEEKER (seeker's preference failed) or CANDIDATE
                (candidate's dealbreaker failed against the seeker)
            seeker: The seeker
            candidate: The candidate

        Returns:
            True if the failure counts against the near-match budget,
            False if it rules the candidate out
        """
        criticality = self.criticality(criterion.dimension)

        if direction is Direction.CANDIDATE:
            return (criticality is Criticality.RELOCATABLE
                    and self.relocation.can_excuse_location_mismatch(seeker, candidate, pref_owner=candidate))

        if not criterion.is_dealbreaker:
            return True
        if criticality in (Criticality.SOFT, Criticality.RELOCATABLE):
            return True
        if criticality is Criticality.ORDINAL:
            return self.tolerance.is_within_tolerance(criterion.dimension, seeker, candidate)
        return False
