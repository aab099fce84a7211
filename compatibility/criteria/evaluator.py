"""
Criterion evaluation.

CriterionEvaluator judges one party against another party's preference for
a single dimension, dispatching through the dimension rule table.
Location mismatches are excused when the judged party is open to
relocation.
"""

import logging
from typing import Dict, List, Optional

from ..profiles.schema import Criterion, Dimension, Profile
from .classifier import Criticality
from .location import RelocationResolver
from .registry import DIMENSION_RULES, DimensionRule

logger = logging.getLogger(__name__)


class CriterionEvaluator:
    """
    Evaluates dimensions one direction at a time.

    The `seeker` argument of evaluate() is the preference owner and
    `candidate` is the party being judged; swap them to evaluate the
    reverse direction.

    Attributes:
        relocation: RelocationResolver used for relocatable dimensions
        rules: Dimension rule table
    """

    def __init__(
        self,
        relocation: Optional[RelocationResolver] = None,
        rules: Optional[Dict[Dimension, DimensionRule]] = None,
    ):
        self.relocation = relocation or RelocationResolver()
        self.rules = rules or DIMENSION_RULES

    def evaluate(self, dimension: Dimension, seeker: Profile, candidate: Profile) -> Criterion:
        """
        Evaluate seeker's preference for one dimension against candidate.

        Args:
            dimension: Dimension to evaluate
            seeker: Preference owner
            candidate: Party being judged

        Returns:
            Criterion with matched flag and the owner's effective dealbreaker flag
        """
        rule = self.rules[dimension]
        pref = seeker.preference(dimension)
        has_preference = seeker.has_preference(dimension)

        matched = True
        if has_preference:
            matched = rule.evaluate(pref, seeker, candidate)
            if not matched and rule.criticality is Criticality.RELOCATABLE:
                matched = self.relocation.can_excuse_location_mismatch(seeker, candidate, pref_owner=seeker)

        return Criterion(
            dimension=dimension,
            matched=matched,
            is_dealbreaker=seeker.is_dealbreaker(dimension),
            evaluated=has_preference,
            seeker_pref=rule.describe_preference(pref, seeker) if has_preference else None,
            candidate_value=rule.describe_value(candidate),
        )

    def evaluate_all(self, seeker: Profile, candidate: Profile) -> List[Criterion]:
        """Evaluate every dimension in table order."""
        return [self.evaluate(dimension, seeker, candidate) for dimension in self.rules]

    def failed_dealbreakers(self, seeker: Profile, candidate: Profile) -> List[Criterion]:
        """Dealbreaker criteria of seeker that candidate fails."""
        return [
            c for c in self.evaluate_all(seeker, candidate)
            if c.is_dealbreaker and not c.matched
        ]
