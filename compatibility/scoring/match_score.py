"""
One-directional match score.

Judges the candidate against every preference the seeker set and reduces
the outcome to a percentage plus an itemized criterion list. The score is
a display and ranking aid; it never decides mutuality.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..criteria.evaluator import CriterionEvaluator
from ..profiles.schema import MatchScore, Profile

logger = logging.getLogger(__name__)

_DEFAULT_EVALUATOR = CriterionEvaluator()


def score_percentage(matched: int, evaluated: int) -> int:
    """Matched share as a whole percentage, rounding halves up; 100 when nothing was evaluated."""
    if evaluated == 0:
        return 100
    ratio = Decimal(matched) * 100 / Decimal(evaluated)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_match_score(
    seeker: Profile,
    candidate: Profile,
    evaluator: Optional[CriterionEvaluator] = None,
) -> MatchScore:
    """
    Score a candidate against the seeker's preferences.

    Every dimension appears in the criteria list. Dimensions the seeker
    left unset are reported as matched but excluded from the totals.

    Args:
        seeker: Preference owner
        candidate: Party being judged
        evaluator: CriterionEvaluator to use (default: shared instance)

    Returns:
        MatchScore with percentage, criteria and matched/evaluated counts
    """
    evaluator = evaluator or _DEFAULT_EVALUATOR
    criteria = evaluator.evaluate_all(seeker, candidate)

    evaluated = [c for c in criteria if c.evaluated]
    matched = sum(1 for c in evaluated if c.matched)
    percentage = score_percentage(matched, len(evaluated))

    logger.debug(
        f"Match score {seeker.user_id} -> {candidate.user_id}: "
        f"{matched}/{len(evaluated)} ({percentage}%)"
    )
    return MatchScore(
        percentage=percentage,
        criteria=criteria,
        total_score=matched,
        max_score=len(evaluated),
    )
