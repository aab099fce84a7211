"""
Mutual match evaluation.

A mutual match requires opposite genders and a full bidirectional pass of
dealbreakers: the candidate satisfies every dealbreaker the seeker set,
and the seeker satisfies every dealbreaker the candidate set.
Non-dealbreaker preferences only affect the score.
"""

import logging
from typing import Iterable, List, Optional

from ..criteria.evaluator import CriterionEvaluator
from ..profiles.schema import Profile

logger = logging.getLogger(__name__)

_DEFAULT_EVALUATOR = CriterionEvaluator()


def matches_seeker_preferences(
    seeker: Profile,
    candidate: Profile,
    evaluator: Optional[CriterionEvaluator] = None,
) -> bool:
    """
    One-directional check: does the candidate pass all of the seeker's dealbreakers?

    Args:
        seeker: Preference owner
        candidate: Party being judged
        evaluator: CriterionEvaluator to use (default: shared instance)

    Returns:
        False on same gender or any failed seeker dealbreaker
    """
    if seeker.gender == candidate.gender:
        return False
    evaluator = evaluator or _DEFAULT_EVALUATOR

    for dimension in evaluator.rules:
        if not seeker.is_dealbreaker(dimension):
            continue
        criterion = evaluator.evaluate(dimension, seeker, candidate)
        if not criterion.matched:
            logger.debug(
                f"{candidate.user_id} fails {seeker.user_id}'s {criterion.name} dealbreaker"
            )
            return False
    return True


def is_mutual_match(
    a: Profile,
    b: Profile,
    evaluator: Optional[CriterionEvaluator] = None,
) -> bool:
    """
    Bidirectional dealbreaker check.

    Args:
        a: First profile
        b: Second profile
        evaluator: CriterionEvaluator to use (default: shared instance)

    Returns:
        True only if each side passes every dealbreaker of the other
    """
    if a.gender == b.gender:
        return False
    return (matches_seeker_preferences(a, b, evaluator)
            and matches_seeker_preferences(b, a, evaluator))


def find_mutual_matches(
    seeker: Profile,
    candidates: Iterable[Profile],
    evaluator: Optional[CriterionEvaluator] = None,
) -> List[Profile]:
    """
    Filter a candidate pool down to the seeker's mutual matches.

    The seeker's own profile is skipped if present in the pool.

    Args:
        seeker: The seeker
        candidates: Candidate pool
        evaluator: CriterionEvaluator to use (default: shared instance)

    Returns:
        Mutual matches in pool order
    """
    matches = [
        candidate for candidate in candidates
        if candidate.user_id != seeker.user_id and is_mutual_match(seeker, candidate, evaluator)
    ]
    logger.info(f"Found {len(matches)} mutual matches for {seeker.user_id}")
    return matches
