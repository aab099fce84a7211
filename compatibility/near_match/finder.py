"""
Near-match search.

A near match is a candidate who is not a mutual match but could become one
if the seeker loosened their own preferences. For each candidate:

1. Skip self, same gender and full mutual matches
2. Collect failures from both directions, keyed by dimension:
   - every failing preference of the seeker judged against the candidate
   - every failing dealbreaker of the candidate judged against the seeker
   A dimension failing both ways is counted once
3. Classify each failure as relaxable or not (DealbreakerClassifier)
4. Keep the candidate only if nothing is non-relaxable and the relaxable
   count fits the budget

Key Design Decisions:
- Visibility is not symmetric: A may see B as a near match while B does
  not see A. A candidate's dealbreaker against the seeker's own
  attributes cannot be fixed by the seeker and always excludes
- Results are sorted by number of failed criteria (stable for ties)
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..configs.loader import EngineConfig
from ..criteria.classifier import DealbreakerClassifier
from ..criteria.evaluator import CriterionEvaluator
from ..criteria.location import RelocationResolver
from ..criteria.tolerance import ToleranceResolver
from ..profiles.schema import Dimension, Direction, FailedCriterion, NearMatchResult, Profile
from ..scoring.match_score import calculate_match_score
from ..scoring.mutual import is_mutual_match

logger = logging.getLogger(__name__)


class NearMatchFinder:
    """
    Finds near matches for a seeker over a candidate pool.

    Attributes:
        config: EngineConfig with tolerance bands and default budget
        evaluator: CriterionEvaluator shared by both directions
        classifier: DealbreakerClassifier deciding relaxability
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the finder.

        Args:
            config: EngineConfig (default: built-in defaults)
        """
        self.config = config or EngineConfig()
        self.config.validate()

        relocation = RelocationResolver()
        tolerance = ToleranceResolver(self.config.age_years, self.config.height_positions)
        self.evaluator = CriterionEvaluator(relocation)
        self.classifier = DealbreakerClassifier(tolerance, relocation)

    def collect_failures(self, seeker: Profile, candidate: Profile) -> Dict[Dimension, FailedCriterion]:
        """
        Collect deduplicated failures from both directions.

        Args:
            seeker: The seeker
            candidate: The candidate

        Returns:
            Dict keyed by dimension, in rule-table order
        """
        failures: Dict[Dimension, FailedCriterion] = {}

        for dimension in self.evaluator.rules:
            seeker_side = self.evaluator.evaluate(dimension, seeker, candidate)
            seeker_failed = not seeker_side.matched

            candidate_failed = False
            if candidate.is_dealbreaker(dimension):
                candidate_side = self.evaluator.evaluate(dimension, candidate, seeker)
                candidate_failed = not candidate_side.matched

            if not seeker_failed and not candidate_failed:
                continue

            relaxable = True
            if seeker_failed:
                relaxable = self.classifier.is_relaxable(seeker_side, Direction.SEEKER, seeker, candidate)
            if candidate_failed:
                relaxable = relaxable and self.classifier.is_relaxable(
                    candidate_side, Direction.CANDIDATE, seeker, candidate
                )

            if seeker_failed and candidate_failed:
                direction = Direction.BOTH
            elif seeker_failed:
                direction = Direction.SEEKER
            else:
                direction = Direction.CANDIDATE

            source = seeker_side if seeker_failed else candidate_side
            failures[dimension] = FailedCriterion(
                dimension=dimension,
                matched=False,
                is_dealbreaker=source.is_dealbreaker or candidate_failed,
                evaluated=True,
                seeker_pref=source.seeker_pref,
                candidate_value=source.candidate_value,
                direction=direction,
                relaxable=relaxable,
            )

        return failures

    @staticmethod
    def _overall_direction(failed: List[FailedCriterion]) -> Direction:
        directions = {f.direction for f in failed}
        if directions == {Direction.SEEKER}:
            return Direction.SEEKER
        if directions == {Direction.CANDIDATE}:
            return Direction.CANDIDATE
        return Direction.BOTH

    def evaluate_candidate(
        self,
        seeker: Profile,
        candidate: Profile,
        max_failed_criteria: int,
    ) -> Optional[NearMatchResult]:
        """
        Decide whether one candidate is a near match.

        Args:
            seeker: The seeker
            candidate: The candidate
            max_failed_criteria: Budget of relaxable failures

        Returns:
            NearMatchResult, or None if the candidate is not a near match
        """
        if candidate.user_id == seeker.user_id or candidate.gender == seeker.gender:
            return None
        if is_mutual_match(seeker, candidate, self.evaluator):
            return None

        failed = list(self.collect_failures(seeker, candidate).values())
        blocking = [f.name for f in failed if not f.relaxable]
        if blocking:
            logger.debug(f"{candidate.user_id} excluded for {seeker.user_id}: non-relaxable {blocking}")
            return None
        if not failed or len(failed) > max_failed_criteria:
            logger.debug(
                f"{candidate.user_id} excluded for {seeker.user_id}: "
                f"{len(failed)} relaxable failures (budget {max_failed_criteria})"
            )
            return None

        score = calculate_match_score(seeker, candidate, self.evaluator)
        return NearMatchResult(
            profile=candidate,
            failed_criteria=failed,
            match_score=score.percentage,
            failed_direction=self._overall_direction(failed),
        )

    def find(
        self,
        seeker: Profile,
        candidates: Iterable[Profile],
        max_failed_criteria: Optional[int] = None,
    ) -> List[NearMatchResult]:
        """
        Find near matches for a seeker.

        Args:
            seeker: The seeker
            candidates: Candidate pool (may include the seeker)
            max_failed_criteria: Budget of relaxable failures (default: from config)

        Returns:
            Near matches sorted by ascending number of failed criteria
        """
        budget = self.config.max_failed_criteria if max_failed_criteria is None else max_failed_criteria
        if budget < 0:
            raise ValueError(f"max_failed_criteria must be >= 0, got {budget}")

        results = []
        for candidate in candidates:
            result = self.evaluate_candidate(seeker, candidate, budget)
            if result is not None:
                results.append(result)

        results.sort(key=lambda r: len(r.failed_criteria))
        logger.info(f"Found {len(results)} near matches for {seeker.user_id} (budget {budget})")
        return results


def find_near_matches(
    seeker: Profile,
    candidates: Iterable[Profile],
    max_failed_criteria: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> List[NearMatchResult]:
    """
    Find near matches for a seeker.

    Args:
        seeker: The seeker
        candidates: Candidate pool
        max_failed_criteria: Budget of relaxable failures (default: 2, or config value)
        config: Optional EngineConfig

    Returns:
        List of NearMatchResult sorted by ascending failed-criteria count
    """
    return NearMatchFinder(config).find(seeker, candidates, max_failed_criteria)
