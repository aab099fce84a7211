"""Per-dimension criterion evaluation, tolerance and relaxation rules."""

from .evaluator import CriterionEvaluator
from .tolerance import ToleranceResolver
from .location import RelocationResolver, extract_us_state, is_location_match
from .classifier import Criticality, CRITICALITY, DealbreakerClassifier
from .registry import DimensionRule, DIMENSION_RULES
from .education import is_education_match, resolve_education

__all__ = [
    "CriterionEvaluator",
    "ToleranceResolver",
    "RelocationResolver",
    "extract_us_state",
    "is_location_match",
    "Criticality",
    "CRITICALITY",
    "DealbreakerClassifier",
    "DimensionRule",
    "DIMENSION_RULES",
    "is_education_match",
    "resolve_education",
]
