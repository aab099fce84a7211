"""
Dimension rule table.

Maps each Dimension to its evaluation rule, criticality and display
helpers. The bidirectional matching algorithms iterate this table and
never branch on dimension names, so adding a dimension means adding an
entry here.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..profiles.schema import Dimension, Preference, Profile
from . import rules
from .classifier import CRITICALITY, Criticality


@dataclass(frozen=True)
class DimensionRule:
    """
    Strategy record for one dimension.

    Attributes:
        dimension: The dimension
        evaluate: rule(pref, owner, judged) -> matched
        criticality: How failures may be relaxed
        describe_value: Renders the judged party's value
        describe_preference: Renders the owner's preference
    """
    dimension: Dimension
    evaluate: rules.Rule
    describe_value: Callable[[Profile], Optional[str]]
    describe_preference: Callable[[Preference, Profile], Optional[str]] = rules.describe_listed_preference

    @property
    def criticality(self) -> Criticality:
        return CRITICALITY[self.dimension]

    @property
    def is_tolerance_eligible(self) -> bool:
        return self.criticality is Criticality.ORDINAL


def _membership(dimension: Dimension, attribute: str, canonical=rules.normalize) -> DimensionRule:
    return DimensionRule(
        dimension=dimension,
        evaluate=rules.attribute_membership(attribute, canonical),
        describe_value=rules.describe_attribute(attribute),
    )


DIMENSION_RULES: Dict[Dimension, DimensionRule] = {
    Dimension.AGE: DimensionRule(
        Dimension.AGE, rules.evaluate_age, rules.describe_age, rules.describe_age_preference
    ),
    Dimension.HEIGHT: DimensionRule(
        Dimension.HEIGHT, rules.evaluate_height, rules.describe_attribute("height"),
        rules.describe_height_preference,
    ),
    Dimension.RELIGION: _membership(Dimension.RELIGION, "religion"),
    Dimension.MARITAL_STATUS: _membership(Dimension.MARITAL_STATUS, "marital_status", rules.canonical_code),
    Dimension.DIET: DimensionRule(
        Dimension.DIET, rules.evaluate_diet, rules.describe_attribute("dietary_preference")
    ),
    Dimension.COMMUNITY: DimensionRule(
        Dimension.COMMUNITY, rules.evaluate_community, rules.describe_attribute("community")
    ),
    Dimension.GOTRA: DimensionRule(
        Dimension.GOTRA, rules.evaluate_gotra, rules.describe_attribute("gotra")
    ),
    Dimension.EDUCATION: DimensionRule(
        Dimension.EDUCATION, rules.evaluate_education, rules.describe_education,
        rules.describe_education_preference,
    ),
    Dimension.INCOME: DimensionRule(
        Dimension.INCOME, rules.evaluate_income, rules.describe_attribute("annual_income")
    ),
    Dimension.SMOKING: DimensionRule(
        Dimension.SMOKING, rules.evaluate_smoking, rules.describe_attribute("smoking")
    ),
    Dimension.DRINKING: DimensionRule(
        Dimension.DRINKING, rules.evaluate_drinking, rules.describe_attribute("drinking")
    ),
    Dimension.LOCATION: DimensionRule(
        Dimension.LOCATION, rules.evaluate_location, rules.describe_attribute("current_location")
    ),
    Dimension.HAS_CHILDREN: DimensionRule(
        Dimension.HAS_CHILDREN, rules.evaluate_has_children, rules.describe_attribute("has_children")
    ),
    Dimension.MOTHER_TONGUE: _membership(Dimension.MOTHER_TONGUE, "mother_tongue"),
    Dimension.SUB_COMMUNITY: _membership(Dimension.SUB_COMMUNITY, "sub_community"),
    Dimension.CITIZENSHIP: _membership(Dimension.CITIZENSHIP, "citizenship"),
    Dimension.GREW_UP_IN: _membership(Dimension.GREW_UP_IN, "grew_up_in"),
    Dimension.FAMILY_VALUES: _membership(Dimension.FAMILY_VALUES, "family_values"),
}
