"""Rule engine mapping weather forecasts to farming advisories."""

from amar_foshol.rules.catalog import (
    ADVISORY_RULES,
    AdvisoryRule,
    AdvisoryTemplate,
    Peak,
)
from amar_foshol.rules.conditions import (
    ComparisonOperator,
    Condition,
    ForecastField,
)
from amar_foshol.rules.engine import (
    AdvisoryEngine,
    RuleMatch,
    generate_advisories,
    generate_field_advisories,
    group_by_type,
    match_rule,
    summarize,
)
from amar_foshol.rules.field import FIELD_ADVISORY_RULES
from amar_foshol.rules.seasons import Season, season_for_month

__all__ = [
    "ADVISORY_RULES",
    "FIELD_ADVISORY_RULES",
    "AdvisoryRule",
    "AdvisoryTemplate",
    "Peak",
    "ComparisonOperator",
    "Condition",
    "ForecastField",
    "Season",
    "season_for_month",
    "AdvisoryEngine",
    "RuleMatch",
    "generate_advisories",
    "generate_field_advisories",
    "group_by_type",
    "match_rule",
    "summarize",
]
