"""Rule engine turning a 5-day forecast into ranked farming advisories.

The engine is a pure function of its input (and, for seasonal rules, the
season passed in): it keeps no state between calls and never raises for
well-typed input. Validating the window shape (five chronological days) is
the caller's job; see `amar_foshol.models.weather.ForecastWindow`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from amar_foshol.models.advisory import Advisory, AdvisorySummary, AdvisoryType
from amar_foshol.models.weather import WeatherForecast
from amar_foshol.rules.catalog import ADVISORY_RULES, AdvisoryRule
from amar_foshol.rules.conditions import all_match
from amar_foshol.rules.field import FIELD_ADVISORY_RULES
from amar_foshol.rules.seasons import Season, season_for_month
from amar_foshol.utils.bangla import round_half_up, to_bangla_number

logger = logging.getLogger(__name__)


@dataclass
class RuleMatch:
    """Result of evaluating one rule against a forecast window."""

    rule: AdvisoryRule
    days: list[WeatherForecast] = field(default_factory=list)
    peak: float | None = None
    suppressed: bool = False  # Threshold met but an earlier rule already fired

    @property
    def affected_days(self) -> int:
        return len(self.days)

    @property
    def threshold_met(self) -> bool:
        return self.affected_days >= self.rule.min_days

    @property
    def fired(self) -> bool:
        return self.threshold_met and not self.suppressed


def match_rule(rule: AdvisoryRule, forecasts: Sequence[WeatherForecast]) -> RuleMatch:
    """Find the days that satisfy a rule's conditions.

    Args:
        rule: Rule to evaluate
        forecasts: Daily forecasts, earliest first

    Returns:
        RuleMatch with the qualifying days and their peak value
    """
    days = [day for day in forecasts if all_match(rule.conditions, day)]

    peak = None
    if rule.peak and days:
        values = [getattr(day, rule.peak.field.value) for day in days]
        peak = max(values) if rule.peak.mode == "max" else min(values)

    return RuleMatch(rule=rule, days=days, peak=peak)


def build_advisory(match: RuleMatch, season: Season | None = None) -> Advisory:
    """Render the advisory for a fired rule."""
    rule = match.rule
    days = match.affected_days
    peak = round_half_up(match.peak) if match.peak is not None else None
    values = {
        "days": days,
        "peak": peak,
        "days_bn": to_bangla_number(days),
        "peak_bn": to_bangla_number(peak) if peak is not None else "",
    }
    template = rule.template
    action, action_bn = template.action_for(season)

    return Advisory.create(
        rule.condition,
        type=rule.type,
        title=template.title,
        message=template.message.format(**values),
        action=action,
        title_bn=template.title_bn,
        message_bn=template.message_bn.format(**values),
        action_bn=action_bn,
        risk_level=rule.risk_level,
        affected_days=days,
        icon=rule.icon,
    )


class AdvisoryEngine:
    """Evaluates a rule table against daily forecasts.

    Example:
        ```python
        engine = AdvisoryEngine()
        advisories = engine.generate_advisories(window.forecasts)
        for advisory in advisories:
            print(advisory.risk_level, advisory.title)
        ```
    """

    def __init__(self, rules: Iterable[AdvisoryRule] | None = None):
        """Initialize the engine.

        Args:
            rules: Rule table in evaluation order (default: ADVISORY_RULES)
        """
        self.rules: tuple[AdvisoryRule, ...] = tuple(
            ADVISORY_RULES if rules is None else rules
        )

    def evaluate(self, forecasts: Sequence[WeatherForecast]) -> list[RuleMatch]:
        """Evaluate every rule in order.

        Returns:
            One RuleMatch per rule, in evaluation order
        """
        fired: set[str] = set()
        matches: list[RuleMatch] = []

        for rule in self.rules:
            match = match_rule(rule, forecasts)
            if match.threshold_met and rule.unless_fired in fired:
                match.suppressed = True
            if match.fired:
                fired.add(rule.condition)
                logger.debug(
                    f"Rule {rule.condition} fired on {match.affected_days} day(s): "
                    + " and ".join(c.describe() for c in rule.conditions)
                )
            matches.append(match)

        return matches

    def generate_advisories(
        self, forecasts: Sequence[WeatherForecast], season: Season | None = None
    ) -> list[Advisory]:
        """Produce the advisories for a forecast window.

        Args:
            forecasts: Five daily forecasts, earliest first
            season: Cropping season for rules with seasonal actions

        Returns:
            Advisories sorted by risk level, highest first. Rules with equal
            risk keep their evaluation order. Empty if nothing fired.
        """
        advisories = [
            build_advisory(match, season)
            for match in self.evaluate(forecasts)
            if match.fired
        ]
        return sorted(advisories, key=lambda a: a.risk_level, reverse=True)


_default_engine = AdvisoryEngine()
_field_engine = AdvisoryEngine(FIELD_ADVISORY_RULES)


def generate_advisories(forecasts: Sequence[WeatherForecast]) -> list[Advisory]:
    """Generate advisories using the default rule table."""
    return _default_engine.generate_advisories(forecasts)


def generate_field_advisories(
    forecasts: Sequence[WeatherForecast], month: int
) -> list[Advisory]:
    """Generate field-work advisories for the cropping season of `month`.

    Raises:
        ValueError: If month is not between 1 and 12
    """
    return _field_engine.generate_advisories(
        forecasts, season=season_for_month(month)
    )


def group_by_type(advisories: Iterable[Advisory]) -> dict[AdvisoryType, list[Advisory]]:
    """Group advisories by type, keeping their order within each group."""
    groups: dict[AdvisoryType, list[Advisory]] = {t: [] for t in AdvisoryType}
    for advisory in advisories:
        groups[advisory.type].append(advisory)
    return groups


def summarize(advisories: Sequence[Advisory]) -> AdvisorySummary:
    """Count advisories per type and find the highest risk level."""
    groups = group_by_type(advisories)
    return AdvisorySummary(
        total=len(advisories),
        by_type={t: len(items) for t, items in groups.items()},
        highest_risk_level=max((a.risk_level for a in advisories), default=None),
        conditions=[a.condition for a in advisories],
    )
