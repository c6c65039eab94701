"""Tests for the seasonal field-work advisory rules."""

import logging

import pytest

from amar_foshol.models.advisory import AdvisoryType
from amar_foshol.rules.catalog import HIGH_RAIN
from amar_foshol.rules.engine import AdvisoryEngine, generate_field_advisories
from amar_foshol.rules.field import FAVORABLE, FIELD_ADVISORY_RULES, HEAVY_RAIN
from amar_foshol.rules.seasons import Season, season_for_month

from conftest import make_day, make_window

JUNE = 6


def conditions_of(advisories) -> list[str]:
    return [a.condition for a in advisories]


def only(advisories, condition: str):
    matching = [a for a in advisories if a.condition == condition]
    assert len(matching) == 1, f"expected exactly one {condition}"
    return matching[0]


def field_matches(forecasts) -> dict:
    engine = AdvisoryEngine(FIELD_ADVISORY_RULES)
    return {m.rule.condition: m for m in engine.evaluate(forecasts)}


class TestSeasons:
    """Tests for mapping months to cropping seasons."""

    @pytest.mark.parametrize(
        "month,season",
        [
            (1, Season.RABI),
            (2, Season.RABI),
            (3, Season.RABI),
            (4, Season.PRE_MONSOON),
            (5, Season.PRE_MONSOON),
            (6, Season.KHARIF),
            (9, Season.KHARIF),
            (10, Season.KHARIF),
            (11, Season.RABI),
            (12, Season.RABI),
        ],
    )
    def test_season_for_month(self, month, season):
        assert season_for_month(month) == season

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month):
        with pytest.raises(ValueError, match="between 1 and 12"):
            season_for_month(month)

    def test_bangla_names(self):
        assert Season.RABI.name_bn == "রবি"
        assert Season.KHARIF.name_bn == "খরিফ"


class TestFieldRuleTable:
    """Tests for the shape of the field rule table."""

    def test_evaluation_order(self):
        assert [r.condition for r in FIELD_ADVISORY_RULES] == [
            "heavy_rain",
            "rain_expected",
            "extreme_heat",
            "hot_weather",
            "very_humid",
            "humid",
            "storage_caution",
            "favorable",
            "drying",
        ]

    def test_guards(self):
        guards = {r.condition: r.unless_fired for r in FIELD_ADVISORY_RULES}
        assert guards["rain_expected"] == "heavy_rain"
        assert guards["hot_weather"] == "extreme_heat"
        assert guards["humid"] == "very_humid"
        assert sum(1 for g in guards.values() if g) == 3

    def test_action_for_falls_back_to_default(self):
        template = FAVORABLE.template
        assert template.action_for(None) == (template.action, template.action_bn)
        assert HEAVY_RAIN.template.action_for(Season.RABI) == (
            HEAVY_RAIN.template.action,
            HEAVY_RAIN.template.action_bn,
        )

    def test_storage_rules_have_no_seasonal_actions(self):
        assert HIGH_RAIN.template.seasonal_actions == ()


class TestFieldAdvisories:
    """Tests for each field rule and its guard."""

    def test_heavy_rain_two_days(self):
        forecasts = make_window({"rain": 80}, {"rain": 75}, {}, {}, {})
        advisories = generate_field_advisories(forecasts, JUNE)

        assert conditions_of(advisories) == ["heavy_rain", "favorable"]
        heavy = only(advisories, "heavy_rain")
        assert heavy.type == AdvisoryType.WARNING
        assert heavy.risk_level == 4
        assert heavy.affected_days == 2
        assert heavy.message.startswith("2 days of heavy rain")
        assert "২ দিন" in heavy.message_bn

    def test_single_heavy_rain_day_is_not_enough(self):
        forecasts = make_window({"rain": 90}, {}, {}, {}, {})
        assert "heavy_rain" not in conditions_of(generate_field_advisories(forecasts, JUNE))

    @pytest.mark.parametrize(
        "month,expected",
        [
            (7, "Harvest rice immediately"),
            (12, "Cover crops"),
            (4, "Cover crops"),
        ],
    )
    def test_heavy_rain_action_by_season(self, month, expected):
        forecasts = make_window({"rain": 80}, {"rain": 80}, {}, {}, {})
        heavy = only(generate_field_advisories(forecasts, month), "heavy_rain")
        assert heavy.action.startswith(expected)

    def test_heavy_rain_kharif_bangla_action(self):
        forecasts = make_window({"rain": 80}, {"rain": 80}, {}, {}, {})
        heavy = only(generate_field_advisories(forecasts, 8), "heavy_rain")
        assert heavy.action_bn.startswith("ধান কাটা থাকলে")

    def test_rain_expected_bounds_inclusive(self):
        forecasts = make_window({"rain": 40}, {"rain": 70}, {"rain": 55}, {}, {})
        advisories = generate_field_advisories(forecasts, JUNE)

        assert conditions_of(advisories) == ["rain_expected"]
        assert advisories[0].affected_days == 3

    def test_heavy_rain_suppresses_rain_expected(self):
        forecasts = make_window(
            {"rain": 80}, {"rain": 80}, {"rain": 50}, {"rain": 50}, {"rain": 50}
        )
        matches = field_matches(forecasts)

        assert matches["rain_expected"].threshold_met
        assert matches["rain_expected"].suppressed
        assert conditions_of(generate_field_advisories(forecasts, JUNE)) == [
            "heavy_rain"
        ]

    def test_extreme_heat_single_day(self):
        forecasts = make_window({"temp_max": 39}, {}, {}, {}, {})
        extreme = only(generate_field_advisories(forecasts, JUNE), "extreme_heat")
        assert extreme.affected_days == 1
        assert extreme.risk_level == 4

    def test_extreme_heat_suppresses_hot_weather(self):
        forecasts = make_window(
            {"temp_max": 39},
            {"temp_max": 36},
            {"temp_max": 37},
            {"temp_max": 38},
            {},
        )
        matches = field_matches(forecasts)

        assert matches["hot_weather"].affected_days == 3
        assert matches["hot_weather"].suppressed
        advisories = generate_field_advisories(forecasts, JUNE)
        assert "hot_weather" not in conditions_of(advisories)
        assert "extreme_heat" in conditions_of(advisories)

    def test_hot_weather_range(self):
        """Test 35 is excluded and 38 included."""
        forecasts = make_window(
            {"temp_max": 35},
            {"temp_max": 36},
            {"temp_max": 38},
            {"temp_max": 38},
            {},
        )
        advisories = generate_field_advisories(forecasts, JUNE)

        assert only(advisories, "hot_weather").affected_days == 3
        assert "extreme_heat" not in conditions_of(advisories)

    def test_very_humid_suppresses_humid(self):
        forecasts = make_window(
            {"humidity": 86},
            {"humidity": 90},
            {"humidity": 82},
            {"humidity": 83},
            {"humidity": 84},
        )
        matches = field_matches(forecasts)

        assert matches["very_humid"].fired
        assert matches["humid"].threshold_met
        assert matches["humid"].suppressed
        advisories = generate_field_advisories(forecasts, JUNE)
        assert "very_humid" in conditions_of(advisories)
        assert "humid" not in conditions_of(advisories)

    def test_humid_range(self):
        """Test 85 counts as humid but not very humid."""
        forecasts = make_window(
            {"humidity": 81}, {"humidity": 85}, {"humidity": 85}, {}, {}
        )
        advisories = generate_field_advisories(forecasts, JUNE)

        assert only(advisories, "humid").affected_days == 3
        assert "very_humid" not in conditions_of(advisories)

    def test_storage_caution(self):
        forecasts = make_window(
            {"rain": 60, "humidity": 81}, {"rain": 60, "humidity": 81}, {}, {}, {}
        )
        caution = only(generate_field_advisories(forecasts, JUNE), "storage_caution")
        assert caution.affected_days == 2
        assert caution.type == AdvisoryType.WARNING

    def test_favorable_and_drying_keep_table_order(self):
        forecasts = make_window({"temp_max": 30}, {"temp_max": 30}, {}, {}, {})
        advisories = generate_field_advisories(forecasts, JUNE)

        assert conditions_of(advisories) == ["favorable", "drying"]
        assert only(advisories, "favorable").affected_days == 5
        assert only(advisories, "drying").affected_days == 2

    @pytest.mark.parametrize(
        "month,expected",
        [
            (1, "Ideal time for Rabi crops"),
            (3, "Ideal time for Rabi crops"),
            (11, "Ideal time for Rabi crops"),
            (4, "Good time for seedbed preparation"),
            (5, "Good time for seedbed preparation"),
            (6, "Best time for rice harvesting"),
            (10, "Best time for rice harvesting"),
        ],
    )
    def test_favorable_action_by_season(self, month, expected):
        forecasts = make_window({}, {}, {}, {}, {})
        favorable = only(generate_field_advisories(forecasts, month), "favorable")
        assert favorable.action.startswith(expected)

    def test_sorted_by_risk_descending(self):
        forecasts = make_window(
            {"rain": 80, "humidity": 90},
            {"rain": 80, "humidity": 90, "temp_max": 39},
            {},
            {},
            {},
        )
        advisories = generate_field_advisories(forecasts, JUNE)

        assert conditions_of(advisories) == [
            "heavy_rain",
            "extreme_heat",
            "storage_caution",
            "very_humid",
            "favorable",
        ]
        levels = [a.risk_level for a in advisories]
        assert levels == sorted(levels, reverse=True)

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            generate_field_advisories(make_window({}, {}, {}, {}, {}), 0)

    def test_same_window_differs_only_in_action(self):
        forecasts = make_window({}, {}, {}, {}, {})
        rabi = only(generate_field_advisories(forecasts, 1), "favorable")
        kharif = only(generate_field_advisories(forecasts, 7), "favorable")

        assert rabi.message == kharif.message
        assert rabi.action != kharif.action


def test_fired_rules_logged_with_conditions(caplog):
    forecasts = [make_day(i, rain=80) for i in range(5)]
    with caplog.at_level(logging.DEBUG, logger="amar_foshol.rules.engine"):
        generate_field_advisories(forecasts, JUNE)

    assert "Rule heavy_rain fired on 5 day(s): rain_probability > 70" in caplog.text
