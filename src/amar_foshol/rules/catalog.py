"""The advisory rule table.

Rules are evaluated top to bottom. Each rule counts the forecast days that
satisfy all of its conditions and fires when the count reaches `min_days`.
`unless_fired` names a rule earlier in the table whose firing suppresses this
one, so the same underlying weather is not reported twice.

Message templates may use `{days}` and `{peak}`; the Bangla variants get the
same values as `{days_bn}` and `{peak_bn}` in Bangla digits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from amar_foshol.models.advisory import AdvisoryIcon, AdvisoryType
from amar_foshol.rules.conditions import (
    Condition,
    ForecastField,
    above,
    below,
    between,
)
from amar_foshol.rules.seasons import Season


@dataclass(frozen=True)
class AdvisoryTemplate:
    """Text of an advisory in English and Bangla.

    `seasonal_actions` holds (season, action, action_bn) entries that replace
    the default action during that cropping season.
    """

    title: str
    message: str
    action: str
    title_bn: str
    message_bn: str
    action_bn: str
    seasonal_actions: tuple[tuple[Season, str, str], ...] = ()

    def action_for(self, season: Season | None = None) -> tuple[str, str]:
        """Get the English and Bangla action for a season."""
        for entry_season, action, action_bn in self.seasonal_actions:
            if entry_season == season:
                return action, action_bn
        return self.action, self.action_bn


@dataclass(frozen=True)
class Peak:
    """Extreme value among qualifying days, reported in the message."""

    field: ForecastField
    mode: Literal["max", "min"] = "max"


@dataclass(frozen=True)
class AdvisoryRule:
    """One row of the rule table."""

    condition: str
    conditions: tuple[Condition, ...]
    min_days: int
    type: AdvisoryType
    risk_level: int
    icon: AdvisoryIcon
    template: AdvisoryTemplate
    peak: Peak | None = None
    unless_fired: str | None = None


HIGH_RAIN = AdvisoryRule(
    condition="high_rain",
    conditions=(above(ForecastField.RAIN_PROBABILITY, 70),),
    min_days=3,
    type=AdvisoryType.CRITICAL,
    risk_level=5,
    icon=AdvisoryIcon.CLOUD_RAIN,
    template=AdvisoryTemplate(
        title="Heavy rain alert",
        message="{days} of the next 5 days have more than 70% chance of rain.",
        action=(
            "Harvest paddy immediately and store it somewhere protected. "
            "Keep jute sacks raised and in a well-aired place."
        ),
        title_bn="বৃষ্টির সতর্কতা ⚠️",
        message_bn="আগামী ৫ দিনে {days_bn} দিন ৭০% এর বেশি বৃষ্টির সম্ভাবনা রয়েছে।",
        action_bn=(
            "অবিলম্বে ধান কাটুন এবং সুরক্ষিত জায়গায় সংরক্ষণ করুন। "
            "পাটের বস্তা উঁচু এবং বাতাসপূর্ণ স্থানে রাখুন।"
        ),
    ),
)

MODERATE_RAIN = AdvisoryRule(
    condition="moderate_rain",
    conditions=(between(ForecastField.RAIN_PROBABILITY, 50, 70),),
    min_days=2,
    type=AdvisoryType.WARNING,
    risk_level=3,
    icon=AdvisoryIcon.WARNING,
    template=AdvisoryTemplate(
        title="Moderate rain warning",
        message="{days} days have a 50-70% chance of rain.",
        action=(
            "Store crops that are half dried. Keep them indoors with "
            "ventilation so air can circulate."
        ),
        title_bn="মধ্যম বৃষ্টির সতর্কতা",
        message_bn="{days_bn} দিন ৫০-৭০% বৃষ্টির সম্ভাবনা রয়েছে।",
        action_bn=(
            "ফসল অর্ধেক শুকানো হলে সংরক্ষণ করুন। "
            "ভেন্টিলেশন সহ ঘরে রাখুন যাতে বাতাস চলাচল হয়।"
        ),
    ),
    unless_fired="high_rain",
)

HIGH_TEMP = AdvisoryRule(
    condition="high_temp",
    conditions=(above(ForecastField.TEMP_MAX, 35),),
    min_days=1,
    type=AdvisoryType.WARNING,
    risk_level=3,
    icon=AdvisoryIcon.THERMOMETER,
    template=AdvisoryTemplate(
        title="High temperature warning",
        message="Temperature will rise as high as {peak}°C.",
        action=(
            "Keep crops in shade or indoors between 10am and 4pm. Spread them "
            "out in the morning or evening and sprinkle water as needed."
        ),
        title_bn="উচ্চ তাপমাত্রা সতর্কতা",
        message_bn="তাপমাত্রা {peak_bn}°সে পর্যন্ত উঠবে।",
        action_bn=(
            "দিনের বেলা (১০টা থেকে ৪টা) ছায়ায় বা ঘরে রাখুন। সকাল বা সন্ধ্যায় "
            "ছড়িয়ে দিন। পরিমাণ অনুযায়ী পানি ছিটিয়ে দিন।"
        ),
    ),
    peak=Peak(ForecastField.TEMP_MAX, "max"),
)

HIGH_HUMIDITY = AdvisoryRule(
    condition="high_humidity",
    conditions=(above(ForecastField.HUMIDITY, 80),),
    min_days=1,
    type=AdvisoryType.WARNING,
    risk_level=3,
    icon=AdvisoryIcon.DROPLETS,
    template=AdvisoryTemplate(
        title="High humidity warning",
        message="Humidity will reach {peak}%, which is unsuitable for drying crops.",
        action=(
            "Store crops in a large roofed room where air can move. "
            "Turn them three times a day."
        ),
        title_bn="উচ্চ আর্দ্রতা সতর্কতা",
        message_bn="আর্দ্রতা {peak_bn}% এর উপরে থাকবে যা ফসল শুকানোর জন্য অনুপযুক্ত।",
        action_bn=(
            "বড় ছাদযুক্ত ঘরে সংরক্ষণ করুন যেখানে বাতাস চলাচল করতে পারে। "
            "প্রতিদিন তিনবার নেড়ে দিন।"
        ),
    ),
    peak=Peak(ForecastField.HUMIDITY, "max"),
)

COMBINED_RISK = AdvisoryRule(
    condition="combined_risk",
    conditions=(
        above(ForecastField.RAIN_PROBABILITY, 50),
        above(ForecastField.HUMIDITY, 75),
    ),
    min_days=1,
    type=AdvisoryType.CRITICAL,
    risk_level=5,
    icon=AdvisoryIcon.ALERT,
    template=AdvisoryTemplate(
        title="Maximum risk",
        message="Both rain and humidity will be high on {days} days.",
        action=(
            "Do not leave crops outside on these days. Keep them in a "
            "warehouse with a sealed roof, measure humidity regularly and "
            "increase air circulation."
        ),
        title_bn="সর্বোচ্চ ঝুঁকি ⚠️",
        message_bn="{days_bn} দিন বৃষ্টি এবং আর্দ্রতা উভয়ই বেশি থাকবে।",
        action_bn=(
            "এই দিনগুলিতে বাইরে রাখবেন না। সিলিং ছাদযুক্ত গুদামে রাখুন। "
            "নিয়মিত আর্দ্রতা পরিমাপ করুন এবং বায়ু সঞ্চালন বাড়ান।"
        ),
    ),
)

COLD_TEMP = AdvisoryRule(
    condition="cold_temp",
    conditions=(below(ForecastField.TEMP_MIN, 15),),
    min_days=1,
    type=AdvisoryType.INFO,
    risk_level=1,
    icon=AdvisoryIcon.INFO,
    template=AdvisoryTemplate(
        title="Cool weather",
        message="Temperature will drop as low as {peak}°C.",
        action=(
            "Use winter storage practices. Crops usually keep well, "
            "but cover them properly."
        ),
        title_bn="শীতল আবহাওয়া",
        message_bn="তাপমাত্রা {peak_bn}°সে পর্যন্ত নেমে আসবে।",
        action_bn=(
            "শীতকালীন সংরক্ষণ ব্যবস্থা অবলম্বন করুন। "
            "ফসল সাধারণত ভালো থাকে কিন্তু ভালোভাবে ঢেকে রাখুন।"
        ),
    ),
    peak=Peak(ForecastField.TEMP_MIN, "min"),
)

IDEAL = AdvisoryRule(
    condition="ideal",
    conditions=(
        below(ForecastField.RAIN_PROBABILITY, 30),
        between(ForecastField.TEMP_MAX, 20, 30),
        between(ForecastField.HUMIDITY, 50, 70),
    ),
    min_days=2,
    type=AdvisoryType.SUCCESS,
    risk_level=1,
    icon=AdvisoryIcon.CHECK,
    template=AdvisoryTemplate(
        title="Good time to dry crops ✓",
        message="{days} days will have ideal weather for drying crops.",
        action=(
            "Dry crops quickly in the sun or wind on these days. Make the "
            "most of it and store crops only once fully dry."
        ),
        title_bn="উপযুক্ত সময় ✓",
        message_bn="{days_bn} দিন ফসল শুকানোর জন্য আদর্শ আবহাওয়া থাকবে।",
        action_bn=(
            "এই দিনগুলিতে ফসল রোদে বা বাতাসে দ্রুত শুকান। সর্বোচ্চ সুবিধা নিন "
            "এবং ফসল সম্পূর্ণ শুকিয়ে সংরক্ষণ করুন।"
        ),
    ),
)

CLEAR_WEATHER = AdvisoryRule(
    condition="clear_weather",
    conditions=(below(ForecastField.RAIN_PROBABILITY, 30),),
    min_days=3,
    type=AdvisoryType.INFO,
    risk_level=1,
    icon=AdvisoryIcon.CHECK,
    template=AdvisoryTemplate(
        title="Clear weather",
        message="Rain is unlikely for {days} of the coming days.",
        action=(
            "This is the best time to dry crops. Spread them in the sun "
            "and turn them regularly."
        ),
        title_bn="পরিষ্কার আবহাওয়া",
        message_bn="আগামী {days_bn} দিন বৃষ্টি হওয়ার সম্ভাবনা কম থাকবে।",
        action_bn=(
            "এই সময়ে ফসল শুকানোর জন্য সর্বোত্তম সময়। "
            "রোদে ছড়িয়ে দিন এবং নিয়মিত নেড়ে দিন।"
        ),
    ),
    unless_fired="ideal",
)

ADVISORY_RULES: tuple[AdvisoryRule, ...] = (
    HIGH_RAIN,
    MODERATE_RAIN,
    HIGH_TEMP,
    HIGH_HUMIDITY,
    COMBINED_RISK,
    COLD_TEMP,
    IDEAL,
    CLEAR_WEATHER,
)
