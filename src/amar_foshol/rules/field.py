"""Field-work advisory rules.

A second rule table, aimed at work in the field rather than at protecting
harvested crops in storage. Heavy rain and favorable weather give different
actions depending on the cropping season (see `amar_foshol.rules.seasons`).
"""

from __future__ import annotations

from amar_foshol.models.advisory import AdvisoryIcon, AdvisoryType
from amar_foshol.rules.catalog import AdvisoryRule, AdvisoryTemplate
from amar_foshol.rules.conditions import (
    ForecastField,
    above,
    at_most,
    below,
    between,
)
from amar_foshol.rules.seasons import Season

HEAVY_RAIN = AdvisoryRule(
    condition="heavy_rain",
    conditions=(above(ForecastField.RAIN_PROBABILITY, 70),),
    min_days=2,
    type=AdvisoryType.WARNING,
    risk_level=4,
    icon=AdvisoryIcon.CLOUD_RAIN,
    template=AdvisoryTemplate(
        title="Heavy rain alert",
        message="{days} days of heavy rain expected (70%+) in the next 5 days.",
        action=(
            "Cover crops. Store dried produce indoors. "
            "Low-lying areas may flood."
        ),
        title_bn="ভারী বৃষ্টির সতর্কতা",
        message_bn="আগামী ৫ দিনে {days_bn} দিন ভারী বৃষ্টির সম্ভাবনা (৭০%+)।",
        action_bn=(
            "ফসল ঢেকে রাখুন। শুকনো ফসল ঘরে তুলুন। "
            "নিচু জমিতে পানি জমতে পারে।"
        ),
        seasonal_actions=(
            (
                Season.KHARIF,
                "Harvest rice immediately and store in elevated areas. "
                "Ensure proper drainage in fields.",
                "ধান কাটা থাকলে আজই কেটে উঁচু জায়গায় রাখুন। "
                "জমিতে পানি নিষ্কাশনের ব্যবস্থা করুন।",
            ),
        ),
    ),
)

RAIN_EXPECTED = AdvisoryRule(
    condition="rain_expected",
    conditions=(between(ForecastField.RAIN_PROBABILITY, 40, 70),),
    min_days=3,
    type=AdvisoryType.INFO,
    risk_level=2,
    icon=AdvisoryIcon.CLOUD,
    template=AdvisoryTemplate(
        title="Rain expected",
        message="Light to moderate rain expected in the coming days.",
        action=(
            "Avoid spraying pesticides or fertilizers. "
            "Prepare fields to retain rainwater."
        ),
        title_bn="বৃষ্টির সম্ভাবনা",
        message_bn="আগামী কয়েকদিন হালকা থেকে মাঝারি বৃষ্টি হতে পারে।",
        action_bn=(
            "স্প্রে বা সার দেওয়া থেকে বিরত থাকুন। "
            "বৃষ্টির পানি ধরে রাখতে জমি প্রস্তুত করুন।"
        ),
    ),
    unless_fired="heavy_rain",
)

EXTREME_HEAT = AdvisoryRule(
    condition="extreme_heat",
    conditions=(above(ForecastField.TEMP_MAX, 38),),
    min_days=1,
    type=AdvisoryType.WARNING,
    risk_level=4,
    icon=AdvisoryIcon.SUN,
    template=AdvisoryTemplate(
        title="Extreme heat",
        message="Temperature will exceed 38°C. Crops and livestock at risk.",
        action=(
            "Irrigate early morning and evening. Keep livestock in shade with "
            "ample water. Avoid fieldwork during midday."
        ),
        title_bn="তীব্র গরম",
        message_bn="তাপমাত্রা ৩৮°সে এর উপরে উঠবে। ফসল ও গবাদিপশু ঝুঁকিতে।",
        action_bn=(
            "সকাল ও সন্ধ্যায় সেচ দিন। গবাদিপশুকে ছায়ায় রাখুন ও পর্যাপ্ত পানি দিন। "
            "দিনের মাঝামাঝি মাঠে কাজ এড়িয়ে চলুন।"
        ),
    ),
)

HOT_WEATHER = AdvisoryRule(
    condition="hot_weather",
    conditions=(
        above(ForecastField.TEMP_MAX, 35),
        at_most(ForecastField.TEMP_MAX, 38),
    ),
    min_days=3,
    type=AdvisoryType.INFO,
    risk_level=2,
    icon=AdvisoryIcon.THERMOMETER,
    template=AdvisoryTemplate(
        title="Hot weather",
        message="Temperature will remain above 35°C.",
        action="Provide regular irrigation. Use mulching to retain soil moisture.",
        title_bn="গরম আবহাওয়া",
        message_bn="তাপমাত্রা ৩৫°সে এর উপরে থাকবে।",
        action_bn="নিয়মিত সেচ দিন। মালচিং করে মাটির আর্দ্রতা ধরে রাখুন।",
    ),
    unless_fired="extreme_heat",
)

VERY_HUMID = AdvisoryRule(
    condition="very_humid",
    conditions=(above(ForecastField.HUMIDITY, 85),),
    min_days=2,
    type=AdvisoryType.WARNING,
    risk_level=3,
    icon=AdvisoryIcon.DROPLETS,
    template=AdvisoryTemplate(
        title="High humidity - disease risk",
        message="Humidity above 85%. Increased risk of fungal diseases and pests.",
        action=(
            "Watch for rice blast and panicle rot. Apply fungicide if needed. "
            "Ensure stored crops are well-dried."
        ),
        title_bn="অতিরিক্ত আর্দ্রতা - রোগের ঝুঁকি",
        message_bn="আর্দ্রতা ৮৫% এর উপরে থাকবে। ছত্রাক ও পোকামাকড়ের আক্রমণ বাড়তে পারে।",
        action_bn=(
            "ধানের ব্লাস্ট, শীষ পচা রোগ সতর্কতা। প্রয়োজনে ছত্রাকনাশক স্প্রে করুন। "
            "গোলাঘরে ফসল ভালোভাবে শুকিয়ে রাখুন।"
        ),
    ),
)

HUMID = AdvisoryRule(
    condition="humid",
    conditions=(
        above(ForecastField.HUMIDITY, 80),
        at_most(ForecastField.HUMIDITY, 85),
    ),
    min_days=3,
    type=AdvisoryType.INFO,
    risk_level=2,
    icon=AdvisoryIcon.WIND,
    template=AdvisoryTemplate(
        title="High humidity",
        message="Humidity above 80%. Drying crops will be difficult.",
        action=(
            "Choose well-ventilated areas for drying crops. "
            "Ensure good ventilation in storage."
        ),
        title_bn="উচ্চ আর্দ্রতা",
        message_bn="আর্দ্রতা ৮০% এর উপরে থাকবে। ফসল শুকানো কঠিন হবে।",
        action_bn=(
            "ফসল শুকানোর জন্য ভালো বাতাস চলাচলের জায়গা বেছে নিন। "
            "গোলাঘরে ভেন্টিলেশন নিশ্চিত করুন।"
        ),
    ),
    unless_fired="very_humid",
)

STORAGE_CAUTION = AdvisoryRule(
    condition="storage_caution",
    conditions=(
        above(ForecastField.RAIN_PROBABILITY, 50),
        above(ForecastField.HUMIDITY, 80),
    ),
    min_days=2,
    type=AdvisoryType.WARNING,
    risk_level=4,
    icon=AdvisoryIcon.ALERT,
    template=AdvisoryTemplate(
        title="Maximum storage caution",
        message="Both rain and humidity high - crop spoilage risk.",
        action=(
            "Store harvested crops in elevated dry areas. Use jute bags, "
            "avoid plastic. Check crops daily."
        ),
        title_bn="ফসল সংরক্ষণে সর্বোচ্চ সতর্কতা",
        message_bn="বৃষ্টি ও আর্দ্রতা দুটোই বেশি - ফসল নষ্ট হওয়ার ঝুঁকি।",
        action_bn=(
            "কাটা ফসল অবশ্যই উঁচু ও শুকনো জায়গায় রাখুন। পাটের বস্তা ব্যবহার করুন, "
            "প্লাস্টিক এড়িয়ে চলুন। প্রতিদিন ফসল পরীক্ষা করুন।"
        ),
    ),
)

FAVORABLE = AdvisoryRule(
    condition="favorable",
    conditions=(
        below(ForecastField.RAIN_PROBABILITY, 30),
        below(ForecastField.TEMP_MAX, 35),
        below(ForecastField.HUMIDITY, 80),
    ),
    min_days=3,
    type=AdvisoryType.SUCCESS,
    risk_level=1,
    icon=AdvisoryIcon.LEAF,
    template=AdvisoryTemplate(
        title="Favorable weather",
        message="Weather is favorable for farming activities.",
        action="Good time for seedbed preparation and transplanting.",
        title_bn="উপযুক্ত আবহাওয়া",
        message_bn="আবহাওয়া কৃষি কাজের জন্য অনুকূল।",
        action_bn="বীজতলা তৈরি ও চারা রোপণের উপযুক্ত সময়।",
        seasonal_actions=(
            (
                Season.RABI,
                "Ideal time for Rabi crops (wheat, mustard, potato). Prepare land.",
                "রবি ফসল (গম, সরিষা, আলু) বপন/রোপণের উপযুক্ত সময়। জমি তৈরি করুন।",
            ),
            (
                Season.KHARIF,
                "Best time for rice harvesting and threshing. "
                "Dry properly before storage.",
                "ধান কাটা ও মাড়াই করার সেরা সময়। "
                "ফসল ভালোভাবে শুকিয়ে গুদামে রাখুন।",
            ),
        ),
    ),
)

DRYING = AdvisoryRule(
    condition="drying",
    conditions=(
        below(ForecastField.RAIN_PROBABILITY, 20),
        below(ForecastField.HUMIDITY, 70),
        above(ForecastField.TEMP_MAX, 28),
    ),
    min_days=2,
    type=AdvisoryType.SUCCESS,
    risk_level=1,
    icon=AdvisoryIcon.SUN,
    template=AdvisoryTemplate(
        title="Ideal drying weather",
        message="Low rain, low humidity - excellent for drying crops.",
        action="Best opportunity to dry rice, wheat, pulses. Sun-dry thoroughly.",
        title_bn="ফসল শুকানোর আদর্শ সময়",
        message_bn="কম বৃষ্টি, কম আর্দ্রতা - ফসল শুকানোর জন্য চমৎকার।",
        action_bn="ধান, গম, ডাল শুকানোর সেরা সুযোগ। রোদে ভালোভাবে শুকিয়ে নিন।",
    ),
)

FIELD_ADVISORY_RULES: tuple[AdvisoryRule, ...] = (
    HEAVY_RAIN,
    RAIN_EXPECTED,
    EXTREME_HEAT,
    HOT_WEATHER,
    VERY_HUMID,
    HUMID,
    STORAGE_CAUTION,
    FAVORABLE,
    DRYING,
)
