"""Crop-specific risk assessment from tomorrow's weather.

A general check classifies the weather into at most one risk type, then each
crop may raise or lower the level for the types it is sensitive to. Only
Critical assessments produce an alert.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from amar_foshol.locations import get_district
from amar_foshol.models.weather import NextDayConditions
from amar_foshol.providers.base import WeatherProvider

logger = logging.getLogger(__name__)

HIGH_TEMP_THRESHOLD = 30.0
LOW_TEMP_THRESHOLD = 15.0
HIGH_HUMIDITY_THRESHOLD = 70.0
LOW_HUMIDITY_THRESHOLD = 40.0
HEAVY_RAIN_THRESHOLD = 20.0  # mm


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    CRITICAL = "Critical"


class RiskType(str, Enum):
    HEAT_STRESS = "heat_stress"
    COLD_STRESS = "cold_stress"
    HIGH_HUMIDITY = "high_humidity"
    DROUGHT = "drought"
    FLOOD = "flood"


RISK_TYPE_NAMES_BN: dict[RiskType, str] = {
    RiskType.DROUGHT: "খরা",
    RiskType.FLOOD: "বন্যা",
    RiskType.HEAT_STRESS: "তাপীয় চাপ",
    RiskType.COLD_STRESS: "শীতল চাপ",
    RiskType.HIGH_HUMIDITY: "উচ্চ আর্দ্রতা",
}

CROP_NAMES_BN: dict[str, str] = {
    "potato": "আলু",
    "rice": "ধান",
    "wheat": "গম",
    "maize": "ভুট্টা",
    "jute": "পাট",
    "tomato": "টমেটো",
    "brinjal": "বেগুন",
    "mustard": "সরিষা",
    "lentil": "মসুর",
    "mango": "আম",
    "banana": "কলা",
    "sugarcane": "আখ",
    "onion": "পেঁয়াজ",
}


class RiskAssessment(BaseModel):
    """Risk level and, when any risk was found, its type."""

    level: RiskLevel = RiskLevel.LOW
    type: RiskType | None = None

    @property
    def is_critical(self) -> bool:
        return self.level == RiskLevel.CRITICAL


class CropAlert(BaseModel):
    """Actionable alert for a crop facing a critical risk."""

    crop_type: str
    location: str
    risk_level: RiskLevel
    risk_type: RiskType | None
    message: str
    message_bn: str
    conditions: NextDayConditions
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class CropOverride:
    """Replace the level when the general check found one of `risk_types`."""

    risk_types: frozenset[RiskType]
    level: RiskLevel
    when: Callable[[NextDayConditions], bool] | None = None

    def applies(self, risk_type: RiskType | None, conditions: NextDayConditions) -> bool:
        if risk_type not in self.risk_types:
            return False
        return self.when is None or self.when(conditions)


def _override(
    *types: RiskType,
    level: RiskLevel,
    when: Callable[[NextDayConditions], bool] | None = None,
) -> CropOverride:
    return CropOverride(frozenset(types), level, when)


_CRITICAL = RiskLevel.CRITICAL
_MEDIUM = RiskLevel.MEDIUM

CROP_OVERRIDES: dict[str, tuple[CropOverride, ...]] = {
    "potato": (
        _override(RiskType.HIGH_HUMIDITY, level=_CRITICAL),
        _override(RiskType.DROUGHT, level=_MEDIUM, when=lambda c: c.temp < 20),
    ),
    "rice": (
        _override(RiskType.FLOOD, level=_MEDIUM),
        _override(RiskType.DROUGHT, RiskType.HEAT_STRESS, level=_CRITICAL),
    ),
    "wheat": (_override(RiskType.DROUGHT, RiskType.HEAT_STRESS, level=_CRITICAL),),
    "maize": (
        _override(RiskType.DROUGHT, level=_MEDIUM),
        _override(RiskType.HIGH_HUMIDITY, level=_CRITICAL),
    ),
    "jute": (
        _override(RiskType.FLOOD, level=RiskLevel.LOW),
        _override(RiskType.DROUGHT, RiskType.HIGH_HUMIDITY, level=_CRITICAL),
    ),
    "tomato": (
        _override(
            RiskType.HEAT_STRESS,
            RiskType.DROUGHT,
            RiskType.HIGH_HUMIDITY,
            RiskType.FLOOD,
            level=_CRITICAL,
        ),
    ),
    "brinjal": (
        _override(
            RiskType.DROUGHT,
            RiskType.HIGH_HUMIDITY,
            RiskType.COLD_STRESS,
            level=_CRITICAL,
        ),
    ),
    "mustard": (
        _override(RiskType.DROUGHT, RiskType.HEAT_STRESS, level=_CRITICAL),
        _override(RiskType.COLD_STRESS, level=_MEDIUM),
    ),
    "lentil": (
        _override(
            RiskType.DROUGHT, RiskType.HEAT_STRESS, RiskType.FLOOD, level=_CRITICAL
        ),
    ),
    "mango": (
        _override(
            RiskType.DROUGHT,
            RiskType.HEAT_STRESS,
            RiskType.FLOOD,
            RiskType.HIGH_HUMIDITY,
            level=_CRITICAL,
        ),
    ),
    "banana": (
        _override(
            RiskType.DROUGHT, RiskType.FLOOD, RiskType.COLD_STRESS, level=_CRITICAL
        ),
    ),
    "sugarcane": (_override(RiskType.DROUGHT, RiskType.FLOOD, level=_CRITICAL),),
    "onion": (
        _override(
            RiskType.COLD_STRESS,
            RiskType.HIGH_HUMIDITY,
            RiskType.DROUGHT,
            level=_CRITICAL,
        ),
    ),
}


def _general_risk(conditions: NextDayConditions) -> RiskAssessment:
    c = conditions
    if c.temp > HIGH_TEMP_THRESHOLD and not c.rain:
        return RiskAssessment(level=_CRITICAL, type=RiskType.HEAT_STRESS)
    if c.temp < LOW_TEMP_THRESHOLD:
        return RiskAssessment(level=_CRITICAL, type=RiskType.COLD_STRESS)
    if c.humidity > HIGH_HUMIDITY_THRESHOLD and c.rain:
        return RiskAssessment(level=_CRITICAL, type=RiskType.HIGH_HUMIDITY)
    if (
        not c.rain
        and c.humidity < LOW_HUMIDITY_THRESHOLD
        and c.temp > HIGH_TEMP_THRESHOLD - 5
    ):
        return RiskAssessment(level=_CRITICAL, type=RiskType.DROUGHT)
    if c.rain and c.rain_amount > HEAVY_RAIN_THRESHOLD:
        return RiskAssessment(level=_CRITICAL, type=RiskType.FLOOD)
    if c.humidity > HIGH_HUMIDITY_THRESHOLD:
        return RiskAssessment(level=_MEDIUM, type=RiskType.HIGH_HUMIDITY)
    return RiskAssessment()


def calculate_risk(
    crop_type: str, conditions: NextDayConditions | None
) -> RiskAssessment:
    """Assess the risk tomorrow's weather poses to a crop.

    The first matching general check sets the risk type, then the crop's
    overrides adjust the level. Unknown crops keep the general level.

    Args:
        crop_type: Crop key such as "rice" or "potato"
        conditions: Tomorrow's conditions, None when unavailable

    Returns:
        The assessment; Low with no type when conditions are missing
    """
    if conditions is None:
        return RiskAssessment()

    assessment = _general_risk(conditions)
    level = assessment.level
    for override in CROP_OVERRIDES.get(crop_type, ()):
        if override.applies(assessment.type, conditions):
            level = override.level

    return RiskAssessment(level=level, type=assessment.type)


# (crop, risk type) -> (English, Bangla). Bangla text may use {risk_bn}, {crop_bn}.
ALERT_MESSAGES: dict[tuple[str, RiskType], tuple[str, str]] = {
    ("potato", RiskType.HIGH_HUMIDITY): (
        "Risk: High humidity. Rain and high humidity expected. "
        "Turn on ventilation and apply fungicide.",
        "ঝুঁকি: {risk_bn} (ছত্রাকজনিত রোগের সম্ভাবনা)। আগামীকাল বৃষ্টি হবে এবং "
        "আর্দ্রতা বেশি। এখনই ফ্যান চালু করুন এবং ছত্রাকনাশক ব্যবহার করুন।",
    ),
    ("potato", RiskType.DROUGHT): (
        "Risk: Drought. Your potato field lacks water. "
        "Irrigate immediately and keep soil moist.",
        "ঝুঁকি: {risk_bn}। আপনার {crop_bn} ক্ষেতে পানির অভাব। "
        "এখনই সেচ দিন এবং মাটি আর্দ্র রাখুন।",
    ),
    ("potato", RiskType.COLD_STRESS): (
        "Risk: Cold stress. Low temperature will damage potatoes. Provide covering.",
        "ঝুঁকি: {risk_bn}। নিম্ন তাপমাত্রা {crop_bn} কে ক্ষতি করবে। আচ্ছাদন প্রদান করুন।",
    ),
    ("rice", RiskType.DROUGHT): (
        "Risk: Drought. Your rice field needs water. Start irrigation "
        "immediately and use drought-tolerant varieties.",
        "ঝুঁকি: {risk_bn}। আপনার {crop_bn} ক্ষেতে খরা। এখনই সেচ ব্যবস্থা চালু করুন "
        "এবং খরা-সহনশীল জাত ব্যবহার করুন।",
    ),
    ("rice", RiskType.FLOOD): (
        "Risk: Flood. Heavy rain expected. Check drainage and move to "
        "higher ground if possible.",
        "ঝুঁকি: {risk_bn} (জলাবদ্ধতা)। আগামীকাল ভারী বৃষ্টি হতে পারে। "
        "নিকাশ ব্যবস্থা চেক করুন এবং উঁচু জমিতে সরান।",
    ),
    ("rice", RiskType.HEAT_STRESS): (
        "Risk: Heat stress. High temperature will reduce rice yield. "
        "Increase irrigation.",
        "ঝুঁকি: {risk_bn}। উচ্চ তাপমাত্রা {crop_bn} ফলন কমাবে। "
        "সেচ বাড়ান এবং ছায়া প্রদান করুন।",
    ),
    ("tomato", RiskType.HEAT_STRESS): (
        "Risk: Heat stress. High temperature affects fruit development. "
        "Use shade nets and increase irrigation.",
        "ঝুঁকি: {risk_bn}। উচ্চ তাপমাত্রা {crop_bn} ফল গঠনে সমস্যা সৃষ্টি করবে। "
        "ছায়া নেট ব্যবহার করুন এবং সেচ বাড়ান।",
    ),
    ("tomato", RiskType.DROUGHT): (
        "Risk: Drought. Water shortage detected. Irrigate regularly.",
        "ঝুঁকি: {risk_bn}। পানির অভাব। নিয়মিত সেচ দিন।",
    ),
    ("tomato", RiskType.HIGH_HUMIDITY): (
        "Risk: High humidity with disease risk. Apply fungicide spray.",
        "ঝুঁকি: {risk_bn} (রোগের ঝুঁকি)। ছত্রাকনাশক স্প্রে করুন।",
    ),
    ("tomato", RiskType.FLOOD): (
        "Risk: Flood. Ensure proper drainage to avoid waterlogging.",
        "ঝুঁকি: {risk_bn}। জলাবদ্ধতা এড়াতে নিকাশ নিশ্চিত করুন।",
    ),
    ("wheat", RiskType.HEAT_STRESS): (
        "Risk: Heat stress. High temperature will damage wheat. "
        "Provide shade and increase irrigation.",
        "ঝুঁকি: {risk_bn}। উচ্চ তাপমাত্রা আপনার {crop_bn} ফসলকে ক্ষতি করবে। "
        "ছায়া প্রদান করুন এবং সেচ বাড়ান।",
    ),
    ("wheat", RiskType.DROUGHT): (
        "Risk: Drought. Water shortage. Irrigate immediately.",
        "ঝুঁকি: {risk_bn}। পানির অভাব। এখনই সেচ দিন।",
    ),
    ("mango", RiskType.DROUGHT): (
        "Risk: Drought. Water shortage affects fruit development. Irrigate.",
        "ঝুঁকি: {risk_bn}। পানির অভাব ফল গঠনে সমস্যা। সেচ দিন।",
    ),
    ("mango", RiskType.HEAT_STRESS): (
        "Risk: Heat stress. High temperature causes fruit burn. Use shade nets.",
        "ঝুঁকি: {risk_bn}। উচ্চ তাপমাত্রা ফল পোড়াবে। ছায়া নেট ব্যবহার করুন।",
    ),
    ("mango", RiskType.HIGH_HUMIDITY): (
        "Risk: High humidity with disease. Apply fungicide.",
        "ঝুঁকি: {risk_bn} (রোগ)। ছত্রাকনাশক স্প্রে করুন।",
    ),
    ("brinjal", RiskType.DROUGHT): (
        "Risk: Drought. Water shortage will damage brinjal. Irrigate.",
        "ঝুঁকি: {risk_bn}। পানির অভাব {crop_bn} কে ক্ষতি করবে। সেচ দিন।",
    ),
    ("brinjal", RiskType.HIGH_HUMIDITY): (
        "Risk: High humidity with pest risk. Apply insecticide.",
        "ঝুঁকি: {risk_bn} (কীটপতঙ্গ)। কীটনাশক ব্যবহার করুন।",
    ),
    ("brinjal", RiskType.COLD_STRESS): (
        "Risk: Cold stress. Low temperature detected. Provide covering.",
        "ঝুঁকি: {risk_bn}। নিম্ন তাপমাত্রা। আচ্ছাদন প্রদান করুন।",
    ),
    ("mustard", RiskType.DROUGHT): (
        "Risk: Drought. Water shortage. Start irrigation.",
        "ঝুঁকি: {risk_bn}। পানির অভাব। সেচ ব্যবস্থা চালু করুন।",
    ),
    ("mustard", RiskType.HEAT_STRESS): (
        "Risk: Heat stress. High temperature affects flowering. Increase irrigation.",
        "ঝুঁকি: {risk_bn}। উচ্চ তাপমাত্রা ফুল ফোটাতে সমস্যা। সেচ বাড়ান।",
    ),
    ("mustard", RiskType.COLD_STRESS): (
        "Risk: Cold stress. Monitor low temperature.",
        "ঝুঁকি: {risk_bn}। শীতল তাপমাত্রা। পর্যবেক্ষণ করুন।",
    ),
    ("lentil", RiskType.DROUGHT): (
        "Risk: Drought. Water shortage. Irrigate.",
        "ঝুঁকি: {risk_bn}। পানির অভাব। সেচ দিন।",
    ),
    ("lentil", RiskType.HEAT_STRESS): (
        "Risk: Heat stress. High temperature reduces yield. Provide shade.",
        "ঝুঁকি: {risk_bn}। উচ্চ তাপমাত্রা ফলন কমাবে। ছায়া প্রদান করুন।",
    ),
    ("lentil", RiskType.FLOOD): (
        "Risk: Flood. Avoid waterlogging.",
        "ঝুঁকি: {risk_bn}। জলাবদ্ধতা এড়ান।",
    ),
    ("banana", RiskType.DROUGHT): (
        "Risk: Drought. Water shortage. Irrigate regularly.",
        "ঝুঁকি: {risk_bn}। পানির অভাব। নিয়মিত সেচ দিন।",
    ),
    ("banana", RiskType.FLOOD): (
        "Risk: Flood. Waterlogging risk. Check drainage system.",
        "ঝুঁকি: {risk_bn} (জলাবদ্ধতা)। নিকাশ ব্যবস্থা চেক করুন।",
    ),
    ("banana", RiskType.COLD_STRESS): (
        "Risk: Cold stress. Low temperature. Provide covering.",
        "ঝুঁকি: {risk_bn}। নিম্ন তাপমাত্রা। আচ্ছাদন করুন।",
    ),
    ("sugarcane", RiskType.DROUGHT): (
        "Risk: Drought. Water shortage reduces yield. Increase irrigation.",
        "ঝুঁকি: {risk_bn}। পানির অভাব ফলন কমাবে। সেচ বাড়ান।",
    ),
    ("sugarcane", RiskType.FLOOD): (
        "Risk: Flood. Heavy rain causes lodging. Ensure drainage.",
        "ঝুঁকি: {risk_bn}। ভারী বৃষ্টি লোডিং ঘটাবে। নিকাশ নিশ্চিত করুন।",
    ),
    ("onion", RiskType.COLD_STRESS): (
        "Risk: Cold stress. Low temperature. Provide covering.",
        "ঝুঁকি: {risk_bn}। নিম্ন তাপমাত্রা। আচ্ছাদন প্রদান করুন।",
    ),
    ("onion", RiskType.HIGH_HUMIDITY): (
        "Risk: High humidity with rot risk. Reduce humidity and apply fungicide.",
        "ঝুঁকি: {risk_bn} (পচন)। আর্দ্রতা কমানোর চেষ্টা করুন এবং ছত্রাকনাশক ব্যবহার করুন।",
    ),
    ("onion", RiskType.DROUGHT): (
        "Risk: Drought. Water shortage. Irrigate.",
        "ঝুঁকি: {risk_bn}। পানির অভাব। সেচ দিন।",
    ),
}

_GENERIC_MESSAGE = (
    "Risk: {risk}. Your {crop} crop faces a {risk} risk. Take appropriate measures."
)
_GENERIC_MESSAGE_BN = (
    "ঝুঁকি: {risk_bn}। আপনার {crop_bn} ফসলের জন্য {risk_bn} ঝুঁকি। উপযুক্ত ব্যবস্থা নিন।"
)


def generate_alert(
    crop_type: str,
    conditions: NextDayConditions,
    risk: RiskAssessment,
    location: str,
) -> CropAlert | None:
    """Build an alert for a critical assessment.

    Returns:
        The alert, or None unless the risk level is Critical
    """
    if not risk.is_critical:
        return None

    risk_bn = RISK_TYPE_NAMES_BN.get(risk.type, "ঝুঁকি") if risk.type else "ঝুঁকি"
    crop_bn = CROP_NAMES_BN.get(crop_type, crop_type)
    risk_name = risk.type.value if risk.type else "unknown"

    message, message_bn = ALERT_MESSAGES.get(
        (crop_type, risk.type), (_GENERIC_MESSAGE, _GENERIC_MESSAGE_BN)
    )
    values = {
        "risk": risk_name,
        "crop": crop_type,
        "risk_bn": risk_bn,
        "crop_bn": crop_bn,
    }

    return CropAlert(
        crop_type=crop_type,
        location=location,
        risk_level=risk.level,
        risk_type=risk.type,
        message=message.format(**values),
        message_bn=message_bn.format(**values),
        conditions=conditions,
    )


async def check_for_alerts(
    crop_type: str,
    division: str,
    district: str,
    provider: WeatherProvider,
) -> CropAlert | None:
    """Fetch tomorrow's conditions for a district and alert on critical risk.

    Raises:
        LocationNotFoundError: If the district is unknown
        ProviderError: If the conditions cannot be fetched
    """
    place = get_district(division, district)
    conditions = await provider.get_next_day_conditions(place.coordinates)
    risk = calculate_risk(crop_type, conditions)

    alert = generate_alert(crop_type, conditions, risk, place.display_name())
    if alert:
        logger.info(
            f"Critical {risk.type.value if risk.type else 'unknown'} risk "
            f"for {crop_type} in {place.display_name()}"
        )
    return alert
