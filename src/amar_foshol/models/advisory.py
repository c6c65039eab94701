"""Advisory models for weather-driven farming recommendations."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AdvisoryType(str, Enum):
    """Severity class of an advisory, most severe first."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


class AdvisoryIcon(str, Enum):
    """Icon hint for presentation layers."""

    ALERT = "alert"
    WARNING = "warning"
    INFO = "info"
    CHECK = "check"
    THERMOMETER = "thermometer"
    DROPLETS = "droplets"
    CLOUD_RAIN = "cloud-rain"
    CLOUD = "cloud"
    WIND = "wind"
    SUN = "sun"
    LEAF = "leaf"


RISK_LEVEL_LABELS: dict[int, str] = {
    1: "Low risk",
    2: "Moderate risk",
    3: "High risk",
    4: "Very high risk",
    5: "Severe risk",
}

RISK_LEVEL_LABELS_BN: dict[int, str] = {
    1: "কম ঝুঁকি",
    2: "মধ্যম ঝুঁকি",
    3: "উচ্চ ঝুঁকি",
    4: "অত্যন্ত উচ্চ ঝুঁকি",
    5: "গুরুতর ঝুঁকি",
}


def risk_level_label(level: int, bangla: bool = False) -> str:
    """Get the human-readable description of a risk level."""
    if bangla:
        return RISK_LEVEL_LABELS_BN.get(level, "অজানা ঝুঁকি")
    return RISK_LEVEL_LABELS.get(level, "Unknown risk")


def _new_id(condition: str) -> str:
    return f"{condition}-{uuid.uuid4().hex[:12]}"


class Advisory(BaseModel):
    """A generated recommendation for a weather-driven farming risk or opportunity.

    Advisories are created fresh on each evaluation and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique per generation")
    type: AdvisoryType = Field(..., description="Severity class")
    title: str = Field(..., description="Short title")
    message: str = Field(..., description="What the forecast shows")
    action: str = Field(..., description="Recommended action")
    title_bn: str = Field(..., description="Short title (Bangla)")
    message_bn: str = Field(..., description="What the forecast shows (Bangla)")
    action_bn: str = Field(..., description="Recommended action (Bangla)")
    risk_level: int = Field(..., ge=1, le=5, description="1 = low, 5 = critical")
    affected_days: int = Field(
        ..., ge=0, description="Forecast days matching the triggering condition"
    )
    condition: str = Field(..., description="Tag of the rule that fired")
    icon: AdvisoryIcon = Field(default=AdvisoryIcon.INFO)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the advisory was generated",
    )

    @classmethod
    def create(cls, condition: str, **fields) -> Advisory:
        """Create an advisory with a fresh id for the given condition tag."""
        return cls(id=_new_id(condition), condition=condition, **fields)

    @property
    def risk_label(self) -> str:
        return risk_level_label(self.risk_level)

    def content(self) -> dict:
        """Advisory fields that do not vary between generations."""
        return self.model_dump(exclude={"id", "timestamp"})


class AdvisorySummary(BaseModel):
    """Counts of advisories per type, for dashboards."""

    total: int = 0
    by_type: dict[AdvisoryType, int] = Field(default_factory=dict)
    highest_risk_level: int | None = None
    conditions: list[str] = Field(default_factory=list)
