"""Crop risk assessment and alerts."""

from amar_foshol.risk.crop_risk import (
    CROP_NAMES_BN,
    CropAlert,
    RiskAssessment,
    RiskLevel,
    RiskType,
    calculate_risk,
    check_for_alerts,
    generate_alert,
)

__all__ = [
    "CROP_NAMES_BN",
    "CropAlert",
    "RiskAssessment",
    "RiskLevel",
    "RiskType",
    "calculate_risk",
    "check_for_alerts",
    "generate_alert",
]
