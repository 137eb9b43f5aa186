"""FibonRose - Data Models"""
from .trust import (
    # Enums
    PathwayType, EntityType, SecurityLevel, AlertType, InteractionType,
    BadgeType, BadgeLevel, CertificationStatus,
    # Alerts
    VisualAlert,
    # Resource ledger
    GenerativeUnit, ConsumptionResult, ProgressResult,
    # Badges & certifications
    BadgeTemplate, CertificationTemplate, SecurityBadge, Certification,
    # Security identity
    RiskProfile, SecurityIdentity, ActivityUpdate,
)

__all__ = [
    "PathwayType", "EntityType", "SecurityLevel", "AlertType", "InteractionType",
    "BadgeType", "BadgeLevel", "CertificationStatus",
    "VisualAlert",
    "GenerativeUnit", "ConsumptionResult", "ProgressResult",
    "BadgeTemplate", "CertificationTemplate", "SecurityBadge", "Certification",
    "RiskProfile", "SecurityIdentity", "ActivityUpdate",
]
