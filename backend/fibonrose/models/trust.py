"""
FibonRose - Trust & Resource Models

Value objects and records shared by the ledger and the identity engine.
Records that a persistence collaborator stores (GenerativeUnit, SecurityIdentity)
round-trip through to_dict()/from_dict() so the exact prior record can be handed back.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Any, Tuple


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


# =============================================================================
# ENUMS
# =============================================================================

class PathwayType(str, Enum):
    JOB = "JOB"
    BUSINESS = "BUSINESS"
    DEVELOPER = "DEVELOPER"
    CREATIVE = "CREATIVE"


class EntityType(str, Enum):
    USER = "USER"
    ORGANIZATION = "ORGANIZATION"
    PROJECT = "PROJECT"
    DEVICE = "DEVICE"
    API_CLIENT = "API_CLIENT"
    WORKFLOW = "WORKFLOW"
    RESOURCE = "RESOURCE"


class SecurityLevel(str, Enum):
    """Ordered lowest to highest. Always a pure function of the current score."""
    SEED = "SEED"
    SPROUT = "SPROUT"
    GROWING = "GROWING"
    BLOOMING = "BLOOMING"
    THRIVING = "THRIVING"
    GOLDEN = "GOLDEN"
    RADIANT = "RADIANT"
    LEGENDARY = "LEGENDARY"

    @property
    def rank(self) -> int:
        return list(SecurityLevel).index(self)


class AlertType(str, Enum):
    SUCCESS = "SUCCESS"
    INFO = "INFO"
    WARNING = "WARNING"
    DANGER = "DANGER"


class InteractionType(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class BadgeType(str, Enum):
    NATIONAL = "NATIONAL"
    GLOBAL = "GLOBAL"
    OFFICIAL = "OFFICIAL"
    COMMUNITY = "COMMUNITY"


class BadgeLevel(str, Enum):
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    DIAMOND = "DIAMOND"


class CertificationStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    EXPIRED = "EXPIRED"
    REVOKED = "REVOKED"


# =============================================================================
# ALERTS
# =============================================================================

@dataclass
class VisualAlert:
    """
    Visual/haptic alert returned to the caller. Never stored by the engine.

    threshold is set for consumption-gate alerts so callers can order them.
    """
    id: str
    type: AlertType
    icon: str
    color: str
    message: str
    action: Optional[str] = None
    haptic_pattern: Optional[List[int]] = None
    threshold: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "icon": self.icon,
            "color": self.color,
            "message": self.message,
            "action": self.action,
            "haptic_pattern": self.haptic_pattern,
            "threshold": self.threshold,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VisualAlert":
        return cls(
            id=data["id"],
            type=AlertType(data["type"]),
            icon=data["icon"],
            color=data["color"],
            message=data["message"],
            action=data.get("action"),
            haptic_pattern=data.get("haptic_pattern"),
            threshold=data.get("threshold"),
        )


# =============================================================================
# RESOURCE LEDGER
# =============================================================================

@dataclass
class GenerativeUnit:
    """
    Resource ledger entry for one (entity_id, entity_type, pathway).

    remaining_units == allocated_units - consumed_units after every mutation.
    overspending_risk is a high-water mark of the committed consumption ratio.
    """
    id: str
    entity_id: str
    entity_type: EntityType
    pathway: PathwayType

    allocated_units: float
    consumed_units: float = 0
    remaining_units: float = 0

    fibonacci_level: int = 0
    progression_index: int = 0
    golden_ratio_score: float = 0.0

    overspending_risk: float = 0.0
    protection_locked: bool = False
    block_reason: Optional[str] = None

    pathway_progress: Dict[str, float] = field(default_factory=dict)
    next_milestone: str = ""

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def overall_progress(self) -> float:
        if not self.pathway_progress:
            return 0.0
        return sum(self.pathway_progress.values()) / len(self.pathway_progress)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "entity_id": self.entity_id,
            "entity_type": self.entity_type.value,
            "pathway": self.pathway.value,
            "allocated_units": self.allocated_units,
            "consumed_units": self.consumed_units,
            "remaining_units": self.remaining_units,
            "fibonacci_level": self.fibonacci_level,
            "progression_index": self.progression_index,
            "golden_ratio_score": self.golden_ratio_score,
            "overspending_risk": self.overspending_risk,
            "protection_locked": self.protection_locked,
            "block_reason": self.block_reason,
            "pathway_progress": dict(self.pathway_progress),
            "next_milestone": self.next_milestone,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerativeUnit":
        return cls(
            id=data["id"],
            entity_id=data["entity_id"],
            entity_type=EntityType(data["entity_type"]),
            pathway=PathwayType(data["pathway"]),
            allocated_units=data["allocated_units"],
            consumed_units=data["consumed_units"],
            remaining_units=data["remaining_units"],
            fibonacci_level=data["fibonacci_level"],
            progression_index=data["progression_index"],
            golden_ratio_score=data["golden_ratio_score"],
            overspending_risk=data["overspending_risk"],
            protection_locked=data.get("protection_locked", False),
            block_reason=data.get("block_reason"),
            pathway_progress=dict(data["pathway_progress"]),
            next_milestone=data["next_milestone"],
            created_at=_parse(data["created_at"]),
            updated_at=_parse(data["updated_at"]),
        )


@dataclass
class ConsumptionResult:
    """Outcome of consume(). blocked=True is the allocation-exceeded outcome, not an error."""
    success: bool
    consumed: float
    remaining: float
    warnings: List[VisualAlert] = field(default_factory=list)
    blocked: bool = False
    block_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "consumed": self.consumed,
            "remaining": self.remaining,
            "warnings": [w.to_dict() for w in self.warnings],
            "blocked": self.blocked,
            "block_reason": self.block_reason,
        }


@dataclass
class ProgressResult:
    success: bool
    fibonacci_reward: int
    golden_ratio_score: float
    overall_progress: float
    next_milestone: str
    visual_feedback: VisualAlert

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "fibonacci_reward": self.fibonacci_reward,
            "golden_ratio_score": self.golden_ratio_score,
            "overall_progress": self.overall_progress,
            "next_milestone": self.next_milestone,
            "visual_feedback": self.visual_feedback.to_dict(),
        }


# =============================================================================
# BADGES & CERTIFICATIONS
# =============================================================================

@dataclass(frozen=True)
class BadgeTemplate:
    """Catalog entry. Awarding stamps an id and timestamp onto a SecurityBadge."""
    template_id: str
    name: str
    type: BadgeType
    issuer: str
    level: BadgeLevel
    description: str
    verification_url: str
    visual_indicator: str
    valid_for_years: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "template_id": self.template_id,
            "name": self.name,
            "type": self.type.value,
            "issuer": self.issuer,
            "level": self.level.value,
            "description": self.description,
            "verification_url": self.verification_url,
            "visual_indicator": self.visual_indicator,
            "valid_for_years": self.valid_for_years,
        }


@dataclass(frozen=True)
class CertificationTemplate:
    template_id: str
    name: str
    standard: str
    issuer: str
    scope: Tuple[str, ...] = ()
    valid_for_years: Optional[int] = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "template_id": self.template_id,
            "name": self.name,
            "standard": self.standard,
            "issuer": self.issuer,
            "scope": list(self.scope),
            "valid_for_years": self.valid_for_years,
        }


@dataclass(frozen=True)
class SecurityBadge:
    id: str
    name: str
    type: BadgeType
    issuer: str
    level: BadgeLevel
    description: str
    earned_at: datetime
    expires_at: Optional[datetime] = None
    verification_url: str = ""
    visual_indicator: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "issuer": self.issuer,
            "level": self.level.value,
            "description": self.description,
            "earned_at": _iso(self.earned_at),
            "expires_at": _iso(self.expires_at),
            "verification_url": self.verification_url,
            "visual_indicator": self.visual_indicator,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SecurityBadge":
        return cls(
            id=data["id"],
            name=data["name"],
            type=BadgeType(data["type"]),
            issuer=data["issuer"],
            level=BadgeLevel(data["level"]),
            description=data["description"],
            earned_at=_parse(data["earned_at"]),
            expires_at=_parse(data.get("expires_at")),
            verification_url=data.get("verification_url", ""),
            visual_indicator=data.get("visual_indicator", ""),
        )


@dataclass(frozen=True)
class Certification:
    id: str
    name: str
    standard: str  # SOC2, ISO27001, WCAG, ADA
    issuer: str
    issued_at: datetime
    expires_at: Optional[datetime] = None
    status: CertificationStatus = CertificationStatus.ACTIVE
    scope: Tuple[str, ...] = ()
    audit_report: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "standard": self.standard,
            "issuer": self.issuer,
            "issued_at": _iso(self.issued_at),
            "expires_at": _iso(self.expires_at),
            "status": self.status.value,
            "scope": list(self.scope),
            "audit_report": self.audit_report,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Certification":
        return cls(
            id=data["id"],
            name=data["name"],
            standard=data["standard"],
            issuer=data["issuer"],
            issued_at=_parse(data["issued_at"]),
            expires_at=_parse(data.get("expires_at")),
            status=CertificationStatus(data.get("status", CertificationStatus.ACTIVE.value)),
            scope=tuple(data.get("scope", ())),
            audit_report=data.get("audit_report"),
        )


# =============================================================================
# SECURITY IDENTITY
# =============================================================================

@dataclass
class RiskProfile:
    """Recomputed snapshot. Always derivable from the owning identity."""
    overall_risk: float
    fibonacci_retracement: float
    support_breached: bool
    resistance_tested: bool
    identity_risk: float
    financial_risk: float
    operational_risk: float
    accessibility_risk: float
    recommendations: List[str] = field(default_factory=list)
    visual_alerts: List[VisualAlert] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_risk": self.overall_risk,
            "fibonacci_retracement": self.fibonacci_retracement,
            "support_breached": self.support_breached,
            "resistance_tested": self.resistance_tested,
            "identity_risk": self.identity_risk,
            "financial_risk": self.financial_risk,
            "operational_risk": self.operational_risk,
            "accessibility_risk": self.accessibility_risk,
            "recommendations": list(self.recommendations),
            "visual_alerts": [a.to_dict() for a in self.visual_alerts],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RiskProfile":
        return cls(
            overall_risk=data["overall_risk"],
            fibonacci_retracement=data["fibonacci_retracement"],
            support_breached=data["support_breached"],
            resistance_tested=data["resistance_tested"],
            identity_risk=data["identity_risk"],
            financial_risk=data["financial_risk"],
            operational_risk=data["operational_risk"],
            accessibility_risk=data["accessibility_risk"],
            recommendations=list(data.get("recommendations", [])),
            visual_alerts=[VisualAlert.from_dict(a) for a in data.get("visual_alerts", [])],
        )


@dataclass
class SecurityIdentity:
    """Trust profile for one (entity_id, entity_type). Badges and certifications are append-only."""
    id: str
    entity_id: str
    entity_type: EntityType

    security_level: SecurityLevel = SecurityLevel.SEED
    fibonacci_score: float = 1.0
    support_level: int = 0
    resistance_level: int = 2
    trust_score: float = 0.0

    verification_count: int = 0
    positive_interactions: int = 0
    total_interactions: int = 0

    accessibility_score: float = 100.0
    deaf_first_compliance: bool = True
    visual_feedback_enabled: bool = True
    haptic_feedback_enabled: bool = True

    badges: List[SecurityBadge] = field(default_factory=list)
    certifications: List[Certification] = field(default_factory=list)
    risk_profile: Optional[RiskProfile] = None

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def interaction_ratio(self) -> float:
        if self.total_interactions == 0:
            return 0.0
        return self.positive_interactions / self.total_interactions

    def account_age_days(self, now: datetime) -> int:
        return max(0, (now - self.created_at).days)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "entity_id": self.entity_id,
            "entity_type": self.entity_type.value,
            "security_level": self.security_level.value,
            "fibonacci_score": self.fibonacci_score,
            "support_level": self.support_level,
            "resistance_level": self.resistance_level,
            "trust_score": self.trust_score,
            "verification_count": self.verification_count,
            "positive_interactions": self.positive_interactions,
            "total_interactions": self.total_interactions,
            "accessibility_score": self.accessibility_score,
            "deaf_first_compliance": self.deaf_first_compliance,
            "visual_feedback_enabled": self.visual_feedback_enabled,
            "haptic_feedback_enabled": self.haptic_feedback_enabled,
            "badges": [b.to_dict() for b in self.badges],
            "certifications": [c.to_dict() for c in self.certifications],
            "risk_profile": self.risk_profile.to_dict() if self.risk_profile else None,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SecurityIdentity":
        profile = data.get("risk_profile")
        return cls(
            id=data["id"],
            entity_id=data["entity_id"],
            entity_type=EntityType(data["entity_type"]),
            security_level=SecurityLevel(data["security_level"]),
            fibonacci_score=data["fibonacci_score"],
            support_level=data["support_level"],
            resistance_level=data["resistance_level"],
            trust_score=data["trust_score"],
            verification_count=data["verification_count"],
            positive_interactions=data["positive_interactions"],
            total_interactions=data["total_interactions"],
            accessibility_score=data["accessibility_score"],
            deaf_first_compliance=data["deaf_first_compliance"],
            visual_feedback_enabled=data.get("visual_feedback_enabled", True),
            haptic_feedback_enabled=data.get("haptic_feedback_enabled", True),
            badges=[SecurityBadge.from_dict(b) for b in data.get("badges", [])],
            certifications=[Certification.from_dict(c) for c in data.get("certifications", [])],
            risk_profile=RiskProfile.from_dict(profile) if profile else None,
            created_at=_parse(data["created_at"]),
            updated_at=_parse(data["updated_at"]),
        )


@dataclass
class ActivityUpdate:
    """At most one of each signal per recordActivity call."""
    verification_added: bool = False
    interaction_type: Optional[InteractionType] = None
    badge_earned: Optional[SecurityBadge] = None
    certification_added: Optional[Certification] = None
