"""
Badge & Certification Registry

Static catalog of awardable credentials plus the award path. Awarding stamps an
id and timestamp, appends to the identity and runs the identity recompute.
Append-only: revocation is not offered here.
"""
import logging
from typing import List, Optional, Tuple, Union
from uuid import uuid4

from dateutil.relativedelta import relativedelta

from ...models.trust import (
    ActivityUpdate,
    BadgeLevel,
    BadgeTemplate,
    BadgeType,
    Certification,
    CertificationStatus,
    CertificationTemplate,
    SecurityBadge,
)
from .security_identity import SecurityIdentityService

logger = logging.getLogger(__name__)


# =============================================================================
# CATALOG
# =============================================================================

BADGE_CATALOG: Tuple[BadgeTemplate, ...] = (
    # Ecosystem badges
    BadgeTemplate(
        template_id="mbtq-verified",
        name="MBTQ Verified",
        type=BadgeType.OFFICIAL,
        issuer="MBTQ Universe",
        level=BadgeLevel.GOLD,
        description="Verified member of the MBTQ ecosystem",
        verification_url="https://mbtquniverse.com/verify",
        visual_indicator="🌟",
    ),
    BadgeTemplate(
        template_id="deafauth-compliant",
        name="DeafAUTH Compliant",
        type=BadgeType.OFFICIAL,
        issuer="DeafAUTH",
        level=BadgeLevel.PLATINUM,
        description="Full compliance with Deaf-first authentication standards",
        verification_url="https://deafauth.com/verify",
        visual_indicator="👐",
    ),
    BadgeTemplate(
        template_id="fibonrose-trust",
        name="FibonRose Trust",
        type=BadgeType.OFFICIAL,
        issuer="FibonRose",
        level=BadgeLevel.GOLD,
        description="Achieved Golden Ratio trust score",
        verification_url="https://github.com/fibonroseTrust",
        visual_indicator="🌹",
    ),
    BadgeTemplate(
        template_id="pinksync-enabled",
        name="PinkSync Enabled",
        type=BadgeType.OFFICIAL,
        issuer="PinkSync",
        level=BadgeLevel.SILVER,
        description="Offline/Online synchronization active",
        verification_url="https://pinksync.io/verify",
        visual_indicator="🔄",
    ),
    BadgeTemplate(
        template_id="vr4deaf-ready",
        name="VR4Deaf Ready",
        type=BadgeType.COMMUNITY,
        issuer="VR4Deaf.org",
        level=BadgeLevel.BRONZE,
        description="VR accessibility features enabled",
        verification_url="https://vr4deaf.org/verify",
        visual_indicator="🥽",
    ),
    # Security standard badges (renewed yearly)
    BadgeTemplate(
        template_id="wcag-aa",
        name="WCAG 2.1 AA",
        type=BadgeType.GLOBAL,
        issuer="W3C",
        level=BadgeLevel.GOLD,
        description="Web Content Accessibility Guidelines Level AA compliance",
        verification_url="https://www.w3.org/WAI/WCAG21/quickref/",
        visual_indicator="♿",
        valid_for_years=1,
    ),
    BadgeTemplate(
        template_id="ada-compliant",
        name="ADA Compliant",
        type=BadgeType.NATIONAL,
        issuer="ADA.gov",
        level=BadgeLevel.PLATINUM,
        description="Americans with Disabilities Act compliance",
        verification_url="https://www.ada.gov/",
        visual_indicator="🇺🇸",
        valid_for_years=1,
    ),
)

CERTIFICATION_CATALOG: Tuple[CertificationTemplate, ...] = (
    CertificationTemplate(
        template_id="wcag-21-aa",
        name="WCAG 2.1 AA Conformance",
        standard="WCAG",
        issuer="W3C",
        scope=("web", "mobile"),
        valid_for_years=1,
    ),
    CertificationTemplate(
        template_id="ada-title-iii",
        name="ADA Title III Accessibility",
        standard="ADA",
        issuer="ADA.gov",
        scope=("web", "physical"),
        valid_for_years=1,
    ),
    CertificationTemplate(
        template_id="soc2-type2",
        name="SOC 2 Type II",
        standard="SOC2",
        issuer="AICPA",
        scope=("security", "availability", "confidentiality"),
        valid_for_years=1,
    ),
    CertificationTemplate(
        template_id="iso-27001",
        name="ISO/IEC 27001",
        standard="ISO27001",
        issuer="ISO",
        scope=("information_security",),
        valid_for_years=3,
    ),
)


def list_available() -> List[Union[BadgeTemplate, CertificationTemplate]]:
    return list(BADGE_CATALOG) + list(CERTIFICATION_CATALOG)


def find_badge_template(template_id: str) -> Optional[BadgeTemplate]:
    return next((t for t in BADGE_CATALOG if t.template_id == template_id), None)


def find_certification_template(template_id: str) -> Optional[CertificationTemplate]:
    return next((t for t in CERTIFICATION_CATALOG if t.template_id == template_id), None)


# =============================================================================
# REGISTRY
# =============================================================================

class BadgeRegistry:
    """
    Awards catalog credentials to identities.

    Usage:
        registry = BadgeRegistry(identity_service)
        badge = registry.award_badge(identity.id, find_badge_template("wcag-aa"))
    """

    def __init__(self, identities: SecurityIdentityService):
        self.identities = identities

    def list_available(self) -> List[Union[BadgeTemplate, CertificationTemplate]]:
        return list_available()

    def award_badge(self, identity_id: str, template: BadgeTemplate) -> SecurityBadge:
        """Raises EntryNotFound for an unknown identity."""
        earned_at = self.identities.clock()
        badge = SecurityBadge(
            id=str(uuid4()),
            name=template.name,
            type=template.type,
            issuer=template.issuer,
            level=template.level,
            description=template.description,
            earned_at=earned_at,
            expires_at=_expiry(earned_at, template.valid_for_years),
            verification_url=template.verification_url,
            visual_indicator=template.visual_indicator,
        )
        self.identities.record_activity(identity_id, ActivityUpdate(badge_earned=badge))
        logger.info(f"Awarded badge '{badge.name}' to identity {identity_id}")
        return badge

    def award_certification(self, identity_id: str, template: CertificationTemplate) -> Certification:
        issued_at = self.identities.clock()
        certification = Certification(
            id=str(uuid4()),
            name=template.name,
            standard=template.standard,
            issuer=template.issuer,
            issued_at=issued_at,
            expires_at=_expiry(issued_at, template.valid_for_years),
            status=CertificationStatus.ACTIVE,
            scope=tuple(template.scope),
        )
        self.identities.record_activity(identity_id, ActivityUpdate(certification_added=certification))
        logger.info(f"Issued certification '{certification.name}' to identity {identity_id}")
        return certification


def _expiry(start, years: Optional[int]):
    if not years:
        return None
    return start + relativedelta(years=years)
