"""
Security Identity Services

Trust scoring, security levels, risk profiles and the badge/certification registry.
"""

from .security_identity import (
    SecurityIdentityService,
    calculate_security_score,
    security_level_for,
    trust_score_for,
)
from .risk_profile import calculate_risk_profile, weighted_overall_risk
from .badges import (
    BadgeRegistry,
    BADGE_CATALOG,
    CERTIFICATION_CATALOG,
    find_badge_template,
    find_certification_template,
)

__all__ = [
    'SecurityIdentityService',
    'calculate_security_score',
    'security_level_for',
    'trust_score_for',
    'calculate_risk_profile',
    'weighted_overall_risk',
    'BadgeRegistry',
    'BADGE_CATALOG',
    'CERTIFICATION_CATALOG',
    'find_badge_template',
    'find_certification_template',
]
