"""
Risk Profile

Composite risk from four component risks, weighted by retracement fractions:
identity 38.2%, financial 23.6%, operational 23.6%, accessibility 14.6%.

Financial risk is a neutral constant: no transaction signal reaches this engine.
"""
import logging
from typing import Dict

from ...models.trust import RiskProfile, SecurityIdentity
from ..alerts import elevated_risk_alert, strip_haptics
from ..fibonacci.constants import (
    RISK_WEIGHTS,
    NEUTRAL_FINANCIAL_RISK,
    NON_COMPLIANT_ACCESSIBILITY_RISK,
    VERIFICATIONS_FOR_ZERO_IDENTITY_RISK,
    RECOMMENDED_VERIFICATIONS,
    CRITICAL_RISK_THRESHOLD,
    RESISTANCE_TEST_RATIO,
    TRUST_SCORE_CEILING,
)

logger = logging.getLogger(__name__)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def weighted_overall_risk(components: Dict[str, float]) -> float:
    """Weighted sum of component risks, each clamped to [0, 1]."""
    return _clamp(sum(RISK_WEIGHTS[name] * _clamp(components[name]) for name in RISK_WEIGHTS))


def calculate_risk_profile(identity: SecurityIdentity) -> RiskProfile:
    components = {
        "identity": _clamp(1 - identity.verification_count / VERIFICATIONS_FOR_ZERO_IDENTITY_RISK),
        "financial": NEUTRAL_FINANCIAL_RISK,
        "operational": _clamp(1 - identity.interaction_ratio),
        "accessibility": 0.0 if identity.deaf_first_compliance else NON_COMPLIANT_ACCESSIBILITY_RISK,
    }
    overall = weighted_overall_risk(components)

    recommendations = []
    visual_alerts = []

    if identity.verification_count < RECOMMENDED_VERIFICATIONS:
        recommendations.append("Add more verifications to strengthen identity")
    if not identity.deaf_first_compliance:
        recommendations.append("Enable Deaf-first features for full accessibility")
    if len(identity.badges) == 0:
        recommendations.append("Earn security badges to demonstrate compliance")
    if overall > CRITICAL_RISK_THRESHOLD:
        recommendations.append("Critical: Risk level above Golden Ratio threshold")
        visual_alerts.append(elevated_risk_alert())
        logger.warning(f"Identity {identity.id} risk {overall:.3f} above golden ratio threshold")

    return RiskProfile(
        overall_risk=overall,
        fibonacci_retracement=1 - identity.fibonacci_score / TRUST_SCORE_CEILING,
        support_breached=identity.fibonacci_score < identity.support_level,
        resistance_tested=identity.fibonacci_score >= identity.resistance_level * RESISTANCE_TEST_RATIO,
        identity_risk=components["identity"],
        financial_risk=components["financial"],
        operational_risk=components["operational"],
        accessibility_risk=components["accessibility"],
        recommendations=recommendations,
        visual_alerts=strip_haptics(visual_alerts, identity.haptic_feedback_enabled),
    )
