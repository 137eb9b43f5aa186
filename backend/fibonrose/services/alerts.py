"""
Visual Alert Factory

Deaf-first feedback: every alert carries an icon, a colour and a haptic pattern.
Alerts are returned to the caller and never stored.
"""
from typing import List
from uuid import uuid4

from ..models.trust import AlertType, VisualAlert
from .fibonacci.constants import (
    RETRACEMENT_382,
    RETRACEMENT_500,
    RETRACEMENT_618,
    RETRACEMENT_786,
)


# =============================================================================
# CONSUMPTION GATES
# =============================================================================

GATE_ALERTS = {
    RETRACEMENT_382: {
        "type": AlertType.INFO,
        "icon": "📊",
        "color": "#3B82F6",
        "message": "38.2% of resources consumed. Consider reviewing usage.",
        "action": None,
        "haptic_pattern": [100],
    },
    RETRACEMENT_500: {
        "type": AlertType.WARNING,
        "icon": "⚠️",
        "color": "#F59E0B",
        "message": "50% of resources consumed. Entering caution zone.",
        "action": None,
        "haptic_pattern": [100, 50, 100],
    },
    RETRACEMENT_618: {
        "type": AlertType.WARNING,
        "icon": "🔶",
        "color": "#EF4444",
        "message": "61.8% (Golden Ratio) threshold reached. Critical decision point.",
        "action": "Review and confirm to continue",
        "haptic_pattern": [200, 100, 200],
    },
    RETRACEMENT_786: {
        "type": AlertType.DANGER,
        "icon": "🛑",
        "color": "#DC2626",
        "message": "Overspending protection activated. 78.6% threshold reached.",
        "action": "Request additional units or optimize usage",
        "haptic_pattern": [300, 100, 300, 100, 300],
    },
}

BLOCK_REASON = GATE_ALERTS[RETRACEMENT_786]["message"]


def _alert_id() -> str:
    return uuid4().hex[:16]


def gate_alert(threshold: float) -> VisualAlert:
    config = GATE_ALERTS[threshold]
    return VisualAlert(
        id=_alert_id(),
        type=config["type"],
        icon=config["icon"],
        color=config["color"],
        message=config["message"],
        action=config["action"],
        haptic_pattern=list(config["haptic_pattern"]),
        threshold=threshold,
    )


# =============================================================================
# PATHWAY FEEDBACK
# =============================================================================

def milestone_feedback(milestone: str, progress: float, reward: int) -> VisualAlert:
    if progress >= 1:
        return VisualAlert(
            id=_alert_id(),
            type=AlertType.SUCCESS,
            icon="🎉",
            color="#10B981",
            message=f'Milestone "{milestone}" completed! +{reward} Fibonacci points',
            haptic_pattern=[50, 50, 50, 200],
        )
    return VisualAlert(
        id=_alert_id(),
        type=AlertType.INFO,
        icon="📈",
        color="#3B82F6",
        message=f'Progress on "{milestone}": {round(progress * 100)}%',
        haptic_pattern=[50],
    )


# =============================================================================
# RISK
# =============================================================================

def elevated_risk_alert() -> VisualAlert:
    return VisualAlert(
        id=_alert_id(),
        type=AlertType.WARNING,
        icon="⚠️",
        color="#F59E0B",
        message="Risk level elevated. Consider additional security measures.",
        haptic_pattern=[200, 100, 200],
    )


def strip_haptics(alerts: List[VisualAlert], enabled: bool) -> List[VisualAlert]:
    """Drop haptic patterns when the identity has haptic feedback turned off."""
    if enabled:
        return alerts
    for alert in alerts:
        alert.haptic_pattern = None
    return alerts
