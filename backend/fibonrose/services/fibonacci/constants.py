"""
Fibonacci Policy Constants

Every ratio, threshold and weight used by the ledger and the identity engine
lives here. Changing policy means changing this module only.
"""
from typing import Dict, List, Tuple


# =============================================================================
# SEQUENCE
# =============================================================================

FIBONACCI_SEQUENCE: Tuple[int, ...] = (
    0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89, 144, 233, 377, 610, 987,
)

GOLDEN_RATIO = 1.618


# =============================================================================
# RATIOS
# =============================================================================

RETRACEMENT_236 = 0.236
RETRACEMENT_382 = 0.382
RETRACEMENT_500 = 0.500
RETRACEMENT_618 = 0.618
RETRACEMENT_786 = 0.786

EXTENSION_100 = 1.000
EXTENSION_1618 = 1.618
EXTENSION_2618 = 2.618
EXTENSION_4236 = 4.236

# (label, fraction) in ascending order
RETRACEMENT_FRACTIONS: List[Tuple[str, float]] = [
    ("level_0", 0.0),
    ("level_236", RETRACEMENT_236),
    ("level_382", RETRACEMENT_382),
    ("level_500", RETRACEMENT_500),
    ("level_618", RETRACEMENT_618),
    ("level_786", RETRACEMENT_786),
    ("level_100", 1.0),
]

EXTENSION_FRACTIONS: List[Tuple[str, float]] = [
    ("extension_100", EXTENSION_100),
    ("extension_1618", EXTENSION_1618),
    ("extension_2618", EXTENSION_2618),
    ("extension_4236", EXTENSION_4236),
]

RETRACEMENT_INTERPRETATION: Dict[str, str] = {
    "23.6%": "Early support/resistance",
    "38.2%": "Moderate support/resistance",
    "50.0%": "Psychological midpoint",
    "61.8%": "Golden Ratio - Key decision point",
    "78.6%": "Deep retracement - Critical level",
}

EXTENSION_INTERPRETATION: Dict[str, str] = {
    "100%": "Current achievement",
    "161.8%": "Golden Ratio target - Optimal growth",
    "261.8%": "Extended potential",
    "423.6%": "Maximum projection",
}


# =============================================================================
# CONSUMPTION PROTECTION
# =============================================================================

# Ascending. The last gate blocks; the others only warn.
CONSUMPTION_WARNING_THRESHOLDS: List[float] = [
    RETRACEMENT_382,   # informational
    RETRACEMENT_500,   # caution
    RETRACEMENT_618,   # critical decision point
]
CONSUMPTION_BLOCK_THRESHOLD = RETRACEMENT_786


# =============================================================================
# SECURITY SCORING
# =============================================================================

# (minimum score, level name), highest first
SECURITY_LEVEL_THRESHOLDS: List[Tuple[float, str]] = [
    (21, "LEGENDARY"),
    (13, "RADIANT"),
    (8, "GOLDEN"),
    (5, "THRIVING"),
    (3, "BLOOMING"),
    (2, "GROWING"),
    (1, "SPROUT"),
]

MAX_WEIGHTED_VERIFICATIONS = 8
INTERACTION_MULTIPLIER = 5
ACCESSIBILITY_WEIGHT = 8        # Fib(6)
BADGE_POINTS = 2
BADGE_CAP = 13                  # Fib(7)
ACCOUNT_AGE_FACTOR = 0.5
ACCOUNT_AGE_CAP = 5             # Fib(5)
TRUST_SCORE_CEILING = 21        # Fib(8), maps to trust 100

INITIAL_FIBONACCI_SCORE = 1.0
INITIAL_SUPPORT_LEVEL = 0
INITIAL_RESISTANCE_LEVEL = 2
INITIAL_ACCESSIBILITY_SCORE = 100.0


# =============================================================================
# RISK PROFILE
# =============================================================================

RISK_WEIGHTS: Dict[str, float] = {
    "identity": 0.382,
    "financial": 0.236,
    "operational": 0.236,
    "accessibility": 0.146,
}

NEUTRAL_FINANCIAL_RISK = 0.5
NON_COMPLIANT_ACCESSIBILITY_RISK = 0.5
VERIFICATIONS_FOR_ZERO_IDENTITY_RISK = 5
RECOMMENDED_VERIFICATIONS = 3
CRITICAL_RISK_THRESHOLD = RETRACEMENT_618
RESISTANCE_TEST_RATIO = 0.9
