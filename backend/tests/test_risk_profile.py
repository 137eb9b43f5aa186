"""
Risk Profile Tests

Tests verify:
1. Weights are normalized and overall risk stays within [0, 1]
2. Component risks follow the identity's counters
3. Critical alert above the golden ratio threshold
4. Support breach / resistance test flags
"""
import itertools

import pytest

from fibonrose.models.trust import (
    AlertType,
    EntityType,
    SecurityIdentity,
)
from fibonrose.services.fibonacci.constants import RISK_WEIGHTS
from fibonrose.services.identity import calculate_risk_profile, weighted_overall_risk


def make_identity(**overrides):
    fields = dict(id="id-1", entity_id="user-1", entity_type=EntityType.USER)
    fields.update(overrides)
    return SecurityIdentity(**fields)


class TestWeights:

    def test_weights_sum_to_one(self):
        assert sum(RISK_WEIGHTS.values()) == pytest.approx(1.0)

    def test_overall_within_bounds(self):
        values = [0.0, 0.25, 0.5, 1.0]
        for combo in itertools.product(values, repeat=4):
            components = dict(zip(RISK_WEIGHTS, combo))
            assert 0.0 <= weighted_overall_risk(components) <= 1.0

    def test_extremes(self):
        assert weighted_overall_risk(dict.fromkeys(RISK_WEIGHTS, 0.0)) == 0.0
        assert weighted_overall_risk(dict.fromkeys(RISK_WEIGHTS, 1.0)) == pytest.approx(1.0)

    def test_out_of_range_components_clamped(self):
        assert weighted_overall_risk(dict.fromkeys(RISK_WEIGHTS, 3.0)) == pytest.approx(1.0)


class TestComponents:

    def test_new_identity(self):
        profile = calculate_risk_profile(make_identity())

        assert profile.identity_risk == 1.0
        assert profile.financial_risk == 0.5
        assert profile.operational_risk == 1.0
        assert profile.accessibility_risk == 0.0
        assert profile.overall_risk == pytest.approx(0.382 + 0.118 + 0.236)

    def test_verifications_lower_identity_risk(self):
        assert calculate_risk_profile(make_identity(verification_count=2)).identity_risk == pytest.approx(0.6)
        assert calculate_risk_profile(make_identity(verification_count=9)).identity_risk == 0.0

    def test_interaction_ratio_drives_operational_risk(self):
        identity = make_identity(positive_interactions=3, total_interactions=4)
        assert calculate_risk_profile(identity).operational_risk == pytest.approx(0.25)

    def test_retracement(self):
        profile = calculate_risk_profile(make_identity(fibonacci_score=10.5))
        assert profile.fibonacci_retracement == pytest.approx(0.5)


class TestAlertsAndRecommendations:

    def test_critical_alert_above_golden_ratio(self):
        profile = calculate_risk_profile(make_identity())

        assert profile.overall_risk > 0.618
        assert len(profile.visual_alerts) == 1
        assert profile.visual_alerts[0].type == AlertType.WARNING
        assert "Critical: Risk level above Golden Ratio threshold" in profile.recommendations

    def test_low_risk_identity_is_quiet(self):
        identity = make_identity(
            verification_count=5,
            positive_interactions=10,
            total_interactions=10,
        )
        profile = calculate_risk_profile(identity)

        assert profile.overall_risk == pytest.approx(0.118)
        assert profile.visual_alerts == []
        assert profile.recommendations == ["Earn security badges to demonstrate compliance"]

    def test_recommendations_for_gaps(self):
        profile = calculate_risk_profile(make_identity(deaf_first_compliance=False))
        assert profile.recommendations[:3] == [
            "Add more verifications to strengthen identity",
            "Enable Deaf-first features for full accessibility",
            "Earn security badges to demonstrate compliance",
        ]


class TestSupportResistance:

    def test_support_breached(self):
        profile = calculate_risk_profile(make_identity(fibonacci_score=4, support_level=5))
        assert profile.support_breached is True

    def test_resistance_tested_at_ninety_percent(self):
        identity = make_identity(fibonacci_score=19, resistance_level=21)
        assert calculate_risk_profile(identity).resistance_tested is True

        identity = make_identity(fibonacci_score=18, resistance_level=21)
        assert calculate_risk_profile(identity).resistance_tested is False
