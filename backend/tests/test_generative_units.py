"""
Generative Units Ledger Tests

Tests verify:
1. Creation derives the Fibonacci level from the allocation
2. Consumption at/above 78.6% is blocked with zero counter mutation
3. Warning gates fire once each, in ascending order
4. Protection lock persists after a block
5. Pathway progress rewards, golden ratio score and next milestone
"""
import pytest

from fibonrose.models.trust import AlertType, EntityType, PathwayType
from fibonrose.services.errors import EntryNotFound, InvalidAmount, InvalidMilestone
from fibonrose.services.fibonacci.constants import (
    RETRACEMENT_382,
    RETRACEMENT_500,
    RETRACEMENT_618,
    RETRACEMENT_786,
)


@pytest.fixture
def unit(unit_service):
    return unit_service.create("user-1", EntityType.USER, PathwayType.JOB, 100)


def thresholds(result):
    return [w.threshold for w in result.warnings]


# =============================================================================
# TEST: CREATION
# =============================================================================

class TestCreate:

    def test_initial_state(self, unit):
        assert unit.allocated_units == 100
        assert unit.consumed_units == 0
        assert unit.remaining_units == 100
        assert unit.fibonacci_level == 89
        assert unit.progression_index == 11
        assert unit.overspending_risk == 0
        assert unit.golden_ratio_score == 0
        assert unit.protection_locked is False

    def test_progress_map_for_pathway(self, unit_service):
        unit = unit_service.create("org-1", EntityType.ORGANIZATION, PathwayType.BUSINESS, 10)
        assert list(unit.pathway_progress) == [
            "idea_validated",
            "business_plan",
            "legal_setup",
            "funding_secured",
            "first_customer",
            "sustainable_revenue",
        ]
        assert set(unit.pathway_progress.values()) == {0.0}
        assert unit.next_milestone == "idea_validated"

    def test_level_beyond_table(self, unit_service):
        unit = unit_service.create("big", EntityType.PROJECT, PathwayType.DEVELOPER, 5000)
        assert unit.fibonacci_level == 4181
        assert unit.progression_index == 19

    def test_accepts_string_enums(self, unit_service):
        unit = unit_service.create("u", "USER", "CREATIVE", 21)
        assert unit.pathway == PathwayType.CREATIVE
        assert unit.fibonacci_level == 21

    @pytest.mark.parametrize("units", [0, -5])
    def test_rejects_non_positive_allocation(self, unit_service, units):
        with pytest.raises(InvalidAmount):
            unit_service.create("u", EntityType.USER, PathwayType.JOB, units)

    @pytest.mark.parametrize("units", [float("nan"), float("inf")])
    def test_rejects_non_finite_allocation(self, unit_service, store, units):
        with pytest.raises(InvalidAmount):
            unit_service.create("u", EntityType.USER, PathwayType.JOB, units)
        assert store.count_units() == 0

    def test_persisted(self, unit, unit_service, store):
        assert store.count_units() == 1
        assert unit_service.get(unit.id).to_dict() == unit.to_dict()


# =============================================================================
# TEST: CONSUMPTION BLOCKING
# =============================================================================

class TestConsumptionBlocking:

    def test_block_at_79_percent_leaves_counters_untouched(self, unit, unit_service):
        result = unit_service.consume(unit.id, 79, "bulk export")

        assert result.success is False
        assert result.blocked is True
        assert result.consumed == 0
        assert result.remaining == 100
        assert "78.6%" in result.block_reason

        stored = unit_service.get(unit.id)
        assert stored.consumed_units == 0
        assert stored.remaining_units == 100
        assert stored.overspending_risk == 0
        assert stored.fibonacci_level == 89

    def test_block_alerts_include_every_crossed_gate_in_order(self, unit, unit_service):
        result = unit_service.consume(unit.id, 79, "bulk export")

        assert thresholds(result) == [
            RETRACEMENT_382, RETRACEMENT_500, RETRACEMENT_618, RETRACEMENT_786,
        ]
        assert result.warnings[-1].type == AlertType.DANGER
        assert result.warnings[-1].haptic_pattern == [300, 100, 300, 100, 300]

    def test_subsequent_consumption_also_blocked(self, unit, unit_service):
        first = unit_service.consume(unit.id, 79, "bulk export")
        second = unit_service.consume(unit.id, 50, "retry smaller")

        assert second.blocked is True
        assert second.success is False
        assert second.block_reason == first.block_reason
        assert second.warnings == []
        assert unit_service.get(unit.id).consumed_units == 0

    def test_block_after_partial_consumption(self, unit, unit_service):
        unit_service.consume(unit.id, 70, "first batch")
        result = unit_service.consume(unit.id, 10, "second batch")

        assert result.blocked is True
        assert thresholds(result) == [RETRACEMENT_786]
        stored = unit_service.get(unit.id)
        assert stored.consumed_units == 70
        assert stored.remaining_units == 30

    def test_just_below_block_commits(self, unit, unit_service):
        result = unit_service.consume(unit.id, 78, "close to the edge")

        assert result.success is True
        assert result.blocked is False
        assert thresholds(result) == [RETRACEMENT_382, RETRACEMENT_500, RETRACEMENT_618]
        assert unit_service.get(unit.id).remaining_units == 22

    def test_unknown_unit(self, unit_service):
        with pytest.raises(EntryNotFound):
            unit_service.consume("missing", 1, "nothing")

    def test_negative_amount_rejected(self, unit, unit_service):
        with pytest.raises(InvalidAmount):
            unit_service.consume(unit.id, -1, "refund")
        assert unit_service.get(unit.id).consumed_units == 0

    @pytest.mark.parametrize("amount", [float("nan"), float("inf")])
    def test_non_finite_amount_rejected_and_block_still_holds(self, unit, unit_service, amount):
        with pytest.raises(InvalidAmount):
            unit_service.consume(unit.id, amount, "corrupt input")
        assert unit_service.get(unit.id).consumed_units == 0

        result = unit_service.consume(unit.id, 95, "bulk export")
        assert result.blocked is True
        assert unit_service.get(unit.id).consumed_units == 0


# =============================================================================
# TEST: STAGED ALERTS
# =============================================================================

class TestStagedAlerts:

    def test_each_gate_fires_once(self, unit, unit_service):
        first = unit_service.consume(unit.id, 40, "step 1")
        second = unit_service.consume(unit.id, 15, "step 2")
        third = unit_service.consume(unit.id, 15, "step 3")
        fourth = unit_service.consume(unit.id, 5, "step 4")

        assert thresholds(first) == [RETRACEMENT_382]
        assert first.warnings[0].type == AlertType.INFO
        assert thresholds(second) == [RETRACEMENT_500]
        assert second.warnings[0].type == AlertType.WARNING
        assert thresholds(third) == [RETRACEMENT_618]
        assert third.warnings[0].action == "Review and confirm to continue"
        assert fourth.warnings == []
        assert fourth.success is True

    def test_below_first_gate_is_silent(self, unit, unit_service):
        result = unit_service.consume(unit.id, 20, "small")
        assert result.success is True
        assert result.warnings == []

    def test_high_water_mark_tracks_committed_ratio(self, unit, unit_service):
        unit_service.consume(unit.id, 40, "step 1")
        unit_service.consume(unit.id, 15, "step 2")

        stored = unit_service.get(unit.id)
        assert stored.overspending_risk == pytest.approx(0.55)

    def test_blocked_call_does_not_advance_high_water_mark(self, unit, unit_service):
        unit_service.consume(unit.id, 30, "step 1")
        unit_service.consume(unit.id, 60, "too much")

        assert unit_service.get(unit.id).overspending_risk == pytest.approx(0.30)


# =============================================================================
# TEST: COMMITTED STATE
# =============================================================================

class TestCommittedState:

    def test_remaining_and_level_recomputed(self, unit, unit_service):
        result = unit_service.consume(unit.id, 40, "step 1")
        stored = unit_service.get(unit.id)

        assert result.consumed == 40
        assert result.remaining == 60
        assert stored.consumed_units == 40
        assert stored.remaining_units == stored.allocated_units - stored.consumed_units
        assert stored.fibonacci_level == 55
        assert stored.progression_index == 10

    def test_zero_amount_is_a_no_op(self, unit, unit_service):
        result = unit_service.consume(unit.id, 0, "probe")
        assert result.success is True
        assert result.warnings == []
        assert unit_service.get(unit.id).consumed_units == 0

    def test_cache_refreshed_on_commit(self, unit, unit_service):
        unit_service.consume(unit.id, 40, "step 1")
        snapshot = unit_service.cached_snapshot("user-1", PathwayType.JOB)

        assert snapshot is not None
        assert snapshot.consumed_units == 40

    def test_cache_reflects_protection_lock(self, unit, unit_service):
        unit_service.consume(unit.id, 90, "too much")
        snapshot = unit_service.cached_snapshot("user-1", PathwayType.JOB)

        assert snapshot.protection_locked is True
        assert snapshot.consumed_units == 0


# =============================================================================
# TEST: PATHWAY PROGRESS
# =============================================================================

class TestPathwayProgress:

    def test_completing_first_milestone(self, unit, unit_service):
        result = unit_service.update_pathway_progress(unit.id, "resume_ready", 1.0)

        assert result.success is True
        assert result.fibonacci_reward == 1
        assert result.golden_ratio_score == pytest.approx(1.618 / 6)
        assert result.next_milestone == "skills_verified"
        assert result.overall_progress == pytest.approx(1 / 6)
        assert result.visual_feedback.type == AlertType.SUCCESS
        assert "resume_ready" in result.visual_feedback.message

    def test_partial_progress_feedback(self, unit, unit_service):
        result = unit_service.update_pathway_progress(unit.id, "skills_verified", 0.5)

        assert result.visual_feedback.type == AlertType.INFO
        assert "50%" in result.visual_feedback.message
        assert result.golden_ratio_score == 0
        assert result.next_milestone == "resume_ready"

    def test_progress_clamped_to_one(self, unit, unit_service):
        unit_service.update_pathway_progress(unit.id, "resume_ready", 3.5)
        assert unit_service.get(unit.id).pathway_progress["resume_ready"] == 1.0

    def test_rewards_follow_sequence(self, unit, unit_service):
        milestones = list(unit.pathway_progress)
        rewards = [
            unit_service.update_pathway_progress(unit.id, name, 1).fibonacci_reward
            for name in milestones
        ]
        assert rewards == [1, 2, 3, 5, 8, 13]

    def test_all_complete(self, unit, unit_service):
        for name in list(unit.pathway_progress):
            result = unit_service.update_pathway_progress(unit.id, name, 1)

        assert result.golden_ratio_score == pytest.approx(1.618)
        assert result.next_milestone == "employment_secured"
        assert result.overall_progress == pytest.approx(1.0)

    def test_next_milestone_skips_completed_out_of_order(self, unit, unit_service):
        unit_service.update_pathway_progress(unit.id, "skills_verified", 1)
        result = unit_service.update_pathway_progress(unit.id, "resume_ready", 1)
        assert result.next_milestone == "applications_sent"

    def test_unknown_milestone_rejected(self, unit, unit_service):
        with pytest.raises(InvalidMilestone):
            unit_service.update_pathway_progress(unit.id, "idea_validated", 1)

        stored = unit_service.get(unit.id)
        assert "idea_validated" not in stored.pathway_progress
        assert len(stored.pathway_progress) == 6

    def test_unknown_unit(self, unit_service):
        with pytest.raises(EntryNotFound):
            unit_service.update_pathway_progress("missing", "resume_ready", 1)
