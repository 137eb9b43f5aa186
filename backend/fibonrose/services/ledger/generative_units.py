"""
Generative Units Ledger

Allocates a bounded resource budget per entity + pathway and prevents silent
overspending through staged protection gates at Fibonacci retracement levels.

Gates (fraction of allocation consumed):
- 38.2%  informational
- 50.0%  caution
- 61.8%  critical decision point (golden ratio)
- 78.6%  hard block

Invariants:
1. remaining_units == allocated_units - consumed_units after every mutation.
2. Consumption that would reach 78.6% is never committed.
3. A warning gate fires at most once per entry (overspending_risk is a high-water mark).
4. Once the block gate fires the entry stays protection-locked.
5. Every call either fully commits or leaves the counters untouched.

Generative units are a resource-accounting abstraction, not currency.
"""
import copy
import logging
import math
from datetime import datetime, timezone
from typing import Callable, List, Optional
from uuid import uuid4

from ...models.trust import (
    EntityType,
    GenerativeUnit,
    ConsumptionResult,
    PathwayType,
    ProgressResult,
    VisualAlert,
)
from ..alerts import gate_alert, milestone_feedback, BLOCK_REASON
from ..errors import EntryNotFound, InvalidAmount
from ..fibonacci import fibonacci, fibonacci_index, golden_ratio_score
from ..fibonacci.constants import (
    CONSUMPTION_WARNING_THRESHOLDS,
    CONSUMPTION_BLOCK_THRESHOLD,
)
from .cache import SnapshotCache
from .pathways import (
    initialize_progress,
    validate_milestone,
    next_milestone,
    completed_count,
)
from .store import TrustStore

logger = logging.getLogger(__name__)


class GenerativeUnitService:
    """
    Resource ledger operations over an injected store.

    Usage:
        service = GenerativeUnitService(InMemoryTrustStore())
        unit = service.create("user-1", EntityType.USER, PathwayType.JOB, 100)
        result = service.consume(unit.id, 40, "compute")
    """

    def __init__(
        self,
        store: TrustStore,
        cache: Optional[SnapshotCache] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.cache = cache
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    # =========================================================================
    # CREATE / READ
    # =========================================================================

    def create(
        self,
        entity_id: str,
        entity_type: EntityType,
        pathway: PathwayType,
        initial_units: float,
    ) -> GenerativeUnit:
        if not math.isfinite(initial_units) or initial_units <= 0:
            raise InvalidAmount(f"initial_units must be positive, got {initial_units}")

        pathway = PathwayType(pathway)
        progress = initialize_progress(pathway)
        index = fibonacci_index(initial_units)
        now = self.clock()

        unit = GenerativeUnit(
            id=str(uuid4()),
            entity_id=entity_id,
            entity_type=EntityType(entity_type),
            pathway=pathway,
            allocated_units=initial_units,
            consumed_units=0,
            remaining_units=initial_units,
            fibonacci_level=fibonacci(index),
            progression_index=index,
            golden_ratio_score=0.0,
            overspending_risk=0.0,
            pathway_progress=progress,
            next_milestone=next_milestone(pathway, progress),
            created_at=now,
            updated_at=now,
        )

        self.store.save_unit(unit)
        self._refresh_cache(unit)
        logger.info(
            f"Created generative unit {unit.id} for {unit.entity_type.value}:{entity_id} "
            f"on {pathway.value} with {initial_units} units"
        )
        return unit

    def get(self, unit_id: str) -> GenerativeUnit:
        unit = self.store.get_unit(unit_id)
        if unit is None:
            raise EntryNotFound("GenerativeUnit", unit_id)
        return unit

    def cached_snapshot(self, entity_id: str, pathway: PathwayType) -> Optional[GenerativeUnit]:
        if self.cache is None:
            return None
        return self.cache.get((entity_id, PathwayType(pathway).value))

    # =========================================================================
    # CONSUMPTION
    # =========================================================================

    def consume(self, unit_id: str, amount: float, reason: str) -> ConsumptionResult:
        """
        Consume units with staged overspending protection.

        Returns blocked=True (never raises) when the block gate is reached.
        Raises EntryNotFound for an unknown unit_id.
        """
        if not math.isfinite(amount) or amount < 0:
            raise InvalidAmount(f"amount must be a finite, non-negative number, got {amount}")

        unit = self.get(unit_id)

        if unit.protection_locked:
            logger.warning(f"Consumption of {amount} on locked unit {unit_id} refused ({reason})")
            return ConsumptionResult(
                success=False,
                consumed=0,
                remaining=unit.remaining_units,
                warnings=[],
                blocked=True,
                block_reason=unit.block_reason or BLOCK_REASON,
            )

        projected_ratio = (unit.consumed_units + amount) / unit.allocated_units
        warnings = self._crossed_gates(projected_ratio, unit.overspending_risk)

        if projected_ratio >= CONSUMPTION_BLOCK_THRESHOLD:
            warnings.append(gate_alert(CONSUMPTION_BLOCK_THRESHOLD))
            unit.protection_locked = True
            unit.block_reason = BLOCK_REASON
            unit.updated_at = self.clock()
            self.store.save_unit(unit)
            self._refresh_cache(unit)
            logger.warning(
                f"Overspending protection blocked {amount} units on {unit_id} "
                f"(projected {projected_ratio:.3f}, reason: {reason})"
            )
            return ConsumptionResult(
                success=False,
                consumed=0,
                remaining=unit.remaining_units,
                warnings=warnings,
                blocked=True,
                block_reason=BLOCK_REASON,
            )

        unit.consumed_units += amount
        unit.remaining_units = unit.allocated_units - unit.consumed_units
        unit.overspending_risk = max(unit.overspending_risk, projected_ratio)
        unit.progression_index = fibonacci_index(unit.remaining_units)
        unit.fibonacci_level = fibonacci(unit.progression_index)
        unit.updated_at = self.clock()

        self.store.save_unit(unit)
        self._refresh_cache(unit)
        logger.info(
            f"Consumed {amount} units on {unit_id} ({reason}); "
            f"remaining {unit.remaining_units}, ratio {projected_ratio:.3f}"
        )

        return ConsumptionResult(
            success=True,
            consumed=amount,
            remaining=unit.remaining_units,
            warnings=warnings,
            blocked=False,
        )

    @staticmethod
    def _crossed_gates(projected_ratio: float, high_water: float) -> List[VisualAlert]:
        """Warning gates reached by projected_ratio and not yet passed by the high-water mark."""
        return [
            gate_alert(threshold)
            for threshold in CONSUMPTION_WARNING_THRESHOLDS
            if projected_ratio >= threshold and high_water < threshold
        ]

    # =========================================================================
    # PATHWAY PROGRESS
    # =========================================================================

    def update_pathway_progress(
        self,
        unit_id: str,
        milestone: str,
        progress: float,
    ) -> ProgressResult:
        """
        Set one milestone's completion fraction and pay a Fibonacci reward.

        Raises EntryNotFound / InvalidMilestone.
        """
        unit = self.get(unit_id)
        validate_milestone(unit.pathway, milestone)

        value = max(0.0, min(progress, 1.0))
        unit.pathway_progress[milestone] = value

        completed = completed_count(unit.pathway_progress)
        reward = fibonacci(completed + 1)

        unit.golden_ratio_score = golden_ratio_score(completed, len(unit.pathway_progress))
        unit.next_milestone = next_milestone(unit.pathway, unit.pathway_progress)
        unit.updated_at = self.clock()

        self.store.save_unit(unit)
        self._refresh_cache(unit)

        return ProgressResult(
            success=True,
            fibonacci_reward=reward,
            golden_ratio_score=unit.golden_ratio_score,
            overall_progress=unit.overall_progress,
            next_milestone=unit.next_milestone,
            visual_feedback=milestone_feedback(milestone, value, reward),
        )

    def _refresh_cache(self, unit: GenerativeUnit) -> None:
        if self.cache is None:
            return
        key = (unit.entity_id, unit.pathway.value)
        self.cache.invalidate(key)
        self.cache.put(key, copy.deepcopy(unit))
