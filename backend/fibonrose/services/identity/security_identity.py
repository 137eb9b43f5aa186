"""
Security Identity Engine

Aggregates verification, interaction, accessibility, badge and account-age
signals into a Fibonacci score, then derives the security level, support and
resistance levels, the 0-100 trust score and the risk profile.

Each signal is bounded by a small Fibonacci number so no single one dominates:
- verifications   sum of Fib(1..8)             (max 54)
- interactions    ratio * 1.618 * 5            (max ~8.09)
- accessibility   score/100 * 8                (max 8)
- badges          2 per badge                  (max 13)
- account age     log2(days + 1) * 0.5         (max 5)

The level is never sticky: a negative interaction can lower the score and the
level follows it down.
"""
import copy
import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import uuid4

from ...models.trust import (
    ActivityUpdate,
    EntityType,
    InteractionType,
    SecurityIdentity,
    SecurityLevel,
)
from ..errors import EntryNotFound, InvalidAmount
from ..fibonacci import fibonacci, fibonacci_index
from ..fibonacci.constants import (
    GOLDEN_RATIO,
    SECURITY_LEVEL_THRESHOLDS,
    MAX_WEIGHTED_VERIFICATIONS,
    INTERACTION_MULTIPLIER,
    ACCESSIBILITY_WEIGHT,
    BADGE_POINTS,
    BADGE_CAP,
    ACCOUNT_AGE_FACTOR,
    ACCOUNT_AGE_CAP,
    TRUST_SCORE_CEILING,
    INITIAL_FIBONACCI_SCORE,
    INITIAL_SUPPORT_LEVEL,
    INITIAL_RESISTANCE_LEVEL,
    INITIAL_ACCESSIBILITY_SCORE,
)
from ..ledger.cache import SnapshotCache
from ..ledger.store import TrustStore
from .risk_profile import calculate_risk_profile

logger = logging.getLogger(__name__)


# =============================================================================
# SCORING
# =============================================================================

def security_level_for(fibonacci_score: float) -> SecurityLevel:
    for minimum, level in SECURITY_LEVEL_THRESHOLDS:
        if fibonacci_score >= minimum:
            return SecurityLevel(level)
    return SecurityLevel.SEED


def trust_score_for(fibonacci_score: float) -> float:
    return min(100.0, fibonacci_score / TRUST_SCORE_CEILING * 100)


def calculate_security_score(
    verification_count: int,
    positive_interactions: int,
    total_interactions: int,
    accessibility_score: float,
    badge_count: int,
    account_age_days: int,
) -> float:
    score = 0.0

    # Verifications weighted by the sequence
    for i in range(min(verification_count, MAX_WEIGHTED_VERIFICATIONS)):
        score += fibonacci(i + 1)

    if total_interactions > 0:
        score += (positive_interactions / total_interactions) * GOLDEN_RATIO * INTERACTION_MULTIPLIER

    score += (accessibility_score / 100) * ACCESSIBILITY_WEIGHT
    score += min(badge_count * BADGE_POINTS, BADGE_CAP)
    score += min(math.log2(account_age_days + 1) * ACCOUNT_AGE_FACTOR, ACCOUNT_AGE_CAP)

    return max(0.0, score)


# =============================================================================
# SERVICE
# =============================================================================

class SecurityIdentityService:
    """
    Security identity operations over an injected store.

    Usage:
        service = SecurityIdentityService(InMemoryTrustStore())
        identity = service.create("user-1", EntityType.USER)
        identity = service.record_activity(identity.id, ActivityUpdate(verification_added=True))
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

    def create(self, entity_id: str, entity_type: EntityType) -> SecurityIdentity:
        """New identity with neutral defaults and full accessibility assumed."""
        now = self.clock()
        identity = SecurityIdentity(
            id=str(uuid4()),
            entity_id=entity_id,
            entity_type=EntityType(entity_type),
            security_level=SecurityLevel.SEED,
            fibonacci_score=INITIAL_FIBONACCI_SCORE,
            support_level=INITIAL_SUPPORT_LEVEL,
            resistance_level=INITIAL_RESISTANCE_LEVEL,
            trust_score=trust_score_for(INITIAL_FIBONACCI_SCORE),
            accessibility_score=INITIAL_ACCESSIBILITY_SCORE,
            deaf_first_compliance=True,
            created_at=now,
            updated_at=now,
        )
        identity.risk_profile = calculate_risk_profile(identity)

        self.store.save_identity(identity)
        self._refresh_cache(identity)
        logger.info(f"Created security identity {identity.id} for {identity.entity_type.value}:{entity_id}")
        return identity

    def get(self, identity_id: str) -> SecurityIdentity:
        identity = self.store.get_identity(identity_id)
        if identity is None:
            raise EntryNotFound("SecurityIdentity", identity_id)
        return identity

    def cached_snapshot(self, entity_id: str) -> Optional[SecurityIdentity]:
        if self.cache is None:
            return None
        return self.cache.get((entity_id, None))

    def record_activity(self, identity_id: str, update: ActivityUpdate) -> SecurityIdentity:
        """
        Apply at most one of each signal, then recompute every derived field.

        Alerts for the caller are in the returned identity's risk_profile.visual_alerts.
        """
        identity = self.get(identity_id)

        if update.verification_added:
            identity.verification_count += 1

        if update.interaction_type is not None:
            identity.total_interactions += 1
            if InteractionType(update.interaction_type) == InteractionType.POSITIVE:
                identity.positive_interactions += 1

        if update.badge_earned is not None:
            identity.badges.append(update.badge_earned)

        if update.certification_added is not None:
            identity.certifications.append(update.certification_added)

        return self._recompute_and_save(identity)

    def set_accessibility(
        self,
        identity_id: str,
        accessibility_score: Optional[float] = None,
        deaf_first_compliance: Optional[bool] = None,
        visual_feedback_enabled: Optional[bool] = None,
        haptic_feedback_enabled: Optional[bool] = None,
    ) -> SecurityIdentity:
        identity = self.get(identity_id)

        if accessibility_score is not None:
            if not 0 <= accessibility_score <= 100:
                raise InvalidAmount(f"accessibility_score must be within 0-100, got {accessibility_score}")
            identity.accessibility_score = accessibility_score
        if deaf_first_compliance is not None:
            identity.deaf_first_compliance = deaf_first_compliance
        if visual_feedback_enabled is not None:
            identity.visual_feedback_enabled = visual_feedback_enabled
        if haptic_feedback_enabled is not None:
            identity.haptic_feedback_enabled = haptic_feedback_enabled

        return self._recompute_and_save(identity)

    def recompute(self, identity: SecurityIdentity) -> SecurityIdentity:
        """Derive score, level, support/resistance, trust and risk in place."""
        now = self.clock()
        identity.fibonacci_score = calculate_security_score(
            verification_count=identity.verification_count,
            positive_interactions=identity.positive_interactions,
            total_interactions=identity.total_interactions,
            accessibility_score=identity.accessibility_score,
            badge_count=len(identity.badges),
            account_age_days=identity.account_age_days(now),
        )
        identity.security_level = security_level_for(identity.fibonacci_score)

        index = fibonacci_index(identity.fibonacci_score)
        identity.support_level = fibonacci(max(0, index - 1))
        identity.resistance_level = fibonacci(index + 1)

        identity.trust_score = trust_score_for(identity.fibonacci_score)
        identity.risk_profile = calculate_risk_profile(identity)
        identity.updated_at = now
        return identity

    def _recompute_and_save(self, identity: SecurityIdentity) -> SecurityIdentity:
        previous_level = identity.security_level
        self.recompute(identity)
        self.store.save_identity(identity)
        self._refresh_cache(identity)

        if identity.security_level != previous_level:
            logger.info(
                f"Identity {identity.id} moved {previous_level.value} -> {identity.security_level.value} "
                f"(score {identity.fibonacci_score:.2f})"
            )
        return identity

    def _refresh_cache(self, identity: SecurityIdentity) -> None:
        if self.cache is None:
            return
        key = (identity.entity_id, None)
        self.cache.invalidate(key)
        self.cache.put(key, copy.deepcopy(identity))
