"""Shared fixtures: a controllable clock, a fresh store and services per test."""
import pytest
from datetime import datetime, timedelta, timezone

from fibonrose.services.ledger import (
    GenerativeUnitService,
    InMemoryTrustStore,
    SnapshotCache,
)
from fibonrose.services.identity import BadgeRegistry, SecurityIdentityService


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 1, 3, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    store = InMemoryTrustStore()
    yield store
    store.clear()


@pytest.fixture
def cache(clock):
    return SnapshotCache(ttl_seconds=60, clock=clock)


@pytest.fixture
def unit_service(store, cache, clock):
    return GenerativeUnitService(store, cache=cache, clock=clock)


@pytest.fixture
def identity_service(store, cache, clock):
    return SecurityIdentityService(store, cache=cache, clock=clock)


@pytest.fixture
def registry(identity_service):
    return BadgeRegistry(identity_service)
