"""
FibonRose - Router Dependencies

One store per request, built on the request's database session.
The snapshot cache lives on app.state and is optional.
"""
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.ledger import (
    GenerativeUnitService,
    SnapshotCache,
    SqlAlchemyTrustStore,
    TrustStore,
)
from ..services.identity import BadgeRegistry, SecurityIdentityService


def get_store(db: Session = Depends(get_db)) -> TrustStore:
    return SqlAlchemyTrustStore(db)


def get_cache(request: Request) -> Optional[SnapshotCache]:
    return getattr(request.app.state, "snapshot_cache", None)


def get_unit_service(
    store: TrustStore = Depends(get_store),
    cache: Optional[SnapshotCache] = Depends(get_cache),
) -> GenerativeUnitService:
    return GenerativeUnitService(store, cache=cache)


def get_identity_service(
    store: TrustStore = Depends(get_store),
    cache: Optional[SnapshotCache] = Depends(get_cache),
) -> SecurityIdentityService:
    return SecurityIdentityService(store, cache=cache)


def get_badge_registry(
    identities: SecurityIdentityService = Depends(get_identity_service),
) -> BadgeRegistry:
    return BadgeRegistry(identities)
