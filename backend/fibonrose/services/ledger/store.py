"""
Trust Store

Explicit store object handed to every service. Lifecycle belongs to the caller:
create one per test/run and clear() or drop it when done.

Stores hand out copies, so a service only changes stored state by calling save_*.
"""
import copy
from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy.orm import Session

from ...models.trust import GenerativeUnit, SecurityIdentity
from ...models.db_models import GenerativeUnitDB, SecurityIdentityDB


class TrustStore(ABC):
    """Persistence collaborator contract."""

    @abstractmethod
    def get_unit(self, unit_id: str) -> Optional[GenerativeUnit]:
        ...

    @abstractmethod
    def save_unit(self, unit: GenerativeUnit) -> None:
        ...

    @abstractmethod
    def get_identity(self, identity_id: str) -> Optional[SecurityIdentity]:
        ...

    @abstractmethod
    def save_identity(self, identity: SecurityIdentity) -> None:
        ...

    @abstractmethod
    def count_units(self) -> int:
        ...

    @abstractmethod
    def count_identities(self) -> int:
        ...

    def commit(self) -> None:
        """Make saved records durable. No-op for transient stores."""


class InMemoryTrustStore(TrustStore):
    """Transient dict-backed store."""

    def __init__(self):
        self._units: Dict[str, GenerativeUnit] = {}
        self._identities: Dict[str, SecurityIdentity] = {}

    def get_unit(self, unit_id: str) -> Optional[GenerativeUnit]:
        unit = self._units.get(unit_id)
        return copy.deepcopy(unit) if unit else None

    def save_unit(self, unit: GenerativeUnit) -> None:
        self._units[unit.id] = copy.deepcopy(unit)

    def get_identity(self, identity_id: str) -> Optional[SecurityIdentity]:
        identity = self._identities.get(identity_id)
        return copy.deepcopy(identity) if identity else None

    def save_identity(self, identity: SecurityIdentity) -> None:
        self._identities[identity.id] = copy.deepcopy(identity)

    def count_units(self) -> int:
        return len(self._units)

    def count_identities(self) -> int:
        return len(self._identities)

    def clear(self) -> None:
        self._units.clear()
        self._identities.clear()


class SqlAlchemyTrustStore(TrustStore):
    """
    Snapshot rows in SQL.

    Flushes on save; committing the session is the caller's job.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_unit(self, unit_id: str) -> Optional[GenerativeUnit]:
        row = self.db.query(GenerativeUnitDB).filter(GenerativeUnitDB.id == unit_id).first()
        return GenerativeUnit.from_dict(row.snapshot) if row else None

    def save_unit(self, unit: GenerativeUnit) -> None:
        row = self.db.query(GenerativeUnitDB).filter(GenerativeUnitDB.id == unit.id).first()
        if row is None:
            row = GenerativeUnitDB(
                id=unit.id,
                entity_id=unit.entity_id,
                entity_type=unit.entity_type.value,
                pathway=unit.pathway.value,
            )
            self.db.add(row)
        row.remaining_units = unit.remaining_units
        row.overspending_risk = unit.overspending_risk
        row.snapshot = unit.to_dict()
        self.db.flush()

    def get_identity(self, identity_id: str) -> Optional[SecurityIdentity]:
        row = self.db.query(SecurityIdentityDB).filter(SecurityIdentityDB.id == identity_id).first()
        return SecurityIdentity.from_dict(row.snapshot) if row else None

    def save_identity(self, identity: SecurityIdentity) -> None:
        row = self.db.query(SecurityIdentityDB).filter(SecurityIdentityDB.id == identity.id).first()
        if row is None:
            row = SecurityIdentityDB(
                id=identity.id,
                entity_id=identity.entity_id,
                entity_type=identity.entity_type.value,
            )
            self.db.add(row)
        row.security_level = identity.security_level.value
        row.trust_score = identity.trust_score
        row.snapshot = identity.to_dict()
        self.db.flush()

    def count_units(self) -> int:
        return self.db.query(GenerativeUnitDB).count()

    def count_identities(self) -> int:
        return self.db.query(SecurityIdentityDB).count()

    def commit(self) -> None:
        self.db.commit()
