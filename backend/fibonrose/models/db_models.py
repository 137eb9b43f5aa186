"""
FibonRose - SQLAlchemy ORM Models

Each row holds the full JSON snapshot of a record so the store can hand back
the exact prior record. Key columns are duplicated for lookup only.
"""
from datetime import datetime
from sqlalchemy import Column, String, Float, DateTime, JSON
from ..database import Base


class GenerativeUnitDB(Base):
    """Resource ledger entry snapshot."""
    __tablename__ = "generative_units"

    id = Column(String(36), primary_key=True)  # UUID
    entity_id = Column(String(255), nullable=False, index=True)
    entity_type = Column(String(50), nullable=False)
    pathway = Column(String(20), nullable=False, index=True)

    remaining_units = Column(Float, nullable=False)
    overspending_risk = Column(Float, nullable=False, default=0.0)

    snapshot = Column(JSON, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class SecurityIdentityDB(Base):
    """Security identity snapshot."""
    __tablename__ = "security_identities"

    id = Column(String(36), primary_key=True)  # UUID
    entity_id = Column(String(255), nullable=False, index=True)
    entity_type = Column(String(50), nullable=False)

    security_level = Column(String(20), nullable=False)
    trust_score = Column(Float, nullable=False, default=0.0)

    snapshot = Column(JSON, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
