"""
Resource Ledger Services

Generative unit allocation/consumption with staged overspending protection,
pathway milestone tracking, the injected trust store and the snapshot cache.
"""

from .generative_units import GenerativeUnitService
from .pathways import PATHWAY_MILESTONES, milestones_for, next_milestone
from .store import TrustStore, InMemoryTrustStore, SqlAlchemyTrustStore
from .cache import SnapshotCache

__all__ = [
    'GenerativeUnitService',
    'PATHWAY_MILESTONES',
    'milestones_for',
    'next_milestone',
    'TrustStore',
    'InMemoryTrustStore',
    'SqlAlchemyTrustStore',
    'SnapshotCache',
]
