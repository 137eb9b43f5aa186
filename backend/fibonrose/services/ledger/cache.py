"""
Snapshot Cache

Optional memo of the last committed snapshot per (entity_id, pathway).
Identities use (entity_id, None). Expiry is renewed on every put/touch.
Services invalidate on each successful mutation, so staleness only costs latency.
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Tuple

CACHE_TTL_SECONDS = int(os.getenv("FIBONROSE_CACHE_TTL_SECONDS", "300"))

CacheKey = Tuple[str, Optional[str]]


class SnapshotCache:

    def __init__(
        self,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.ttl = timedelta(seconds=ttl_seconds)
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: Dict[CacheKey, Tuple[Any, datetime]] = {}

    def get(self, key: CacheKey) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        snapshot, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return snapshot

    def put(self, key: CacheKey, snapshot: Any) -> None:
        self._entries[key] = (snapshot, self.clock() + self.ttl)

    def touch(self, key: CacheKey) -> bool:
        """Renew expiry of a live entry."""
        snapshot = self.get(key)
        if snapshot is None:
            return False
        self.put(key, snapshot)
        return True

    def invalidate(self, key: CacheKey) -> None:
        self._entries.pop(key, None)

    def invalidate_entity(self, entity_id: str) -> int:
        keys = [key for key in self._entries if key[0] == entity_id]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def __len__(self) -> int:
        return len(self._entries)
