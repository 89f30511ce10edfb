"""
In-memory result cache.

One entry per learner, expired lazily on read. Created once by the caller
(server lifespan, CLI run) and passed to PrognosisService.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from guru.domain.prognosis.models import MetricsSnapshot
from guru.domain.prognosis.ports import ResultCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    learner_id: str
    snapshot: MetricsSnapshot
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class InMemoryResultCache(ResultCache):
    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()

    async def get(self, learner_id: str) -> MetricsSnapshot | None:
        async with self._lock:
            entry = self._entries.get(learner_id)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[learner_id]
                logger.debug(f"Evicted expired snapshot for {learner_id}")
                return None
            return entry.snapshot

    async def put(self, learner_id: str, snapshot: MetricsSnapshot, ttl_minutes: float) -> None:
        now = self._clock()
        async with self._lock:
            self._sweep(now)
            self._entries[learner_id] = CacheEntry(
                learner_id, snapshot, now + timedelta(minutes=ttl_minutes)
            )

    async def invalidate(self, learner_id: str) -> None:
        async with self._lock:
            self._entries.pop(learner_id, None)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def _sweep(self, now: datetime) -> None:
        """Drop every expired entry. Caller holds the lock."""
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Swept {len(expired)} expired snapshot(s)")

    def __len__(self) -> int:
        return len(self._entries)
