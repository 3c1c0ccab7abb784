"""Time-bounded cache for resolved issues.

Entries are stored together with the clock reading at which they were
fetched. An entry is served only while ``now - fetched_at < ttl``; stale
entries are never served and get overwritten by the next fetch.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from cachetools import TTLCache

logger = logging.getLogger("mcp-tempo.utils.cache")

V = TypeVar("V")

Clock = Callable[[], float]

# Five minutes, matching the Tempo web client's issue picker
DEFAULT_TTL_SECONDS = 300.0
DEFAULT_MAXSIZE = 1024


def is_expired(now: float, fetched_at: float, ttl: float) -> bool:
    """Return True when an entry fetched at ``fetched_at`` is stale at ``now``."""
    return now - fetched_at >= ttl


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached value and the clock reading at which it was fetched."""

    value: V
    fetched_at: float


class ExpiringCache(Generic[V]):
    """Keyed cache whose entries expire ``ttl`` seconds after being fetched.

    The clock is injectable so expiry can be tested without sleeping.
    Storage is a ``cachetools.TTLCache`` driven by the same clock, which keeps
    memory bounded; validity is always decided by :func:`is_expired`.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Clock = time.monotonic,
        maxsize: int = DEFAULT_MAXSIZE,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: TTLCache[str, CacheEntry[V]] = TTLCache(
            maxsize=maxsize, ttl=ttl, timer=clock
        )

    def get(self, key: str) -> V | None:
        """Return the live value for ``key`` or None on a miss or expiry."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if is_expired(self._clock(), entry.fetched_at, self.ttl):
            logger.debug(f"Cache entry for {key} expired")
            return None
        return entry.value

    def put(self, key: str, value: V) -> CacheEntry[V]:
        """Store ``value`` under ``key`` stamped with the current clock reading."""
        entry = CacheEntry(value=value, fetched_at=self._clock())
        self._entries[key] = entry
        return entry

    def values(self) -> list[V]:
        """Live values, oldest fetch first."""
        now = self._clock()
        live = [
            entry
            for entry in list(self._entries.values())
            if not is_expired(now, entry.fetched_at, self.ttl)
        ]
        return [entry.value for entry in sorted(live, key=lambda e: e.fetched_at)]

    def __len__(self) -> int:
        return len(self.values())
