"""In-process cache for computed rankings.

Handles:
- One slot per RankingKind holding the last computed payload
- TTL-based hit/miss decisions
- Atomic (payload, expiry) updates under a per-slot lock

TTL policy:
- Ranking payloads: 60 seconds (configurable)

The cache never fails: an empty or expired slot is a miss. Time is passed in
by the caller (monotonic seconds) so hit/miss is deterministic under test.
No recompute logic here - that belongs in services.
"""

from dataclasses import dataclass, field
import logging
import threading
from typing import Generic, TypeVar

from pydantic import BaseModel

from comercios.schemas import RankingKind

# TTL constants (in seconds)
TTL_RANKING = 60.0  # 1 minute

logger = logging.getLogger("uvicorn.error")

T = TypeVar("T", bound=BaseModel)


@dataclass
class CacheEntry(Generic[T]):
    """Last computed payload and its expiry. Empty entries never hit."""

    result: T | None = None
    expires_at: float | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class RankingCache:
    """One `CacheEntry` per `RankingKind`, constructed once per process."""

    def __init__(self, ttl_seconds: float = TTL_RANKING) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: dict[RankingKind, CacheEntry] = {kind: CacheEntry() for kind in RankingKind}

    def try_read(self, kind: RankingKind, now: float) -> BaseModel | None:
        """Get a copy of the cached payload for `kind`.

        Args:
            kind: Ranking slot.
            now: Current monotonic time in seconds.

        Returns:
            A copy of the payload if `now` is before its expiry, None otherwise.
        """
        entry = self._entries[kind]
        with entry.lock:
            if entry.result is None or entry.expires_at is None or now >= entry.expires_at:
                return None
            # Callers stamp response metadata on the copy.
            return entry.result.model_copy()

    def write(self, kind: RankingKind, result: BaseModel, now: float) -> None:
        """Store `result` for `kind`, valid until `now + ttl`.

        Args:
            kind: Ranking slot.
            result: Freshly computed payload.
            now: Monotonic time of the computation in seconds.
        """
        entry = self._entries[kind]
        with entry.lock:
            entry.result = result
            entry.expires_at = now + self.ttl_seconds
        logger.info(f"Cache updated: {kind.value} (ttl={self.ttl_seconds:g}s)")
