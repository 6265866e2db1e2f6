"""Thread-safe LRU cache of per-identity policies."""

import threading
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple
from ..policy.models import Policy
from ..utils.logging import get_logger

logger = get_logger("store.cache")


class PolicyCache:
    """
    Identity -> Policy map bounded by size and, optionally, idle time.

    All methods take an internal lock, so the cache can be shared between
    event-loop tasks and foreign threads calling the synchronous gate.
    Policies are stored and returned as-is; copying is the caller's job.
    """

    def __init__(
        self,
        max_entries: Optional[int] = 10000,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Args:
            max_entries: Maximum number of identities kept, None for unbounded
            ttl_seconds: Drop entries not accessed for this long, None to disable
            clock: Monotonic time source
        """
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[Policy, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def _expired(self, touched_at: float, now: float) -> bool:
        return self.ttl_seconds is not None and now - touched_at > self.ttl_seconds

    def _evict_overflow(self) -> None:
        if self.max_entries is None:
            return
        while len(self._entries) > self.max_entries:
            identity, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted policy for {identity} (cache full)")

    def get(self, identity: str) -> Optional[Policy]:
        """Return the cached policy and mark it recently used, or None."""
        with self._lock:
            entry = self._entries.get(identity)
            if entry is None:
                return None
            policy, touched_at = entry
            now = self._clock()
            if self._expired(touched_at, now):
                del self._entries[identity]
                logger.debug(f"Expired policy for {identity}")
                return None
            self._entries[identity] = (policy, now)
            self._entries.move_to_end(identity)
            return policy

    def put(self, identity: str, policy: Policy) -> None:
        """Insert or overwrite an entry."""
        with self._lock:
            self._entries[identity] = (policy, self._clock())
            self._entries.move_to_end(identity)
            self._evict_overflow()

    def put_if_absent(self, identity: str, policy: Policy) -> Policy:
        """
        Insert only if no live entry exists.

        Returns:
            Whichever policy ends up cached
        """
        with self._lock:
            now = self._clock()
            entry = self._entries.get(identity)
            if entry is not None and not self._expired(entry[1], now):
                self._entries[identity] = (entry[0], now)
                self._entries.move_to_end(identity)
                return entry[0]
            self._entries[identity] = (policy, now)
            self._entries.move_to_end(identity)
            self._evict_overflow()
            return policy

    def pop(self, identity: str) -> Optional[Policy]:
        with self._lock:
            entry = self._entries.pop(identity, None)
            return entry[0] if entry else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, identity: str) -> bool:
        return self.get(identity) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
