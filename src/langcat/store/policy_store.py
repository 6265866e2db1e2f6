"""Policy store - per-identity cache in front of the remote key-value store.

The cache is the system of record while the process runs; the remote store
only exists so policies survive a restart. Reads fall back to the default
policy whenever the store is unreachable or holds garbage, and writes are
fire-and-forget. No store failure ever reaches a caller.
"""

import asyncio
import weakref
from typing import Any, Dict, Optional, Set, Union
from uuid import UUID
from ..backends.base import KeyValueStore
from ..policy.codec import decode_policy, encode_policy
from ..policy.engine import Transition, decide, normalize
from ..policy.models import DefaultPolicy, Policy
from ..utils.logging import get_logger
from .cache import PolicyCache

logger = get_logger("store.policy_store")

Identity = Union[str, UUID]


class PolicyStore:
    """
    Resolves, mutates and decides per-identity policies.

    Usage:
        store = PolicyStore(InMemoryKeyValueStore(), DefaultPolicy(mode=Mode.ALL))
        await store.mutate("42", bind(enable_only, "news"))
        store.decide_now("42", "sports")   # False, straight from cache
        await store.flush()
    """

    def __init__(
        self,
        backend: KeyValueStore,
        default: DefaultPolicy,
        namespace: str = "lcatpolicy",
        key_prefix: str = "lcat:",
        cache: Optional[PolicyCache] = None
    ):
        """
        Args:
            backend: Remote key-value store
            default: Global default policy, used for unknown identities
            namespace: Store namespace holding policies
            key_prefix: Prefix prepended to every identity to build the key
            cache: Cache to use (a default-sized LRU if omitted)
        """
        self.backend = backend
        self.default = default
        self.namespace = namespace
        self.key_prefix = key_prefix
        self.cache = cache if cache is not None else PolicyCache()

        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()
        self._last_write: Dict[str, "asyncio.Task[None]"] = {}
        # newest encoded value per identity whose write has not landed yet
        self._unsaved: Dict[str, str] = {}
        self._warming: Set[str] = set()
        self._background: Set["asyncio.Task[Any]"] = set()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._warned_no_loop = False

    # -- identity helpers -------------------------------------------------

    @staticmethod
    def _identity_key(identity: Optional[Identity]) -> str:
        """String form of an identity; None maps to the blank identity."""
        if identity is None:
            return ""
        return str(identity).strip()

    def key_for(self, identity: Identity) -> str:
        """Store key for an identity, e.g. ``lcat:<uuid>``."""
        return f"{self.key_prefix}{self._identity_key(identity)}"

    def _bind_loop(self) -> None:
        self._loop = asyncio.get_running_loop()

    def _track(self, task: "asyncio.Task[Any]") -> "asyncio.Task[Any]":
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    def _lock_for(self, ident: str) -> asyncio.Lock:
        lock = self._locks.get(ident)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[ident] = lock
        return lock

    # -- reads ------------------------------------------------------------

    async def _load(self, ident: str) -> Policy:
        """Return the live cached policy, loading it on a miss."""
        self._bind_loop()
        cached = self.cache.get(ident)
        if cached is not None:
            return cached

        # evicted while its write is still in flight: the store is behind
        unsaved = self._unsaved.get(ident)
        if unsaved is not None:
            return self.cache.put_if_absent(ident, decode_policy(unsaved, self.default))

        key = f"{self.key_prefix}{ident}"
        try:
            raw = await self.backend.get(self.namespace, key)
        except Exception as e:
            logger.warning(f"Failed to load policy for {ident}: {e}")
            raw = None

        # a write may have been queued while the read was in flight
        raw = self._unsaved.get(ident, raw)

        if raw is None:
            policy = self.default.to_policy()
        else:
            policy = decode_policy(raw, self.default)

        # a mutation may have landed while we were waiting on the store
        return self.cache.put_if_absent(ident, policy)

    async def resolve(self, identity: Identity) -> Policy:
        """
        Current policy for an identity.

        Served from cache when possible, otherwise loaded from the store.
        Falls back to a fresh copy of the default when the identity has no
        stored policy, the read fails, or the stored value is malformed.

        Returns:
            A copy; changing it does not affect the cache
        """
        policy = await self._load(self._identity_key(identity))
        return policy.copy_policy()

    def peek(self, identity: Identity) -> Optional[Policy]:
        """Copy of the cached policy, or None. Never touches the store."""
        cached = self.cache.get(self._identity_key(identity))
        return cached.copy_policy() if cached is not None else None

    def invalidate(self, identity: Identity) -> None:
        """Forget the cached policy so the next access reloads it."""
        self.cache.pop(self._identity_key(identity))

    # -- writes -----------------------------------------------------------

    async def mutate(self, identity: Identity, transition: Transition) -> Policy:
        """
        Apply a transition to an identity's policy.

        Mutations of one identity are serialized; different identities do not
        contend. The cache is updated before this returns, the remote write
        runs in the background.

        Args:
            identity: Identity to update
            transition: Function from the policy engine, e.g. ``bind(enable, "news")``

        Returns:
            Copy of the updated, normalized policy
        """
        ident = self._identity_key(identity)

        async with self._lock_for(ident):
            current = await self._load(ident)
            updated = normalize(transition(current.copy_policy()))
            self.cache.put(ident, updated)

        self._persist(ident, encode_policy(updated))
        return updated.copy_policy()

    def _persist(self, ident: str, encoded: str) -> None:
        previous = self._last_write.get(ident)
        task = asyncio.get_running_loop().create_task(self._write(ident, encoded, previous))
        self._last_write[ident] = task
        self._unsaved[ident] = encoded
        self._track(task)

    async def _write(self, ident: str, encoded: str, previous: Optional["asyncio.Task[None]"]) -> None:
        # keep writes for one identity in mutation order
        if previous is not None and not previous.done():
            await asyncio.wait({previous})
        try:
            await self.backend.set(self.namespace, f"{self.key_prefix}{ident}", encoded)
            logger.debug(f"Saved policy for {ident}: {encoded}")
        except Exception as e:
            logger.warning(f"Failed to save policy for {ident}: {e}")
        finally:
            if self._last_write.get(ident) is asyncio.current_task():
                del self._last_write[ident]
                self._unsaved.pop(ident, None)

    # -- hot path ---------------------------------------------------------

    def decide_now(self, identity: Identity, category: Optional[str]) -> bool:
        """
        Decide without waiting on I/O.

        An identity that is not cached yet is answered from the default
        policy while its stored policy is loaded in the background, so only
        later calls see the stored policy.
        """
        ident = self._identity_key(identity)
        cached = self.cache.get(ident)
        if cached is not None:
            return decide(cached, category)

        self._schedule_warm(ident)
        return decide(self.default, category)

    def _schedule_warm(self, ident: str) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is not None:
            self._loop = running
            self._spawn_warm(ident)
            return

        loop = self._loop
        if loop is None or loop.is_closed() or not loop.is_running():
            if not self._warned_no_loop:
                self._warned_no_loop = True
                logger.warning(
                    "No running event loop bound to the policy store; uncached identities "
                    "are answered from the default policy until an async call binds one"
                )
            else:
                logger.debug(f"No event loop available to preload policy for {ident}")
            return
        try:
            loop.call_soon_threadsafe(self._spawn_warm, ident)
        except RuntimeError as e:
            logger.debug(f"Could not schedule policy preload for {ident}: {e}")

    def _spawn_warm(self, ident: str) -> None:
        if ident in self._warming:
            return
        self._warming.add(ident)
        task = asyncio.get_running_loop().create_task(self._load(ident))
        task.add_done_callback(lambda _t: self._warming.discard(ident))
        self._track(task)

    # -- lifecycle --------------------------------------------------------

    async def flush(self) -> None:
        """Wait for every pending background load and write."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def close(self) -> None:
        """Flush pending writes and close the backend."""
        await self.flush()
        await self.backend.close()
