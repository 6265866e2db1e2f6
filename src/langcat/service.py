"""Public entry points: the synchronous gate and the async mutation interface."""

from typing import Optional
from .backends import create_backend
from .backends.base import KeyValueStore
from .config import Settings, load_settings
from .policy import engine
from .policy.models import Policy
from .store import PolicyCache, PolicyStore, Identity
from .utils.logging import get_logger

logger = get_logger("service")


class LangCategory:
    """
    Category gate for translation content.

    ``allow`` is meant to be called from a synchronous content hook; every
    other method is a coroutine returning the resulting policy so front-ends
    can echo it back.
    """

    def __init__(self, store: PolicyStore):
        self.store = store

    @classmethod
    def from_settings(cls, settings: Settings, backend: Optional[KeyValueStore] = None) -> "LangCategory":
        """
        Build a gate from settings.

        Args:
            settings: Loaded settings
            backend: Backend to use instead of the configured one

        Returns:
            Ready-to-use LangCategory
        """
        store = PolicyStore(
            backend=backend if backend is not None else create_backend(settings),
            default=settings.default_policy(),
            namespace=settings.namespace,
            key_prefix=settings.key_prefix,
            cache=PolicyCache(
                max_entries=settings.cache.max_entries,
                ttl_seconds=settings.cache.ttl_seconds,
            ),
        )
        logger.info(
            f"LangCategory ready (namespace={settings.namespace}, "
            f"default={engine.describe(store.default)})"
        )
        return cls(store)

    @classmethod
    def from_config(cls, config_path: Optional[str] = None) -> "LangCategory":
        return cls.from_settings(load_settings(config_path))

    def allow(self, identity: Optional[Identity], category: Optional[str]) -> bool:
        """Whether content of this category may be shown; no identity means no gating."""
        if identity is None:
            return True
        return self.store.decide_now(identity, category)

    async def show(self, identity: Identity) -> Policy:
        return await self.store.resolve(identity)

    async def enable_all(self, identity: Identity) -> Policy:
        return await self.store.mutate(identity, engine.enable_all)

    async def disable_all(self, identity: Identity) -> Policy:
        return await self.store.mutate(identity, engine.disable_all)

    async def enable_only(self, identity: Identity, category: str) -> Policy:
        return await self.store.mutate(identity, engine.bind(engine.enable_only, category))

    async def disable_only(self, identity: Identity, category: str) -> Policy:
        return await self.store.mutate(identity, engine.bind(engine.disable_only, category))

    async def enable(self, identity: Identity, category: str) -> Policy:
        return await self.store.mutate(identity, engine.bind(engine.enable, category))

    async def disable(self, identity: Identity, category: str) -> Policy:
        return await self.store.mutate(identity, engine.bind(engine.disable, category))

    async def toggle(self, identity: Identity, category: str) -> Policy:
        return await self.store.mutate(identity, engine.bind(engine.toggle, category))

    async def aclose(self) -> None:
        """Wait for pending writes and close the backend."""
        await self.store.close()
