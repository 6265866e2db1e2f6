"""Key-value store backends for persisted policies."""

from .base import KeyValueStore
from .memory import InMemoryKeyValueStore
from ..config.settings import Settings
from ..utils.errors import ConfigError
from ..utils.logging import get_logger

logger = get_logger("backends")

__all__ = ["KeyValueStore", "InMemoryKeyValueStore", "create_backend"]


def create_backend(settings: Settings) -> KeyValueStore:
    """
    Build the backend named in settings.
    
    Raises:
        ConfigError: If the backend name is unknown
    """
    name = settings.storage.backend
    if name == "memory":
        logger.info("Using in-memory policy backend (policies are lost on exit)")
        return InMemoryKeyValueStore()
    if name == "redis":
        from .redis_store import RedisKeyValueStore
        logger.info(f"Connecting policy backend to Redis (db={settings.db})")
        return RedisKeyValueStore(
            url=settings.storage.url,
            password=settings.secret or None,
            socket_timeout=settings.storage.socket_timeout,
        )
    raise ConfigError(f"Unknown storage backend: {name!r} (expected 'memory' or 'redis')")
