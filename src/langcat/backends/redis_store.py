"""Redis backend: one Redis hash per namespace, one field per key."""

from typing import Any, Optional
import redis.asyncio as aioredis
from redis.exceptions import RedisError
from ..utils.errors import StoreError
from ..utils.logging import get_logger
from .base import KeyValueStore

logger = get_logger("backends.redis")


class RedisKeyValueStore(KeyValueStore):
    """
    Key-value backend on top of ``redis.asyncio``.
    
    Usage:
        store = RedisKeyValueStore(url="redis://localhost:6379/0")
        await store.set("lcatpolicy", "lcat:42", "ONLY|news")
        value = await store.get("lcatpolicy", "lcat:42")
    """
    
    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        socket_timeout: Optional[float] = 5.0,
        client: Optional[Any] = None
    ):
        """
        Initialize the Redis backend.
        
        Args:
            url: Redis connection URL
            password: Optional password (overrides one embedded in the URL)
            socket_timeout: Per-operation socket timeout in seconds
            client: Pre-built async client (tests inject a fake here)
        """
        self.url = url
        if client is not None:
            self._redis = client
        else:
            kwargs = {
                "encoding": "utf-8",
                "decode_responses": True,
                "socket_timeout": socket_timeout,
                "socket_connect_timeout": socket_timeout,
            }
            if password:
                kwargs["password"] = password
            self._redis = aioredis.from_url(url, **kwargs)
            logger.info(f"Redis backend configured for {url}")
    
    async def get(self, namespace: str, key: str) -> Optional[str]:
        try:
            value = await self._redis.hget(namespace, key)
        except (RedisError, OSError) as e:
            raise StoreError(f"Redis read of {namespace}/{key} failed: {e}") from e
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        return value
    
    async def set(self, namespace: str, key: str, value: str) -> None:
        try:
            await self._redis.hset(namespace, key, value)
        except (RedisError, OSError) as e:
            raise StoreError(f"Redis write of {namespace}/{key} failed: {e}") from e
    
    async def close(self) -> None:
        try:
            await self._redis.aclose()
        except (RedisError, OSError) as e:
            logger.warning(f"Error closing Redis connection: {e}")
