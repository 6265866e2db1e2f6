"""In-process key-value backend for tests and local development."""

import asyncio
from typing import Dict, Optional
from ..utils.errors import StoreError
from ..utils.logging import get_logger
from .base import KeyValueStore

logger = get_logger("backends.memory")


class InMemoryKeyValueStore(KeyValueStore):
    """
    Dictionary-backed store.
    
    ``fail_reads`` / ``fail_writes`` make every call raise ``StoreError`` and
    ``latency`` delays every call, which is how the failure and ordering
    paths of the policy store are exercised.
    """
    
    def __init__(self, latency: float = 0.0):
        self._data: Dict[str, Dict[str, str]] = {}
        self.latency = latency
        self.fail_reads = False
        self.fail_writes = False
        self.reads = 0
        self.writes = 0
    
    async def _pause(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)
    
    async def get(self, namespace: str, key: str) -> Optional[str]:
        self.reads += 1
        await self._pause()
        if self.fail_reads:
            raise StoreError(f"read failed for {namespace}/{key}")
        return self._data.get(namespace, {}).get(key)
    
    async def set(self, namespace: str, key: str, value: str) -> None:
        self.writes += 1
        await self._pause()
        if self.fail_writes:
            raise StoreError(f"write failed for {namespace}/{key}")
        self._data.setdefault(namespace, {})[key] = value
    
    def dump(self, namespace: str) -> Dict[str, str]:
        """Snapshot of one namespace."""
        return dict(self._data.get(namespace, {}))
    
    def seed(self, namespace: str, key: str, value: str) -> None:
        """Write synchronously, bypassing failure switches."""
        self._data.setdefault(namespace, {})[key] = value
