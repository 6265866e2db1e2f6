"""Abstract base class for key-value store backends."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Asynchronous namespaced string store holding persisted policies.
    
    Backends only move strings around. They know nothing about policies,
    caching or defaults. Any failure to reach the store must be raised as
    ``StoreError`` so callers can recover from it.
    """
    
    @abstractmethod
    async def get(self, namespace: str, key: str) -> Optional[str]:
        """
        Read a value.
        
        Args:
            namespace: Store namespace (e.g. ``lcatpolicy``)
            key: Key within the namespace
            
        Returns:
            Stored value, or None if the key does not exist
            
        Raises:
            StoreError: If the store cannot be read
        """
        pass
    
    @abstractmethod
    async def set(self, namespace: str, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.
        
        Raises:
            StoreError: If the store cannot be written
        """
        pass
    
    async def close(self) -> None:
        """Release connections held by the backend."""
        return None
