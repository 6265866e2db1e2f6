"""Policy cache and persistence orchestration."""

from .cache import PolicyCache
from .policy_store import PolicyStore, Identity

__all__ = ["PolicyCache", "PolicyStore", "Identity"]
