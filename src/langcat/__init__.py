"""langcat - per-identity category gating backed by a remote key-value store."""

from .policy import Policy, DefaultPolicy, Mode, decide, encode_policy, decode_policy
from .store import PolicyStore, PolicyCache
from .service import LangCategory
from .utils.errors import LangCatError, StoreError, DecodeError, ConfigError

__version__ = "0.1.0"

__all__ = [
    "LangCategory",
    "PolicyStore",
    "PolicyCache",
    "Policy",
    "DefaultPolicy",
    "Mode",
    "decide",
    "encode_policy",
    "decode_policy",
    "LangCatError",
    "StoreError",
    "DecodeError",
    "ConfigError",
]
