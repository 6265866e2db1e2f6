"""Typed settings built from the merged config tree."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator
from ..policy.models import DefaultPolicy, Mode
from ..policy.engine import normalize
from ..utils.errors import ConfigError
from ..utils.logging import get_logger

logger = get_logger("config.settings")


class StorageSettings(BaseModel):
    """Where persisted policies live."""

    backend: str = Field(default="memory", description="Backend name: memory or redis")
    url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    socket_timeout: Optional[float] = Field(default=5.0, description="Redis socket timeout in seconds")

    @field_validator("backend", mode="before")
    @classmethod
    def _lower_backend(cls, value):
        return str(value or "memory").strip().lower()


class PolicyStorageSettings(BaseModel):
    namespace: str = Field(default="lcatpolicy", description="Store namespace for policies")
    key_prefix: str = Field(default="lcat:", description="Prefix prepended to every identity")


class DefaultPolicySettings(BaseModel):
    """Raw default policy as written in config."""

    mode: str = Field(default="ALL", description="Default mode name")
    categories: List[str] = Field(default_factory=list, description="Default categories")

    @field_validator("categories", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return value or []


class TranslationPolicySettings(BaseModel):
    storage: PolicyStorageSettings = Field(default_factory=PolicyStorageSettings)
    default: DefaultPolicySettings = Field(default_factory=DefaultPolicySettings)


class CacheSettings(BaseModel):
    max_entries: Optional[int] = Field(default=10000, ge=1, description="LRU bound, None for unbounded")
    ttl_seconds: Optional[float] = Field(default=None, gt=0, description="Idle expiry, None to disable")


class Settings(BaseModel):
    """Complete langcat configuration."""

    db: str = Field(default="main", description="Logical database name")
    secret: str = Field(default="", description="Store password")
    storage: StorageSettings = Field(default_factory=StorageSettings)
    translation_policy: TranslationPolicySettings = Field(default_factory=TranslationPolicySettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    @property
    def namespace(self) -> str:
        return self.translation_policy.storage.namespace

    @property
    def key_prefix(self) -> str:
        return self.translation_policy.storage.key_prefix

    def default_policy(self) -> DefaultPolicy:
        """
        Build the global default policy.

        An unknown mode name is logged and replaced by ALL.

        Returns:
            Frozen DefaultPolicy in normalized form
        """
        raw = self.translation_policy.default
        mode_name = str(raw.mode or "").strip().upper()
        try:
            mode = Mode(mode_name)
        except ValueError:
            logger.warning(f"Invalid default policy mode '{raw.mode}', defaulting to ALL")
            mode = Mode.ALL

        # normalize through a mutable policy, then freeze
        policy = normalize(DefaultPolicy(mode=mode, cats=raw.categories).to_policy())
        return DefaultPolicy(mode=policy.mode, cats=policy.cats)


def build_settings(config: Dict[str, Any]) -> Settings:
    """
    Validate a merged config dictionary.

    Raises:
        ConfigError: If a value has the wrong shape
    """
    try:
        return Settings(**config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")
