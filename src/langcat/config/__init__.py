"""Configuration module: load settings for the policy store and its backend."""

from typing import Optional
from .manager import load_config, read_yaml
from .paths import get_defaults_path, get_user_config_path, get_project_config_path
from .settings import Settings, build_settings
from ..utils.logging import get_logger

logger = get_logger("config")

__all__ = [
    "Settings",
    "load_settings",
    "load_config",
    "build_settings",
    "read_yaml",
    "get_defaults_path",
    "get_user_config_path",
    "get_project_config_path",
]


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Load and validate settings.
    
    Args:
        config_path: Optional explicit config file layered over the defaults
        
    Returns:
        Validated Settings
        
    Raises:
        ConfigError: If a file cannot be read or holds invalid values
    """
    settings = build_settings(load_config(config_path))
    logger.debug(
        f"Settings loaded: backend={settings.storage.backend} "
        f"namespace={settings.namespace} prefix={settings.key_prefix}"
    )
    return settings
