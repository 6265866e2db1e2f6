"""Layered configuration loading (defaults, user, project, explicit file)."""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from .paths import get_defaults_path, get_user_config_path, get_project_config_path, get_env_config_path
from ..utils.errors import ConfigError
from ..utils.logging import get_logger

logger = get_logger("config.manager")


def read_yaml(path: Path) -> Dict[str, Any]:
    """
    Read a YAML mapping from disk.
    
    Args:
        path: File to read
        
    Returns:
        Parsed mapping (empty dict for an empty file)
        
    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}")
    
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a dictionary: {path}")
    return data


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the full config tree.
    
    Later layers override earlier ones: packaged defaults, user config,
    project config, then ``config_path`` (or ``LANGCAT_CONFIG``).
    Optional user/project files that fail to load are skipped with a
    warning; an explicit file that fails to load raises.
    
    Args:
        config_path: Optional explicit config file
        
    Returns:
        Merged configuration dictionary
    """
    config = read_yaml(get_defaults_path())
    
    for optional_path in (get_user_config_path(), get_project_config_path()):
        if optional_path is None or not optional_path.exists():
            continue
        try:
            _deep_merge(config, read_yaml(optional_path))
            logger.info(f"Loaded config from {optional_path}")
        except ConfigError as e:
            logger.warning(f"Could not load config from {optional_path}: {e}")
    
    explicit = Path(config_path) if config_path else get_env_config_path()
    if explicit is not None:
        _deep_merge(config, read_yaml(explicit))
        logger.info(f"Loaded config from {explicit}")
    
    return config


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Deep merge override into base (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
