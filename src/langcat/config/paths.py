"""Config path resolution for the two-tier config system."""

import os
from pathlib import Path
from typing import Optional

CONFIG_ENV_VAR = "LANGCAT_CONFIG"


def get_defaults_path() -> Path:
    """Packaged defaults shipped next to this module."""
    return Path(__file__).parent / "defaults.yaml"


def get_user_config_path() -> Path:
    """Get user config path: ~/.langcat/config.yaml"""
    return Path.home() / ".langcat" / "config.yaml"


def get_project_config_path() -> Optional[Path]:
    """Get project config path: .langcat/config.yaml (from current working directory)"""
    project_config = Path.cwd() / ".langcat" / "config.yaml"
    if project_config.exists():
        return project_config
    return None


def get_env_config_path() -> Optional[Path]:
    """Explicit config file named by the LANGCAT_CONFIG environment variable."""
    raw = (os.getenv(CONFIG_ENV_VAR) or "").strip()
    return Path(raw) if raw else None
