"""XDG-compliant path management for pets.

This module provides the locations of the settings file and the default
configuration directory holding annotated configuration files.

XDG defaults:
- Settings: ~/.config/pets/config.toml
- Configuration files: ~/pets/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pets"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the settings directory path.

    Returns:
        Path to ~/.config/pets/ (or XDG_CONFIG_HOME/pets/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/pets/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_default_conf_dir() -> Path:
    """Get the default directory of annotated configuration files.

    Returns:
        Path to ~/pets/.
    """
    return Path.home() / APP_NAME
