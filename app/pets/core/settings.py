"""Settings file I/O operations.

Settings are read from a TOML file and validated with Pydantic. Command
line flags override them. A missing settings file is not an error: the
defaults apply.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pets.core.paths import get_default_conf_dir, get_settings_path


class SettingsError(Exception):
    """Base exception for settings-related errors."""


class Settings(BaseModel):
    """Persistent pets settings.

    Attributes:
        conf_dir: Directory holding the annotated configuration files.
        debug: Log at DEBUG level.
        allow_missing_pre: Tolerate pre-update commands that are not
            installed yet.
    """

    model_config = ConfigDict(extra="forbid")

    conf_dir: Annotated[
        Path,
        Field(default_factory=get_default_conf_dir, description="Configuration directory"),
    ]
    debug: Annotated[bool, Field(description="Enable debug logging")] = False
    allow_missing_pre: Annotated[
        bool,
        Field(description="Tolerate missing pre-update commands"),
    ] = True


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings; defaults if the file does not exist.

    Raises:
        SettingsError: If the file cannot be read, parsed, or validated.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def _settings_to_dict(settings: Settings) -> dict[str, Any]:
    return {
        "conf_dir": str(settings.conf_dir),
        "debug": settings.debug,
        "allow_missing_pre": settings.allow_missing_pre,
    }


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file atomically.

    Args:
        settings: Settings to save.
        path: Destination. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
