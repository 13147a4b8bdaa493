"""User settings for the rawedit editor.

Settings are read from a JSON file in the OS-appropriate config directory.
The editor only ever reads this file; it never writes it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

APP_NAME = "rawedit"
SETTINGS_FILENAME = "settings.json"


@dataclass
class EditorSettings:
    """Tunable editor behaviour."""
    read_timeout_deciseconds: int = EditorConstants.READ_TIMEOUT_DECISECONDS
    read_size: int = EditorConstants.READ_INPUT_SIZE
    line_enlarge_size: int = EditorConstants.LINE_ENLARGE_SIZE
    abort_on_unsupported_input: bool = False
    log_level: str = "WARNING"
    log_file: Optional[str] = None


# Positive integers; everything else is validated by type alone
_POSITIVE_INTS = {"read_size", "line_enlarge_size"}


def default_settings_path() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME)) / SETTINGS_FILENAME


def _read_settings_file(path: Path) -> Dict[str, Any]:
    """Load the raw settings dict; a missing or bad file yields {}."""
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return {}
    return data


def _valid_value(name: str, default: Any, value: Any) -> bool:
    if default is None:
        return value is None or isinstance(value, str)
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        if name in _POSITIVE_INTS:
            return value > 0
        return 0 <= value <= 255  # VTIME is a single cc byte
    return isinstance(value, type(default))


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Read settings, falling back to defaults for anything missing or invalid.

    Args:
        path: Settings file to read. Defaults to the user config directory.
    """
    path = Path(path) if path is not None else default_settings_path()
    data = _read_settings_file(path)
    settings = EditorSettings()
    known = {f.name for f in fields(EditorSettings)}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Unknown setting {key!r} in {path}, ignoring")
            continue
        if not _valid_value(key, getattr(settings, key), value):
            logger.warning(f"Invalid value {value!r} for setting {key!r}, using default")
            continue
        setattr(settings, key, value)
    return settings
