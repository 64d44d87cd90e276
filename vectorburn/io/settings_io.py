"""
Settings File I/O for VectorBurn

Saves and loads GCodeSettings as JSON objects keyed by field name.
"""

import json
import logging
import math
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..laser.gcode_generator import GCodeSettings

logger = logging.getLogger(__name__)


def save_settings(settings: GCodeSettings, filepath: Union[str, Path]) -> bool:
    """
    Save settings to a JSON file.

    Args:
        settings: The settings to save
        filepath: Path to save the file

    Returns:
        True if successful, False otherwise
    """
    try:
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(settings_to_dict(settings), f, indent=2)
        return True
    except OSError as e:
        logger.error("Error saving settings to %s: %s", filepath, e)
        return False


def load_settings(filepath: Union[str, Path]) -> Optional[GCodeSettings]:
    """
    Load settings from a JSON file.

    Args:
        filepath: Path to the settings file

    Returns:
        GCodeSettings if successful, None otherwise
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("Error loading settings from %s: %s", filepath, e)
        return None

    if not isinstance(data, dict):
        logger.error("Settings file %s does not contain a JSON object", filepath)
        return None

    return settings_from_dict(data)


def settings_to_dict(settings: GCodeSettings) -> Dict[str, Any]:
    """Convert GCodeSettings to dictionary."""
    return asdict(settings)


def _coerce(value: Any, default: Any) -> Any:
    """Convert value to the type of default. Raises ValueError/TypeError on mismatch."""
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError(f"expected true or false, got {value!r}")
        return value
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {value!r}")
    if isinstance(default, int):
        number = float(value)
        if not number.is_integer():
            raise ValueError(f"expected a whole number, got {value!r}")
        return int(number)
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"expected a finite number, got {value!r}")
    return number


def settings_from_dict(data: Dict[str, Any]) -> GCodeSettings:
    """
    Convert dictionary to GCodeSettings.

    Unknown keys are ignored with a warning; values of the wrong type keep
    the field's default.
    """
    defaults = GCodeSettings()
    known = {f.name for f in fields(GCodeSettings)}

    for key in data:
        if key not in known:
            logger.warning("Ignoring unknown setting '%s'", key)

    values = {}
    for name in known:
        if name not in data:
            continue
        default = getattr(defaults, name)
        try:
            values[name] = _coerce(data[name], default)
        except (ValueError, TypeError) as e:
            logger.warning("Invalid value for setting '%s' (%s), using default %r",
                           name, e, default)

    return GCodeSettings(**values)
