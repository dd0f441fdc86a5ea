"""Config layer: command presets loaded from a JSON file.

The preset file is looked up in this order:

1. the ``--config`` path given on the command line
2. ``$BAKESH_CONFIG``
3. ``.bakesh.json`` or ``bakesh.json`` in the working directory
4. ``~/.bakesh.json``

A file named by 1 or 2 must exist. A missing file at 3 or 4 just means
there are no presets.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .exceptions import PresetError
from .models import Preset, PresetFile

__all__ = [
    "CONFIG_ENV_VAR",
    "get_preset",
    "load_presets",
    "parse_key_value_pairs",
    "resolve_config_path",
]

CONFIG_ENV_VAR = "BAKESH_CONFIG"
LOCAL_NAMES = (".bakesh.json", "bakesh.json")


def parse_key_value_pairs(items: List[str]) -> Dict[str, str]:
    """
    Parse key=value pairs from CLI flags.

    Args:
        items: List of "key=value" strings

    Returns:
        Dictionary of parsed key-value pairs

    Raises:
        ValueError: If any item doesn't contain '='
    """
    result = {}
    for item in items:
        if "=" not in item:
            raise ValueError(f"Invalid format: {item} (expected key=value)")
        key, value = item.split("=", 1)
        result[key] = value
    return result


def _requested_path(cli_path: Optional[str | Path]) -> Optional[Path]:
    """The preset file the caller named explicitly, if any."""
    if cli_path:
        return Path(cli_path).expanduser()
    env = os.getenv(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return None


def resolve_config_path(cli_path: Optional[str | Path] = None) -> Path:
    """Pick the preset file to read, following the lookup order above."""
    requested = _requested_path(cli_path)
    if requested is not None:
        return requested
    cwd = Path.cwd()
    for name in LOCAL_NAMES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return Path.home() / LOCAL_NAMES[0]


def _read_preset_data(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise PresetError(f"Preset file {path} is not UTF-8: {e}") from e
    except ValueError as e:
        raise PresetError(f"Invalid JSON in {path}: {e}") from e


def load_presets(path: Optional[str | Path] = None) -> PresetFile:
    """Load and validate the preset file."""
    explicit = _requested_path(path) is not None
    resolved = resolve_config_path(path)
    if not resolved.exists():
        if explicit:
            raise PresetError(f"Preset file not found: {resolved}")
        return PresetFile(config_path=resolved)
    data = _read_preset_data(resolved)
    try:
        presets = PresetFile.model_validate(data)
    except ValidationError as e:
        raise PresetError(f"Invalid preset file {resolved}: {e}") from e
    presets.config_path = resolved
    return presets


def get_preset(name: str, path: Optional[str | Path] = None) -> Preset:
    """Get preset by name, raising PresetError if not found."""
    presets = load_presets(path)
    preset = next((p for p in presets.presets if p.name == name), None)
    if preset is None:
        raise PresetError(f"Preset not found: {name}")
    return preset
