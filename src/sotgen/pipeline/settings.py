"""
Generation settings and their persistence.

Settings are plain dataclasses; saved settings live as JSON files under
~/.config/sotgen/settings/.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..generators.layout import DEFAULT_MAX_DISTANCE, DEFAULT_MAX_SEGMENTS, DEFAULT_MAX_TRIES_PER_ENTRANCE
from ..generators.segments import VaultColor

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5
GRAPH_DUMP_FORMATS = ("dot", "json")


@dataclass
class GenerationSettings:
    # Placement
    seed: Optional[int] = None  # None = random seed, otherwise deterministic
    max_distance: int = DEFAULT_MAX_DISTANCE
    max_segments: int = DEFAULT_MAX_SEGMENTS
    max_tries_per_entrance: int = DEFAULT_MAX_TRIES_PER_ENTRANCE
    max_depth: Optional[int] = None
    prioritize_features: bool = False

    # Retries
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_segments: int = 1  # segments beyond the hub for an attempt to count
    required_vaults: Tuple[str, ...] = ()
    required_keys: Tuple[str, ...] = ()

    # Hardening
    timeout_seconds: Optional[float] = None

    # Debug output
    enable_graph_dump: bool = False
    graph_dump_format: str = "dot"
    output_dir: Optional[str] = None
    name: str = "dungeon"

    verbose: bool = False

    def __post_init__(self):
        # a lone colour name is one colour, not a sequence of letters
        if isinstance(self.required_vaults, str):
            self.required_vaults = (self.required_vaults,)
        if isinstance(self.required_keys, str):
            self.required_keys = (self.required_keys,)
        self.required_vaults = tuple(self.required_vaults)
        self.required_keys = tuple(self.required_keys)

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the settings are usable."""
        errors = []
        if self.max_distance < 0:
            errors.append("Max distance must not be negative")
        if self.max_segments < 1:
            errors.append("Max segments must be at least 1")
        if self.max_tries_per_entrance < 1:
            errors.append("Max tries per entrance must be at least 1")
        if self.max_depth is not None and self.max_depth < 1:
            errors.append("Max depth must be at least 1")
        if self.max_attempts < 1:
            errors.append("Max attempts must be at least 1")
        if self.min_segments < 0:
            errors.append("Min segments must not be negative")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            errors.append("Timeout must be positive")
        if self.graph_dump_format not in GRAPH_DUMP_FORMATS:
            errors.append(f"Graph dump format must be one of {', '.join(GRAPH_DUMP_FORMATS)}")
        for label, names in (("vault", self.required_vaults), ("key", self.required_keys)):
            for color in names:
                try:
                    VaultColor.parse(color)
                except ValueError:
                    errors.append(f"Unknown required {label} color: {color}")
        return errors

    def vault_colors(self) -> List[VaultColor]:
        return [VaultColor.parse(c) for c in self.required_vaults]

    def key_colors(self) -> List[VaultColor]:
        return [VaultColor.parse(c) for c in self.required_keys]


# -- persistence --

def get_settings_dir() -> Path:
    """
    Get the directory for storing saved settings.

    Returns:
        Path to ~/.config/sotgen/settings/
        Creates the directory if it doesn't exist.
    """
    config_dir = Path.home() / ".config" / "sotgen" / "settings"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def _settings_to_dict(settings: GenerationSettings) -> Dict[str, Any]:
    data = asdict(settings)
    data["required_vaults"] = list(settings.required_vaults)
    data["required_keys"] = list(settings.required_keys)
    return data


# Accepted JSON types per field; None is allowed only where listed
_NUMBER = (int, float)
_FIELD_TYPES: Dict[str, Tuple[tuple, bool]] = {
    'seed': ((int,), True),
    'max_distance': (_NUMBER, False),
    'max_segments': ((int,), False),
    'max_tries_per_entrance': ((int,), False),
    'max_depth': ((int,), True),
    'prioritize_features': ((bool,), False),
    'max_attempts': ((int,), False),
    'min_segments': ((int,), False),
    'required_vaults': ((list, tuple, str), False),
    'required_keys': ((list, tuple, str), False),
    'timeout_seconds': (_NUMBER, True),
    'enable_graph_dump': ((bool,), False),
    'graph_dump_format': ((str,), False),
    'output_dir': ((str,), True),
    'name': ((str,), False),
    'verbose': ((bool,), False),
}


def _check_value(key: str, value: Any):
    """
    Raises:
        ValueError: If `value` has the wrong JSON type for `key`
    """
    types, nullable = _FIELD_TYPES[key]
    if value is None:
        if nullable:
            return
        raise ValueError(f"Setting '{key}' must not be null")
    # bool is an int subclass; true/false only count for bool fields
    if isinstance(value, bool) and bool not in types:
        raise ValueError(f"Setting '{key}' must be a number, got {value!r}")
    if not isinstance(value, types):
        expected = " or ".join(t.__name__ for t in types)
        raise ValueError(f"Setting '{key}' must be {expected}, got {type(value).__name__}")
    if isinstance(value, (list, tuple)) and not all(isinstance(v, str) for v in value):
        raise ValueError(f"Setting '{key}' must be a list of colour names")


def _dict_to_settings(data: Dict[str, Any]) -> GenerationSettings:
    """
    Create settings from a dictionary, ignoring unknown keys.

    Raises:
        ValueError: If a known key holds a value of the wrong type
    """
    known = {f.name for f in fields(GenerationSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))
    values = {k: v for k, v in data.items() if k in known}
    for key, value in values.items():
        _check_value(key, value)
    return GenerationSettings(**values)


def _sanitize_filename(name: str) -> str:
    safe = name.lower().replace(" ", "_")
    safe = "".join(c for c in safe if c.isalnum() or c in "_-")
    return safe or "settings"


def save_settings(settings: GenerationSettings, name: str, directory: Optional[Path] = None) -> Path:
    """
    Save settings under a name.

    Args:
        settings: Settings to save
        name: Preset name (converted to a filename)
        directory: Target directory (default: get_settings_dir())

    Returns:
        Path to the saved file
    """
    directory = Path(directory) if directory is not None else get_settings_dir()
    directory.mkdir(parents=True, exist_ok=True)
    file_path = directory / (_sanitize_filename(name) + ".json")

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(_settings_to_dict(settings), f, indent=2, ensure_ascii=False)

    return file_path


def load_settings_from_path(file_path: Path) -> Optional[GenerationSettings]:
    """
    Load settings from a specific file path.

    Returns:
        GenerationSettings if valid, None otherwise
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return None

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            logger.warning("Settings file is not a JSON object: %s", file_path)
            return None
        return _dict_to_settings(data)
    except (json.JSONDecodeError, TypeError, ValueError) as e:
        logger.warning("Invalid settings file %s: %s", file_path, e)
        return None


def load_settings(name: str, directory: Optional[Path] = None) -> Optional[GenerationSettings]:
    """Load settings saved under `name`, or None if missing or invalid."""
    directory = Path(directory) if directory is not None else get_settings_dir()
    return load_settings_from_path(directory / (_sanitize_filename(name) + ".json"))


def list_saved_settings(directory: Optional[Path] = None) -> List[str]:
    directory = Path(directory) if directory is not None else get_settings_dir()
    return sorted(p.stem for p in directory.glob("*.json"))
