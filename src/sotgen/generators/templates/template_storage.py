"""
Template persistence: segment metadata JSON files.

Each template lives in its own <name>.json file next to its schematic:

    {
      "name": "corridor_ns",
      "schematicFileName": "corridor_ns.schem",
      "type": "CORRIDOR",
      "size": {"x": 3, "y": 6, "z": 3},
      "entryPoints": [
        {"relativePosition": {"x": 1, "y": 0, "z": 0}, "direction": "NORTH"}
      ],
      "sandSpawnLocations": [{"x": 1, "y": 1, "z": 1}],
      "itemSpawnLocations": [],
      "coinSpawnLocations": [],
      "totalCoins": 0,
      "coinMultiplier": 1.0,
      "isHub": false,
      "isPuzzleRoom": false,
      "isLavaParkour": false,
      "containedVault": "RED",
      "vaultLocationOffset": {"x": 1, "y": 1, "z": 1}
    }

Loading a directory never stops at a bad file: each rejected file is logged
and reported as a TMPL-001 issue in the returned TemplateLoadReport.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...validation.core import ValidationError, ValidationResult, ValidationStage
from ...validation.rules import TMPL_001
from ..segments import (
    BlockPos, ConfigurationError, Direction, RelativeEntryPoint, SegmentTemplate, SegmentType, VaultColor,
)
from .catalog import TemplateCatalog

logger = logging.getLogger(__name__)


@dataclass
class TemplateLoadReport:
    """Outcome of loading a directory of template files.

    Attributes:
        templates: Successfully loaded templates, in file name order
        result: One TMPL-001 FAIL issue per rejected file
    """
    templates: List[SegmentTemplate] = field(default_factory=list)
    result: ValidationResult = field(
        default_factory=lambda: ValidationResult(stage=ValidationStage.TEMPLATE_LOAD))

    @property
    def failures(self) -> int:
        return len(self.result.errors)

    def to_catalog(self) -> TemplateCatalog:
        catalog = TemplateCatalog()
        catalog.register_all(self.templates)
        return catalog

    def raise_if_failed(self):
        """Raise ValidationError if any file was rejected."""
        if self.result.failed:
            raise ValidationError(self.result)


# -- dict conversion --

def _vec_to_dict(vec: BlockPos) -> Dict[str, int]:
    return {"x": vec.x, "y": vec.y, "z": vec.z}


def _dict_to_vec(data: Any, field_name: str, template_name: Optional[str]) -> BlockPos:
    if not isinstance(data, dict):
        raise ConfigurationError(f"'{field_name}' must be an object with x, y, z", template_name)
    try:
        return BlockPos(int(data["x"]), int(data["y"]), int(data["z"]))
    except (KeyError, TypeError, ValueError):
        raise ConfigurationError(f"'{field_name}' needs integer x, y and z", template_name) from None


def _vec_list(data: Dict[str, Any], key: str, name: str) -> List[BlockPos]:
    values = data.get(key) or []
    if not isinstance(values, list):
        raise ConfigurationError(f"'{key}' must be a list", name)
    return [_dict_to_vec(v, f"{key}[{i}]", name) for i, v in enumerate(values)]


def _optional_color(data: Dict[str, Any], key: str, name: str) -> Optional[VaultColor]:
    value = data.get(key)
    if value is None:
        return None
    try:
        return VaultColor.parse(value)
    except ValueError as e:
        raise ConfigurationError(str(e), name) from None


def template_to_dict(template: SegmentTemplate) -> Dict[str, Any]:
    """Convert a SegmentTemplate to a JSON-serializable dictionary."""
    data: Dict[str, Any] = {
        "name": template.name,
        "schematicFileName": template.schematic_file,
        "type": template.segment_type.name,
        "size": _vec_to_dict(template.size),
        "entryPoints": [
            {"relativePosition": _vec_to_dict(e.offset), "direction": e.direction.name}
            for e in template.entry_points
        ],
        "sandSpawnLocations": [_vec_to_dict(v) for v in template.sand_spawns],
        "itemSpawnLocations": [_vec_to_dict(v) for v in template.item_spawns],
        "coinSpawnLocations": [_vec_to_dict(v) for v in template.coin_spawns],
        "totalCoins": template.total_coins,
        "coinMultiplier": template.coin_multiplier,
        "isHub": template.is_hub,
        "isPuzzleRoom": template.is_puzzle_room,
        "isLavaParkour": template.is_lava_parkour,
    }
    if template.contained_vault is not None:
        data["containedVault"] = template.contained_vault.name
        data["vaultLocationOffset"] = _vec_to_dict(template.vault_offset)
    if template.contained_key is not None:
        data["containedVaultKey"] = template.contained_key.name
        data["keyLocationOffset"] = _vec_to_dict(template.key_offset)
    return data


def template_from_dict(data: Dict[str, Any]) -> SegmentTemplate:
    """
    Create a SegmentTemplate from a metadata dictionary.

    A missing "type" defaults to START for hubs and SMALL_ROOM otherwise.

    Raises:
        ConfigurationError: If required fields are missing or inconsistent
    """
    if not isinstance(data, dict):
        raise ConfigurationError("Template metadata must be a JSON object")
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError("Missing or invalid 'name'")
    schematic = data.get("schematicFileName")
    if not isinstance(schematic, str) or not schematic.strip():
        raise ConfigurationError("Missing or invalid 'schematicFileName'", name)
    if "size" not in data:
        raise ConfigurationError("Missing 'size'", name)

    is_hub = bool(data.get("isHub", False))
    type_name = data.get("type")
    try:
        if type_name is None:
            segment_type = SegmentType.START if is_hub else SegmentType.SMALL_ROOM
        else:
            segment_type = SegmentType.parse(type_name)
    except ValueError as e:
        raise ConfigurationError(str(e), name) from None

    entry_points = []
    raw_entries = data.get("entryPoints") or []
    if not isinstance(raw_entries, list):
        raise ConfigurationError("'entryPoints' must be a list", name)
    for i, raw in enumerate(raw_entries):
        if not isinstance(raw, dict):
            raise ConfigurationError(f"entryPoints[{i}] must be an object", name)
        offset = _dict_to_vec(raw.get("relativePosition"), f"entryPoints[{i}].relativePosition", name)
        try:
            direction = Direction.parse(raw.get("direction"))
        except ValueError as e:
            raise ConfigurationError(f"entryPoints[{i}]: {e}", name) from None
        entry_points.append(RelativeEntryPoint(offset, direction))

    vault_offset = None
    if data.get("vaultLocationOffset") is not None:
        vault_offset = _dict_to_vec(data["vaultLocationOffset"], "vaultLocationOffset", name)
    key_offset = None
    if data.get("keyLocationOffset") is not None:
        key_offset = _dict_to_vec(data["keyLocationOffset"], "keyLocationOffset", name)

    try:
        total_coins = int(data.get("totalCoins", 0))
        coin_multiplier = float(data.get("coinMultiplier", 1.0))
    except (TypeError, ValueError):
        raise ConfigurationError("'totalCoins' and 'coinMultiplier' must be numbers", name) from None

    return SegmentTemplate(
        name=name,
        segment_type=segment_type,
        size=_dict_to_vec(data["size"], "size", name),
        entry_points=entry_points,
        schematic_file=schematic,
        sand_spawns=_vec_list(data, "sandSpawnLocations", name),
        item_spawns=_vec_list(data, "itemSpawnLocations", name),
        coin_spawns=_vec_list(data, "coinSpawnLocations", name),
        total_coins=total_coins,
        coin_multiplier=coin_multiplier,
        is_hub=is_hub,
        is_puzzle_room=bool(data.get("isPuzzleRoom", False)),
        is_lava_parkour=bool(data.get("isLavaParkour", False)),
        contained_vault=_optional_color(data, "containedVault", name),
        vault_offset=vault_offset,
        contained_key=_optional_color(data, "containedVaultKey", name),
        key_offset=key_offset,
    )


def _sanitize_filename(name: str) -> str:
    """
    Sanitize a template name for use as a filename.

    Returns:
        A safe filename (lowercase, spaces replaced with underscores, special chars removed)
    """
    safe = name.lower().replace(" ", "_")
    safe = "".join(c for c in safe if c.isalnum() or c in "_-")
    return safe or "segment"


# -- files --

def save_template(template: SegmentTemplate, directory: Path) -> Path:
    """
    Save a template's metadata to `directory`.

    Args:
        template: The template to save
        directory: Target directory (created if missing)

    Returns:
        Path to the saved file

    Raises:
        OSError: If the file cannot be written
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    file_path = directory / (_sanitize_filename(template.name) + ".json")

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(template_to_dict(template), f, indent=2, ensure_ascii=False)

    logger.info("Saved segment template '%s' to %s", template.name, file_path)
    return file_path


def load_template_file(file_path: Path) -> SegmentTemplate:
    """
    Load one template metadata file.

    Raises:
        ConfigurationError: If the file is unreadable, not JSON, or invalid
    """
    file_path = Path(file_path)
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read {file_path.name}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {file_path.name}: {e}") from e
    return template_from_dict(data)


def load_templates_from_dir(directory: Path) -> TemplateLoadReport:
    """
    Load every *.json template file directly inside `directory`.

    Files are read in name order. Bad files are skipped, logged, and recorded
    in the report; duplicate names keep the first file.

    Args:
        directory: Directory holding template metadata files

    Returns:
        TemplateLoadReport with loaded templates and per-file failures
    """
    directory = Path(directory)
    report = TemplateLoadReport()
    if not directory.is_dir():
        report.result.add_issue(TMPL_001.issue(
            file_path=str(directory), reason="template directory does not exist"))
        logger.error("Template directory not found: %s", directory)
        return report

    files = sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".json")
    if not files:
        logger.info("No template files found in %s", directory)

    seen = set()
    for file_path in files:
        try:
            template = load_template_file(file_path)
            if template.name.lower() in seen:
                raise ConfigurationError("Duplicate template name", template.name)
        except ConfigurationError as e:
            logger.warning("Skipping template file %s: %s", file_path.name, e)
            report.result.add_issue(TMPL_001.issue(
                segment=e.template_name, file_path=str(file_path), reason=str(e)))
            continue
        seen.add(template.name.lower())
        report.templates.append(template)
        logger.debug("Loaded segment template '%s' from %s", template.name, file_path.name)

    logger.info("Loaded %d segment templates from %s (%d rejected)",
                len(report.templates), directory, report.failures)
    return report
