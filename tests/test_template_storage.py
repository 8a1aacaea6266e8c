"""Tests for template metadata files."""

import json

import pytest

from sotgen.generators.segments import ConfigurationError, Direction, SegmentType, VaultColor
from sotgen.generators.templates import (
    load_template_file, load_templates_from_dir, save_template, template_from_dict, template_to_dict,
)
from sotgen.validation import ValidationError


def _write(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


def _minimal(name="room", **extra):
    data = {
        "name": name,
        "schematicFileName": f"{name}.schem",
        "type": "SMALL_ROOM",
        "size": {"x": 5, "y": 4, "z": 5},
        "entryPoints": [{"relativePosition": {"x": 2, "y": 0, "z": 0}, "direction": "NORTH"}],
    }
    data.update(extra)
    return data


def test_save_and_load(tmp_path, catalog):
    library = catalog.get_template("library")
    path = save_template(library, tmp_path)
    assert path == tmp_path / "library.json"
    assert load_template_file(path) == library


def test_to_dict_uses_metadata_keys(catalog):
    data = template_to_dict(catalog.get_template("red_vault"))
    assert data["schematicFileName"] == "red_vault.schem"
    assert data["type"] == "VAULT_ROOM"
    assert data["containedVault"] == "RED"
    assert data["vaultLocationOffset"] == {"x": 4, "y": 1, "z": 2}
    assert "containedVaultKey" not in data
    assert data["entryPoints"][0]["direction"] == "SOUTH"


def test_from_dict_defaults():
    template = template_from_dict(_minimal())
    assert template.segment_type is SegmentType.SMALL_ROOM
    assert template.entry_points[0].direction is Direction.NORTH
    assert template.total_coins == 0
    assert template.coin_multiplier == 1.0
    assert not template.is_hub


def test_missing_type_defaults_by_hub_flag():
    data = _minimal()
    del data["type"]
    assert template_from_dict(data).segment_type is SegmentType.SMALL_ROOM
    data["isHub"] = True
    assert template_from_dict(data).segment_type is SegmentType.START


def test_lowercase_names_accepted():
    data = _minimal(type="corridor", containedVaultKey="gold", keyLocationOffset={"x": 1, "y": 1, "z": 1})
    data["entryPoints"][0]["direction"] = "north"
    template = template_from_dict(data)
    assert template.segment_type is SegmentType.CORRIDOR
    assert template.contained_key is VaultColor.GOLD


@pytest.mark.parametrize("change", [
    lambda d: d.pop("name"),
    lambda d: d.pop("schematicFileName"),
    lambda d: d.pop("size"),
    lambda d: d.update(size={"x": 5, "y": 4}),
    lambda d: d.update(size={"x": 0, "y": 4, "z": 5}),
    lambda d: d.update(type="ballroom"),
    lambda d: d.update(entryPoints=[{"relativePosition": {"x": 2, "y": 0, "z": 0}, "direction": "LEFT"}]),
    lambda d: d.update(entryPoints=[{"relativePosition": {"x": 9, "y": 0, "z": 0}, "direction": "EAST"}]),
    lambda d: d.update(entryPoints="north"),
    lambda d: d.update(containedVault="RED"),
    lambda d: d.update(containedVault="PURPLE", vaultLocationOffset={"x": 1, "y": 1, "z": 1}),
    lambda d: d.update(totalCoins="lots"),
])
def test_invalid_metadata(change):
    data = _minimal()
    change(data)
    with pytest.raises(ConfigurationError):
        template_from_dict(data)


def test_load_file_errors(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_template_file(broken)
    with pytest.raises(ConfigurationError):
        load_template_file(tmp_path / "missing.json")


def test_load_directory_skips_bad_files(tmp_path):
    _write(tmp_path / "a_room.json", _minimal("a_room"))
    (tmp_path / "b_broken.json").write_text("{not json", encoding='utf-8')
    bad = _minimal("c_room")
    del bad["size"]
    _write(tmp_path / "c_room.json", bad)
    _write(tmp_path / "d_room.json", _minimal("d_room"))
    (tmp_path / "notes.txt").write_text("ignored", encoding='utf-8')

    report = load_templates_from_dir(tmp_path)
    assert [t.name for t in report.templates] == ["a_room", "d_room"]
    assert report.failures == 2
    assert report.result.codes() == ["TMPL-001", "TMPL-001"]
    assert report.result.errors[1].segment == "c_room"
    assert report.result.errors[0].file_path.endswith("b_broken.json")
    with pytest.raises(ValidationError):
        report.raise_if_failed()


def test_load_directory_duplicate_names_keep_first(tmp_path):
    _write(tmp_path / "one.json", _minimal("room", totalCoins=1))
    _write(tmp_path / "two.json", _minimal("ROOM", totalCoins=2))
    report = load_templates_from_dir(tmp_path)
    assert len(report.templates) == 1
    assert report.templates[0].total_coins == 1
    assert report.failures == 1


def test_load_missing_directory(tmp_path):
    report = load_templates_from_dir(tmp_path / "nope")
    assert report.templates == []
    assert report.failures == 1


def test_roundtrip_directory_to_catalog(tmp_path, builtin_templates):
    for template in builtin_templates:
        save_template(template, tmp_path)
    report = load_templates_from_dir(tmp_path)
    report.raise_if_failed()
    catalog = report.to_catalog()
    assert len(catalog) == len(builtin_templates)
    assert catalog.get_template("hub").is_hub
