"""Tests for generation settings and their persistence."""

import json

import pytest

from sotgen.generators.segments import VaultColor
from sotgen.pipeline import (
    GenerationSettings, list_saved_settings, load_settings, load_settings_from_path, save_settings,
)


def test_defaults():
    settings = GenerationSettings()
    assert settings.validate() == []
    assert settings.max_distance == 200
    assert settings.max_segments == 50
    assert settings.max_tries_per_entrance == 5
    assert settings.max_attempts == 5
    assert settings.seed is None


@pytest.mark.parametrize("field,value", [
    ("max_distance", -1),
    ("max_segments", 0),
    ("max_tries_per_entrance", 0),
    ("max_depth", 0),
    ("max_attempts", 0),
    ("min_segments", -1),
    ("timeout_seconds", 0),
    ("graph_dump_format", "svg"),
    ("required_vaults", ("purple",)),
    ("required_keys", ("nope",)),
])
def test_invalid_values(field, value):
    settings = GenerationSettings(**{field: value})
    assert len(settings.validate()) == 1


def test_color_lists():
    settings = GenerationSettings(required_vaults=["red", "GOLD"], required_keys=["green"])
    assert settings.required_vaults == ("red", "GOLD")
    assert settings.vault_colors() == [VaultColor.RED, VaultColor.GOLD]
    assert settings.key_colors() == [VaultColor.GREEN]


def test_save_and_load(tmp_path):
    settings = GenerationSettings(seed=42, max_distance=120, required_vaults=("red",), prioritize_features=True)
    path = save_settings(settings, "Big Run!", tmp_path)
    assert path.name == "big_run.json"
    assert load_settings("Big Run!", tmp_path) == settings
    assert load_settings_from_path(path) == settings
    assert list_saved_settings(tmp_path) == ["big_run"]


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "extra.json"
    path.write_text(json.dumps({"seed": 3, "colour_scheme": "dark"}), encoding='utf-8')
    settings = load_settings_from_path(path)
    assert settings.seed == 3


def test_bad_files_return_none(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("[1, 2", encoding='utf-8')
    assert load_settings_from_path(broken) is None
    not_object = tmp_path / "list.json"
    not_object.write_text("[1, 2]", encoding='utf-8')
    assert load_settings_from_path(not_object) is None
    assert load_settings_from_path(tmp_path / "missing.json") is None


@pytest.mark.parametrize("data", [
    {"seed": 1, "max_segments": "10"},
    {"max_distance": "far"},
    {"max_attempts": True},
    {"verbose": "yes"},
    {"max_segments": None},
    {"required_keys": ["red", 3]},
])
def test_wrongly_typed_values_rejected(tmp_path, data):
    path = tmp_path / "typed.json"
    path.write_text(json.dumps(data), encoding='utf-8')
    assert load_settings_from_path(path) is None


def test_single_color_string(tmp_path):
    settings = GenerationSettings(required_vaults="red")
    assert settings.required_vaults == ("red",)
    assert settings.validate() == []
    path = tmp_path / "lone.json"
    path.write_text(json.dumps({"required_vaults": "red"}), encoding='utf-8')
    assert load_settings_from_path(path).required_vaults == ("red",)
