"""Tests for the command-line entry point."""

import json
import logging

from sotgen.cli import main
from sotgen.generators.templates import save_template
from sotgen.generators.templates.builtin import BUILTIN_TEMPLATES
from sotgen.pipeline import GenerationSettings, save_settings


def test_generate_to_files(tmp_path):
    out = tmp_path / "out" / "blueprint.json"
    dot = tmp_path / "out" / "blueprint.dot"
    code = main(["--seed", "7", "--max-segments", "12", "--output", str(out), "--dot", str(dot)])
    assert code == 0
    data = json.loads(out.read_text(encoding='utf-8'))
    assert data['seed'] == 7
    assert 1 < len(data['segments']) <= 12
    assert dot.read_text(encoding='utf-8').startswith("digraph")


def test_generate_to_stdout(capsys):
    assert main(["--seed", "3", "--origin", "100", "64", "100"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['hub_location'] == [100, 64, 100]


def test_templates_directory(tmp_path):
    for template in BUILTIN_TEMPLATES:
        save_template(template, tmp_path / "templates")
    out = tmp_path / "bp.json"
    assert main(["--templates", str(tmp_path / "templates"), "--seed", "1", "--output", str(out)]) == 0


def test_empty_templates_directory(tmp_path):
    (tmp_path / "empty").mkdir()
    assert main(["--templates", str(tmp_path / "empty")]) == 2
    assert main(["--templates", str(tmp_path / "missing")]) == 2


def test_settings_file(tmp_path):
    path = save_settings(GenerationSettings(seed=11, max_segments=4), "cli", tmp_path)
    out = tmp_path / "bp.json"
    assert main(["--settings", str(path), "--output", str(out)]) == 0
    data = json.loads(out.read_text(encoding='utf-8'))
    assert data['seed'] == 11
    assert len(data['segments']) <= 4


def test_bad_settings(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding='utf-8')
    assert main(["--settings", str(bad)]) == 1
    assert main(["--max-segments", "0"]) == 1


def test_wrongly_typed_settings_file(tmp_path):
    path = tmp_path / "typed.json"
    path.write_text(json.dumps({"seed": 1, "max_segments": "10"}), encoding='utf-8')
    assert main(["--settings", str(path)]) == 1


def test_verbose_from_settings_file(tmp_path):
    path = save_settings(GenerationSettings(seed=5, max_segments=3, verbose=True), "loud", tmp_path)
    root = logging.getLogger()
    previous = root.level
    try:
        root.setLevel(logging.INFO)
        assert main(["--settings", str(path), "--output", str(tmp_path / "bp.json")]) == 0
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)


def test_layout_and_requirement_options(tmp_path):
    out = tmp_path / "bp.json"
    code = main(["--seed", "1", "--max-depth", "2", "--prioritize-features",
                 "--require-vault", "blue", "--output", str(out)])
    assert code == 0
    data = json.loads(out.read_text(encoding='utf-8'))
    assert all(s['depth'] <= 2 for s in data['segments'])
    assert 'blue' in data['vaults']
    assert main(["--seed", "1", "--require-vault", "purple"]) == 1
    assert main(["--seed", "1", "--require-key", "nope"]) == 1
