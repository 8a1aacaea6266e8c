"""Tests for the generation pipeline."""

import json

import pytest

from sotgen.generators.segments import BlockPos
from sotgen.generators.templates import TemplateCatalog
from sotgen.generators.templates.builtin import CORRIDOR_TEMPLATES, HUB_TEMPLATE
from sotgen.pipeline import GenerationPipeline, GenerationSettings, PipelineError, PipelineStage


@pytest.fixture
def corridor_catalog():
    catalog = TemplateCatalog()
    catalog.register(HUB_TEMPLATE)
    catalog.register_all(CORRIDOR_TEMPLATES)
    return catalog


def test_generate_succeeds(catalog):
    result = GenerationPipeline(catalog, GenerationSettings(seed=42)).generate()
    assert result.success, result.errors
    assert result.blueprint is not None
    assert result.seed == 42
    assert result.metrics['attempts'] == 1
    assert result.metrics['seed_used'] == 42
    assert result.metrics['segment_count'] == result.blueprint.segment_count
    assert result.validation.passed
    assert PipelineStage.COMPLETE in result.stages_completed
    assert result.total_time >= 0


def test_same_seed_same_blueprint(catalog):
    settings = GenerationSettings(seed=9)
    a = GenerationPipeline(catalog, settings).generate().blueprint
    b = GenerationPipeline(catalog, settings).generate().blueprint
    assert [(s.name, s.origin) for s in a.segments] == [(s.name, s.origin) for s in b.segments]


def test_root_origin(catalog):
    result = GenerationPipeline(catalog, GenerationSettings(seed=4)).generate(BlockPos(500, 70, 500))
    assert result.blueprint.hub_location == BlockPos(500, 70, 500)


def test_random_seed_is_recorded(catalog):
    result = GenerationPipeline(catalog, GenerationSettings()).generate()
    assert isinstance(result.seed, int)
    assert result.blueprint.seed == result.metrics['seed_used']


def test_unmet_requirement_retries_then_fails(corridor_catalog):
    settings = GenerationSettings(seed=1, max_attempts=3, required_vaults=("red",))
    result = GenerationPipeline(corridor_catalog, settings).generate()
    assert not result.success
    assert result.metrics['attempts'] == 3
    assert result.blueprint is not None
    assert any("No acceptable layout after 3 attempts" in e for e in result.errors)
    assert any("BP-006" in e for e in result.errors)


def test_hub_vault_satisfies_requirement(corridor_catalog):
    settings = GenerationSettings(seed=1, required_vaults=("blue",))
    assert GenerationPipeline(corridor_catalog, settings).generate().success


def test_invalid_settings_raise(catalog):
    with pytest.raises(PipelineError):
        GenerationPipeline(catalog, GenerationSettings(max_segments=0))


def test_missing_hub_fails():
    catalog = TemplateCatalog()
    catalog.register_all(CORRIDOR_TEMPLATES)
    result = GenerationPipeline(catalog, GenerationSettings(seed=1)).generate()
    assert not result.success
    assert result.blueprint is None
    assert any("No hub template available" in e for e in result.errors)


def test_cancel_from_progress_callback(catalog):
    pipeline = GenerationPipeline(catalog, GenerationSettings(seed=1))
    seen = []

    def on_progress(progress):
        seen.append(progress)
        pipeline.cancel()

    pipeline.set_progress_callback(on_progress)
    result = pipeline.generate()
    assert not result.success
    assert "Pipeline cancelled by user" in result.errors
    assert seen[0].stage is PipelineStage.GENERATE_LAYOUT
    assert not pipeline.is_running


def test_timeout(catalog):
    settings = GenerationSettings(seed=1, timeout_seconds=1e-9)
    result = GenerationPipeline(catalog, settings).generate()
    assert not result.success
    assert any("exceeded" in e for e in result.errors)


@pytest.mark.parametrize("fmt,suffix", [("dot", ".dot"), ("json", ".json")])
def test_graph_dump(catalog, tmp_path, fmt, suffix):
    settings = GenerationSettings(seed=5, enable_graph_dump=True, graph_dump_format=fmt,
                                  output_dir=str(tmp_path), name="run")
    result = GenerationPipeline(catalog, settings).generate()
    assert result.output_files == [str(tmp_path / f"run_debug{suffix}")]
    content = (tmp_path / f"run_debug{suffix}").read_text(encoding='utf-8')
    if fmt == "json":
        data = json.loads(content)
        assert data['metadata']['seed'] == 5
        assert data['statistics']['segment_count'] == result.blueprint.segment_count
    else:
        assert content.startswith("digraph DungeonBlueprint {")
        assert "seg_0 -> seg_" in content
