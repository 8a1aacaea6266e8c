"""Tests for template and blueprint validation."""

from dataclasses import replace

import pytest

from sotgen.generators.layout import assemble_blueprint, generate_segment_layout
from sotgen.generators.segments import BlockPos, Direction, PlacedSegment, RelativeEntryPoint, VaultColor
from sotgen.validation import (
    Severity, ValidationError, ValidationResult, ValidationStage, validate_blueprint, validate_templates,
)
from sotgen.validation.rules import BP_001, TMPL_001


def _child(template, origin, parent_entry, depth=1, index=1):
    return PlacedSegment(
        template=template, origin=origin, depth=depth, index=index, parent_index=0,
        connected_entry=template.entry_points[1], parent_entry=parent_entry,
    )


def test_generated_blueprint_passes(builtin_templates):
    blueprint = generate_segment_layout(builtin_templates, seed=42, max_distance=120).blueprint
    result = validate_blueprint(blueprint, max_distance=120)
    assert result.passed, result.report()
    assert result.stage is ValidationStage.BLUEPRINT


def test_overlap_and_seam_reported(placed_hub, corridor_ns, hub_north_entry):
    bad = _child(corridor_ns, BlockPos(14, 0, -2), hub_north_entry)
    result = validate_blueprint(assemble_blueprint([placed_hub, bad]))
    assert result.failed
    assert "BP-001" in result.codes()
    assert "BP-003" in result.codes()


def test_distance_reported(placed_hub, placed_corridor):
    result = validate_blueprint(assemble_blueprint([placed_hub, placed_corridor]), max_distance=10)
    assert result.codes() == ["BP-002"]


def test_depth_reported(placed_hub, corridor_ns, hub_north_entry):
    wrong_depth = _child(corridor_ns, BlockPos(14, 0, -3), hub_north_entry, depth=3)
    result = validate_blueprint(assemble_blueprint([placed_hub, wrong_depth]))
    assert result.codes() == ["BP-005"]


def test_reuse_reported(placed_hub, placed_corridor, corridor_ns):
    south = PlacedSegment(
        template=corridor_ns, origin=BlockPos(14, 0, 27), depth=1, index=2, parent_index=0,
        connected_entry=corridor_ns.entry_points[0],
        parent_entry=placed_hub.entry_points[2],
    )
    result = validate_blueprint(assemble_blueprint([placed_hub, placed_corridor, south]))
    assert result.codes() == ["BP-004"]


def test_required_features(placed_hub, placed_corridor):
    blueprint = assemble_blueprint([placed_hub, placed_corridor])
    result = validate_blueprint(blueprint, required_vaults=[VaultColor.BLUE, VaultColor.RED],
                                required_keys=[VaultColor.GREEN])
    assert result.codes() == ["BP-006", "BP-007"]
    assert "RED" in result.errors[0].message


def test_only_hub_is_warning(placed_hub):
    result = validate_blueprint(assemble_blueprint([placed_hub]))
    assert result.passed
    assert result.codes() == ["BP-008"]
    assert result.warnings[0].severity is Severity.WARN


def test_min_segments_warning(placed_hub, placed_corridor):
    result = validate_blueprint(assemble_blueprint([placed_hub, placed_corridor]), min_segments=3)
    assert result.passed
    assert result.codes() == ["BP-009"]


def test_template_checks(hub_template, corridor_ns):
    doubled = replace(corridor_ns, name="doubled", entry_points=(
        RelativeEntryPoint(BlockPos(0, 0, 0), Direction.NORTH),
        RelativeEntryPoint(BlockPos(2, 0, 0), Direction.NORTH),
    ))
    sealed = replace(corridor_ns, name="sealed", entry_points=())
    result = validate_templates([hub_template, doubled, sealed])
    assert result.passed
    assert result.codes() == ["TMPL-002", "TMPL-003"]


def test_hub_checks(hub_template, corridor_ns):
    assert validate_templates([corridor_ns]).codes() == ["TMPL-004"]
    assert validate_templates([corridor_ns]).failed
    second = replace(hub_template, name="hub_b")
    result = validate_templates([hub_template, second])
    assert result.passed
    assert result.infos[0].code == "TMPL-005"
    assert "'hub'" in result.infos[0].message


def test_issue_format_and_report():
    issue = BP_001.issue(segment="crypt", a="crypt", b="library")
    text = issue.format()
    assert text.startswith("[FAIL] BP-001 segment=crypt")
    assert "Segments 'crypt' and 'library' overlap" in text

    result = ValidationResult(stage=ValidationStage.BLUEPRINT)
    assert result.report() == "Validation passed: No issues found"
    result.add_issue(issue)
    assert "Validation FAILED (blueprint): 1 issue(s)" in result.report()
    data = result.to_dict()
    assert data['passed'] is False
    assert data['counts'] == {'INFO': 0, 'WARN': 0, 'FAIL': 1}
    assert data['issues'][0]['severity'] == "FAIL"
    assert data['issues'][0]['code'] == "BP-001"


def test_validation_error_carries_result():
    result = ValidationResult(stage=ValidationStage.TEMPLATE_LOAD)
    result.add_issue(TMPL_001.issue(file_path="x.json", reason="bad"))
    with pytest.raises(ValidationError) as info:
        raise ValidationError(result)
    assert info.value.result is result
    assert "Template rejected: bad" in str(info.value)


def test_merge():
    a = ValidationResult()
    b = ValidationResult()
    b.add_issue(TMPL_001.issue(reason="x"))
    assert a.merge(b) is a
    assert a.failed
