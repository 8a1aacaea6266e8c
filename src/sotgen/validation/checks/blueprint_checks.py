"""
Blueprint validation checks.

Verifies the properties every generated blueprint must hold:
- No overlapping segments (BP-001)
- Distance bound from the hub (BP-002)
- Adjacent seams between connected segments (BP-003)
- Template uniqueness (BP-004)
- Depth monotonicity (BP-005)
- Required vaults and keys (BP-006, BP-007)
- Degenerate results (BP-008, BP-009)
"""

from collections import Counter
from typing import Iterable, Optional

from ...generators.layout.blueprint import Blueprint
from ...generators.layout.matcher import seam_is_adjacent
from ...generators.layout.spatial_validation import find_overlapping_pairs
from ...generators.segments import VaultColor
from ..core import ValidationResult, ValidationStage
from ..rules import BP_001, BP_002, BP_003, BP_004, BP_005, BP_006, BP_007, BP_008, BP_009


def check_overlaps(blueprint: Blueprint) -> ValidationResult:
    """BP-001: no two segments share a block."""
    result = ValidationResult(stage=ValidationStage.BLUEPRINT)
    segments = blueprint.segments
    for i, j in find_overlapping_pairs(segments):
        result.add_issue(BP_001.issue(segment=segments[i].name, a=segments[i].name, b=segments[j].name))
    return result


def check_distances(blueprint: Blueprint, max_distance: float) -> ValidationResult:
    """BP-002: every origin within max_distance of the hub."""
    result = ValidationResult(stage=ValidationStage.BLUEPRINT)
    hub = blueprint.hub_location
    for segment in blueprint.segments[1:]:
        if segment.origin.distance_squared_to(hub) > max_distance ** 2:
            result.add_issue(BP_002.issue(
                segment=segment.name, origin=segment.origin,
                distance=segment.origin.distance_to(hub), max_distance=max_distance,
            ))
    return result


def check_structure(blueprint: Blueprint) -> ValidationResult:
    """BP-003, BP-004, BP-005: seams, uniqueness and depths."""
    result = ValidationResult(stage=ValidationStage.BLUEPRINT)
    segments = blueprint.segments

    counts = Counter(s.name for s in segments)
    for name, count in counts.items():
        if count > 1:
            result.add_issue(BP_004.issue(segment=name, count=count))

    for segment in segments:
        if segment.parent_index is None:
            if segment.depth != 0:
                result.add_issue(BP_005.issue(segment=segment.name, depth=segment.depth, parent_depth='none'))
            continue
        parent = segments[segment.parent_index]
        if segment.depth != parent.depth + 1:
            result.add_issue(BP_005.issue(
                segment=segment.name, depth=segment.depth, parent_depth=parent.depth))
        if not seam_is_adjacent(segment):
            result.add_issue(BP_003.issue(
                segment=segment.name, entry_point=str(segment.parent_entry), parent=parent.index))
    return result


def check_features(
    blueprint: Blueprint,
    required_vaults: Iterable[VaultColor] = (),
    required_keys: Iterable[VaultColor] = (),
) -> ValidationResult:
    """BP-006, BP-007: required vault markers and keys are present."""
    result = ValidationResult(stage=ValidationStage.BLUEPRINT)
    for color in required_vaults:
        if color not in blueprint.vault_locations:
            result.add_issue(BP_006.issue(color=color))
    for color in required_keys:
        if color not in blueprint.key_locations:
            result.add_issue(BP_007.issue(color=color))
    return result


def validate_blueprint(
    blueprint: Blueprint,
    max_distance: Optional[float] = None,
    required_vaults: Iterable[VaultColor] = (),
    required_keys: Iterable[VaultColor] = (),
    min_segments: int = 0,
) -> ValidationResult:
    """
    Run every blueprint check.

    Args:
        blueprint: Generation result to check
        max_distance: Distance bound to verify (None = skip BP-002)
        required_vaults: Vault colours that must be present
        required_keys: Key colours that must be present
        min_segments: Segments expected beyond the hub (BP-009 warning)

    Returns:
        Combined ValidationResult
    """
    result = ValidationResult(stage=ValidationStage.BLUEPRINT)
    result.merge(check_overlaps(blueprint))
    if max_distance is not None:
        result.merge(check_distances(blueprint, max_distance))
    result.merge(check_structure(blueprint))
    result.merge(check_features(blueprint, required_vaults, required_keys))

    beyond_hub = blueprint.segment_count - 1
    if blueprint.only_hub_placed:
        result.add_issue(BP_008.issue(segment=blueprint.hub.name))
    elif beyond_hub < min_segments:
        result.add_issue(BP_009.issue(count=beyond_hub, minimum=min_segments))
    return result
