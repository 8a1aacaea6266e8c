"""
Segment layout generation.

- matcher: which templates fit an open entry point and where they go
- spatial_validation: overlap and distance checks for candidates
- segment_layout: the frontier-expansion generator
- blueprint: immutable generation result and world-space instances
"""

from .matcher import compute_placement_origin, find_candidates, match_candidate, seam_is_adjacent
from .spatial_validation import (
    DEFAULT_MAX_DISTANCE,
    PlacementRejection,
    PlacementValidator,
    RejectionReason,
    check_placement_collision,
    find_overlapping_pairs,
)
from .blueprint import Blueprint, DungeonInstance, assemble_blueprint
from .segment_layout import (
    DEFAULT_MAX_SEGMENTS,
    DEFAULT_MAX_TRIES_PER_ENTRANCE,
    GenerationCancelledException,
    GenerationTimeoutError,
    GeneratorState,
    LayoutGenerationError,
    LayoutResult,
    LayoutStatistics,
    SegmentLayoutGenerator,
    generate_segment_layout,
)

__all__ = [
    'compute_placement_origin',
    'find_candidates',
    'match_candidate',
    'seam_is_adjacent',
    'DEFAULT_MAX_DISTANCE',
    'PlacementRejection',
    'PlacementValidator',
    'RejectionReason',
    'check_placement_collision',
    'find_overlapping_pairs',
    'Blueprint',
    'DungeonInstance',
    'assemble_blueprint',
    'DEFAULT_MAX_SEGMENTS',
    'DEFAULT_MAX_TRIES_PER_ENTRANCE',
    'GenerationCancelledException',
    'GenerationTimeoutError',
    'GeneratorState',
    'LayoutGenerationError',
    'LayoutResult',
    'LayoutStatistics',
    'SegmentLayoutGenerator',
    'generate_segment_layout',
]
