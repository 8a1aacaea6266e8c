"""
sotgen - segment-based dungeon layout generator.

Chains handcrafted segment templates (rooms, corridors, stairs) through
directional entry points into a non-overlapping, distance-bounded layout,
reproducible from a seed.
"""

__version__ = "0.1.0"

from .generators.segments import (
    Area,
    BlockPos,
    ConfigurationError,
    Direction,
    InvariantViolation,
    PlacedSegment,
    RelativeEntryPoint,
    SegmentTemplate,
    SegmentType,
    VaultColor,
)
from .generators.layout import Blueprint, DungeonInstance, SegmentLayoutGenerator, generate_segment_layout
from .generators.templates import TemplateCatalog, default_catalog
from .pipeline import GenerationPipeline, GenerationSettings

__all__ = [
    'Area',
    'BlockPos',
    'ConfigurationError',
    'Direction',
    'InvariantViolation',
    'PlacedSegment',
    'RelativeEntryPoint',
    'SegmentTemplate',
    'SegmentType',
    'VaultColor',
    'Blueprint',
    'DungeonInstance',
    'SegmentLayoutGenerator',
    'generate_segment_layout',
    'TemplateCatalog',
    'default_catalog',
    'GenerationPipeline',
    'GenerationSettings',
]
