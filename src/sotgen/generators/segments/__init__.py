"""
Segment data model.

Value types shared by the layout generator:
- Direction: six axis-aligned facings with opposite() and unit vectors
- BlockPos / Area: integer coordinates and inclusive bounding boxes
- SegmentTemplate: immutable, world-independent segment description
- PlacedSegment / EntryPoint: a template bound to an origin and depth
"""

from .errors import ConfigurationError, InvariantViolation
from .direction import Direction
from .geometry import Area, BlockPos, ORIGIN
from .segment import RelativeEntryPoint, SegmentTemplate, SegmentType, VaultColor
from .placed_segment import EntryPoint, PlacedSegment

__all__ = [
    'ConfigurationError',
    'InvariantViolation',
    'Direction',
    'Area',
    'BlockPos',
    'ORIGIN',
    'RelativeEntryPoint',
    'SegmentTemplate',
    'SegmentType',
    'VaultColor',
    'EntryPoint',
    'PlacedSegment',
]
