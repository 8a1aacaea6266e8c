"""
Entry-point matching for segment placement.

Given an open entry point E facing d, a template can attach to it when it
declares an entry point M facing opposite(d). The template is placed so that
M lands on the block directly beyond E:

    target = E.position + vec(d)
    origin = target - M.offset

The two segments then meet face to face with no shared block.
"""

import logging
from typing import Iterable, List, Optional

from ..segments import (
    BlockPos, EntryPoint, InvariantViolation, PlacedSegment, RelativeEntryPoint, SegmentTemplate,
)

logger = logging.getLogger(__name__)


def find_candidates(entry: EntryPoint, templates: Iterable[SegmentTemplate]) -> List[SegmentTemplate]:
    """
    Find every template that can connect to an open entry point.

    Args:
        entry: Frontier entry point to extend from
        templates: Remaining (unplaced) templates, in pool order

    Returns:
        Templates exposing an entry point facing the opposite direction,
        in the same order as `templates`
    """
    required_dir = entry.direction.opposite()
    return [t for t in templates if t.has_entry_point_facing(required_dir)]


def _matching_entry(entry: EntryPoint, template: SegmentTemplate) -> RelativeEntryPoint:
    required_dir = entry.direction.opposite()
    match = template.entry_point_facing(required_dir)
    if match is None:
        # Candidates are filtered by find_candidates; reaching this is a caller bug
        raise InvariantViolation(
            f"Template '{template.name}' has no entry point facing {required_dir}")
    return match


def compute_placement_origin(entry: EntryPoint, template: SegmentTemplate) -> BlockPos:
    """
    Compute the origin that aligns `template` with an open entry point.

    Args:
        entry: Frontier entry point being extended
        template: Candidate template (must face entry.direction.opposite())

    Returns:
        Origin such that the template's matching entry point sits one block
        beyond `entry` in its direction

    Raises:
        InvariantViolation: If the template has no matching entry point
    """
    match = _matching_entry(entry, template)
    return entry.target_cell() - match.offset


def match_candidate(
    entry: EntryPoint,
    template: SegmentTemplate,
    parent: PlacedSegment,
    index: int,
) -> PlacedSegment:
    """
    Build the candidate placement of `template` against an open entry point.

    The returned segment is not yet accepted; the caller validates it first.

    Args:
        entry: Frontier entry point owned by `parent`
        template: Candidate template
        parent: Segment that owns `entry`
        index: Generation index the segment will take if accepted

    Returns:
        PlacedSegment at depth parent.depth + 1
    """
    match = _matching_entry(entry, template)
    origin = entry.target_cell() - match.offset
    logger.debug("Candidate %s at %s for %s", template.name, origin, entry)
    return PlacedSegment(
        template=template,
        origin=origin,
        depth=parent.depth + 1,
        index=index,
        parent_index=parent.index,
        connected_entry=match,
        parent_entry=entry,
    )


def seam_is_adjacent(segment: PlacedSegment) -> Optional[bool]:
    """Check that a placed segment's connecting entry sits one block past its parent's.

    Returns None for the hub, which has no parent seam.
    """
    if segment.parent_entry is None or segment.connected_entry is None:
        return None
    child_pos = segment.absolute(segment.connected_entry.offset)
    return (child_pos == segment.parent_entry.target_cell() and
            segment.connected_entry.direction == segment.parent_entry.direction.opposite())
