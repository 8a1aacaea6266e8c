"""
Spatial validation for segment placement.

Two checks decide whether a candidate placement is accepted:
- Overlap: the candidate's bounds must not share any block with an accepted
  segment (closed-interval AABB test on all three axes)
- Distance: the candidate's origin must lie within max_distance (Euclidean)
  of the root origin

Neighbouring segments joined through an entry point occupy adjacent blocks,
so the inclusive test never reports them as overlapping.

PlacementValidator keeps the accepted corners in numpy arrays so each
candidate is tested against every accepted segment in one vectorized pass.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..segments import BlockPos, PlacedSegment

DEFAULT_MAX_DISTANCE = 200


class RejectionReason(Enum):
    """Why a candidate placement was rejected."""
    OVERLAP = "overlap"
    OUT_OF_RANGE = "out_of_range"


@dataclass
class PlacementRejection:
    """A rejected candidate placement."""
    reason: RejectionReason
    candidate_name: str
    other_name: Optional[str]
    message: str

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.message}"


class PlacementValidator:
    """
    Validates candidate placements against the accepted set.

    validate() is read-only; only accept() changes state, so a rejected
    candidate leaves the validator exactly as it was.
    """

    def __init__(self, root_origin: BlockPos, max_distance: float = DEFAULT_MAX_DISTANCE):
        """Initialize with the dungeon's root origin and distance limit."""
        self.root_origin = root_origin
        self.max_distance = max_distance
        self._root = np.array(root_origin.as_tuple(), dtype=np.int64)
        self._mins = np.empty((0, 3), dtype=np.int64)
        self._maxs = np.empty((0, 3), dtype=np.int64)
        self._names: List[str] = []

    def __len__(self) -> int:
        return len(self._names)

    def accept(self, segment: PlacedSegment) -> None:
        """Record an accepted segment."""
        bounds = segment.bounds
        self._mins = np.vstack([self._mins, np.array(bounds.min_point.as_tuple(), dtype=np.int64)])
        self._maxs = np.vstack([self._maxs, np.array(bounds.max_point.as_tuple(), dtype=np.int64)])
        self._names.append(segment.name)

    def overlapping_index(self, candidate: PlacedSegment) -> Optional[int]:
        """Index of the first accepted segment overlapping `candidate`, if any."""
        if not self._names:
            return None
        bounds = candidate.bounds
        cmin = np.array(bounds.min_point.as_tuple(), dtype=np.int64)
        cmax = np.array(bounds.max_point.as_tuple(), dtype=np.int64)
        hits = np.all((self._mins <= cmax) & (self._maxs >= cmin), axis=1)
        found = np.flatnonzero(hits)
        if found.size == 0:
            return None
        return int(found[0])

    def within_distance(self, candidate: PlacedSegment) -> bool:
        """Check the candidate origin against the distance limit."""
        delta = np.array(candidate.origin.as_tuple(), dtype=np.int64) - self._root
        return int(np.dot(delta, delta)) <= self.max_distance ** 2

    def validate(self, candidate: PlacedSegment) -> Optional[PlacementRejection]:
        """
        Check a candidate placement.

        Args:
            candidate: Placement to test (not yet accepted)

        Returns:
            PlacementRejection if the candidate fails a check, None if valid
        """
        if not self.within_distance(candidate):
            distance = candidate.origin.distance_to(self.root_origin)
            return PlacementRejection(
                reason=RejectionReason.OUT_OF_RANGE,
                candidate_name=candidate.name,
                other_name=None,
                message=(f"{candidate.name} at {candidate.origin} is {distance:.1f} blocks "
                         f"from root (max {self.max_distance})"),
            )

        idx = self.overlapping_index(candidate)
        if idx is not None:
            other = self._names[idx]
            return PlacementRejection(
                reason=RejectionReason.OVERLAP,
                candidate_name=candidate.name,
                other_name=other,
                message=f"{candidate.name} at {candidate.origin} would overlap {other}",
            )
        return None


def check_placement_collision(
    candidate: PlacedSegment,
    accepted: Sequence[PlacedSegment],
    root_origin: BlockPos,
    max_distance: float = DEFAULT_MAX_DISTANCE,
) -> Optional[PlacementRejection]:
    """
    Check if placing a candidate segment would violate overlap or distance.

    Args:
        candidate: The segment being placed (not yet accepted)
        accepted: Segments already accepted
        root_origin: Origin of the dungeon root
        max_distance: Maximum Euclidean distance of an origin from the root

    Returns:
        PlacementRejection if the placement is invalid, None otherwise
    """
    validator = PlacementValidator(root_origin, max_distance)
    for segment in accepted:
        validator.accept(segment)
    return validator.validate(candidate)


def find_overlapping_pairs(segments: Sequence[PlacedSegment]) -> List[Tuple[int, int]]:
    """
    Find every pair of segments whose bounds share a block.

    Returns:
        List of (i, j) position pairs with i < j
    """
    if len(segments) < 2:
        return []
    mins = np.array([s.bounds.min_point.as_tuple() for s in segments], dtype=np.int64)
    maxs = np.array([s.bounds.max_point.as_tuple() for s in segments], dtype=np.int64)
    # Pairwise closed-interval test via broadcasting: (n, n, 3) -> (n, n)
    overlap = np.all((mins[:, None, :] <= maxs[None, :, :]) &
                     (maxs[:, None, :] >= mins[None, :, :]), axis=2)
    ii, jj = np.nonzero(np.triu(overlap, k=1))
    return [(int(i), int(j)) for i, j in zip(ii, jj)]
