"""
Placed segments: a shared template bound to an origin and a depth.

PlacedSegment never copies or mutates its template. Every absolute position
is derived on demand as origin + relative offset, so one template can back
any number of placements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .direction import Direction
from .errors import InvariantViolation
from .geometry import Area, BlockPos
from .segment import RelativeEntryPoint, SegmentTemplate


@dataclass(frozen=True)
class EntryPoint:
    """Entry point in placed (absolute or blueprint-relative) coordinates.

    Attributes:
        position: Block holding the entry point
        direction: Facing of the opening
        segment_index: Index of the owning placement in generation order
    """
    position: BlockPos
    direction: Direction
    segment_index: int = -1

    def target_cell(self) -> BlockPos:
        """Block a connecting segment's entry point must occupy."""
        return self.position.offset(self.direction)

    def __str__(self) -> str:
        return f"{self.direction}@{self.position}"


@dataclass(frozen=True)
class PlacedSegment:
    """A template placed at an origin.

    Attributes:
        template: Shared immutable template
        origin: Placement origin; None means the instance is not bound yet
        depth: Connections between this segment and the hub (hub = 0)
        index: Position in generation order
        parent_index: Index of the segment this one was connected to
        connected_entry: Entry point of this segment used to connect to the parent
        parent_entry: Frontier entry point of the parent it was matched against
    """
    template: SegmentTemplate
    origin: Optional[BlockPos]
    depth: int = 0
    index: int = 0
    parent_index: Optional[int] = None
    connected_entry: Optional[RelativeEntryPoint] = None
    parent_entry: Optional[EntryPoint] = None

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def is_hub(self) -> bool:
        return self.parent_index is None

    def _require_origin(self) -> BlockPos:
        if self.origin is None:
            raise InvariantViolation(
                f"Segment '{self.template.name}' has no origin; cannot derive placed coordinates")
        return self.origin

    def absolute(self, offset: BlockPos) -> BlockPos:
        """Translate a template-relative offset into placed coordinates."""
        return self._require_origin() + offset

    @property
    def bounds(self) -> Area:
        """Occupied blocks, origin .. origin + size - 1."""
        return self.template.bounds_at(self._require_origin())

    @property
    def entry_points(self) -> List[EntryPoint]:
        """All entry points in placed coordinates, in template order."""
        origin = self._require_origin()
        return [EntryPoint(origin + e.offset, e.direction, self.index)
                for e in self.template.entry_points]

    def open_entry_points(self) -> List[EntryPoint]:
        """Entry points other than the one used to connect to the parent."""
        origin = self._require_origin()
        return [EntryPoint(origin + e.offset, e.direction, self.index)
                for e in self.template.entry_points
                if e != self.connected_entry]

    @property
    def sand_spawns(self) -> Tuple[BlockPos, ...]:
        return tuple(self.absolute(o) for o in self.template.sand_spawns)

    @property
    def item_spawns(self) -> Tuple[BlockPos, ...]:
        return tuple(self.absolute(o) for o in self.template.item_spawns)

    @property
    def coin_spawns(self) -> Tuple[BlockPos, ...]:
        return tuple(self.absolute(o) for o in self.template.coin_spawns)

    @property
    def vault_location(self) -> Optional[BlockPos]:
        if self.template.vault_offset is None:
            return None
        return self.absolute(self.template.vault_offset)

    @property
    def key_location(self) -> Optional[BlockPos]:
        if self.template.key_offset is None:
            return None
        return self.absolute(self.template.key_offset)

    def contains(self, point: BlockPos) -> bool:
        return self.bounds.contains(point)

    def translated(self, offset: BlockPos) -> 'PlacedSegment':
        """Copy of this placement shifted by `offset`."""
        parent_entry = self.parent_entry
        if parent_entry is not None:
            parent_entry = EntryPoint(parent_entry.position + offset,
                                      parent_entry.direction,
                                      parent_entry.segment_index)
        return PlacedSegment(
            template=self.template,
            origin=self._require_origin() + offset,
            depth=self.depth,
            index=self.index,
            parent_index=self.parent_index,
            connected_entry=self.connected_entry,
            parent_entry=parent_entry,
        )

    def __str__(self) -> str:
        return f"#{self.index} {self.template.name} @ {self.origin} depth={self.depth}"
