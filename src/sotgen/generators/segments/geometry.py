"""
Integer block geometry for segment placement.

Defines the two value types every other module builds on:
- BlockPos: integer 3D block coordinate (x, y, z)
- Area: axis-aligned bounding box with inclusive block bounds

Bounds are inclusive on both ends. A segment of size (sx, sy, sz) placed at
origin o covers blocks o .. o + size - 1 on each axis, so two segments that
meet at a shared face occupy neighbouring coordinates and never intersect.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from .direction import Direction


@dataclass(frozen=True)
class BlockPos:
    """Integer block coordinate."""
    x: int
    y: int
    z: int

    def __add__(self, other: 'BlockPos') -> 'BlockPos':
        return BlockPos(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'BlockPos') -> 'BlockPos':
        return BlockPos(self.x - other.x, self.y - other.y, self.z - other.z)

    def offset(self, direction: Direction, distance: int = 1) -> 'BlockPos':
        """Get the block `distance` steps away in the given direction."""
        dx, dy, dz = direction.vector
        return BlockPos(self.x + dx * distance,
                        self.y + dy * distance,
                        self.z + dz * distance)

    def distance_squared_to(self, other: 'BlockPos') -> int:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def distance_to(self, other: 'BlockPos') -> float:
        return math.sqrt(self.distance_squared_to(other))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    @staticmethod
    def from_sequence(values: Sequence[int]) -> 'BlockPos':
        """Build a BlockPos from any 3-item sequence of integers."""
        if len(values) != 3:
            raise ValueError(f"Expected 3 coordinates, got {len(values)}")
        return BlockPos(int(values[0]), int(values[1]), int(values[2]))

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


ORIGIN = BlockPos(0, 0, 0)


@dataclass(frozen=True)
class Area:
    """Axis-aligned bounding box over inclusive block coordinates.

    The corners are normalized on construction, so `min_point` is always the
    component-wise minimum and `max_point` the component-wise maximum of the
    two corners passed in.

    Attributes:
        min_point: Lowest corner (inclusive)
        max_point: Highest corner (inclusive)
    """
    min_point: BlockPos
    max_point: BlockPos

    def __post_init__(self):
        a, b = self.min_point, self.max_point
        object.__setattr__(self, 'min_point',
                           BlockPos(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z)))
        object.__setattr__(self, 'max_point',
                           BlockPos(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z)))

    @property
    def width(self) -> int:
        """Extent along X (max - min)."""
        return self.max_point.x - self.min_point.x

    @property
    def height(self) -> int:
        """Extent along Y (max - min)."""
        return self.max_point.y - self.min_point.y

    @property
    def depth(self) -> int:
        """Extent along Z (max - min)."""
        return self.max_point.z - self.min_point.z

    @property
    def size(self) -> BlockPos:
        """Number of blocks covered on each axis."""
        return BlockPos(self.width + 1, self.height + 1, self.depth + 1)

    @property
    def volume(self) -> int:
        s = self.size
        return s.x * s.y * s.z

    def intersects(self, other: 'Area') -> bool:
        """Check closed-interval overlap on all three axes.

        Boxes that only sit next to each other (max of one is min - 1 of the
        other) do not intersect; boxes sharing at least one block do.
        """
        return (self.min_point.x <= other.max_point.x and self.max_point.x >= other.min_point.x and
                self.min_point.y <= other.max_point.y and self.max_point.y >= other.min_point.y and
                self.min_point.z <= other.max_point.z and self.max_point.z >= other.min_point.z)

    def contains(self, point: BlockPos) -> bool:
        """Check whether a block lies inside this area (bounds inclusive)."""
        return (self.min_point.x <= point.x <= self.max_point.x and
                self.min_point.y <= point.y <= self.max_point.y and
                self.min_point.z <= point.z <= self.max_point.z)

    def translated(self, offset: BlockPos) -> 'Area':
        return Area(self.min_point + offset, self.max_point + offset)

    def union(self, other: 'Area') -> 'Area':
        """Smallest area covering both boxes."""
        return Area(
            BlockPos(min(self.min_point.x, other.min_point.x),
                     min(self.min_point.y, other.min_point.y),
                     min(self.min_point.z, other.min_point.z)),
            BlockPos(max(self.max_point.x, other.max_point.x),
                     max(self.max_point.y, other.max_point.y),
                     max(self.max_point.z, other.max_point.z)),
        )

    @staticmethod
    def from_origin_and_size(origin: BlockPos, size: BlockPos) -> 'Area':
        """Area covering `size` blocks starting at `origin`."""
        return Area(origin, BlockPos(origin.x + size.x - 1,
                                     origin.y + size.y - 1,
                                     origin.z + size.z - 1))

    @staticmethod
    def enclosing(areas: Iterable['Area']) -> 'Area':
        """Smallest area covering every area in `areas`.

        Raises:
            ValueError: If `areas` is empty
        """
        result = None
        for area in areas:
            result = area if result is None else result.union(area)
        if result is None:
            raise ValueError("Cannot enclose an empty collection of areas")
        return result

    def __str__(self) -> str:
        return f"[{self.min_point} .. {self.max_point}]"
