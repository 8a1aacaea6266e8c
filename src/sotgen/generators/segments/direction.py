"""
Axis-aligned directions for segment entry points.

Coordinates follow the block convention used by schematics:
- +X is EAST, -X is WEST
- +Y is UP, -Y is DOWN
- -Z is NORTH, +Z is SOUTH
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from .errors import InvariantViolation


class Direction(Enum):
    """One of the six axis-aligned unit directions."""
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    UP = "up"
    DOWN = "down"

    def opposite(self) -> 'Direction':
        """Return the opposite direction."""
        try:
            return _OPPOSITES[self]
        except KeyError:
            raise InvariantViolation(f"No opposite defined for {self!r}") from None

    @property
    def vector(self) -> Tuple[int, int, int]:
        """Unit vector (dx, dy, dz) for this direction."""
        return _VECTORS[self]

    @property
    def is_horizontal(self) -> bool:
        return self not in (Direction.UP, Direction.DOWN)

    @classmethod
    def parse(cls, text: str) -> 'Direction':
        """Parse a direction name case-insensitively ("NORTH", "north", ...).

        Raises:
            ValueError: If the name is not a known direction
        """
        key = str(text).strip().lower()
        for direction in cls:
            if direction.value == key:
                return direction
        raise ValueError(f"Unknown direction: {text!r}")

    def __str__(self) -> str:
        return self.name


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}

_VECTORS = {
    Direction.NORTH: (0, 0, -1),
    Direction.SOUTH: (0, 0, 1),
    Direction.EAST: (1, 0, 0),
    Direction.WEST: (-1, 0, 0),
    Direction.UP: (0, 1, 0),
    Direction.DOWN: (0, -1, 0),
}
