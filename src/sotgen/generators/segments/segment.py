"""
Segment templates: world-independent descriptions of placeable dungeon pieces.

A template describes one handcrafted room, corridor or stair piece:
- SegmentType: category tag used for filtering and debug colouring
- VaultColor: colour tag of a vault marker or key carried by a segment
- RelativeEntryPoint: connection point (offset from template origin + facing)
- SegmentTemplate: immutable template shared by every placement of it

Templates are validated on construction. Inconsistent data (non-positive
size, vault colour without an offset, entry point outside the box, ...)
raises ConfigurationError so a loader can skip the template and report it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .direction import Direction
from .errors import ConfigurationError
from .geometry import Area, BlockPos


class SegmentType(Enum):
    """Category of a segment template."""
    START = "start"
    CORRIDOR = "corridor"
    SMALL_ROOM = "small_room"
    LARGE_ROOM = "large_room"
    STAIRS = "stairs"
    PUZZLE_ROOM = "puzzle_room"
    LAVA_PARKOUR = "lava_parkour"
    VAULT_ROOM = "vault_room"

    @classmethod
    def parse(cls, text: str) -> 'SegmentType':
        key = str(text).strip().lower()
        for segment_type in cls:
            if segment_type.value == key:
                return segment_type
        raise ValueError(f"Unknown segment type: {text!r}")


class VaultColor(Enum):
    """Colour of a vault marker or vault key."""
    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    GOLD = "gold"

    @classmethod
    def parse(cls, text: str) -> 'VaultColor':
        key = str(text).strip().lower()
        for color in cls:
            if color.value == key:
                return color
        raise ValueError(f"Unknown vault color: {text!r}")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class RelativeEntryPoint:
    """Entry point expressed relative to a template's origin."""
    offset: BlockPos
    direction: Direction


@dataclass(frozen=True)
class SegmentTemplate:
    """Immutable description of a placeable segment.

    Attributes:
        name: Unique template name
        segment_type: Category tag
        size: Block counts on each axis (all positive, boundary blocks included)
        entry_points: Ordered connection points; matching assumes at most one
            entry point per direction and uses the first one found
        schematic_file: Structure file painted by the world layer
        sand_spawns: Relative sand spawn offsets
        item_spawns: Relative generic item spawn offsets
        coin_spawns: Relative coin spawn offsets
        total_coins: Approximate coin budget for this segment
        coin_multiplier: Score multiplier for coins found here
        is_hub: Whether this template is the root segment
        is_puzzle_room: Whether this segment holds a puzzle
        is_lava_parkour: Whether this segment is a lava parkour course
        contained_vault: Colour of the vault marker inside, if any
        vault_offset: Relative vault marker position (required with contained_vault)
        contained_key: Colour of the key inside, if any
        key_offset: Relative key position (required with contained_key)
    """
    name: str
    segment_type: SegmentType
    size: BlockPos
    entry_points: Tuple[RelativeEntryPoint, ...] = ()
    schematic_file: str = ""
    sand_spawns: Tuple[BlockPos, ...] = ()
    item_spawns: Tuple[BlockPos, ...] = ()
    coin_spawns: Tuple[BlockPos, ...] = ()
    total_coins: int = 0
    coin_multiplier: float = 1.0
    is_hub: bool = False
    is_puzzle_room: bool = False
    is_lava_parkour: bool = False
    contained_vault: Optional[VaultColor] = None
    vault_offset: Optional[BlockPos] = None
    contained_key: Optional[VaultColor] = None
    key_offset: Optional[BlockPos] = None

    def __post_init__(self):
        # Accept lists from callers but store tuples so the template stays hashable
        for name in ('entry_points', 'sand_spawns', 'item_spawns', 'coin_spawns'):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        self._check()

    def _check(self):
        if not self.name or not self.name.strip():
            raise ConfigurationError("Template name must not be empty")
        if self.size.x <= 0 or self.size.y <= 0 or self.size.z <= 0:
            raise ConfigurationError(f"Size must be positive on every axis, got {self.size}", self.name)
        if (self.contained_vault is None) != (self.vault_offset is None):
            raise ConfigurationError(
                "containedVault and vaultLocationOffset must be given together", self.name)
        if (self.contained_key is None) != (self.key_offset is None):
            raise ConfigurationError(
                "containedVaultKey and keyLocationOffset must be given together", self.name)
        if self.total_coins < 0:
            raise ConfigurationError(f"totalCoins must not be negative, got {self.total_coins}", self.name)
        if self.coin_multiplier <= 0:
            raise ConfigurationError(
                f"coinMultiplier must be positive, got {self.coin_multiplier}", self.name)

        for entry in self.entry_points:
            o = entry.offset
            if not (0 <= o.x < self.size.x and 0 <= o.y < self.size.y and 0 <= o.z < self.size.z):
                raise ConfigurationError(
                    f"Entry point {entry.direction} at {o} lies outside size {self.size}", self.name)

    # -- queries --

    def entry_point_facing(self, direction: Direction) -> Optional[RelativeEntryPoint]:
        """Return the first entry point facing `direction`, or None."""
        for entry in self.entry_points:
            if entry.direction == direction:
                return entry
        return None

    def has_entry_point_facing(self, direction: Direction) -> bool:
        return self.entry_point_facing(direction) is not None

    @property
    def local_bounds(self) -> Area:
        """Bounds of the template when placed at (0, 0, 0)."""
        return Area.from_origin_and_size(BlockPos(0, 0, 0), self.size)

    def bounds_at(self, origin: BlockPos) -> Area:
        """Bounds the template would occupy if placed at `origin`."""
        return Area.from_origin_and_size(origin, self.size)

    @property
    def holds_vault(self) -> bool:
        return self.contained_vault is not None

    @property
    def holds_key(self) -> bool:
        return self.contained_key is not None

    def __str__(self) -> str:
        return f"{self.name} ({self.segment_type.value}, size {self.size})"
