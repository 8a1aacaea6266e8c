"""
Blueprint assembly.

A Blueprint is the immutable result of one generation run:
- segments: accepted placements in generation order (hub first)
- hub_location: origin of the hub segment
- vault_locations / key_locations: marker positions by VaultColor
- sand_spawns / item_spawns / coin_spawns: flattened spawn positions
- open_entry_points: frontier entry points left unmatched at termination

All positions share the coordinate space of the segments. A blueprint built
around (0, 0, 0) is relative; translated() moves it into world space, and
DungeonInstance tags such a world-space copy for one team.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..segments import (
    ORIGIN, Area, BlockPos, EntryPoint, InvariantViolation, PlacedSegment, VaultColor,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Blueprint:
    """Immutable output of a generation run."""
    segments: Tuple[PlacedSegment, ...]
    root_origin: BlockPos
    hub_location: BlockPos
    vault_locations: Mapping[VaultColor, BlockPos] = field(default_factory=lambda: MappingProxyType({}))
    key_locations: Mapping[VaultColor, BlockPos] = field(default_factory=lambda: MappingProxyType({}))
    sand_spawns: Tuple[BlockPos, ...] = ()
    item_spawns: Tuple[BlockPos, ...] = ()
    coin_spawns: Tuple[BlockPos, ...] = ()
    open_entry_points: Tuple[EntryPoint, ...] = ()
    seed: Optional[int] = None

    @property
    def hub(self) -> PlacedSegment:
        return self.segments[0]

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @property
    def only_hub_placed(self) -> bool:
        """True when generation could not attach anything to the hub."""
        return len(self.segments) <= 1

    @property
    def bounds(self) -> Area:
        """Smallest area enclosing every segment."""
        return Area.enclosing(s.bounds for s in self.segments)

    @property
    def size(self) -> BlockPos:
        """Block counts of the enclosing area on each axis."""
        return self.bounds.size

    @property
    def total_coins(self) -> int:
        return sum(s.template.total_coins for s in self.segments)

    def segment_names(self) -> List[str]:
        return [s.name for s in self.segments]

    def children_of(self, index: int) -> List[PlacedSegment]:
        return [s for s in self.segments if s.parent_index == index]

    def segment_at(self, point: BlockPos) -> Optional[PlacedSegment]:
        """Return the segment whose bounds contain `point`, if any."""
        for segment in self.segments:
            if segment.contains(point):
                return segment
        return None

    def depth_at(self, point: BlockPos) -> int:
        """Depth of the segment containing `point`, or -1 outside the dungeon."""
        segment = self.segment_at(point)
        return segment.depth if segment is not None else -1

    def translated(self, world_origin: BlockPos) -> 'Blueprint':
        """
        Move the whole blueprint so its hub sits at `world_origin`.

        Args:
            world_origin: Target position of the hub origin

        Returns:
            New Blueprint; this one is unchanged
        """
        offset = world_origin - self.hub_location
        return assemble_blueprint(
            [s.translated(offset) for s in self.segments],
            open_entry_points=[
                EntryPoint(e.position + offset, e.direction, e.segment_index)
                for e in self.open_entry_points
            ],
            seed=self.seed,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'seed': self.seed,
            'root_origin': list(self.root_origin.as_tuple()),
            'hub_location': list(self.hub_location.as_tuple()),
            'bounds': {
                'min': list(self.bounds.min_point.as_tuple()),
                'max': list(self.bounds.max_point.as_tuple()),
            },
            'segments': [
                {
                    'index': s.index,
                    'name': s.name,
                    'type': s.template.segment_type.value,
                    'schematic': s.template.schematic_file,
                    'origin': list(s.origin.as_tuple()),
                    'depth': s.depth,
                    'parent': s.parent_index,
                }
                for s in self.segments
            ],
            'vaults': {c.value: list(p.as_tuple()) for c, p in self.vault_locations.items()},
            'keys': {c.value: list(p.as_tuple()) for c, p in self.key_locations.items()},
            'sand_spawns': [list(p.as_tuple()) for p in self.sand_spawns],
            'item_spawns': [list(p.as_tuple()) for p in self.item_spawns],
            'coin_spawns': [list(p.as_tuple()) for p in self.coin_spawns],
            'open_entry_points': [
                {
                    'position': list(e.position.as_tuple()),
                    'direction': e.direction.value,
                    'segment': e.segment_index,
                }
                for e in self.open_entry_points
            ],
        }


def assemble_blueprint(
    segments: Sequence[PlacedSegment],
    open_entry_points: Sequence[EntryPoint] = (),
    seed: Optional[int] = None,
) -> Blueprint:
    """
    Collect accepted placements and their derived features into a Blueprint.

    Args:
        segments: Accepted placements in generation order, hub first
        open_entry_points: Frontier entry points left unmatched
        seed: Seed of the run that produced the placements

    Returns:
        Immutable Blueprint

    Raises:
        InvariantViolation: If there are no segments or the first is not the hub
    """
    if not segments:
        raise InvariantViolation("Cannot assemble a blueprint without segments")
    hub = segments[0]
    if not hub.is_hub:
        raise InvariantViolation(f"First segment '{hub.name}' is not the hub")
    hub_origin = hub.absolute(ORIGIN)

    vaults: Dict[VaultColor, BlockPos] = {}
    keys: Dict[VaultColor, BlockPos] = {}
    sand: List[BlockPos] = []
    items: List[BlockPos] = []
    coins: List[BlockPos] = []

    for segment in segments:
        template = segment.template
        if template.contained_vault is not None:
            if template.contained_vault in vaults:
                logger.warning("Duplicate %s vault in '%s' ignored", template.contained_vault, segment.name)
            else:
                vaults[template.contained_vault] = segment.vault_location
        if template.contained_key is not None:
            if template.contained_key in keys:
                logger.warning("Duplicate %s key in '%s' ignored", template.contained_key, segment.name)
            else:
                keys[template.contained_key] = segment.key_location
        sand.extend(segment.sand_spawns)
        items.extend(segment.item_spawns)
        coins.extend(segment.coin_spawns)

    return Blueprint(
        segments=tuple(segments),
        root_origin=hub_origin,
        hub_location=hub_origin,
        vault_locations=MappingProxyType(vaults),
        key_locations=MappingProxyType(keys),
        sand_spawns=tuple(sand),
        item_spawns=tuple(items),
        coin_spawns=tuple(coins),
        open_entry_points=tuple(open_entry_points),
        seed=seed,
    )


@dataclass(frozen=True)
class DungeonInstance:
    """A blueprint instantiated at a world position for one team.

    Attributes:
        id: Unique instance id
        world_origin: World position of the hub origin
        blueprint: World-space blueprint
        team: Optional team label owning this instance
    """
    id: str
    world_origin: BlockPos
    blueprint: Blueprint
    team: Optional[str] = None

    @staticmethod
    def create(blueprint: Blueprint, world_origin: BlockPos, team: Optional[str] = None) -> 'DungeonInstance':
        """Factory method translating a blueprint into world space."""
        return DungeonInstance(
            id=str(uuid.uuid4()),
            world_origin=world_origin,
            blueprint=blueprint.translated(world_origin),
            team=team,
        )

    @property
    def hub_location(self) -> BlockPos:
        return self.blueprint.hub_location

    @property
    def vault_locations(self) -> Mapping[VaultColor, BlockPos]:
        return self.blueprint.vault_locations

    @property
    def key_locations(self) -> Mapping[VaultColor, BlockPos]:
        return self.blueprint.key_locations

    def depth_at(self, point: BlockPos) -> int:
        return self.blueprint.depth_at(point)
