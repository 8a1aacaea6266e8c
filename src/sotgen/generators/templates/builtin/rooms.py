"""
Feature room templates: loot rooms, puzzle and parkour rooms, vault rooms.

Vaults: BLUE sits in the hub; RED, GREEN and GOLD each have a vault room.
Keys: RED in the puzzle room, GOLD on the lava parkour, GREEN in a loot room.
"""

from ...segments import BlockPos, Direction, RelativeEntryPoint, SegmentTemplate, SegmentType, VaultColor

N, S, E, W = Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST


def _room(name, segment_type, size, entries, **kwargs):
    return SegmentTemplate(
        name=name,
        segment_type=segment_type,
        size=BlockPos(*size),
        schematic_file=f"{name}.schem",
        entry_points=tuple(RelativeEntryPoint(BlockPos(*offset), d) for offset, d in entries),
        **kwargs,
    )


ROOM_TEMPLATES = [
    _room("storeroom", SegmentType.SMALL_ROOM, (7, 6, 7),
          [((3, 0, 6), S), ((3, 0, 0), N)],
          coin_spawns=(BlockPos(1, 1, 1), BlockPos(5, 1, 5)), total_coins=20,
          item_spawns=(BlockPos(3, 1, 3),)),
    _room("crypt", SegmentType.SMALL_ROOM, (7, 6, 7),
          [((0, 0, 3), W), ((6, 0, 3), E)],
          coin_spawns=(BlockPos(3, 1, 1),), total_coins=15,
          sand_spawns=(BlockPos(3, 1, 5),)),
    _room("library", SegmentType.SMALL_ROOM, (9, 7, 9),
          [((4, 0, 8), S), ((8, 0, 4), E), ((0, 0, 4), W)],
          item_spawns=(BlockPos(2, 1, 2), BlockPos(6, 1, 6)), total_coins=10,
          contained_key=VaultColor.GREEN, key_offset=BlockPos(4, 1, 4)),
    _room("great_hall", SegmentType.LARGE_ROOM, (15, 10, 15),
          [((7, 0, 0), N), ((14, 0, 7), E), ((7, 0, 14), S), ((0, 0, 7), W)],
          coin_spawns=(BlockPos(3, 1, 3), BlockPos(11, 1, 3), BlockPos(3, 1, 11), BlockPos(11, 1, 11)),
          total_coins=40, coin_multiplier=1.5,
          sand_spawns=(BlockPos(7, 1, 7),)),
    _room("puzzle_chamber", SegmentType.PUZZLE_ROOM, (11, 8, 11),
          [((5, 0, 10), S), ((5, 0, 0), N)],
          is_puzzle_room=True,
          contained_key=VaultColor.RED, key_offset=BlockPos(5, 1, 5)),
    _room("lava_run", SegmentType.LAVA_PARKOUR, (7, 12, 21),
          [((3, 0, 20), S), ((3, 6, 0), N)],
          is_lava_parkour=True, total_coins=25, coin_multiplier=2.0,
          coin_spawns=(BlockPos(3, 4, 10),),
          contained_key=VaultColor.GOLD, key_offset=BlockPos(3, 7, 1)),
    _room("red_vault", SegmentType.VAULT_ROOM, (9, 8, 9),
          [((4, 0, 8), S)],
          contained_vault=VaultColor.RED, vault_offset=BlockPos(4, 1, 2)),
    _room("green_vault", SegmentType.VAULT_ROOM, (9, 8, 9),
          [((0, 0, 4), W)],
          contained_vault=VaultColor.GREEN, vault_offset=BlockPos(6, 1, 4)),
    _room("gold_vault", SegmentType.VAULT_ROOM, (9, 8, 9),
          [((4, 0, 0), N)],
          total_coins=50, coin_multiplier=3.0,
          contained_vault=VaultColor.GOLD, vault_offset=BlockPos(4, 1, 6)),
]
