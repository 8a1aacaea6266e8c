"""
Corridor and stair templates.

Corridors are 3 blocks wide and 6 tall. Entry points sit on the floor in the
middle of the end faces.
"""

from ...segments import BlockPos, Direction, RelativeEntryPoint, SegmentTemplate, SegmentType

N, S, E, W = Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST


def _corridor(name, size, entries, **kwargs):
    return SegmentTemplate(
        name=name,
        segment_type=kwargs.pop('segment_type', SegmentType.CORRIDOR),
        size=BlockPos(*size),
        schematic_file=f"{name}.schem",
        entry_points=tuple(RelativeEntryPoint(BlockPos(*offset), d) for offset, d in entries),
        **kwargs,
    )


CORRIDOR_TEMPLATES = [
    _corridor("corridor_ns", (3, 6, 3), [((1, 0, 0), N), ((1, 0, 2), S)],
              sand_spawns=(BlockPos(1, 1, 1),)),
    _corridor("corridor_ew", (3, 6, 3), [((0, 0, 1), W), ((2, 0, 1), E)],
              sand_spawns=(BlockPos(1, 1, 1),)),
    _corridor("long_corridor_ns", (3, 6, 9), [((1, 0, 0), N), ((1, 0, 8), S)],
              coin_spawns=(BlockPos(1, 1, 4),), total_coins=5),
    _corridor("long_corridor_ew", (9, 6, 3), [((0, 0, 1), W), ((8, 0, 1), E)],
              coin_spawns=(BlockPos(4, 1, 1),), total_coins=5),
    _corridor("corner_ne", (3, 6, 3), [((1, 0, 0), N), ((2, 0, 1), E)]),
    _corridor("corner_sw", (3, 6, 3), [((1, 0, 2), S), ((0, 0, 1), W)]),
    _corridor("t_junction_ewn", (9, 6, 3), [((0, 0, 1), W), ((8, 0, 1), E), ((4, 0, 0), N)],
              item_spawns=(BlockPos(4, 1, 1),)),
    _corridor("t_junction_nss", (3, 6, 9), [((1, 0, 0), N), ((1, 0, 8), S), ((2, 0, 4), E)]),
    _corridor("crossroads", (9, 6, 9), [((4, 0, 0), N), ((8, 0, 4), E), ((4, 0, 8), S), ((0, 0, 4), W)],
              sand_spawns=(BlockPos(4, 1, 4),)),
    # Rises 4 blocks from the south end to the north end
    _corridor("stairs_up_north", (3, 10, 7), [((1, 0, 6), S), ((1, 4, 0), N)],
              segment_type=SegmentType.STAIRS),
    _corridor("stairs_up_east", (7, 10, 3), [((0, 0, 1), W), ((6, 4, 1), E)],
              segment_type=SegmentType.STAIRS),
]
