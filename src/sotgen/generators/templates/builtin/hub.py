"""
Hub template: the 30x8x27 start room with one exit on each side.
"""

from ...segments import BlockPos, Direction, RelativeEntryPoint, SegmentTemplate, SegmentType, VaultColor


HUB_TEMPLATE = SegmentTemplate(
    name="hub",
    segment_type=SegmentType.START,
    size=BlockPos(30, 8, 27),
    schematic_file="hub.schem",
    entry_points=(
        RelativeEntryPoint(BlockPos(15, 0, 0), Direction.NORTH),
        RelativeEntryPoint(BlockPos(29, 0, 13), Direction.EAST),
        RelativeEntryPoint(BlockPos(15, 0, 26), Direction.SOUTH),
        RelativeEntryPoint(BlockPos(0, 0, 13), Direction.WEST),
    ),
    sand_spawns=(BlockPos(5, 1, 5), BlockPos(24, 1, 5), BlockPos(5, 1, 21), BlockPos(24, 1, 21)),
    item_spawns=(BlockPos(15, 1, 13),),
    is_hub=True,
    contained_vault=VaultColor.BLUE,
    vault_offset=BlockPos(15, 1, 20),
)
