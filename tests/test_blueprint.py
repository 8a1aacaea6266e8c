"""Tests for blueprint assembly and world-space instances."""

import json
from dataclasses import replace

import pytest

from sotgen.generators.layout import DungeonInstance, assemble_blueprint, generate_segment_layout
from sotgen.generators.segments import Area, BlockPos, InvariantViolation, PlacedSegment, VaultColor


@pytest.fixture
def small_blueprint(placed_hub, placed_corridor):
    return assemble_blueprint([placed_hub, placed_corridor], placed_corridor.open_entry_points(), seed=42)


def test_features_are_collected(small_blueprint):
    assert small_blueprint.hub_location == BlockPos(0, 0, 0)
    assert small_blueprint.root_origin == BlockPos(0, 0, 0)
    assert dict(small_blueprint.vault_locations) == {VaultColor.BLUE: BlockPos(15, 1, 20)}
    assert dict(small_blueprint.key_locations) == {}
    assert len(small_blueprint.sand_spawns) == 4
    assert small_blueprint.item_spawns == (BlockPos(15, 1, 13),)
    assert small_blueprint.seed == 42


def test_feature_maps_are_read_only(small_blueprint):
    with pytest.raises(TypeError):
        small_blueprint.vault_locations[VaultColor.RED] = BlockPos(0, 0, 0)


def test_bounds_and_size(small_blueprint):
    assert small_blueprint.bounds == Area(BlockPos(0, 0, -3), BlockPos(29, 7, 26))
    assert small_blueprint.size == BlockPos(30, 8, 30)
    assert small_blueprint.segment_count == 2
    assert not small_blueprint.only_hub_placed


def test_depth_at(small_blueprint):
    assert small_blueprint.depth_at(BlockPos(5, 1, 5)) == 0
    assert small_blueprint.depth_at(BlockPos(15, 2, -2)) == 1
    assert small_blueprint.depth_at(BlockPos(100, 100, 100)) == -1
    assert small_blueprint.segment_at(BlockPos(15, 0, -1)).name == "corridor_ns"


def test_children_of(small_blueprint):
    assert [s.name for s in small_blueprint.children_of(0)] == ["corridor_ns"]
    assert small_blueprint.children_of(1) == []


def test_translated(small_blueprint):
    world = small_blueprint.translated(BlockPos(1000, 64, 1000))
    assert world.hub_location == BlockPos(1000, 64, 1000)
    assert world.vault_locations[VaultColor.BLUE] == BlockPos(1015, 65, 1020)
    assert world.segments[1].origin == BlockPos(1014, 64, 997)
    assert world.open_entry_points[0].position == BlockPos(1015, 64, 997)
    assert world.depth_at(BlockPos(1015, 66, 998)) == 1
    # Original untouched
    assert small_blueprint.hub_location == BlockPos(0, 0, 0)


def test_assemble_requires_hub_first(placed_hub, placed_corridor):
    with pytest.raises(InvariantViolation):
        assemble_blueprint([])
    with pytest.raises(InvariantViolation):
        assemble_blueprint([placed_corridor, placed_hub])


def test_duplicate_vault_keeps_first(placed_hub, corridor_ns, hub_north_entry):
    blue_room = replace(corridor_ns, name="blue_room", contained_vault=VaultColor.BLUE,
                        vault_offset=BlockPos(1, 1, 1))
    placed = PlacedSegment(template=blue_room, origin=BlockPos(14, 0, -3), depth=1, index=1,
                           parent_index=0, connected_entry=blue_room.entry_points[1],
                           parent_entry=hub_north_entry)
    blueprint = assemble_blueprint([placed_hub, placed])
    assert blueprint.vault_locations[VaultColor.BLUE] == BlockPos(15, 1, 20)


def test_total_coins(builtin_templates):
    blueprint = generate_segment_layout(builtin_templates, seed=3).blueprint
    assert blueprint.total_coins == sum(s.template.total_coins for s in blueprint.segments)


def test_to_dict_is_json_serializable(small_blueprint):
    data = json.loads(json.dumps(small_blueprint.to_dict()))
    assert data['seed'] == 42
    assert data['hub_location'] == [0, 0, 0]
    assert [s['name'] for s in data['segments']] == ["hub", "corridor_ns"]
    assert data['segments'][1]['parent'] == 0
    assert data['vaults'] == {'blue': [15, 1, 20]}
    assert data['open_entry_points'][0]['direction'] == 'north'


def test_dungeon_instance(small_blueprint):
    origin = BlockPos(-500, 70, 250)
    a = DungeonInstance.create(small_blueprint, origin, team="red")
    b = DungeonInstance.create(small_blueprint, origin)
    assert a.id != b.id
    assert a.team == "red"
    assert a.hub_location == origin
    assert a.vault_locations[VaultColor.BLUE] == BlockPos(-485, 71, 270)
    assert a.depth_at(BlockPos(-485, 70, 248)) == 1
    assert a.key_locations == {}
