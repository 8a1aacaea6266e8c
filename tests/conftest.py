"""Shared fixtures for the sotgen test suite."""

import pytest

from sotgen.generators.segments import (
    BlockPos, Direction, EntryPoint, PlacedSegment, RelativeEntryPoint, SegmentTemplate, SegmentType,
)
from sotgen.generators.templates import default_catalog
from sotgen.generators.templates.builtin import BUILTIN_TEMPLATES, HUB_TEMPLATE


@pytest.fixture
def hub_template():
    return HUB_TEMPLATE


@pytest.fixture
def corridor_ns():
    """3x6x3 corridor with N/S entry points at (1,0,0) and (1,0,2)."""
    return SegmentTemplate(
        name="corridor_ns",
        segment_type=SegmentType.CORRIDOR,
        size=BlockPos(3, 6, 3),
        schematic_file="corridor_ns.schem",
        entry_points=(
            RelativeEntryPoint(BlockPos(1, 0, 0), Direction.NORTH),
            RelativeEntryPoint(BlockPos(1, 0, 2), Direction.SOUTH),
        ),
    )


@pytest.fixture
def corridor_ew():
    return SegmentTemplate(
        name="corridor_ew",
        segment_type=SegmentType.CORRIDOR,
        size=BlockPos(3, 6, 3),
        schematic_file="corridor_ew.schem",
        entry_points=(
            RelativeEntryPoint(BlockPos(0, 0, 1), Direction.WEST),
            RelativeEntryPoint(BlockPos(2, 0, 1), Direction.EAST),
        ),
    )


@pytest.fixture
def placed_hub(hub_template):
    return PlacedSegment(template=hub_template, origin=BlockPos(0, 0, 0), depth=0, index=0)


@pytest.fixture
def hub_north_entry():
    """The hub's north exit when the hub sits at the origin."""
    return EntryPoint(BlockPos(15, 0, 0), Direction.NORTH, 0)


@pytest.fixture
def placed_corridor(corridor_ns, hub_north_entry):
    """corridor_ns attached to the hub's north exit."""
    return PlacedSegment(
        template=corridor_ns,
        origin=BlockPos(14, 0, -3),
        depth=1,
        index=1,
        parent_index=0,
        connected_entry=corridor_ns.entry_points[1],
        parent_entry=hub_north_entry,
    )


@pytest.fixture
def builtin_templates():
    return list(BUILTIN_TEMPLATES)


@pytest.fixture
def catalog():
    return default_catalog()
