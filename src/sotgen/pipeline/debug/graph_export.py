"""
Graph export utilities for blueprint debugging.

Provides export functions to inspect generated blueprints in:
- DOT format (Graphviz) for visual graph inspection
- JSON format for programmatic analysis and reproducibility tracking
"""

import json
from collections import Counter
from typing import Dict

from ...generators.layout.blueprint import Blueprint

# Colour by segment type
SEGMENT_COLORS: Dict[str, str] = {
    'start': '#90EE90',         # Light green
    'corridor': '#D3D3D3',      # Light gray
    'stairs': '#DDA0DD',        # Plum
    'small_room': '#87CEEB',    # Sky blue
    'large_room': '#4682B4',    # Steel blue
    'puzzle_room': '#FFB6C1',   # Light pink
    'lava_parkour': '#FF7F50',  # Coral
    'vault_room': '#FFD700',    # Gold
}


def export_blueprint_dot(blueprint: Blueprint) -> str:
    """Export a blueprint's connection tree as Graphviz DOT.

    Args:
        blueprint: Generation result

    Returns:
        DOT format string for visualization with Graphviz or online viewers
    """
    lines = ['digraph DungeonBlueprint {']
    lines.append('  rankdir=LR;')
    lines.append('  node [shape=box, style=filled];')
    lines.append('')

    for segment in blueprint.segments:
        template = segment.template
        label_lines = [
            template.name,
            f"#{segment.index} depth {segment.depth}",
            f"origin: {segment.origin}",
        ]
        if template.contained_vault is not None:
            label_lines.append(f"vault: {template.contained_vault}")
        if template.contained_key is not None:
            label_lines.append(f"key: {template.contained_key}")
        label = '\\n'.join(label_lines)
        color = SEGMENT_COLORS.get(template.segment_type.value, '#D3D3D3')
        lines.append(f'  seg_{segment.index} [label="{label}" fillcolor="{color}"];')

    lines.append('')

    for segment in blueprint.segments:
        if segment.parent_index is None:
            continue
        direction = segment.parent_entry.direction.value if segment.parent_entry else ''
        style = 'dashed' if segment.template.segment_type.value == 'stairs' else 'solid'
        lines.append(f'  seg_{segment.parent_index} -> seg_{segment.index} '
                     f'[label="{direction}", style={style}];')

    lines.append('}')
    return '\n'.join(lines)


def export_blueprint_json(blueprint: Blueprint, seed: int) -> str:
    """Export a blueprint as JSON with metadata.

    Args:
        blueprint: Generation result
        seed: The seed used for generation

    Returns:
        JSON string with blueprint and debug metadata
    """
    segment_types = Counter(s.template.segment_type.value for s in blueprint.segments)
    size = blueprint.size

    output = {
        'metadata': {
            'seed': seed,
            'version': '1.0',
            'generator': 'sotgen',
        },
        'statistics': {
            'segment_count': blueprint.segment_count,
            'segment_types': dict(segment_types),
            'max_depth': max(s.depth for s in blueprint.segments),
            'open_entry_points': len(blueprint.open_entry_points),
            'size': [size.x, size.y, size.z],
            'total_coins': blueprint.total_coins,
            'vaults': sorted(c.value for c in blueprint.vault_locations),
            'keys': sorted(c.value for c in blueprint.key_locations),
        },
        'blueprint': blueprint.to_dict(),
    }
    return json.dumps(output, indent=2)


def derive_attempt_seed(global_seed: int, attempt: int) -> int:
    """Derive a deterministic seed for a retry attempt.

    Attempt 0 uses the global seed itself.

    Args:
        global_seed: The seed requested for the run
        attempt: Zero-based attempt number

    Returns:
        Deterministic seed for this attempt
    """
    if attempt == 0:
        return global_seed
    return (global_seed * 31 + attempt) % (2**31 - 1)
