"""
Graph export utilities for layout debugging.

Provides export functions to inspect generated layouts in:
- DOT format (Graphviz) for visual graph inspection
- JSON format for programmatic analysis and reproducibility tracking
"""

from typing import Any, Dict
import json

from .. import __version__


def export_layout_dot(layout_export: Dict[str, Any]) -> str:
    """Export the room graph as Graphviz DOT format.

    Args:
        layout_export: Result of BSPGenerator.export_layout() or DungeonLayout.to_dict()

    Returns:
        DOT format string; bridging corridors are drawn dashed
    """
    lines = ['graph DungeonLayout {']
    lines.append('  node [shape=box, style=filled, fillcolor="#D3D3D3"];')
    lines.append('')

    for room in layout_export.get('rooms', []):
        room_id = room.get('id', 0)
        bounds = room.get('bounds', {})
        center_x = bounds.get('x', 0) + bounds.get('width', 0) // 2
        center_y = bounds.get('y', 0) + bounds.get('height', 0) // 2
        label = '\\n'.join([
            f"id: {room_id}",
            f"pos: ({center_x}, {center_y})",
            f"size: {bounds.get('width', 0)}x{bounds.get('height', 0)}",
        ])
        lines.append(f'  room_{room_id} [label="{label}"];')

    lines.append('')

    for corr in layout_export.get('corridors', []):
        start_id = corr.get('start_room_id', 0)
        end_id = corr.get('end_room_id', 0)
        style = 'dashed' if corr.get('reason') == 'merge' else 'solid'
        lines.append(f'  room_{start_id} -- room_{end_id} [style={style}];')

    lines.append('}')
    return '\n'.join(lines)


def export_layout_json(layout_export: Dict[str, Any], seed: int) -> str:
    """Export the layout as JSON with metadata.

    Args:
        layout_export: Result of BSPGenerator.export_layout() or DungeonLayout.to_dict()
        seed: The seed used for generation

    Returns:
        JSON string with layout and debug metadata
    """
    rooms = layout_export.get('rooms', [])
    corridors = layout_export.get('corridors', [])

    reasons: Dict[str, int] = {}
    for corr in corridors:
        reason = corr.get('reason', 'adjacent')
        reasons[reason] = reasons.get(reason, 0) + 1

    output = {
        'metadata': {
            'seed': seed,
            'version': __version__,
            'generator': 'dungeon-layout',
        },
        'statistics': {
            'leaf_count': len(layout_export.get('leaves', [])),
            'room_count': len(rooms),
            'corridor_count': len(corridors),
            'corridors_by_reason': reasons,
        },
        'layout': layout_export
    }
    return json.dumps(output, indent=2)
