#!/usr/bin/env python3
"""
Tile grid conversion for generated dungeon layouts.

Rasterizes a DungeonLayout into a numpy grid (rows are Y, columns are X,
relative to the layout origin) for consumers that work on tiles, and
provides a plain-text rendering for quick inspection.

License: MIT
"""

import logging
from enum import Enum

import numpy as np

from ..generators.bsp.bsp_generator import DungeonLayout
from ..generators.bsp.bsp_types import Rectangle

logger = logging.getLogger(__name__)


class TileType(Enum):
    """Types of tiles in the rasterized layout"""
    EMPTY = 0       # Solid / unused space
    ROOM = 1        # Room floor
    CORRIDOR = 2    # Corridor floor outside any room
    LEAF_EDGE = 3   # Leaf border, only used for rendering


TILE_CHARS = {
    TileType.EMPTY.value: ' ',
    TileType.ROOM.value: '#',
    TileType.CORRIDOR.value: '+',
    TileType.LEAF_EDGE.value: '.',
}


def _local_slice(layout: DungeonLayout, rect: Rectangle):
    """Grid slice for a rectangle, clipped to the layout bounds"""
    bounds = layout.bounds
    x0 = max(rect.x, bounds.x) - bounds.x
    y0 = max(rect.y, bounds.y) - bounds.y
    x1 = min(rect.x2, bounds.x2) - bounds.x
    y1 = min(rect.y2, bounds.y2) - bounds.y
    if x1 <= x0 or y1 <= y0:
        return None
    return (slice(y0, y1), slice(x0, x1))


def layout_to_grid(layout: DungeonLayout) -> np.ndarray:
    """
    Rasterize rooms and corridors.

    Args:
        layout: Generated layout

    Returns:
        int8 array of TileType values with shape (height, width)
    """
    grid = np.zeros((layout.bounds.height, layout.bounds.width), dtype=np.int8)

    for segment in layout.corridors:
        region = _local_slice(layout, segment)
        if region is None:
            logger.warning(f"Corridor segment {segment} lies outside the layout bounds")
            continue
        grid[region] = TileType.CORRIDOR.value

    # Rooms win over corridors passing through them
    for room in layout.rooms:
        region = _local_slice(layout, room.bounds)
        if region is not None:
            grid[region] = TileType.ROOM.value

    logger.debug(f"Rasterized layout: {int((grid == TileType.ROOM.value).sum())} room tiles, "
                 f"{int((grid == TileType.CORRIDOR.value).sum())} corridor tiles")
    return grid


def leaf_coverage(layout: DungeonLayout) -> np.ndarray:
    """
    Count how many leaves cover each tile of the root region.

    A correct partition yields an array of ones.
    """
    coverage = np.zeros((layout.bounds.height, layout.bounds.width), dtype=np.int16)
    for leaf in layout.leaves:
        region = _local_slice(layout, leaf)
        if region is not None:
            coverage[region] += 1
    return coverage


def render_ascii(layout: DungeonLayout, show_leaves: bool = False) -> str:
    """Render the layout as text, one line per row"""
    grid = layout_to_grid(layout)

    if show_leaves:
        edges = np.zeros_like(grid, dtype=bool)
        for leaf in layout.leaves:
            region = _local_slice(layout, leaf)
            if region is None:
                continue
            rows, cols = region
            edges[rows.start, cols] = True
            edges[rows.stop - 1, cols] = True
            edges[rows, cols.start] = True
            edges[rows, cols.stop - 1] = True
        grid = np.where(edges & (grid == TileType.EMPTY.value),
                        TileType.LEAF_EDGE.value, grid)

    return '\n'.join(''.join(TILE_CHARS[int(v)] for v in row) for row in grid)
