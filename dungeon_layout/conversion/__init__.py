"""
Conversion of generated layouts into tile grids and text.
"""

from .tile_grid import (
    TileType,
    layout_to_grid,
    leaf_coverage,
    render_ascii,
)

__all__ = [
    'TileType',
    'layout_to_grid',
    'leaf_coverage',
    'render_ascii',
]
