"""
BSP (Binary Space Partitioning) Generator Module

This module provides the BSP partitioning, room placement, connectivity and
corridor routing used for procedural dungeon layouts.
"""

from .bsp_types import (
    Rectangle,
    Room,
    Corridor,
    SplitDirection,
    MergeAnchor,
    # Constants
    ASPECT_RATIO_LIMIT,
    SPLIT_CHANCE_THRESHOLD,
    CORRIDOR_THICKNESS
)
from .bsp_node import BSPNode
from .partition import PartitionTree
from .room_placement import RoomPlacer
from .corridor_router import CorridorRouter
from .connectivity import ConnectivityGraph
from .bsp_generator import (
    BSPGenerator,
    DungeonLayout,
    DEFAULT_CONFIG,
    generate,
    validate_config
)
from .exceptions import (
    DungeonGenerationError,
    InvalidConfiguration,
    NoRoomsGenerated
)

__all__ = [
    'BSPGenerator',
    'BSPNode',
    'PartitionTree',
    'RoomPlacer',
    'CorridorRouter',
    'ConnectivityGraph',
    'DungeonLayout',
    'Rectangle',
    'Room',
    'Corridor',
    'SplitDirection',
    'MergeAnchor',
    'DEFAULT_CONFIG',
    'generate',
    'validate_config',
    'DungeonGenerationError',
    'InvalidConfiguration',
    'NoRoomsGenerated',
    'ASPECT_RATIO_LIMIT',
    'SPLIT_CHANCE_THRESHOLD',
    'CORRIDOR_THICKNESS'
]

__version__ = '1.0.0'
