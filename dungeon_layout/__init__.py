"""
Dungeon Layout - BSP dungeon layout generation

Partitions a rectangle into leaves, places one room per leaf and connects
every room with corridors. Consumers receive a DungeonLayout.
"""

from .generators.bsp import (
    BSPGenerator,
    DungeonLayout,
    Rectangle,
    Room,
    Corridor,
    generate,
    DungeonGenerationError,
    InvalidConfiguration,
    NoRoomsGenerated,
    __version__
)

__all__ = [
    'BSPGenerator',
    'DungeonLayout',
    'Rectangle',
    'Room',
    'Corridor',
    'generate',
    'DungeonGenerationError',
    'InvalidConfiguration',
    'NoRoomsGenerated',
    '__version__'
]
