"""
Exceptions raised by the BSP dungeon generator.

A failed split is not an error: BSPNode.split() returns False and the
partition loop keeps the node as a leaf.
"""


class DungeonGenerationError(Exception):
    """Base class for dungeon generation failures."""
    pass


class InvalidConfiguration(DungeonGenerationError, ValueError):
    """Raised when generation parameters are rejected before any work starts."""
    pass


class NoRoomsGenerated(DungeonGenerationError):
    """Raised when room placement produced no rooms (invariant violation)."""
    pass
