"""
Value types shared by the BSP dungeon generator.

Rectangles are immutable integer regions. Rooms are identified by their id
(the index in the generated room list), never by their coordinates, so two
rooms with identical geometry stay distinct graph nodes.
"""

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Tuple


# Split axis is forced when one side is at least this much longer than the other
ASPECT_RATIO_LIMIT = 1.25
# Leaves within max_leaf_size keep splitting while random() exceeds this
SPLIT_CHANCE_THRESHOLD = 0.25
# Corridor segments are one tile thick
CORRIDOR_THICKNESS = 1


class SplitDirection(Enum):
    """Direction for BSP node splitting"""
    HORIZONTAL = auto()  # Cut across the height, children stacked along Y
    VERTICAL = auto()    # Cut across the width, children side by side along X
    NONE = auto()        # Leaf node, no split


class MergeAnchor(Enum):
    """Where the component-merge step measures distances from"""
    START = "start"          # The traversal's start room only
    COMPONENT = "component"  # Every room of the current component


@dataclass(frozen=True)
class Rectangle:
    """2D integer rectangle used for regions, rooms and corridor segments"""
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Rectangle size must be positive, got {self.width}x{self.height}"
            )

    @property
    def x2(self) -> int:
        """Right edge X coordinate (exclusive)"""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Bottom edge Y coordinate (exclusive)"""
        return self.y + self.height

    @property
    def center(self) -> Tuple[int, int]:
        """Integer center point of rectangle"""
        return (self.x + self.width // 2, self.y + self.height // 2)

    @property
    def area(self) -> int:
        return self.width * self.height

    def intersects(self, other: 'Rectangle') -> bool:
        """Check if this rectangle overlaps another (touching edges do not count)"""
        return not (self.x2 <= other.x or self.x >= other.x2 or
                    self.y2 <= other.y or self.y >= other.y2)

    def contains_point(self, x: int, y: int) -> bool:
        return self.x <= x < self.x2 and self.y <= y < self.y2

    def contains_rect(self, other: 'Rectangle') -> bool:
        """Check if other lies entirely within this rectangle"""
        return (self.x <= other.x and self.y <= other.y and
                other.x2 <= self.x2 and other.y2 <= self.y2)

    def to_dict(self) -> dict:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


@dataclass(eq=False)
class Room:
    """A room placed inside one BSP leaf"""
    id: int
    bounds: Rectangle
    leaf: Rectangle

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        """Rooms are the same entity only when their ids match"""
        if not isinstance(other, Room):
            return NotImplemented
        return self.id == other.id

    @property
    def x(self) -> int:
        return self.bounds.x

    @property
    def y(self) -> int:
        return self.bounds.y

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    @property
    def center(self) -> Tuple[int, int]:
        return self.bounds.center

    def distance_to(self, other: 'Room') -> float:
        """Euclidean distance between the two room centers"""
        c1 = self.center
        c2 = other.center
        return math.hypot(c2[0] - c1[0], c2[1] - c1[1])


@dataclass
class Corridor:
    """Corridor segments routed between two rooms"""
    start_room_id: int
    end_room_id: int
    path: List[Rectangle] = field(default_factory=list)
    reason: str = "adjacent"  # "adjacent" (phase 1) or "merge" (phase 2)

    @property
    def length(self) -> int:
        """Total number of tiles covered by the segments"""
        return sum(max(r.width, r.height) for r in self.path)

    def to_dict(self) -> dict:
        return {
            'start_room_id': self.start_room_id,
            'end_room_id': self.end_room_id,
            'reason': self.reason,
            'length': self.length,
            'path': [r.to_dict() for r in self.path],
        }
