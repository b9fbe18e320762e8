"""
Corridor routing between two rooms.

Picks one anchor point inside each room and joins them with a straight
segment (when the points share a row or column) or an L-shape whose elbow
sits at one of the two possible corners, chosen at random. Segments are one
tile thick; no collision avoidance is performed.
"""

import random
from typing import List, Tuple

from .bsp_types import CORRIDOR_THICKNESS, Corridor, Rectangle, Room

Point = Tuple[int, int]


class CorridorRouter:
    """Emits axis-aligned corridor rectangles between room anchor points"""

    def __init__(self, rng: random.Random):
        self.rng = rng

    def _anchor_coord(self, start: int, extent: int) -> int:
        # Keep a one tile margin from the room edges where the room allows it
        if extent > 2:
            return self.rng.randrange(start + 1, start + extent - 1)
        return start + extent // 2

    def pick_anchor(self, room: Room) -> Point:
        """Random point strictly inside the room"""
        return (self._anchor_coord(room.x, room.width),
                self._anchor_coord(room.y, room.height))

    def route(self, p1: Point, p2: Point) -> List[Rectangle]:
        """
        Build the segments joining two points.

        Args:
            p1: Anchor in the first room
            p2: Anchor in the second room

        Returns:
            No segment for identical points, one for aligned points,
            otherwise a horizontal segment followed by a vertical one.
            The tiles of all segments form one 4-connected run.
        """
        x1, y1 = p1
        x2, y2 = p2
        dx = x2 - x1
        dy = y2 - y1

        if dx == 0 and dy == 0:
            return []
        if dx == 0:
            return [Rectangle(x1, min(y1, y2), CORRIDOR_THICKNESS, abs(dy))]
        if dy == 0:
            return [Rectangle(min(x1, x2), y1, abs(dx), CORRIDOR_THICKNESS)]

        if self.rng.random() < 0.5:
            elbow_x, elbow_y = x2, y1
        else:
            elbow_x, elbow_y = x1, y2

        # The horizontal segment must cover the elbow tile; the endpoint it
        # drops is an anchor, which lies inside a room
        start_x = min(x1, x2)
        if elbow_x > start_x:
            start_x += 1

        return [
            Rectangle(start_x, elbow_y, abs(dx), CORRIDOR_THICKNESS),
            Rectangle(elbow_x, min(y1, y2), CORRIDOR_THICKNESS, abs(dy)),
        ]

    def connect(self, room_a: Room, room_b: Room, reason: str = "adjacent") -> Corridor:
        p1 = self.pick_anchor(room_a)
        p2 = self.pick_anchor(room_b)
        return Corridor(
            start_room_id=room_a.id,
            end_room_id=room_b.id,
            path=self.route(p1, p2),
            reason=reason,
        )
