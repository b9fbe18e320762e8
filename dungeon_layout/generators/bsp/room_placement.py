"""
Room placement inside BSP leaves.

Each leaf gets exactly one room. The room is inset from the leaf origin by a
random offset of at least `padding`, sized to the remaining space minus the
padding, then shrunk by up to a third of the leaf dimension. Rooms never
drop below 1x1 and never leave their leaf.
"""

import logging
import random
from typing import List, Tuple

from .bsp_node import BSPNode
from .bsp_types import Rectangle, Room

logger = logging.getLogger(__name__)


class RoomPlacer:
    """Derives one Room per leaf region"""

    def __init__(self, padding: int):
        self.padding = padding

    def _place_axis(self, extent: int, rng: random.Random) -> Tuple[int, int]:
        """Return (offset, size) of the room along one axis of a leaf"""
        padding = self.padding
        third = extent // 3

        offset = rng.randint(padding, third) if third > padding else padding
        size = min(extent - padding * 2, extent - offset - padding)

        shrink = rng.randrange(0, third) if third > 0 else 0
        size = max(1, size - shrink)

        # Keep the room inside the leaf when padding leaves no room to spare
        offset = min(offset, extent - 1)
        size = min(size, extent - offset)
        return offset, size

    def place_room(self, leaf: Rectangle, room_id: int, rng: random.Random) -> Room:
        offset_x, width = self._place_axis(leaf.width, rng)
        offset_y, height = self._place_axis(leaf.height, rng)
        bounds = Rectangle(leaf.x + offset_x, leaf.y + offset_y, width, height)

        if (offset_x < self.padding or offset_y < self.padding
                or bounds.x2 > leaf.x2 - self.padding or bounds.y2 > leaf.y2 - self.padding):
            logger.debug(f"Room {room_id} in leaf {leaf} could not honour padding {self.padding}")

        return Room(id=room_id, bounds=bounds, leaf=leaf)

    def place_rooms(self, leaves: List[BSPNode], rng: random.Random) -> List[Room]:
        """
        Place rooms in all leaf nodes, in leaf order.

        Room ids are the indices in the returned list; each leaf node keeps a
        reference to its room.
        """
        rooms: List[Room] = []
        for leaf in leaves:
            room = self.place_room(leaf.bounds, len(rooms), rng)
            leaf.room = room
            rooms.append(room)
            logger.debug(f"Placed room {room.id} at ({room.x}, {room.y}) "
                         f"size {room.width}x{room.height}")

        logger.info(f"Placed {len(rooms)} rooms with padding {self.padding}")
        return rooms
