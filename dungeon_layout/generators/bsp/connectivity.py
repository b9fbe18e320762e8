"""
Room connectivity for the BSP dungeon generator.

Phase 1 links every pair of rooms whose centers are closer than the
adjacency threshold. Phase 2 walks the connected components in room order
and bridges each one to the nearest room not yet visited, until a single
component remains.

Edges live in an index-based adjacency map keyed by room id; rooms never
reference each other directly.
"""

import logging
from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from .bsp_types import Corridor, MergeAnchor, Room
from .corridor_router import CorridorRouter

logger = logging.getLogger(__name__)


class ConnectivityGraph:
    """Builds the room adjacency graph and merges it into one component"""

    def __init__(self, rooms: List[Room], router: CorridorRouter,
                 adjacency_threshold: float,
                 merge_anchor: MergeAnchor = MergeAnchor.START):
        self.rooms = rooms
        self.router = router
        self.adjacency_threshold = adjacency_threshold
        self.merge_anchor = merge_anchor
        self.adjacency: Dict[int, Set[int]] = {room.id: set() for room in rooms}
        self.edges: List[Tuple[int, int]] = []
        self.corridors: List[Corridor] = []

    def are_adjacent(self, a: Room, b: Room) -> bool:
        return a.distance_to(b) < self.adjacency_threshold

    def is_connected(self, a: Room, b: Room) -> bool:
        return b.id in self.adjacency[a.id]

    def neighbors(self, room_id: int) -> List[int]:
        return sorted(self.adjacency[room_id])

    def _link(self, a: Room, b: Room, reason: str) -> Corridor:
        corridor = self.router.connect(a, b, reason=reason)
        self.corridors.append(corridor)
        self.adjacency[a.id].add(b.id)
        self.adjacency[b.id].add(a.id)
        self.edges.append((a.id, b.id))
        logger.debug(f"Connected room {a.id} <-> room {b.id} ({reason}, "
                     f"{len(corridor.path)} segments)")
        return corridor

    def connect_adjacent(self) -> int:
        """Phase 1: link every distinct pair closer than the threshold"""
        linked = 0
        for i, room in enumerate(self.rooms):
            for other in self.rooms[i + 1:]:
                if self.are_adjacent(room, other) and not self.is_connected(room, other):
                    self._link(room, other, "adjacent")
                    linked += 1
        logger.info(f"Adjacency pass linked {linked} room pairs "
                    f"(threshold {self.adjacency_threshold})")
        return linked

    def component_of(self, start: Room) -> List[int]:
        """Breadth-first collection of every room id reachable from start"""
        visited = {start.id}
        order = [start.id]
        queue = deque([start.id])
        while queue:
            current = queue.popleft()
            for neighbor in self.neighbors(current):
                if neighbor not in visited:
                    visited.add(neighbor)
                    order.append(neighbor)
                    queue.append(neighbor)
        return order

    def _find_bridge(self, start: Room, component: List[int],
                     remaining: List[int]) -> Optional[Tuple[Room, Room]]:
        """Pick the (inside, outside) pair to link for the current component"""
        if self.merge_anchor == MergeAnchor.START:
            anchors = [start]
        else:
            anchors = [self.rooms[room_id] for room_id in component]

        members = set(component)
        best: Optional[Tuple[Room, Room]] = None
        best_distance = float('inf')
        for anchor in anchors:
            for room_id in remaining:
                candidate = self.rooms[room_id]
                if room_id in members or self.is_connected(anchor, candidate):
                    continue
                distance = anchor.distance_to(candidate)
                if distance < best_distance:
                    best_distance = distance
                    best = (anchor, candidate)
        return best

    def merge_components(self) -> int:
        """Phase 2: bridge components until every room is reachable"""
        remaining = [room.id for room in self.rooms]
        bridges = 0
        while remaining:
            start = self.rooms[remaining[0]]
            component = self.component_of(start)
            members = set(component)
            remaining = [room_id for room_id in remaining if room_id not in members]
            if not remaining:
                break

            bridge = self._find_bridge(start, component, remaining)
            if bridge is None:
                raise RuntimeError(f"No bridge found for component of room {start.id}")
            inside, outside = bridge
            self._link(inside, outside, "merge")
            bridges += 1

        logger.info(f"Component merge added {bridges} bridging corridors")
        return bridges

    def connect_all(self) -> List[Corridor]:
        """Run both phases and return every corridor in creation order"""
        self.connect_adjacent()
        self.merge_components()
        return self.corridors

    def is_fully_connected(self) -> bool:
        if not self.rooms:
            return True
        return len(self.component_of(self.rooms[0])) == len(self.rooms)
