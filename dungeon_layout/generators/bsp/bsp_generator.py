#!/usr/bin/env python3
"""
BSP (Binary Space Partitioning) Dungeon Layout Generator

Runs the full generation pipeline on one seeded random source:

1. Partition the root region into leaves (PartitionTree)
2. Place one room inside every leaf (RoomPlacer)
3. Link nearby rooms and merge components into one (ConnectivityGraph),
   routing a corridor for every edge (CorridorRouter)

The result is a DungeonLayout holding leaf rectangles, rooms and corridor
segments. Rendering is left to the consumer.

License: MIT
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .bsp_types import Corridor, MergeAnchor, Rectangle, Room
from .connectivity import ConnectivityGraph
from .corridor_router import CorridorRouter
from .exceptions import InvalidConfiguration, NoRoomsGenerated
from .partition import PartitionTree
from .room_placement import RoomPlacer

logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    'map_width': 100,
    'map_height': 100,
    'origin_x': 0,
    'origin_y': 0,
    'min_leaf_size': 10,
    'max_leaf_size': 30,
    'room_padding': 2,
    'adjacency_threshold': None,  # None -> min_leaf_size
    'merge_anchor': MergeAnchor.START.value,
    'seed': None,
}


def _require_int(config: Dict[str, Any], key: str, minimum: Optional[int] = None) -> int:
    value = config[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f"{key} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise InvalidConfiguration(f"{key} must be >= {minimum}, got {value}")
    return value


def validate_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge a user config over DEFAULT_CONFIG and check every value.

    Raises:
        InvalidConfiguration: On unknown keys or out-of-range values
    """
    config = dict(config or {})
    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        raise InvalidConfiguration(f"Unknown config keys: {', '.join(unknown)}")

    merged = dict(DEFAULT_CONFIG)
    merged.update(config)

    _require_int(merged, 'map_width', 1)
    _require_int(merged, 'map_height', 1)
    _require_int(merged, 'origin_x')
    _require_int(merged, 'origin_y')
    _require_int(merged, 'min_leaf_size', 0)
    _require_int(merged, 'max_leaf_size', 0)
    _require_int(merged, 'room_padding', 0)

    threshold = merged['adjacency_threshold']
    if threshold is not None:
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise InvalidConfiguration(f"adjacency_threshold must be a number, got {threshold!r}")
        if threshold < 0:
            raise InvalidConfiguration(f"adjacency_threshold must be >= 0, got {threshold}")

    anchor = merged['merge_anchor']
    if isinstance(anchor, MergeAnchor):
        merged['merge_anchor'] = anchor.value
    elif anchor not in {a.value for a in MergeAnchor}:
        raise InvalidConfiguration(
            f"merge_anchor must be one of {[a.value for a in MergeAnchor]}, got {anchor!r}"
        )

    seed = merged['seed']
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise InvalidConfiguration(f"seed must be an integer or None, got {seed!r}")

    return merged


@dataclass
class DungeonLayout:
    """Generated layout handed to rendering or export consumers"""
    leaves: List[Rectangle]
    rooms: List[Room]
    corridors: List[Rectangle]
    connections: List[Corridor]
    edges: List[Tuple[int, int]]
    bounds: Rectangle
    seed: Optional[int]
    config: Dict[str, Any] = field(default_factory=dict)
    _adjacency: Optional[Dict[int, List[int]]] = field(
        default=None, init=False, repr=False, compare=False)

    def adjacency(self) -> Dict[int, List[int]]:
        """Room id -> sorted ids of directly connected rooms, built once"""
        if self._adjacency is None:
            adj: Dict[int, set] = {room.id: set() for room in self.rooms}
            for a, b in self.edges:
                adj[a].add(b)
                adj[b].add(a)
            self._adjacency = {room_id: sorted(ids) for room_id, ids in adj.items()}
        return self._adjacency

    def connected_rooms(self, room: Room) -> List[Room]:
        return [self.rooms[room_id] for room_id in self.adjacency()[room.id]]

    def to_dict(self) -> Dict[str, Any]:
        adjacency = self.adjacency()
        return {
            'seed': self.seed,
            'config': dict(self.config),
            'bounds': self.bounds.to_dict(),
            'leaves': [leaf.to_dict() for leaf in self.leaves],
            'rooms': [
                {
                    'id': room.id,
                    'bounds': room.bounds.to_dict(),
                    'leaf': room.leaf.to_dict(),
                    'connected_to': list(adjacency[room.id]),
                }
                for room in self.rooms
            ],
            'corridors': [c.to_dict() for c in self.connections],
        }


class BSPGenerator:
    """
    Main BSP dungeon generator class.

    Configuration is a plain dictionary; missing keys fall back to
    DEFAULT_CONFIG. The same seed always reproduces the same layout.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize BSP generator with configuration.

        Args:
            config: Configuration dictionary with generation parameters

        Raises:
            InvalidConfiguration: If any parameter is rejected
        """
        self.config = validate_config(config)

        # Map dimensions
        self.map_width = self.config['map_width']
        self.map_height = self.config['map_height']
        self.origin_x = self.config['origin_x']
        self.origin_y = self.config['origin_y']

        # BSP parameters
        self.min_leaf_size = self.config['min_leaf_size']
        self.max_leaf_size = self.config['max_leaf_size']
        self.room_padding = self.config['room_padding']

        # Connectivity parameters
        threshold = self.config['adjacency_threshold']
        self.adjacency_threshold = self.min_leaf_size if threshold is None else threshold
        self.merge_anchor = MergeAnchor(self.config['merge_anchor'])

        self.seed: Optional[int] = self.config['seed']

        # Generation state
        self.tree: Optional[PartitionTree] = None
        self.graph: Optional[ConnectivityGraph] = None
        self.layout: Optional[DungeonLayout] = None

    @property
    def bounds(self) -> Rectangle:
        return Rectangle(self.origin_x, self.origin_y, self.map_width, self.map_height)

    def generate(self, rng: Optional[random.Random] = None) -> DungeonLayout:
        """
        Generate a complete dungeon layout.

        Args:
            rng: Optional random source; by default one is seeded from the
                configured seed (or a fresh seed, recorded on the layout).
                An injected source has no seed to record, so the layout
                carries seed None and the caller owns reproducibility

        Returns:
            The generated DungeonLayout

        Raises:
            NoRoomsGenerated: If room placement yields nothing
        """
        if rng is None:
            seed = self.seed
            if seed is None:
                seed = random.randint(1, 1_000_000)
            rng = random.Random(seed)
        else:
            seed = None

        logger.info(f"Starting BSP generation: {self.map_width}x{self.map_height}, "
                    f"leaf size {self.min_leaf_size}..{self.max_leaf_size}, seed {seed}")

        self.tree = PartitionTree(self.bounds, self.min_leaf_size, self.max_leaf_size)
        leaves = self.tree.build(rng)

        rooms = RoomPlacer(self.room_padding).place_rooms(leaves, rng)
        if not rooms:
            raise NoRoomsGenerated(f"No rooms placed in {len(leaves)} leaves")

        router = CorridorRouter(rng)
        self.graph = ConnectivityGraph(rooms, router, self.adjacency_threshold, self.merge_anchor)
        connections = self.graph.connect_all()

        self.layout = DungeonLayout(
            leaves=self.tree.leaf_bounds(),
            rooms=rooms,
            corridors=[segment for c in connections for segment in c.path],
            connections=connections,
            edges=list(self.graph.edges),
            bounds=self.bounds,
            seed=seed,
            config=dict(self.config, seed=seed),
        )

        logger.info(f"Generation complete: {len(leaves)} leaves, {len(rooms)} rooms, "
                    f"{len(self.layout.corridors)} corridor segments")
        return self.layout

    def get_layout_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the generated layout.

        Returns:
            Dictionary with layout statistics (empty before generate())
        """
        if self.layout is None:
            return {}
        layout = self.layout

        stats: Dict[str, Any] = {
            'leaf_count': len(layout.leaves),
            'room_count': len(layout.rooms),
            'corridor_count': len(layout.connections),
            'corridor_segments': len(layout.corridors),
            'adjacent_links': sum(1 for c in layout.connections if c.reason == "adjacent"),
            'merge_links': sum(1 for c in layout.connections if c.reason == "merge"),
            'total_room_area': sum(r.bounds.area for r in layout.rooms),
            'average_room_size': 0,
            'max_connections': 0,
            'min_connections': 0,
            'avg_connections': 0,
            'total_corridor_length': sum(c.length for c in layout.connections),
            'tree_depth': self.tree.depth if self.tree else 0,
            'partition_passes': self.tree.passes if self.tree else 0,
        }

        if layout.rooms:
            stats['average_room_size'] = stats['total_room_area'] / len(layout.rooms)

            connections = [len(ids) for ids in layout.adjacency().values()]
            stats['max_connections'] = max(connections)
            stats['min_connections'] = min(connections)
            stats['avg_connections'] = sum(connections) / len(connections)

        return stats

    def export_layout(self) -> Dict[str, Any]:
        """
        Export the generated layout as a dictionary for serialization.

        Returns:
            Dictionary representation of the layout including stats
        """
        if self.layout is None:
            raise RuntimeError("export_layout() called before generate()")
        layout = self.layout.to_dict()
        layout['stats'] = self.get_layout_stats()
        return layout


def generate(region_width: int, region_height: int, min_leaf_size: int,
             max_leaf_size: int, padding: int, seed: Optional[int] = None,
             **options: Any) -> DungeonLayout:
    """
    Generate a dungeon layout in one call.

    Args:
        region_width: Width of the root region
        region_height: Height of the root region
        min_leaf_size: Minimum split dimension (0 disables splitting)
        max_leaf_size: Leaves larger than this always split (0 keeps one leaf)
        padding: Minimum border between a leaf edge and its room
        seed: Seed for the random source; drawn at random when omitted
        **options: adjacency_threshold, merge_anchor, origin_x, origin_y

    Returns:
        The generated DungeonLayout

    Raises:
        InvalidConfiguration: If any parameter is rejected
    """
    allowed = {'adjacency_threshold', 'merge_anchor', 'origin_x', 'origin_y'}
    unknown = sorted(set(options) - allowed)
    if unknown:
        raise InvalidConfiguration(f"Unknown options: {', '.join(unknown)}")

    config = {
        'map_width': region_width,
        'map_height': region_height,
        'min_leaf_size': min_leaf_size,
        'max_leaf_size': max_leaf_size,
        'room_padding': padding,
        'seed': seed,
    }
    config.update(options)
    return BSPGenerator(config).generate()
