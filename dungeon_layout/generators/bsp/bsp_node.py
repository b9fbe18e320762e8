"""
BSP tree node.

A node owns its region and, once split, exactly two children that tile the
region with no gap and no overlap. A node splits at most once.
"""

import random
from typing import List, Optional

from .bsp_types import ASPECT_RATIO_LIMIT, Rectangle, Room, SplitDirection


class BSPNode:
    """Node in the BSP tree"""

    def __init__(self, bounds: Rectangle, min_leaf_size: int, depth: int = 0):
        self.bounds = bounds
        self.min_leaf_size = min_leaf_size
        self.depth = depth
        self.split_direction = SplitDirection.NONE
        self.split_position = 0
        self.left_child: Optional[BSPNode] = None
        self.right_child: Optional[BSPNode] = None
        self.room: Optional[Room] = None

    @property
    def is_leaf(self) -> bool:
        return self.left_child is None and self.right_child is None

    def split(self, rng: random.Random) -> bool:
        """
        Split this node into two children.

        The cut axis is random unless the region is elongated: a region at
        least 1.25 times wider than tall is always cut vertically, and the
        reverse is cut horizontally. The cut position is drawn so that the
        first child is at least min_leaf_size along the cut axis.

        Args:
            rng: Random source for the axis and the cut position

        Returns:
            True if the node was split, False if it stays a leaf
        """
        if self.min_leaf_size == 0:
            return False
        if not self.is_leaf:
            return False

        width = self.bounds.width
        height = self.bounds.height

        split_horizontal = rng.random() < 0.5
        if width / height >= ASPECT_RATIO_LIMIT:
            split_horizontal = False
        elif height / width >= ASPECT_RATIO_LIMIT:
            split_horizontal = True

        max_size = (height if split_horizontal else width) - self.min_leaf_size
        if max_size < self.min_leaf_size:
            return False

        if max_size > self.min_leaf_size:
            split_size = rng.randrange(self.min_leaf_size, max_size)
        else:
            split_size = self.min_leaf_size

        x, y = self.bounds.x, self.bounds.y
        if split_horizontal:
            left_bounds = Rectangle(x, y, width, split_size)
            right_bounds = Rectangle(x, y + split_size, width, height - split_size)
            self.split_direction = SplitDirection.HORIZONTAL
        else:
            left_bounds = Rectangle(x, y, split_size, height)
            right_bounds = Rectangle(x + split_size, y, width - split_size, height)
            self.split_direction = SplitDirection.VERTICAL

        self.split_position = split_size
        self.left_child = BSPNode(left_bounds, self.min_leaf_size, self.depth + 1)
        self.right_child = BSPNode(right_bounds, self.min_leaf_size, self.depth + 1)
        return True

    def get_leaves(self) -> List['BSPNode']:
        """Get all leaf nodes in this subtree, left subtree first"""
        if self.is_leaf:
            return [self]

        leaves = []
        if self.left_child:
            leaves.extend(self.left_child.get_leaves())
        if self.right_child:
            leaves.extend(self.right_child.get_leaves())
        return leaves

    def max_depth(self) -> int:
        """Depth of the deepest leaf below this node"""
        if self.is_leaf:
            return self.depth
        return max(child.max_depth() for child in (self.left_child, self.right_child) if child)

    def __repr__(self):
        return (f"BSPNode(bounds={self.bounds}, depth={self.depth}, "
                f"split={self.split_direction.name})")
