"""
Partition driver for the BSP tree.

Repeatedly splits the working leaves of a root region until a whole pass
splits nothing. Oversized leaves always try to split; leaves already within
max_leaf_size split with 75% probability per pass.
"""

import logging
import random
from typing import List

from .bsp_node import BSPNode
from .bsp_types import SPLIT_CHANCE_THRESHOLD, Rectangle

logger = logging.getLogger(__name__)


class PartitionTree:
    """Owns the BSP root and the final list of leaf nodes"""

    def __init__(self, bounds: Rectangle, min_leaf_size: int, max_leaf_size: int):
        self.bounds = bounds
        self.min_leaf_size = min_leaf_size
        self.max_leaf_size = max_leaf_size
        self.root: BSPNode = BSPNode(bounds, min_leaf_size)
        self.leaves: List[BSPNode] = [self.root]
        self.passes = 0

    def _wants_split(self, node: BSPNode, rng: random.Random) -> bool:
        bounds = node.bounds
        return (bounds.width > self.max_leaf_size
                or bounds.height > self.max_leaf_size
                or rng.random() > SPLIT_CHANCE_THRESHOLD)

    def build(self, rng: random.Random) -> List[BSPNode]:
        """
        Split the root region into leaves.

        Args:
            rng: Random source shared with the rest of the generation run

        Returns:
            Leaf nodes in working-list order
        """
        self.root = BSPNode(self.bounds, self.min_leaf_size)
        self.leaves = [self.root]
        self.passes = 0

        if self.max_leaf_size == 0:
            logger.warning("max_leaf_size is 0, partitioning skipped (single leaf)")
            return self.leaves
        if self.min_leaf_size == 0:
            logger.warning("min_leaf_size is 0, splitting disabled (single leaf)")

        did_split = True
        while did_split:
            did_split = False
            self.passes += 1
            next_leaves: List[BSPNode] = []
            for node in self.leaves:
                if self._wants_split(node, rng) and node.split(rng):
                    logger.debug(f"Split {node.bounds} {node.split_direction.name} "
                                 f"at {node.split_position}")
                    next_leaves.append(node.left_child)
                    next_leaves.append(node.right_child)
                    did_split = True
                else:
                    next_leaves.append(node)
            self.leaves = next_leaves

        logger.info(f"Partitioned {self.bounds.width}x{self.bounds.height} into "
                    f"{len(self.leaves)} leaves in {self.passes} passes")
        return self.leaves

    def leaf_bounds(self) -> List[Rectangle]:
        return [leaf.bounds for leaf in self.leaves]

    @property
    def depth(self) -> int:
        return self.root.max_depth()
