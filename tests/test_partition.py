import random

import numpy as np
import pytest

from dungeon_layout.generators.bsp import PartitionTree, Rectangle


def _coverage(bounds, leaves):
    grid = np.zeros((bounds.height, bounds.width), dtype=np.int16)
    for leaf in leaves:
        grid[leaf.y - bounds.y:leaf.y2 - bounds.y, leaf.x - bounds.x:leaf.x2 - bounds.x] += 1
    return grid


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 7, 42, 99, 12345])
def test_leaves_tile_root_exactly(seed):
    bounds = Rectangle(0, 0, 100, 80)
    tree = PartitionTree(bounds, min_leaf_size=10, max_leaf_size=30)
    leaves = tree.build(random.Random(seed))
    rects = [leaf.bounds for leaf in leaves]
    assert sum(r.area for r in rects) == bounds.area
    assert (_coverage(bounds, rects) == 1).all()


@pytest.mark.parametrize("seed", [0, 5, 11, 42])
def test_leaves_with_negative_origin_tile_root(seed):
    bounds = Rectangle(-40, -25, 80, 50)
    tree = PartitionTree(bounds, min_leaf_size=6, max_leaf_size=20)
    rects = [leaf.bounds for leaf in tree.build(random.Random(seed))]
    assert (_coverage(bounds, rects) == 1).all()


@pytest.mark.parametrize("seed", range(10))
def test_leaves_within_max_and_above_min(seed):
    tree = PartitionTree(Rectangle(0, 0, 100, 100), min_leaf_size=10, max_leaf_size=30)
    leaves = tree.build(random.Random(seed))
    assert len(leaves) > 1
    for leaf in leaves:
        assert 10 <= leaf.bounds.width <= 30
        assert 10 <= leaf.bounds.height <= 30
        assert leaf.is_leaf


def test_max_leaf_zero_keeps_single_leaf(rng):
    bounds = Rectangle(0, 0, 100, 100)
    tree = PartitionTree(bounds, min_leaf_size=10, max_leaf_size=0)
    leaves = tree.build(rng)
    assert len(leaves) == 1
    assert leaves[0] is tree.root
    assert leaves[0].bounds == bounds
    assert tree.passes == 0


def test_min_leaf_zero_disables_splitting(rng):
    tree = PartitionTree(Rectangle(0, 0, 100, 100), min_leaf_size=0, max_leaf_size=30)
    leaves = tree.build(rng)
    assert len(leaves) == 1
    assert tree.passes == 1


def test_small_root_never_splits(rng):
    tree = PartitionTree(Rectangle(0, 0, 15, 15), min_leaf_size=8, max_leaf_size=5)
    assert len(tree.build(rng)) == 1


def test_build_is_repeatable_with_same_seed():
    tree = PartitionTree(Rectangle(0, 0, 90, 60), min_leaf_size=8, max_leaf_size=25)
    first = [leaf.bounds for leaf in tree.build(random.Random(17))]
    second = [leaf.bounds for leaf in tree.build(random.Random(17))]
    assert first == second
    assert tree.leaf_bounds() == second


def test_tree_depth_matches_leaves(rng):
    tree = PartitionTree(Rectangle(0, 0, 64, 64), min_leaf_size=8, max_leaf_size=16)
    leaves = tree.build(rng)
    assert tree.depth == max(leaf.depth for leaf in leaves)
    assert sorted(id(n) for n in tree.root.get_leaves()) == sorted(id(n) for n in leaves)
