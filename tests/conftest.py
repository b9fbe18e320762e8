import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dungeon_layout import generate  # noqa: E402


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture(scope="session")
def scenario_layout():
    return generate(100, 100, min_leaf_size=10, max_leaf_size=30, padding=2, seed=42)
