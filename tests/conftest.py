import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from rts_pathfinder.grid import TerrainGrid


def make_grid(W, H, walkable=True, buildable=True, height=0):
    walk = np.full((H, W), walkable, dtype=bool)
    build = np.full((H, W), buildable, dtype=bool)
    hgt = np.full((H, W), height, dtype=np.uint8)
    return walk, build, hgt


@pytest.fixture
def masks():
    return make_grid


@pytest.fixture
def ramp_grid():
    """10x10 open buildable map; x=5, y=3..6 is a ramp climbing 0,4,8,12."""
    walk, build, hgt = make_grid(10, 10)
    for i, y in enumerate(range(3, 7)):
        build[y, 5] = False
        hgt[y, 5] = 4 * i
    return TerrainGrid.from_masks(walk, build, hgt)


@pytest.fixture
def plateau_grid():
    """
    30x30 map: high ground (h=40) for y < 10, a 3-wide ramp at x=14..16,
    y=10..13 stepping down 32, 24, 16, 8, low ground (h=0) from y >= 14. Cliff cells
    along y=10..13 outside the ramp are unwalkable.
    """
    walk, build, hgt = make_grid(30, 30)
    hgt[:10, :] = 40
    for i, y in enumerate(range(10, 14)):
        walk[y, :] = False
        build[y, :] = False
        walk[y, 14:17] = True
        hgt[y, 14:17] = 32 - 8 * i
    return TerrainGrid.from_masks(walk, build, hgt)
