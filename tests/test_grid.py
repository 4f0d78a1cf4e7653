"""
Tests for TerrainGrid decoding and bounds handling.
"""

import numpy as np
import pytest

from rts_pathfinder.grid import TerrainGrid, cell_center, world_to_cell


def test_out_of_range_defaults(ramp_grid):
    for x, y in [(-1, 0), (0, -1), (10, 0), (0, 10), (100, 100), (-5, -5)]:
        assert ramp_grid.is_walkable(x, y) is False
        assert ramp_grid.is_buildable(x, y) is False
        assert ramp_grid.height_at(x, y) == 0


def test_bits_are_msb_first():
    grid = TerrainGrid(8, 1, b"\x80", b"\x01", bytes(range(8)))
    assert grid.is_walkable(0, 0)
    assert not any(grid.is_walkable(x, 0) for x in range(1, 8))
    assert grid.is_buildable(7, 0)
    assert not grid.is_buildable(0, 0)
    assert grid.height_at(5, 0) == 5


def test_row_major_indexing():
    # 4x2 grid, cell (1, 1) is index 5
    grid = TerrainGrid(4, 2, bytes([0b00000100]), b"", bytes([0, 0, 0, 0, 0, 9, 0, 0]))
    assert grid.is_walkable(1, 1)
    assert not grid.is_walkable(1, 0)
    assert grid.height_at(1, 1) == 9


def test_undersized_buffers_degrade_safely():
    grid = TerrainGrid(10, 10, b"\xff", b"", b"\x05")
    assert all(grid.is_walkable(x, 0) for x in range(8))
    assert not grid.is_walkable(8, 0)
    assert not grid.is_walkable(9, 9)
    assert not grid.is_buildable(0, 0)
    assert grid.height_at(0, 0) == 5
    assert grid.height_at(1, 0) == 0

    walk = grid.walkable_mask()
    assert walk.shape == (10, 10)
    assert walk.sum() == 8
    assert grid.buildable_mask().sum() == 0
    assert grid.height_map().shape == (10, 10)


def test_from_masks_round_trip(masks):
    walk, build, hgt = masks(5, 3)
    walk[1, 2] = False
    build[0, 4] = False
    hgt[2, 1] = 200
    grid = TerrainGrid.from_masks(walk, build, hgt)
    assert (grid.width, grid.height) == (5, 3)
    assert not grid.is_walkable(2, 1)
    assert not grid.is_buildable(4, 0)
    assert grid.height_at(1, 2) == 200
    np.testing.assert_array_equal(grid.walkable_mask(), walk)
    np.testing.assert_array_equal(grid.buildable_mask(), build)
    np.testing.assert_array_equal(grid.height_map(), hgt)


def test_invalid_dimensions():
    with pytest.raises(ValueError):
        TerrainGrid(0, 5, b"", b"", b"")
    with pytest.raises(ValueError):
        TerrainGrid.from_masks(np.ones((2, 2)), np.ones((3, 3)))


def test_world_cell_conversion():
    assert world_to_cell((3, 4)) == (3, 4)
    assert world_to_cell((3.5, 4.5)) == (3, 4)
    assert world_to_cell((3.99, 0.01)) == (3, 0)
    # floors, does not round
    assert world_to_cell((2.6, 2.6)) == (2, 2)
    assert cell_center((3, 4)) == (3.5, 4.5)


def test_cells_in_radius_clipped(ramp_grid):
    cells = ramp_grid.cells_in_radius(0, 0, 1)
    assert {(c.x, c.y) for c in cells} == {(0, 0), (0, 1), (1, 0), (1, 1)}
    ramp_cell = [c for c in ramp_grid.cells_in_radius(5, 6, 0) if (c.x, c.y) == (5, 6)][0]
    assert ramp_cell.walkable and not ramp_cell.buildable
    assert ramp_cell.height == 12
