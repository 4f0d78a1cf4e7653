# region Imports
from __future__ import annotations
import math
from typing import List, Optional
import numpy as np
from .models import Cell, MapCell, WorldPos
# endregion

# region Coordinate Helpers
def world_to_cell(p: WorldPos) -> Cell:
    """
    Floors each axis rather than rounding: a waypoint at a cell centre
    (gx + 0.5) and the integer corner (gx) both land in cell gx, whereas
    rounding would push centres into the next cell.
    """
    return (int(math.floor(p[0])), int(math.floor(p[1])))


def cell_center(c: Cell) -> WorldPos:
    return (c[0] + 0.5, c[1] + 0.5)


def idx_to_xy(i: int, W: int) -> Cell:
    return (i % W, i // W)
# endregion

# region Terrain Grid
class TerrainGrid:
    """
    Read-only view over the three packed map planes.

    walkable / buildable: one bit per cell, row-major, MSB first in each byte
    height:               one byte per cell, row-major

    Buffers may be shorter than width*height; every lookup checks both the
    declared dimensions and the real buffer length and falls back to
    unwalkable / unbuildable / height 0.
    """

    def __init__(self, width: int, height: int, walkable, buildable, heights):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive (W={width}, H={height})")
        self.width = int(width)
        self.height = int(height)
        self._walkable = bytes(walkable)
        self._buildable = bytes(buildable)
        self._heights = bytes(heights)

    @classmethod
    def from_masks(
        cls,
        walkable: np.ndarray,
        buildable: np.ndarray,
        heights: Optional[np.ndarray] = None,
    ) -> "TerrainGrid":
        """Pack dense (H,W) arrays into planes. heights defaults to all zeros."""
        walkable = np.asarray(walkable, dtype=bool)
        buildable = np.asarray(buildable, dtype=bool)
        if walkable.ndim != 2:
            raise ValueError("walkable mask must be 2-D (H,W)")
        if buildable.shape != walkable.shape:
            raise ValueError(f"Shape mismatch: walkable {walkable.shape} vs buildable {buildable.shape}")
        H, W = walkable.shape
        if heights is None:
            heights = np.zeros((H, W), dtype=np.uint8)
        heights = np.asarray(heights)
        if heights.shape != walkable.shape:
            raise ValueError(f"Shape mismatch: walkable {walkable.shape} vs height {heights.shape}")
        h8 = np.clip(heights, 0, 255).astype(np.uint8)
        return cls(
            W,
            H,
            np.packbits(walkable.ravel()).tobytes(),
            np.packbits(buildable.ravel()).tobytes(),
            h8.ravel().tobytes(),
        )

    # region Point Queries
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _bit(self, data: bytes, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        i = y * self.width + x
        byte_i = i >> 3
        if byte_i >= len(data):
            return False
        return (data[byte_i] >> (7 - (i & 7))) & 1 == 1

    def is_walkable(self, x: int, y: int) -> bool:
        return self._bit(self._walkable, x, y)

    def is_buildable(self, x: int, y: int) -> bool:
        return self._bit(self._buildable, x, y)

    def height_at(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            return 0
        i = y * self.width + x
        if i >= len(self._heights):
            return 0
        return self._heights[i]

    def height_at_world(self, p: WorldPos) -> int:
        x, y = world_to_cell(p)
        return self.height_at(x, y)

    def cells_in_radius(self, x: float, y: float, radius: float) -> List[MapCell]:
        x0, x1 = int(math.floor(x - radius)), int(math.ceil(x + radius))
        y0, y1 = int(math.floor(y - radius)), int(math.ceil(y + radius))
        cells = []
        for ix in range(max(0, x0), min(self.width - 1, x1) + 1):
            for iy in range(max(0, y0), min(self.height - 1, y1) + 1):
                cells.append(MapCell(
                    x=ix,
                    y=iy,
                    height=self.height_at(ix, iy),
                    walkable=self.is_walkable(ix, iy),
                    buildable=self.is_buildable(ix, iy),
                ))
        return cells
    # endregion

    # region Dense Views
    def _dense_bits(self, data: bytes) -> np.ndarray:
        n = self.width * self.height
        raw = np.frombuffer(data, dtype=np.uint8) if data else np.zeros(0, dtype=np.uint8)
        bits = np.unpackbits(raw)[:n]
        if bits.size < n:
            bits = np.concatenate([bits, np.zeros(n - bits.size, dtype=np.uint8)])
        return bits.reshape(self.height, self.width).astype(bool)

    def walkable_mask(self) -> np.ndarray:
        return self._dense_bits(self._walkable)

    def buildable_mask(self) -> np.ndarray:
        return self._dense_bits(self._buildable)

    def height_map(self) -> np.ndarray:
        n = self.width * self.height
        h = np.frombuffer(self._heights, dtype=np.uint8)[:n] if self._heights else np.zeros(0, dtype=np.uint8)
        if h.size < n:
            h = np.concatenate([h, np.zeros(n - h.size, dtype=np.uint8)])
        return h.reshape(self.height, self.width).copy()
    # endregion

    def __repr__(self):
        return f"TerrainGrid({self.width}x{self.height})"
# endregion
