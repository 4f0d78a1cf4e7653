# region Imports
import math
from .grid import TerrainGrid
# endregion


# region Placement Filter
class PlacementFilter:
    def __init__(self, grid: TerrainGrid):
        self.grid = grid

    def cell_buildable(self, x: int, y: int) -> bool:
        return self.grid.is_buildable(x, y)

    def area_buildable(self, x: float, y: float, radius: float) -> bool:
        """Every cell in floor(x-r)..ceil(x+r) x floor(y-r)..ceil(y+r) is buildable."""
        x0, x1 = int(math.floor(x - radius)), int(math.ceil(x + radius))
        y0, y1 = int(math.floor(y - radius)), int(math.ceil(y + radius))
        for ix in range(x0, x1 + 1):
            for iy in range(y0, y1 + 1):
                if not self.grid.is_buildable(ix, iy):
                    return False
        return True

    def footprint_buildable(self, center, size: int) -> bool:
        """Square size x size footprint centred on a world position (odd sizes on a cell centre)."""
        half = size / 2.0
        x0 = int(math.floor(center[0] - half + 1e-9))
        y0 = int(math.floor(center[1] - half + 1e-9))
        for ix in range(x0, x0 + size):
            for iy in range(y0, y0 + size):
                if not self.grid.is_buildable(ix, iy):
                    return False
        return True
# endregion
