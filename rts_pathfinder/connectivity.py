# region Imports
from typing import Optional
from .config import SNAP_RADII
from .models import Cell
# endregion

# region Nearest Walkable Cell Search
def nearest_walkable(grid, xy: Cell, max_radius: int) -> Optional[Cell]:
    """
    Ring search around xy. Returns the closest walkable cell of the first ring
    that has one (ties keep scan order), or None.
    """
    x, y = xy
    if grid.is_walkable(x, y):
        return xy

    for rad in range(1, max_radius + 1):
        best = None
        best_d2 = None
        for dx in range(-rad, rad + 1):
            for dy in range(-rad, rad + 1):
                if abs(dx) != rad and abs(dy) != rad:
                    continue
                xx, yy = x + dx, y + dy
                if grid.is_walkable(xx, yy):
                    d2 = dx * dx + dy * dy
                    if best_d2 is None or d2 < best_d2:
                        best = (xx, yy)
                        best_d2 = d2
        if best is not None:
            return best

    return None


def snap_to_walkable(grid, xy: Cell, radii=SNAP_RADII) -> Optional[Cell]:
    for max_radius in radii:
        found = nearest_walkable(grid, xy, max_radius)
        if found is not None:
            return found
    return None
# endregion
