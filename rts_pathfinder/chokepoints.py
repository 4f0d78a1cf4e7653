"""
Choke points derived from paths and height data.

A choke point here is the last cell at the path's starting height before
the terrain changes level, i.e. the top or bottom lip of a ramp.
"""

# region Imports
from __future__ import annotations
import logging
import math
from typing import Callable, Iterable, List, Optional, Sequence
from . import config
from .grid import TerrainGrid, world_to_cell
from .models import Cell, ChokePoint, WorldPos
from .pathfinder import Pathfinder
from .placement import PlacementFilter
# endregion

logger = logging.getLogger(__name__)

ORTHO_4 = ((0, 1), (0, -1), (1, 0), (-1, 0))


class ChokePointService:
    def __init__(self, grid: TerrainGrid, pathfinder: Optional[Pathfinder] = None,
                 placement: Optional[PlacementFilter] = None):
        self.grid = grid
        self.pathfinder = pathfinder or Pathfinder(grid)
        self.placement = placement or PlacementFilter(grid)

    def _choke(self, p: WorldPos) -> ChokePoint:
        x, y = world_to_cell(p)
        return ChokePoint(x, y, self.grid.height_at(x, y))

    # region Path Scans
    def _scan(self, path: Sequence[WorldPos], changed: Callable[[int, int], bool]) -> Optional[ChokePoint]:
        if not path:
            return None
        start_h = self.grid.height_at_world(path[0])
        prev = path[0]
        for p in path:
            if changed(start_h, self.grid.height_at_world(p)):
                return self._choke(prev)
            prev = p
        return None

    def _within(self, path: Sequence[WorldPos], choke: Optional[ChokePoint], max_distance: float) -> Optional[ChokePoint]:
        if choke is None:
            return None
        sx, sy = world_to_cell(path[0])
        if math.hypot(choke.x - sx, choke.y - sy) > max_distance:
            logger.debug(f"Choke at {choke.cell} beyond {max_distance} of path start")
            return None
        return choke

    def first_elevation_change(self, path: Sequence[WorldPos]) -> Optional[ChokePoint]:
        return self._scan(path, lambda start_h, h: h != start_h)

    def high_ground_choke_point(self, path: Sequence[WorldPos],
                                max_distance: float = config.DEFENSIVE_MAX_DISTANCE) -> Optional[ChokePoint]:
        """Edge where the path first drops below its starting height."""
        return self._within(path, self._scan(path, lambda start_h, h: h < start_h), max_distance)

    def low_ground_choke_point(self, path: Sequence[WorldPos],
                               max_distance: float = config.DEFENSIVE_MAX_DISTANCE) -> Optional[ChokePoint]:
        """Edge where the path first climbs above its starting height."""
        return self._within(path, self._scan(path, lambda start_h, h: h > start_h), max_distance)

    def choke_point_from_path(self, path: Sequence[WorldPos],
                              max_distance: float = config.CHOKE_MAX_DISTANCE) -> Optional[ChokePoint]:
        return self._within(path, self.first_elevation_change(path), max_distance)

    def choke_point_between(self, start: WorldPos, end: WorldPos,
                            max_distance: float = config.CHOKE_MAX_DISTANCE) -> Optional[ChokePoint]:
        return self.choke_point_from_path(self.pathfinder.find_path(start, end), max_distance)

    def defensive_choke_point(self, start: WorldPos, end: WorldPos,
                              max_distance: float = config.DEFENSIVE_MAX_DISTANCE) -> Optional[ChokePoint]:
        path = self.pathfinder.find_path(start, end)
        choke = self.high_ground_choke_point(path, max_distance)
        if choke is not None:
            return choke
        return self.low_ground_choke_point(path, max_distance)
    # endregion

    # region Ramp Cross-sections
    def _touching(self, x: int, y: int, test: Callable[[int], bool]) -> bool:
        g = self.grid
        for dx, dy in ORTHO_4:
            nx, ny = x + dx, y + dy
            if g.is_walkable(nx, ny) and test(g.height_at(nx, ny)):
                return True
        return False

    def _window(self, choke: ChokePoint, test: Callable[[int], bool]) -> List[Cell]:
        g = self.grid
        lo, hi = config.LIP_WINDOW
        out = []
        for dx in range(lo, hi + 1):
            for dy in range(lo, hi + 1):
                px, py = choke.x + dx, choke.y + dy
                if g.height_at(px, py) == choke.height and g.is_walkable(px, py) and self._touching(px, py, test):
                    out.append((px, py))
        return out

    def _as_chokes(self, cells: Iterable[Cell]) -> List[ChokePoint]:
        return [ChokePoint(x, y, self.grid.height_at(x, y)) for x, y in sorted(set(cells))]

    def entire_choke_point(self, choke: ChokePoint) -> List[ChokePoint]:
        """Upper lip of the ramp: the seed plus same-height cells bordering lower ground."""
        cells = [choke.cell] + self._window(choke, lambda h: h < choke.height)
        return self._as_chokes(cells)

    def entire_bottom_of_ramp(self, choke: ChokePoint) -> List[ChokePoint]:
        return self._as_chokes(self._window(choke, lambda h: h > choke.height))

    def wall_off_points(self, cells: Iterable) -> List[ChokePoint]:
        """Placement-ready cells on or next to the given lip cells."""
        picked = []
        for c in cells:
            x, y = (c.x, c.y) if isinstance(c, ChokePoint) else c
            if self.placement.area_buildable(x, y, 1):
                picked.append((x, y))
                continue
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    if (dx or dy) and self.placement.cell_buildable(x + dx, y + dy):
                        picked.append((x + dx, y + dy))
        return self._as_chokes(picked)
    # endregion
