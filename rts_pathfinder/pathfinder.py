"""
Grid A* pathfinding over a TerrainGrid.

World positions go in, cell-center waypoints come out. Start and goal are
snapped to the nearest walkable cell first; an empty list means no route.
"""

# region Imports
from __future__ import annotations
import logging
import math
from typing import List, Optional, Sequence
from .astar_core import astar, neighbors_8
from .config import DIAG_COST, ORTHO_COST, SNAP_RADII
from .connectivity import snap_to_walkable
from .grid import TerrainGrid, cell_center, world_to_cell
from .models import Cell, PathResult, WorldPos
# endregion

logger = logging.getLogger(__name__)


# region Heuristic & Costs
def euclid(a: Cell, b: Cell) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def walk_cost_factory(grid: TerrainGrid):
    def edge_cost(u: Cell, v: Cell) -> Optional[float]:
        if not grid.is_walkable(v[0], v[1]):
            return None
        if u[0] != v[0] and u[1] != v[1]:
            return DIAG_COST
        return ORTHO_COST

    return edge_cost
# endregion


# region Pathfinder
class Pathfinder:
    def __init__(self, grid: TerrainGrid, snap_radii=SNAP_RADII):
        self.grid = grid
        self.snap_radii = tuple(snap_radii)
        self._edge_cost = walk_cost_factory(grid)

    def _neighbors(self, u: Cell):
        return neighbors_8(u, self.grid.width, self.grid.height)

    def find_path_result(self, start: WorldPos, goal: WorldPos) -> PathResult:
        s_cell = snap_to_walkable(self.grid, world_to_cell(start), self.snap_radii)
        g_cell = snap_to_walkable(self.grid, world_to_cell(goal), self.snap_radii)
        if s_cell is None or g_cell is None:
            logger.debug(f"No walkable cell near {'start' if s_cell is None else 'goal'} ({start} -> {goal})")
            return PathResult([], float("inf"), 0, s_cell, g_cell)

        path, cost, expansions, _ = astar(
            start=s_cell,
            goal=g_cell,
            neighbors_fn=self._neighbors,
            edge_cost_fn=self._edge_cost,
            heuristic_fn=euclid,
        )
        if path is None:
            logger.debug(f"No path {s_cell} -> {g_cell} after {expansions} expansions")
            return PathResult([], float("inf"), expansions, s_cell, g_cell)

        return PathResult([cell_center(c) for c in path], cost, expansions, s_cell, g_cell)

    def find_path(self, start: WorldPos, goal: WorldPos) -> List[WorldPos]:
        return self.find_path_result(start, goal).waypoints

    def find_route(self, points: Sequence[WorldPos]) -> List[WorldPos]:
        """Chain legs through each point in order; empty if any leg fails."""
        if len(points) < 2:
            return self.find_path(points[0], points[0]) if points else []

        full_path: List[WorldPos] = []
        for i in range(len(points) - 1):
            leg = self.find_path(points[i], points[i + 1])
            if not leg:
                logger.info(f"Route leg {i + 1} failed: {points[i]} -> {points[i + 1]}")
                return []
            if full_path and full_path[-1] == leg[0]:
                full_path.extend(leg[1:])
            else:
                full_path.extend(leg)
        return full_path
# endregion
