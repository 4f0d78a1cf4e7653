"""
Ramp and narrow-passage detection from static grid data.

Ramps are found as clusters of walkable-but-not-buildable cells whose
heights climb progressively; the thresholds are empirical and kept in
RampParams so they can be tuned per map pool.
"""

# region Imports
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from . import config
from .clustering import cluster_within
from .grid import TerrainGrid
from .models import Cell, ChokePoint, Ramp, RampCluster, WorldPos
# endregion

logger = logging.getLogger(__name__)


# region Parameters
@dataclass
class RampParams:
    scan_border: int = config.RAMP_SCAN_BORDER
    adjacency: int = config.RAMP_ADJACENCY
    min_cluster: int = config.RAMP_MIN_CLUSTER
    min_cells: int = config.RAMP_MIN_CELLS
    min_height_diff: int = config.RAMP_MIN_HEIGHT_DIFF
    max_height_diff: int = config.RAMP_MAX_HEIGHT_DIFF
    steep_height_diff: int = config.RAMP_STEEP_HEIGHT_DIFF
    slope_window: float = config.RAMP_SLOPE_WINDOW
    choke_border: int = config.CHOKE_SCAN_BORDER
    choke_reach: int = config.CHOKE_SCAN_REACH
    choke_max_width: int = config.CHOKE_MAX_WIDTH
    choke_dedup: int = config.CHOKE_DEDUP_DIST
# endregion


# region Analysis Result
def _dist(a: WorldPos, b: WorldPos) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


@dataclass
class MapAnalysis:
    ramps: List[Ramp] = field(default_factory=list)
    choke_points: List[ChokePoint] = field(default_factory=list)
    rejected_clusters: int = 0
    start_locations: List[WorldPos] = field(default_factory=list)

    def nearest_ramp(self, pos: WorldPos, max_distance: float = math.inf) -> Optional[Ramp]:
        best = None
        best_d = None
        for r in self.ramps:
            d = _dist(r.position, pos)
            if d <= max_distance and (best_d is None or d < best_d):
                best, best_d = r, d
        return best

    def nearest_choke_point(self, pos: WorldPos, max_distance: float = math.inf) -> Optional[ChokePoint]:
        best = None
        best_d = None
        for c in self.choke_points:
            d = _dist(c.cell, pos)
            if d <= max_distance and (best_d is None or d < best_d):
                best, best_d = c, d
        return best

    def facing_choke_point(
        self,
        pos: WorldPos,
        facing: WorldPos,
        max_distance: float = config.FACING_MAX_DISTANCE,
    ) -> Optional[ChokePoint]:
        """Choke within max_distance best aligned with pos -> facing; nearest breaks ties."""
        tx, ty = facing[0] - pos[0], facing[1] - pos[1]
        tlen = math.hypot(tx, ty)
        if tlen == 0:
            return self.nearest_choke_point(pos, max_distance)
        tx, ty = tx / tlen, ty / tlen

        def score(c: ChokePoint):
            cx, cy = c.x - pos[0], c.y - pos[1]
            clen = math.hypot(cx, cy)
            align = 0.0 if clen == 0 else (cx * tx + cy * ty) / clen
            return (-align, clen)

        in_range = [c for c in self.choke_points if _dist(c.cell, pos) <= max_distance]
        if not in_range:
            return None
        return min(in_range, key=score)
# endregion


# region Detector
class RampDetector:
    def __init__(self, grid: TerrainGrid, params: Optional[RampParams] = None):
        self.grid = grid
        self.params = params or RampParams()

    # region Candidates & Clusters
    def candidate_cells(self) -> List[Cell]:
        g, b = self.grid, self.params.scan_border
        cells = []
        for x in range(b, g.width - b):
            for y in range(b, g.height - b):
                if g.is_walkable(x, y) and not g.is_buildable(x, y):
                    cells.append((x, y))
        return cells

    def clusters(self, cells: Sequence[Cell]) -> List[RampCluster]:
        out = []
        for comp in cluster_within(cells, self.params.adjacency):
            if len(comp) < self.params.min_cluster:
                logger.debug(f"Discarded small cluster of {len(comp)} cells at {comp[0]}")
                continue
            out.append(RampCluster(comp, [self.grid.height_at(x, y) for x, y in comp]))
        return out
    # endregion

    # region Validation
    def rejection_reason(self, cluster: RampCluster) -> Optional[str]:
        """None when the cluster looks like a ramp, otherwise why it does not."""
        p = self.params
        if len(cluster) < p.min_cells:
            return f"too small: {len(cluster)} < {p.min_cells} cells"

        lo, hi = cluster.min_height, cluster.max_height
        diff = hi - lo
        if diff < p.min_height_diff:
            return f"height difference too small: {diff} < {p.min_height_diff}"
        if diff > p.max_height_diff:
            return f"height difference too large: {diff} > {p.max_height_diff} (cliff?)"

        steep = diff >= p.steep_height_diff
        required = 3 if steep else 2
        if cluster.levels < required:
            return f"not enough height levels: {cluster.levels} < {required}"

        if steep:
            ordered = sorted(cluster.heights)
            n = len(ordered)
            middle = ordered[n // 4:n // 4 + n // 2]
            lo_cut = lo + diff * p.slope_window
            hi_cut = hi - diff * p.slope_window
            if not any(lo_cut < h < hi_cut for h in middle):
                return f"no progressive slope: heights {lo}-{hi}"
        return None

    def is_valid_ramp(self, cluster: RampCluster) -> bool:
        return self.rejection_reason(cluster) is None
    # endregion

    # region Passes
    def _find_ramps(self):
        ramps, rejected = [], 0
        for cluster in self.clusters(self.candidate_cells()):
            cx, cy = cluster.centroid
            reason = self.rejection_reason(cluster)
            if reason is None:
                ramps.append(Ramp(cx, cy, len(cluster), cluster.min_height, cluster.max_height))
                logger.debug(f"Valid ramp at ({cx:.1f}, {cy:.1f}) with {len(cluster)} cells")
            else:
                rejected += 1
                logger.debug(f"Rejected cluster at ({cx:.1f}, {cy:.1f}): {reason}")
        return ramps, rejected

    def detect_ramps(self) -> List[Ramp]:
        try:
            return self._find_ramps()[0]
        except Exception:
            logger.exception("Ramp detection failed; reporting no ramps")
            return []

    def passage_width(self, x: int, y: int) -> int:
        """Narrower of the horizontal/vertical walkable run through (x, y); 0 if blocked."""
        g, reach = self.grid, self.params.choke_reach
        if not g.is_walkable(x, y):
            return 0

        def run(dx, dy):
            n = 0
            for i in range(1, reach + 1):
                if not g.is_walkable(x + dx * i, y + dy * i):
                    break
                n += 1
            return n

        horizontal = run(-1, 0) + run(1, 0) + 1
        vertical = run(0, -1) + run(0, 1) + 1
        return min(horizontal, vertical)

    def _find_choke_candidates(self) -> List[ChokePoint]:
        g, p = self.grid, self.params
        found: List[ChokePoint] = []
        for x in range(p.choke_border, g.width - p.choke_border):
            for y in range(p.choke_border, g.height - p.choke_border):
                w = self.passage_width(x, y)
                if not (1 <= w <= p.choke_max_width):
                    continue
                if any(abs(c.x - x) < p.choke_dedup and abs(c.y - y) < p.choke_dedup for c in found):
                    continue
                found.append(ChokePoint(x, y, g.height_at(x, y)))
        return found

    def detect_choke_candidates(self) -> List[ChokePoint]:
        try:
            return self._find_choke_candidates()
        except Exception:
            logger.exception("Choke candidate scan failed; reporting no choke points")
            return []
    # endregion

    def analyze(self, start_locations: Sequence[WorldPos] = ()) -> MapAnalysis:
        logger.info(f"Analyzing {self.grid.width}x{self.grid.height} terrain")
        try:
            ramps, rejected = self._find_ramps()
        except Exception:
            logger.exception("Ramp detection failed; reporting no ramps")
            ramps, rejected = [], 0
        chokes = self.detect_choke_candidates()
        logger.info(f"{len(ramps)} ramps, {rejected} rejected clusters, {len(chokes)} choke points")
        return MapAnalysis(ramps, chokes, rejected, list(start_locations))
# endregion
